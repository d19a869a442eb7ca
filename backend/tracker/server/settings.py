"""Tracker server configuration via environment variables."""

import json
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode

from tracker.logic.types import DifficultyMatch


def parse_origins(value: str | list[str]) -> list[str]:
    """Parse CORS origins from an environment variable or config value.

    Accepts a list of strings, a JSON array string ('["a","b"]') or a
    comma-separated string ('a,b'). An empty value means no cross-origin access.
    """
    if isinstance(value, list):
        return value

    stripped = value.strip()
    if stripped.startswith("["):
        try:
            parsed = json.loads(stripped)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON array: {e}") from e
        if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
            raise ValueError("JSON value must be an array of strings")
        return parsed

    return [origin.strip() for origin in stripped.split(",") if origin.strip()]


class TrackerServerSettings(BaseSettings):
    model_config = {"env_prefix": "TRACKER_"}

    log_dir: str = Field(default="backend/logs/tracker", min_length=1)
    database_path: str = Field(default="backend/storage.db", min_length=1)
    picture_dir: str = Field(default="backend/media", min_length=1)
    cors_origins: Annotated[list[str], NoDecode] = []
    # Which games count as "same difficulty" for the same-adversary record
    difficulty_match: DifficultyMatch = DifficultyMatch.ADVERSARY_LEVEL

    @field_validator("cors_origins", mode="before")
    @classmethod
    def validate_cors_origins(cls, v: str | list[str]) -> list[str]:
        return parse_origins(v)

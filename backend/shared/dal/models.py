"""Persistence models for the data access layer."""

from datetime import date, datetime
from typing import Self

from pydantic import BaseModel, Field, field_validator, model_validator

PROFILE_NAME_MAX_LENGTH = 50


class Profile(BaseModel, frozen=True):
    """A person whose games are logged together."""

    profile_id: str
    name: str = Field(min_length=1, max_length=PROFILE_NAME_MAX_LENGTH)
    created_at: datetime
    last_used_at: datetime

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class GameDraft(BaseModel, frozen=True):
    """Facts recorded by the user for one game, before scoring."""

    played_on: date
    players: list[str] = Field(min_length=1)
    spirits: list[str] = Field(min_length=1)  # one per player, same order
    win: bool
    adversary: str | None = None
    adversary_difficulty: int | None = Field(default=None, ge=0)
    scenario: str | None = None
    scenario_difficulty: int | None = None  # may be negative
    invader_cards: int = Field(default=0, ge=0)
    dahan: int = Field(default=0, ge=0)
    blight: int = Field(default=0, ge=0)
    notes: str = ""
    pictures: list[str] = Field(default_factory=list)

    @field_validator("players", "spirits", mode="before")
    @classmethod
    def _strip_names(cls, v: object) -> object:
        if isinstance(v, list):
            return [item.strip() if isinstance(item, str) else item for item in v]
        return v

    @field_validator("players", "spirits")
    @classmethod
    def _reject_blank_names(cls, v: list[str]) -> list[str]:
        if any(not name for name in v):
            raise ValueError("Names must not be blank")
        return v

    @field_validator("adversary", "scenario", mode="before")
    @classmethod
    def _blank_to_none(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("notes", mode="before")
    @classmethod
    def _strip_notes(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def _validate_shape(self) -> Self:
        if len(self.players) != len(self.spirits):
            raise ValueError("Each player must have exactly one spirit")
        if self.adversary is None and self.adversary_difficulty is not None:
            raise ValueError("Adversary difficulty requires an adversary")
        return self


class Game(GameDraft, frozen=True):
    """Record of a logged game persisted to storage.

    score is computed when the game is written and is not recomputed on read.
    """

    game_id: str
    profile_id: str
    score: int
    created_at: datetime
    updated_at: datetime

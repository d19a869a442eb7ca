"""Factories for tracker tests."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any

from shared.dal.models import Game, GameDraft

_CREATED_AT = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)

_DRAFT_DEFAULTS: dict[str, Any] = {
    "played_on": date(2025, 1, 15),
    "players": ["Alice"],
    "spirits": ["Lightning's Swift Strike"],
    "win": True,
}


def make_draft(**overrides: Any) -> GameDraft:  # noqa: ANN401
    return GameDraft(**{**_DRAFT_DEFAULTS, **overrides})


def make_game(game_id: str = "g1", score: int = 0, **overrides: Any) -> Game:  # noqa: ANN401
    """Build a stored game with an explicit score (not computed from the facts)."""
    fields = {
        **_DRAFT_DEFAULTS,
        "game_id": game_id,
        "profile_id": "p1",
        "score": score,
        "created_at": _CREATED_AT,
        "updated_at": _CREATED_AT,
        **overrides,
    }
    return Game(**fields)

"""
Pydantic models for statistic results.

Each statistic is independently optional in GameStats so a consumer can render
or hide it per field.
"""

from enum import StrEnum

from pydantic import BaseModel

from shared.dal.models import Game


class DifficultyMatch(StrEnum):
    """How games are matched for the same-adversary-difficulty record."""

    ADVERSARY_LEVEL = "adversary_level"  # same adversary_difficulty value
    TOTAL = "total"  # same adversary + scenario difficulty


class Rank(BaseModel, frozen=True):
    rank: int  # 1-indexed
    total: int


class DifficultyRank(BaseModel, frozen=True):
    rank: int
    total: int
    difficulty: int


class RangeStats(BaseModel, frozen=True):
    """Position of the current value on a min..max scale (percentage 0-100)."""

    min: float
    max: float
    current: float
    percentage: float


class DifficultyRangeStats(RangeStats, frozen=True):
    difficulty: int


class WinLossRecord(BaseModel, frozen=True):
    wins: int
    losses: int


class ComboScoreStats(BaseModel, frozen=True):
    high: int
    low: int
    average: int


class GameStats(BaseModel, frozen=True):
    """All comparative statistics for one game.

    With no history to compare against, only score is set and
    is_first_game is True.
    """

    score: int
    is_first_game: bool = False
    highest_score: Game | None = None
    overall_rank: Rank | None = None
    difficulty_rank: DifficultyRank | None = None
    overall_score_range: RangeStats | None = None
    difficulty_score_range: DifficultyRangeStats | None = None
    blight_stats: RangeStats | None = None
    dahan_stats: RangeStats | None = None
    same_adversary_difficulty_record: WinLossRecord | None = None
    same_adversary_record: WinLossRecord | None = None
    same_spirits_record: WinLossRecord | None = None
    same_spirits_and_adversary_record: WinLossRecord | None = None
    spirit_combo_score_stats: ComboScoreStats | None = None

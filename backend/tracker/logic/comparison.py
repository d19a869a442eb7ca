"""
Comparative statistics for one game against the rest of a play history.

Every function takes the current game and its history with the current game
already removed. Each decides on its own whether the current game is folded
back into the aggregate:

- highest_score looks at history only.
- Ranks, win/loss records and combo score stats count the current game.
- Range stats are computed over history and then widened to cover the current
  value.

Functions return None when there is nothing to compare against. All of them
are pure; callers that want caching do it themselves.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from tracker.logic.scoring import total_difficulty
from tracker.logic.spirits import are_spirits_same
from tracker.logic.types import (
    ComboScoreStats,
    DifficultyMatch,
    DifficultyRangeStats,
    DifficultyRank,
    GameStats,
    RangeStats,
    Rank,
    WinLossRecord,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from shared.dal.models import Game

# Position reported on a scale whose min and max coincide.
FLAT_RANGE_PERCENTAGE = 50.0


def _rank_of(current: Game, games: Sequence[Game]) -> int:
    """1-indexed position of current among games by descending score.

    Stable: ties keep their order in games.
    """
    ordered = sorted(games, key=lambda g: g.score, reverse=True)
    return next(i for i, g in enumerate(ordered) if g.game_id == current.game_id) + 1


def _range_stats(values: Sequence[float], current: float) -> RangeStats:
    low = min(min(values), current)
    high = max(max(values), current)
    percentage = (current - low) / (high - low) * 100 if high > low else FLAT_RANGE_PERCENTAGE
    return RangeStats(min=low, max=high, current=current, percentage=percentage)


def _record(games: Sequence[Game]) -> WinLossRecord:
    wins = sum(1 for g in games if g.win)
    return WinLossRecord(wins=wins, losses=len(games) - wins)


def _per_player(value: int, game: Game) -> float:
    return value / len(game.players)


def highest_score(history: Sequence[Game]) -> Game | None:
    """The highest-scoring history game; the earliest one wins ties."""
    if not history:
        return None
    return max(history, key=lambda g: g.score)


def overall_rank(current: Game, history: Sequence[Game]) -> Rank:
    games = [*history, current]
    return Rank(rank=_rank_of(current, games), total=len(games))


def same_difficulty_rank(current: Game, history: Sequence[Game]) -> DifficultyRank | None:
    difficulty = total_difficulty(current)
    matching = [g for g in history if total_difficulty(g) == difficulty]
    if not matching:
        return None
    games = [*matching, current]
    return DifficultyRank(rank=_rank_of(current, games), total=len(games), difficulty=difficulty)


def blight_stats(current: Game, history: Sequence[Game]) -> RangeStats | None:
    """Blight per player: history range widened to include the current game."""
    if not history:
        return None
    values = [_per_player(g.blight, g) for g in history]
    return _range_stats(values, _per_player(current.blight, current))


def dahan_stats(current: Game, history: Sequence[Game]) -> RangeStats | None:
    """Dahan per player: history range widened to include the current game."""
    if not history:
        return None
    values = [_per_player(g.dahan, g) for g in history]
    return _range_stats(values, _per_player(current.dahan, current))


def overall_score_range(current: Game, history: Sequence[Game]) -> RangeStats | None:
    if not history:
        return None
    return _range_stats([g.score for g in history], current.score)


def same_difficulty_score_range(current: Game, history: Sequence[Game]) -> DifficultyRangeStats | None:
    difficulty = total_difficulty(current)
    scores = [g.score for g in history if total_difficulty(g) == difficulty]
    if not scores:
        return None
    stats = _range_stats(scores, current.score)
    return DifficultyRangeStats(**stats.model_dump(), difficulty=difficulty)


def _difficulty_predicate(current: Game, match: DifficultyMatch) -> Callable[[Game], bool]:
    if match == DifficultyMatch.TOTAL:
        difficulty = total_difficulty(current)
        return lambda g: total_difficulty(g) == difficulty
    return lambda g: g.adversary_difficulty == current.adversary_difficulty


def same_adversary_difficulty_record(
    current: Game,
    history: Sequence[Game],
    match: DifficultyMatch = DifficultyMatch.ADVERSARY_LEVEL,
) -> WinLossRecord | None:
    """Record against the same adversary at the same difficulty, current game included.

    None when the current game has no adversary or no history game matches.
    """
    if current.adversary is None:
        return None
    same_difficulty = _difficulty_predicate(current, match)
    matching = [g for g in history if g.adversary == current.adversary and same_difficulty(g)]
    if not matching:
        return None
    return _record([*matching, current])


def same_adversary_record(current: Game, history: Sequence[Game]) -> WinLossRecord | None:
    """Record against the same adversary at any difficulty, current game included."""
    if current.adversary is None:
        return None
    matching = [g for g in [*history, current] if g.adversary == current.adversary]
    if not matching:  # pragma: no cover - current always matches itself
        return None
    return _record(matching)


def same_spirits_record(current: Game, history: Sequence[Game]) -> WinLossRecord | None:
    """Record with the same spirit combination, current game included."""
    matching = [g for g in [*history, current] if are_spirits_same(g.spirits, current.spirits)]
    if not matching:  # pragma: no cover - current always matches itself
        return None
    return _record(matching)


def same_spirits_and_adversary_record(current: Game, history: Sequence[Game]) -> WinLossRecord | None:
    if current.adversary is None:
        return None
    matching = [
        g
        for g in [*history, current]
        if g.adversary == current.adversary and are_spirits_same(g.spirits, current.spirits)
    ]
    if not matching:  # pragma: no cover - current always matches itself
        return None
    return _record(matching)


def spirit_combo_score_stats(current: Game, history: Sequence[Game]) -> ComboScoreStats | None:
    """High/low/average score for the same spirits at the same total difficulty.

    The current game is part of the sample. Average rounds half up.
    """
    difficulty = total_difficulty(current)
    scores = [
        g.score
        for g in [*history, current]
        if are_spirits_same(g.spirits, current.spirits) and total_difficulty(g) == difficulty
    ]
    if not scores:  # pragma: no cover - current always matches itself
        return None
    average = math.floor(sum(scores) / len(scores) + 0.5)
    return ComboScoreStats(high=max(scores), low=min(scores), average=average)


def compute_game_stats(
    current: Game,
    history: Sequence[Game],
    *,
    difficulty_match: DifficultyMatch = DifficultyMatch.ADVERSARY_LEVEL,
) -> GameStats:
    """Bundle every statistic for display.

    An empty history yields the first-game state carrying only the score.
    """
    if not history:
        return GameStats(score=current.score, is_first_game=True)

    return GameStats(
        score=current.score,
        highest_score=highest_score(history),
        overall_rank=overall_rank(current, history),
        difficulty_rank=same_difficulty_rank(current, history),
        overall_score_range=overall_score_range(current, history),
        difficulty_score_range=same_difficulty_score_range(current, history),
        blight_stats=blight_stats(current, history),
        dahan_stats=dahan_stats(current, history),
        same_adversary_difficulty_record=same_adversary_difficulty_record(current, history, difficulty_match),
        same_adversary_record=same_adversary_record(current, history),
        same_spirits_record=same_spirits_record(current, history),
        same_spirits_and_adversary_record=same_spirits_and_adversary_record(current, history),
        spirit_combo_score_stats=spirit_combo_score_stats(current, history),
    )


def exclude_game(games: Sequence[Game], game_id: str) -> list[Game]:
    """Comparison history for a game: every other game in the scope."""
    return [g for g in games if g.game_id != game_id]

"""
Score calculation for a single recorded game.

The score is computed once when a game is created or edited and stored with
the record; read paths never recompute it.

Victory:  5 * difficulty + 10 + 2 * invader cards + dahan/players - blight/players
Defeat:   2 * difficulty + invader cards + dahan/players - blight/players

Per-player terms use floor division. Difficulty is adversary + scenario with
missing values counted as 0.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from shared.dal.models import GameDraft

VICTORY_DIFFICULTY_MULTIPLIER = 5
VICTORY_BONUS = 10
VICTORY_INVADER_CARD_MULTIPLIER = 2
DEFEAT_DIFFICULTY_MULTIPLIER = 2


class HasDifficulty(Protocol):
    @property
    def adversary_difficulty(self) -> int | None: ...

    @property
    def scenario_difficulty(self) -> int | None: ...


def total_difficulty(game: HasDifficulty) -> int:
    """Adversary plus scenario difficulty, missing values counted as 0."""
    return (game.adversary_difficulty or 0) + (game.scenario_difficulty or 0)


def calculate_score(
    *,
    win: bool,
    adversary_difficulty: int | None,
    scenario_difficulty: int | None,
    invader_cards: int,
    dahan: int,
    blight: int,
    player_count: int,
) -> int:
    """Compute the integer score of one game. May be negative.

    player_count must be at least 1; drafts guarantee this.
    """
    difficulty = (adversary_difficulty or 0) + (scenario_difficulty or 0)
    per_player = dahan // player_count - blight // player_count

    if win:
        return (
            VICTORY_DIFFICULTY_MULTIPLIER * difficulty
            + VICTORY_BONUS
            + VICTORY_INVADER_CARD_MULTIPLIER * invader_cards
            + per_player
        )
    return DEFEAT_DIFFICULTY_MULTIPLIER * difficulty + invader_cards + per_player


def score_draft(draft: GameDraft) -> int:
    return calculate_score(
        win=draft.win,
        adversary_difficulty=draft.adversary_difficulty,
        scenario_difficulty=draft.scenario_difficulty,
        invader_cards=draft.invader_cards,
        dahan=draft.dahan,
        blight=draft.blight,
        player_count=len(draft.players),
    )

"""Data access layer: repository interfaces and shared persistence models."""

from shared.dal.game_repository import GameRepository
from shared.dal.models import Game, GameDraft, Profile
from shared.dal.profile_repository import ProfileRepository

__all__ = [
    "Game",
    "GameDraft",
    "GameRepository",
    "Profile",
    "ProfileRepository",
]

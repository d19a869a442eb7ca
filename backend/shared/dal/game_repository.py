"""Abstract interface for logged game persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import Game


class GameRepository(ABC):
    """Abstract interface for logged game persistence."""

    @abstractmethod
    async def create_game(self, game: Game) -> None: ...

    @abstractmethod
    async def update_game(self, game: Game) -> bool:
        """Replace every field of an existing game. Returns False if it does not exist."""

    @abstractmethod
    async def delete_game(self, game_id: str) -> list[str] | None:
        """Delete a game and its picture rows. Returns the removed picture references, None if not found."""

    @abstractmethod
    async def get_game(self, game_id: str) -> Game | None: ...

    @abstractmethod
    async def list_games(self, profile_id: str | None = None) -> list[Game]:
        """Games of one profile (all profiles when None), newest date first."""

    @abstractmethod
    async def attached_pictures(self, refs: list[str]) -> set[str]:
        """The subset of refs still referenced by any game."""

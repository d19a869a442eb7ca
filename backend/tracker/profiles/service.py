"""Profile service: create, switch to and delete profiles."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from shared.dal.models import Profile
from tracker.exceptions import ConflictError, ProfileNotFoundError
from tracker.games.service import release_pictures

if TYPE_CHECKING:
    from shared.dal.game_repository import GameRepository
    from shared.dal.profile_repository import ProfileRepository
    from shared.storage import PictureStorage

logger = structlog.get_logger()


class ProfileService:
    def __init__(
        self,
        profile_repo: ProfileRepository,
        game_repo: GameRepository,
        picture_storage: PictureStorage,
    ) -> None:
        self._profile_repo = profile_repo
        self._game_repo = game_repo
        self._pictures = picture_storage

    async def create_profile(self, name: str) -> Profile:
        now = datetime.now(tz=UTC)
        profile = Profile(profile_id=str(uuid4()), name=name, created_at=now, last_used_at=now)
        try:
            await self._profile_repo.create_profile(profile)
        except ValueError as exc:
            raise ConflictError(str(exc)) from exc
        logger.info("profile created", profile_id=profile.profile_id)
        return profile

    async def get_profile(self, profile_id: str) -> Profile:
        profile = await self._profile_repo.get_profile(profile_id)
        if profile is None:
            raise ProfileNotFoundError(f"Profile '{profile_id}' not found")
        return profile

    async def list_profiles(self) -> list[Profile]:
        return await self._profile_repo.list_profiles()

    async def touch_profile(self, profile_id: str) -> Profile:
        """Mark a profile as the most recently used one."""
        if not await self._profile_repo.touch_profile(profile_id, datetime.now(tz=UTC)):
            raise ProfileNotFoundError(f"Profile '{profile_id}' not found")
        return await self.get_profile(profile_id)

    async def delete_profile(self, profile_id: str) -> None:
        """Delete a profile and its games, then the picture files nothing else references."""
        games = await self._game_repo.list_games(profile_id)
        if not await self._profile_repo.delete_profile(profile_id):
            raise ProfileNotFoundError(f"Profile '{profile_id}' not found")
        await release_pictures(self._game_repo, self._pictures, [ref for game in games for ref in game.pictures])
        logger.info("profile deleted", profile_id=profile_id, games=len(games))

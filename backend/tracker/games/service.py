"""Game log service: the write path that scores games and the statistics read path."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from shared.dal.models import Game
from tracker.exceptions import ConflictError, GameNotFoundError, InvalidPictureError, ProfileNotFoundError
from tracker.logic.comparison import compute_game_stats, exclude_game
from tracker.logic.scoring import score_draft
from tracker.logic.types import DifficultyMatch

if TYPE_CHECKING:
    from shared.dal.game_repository import GameRepository
    from shared.dal.models import GameDraft
    from shared.dal.profile_repository import ProfileRepository
    from shared.storage import PictureStorage
    from tracker.logic.types import GameStats

logger = structlog.get_logger()


async def release_pictures(game_repo: GameRepository, storage: PictureStorage, refs: list[str]) -> None:
    """Delete the files of refs that no remaining game references.

    Call after the rows that dropped the refs have been written.
    """
    if not refs:
        return
    still_attached = await game_repo.attached_pictures(refs)
    orphaned = [ref for ref in dict.fromkeys(refs) if ref not in still_attached]
    if orphaned:
        storage.delete_pictures(orphaned)
    if still_attached:
        logger.info("kept shared pictures", refs=sorted(still_attached))


class GameLogService:
    """Create, edit, delete and compare logged games.

    The score is computed here on every create and update and stored with
    the record; nothing on the read path recomputes it.
    """

    def __init__(
        self,
        game_repo: GameRepository,
        profile_repo: ProfileRepository,
        picture_storage: PictureStorage,
        *,
        difficulty_match: DifficultyMatch = DifficultyMatch.ADVERSARY_LEVEL,
    ) -> None:
        self._game_repo = game_repo
        self._profile_repo = profile_repo
        self._pictures = picture_storage
        self._difficulty_match = difficulty_match

    async def create_game(self, profile_id: str, draft: GameDraft) -> Game:
        """Score a draft and store it as a new game of the profile."""
        await self._require_profile(profile_id)
        self._require_pictures(draft.pictures)

        now = datetime.now(tz=UTC)
        game = Game(
            **draft.model_dump(),
            game_id=str(uuid4()),
            profile_id=profile_id,
            score=score_draft(draft),
            created_at=now,
            updated_at=now,
        )
        try:
            await self._game_repo.create_game(game)
        except ValueError as exc:
            raise ConflictError(str(exc)) from exc
        logger.info("game created", game_id=game.game_id, profile_id=profile_id, score=game.score)
        return game

    async def update_game(self, game_id: str, draft: GameDraft, profile_id: str | None = None) -> Game:
        """Replace every recorded fact of a game and recompute its score.

        Picture files no longer attached to any game are deleted.
        """
        existing = await self.get_game(game_id)
        if profile_id is not None and profile_id != existing.profile_id:
            await self._require_profile(profile_id)
        self._require_pictures([ref for ref in draft.pictures if ref not in existing.pictures])

        game = Game(
            **draft.model_dump(),
            game_id=game_id,
            profile_id=profile_id or existing.profile_id,
            score=score_draft(draft),
            created_at=existing.created_at,
            updated_at=datetime.now(tz=UTC),
        )
        try:
            updated = await self._game_repo.update_game(game)
        except ValueError as exc:
            raise ConflictError(str(exc)) from exc
        if not updated:
            raise GameNotFoundError(f"Game '{game_id}' not found")

        dropped = [ref for ref in existing.pictures if ref not in game.pictures]
        await release_pictures(self._game_repo, self._pictures, dropped)
        logger.info("game updated", game_id=game_id, score=game.score, previous_score=existing.score)
        return game

    async def delete_game(self, game_id: str) -> None:
        """Delete a game and the picture files no other game references."""
        pictures = await self._game_repo.delete_game(game_id)
        if pictures is None:
            raise GameNotFoundError(f"Game '{game_id}' not found")
        await release_pictures(self._game_repo, self._pictures, pictures)
        logger.info("game deleted", game_id=game_id, pictures=len(pictures))

    async def get_game(self, game_id: str) -> Game:
        game = await self._game_repo.get_game(game_id)
        if game is None:
            raise GameNotFoundError(f"Game '{game_id}' not found")
        return game

    async def list_games(self, profile_id: str | None = None) -> list[Game]:
        return await self._game_repo.list_games(profile_id)

    async def get_game_stats(self, game_id: str, *, all_profiles: bool = False) -> GameStats:
        """Compare a game against the other games of its profile, or of every profile."""
        game = await self.get_game(game_id)
        games = await self._game_repo.list_games(None if all_profiles else game.profile_id)
        history = exclude_game(games, game_id)
        return compute_game_stats(game, history, difficulty_match=self._difficulty_match)

    async def _require_profile(self, profile_id: str) -> None:
        if await self._profile_repo.get_profile(profile_id) is None:
            raise ProfileNotFoundError(f"Profile '{profile_id}' not found")

    def _require_pictures(self, refs: list[str]) -> None:
        missing = [ref for ref in refs if not self._pictures.has_picture(ref)]
        if missing:
            raise InvalidPictureError(f"Unknown picture reference(s): {', '.join(missing)}")

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, patch

import pytest
from pydantic import ValidationError

from shared.db import SqliteGameRepository, SqliteProfileRepository
from shared.storage import LocalPictureStorage
from tracker.exceptions import ConflictError, ProfileNotFoundError
from tracker.games.service import GameLogService
from tracker.profiles.service import ProfileService
from tracker.tests.helpers import make_draft

if TYPE_CHECKING:
    from pathlib import Path

    from shared.db import Database


@pytest.fixture
def storage(tmp_path: Path) -> LocalPictureStorage:
    return LocalPictureStorage(str(tmp_path / "media"))


@pytest.fixture
def profiles(db: Database, storage: LocalPictureStorage) -> ProfileService:
    return ProfileService(SqliteProfileRepository(db), SqliteGameRepository(db), storage)


@pytest.fixture
def games(db: Database, storage: LocalPictureStorage) -> GameLogService:
    return GameLogService(SqliteGameRepository(db), SqliteProfileRepository(db), storage)


class TestCreateProfile:
    async def test_creates_and_reads_back(self, profiles: ProfileService) -> None:
        profile = await profiles.create_profile(" Alice ")

        assert profile.name == "Alice"
        assert profile.created_at == profile.last_used_at
        assert await profiles.get_profile(profile.profile_id) == profile

    async def test_blank_name_rejected(self, profiles: ProfileService) -> None:
        with pytest.raises(ValidationError):
            await profiles.create_profile("   ")

    async def test_unknown_profile(self, profiles: ProfileService) -> None:
        with pytest.raises(ProfileNotFoundError):
            await profiles.get_profile("ghost")


class TestTouchProfile:
    async def test_touched_profile_lists_first(self, profiles: ProfileService) -> None:
        alice = await profiles.create_profile("Alice")
        bob = await profiles.create_profile("Bob")

        touched = await profiles.touch_profile(alice.profile_id)

        assert touched.last_used_at >= bob.last_used_at
        assert [p.profile_id for p in await profiles.list_profiles()][0] == alice.profile_id

    async def test_unknown_profile(self, profiles: ProfileService) -> None:
        with pytest.raises(ProfileNotFoundError):
            await profiles.touch_profile("ghost")


class TestDeleteProfile:
    async def test_removes_games_and_picture_files(
        self,
        profiles: ProfileService,
        games: GameLogService,
        storage: LocalPictureStorage,
        tmp_path: Path,
    ) -> None:
        alice = await profiles.create_profile("Alice")
        bob = await profiles.create_profile("Bob")
        ref = storage.save_picture(b"board")
        other_ref = storage.save_picture(b"other board")
        await games.create_game(alice.profile_id, make_draft(pictures=[ref]))
        await games.create_game(bob.profile_id, make_draft(pictures=[other_ref]))

        await profiles.delete_profile(alice.profile_id)

        assert not (tmp_path / "media" / ref).exists()
        assert (tmp_path / "media" / other_ref).exists()
        assert await games.list_games(alice.profile_id) == []
        assert len(await games.list_games()) == 1
        assert [p.profile_id for p in await profiles.list_profiles()] == [bob.profile_id]

    async def test_picture_shared_with_other_profile_survives(
        self,
        profiles: ProfileService,
        games: GameLogService,
        storage: LocalPictureStorage,
        tmp_path: Path,
    ) -> None:
        alice = await profiles.create_profile("Alice")
        bob = await profiles.create_profile("Bob")
        shared = storage.save_picture(b"table photo")
        await games.create_game(alice.profile_id, make_draft(pictures=[shared]))
        bobs_game = await games.create_game(bob.profile_id, make_draft(pictures=[shared]))

        await profiles.delete_profile(alice.profile_id)

        assert (tmp_path / "media" / shared).exists()
        assert (await games.get_game(bobs_game.game_id)).pictures == [shared]

    async def test_storage_rejection_is_conflict(self, profiles: ProfileService) -> None:
        with (
            patch.object(
                SqliteProfileRepository,
                "create_profile",
                AsyncMock(side_effect=ValueError("Profile with id 'x' already exists")),
            ),
            pytest.raises(ConflictError),
        ):
            await profiles.create_profile("Alice")

    async def test_unknown_profile(self, profiles: ProfileService) -> None:
        with pytest.raises(ProfileNotFoundError):
            await profiles.delete_profile("ghost")

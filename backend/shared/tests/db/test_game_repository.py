"""Tests for SqliteGameRepository."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

import pytest

from shared.dal.models import Game, Profile
from shared.db.game_repository import SqliteGameRepository
from shared.db.profile_repository import SqliteProfileRepository

if TYPE_CHECKING:
    from shared.db.connection import Database

_NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


def _game(
    game_id: str = "g1",
    profile_id: str = "p1",
    played_on: date = date(2025, 1, 15),
    created_at: datetime = _NOW,
    **overrides,
) -> Game:
    fields = {
        "game_id": game_id,
        "profile_id": profile_id,
        "played_on": played_on,
        "players": ["Alice"],
        "spirits": ["Vital Strength of the Earth"],
        "win": True,
        "score": 10,
        "created_at": created_at,
        "updated_at": created_at,
    }
    fields.update(overrides)
    return Game(**fields)


@pytest.fixture
async def repo(db: Database) -> SqliteGameRepository:
    profiles = SqliteProfileRepository(db)
    for profile_id in ("p1", "p2"):
        await profiles.create_profile(Profile(profile_id=profile_id, name=profile_id, created_at=_NOW, last_used_at=_NOW))
    return SqliteGameRepository(db)


class TestCreateAndGet:
    async def test_create_and_get_game(self, repo: SqliteGameRepository) -> None:
        game = _game(adversary="The Kingdom of England", adversary_difficulty=4, notes="close one")
        await repo.create_game(game)

        assert await repo.get_game("g1") == game

    async def test_get_returns_none_for_unknown(self, repo: SqliteGameRepository) -> None:
        assert await repo.get_game("nonexistent") is None

    async def test_duplicate_id_rejected(self, repo: SqliteGameRepository) -> None:
        await repo.create_game(_game())
        with pytest.raises(ValueError, match="already exists"):
            await repo.create_game(_game())

    async def test_unknown_profile_rejected(self, repo: SqliteGameRepository) -> None:
        with pytest.raises(ValueError, match="does not exist"):
            await repo.create_game(_game(profile_id="ghost"))
        assert await repo.get_game("g1") is None

    async def test_pictures_keep_their_order(self, repo: SqliteGameRepository) -> None:
        await repo.create_game(_game(pictures=["b.jpg", "a.jpg", "c.png"]))

        result = await repo.get_game("g1")
        assert result is not None
        assert result.pictures == ["b.jpg", "a.jpg", "c.png"]


class TestUpdateGame:
    async def test_replaces_fields_and_pictures(self, repo: SqliteGameRepository) -> None:
        await repo.create_game(_game(pictures=["old.jpg"]))
        updated = _game(win=False, score=2, pictures=["new.jpg"], updated_at=datetime(2025, 2, 1, tzinfo=UTC))

        assert await repo.update_game(updated)
        assert await repo.get_game("g1") == updated

    async def test_unknown_game_returns_false(self, repo: SqliteGameRepository) -> None:
        assert not await repo.update_game(_game(game_id="missing"))

    async def test_unknown_profile_rejected(self, repo: SqliteGameRepository) -> None:
        await repo.create_game(_game())
        with pytest.raises(ValueError, match="does not exist"):
            await repo.update_game(_game(profile_id="ghost"))

        result = await repo.get_game("g1")
        assert result is not None
        assert result.profile_id == "p1"


class TestDeleteGame:
    async def test_returns_removed_pictures(self, repo: SqliteGameRepository, db: Database) -> None:
        await repo.create_game(_game(pictures=["a.jpg", "b.jpg"]))

        assert await repo.delete_game("g1") == ["a.jpg", "b.jpg"]
        assert await repo.get_game("g1") is None
        assert db.connection.execute("SELECT COUNT(*) FROM game_pictures").fetchone()[0] == 0

    async def test_unknown_game_returns_none(self, repo: SqliteGameRepository) -> None:
        assert await repo.delete_game("missing") is None


class TestListGames:
    async def test_newest_played_first_then_newest_created(self, repo: SqliteGameRepository) -> None:
        await repo.create_game(_game("old", played_on=date(2024, 6, 1)))
        await repo.create_game(_game("same-day-early", created_at=datetime(2025, 1, 15, 9, 0, tzinfo=UTC)))
        await repo.create_game(_game("same-day-late", created_at=datetime(2025, 1, 15, 20, 0, tzinfo=UTC)))

        games = await repo.list_games()
        assert [g.game_id for g in games] == ["same-day-late", "same-day-early", "old"]

    async def test_filters_by_profile(self, repo: SqliteGameRepository) -> None:
        await repo.create_game(_game("mine", pictures=["mine.jpg"]))
        await repo.create_game(_game("theirs", profile_id="p2"))

        games = await repo.list_games("p1")
        assert [g.game_id for g in games] == ["mine"]
        assert games[0].pictures == ["mine.jpg"]
        assert len(await repo.list_games()) == 2

    async def test_empty(self, repo: SqliteGameRepository) -> None:
        assert await repo.list_games() == []


class TestAttachedPictures:
    async def test_returns_refs_still_in_use(self, repo: SqliteGameRepository) -> None:
        await repo.create_game(_game("g1", pictures=["shared.jpg", "own.jpg"]))
        await repo.create_game(_game("g2", profile_id="p2", pictures=["shared.jpg"]))

        await repo.delete_game("g1")

        assert await repo.attached_pictures(["shared.jpg", "own.jpg", "never.jpg"]) == {"shared.jpg"}

    async def test_empty_refs(self, repo: SqliteGameRepository) -> None:
        await repo.create_game(_game(pictures=["a.jpg"]))

        assert await repo.attached_pictures([]) == set()

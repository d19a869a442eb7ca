"""SQLite-backed game repository."""

from __future__ import annotations

import asyncio
import json
import sqlite3
from typing import TYPE_CHECKING

import structlog

from shared.dal.game_repository import GameRepository
from shared.dal.models import Game

if TYPE_CHECKING:
    from shared.db.connection import Database

logger = structlog.get_logger()


class SqliteGameRepository(GameRepository):
    """SQLite implementation of GameRepository.

    Stores game snapshots as JSON with indexed columns for queries. Picture
    references live in game_pictures and are merged back in on read.
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def create_game(self, game: Game) -> None:
        """Insert a game with its pictures. Raises ValueError on duplicate id or unknown profile."""
        async with self._lock:
            conn = self._db.connection
            try:
                conn.execute(
                    "INSERT INTO games (id, profile_id, played_on, created_at, data) VALUES (?, ?, ?, ?, ?)",
                    (
                        game.game_id,
                        game.profile_id,
                        game.played_on.isoformat(),
                        game.created_at.isoformat(),
                        _snapshot(game),
                    ),
                )
                _insert_pictures(conn, game.game_id, game.pictures)
                conn.commit()
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                error_msg = str(exc).lower()
                if "games.id" in error_msg:
                    raise ValueError(f"Game with id '{game.game_id}' already exists") from exc
                if "foreign key" in error_msg:
                    raise ValueError(f"Profile '{game.profile_id}' does not exist") from exc
                raise ValueError(str(exc)) from exc  # pragma: no cover

    async def update_game(self, game: Game) -> bool:
        """Replace a game's fields and picture list in one transaction."""
        async with self._lock:
            conn = self._db.connection
            try:
                cursor = conn.execute(
                    "UPDATE games SET profile_id = ?, played_on = ?, created_at = ?, data = ? WHERE id = ?",
                    (
                        game.profile_id,
                        game.played_on.isoformat(),
                        game.created_at.isoformat(),
                        _snapshot(game),
                        game.game_id,
                    ),
                )
                if cursor.rowcount == 0:
                    conn.rollback()
                    logger.warning("update_game had no effect (not found)", game_id=game.game_id)
                    return False
                conn.execute("DELETE FROM game_pictures WHERE game_id = ?", (game.game_id,))
                _insert_pictures(conn, game.game_id, game.pictures)
                conn.commit()
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                raise ValueError(f"Profile '{game.profile_id}' does not exist") from exc
            return True

    async def delete_game(self, game_id: str) -> list[str] | None:
        """Delete a game; its picture rows cascade. Returns the removed picture references."""
        async with self._lock:
            conn = self._db.connection
            pictures = _select_pictures(conn, game_id)
            cursor = conn.execute("DELETE FROM games WHERE id = ?", (game_id,))
            conn.commit()
            if cursor.rowcount == 0:
                logger.warning("delete_game had no effect (not found)", game_id=game_id)
                return None
            return pictures

    async def get_game(self, game_id: str) -> Game | None:
        """Retrieve a single game by its id."""
        conn = self._db.connection
        row = conn.execute("SELECT data FROM games WHERE id = ?", (game_id,)).fetchone()
        if row is None:
            return None
        return _load(row[0], _select_pictures(conn, game_id))

    async def list_games(self, profile_id: str | None = None) -> list[Game]:
        """Retrieve games ordered by play date, then creation time, newest first."""
        conn = self._db.connection
        if profile_id is None:
            rows = conn.execute(
                "SELECT id, data FROM games ORDER BY played_on DESC, created_at DESC",
            ).fetchall()
        else:
            rows = conn.execute(
                "SELECT id, data FROM games WHERE profile_id = ? ORDER BY played_on DESC, created_at DESC",
                (profile_id,),
            ).fetchall()

        pictures: dict[str, list[str]] = {}
        for game_id, file_path in conn.execute("SELECT game_id, file_path FROM game_pictures ORDER BY id"):
            pictures.setdefault(game_id, []).append(file_path)

        return [_load(data, pictures.get(game_id, [])) for game_id, data in rows]

    async def attached_pictures(self, refs: list[str]) -> set[str]:
        if not refs:
            return set()
        placeholders = ", ".join("?" for _ in refs)
        rows = self._db.connection.execute(
            f"SELECT DISTINCT file_path FROM game_pictures WHERE file_path IN ({placeholders})",  # noqa: S608
            refs,
        ).fetchall()
        return {row[0] for row in rows}


def _snapshot(game: Game) -> str:
    return game.model_dump_json(exclude={"pictures"})


def _load(data: str, pictures: list[str]) -> Game:
    return Game.model_validate({**json.loads(data), "pictures": pictures})


def _insert_pictures(conn: sqlite3.Connection, game_id: str, pictures: list[str]) -> None:
    conn.executemany(
        "INSERT INTO game_pictures (game_id, file_path) VALUES (?, ?)",
        [(game_id, path) for path in pictures],
    )


def _select_pictures(conn: sqlite3.Connection, game_id: str) -> list[str]:
    rows = conn.execute("SELECT file_path FROM game_pictures WHERE game_id = ? ORDER BY id", (game_id,)).fetchall()
    return [row[0] for row in rows]

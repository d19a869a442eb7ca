"""SQLite-backed profile repository."""

from __future__ import annotations

import asyncio
import json
import sqlite3
from typing import TYPE_CHECKING

import structlog

from shared.dal.models import Profile
from shared.dal.profile_repository import ProfileRepository

if TYPE_CHECKING:
    from datetime import datetime

    from shared.db.connection import Database

logger = structlog.get_logger()


class SqliteProfileRepository(ProfileRepository):
    """SQLite implementation of ProfileRepository.

    Deleting a profile cascades to its games and their picture rows through
    foreign keys.
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def create_profile(self, profile: Profile) -> None:
        """Insert a profile. Raises ValueError on duplicate id."""
        async with self._lock:
            try:
                self._db.connection.execute(
                    "INSERT INTO profiles (id, name, created_at, last_used_at, data) VALUES (?, ?, ?, ?, ?)",
                    (
                        profile.profile_id,
                        profile.name,
                        profile.created_at.isoformat(),
                        profile.last_used_at.isoformat(),
                        profile.model_dump_json(),
                    ),
                )
                self._db.connection.commit()
            except sqlite3.IntegrityError as exc:
                self._db.connection.rollback()
                raise ValueError(f"Profile with id '{profile.profile_id}' already exists") from exc

    async def get_profile(self, profile_id: str) -> Profile | None:
        row = self._db.connection.execute(
            "SELECT data FROM profiles WHERE id = ?",
            (profile_id,),
        ).fetchone()
        if row is None:
            return None
        return Profile.model_validate(json.loads(row[0]))

    async def list_profiles(self) -> list[Profile]:
        """All profiles, most recently used first."""
        rows = self._db.connection.execute(
            "SELECT data FROM profiles ORDER BY last_used_at DESC",
        ).fetchall()
        return [Profile.model_validate(json.loads(row[0])) for row in rows]

    async def touch_profile(self, profile_id: str, used_at: datetime) -> bool:
        """Record that a profile was used. Returns False if it does not exist."""
        async with self._lock:
            used_at_iso = used_at.isoformat()
            cursor = self._db.connection.execute(
                "UPDATE profiles SET last_used_at = ?, data = json_set(data, '$.last_used_at', ?) WHERE id = ?",
                (used_at_iso, used_at_iso, profile_id),
            )
            self._db.connection.commit()
            if cursor.rowcount == 0:
                logger.warning("touch_profile had no effect (not found)", profile_id=profile_id)
                return False
            return True

    async def delete_profile(self, profile_id: str) -> bool:
        async with self._lock:
            cursor = self._db.connection.execute("DELETE FROM profiles WHERE id = ?", (profile_id,))
            self._db.connection.commit()
            return cursor.rowcount > 0

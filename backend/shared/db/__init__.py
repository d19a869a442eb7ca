"""SQLite database layer: connection management and repository implementations."""

from shared.db.connection import Database
from shared.db.game_repository import SqliteGameRepository
from shared.db.profile_repository import SqliteProfileRepository

__all__ = [
    "Database",
    "SqliteGameRepository",
    "SqliteProfileRepository",
]

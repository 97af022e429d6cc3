"""SQLite database layer: connection management and repository implementations."""

from shared.db.connection import Database, StorageError
from shared.db.game_repository import SqliteGameRepository

__all__ = [
    "Database",
    "SqliteGameRepository",
    "StorageError",
]

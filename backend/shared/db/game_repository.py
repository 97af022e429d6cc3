"""SQLite-backed game repository."""

from __future__ import annotations

import asyncio
import sqlite3
from typing import TYPE_CHECKING

import structlog

from shared.dal.game_repository import GameRepository
from shared.dal.models import GameRecord
from shared.db.connection import StorageError

if TYPE_CHECKING:
    from shared.db.connection import Database

logger = structlog.get_logger()


class SqliteGameRepository(GameRepository):
    """SQLite implementation of GameRepository.

    Stores each record as a JSON document with indexed timestamp columns.
    Listing follows rowid order, i.e. insertion order.
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def insert_game(self, game: GameRecord) -> None:
        async with self._lock:
            conn = self._db.connection
            try:
                conn.execute(
                    "INSERT INTO games (id, created_at, updated_at, data) VALUES (?, ?, ?, ?)",
                    (
                        game.id,
                        game.created_at.isoformat(),
                        game.updated_at.isoformat(),
                        game.model_dump_json(by_alias=True),
                    ),
                )
                conn.commit()
            except sqlite3.Error as exc:
                conn.rollback()
                raise StorageError(str(exc)) from exc

    async def list_games(self) -> list[GameRecord]:
        try:
            rows = self._db.connection.execute("SELECT data FROM games ORDER BY rowid").fetchall()
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        return [GameRecord.model_validate_json(row[0]) for row in rows]

    async def get_game(self, game_id: str) -> GameRecord | None:
        try:
            row = self._db.connection.execute("SELECT data FROM games WHERE id = ?", (game_id,)).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        if row is None:
            return None
        return GameRecord.model_validate_json(row[0])

    async def replace_game(self, game: GameRecord) -> bool:
        async with self._lock:
            conn = self._db.connection
            try:
                cursor = conn.execute(
                    "UPDATE games SET updated_at = ?, data = ? WHERE id = ?",
                    (game.updated_at.isoformat(), game.model_dump_json(by_alias=True), game.id),
                )
                conn.commit()
            except sqlite3.Error as exc:
                conn.rollback()
                raise StorageError(str(exc)) from exc
        if cursor.rowcount == 0:
            logger.warning("replace_game had no effect (record not found)", game_id=game.id)
            return False
        return True

    async def delete_game(self, game_id: str) -> GameRecord | None:
        async with self._lock:
            conn = self._db.connection
            try:
                row = conn.execute("SELECT data FROM games WHERE id = ?", (game_id,)).fetchone()
                if row is None:
                    return None
                conn.execute("DELETE FROM games WHERE id = ?", (game_id,))
                conn.commit()
            except sqlite3.Error as exc:
                conn.rollback()
                raise StorageError(str(exc)) from exc
        return GameRecord.model_validate_json(row[0])

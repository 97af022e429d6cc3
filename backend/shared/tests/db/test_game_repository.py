"""Tests for SqliteGameRepository."""

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from shared.dal.models import GameRecord
from shared.db.connection import Database, StorageError
from shared.db.game_repository import SqliteGameRepository

if TYPE_CHECKING:
    from pathlib import Path

_CREATED = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


def _game(game_id: str = "g1", name: str = "Chess") -> GameRecord:
    return GameRecord(
        id=game_id,
        name=name,
        url="http://x",
        author="A",
        date_published="2020",
        created_at=_CREATED,
        updated_at=_CREATED,
    )


@pytest.fixture
def db(tmp_path: Path):
    database = Database(tmp_path / "test.db")
    database.connect()
    yield database
    database.close()


@pytest.fixture
def repo(db: Database) -> SqliteGameRepository:
    return SqliteGameRepository(db)


class TestInsertAndGet:
    async def test_insert_and_get(self, repo: SqliteGameRepository) -> None:
        await repo.insert_game(_game())
        assert await repo.get_game("g1") == _game()

    async def test_get_returns_none_for_unknown(self, repo: SqliteGameRepository) -> None:
        assert await repo.get_game("nonexistent") is None

    async def test_duplicate_id_raises_storage_error(self, repo: SqliteGameRepository) -> None:
        await repo.insert_game(_game())
        with pytest.raises(StorageError, match="UNIQUE"):
            await repo.insert_game(_game(name="Other"))
        assert (await repo.get_game("g1")).name == "Chess"

    async def test_stores_json_document_with_wire_names(self, repo: SqliteGameRepository, db: Database) -> None:
        await repo.insert_game(_game())
        row = db.connection.execute("SELECT json_extract(data, '$.datePublished') FROM games").fetchone()
        assert row == ("2020",)


class TestListGames:
    async def test_empty(self, repo: SqliteGameRepository) -> None:
        assert await repo.list_games() == []

    async def test_insertion_order(self, repo: SqliteGameRepository) -> None:
        for game_id in ("z", "a", "m"):
            await repo.insert_game(_game(game_id))
        assert [g.id for g in await repo.list_games()] == ["z", "a", "m"]


class TestReplaceGame:
    async def test_replaces_document(self, repo: SqliteGameRepository) -> None:
        await repo.insert_game(_game())
        changed = _game().model_copy(update={"author": "B", "updated_at": _CREATED + timedelta(minutes=1)})

        assert await repo.replace_game(changed) is True
        assert await repo.get_game("g1") == changed

    async def test_missing_record_returns_false(self, repo: SqliteGameRepository) -> None:
        assert await repo.replace_game(_game("ghost")) is False
        assert await repo.get_game("ghost") is None


class TestDeleteGame:
    async def test_returns_deleted_record(self, repo: SqliteGameRepository) -> None:
        await repo.insert_game(_game())
        assert await repo.delete_game("g1") == _game()
        assert await repo.get_game("g1") is None

    async def test_missing_record_returns_none(self, repo: SqliteGameRepository) -> None:
        assert await repo.delete_game("ghost") is None


class TestBackendFailures:
    async def test_query_failure_is_wrapped(self, repo: SqliteGameRepository, db: Database) -> None:
        db.connection.execute("DROP TABLE games")
        with pytest.raises(StorageError) as exc_info:
            await repo.list_games()
        assert isinstance(exc_info.value.__cause__, sqlite3.Error)

    async def test_closed_database_raises(self, repo: SqliteGameRepository, db: Database) -> None:
        db.close()
        with pytest.raises(StorageError, match="not connected"):
            await repo.get_game("g1")

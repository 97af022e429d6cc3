"""Abstract interface for game record persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import GameRecord


class GameRepository(ABC):
    """Abstract interface for game record persistence.

    Implementations can use SQLite, an in-memory dict, a document database, etc.
    """

    @abstractmethod
    async def insert_game(self, game: GameRecord) -> None: ...

    @abstractmethod
    async def list_games(self) -> list[GameRecord]:
        """Return every stored record in insertion order."""

    @abstractmethod
    async def get_game(self, game_id: str) -> GameRecord | None: ...

    @abstractmethod
    async def replace_game(self, game: GameRecord) -> bool:
        """Overwrite the stored record with the same id. Return False if it no longer exists."""

    @abstractmethod
    async def delete_game(self, game_id: str) -> GameRecord | None:
        """Remove a record and return it as it was before deletion, or None if absent."""

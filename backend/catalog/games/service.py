"""Game resource service: validates payloads and delegates to the repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from catalog.games.types import REQUIRED_GAME_FIELDS
from shared.dal.models import GameRecord
from shared.dal.stamper import SystemStamper

if TYPE_CHECKING:
    from catalog.games.types import GameCreate, GameUpdate
    from shared.dal.game_repository import GameRepository
    from shared.dal.stamper import RecordStamper

logger = structlog.get_logger()


class GameValidationError(Exception):
    """A required field is missing or empty.

    ``field`` is the wire name of the first failing field; ``messages`` holds
    one message per failing field, keyed by wire name.
    """

    def __init__(self, messages: dict[str, str]) -> None:
        self.messages = messages
        self.field, message = next(iter(messages.items()))
        super().__init__(message)


class GameNotFoundError(Exception):
    def __init__(self, game_id: str) -> None:
        self.game_id = game_id
        super().__init__(f"Cannot find the game with id {game_id}")


def _missing_field_messages(payload: GameCreate) -> dict[str, str]:
    messages = {}
    for attr, (wire_name, message) in REQUIRED_GAME_FIELDS.items():
        if not getattr(payload, attr):
            messages[wire_name] = message
    return messages


class GameService:
    """CRUD operations over game records.

    The repository and stamper are injected; the service keeps no state of its own.
    """

    def __init__(self, repository: GameRepository, stamper: RecordStamper | None = None) -> None:
        self._repository = repository
        self._stamper = stamper or SystemStamper()

    async def create_game(self, payload: GameCreate) -> GameRecord:
        messages = _missing_field_messages(payload)
        if messages:
            raise GameValidationError(messages)

        now = self._stamper.now()
        game = GameRecord(
            id=self._stamper.new_id(),
            name=payload.name,
            url=payload.url,
            author=payload.author,
            date_published=payload.date_published,
            created_at=now,
            updated_at=now,
        )
        await self._repository.insert_game(game)
        logger.info("game created", game_id=game.id)
        return game

    async def list_games(self) -> list[GameRecord]:
        return await self._repository.list_games()

    async def get_game(self, game_id: str) -> GameRecord:
        game = await self._repository.get_game(game_id)
        if game is None:
            raise GameNotFoundError(game_id)
        return game

    async def update_game(self, game_id: str, payload: GameUpdate) -> GameRecord:
        """Merge the provided fields over the stored record and refresh ``updated_at``.

        Provided fields are not re-validated, so an update may blank a required field.
        """
        existing = await self.get_game(game_id)
        # Clamp so a clock step backwards cannot put updated_at before created_at.
        updated_at = max(self._stamper.now(), existing.created_at)
        updated = existing.model_copy(update={**payload.changes(), "updated_at": updated_at})
        if not await self._repository.replace_game(updated):
            raise GameNotFoundError(game_id)
        logger.info("game updated", game_id=game_id, fields=sorted(payload.changes()))
        return updated

    async def delete_game(self, game_id: str) -> GameRecord:
        deleted = await self._repository.delete_game(game_id)
        if deleted is None:
            raise GameNotFoundError(game_id)
        logger.info("game deleted", game_id=game_id)
        return deleted

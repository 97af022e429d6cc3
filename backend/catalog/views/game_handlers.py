"""JSON handlers for the game CRUD routes."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, TypeVar

import structlog
from pydantic import BaseModel, ValidationError
from starlette.responses import JSONResponse

from catalog.games.service import GameNotFoundError, GameValidationError
from catalog.games.types import GameCreate, GameUpdate

if TYPE_CHECKING:
    from starlette.requests import Request

    from catalog.games.service import GameService

logger = structlog.get_logger()

_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
_JSON_CONTENT_TYPE = "application/json"

_BodyModel = TypeVar("_BodyModel", bound=BaseModel)


class InvalidBodyError(Exception):
    """The request body could not be decoded."""


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"message": message}, status_code=status_code)


async def _read_payload(request: Request, model: type[_BodyModel]) -> _BodyModel:
    """Decode a JSON or urlencoded body into ``model``.

    Only ``application/json`` (or ``+json``) bodies are parsed as JSON; any
    other content type decodes to an empty payload. Raises InvalidBodyError
    for undecodable JSON and GameValidationError when the decoded value does
    not fit the model.
    """
    media_type = request.headers.get("content-type", "").split(";", 1)[0].strip().lower()
    if media_type == _FORM_CONTENT_TYPE:
        form = await request.form()
        body: object = dict(form)
    elif media_type == _JSON_CONTENT_TYPE or media_type.endswith("+json"):
        raw_body = await request.body()
        if not raw_body.strip():
            body = {}
        else:
            try:
                body = json.loads(raw_body)
            except (ValueError, UnicodeDecodeError) as e:
                raise InvalidBodyError("Invalid JSON body") from e
    else:
        body = {}

    try:
        return model.model_validate(body)
    except ValidationError as e:
        messages = {".".join(str(part) for part in err["loc"]) or "body": err["msg"] for err in e.errors()}
        raise GameValidationError(messages) from e


async def create_game(request: Request) -> JSONResponse:
    """POST /game - validate and store a new game."""
    games_service: GameService = request.app.state.games_service
    try:
        payload = await _read_payload(request, GameCreate)
        game = await games_service.create_game(payload)
    except InvalidBodyError as e:
        return error_response(str(e), 400)
    except GameValidationError as e:
        logger.warning("game validation failed", field=e.field, errors=e.messages)
        return error_response(str(e), 500)
    return JSONResponse(game.to_wire(), status_code=200)


async def list_games(request: Request) -> JSONResponse:
    """GET /games - every stored game in insertion order."""
    games_service: GameService = request.app.state.games_service
    games = await games_service.list_games()
    return JSONResponse([game.to_wire() for game in games])


async def get_game(request: Request) -> JSONResponse:
    """GET /games/{game_id}"""
    games_service: GameService = request.app.state.games_service
    game_id = request.path_params["game_id"]
    try:
        game = await games_service.get_game(game_id)
    except GameNotFoundError as e:
        return error_response(str(e), 404)
    return JSONResponse(game.to_wire())


async def update_game(request: Request) -> JSONResponse:
    """PUT /games/{game_id} - merge the provided fields over the stored game."""
    games_service: GameService = request.app.state.games_service
    game_id = request.path_params["game_id"]
    try:
        payload = await _read_payload(request, GameUpdate)
        game = await games_service.update_game(game_id, payload)
    except InvalidBodyError as e:
        return error_response(str(e), 400)
    except GameValidationError as e:
        logger.warning("game update rejected", game_id=game_id, errors=e.messages)
        return error_response(str(e), 500)
    except GameNotFoundError as e:
        return error_response(str(e), 404)
    return JSONResponse(game.to_wire())


async def delete_game(request: Request) -> JSONResponse:
    """DELETE /games/{game_id} - respond with the record as it was before removal."""
    games_service: GameService = request.app.state.games_service
    game_id = request.path_params["game_id"]
    try:
        game = await games_service.delete_game(game_id)
    except GameNotFoundError as e:
        return error_response(str(e), 404)
    return JSONResponse(game.to_wire())

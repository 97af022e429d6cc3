"""OpenAPI 3.0 document for the game catalog routes.

Built as a plain dict so it can be served with ``JSONResponse`` and rendered
by Swagger UI without a schema-generation dependency.
"""

from typing import Any

OPENAPI_VERSION = "3.0.3"
API_VERSION = "1.0.0"

_GAME_PROPERTIES = ("name", "url", "author", "datePublished", "id", "createdAt", "updatedAt")


def _ref(name: str) -> dict[str, str]:
    return {"$ref": f"#/components/schemas/{name}"}


def _json_response(description: str, schema: dict[str, Any]) -> dict[str, Any]:
    return {"description": description, "content": {"application/json": {"schema": schema}}}


def _error_response(description: str) -> dict[str, Any]:
    return _json_response(description, _ref("Error"))


def _id_parameter(action: str) -> dict[str, Any]:
    return {
        "in": "path",
        "name": "id",
        "required": True,
        "description": f"ID of the game to {action}",
        "schema": {"type": "string"},
    }


def _game_body() -> dict[str, Any]:
    return {"required": True, "content": {"application/json": {"schema": _ref("Game")}}}


def build_spec(title: str, server_url: str = "/") -> dict[str, Any]:
    """Return the OpenAPI document describing every game route."""
    game_by_id: dict[str, Any] = {
        "get": {
            "summary": "Returns a single game by ID",
            "parameters": [_id_parameter("retrieve")],
            "responses": {
                "200": _json_response("A single game", _ref("Game")),
                "404": _error_response("Game not found"),
            },
        },
        "put": {
            "summary": "Updates a game by ID",
            "parameters": [_id_parameter("update")],
            "requestBody": _game_body(),
            "responses": {
                "200": _json_response("Successfully updated a game", _ref("Game")),
                "404": _error_response("Game not found"),
            },
        },
        "delete": {
            "summary": "Deletes a game by ID",
            "parameters": [_id_parameter("delete")],
            "responses": {
                "200": _json_response("Successfully deleted a game", _ref("Game")),
                "404": _error_response("Game not found"),
            },
        },
    }

    return {
        "openapi": OPENAPI_VERSION,
        "info": {"title": title, "version": API_VERSION},
        "servers": [{"url": server_url}],
        "paths": {
            "/game": {
                "post": {
                    "summary": "Adds a new game",
                    "requestBody": _game_body(),
                    "responses": {
                        "200": _json_response("Successfully added a new game", _ref("Game")),
                        "500": _error_response("Missing required field or storage failure"),
                    },
                },
            },
            "/games": {
                "get": {
                    "summary": "Returns all games",
                    "responses": {
                        "200": _json_response("A list of games", {"type": "array", "items": _ref("Game")}),
                    },
                },
            },
            "/games/{id}": game_by_id,
        },
        "components": {
            "schemas": {
                "Game": {
                    "type": "object",
                    "properties": {prop: {"type": "string"} for prop in _GAME_PROPERTIES},
                },
                "Error": {
                    "type": "object",
                    "properties": {"message": {"type": "string"}},
                },
            },
        },
    }

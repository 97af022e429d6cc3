from __future__ import annotations

import contextlib
from http import HTTPStatus
from typing import TYPE_CHECKING, cast

import structlog
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from catalog.games.service import GameService
from catalog.server.middleware import RequestLoggingMiddleware, SlashNormalizationMiddleware
from catalog.server.settings import CatalogServerSettings
from catalog.views import (
    create_game,
    delete_game,
    docs_redirect,
    get_game,
    list_games,
    openapi_document,
    swagger_ui,
    update_game,
)
from catalog.views.docs_handlers import DOCS_PATH, OPENAPI_PATH
from catalog.views.openapi import build_spec
from shared.build_info import build_summary
from shared.db import Database, SqliteGameRepository, StorageError
from shared.logging import setup_logging

logger = structlog.get_logger()

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starlette.requests import Request

    from shared.dal import GameRepository, RecordStamper

_CORS_METHODS = ["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"]
_CORS_HEADERS = ["authorization", "Content-Type"]


async def _http_error_handler(_request: Request, exc: Exception) -> Response:
    """Render routing errors (unknown path, wrong method) in the API's error shape."""
    http_exc = cast("HTTPException", exc)
    if http_exc.status_code in {HTTPStatus.NO_CONTENT, HTTPStatus.NOT_MODIFIED}:
        return Response(status_code=http_exc.status_code, headers=http_exc.headers)
    return JSONResponse(
        {"message": http_exc.detail or HTTPStatus(http_exc.status_code).phrase},
        status_code=http_exc.status_code,
        headers=http_exc.headers,
    )


async def _storage_error_handler(request: Request, exc: Exception) -> Response:
    """Pass the backend's message through as a 500."""
    logger.exception("storage operation failed", path=request.url.path, exc_info=exc)
    return JSONResponse({"message": str(exc)}, status_code=HTTPStatus.INTERNAL_SERVER_ERROR)


async def _unexpected_error_handler(request: Request, exc: Exception) -> Response:
    logger.exception("unhandled error", path=request.url.path, exc_info=exc)
    return JSONResponse({"message": str(exc) or "Internal Server Error"}, status_code=HTTPStatus.INTERNAL_SERVER_ERROR)


async def health(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", **build_summary()})


def _connect_database(settings: CatalogServerSettings) -> Database:
    """Open the configured store. Any failure aborts startup."""
    try:
        db = Database(settings.database_url)
        db.connect()
    except StorageError as e:
        logger.error("failed to connect to database", error=str(e))  # noqa: TRY400
        raise
    return db


def create_app(
    settings: CatalogServerSettings | None = None,
    game_repository: GameRepository | None = None,
    stamper: RecordStamper | None = None,
) -> Starlette:
    if settings is None:  # pragma: no cover
        settings = CatalogServerSettings()  # ty: ignore[missing-argument]

    # When the app opens its own database, it owns the connection lifecycle.
    owned_db: Database | None = None
    if game_repository is None:
        owned_db = _connect_database(settings)
        game_repository = SqliteGameRepository(owned_db)

    routes = [
        Route("/", docs_redirect, methods=["GET"], name="docs_redirect"),
        Route(DOCS_PATH, swagger_ui, methods=["GET"], name="swagger_ui"),
        Route(OPENAPI_PATH, openapi_document, methods=["GET"], name="openapi_document"),
        Route("/health", health, methods=["GET"], name="health"),
        Route("/game", create_game, methods=["POST"], name="create_game"),
        Route("/games", list_games, methods=["GET"], name="list_games"),
        Route("/games/{game_id}", get_game, methods=["GET"], name="get_game"),
        Route("/games/{game_id}", update_game, methods=["PUT"], name="update_game"),
        Route("/games/{game_id}", delete_game, methods=["DELETE"], name="delete_game"),
    ]

    @contextlib.asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncGenerator[None]:
        yield
        if owned_db is not None:
            owned_db.close()

    app = Starlette(
        routes=routes,
        lifespan=lifespan,
        exception_handlers={
            HTTPException: _http_error_handler,
            StorageError: _storage_error_handler,
            Exception: _unexpected_error_handler,
        },
    )
    app.add_middleware(SlashNormalizationMiddleware)  # type: ignore[arg-type]
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_methods=_CORS_METHODS,
        allow_headers=_CORS_HEADERS,
        expose_headers=["authorization"],
    )
    app.add_middleware(RequestLoggingMiddleware)  # type: ignore[arg-type]

    app.state.settings = settings
    app.state.games_service = GameService(game_repository, stamper)
    app.state.openapi_spec = build_spec(settings.docs_title, settings.server_url)

    logger.info("catalog server ready")
    return app


def get_app() -> Starlette:  # pragma: no cover
    """Factory function for uvicorn --factory catalog.server.app:get_app."""
    settings = CatalogServerSettings()  # ty: ignore[missing-argument]
    setup_logging(log_dir=settings.log_dir)
    return create_app(settings=settings)

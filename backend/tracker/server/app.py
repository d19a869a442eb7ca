from __future__ import annotations

import contextlib
from http import HTTPStatus
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from shared.db import Database, SqliteGameRepository, SqliteProfileRepository
from shared.logging import setup_logging
from shared.storage import LocalPictureStorage
from tracker.exceptions import ConflictError, InvalidPictureError, NotFoundError, TrackerError
from tracker.games.service import GameLogService
from tracker.profiles.service import ProfileService
from tracker.server.settings import TrackerServerSettings
from tracker.views import (
    catalog,
    create_game,
    create_profile,
    delete_game,
    delete_profile,
    game_stats,
    get_game,
    get_profile,
    list_games,
    list_profiles,
    touch_profile,
    update_game,
    upload_picture,
)

logger = structlog.get_logger()

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starlette.requests import Request


async def health(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


_ERROR_STATUS: dict[type[TrackerError], HTTPStatus] = {
    NotFoundError: HTTPStatus.NOT_FOUND,
    ConflictError: HTTPStatus.CONFLICT,
    InvalidPictureError: HTTPStatus.UNPROCESSABLE_ENTITY,
}


async def _tracker_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    status = next((s for cls, s in _ERROR_STATUS.items() if isinstance(exc, cls)), HTTPStatus.BAD_REQUEST)
    if status == HTTPStatus.CONFLICT:
        logger.warning("request rejected by storage", error=str(exc))
    return JSONResponse({"error": str(exc)}, status_code=status)


def create_app(settings: TrackerServerSettings | None = None) -> Starlette:
    if settings is None:  # pragma: no cover
        settings = TrackerServerSettings()

    Path(settings.picture_dir).mkdir(mode=0o700, parents=True, exist_ok=True)

    routes = [
        Route("/health", health, methods=["GET"], name="health"),
        Route("/catalog", catalog, methods=["GET"], name="catalog"),
        Route("/profiles", list_profiles, methods=["GET"], name="list_profiles"),
        Route("/profiles", create_profile, methods=["POST"], name="create_profile"),
        Route("/profiles/{profile_id}", get_profile, methods=["GET"], name="get_profile"),
        Route("/profiles/{profile_id}", delete_profile, methods=["DELETE"], name="delete_profile"),
        Route("/profiles/{profile_id}/touch", touch_profile, methods=["POST"], name="touch_profile"),
        Route("/games", list_games, methods=["GET"], name="list_games"),
        Route("/games", create_game, methods=["POST"], name="create_game"),
        Route("/games/{game_id}", get_game, methods=["GET"], name="get_game"),
        Route("/games/{game_id}", update_game, methods=["PUT"], name="update_game"),
        Route("/games/{game_id}", delete_game, methods=["DELETE"], name="delete_game"),
        Route("/games/{game_id}/stats", game_stats, methods=["GET"], name="game_stats"),
        Route("/pictures", upload_picture, methods=["POST"], name="upload_picture"),
        Mount(
            "/pictures",
            app=StaticFiles(directory=settings.picture_dir),
            name="pictures",
        ),
    ]

    db = Database(settings.database_path)
    db.connect()
    game_repo = SqliteGameRepository(db)
    profile_repo = SqliteProfileRepository(db)
    picture_storage = LocalPictureStorage(settings.picture_dir)

    @contextlib.asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncGenerator[None]:  # pragma: no cover
        yield
        db.close()

    app = Starlette(
        routes=routes,
        lifespan=lifespan,
        exception_handlers={
            TrackerError: _tracker_error_handler,
        },
    )
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )

    app.state.db = db
    app.state.settings = settings
    app.state.picture_storage = picture_storage
    app.state.game_service = GameLogService(
        game_repo,
        profile_repo,
        picture_storage,
        difficulty_match=settings.difficulty_match,
    )
    app.state.profile_service = ProfileService(profile_repo, game_repo, picture_storage)

    logger.info("tracker server ready", difficulty_match=settings.difficulty_match)
    return app


def get_app() -> Starlette:  # pragma: no cover
    """Factory function for uvicorn --factory tracker.server.app:get_app."""
    s = TrackerServerSettings()
    setup_logging(log_dir=s.log_dir)
    return create_app(settings=s)

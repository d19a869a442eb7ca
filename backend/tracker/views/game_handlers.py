"""JSON handlers for logged games, their statistics and picture uploads."""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING

from pydantic import ValidationError
from starlette.responses import JSONResponse, Response

from tracker.games.types import CreateGameRequest, UpdateGameRequest
from tracker.views.utils import read_json_body, validation_error_response

if TYPE_CHECKING:
    from starlette.requests import Request

    from shared.storage import PictureStorage
    from tracker.games.service import GameLogService

STATS_SCOPES = {"profile", "all"}

_PICTURE_SUFFIXES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/heic": ".heic",
}


def _service(request: Request) -> GameLogService:
    return request.app.state.game_service


async def list_games(request: Request) -> JSONResponse:
    """GET /games?profile_id= - games of one profile, or of all profiles when omitted."""
    profile_id = request.query_params.get("profile_id") or None
    games = await _service(request).list_games(profile_id)
    return JSONResponse({"games": [g.model_dump(mode="json") for g in games]})


async def create_game(request: Request) -> JSONResponse:
    body = await read_json_body(request)
    if body is None:
        return JSONResponse({"error": "Invalid JSON body"}, status_code=HTTPStatus.UNPROCESSABLE_ENTITY)
    try:
        req = CreateGameRequest.model_validate(body)
    except ValidationError as e:
        return validation_error_response(e)

    game = await _service(request).create_game(req.profile_id, req.to_draft())
    return JSONResponse(game.model_dump(mode="json"), status_code=HTTPStatus.CREATED)


async def get_game(request: Request) -> JSONResponse:
    game = await _service(request).get_game(request.path_params["game_id"])
    return JSONResponse(game.model_dump(mode="json"))


async def update_game(request: Request) -> JSONResponse:
    body = await read_json_body(request)
    if body is None:
        return JSONResponse({"error": "Invalid JSON body"}, status_code=HTTPStatus.UNPROCESSABLE_ENTITY)
    try:
        req = UpdateGameRequest.model_validate(body)
    except ValidationError as e:
        return validation_error_response(e)

    game = await _service(request).update_game(request.path_params["game_id"], req.to_draft(), req.profile_id)
    return JSONResponse(game.model_dump(mode="json"))


async def delete_game(request: Request) -> Response:
    await _service(request).delete_game(request.path_params["game_id"])
    return Response(status_code=HTTPStatus.NO_CONTENT)


async def game_stats(request: Request) -> JSONResponse:
    """GET /games/{game_id}/stats?scope=profile|all - comparative statistics for one game."""
    scope = request.query_params.get("scope", "profile")
    if scope not in STATS_SCOPES:
        return JSONResponse(
            {"error": f"scope must be one of: {', '.join(sorted(STATS_SCOPES))}"},
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
        )
    stats = await _service(request).get_game_stats(request.path_params["game_id"], all_profiles=scope == "all")
    return JSONResponse(stats.model_dump(mode="json"))


async def upload_picture(request: Request) -> JSONResponse:
    """POST /pictures - store the raw request body and return its reference."""
    storage: PictureStorage = request.app.state.picture_storage
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    suffix = _PICTURE_SUFFIXES.get(content_type)
    if suffix is None:
        return JSONResponse(
            {"error": f"Unsupported content type: '{content_type}'"},
            status_code=HTTPStatus.UNSUPPORTED_MEDIA_TYPE,
        )
    content = await request.body()
    try:
        ref = storage.save_picture(content, suffix)
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=HTTPStatus.UNPROCESSABLE_ENTITY)
    return JSONResponse({"ref": ref}, status_code=HTTPStatus.CREATED)

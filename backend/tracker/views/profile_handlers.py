"""JSON handlers for profiles and the static game catalog."""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING

from pydantic import ValidationError
from starlette.responses import JSONResponse, Response

from tracker.games.types import CreateProfileRequest
from tracker.logic.catalog import ADVERSARIES, SCENARIOS
from tracker.views.utils import read_json_body, validation_error_response

if TYPE_CHECKING:
    from starlette.requests import Request

    from tracker.profiles.service import ProfileService


def _service(request: Request) -> ProfileService:
    return request.app.state.profile_service


async def list_profiles(request: Request) -> JSONResponse:
    """GET /profiles - most recently used first."""
    profiles = await _service(request).list_profiles()
    return JSONResponse({"profiles": [p.model_dump(mode="json") for p in profiles]})


async def create_profile(request: Request) -> JSONResponse:
    body = await read_json_body(request)
    if body is None:
        return JSONResponse({"error": "Invalid JSON body"}, status_code=HTTPStatus.UNPROCESSABLE_ENTITY)
    try:
        req = CreateProfileRequest.model_validate(body)
        profile = await _service(request).create_profile(req.name)
    except ValidationError as e:
        return validation_error_response(e)
    return JSONResponse(profile.model_dump(mode="json"), status_code=HTTPStatus.CREATED)


async def get_profile(request: Request) -> JSONResponse:
    profile = await _service(request).get_profile(request.path_params["profile_id"])
    return JSONResponse(profile.model_dump(mode="json"))


async def touch_profile(request: Request) -> JSONResponse:
    """POST /profiles/{profile_id}/touch - mark the profile as last used."""
    profile = await _service(request).touch_profile(request.path_params["profile_id"])
    return JSONResponse(profile.model_dump(mode="json"))


async def delete_profile(request: Request) -> Response:
    await _service(request).delete_profile(request.path_params["profile_id"])
    return Response(status_code=HTTPStatus.NO_CONTENT)


async def catalog(_request: Request) -> JSONResponse:
    """GET /catalog - adversaries with per-level difficulty, and scenarios."""
    return JSONResponse(
        {
            "adversaries": [a.model_dump() for a in ADVERSARIES],
            "scenarios": [s.model_dump() for s in SCENARIOS],
        },
    )

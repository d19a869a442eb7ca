from __future__ import annotations

import json
from http import HTTPStatus
from typing import TYPE_CHECKING, Any

from starlette.responses import JSONResponse

if TYPE_CHECKING:
    from pydantic import ValidationError
    from starlette.requests import Request


async def read_json_body(request: Request) -> dict[str, Any] | None:
    """Decode a JSON object body. Returns None for anything else."""
    raw_body = await request.body()
    try:
        body = json.loads(raw_body)
    except ValueError:  # includes JSONDecodeError and undecodable bytes
        return None
    return body if isinstance(body, dict) else None


def validation_error_response(exc: ValidationError) -> JSONResponse:
    errors = [
        {"loc": [str(part) for part in err["loc"]], "msg": err["msg"]}
        for err in exc.errors(include_url=False, include_context=False, include_input=False)
    ]
    return JSONResponse({"error": "Validation failed", "details": errors}, status_code=HTTPStatus.UNPROCESSABLE_ENTITY)

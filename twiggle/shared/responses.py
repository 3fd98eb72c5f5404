"""
Success response builders.

Routes return their payloads through these helpers so every 2xx body
has the same envelope as the error responses.
"""

from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

from fastapi.responses import JSONResponse

from twiggle.interfaces.schemas import SuccessResponse


def utc_now() -> datetime:
    """Return the current instant in UTC."""
    return datetime.now(timezone.utc)


def build_success(
    message: str, data: Any = None, status: HTTPStatus = HTTPStatus.OK
) -> SuccessResponse:
    """Build a success envelope stamped with the current instant.

    Args:
        message: Outcome description. Must not be None.
        data: Payload, may be None.
        status: HTTP status of the response.

    Raises:
        ValueError: If ``message`` is None.
    """
    if message is None:
        raise ValueError("message must not be None")
    return SuccessResponse(
        timestamp=utc_now(),
        status=HTTPStatus(status).value,
        message=message,
        data=data,
    )


def _to_json(body: SuccessResponse) -> JSONResponse:
    return JSONResponse(status_code=body.status, content=body.model_dump(mode="json"))


def success(message: str, data: Any = None) -> JSONResponse:
    """200 OK with a success envelope."""
    return _to_json(build_success(message, data, HTTPStatus.OK))


def created(message: str, data: Any = None) -> JSONResponse:
    """201 Created with a success envelope."""
    return _to_json(build_success(message, data, HTTPStatus.CREATED))

"""
Centralized error handlers for FastAPI.

Translates whatever surfaces while handling a request (routing,
argument binding, rate limiting, the handler body) into a fault and
renders it through the dispatcher. The original exception is always
logged; clients never see stack traces.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from twiggle.core.config import settings
from twiggle.shared.errors.dispatcher import dispatch
from twiggle.shared.errors.exceptions import ApplicationError, RateLimitExceededError
from twiggle.shared.errors.faults import (
    AccessDeniedFault,
    ApplicationFault,
    Fault,
    RateLimitFault,
    UnknownFault,
    from_http_exception,
    from_request_errors,
    from_validation_error,
)

logger = logging.getLogger(__name__)

HTTP_500 = 500


def describe_request(request: Request) -> str:
    """Describe the request URI the way error bodies report it."""
    return f"uri={request.url.path}"


def _respond(
    request: Request,
    exc: Exception,
    fault: Fault,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Log the original exception and render its fault."""
    body = dispatch(fault, describe_request(request))
    if body.status >= HTTP_500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc
        )
    else:
        logger.warning(
            "%s %s rejected with %d %s: %s",
            request.method,
            request.url.path,
            body.status,
            body.code,
            exc,
        )
    return JSONResponse(
        status_code=body.status,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register the error dispatcher on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(ApplicationError)
    async def handle_application_error(
        request: Request, exc: ApplicationError
    ) -> JSONResponse:
        """Faults raised by handlers carry their own status and code."""
        fault = ApplicationFault(message=exc.message, status=exc.status, code=exc.code)
        return _respond(request, exc, fault)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Invalid body, query, path or header values."""
        return _respond(request, exc, from_request_errors(exc.errors()))

    @app.exception_handler(ValidationError)
    async def handle_validation_error(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        """Pydantic validation failing inside a handler body."""
        return _respond(request, exc, from_validation_error(exc))

    @app.exception_handler(PermissionError)
    async def handle_permission_error(
        request: Request, exc: PermissionError
    ) -> JSONResponse:
        return _respond(request, exc, AccessDeniedFault())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Routing failures: unknown path, wrong method, bad media type."""
        fault = from_http_exception(
            exc,
            method=request.method,
            path=request.url.path,
            content_type=request.headers.get("content-type"),
            supported_media_types=settings.supported_media_types,
        )
        return _respond(request, exc, fault, headers=exc.headers)

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(
        request: Request, exc: RateLimitExceededError
    ) -> JSONResponse:
        return _respond(request, exc, RateLimitFault(policy_name=exc.policy_name))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        return _respond(request, exc, UnknownFault())

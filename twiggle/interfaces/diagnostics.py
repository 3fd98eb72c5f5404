"""
Diagnostic endpoints.

Smoke-test routes for the success and error pipelines. Each route is
guarded by a rate limiter policy; both error routes share the
``test-error`` bucket.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from twiggle.interfaces.schemas import ErrorResponse, SuccessResponse
from twiggle.shared.errors.codes import ErrorCode
from twiggle.shared.errors.exceptions import ApplicationError
from twiggle.shared.responses import success
from twiggle.shared.security.rate_limiting import STANDARD_API, TEST_ERROR, RateLimit

router = APIRouter(prefix="/v1", tags=["diagnostics"])

ERROR_RESPONSES = {429: {"model": ErrorResponse}}


@router.get(
    "/test",
    response_model=SuccessResponse[str],
    responses=ERROR_RESPONSES,
    dependencies=[Depends(RateLimit(STANDARD_API.name))],
    summary="Test endpoint",
    description="Returns a greeting wrapped in the success envelope.",
)
def run_test() -> JSONResponse:
    return success("Test endpoint executed successfully", "Hello, World!")


@router.get(
    "/test-error",
    responses={400: {"model": ErrorResponse}, **ERROR_RESPONSES},
    dependencies=[Depends(RateLimit(TEST_ERROR.name))],
    summary="Client error example",
    description="Always fails with a 400 INVALID_REQUEST error body.",
)
def raise_test_error() -> None:
    raise ApplicationError(
        "This is a test error", HTTPStatus.BAD_REQUEST, ErrorCode.INVALID_REQUEST
    )


@router.get(
    "/test-server-error",
    responses={500: {"model": ErrorResponse}, **ERROR_RESPONSES},
    dependencies=[Depends(RateLimit(TEST_ERROR.name))],
    summary="Server error example",
    description="Always fails with a 500 INTERNAL_ERROR error body.",
)
def raise_test_server_error() -> None:
    raise ApplicationError("This is a test server error", HTTPStatus.INTERNAL_SERVER_ERROR)

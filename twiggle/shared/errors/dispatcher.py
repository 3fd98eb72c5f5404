"""
Exception dispatcher.

Renders any fault into the canonical ``ErrorResponse``. This is the
only place where client-facing error messages are worded. Pure: the
result depends on the fault, the request path and the clock.
"""

from http import HTTPStatus

from twiggle.interfaces.schemas import ErrorResponse
from twiggle.shared.errors.codes import ErrorCode
from twiggle.shared.errors.faults import (
    AccessDeniedFault,
    ApplicationFault,
    ConstraintFault,
    Fault,
    MalformedJsonFault,
    MediaTypeFault,
    MethodNotAllowedFault,
    MissingParamFault,
    NotFoundFault,
    RateLimitFault,
    TypeMismatchFault,
    ValidationFault,
)
from twiggle.shared.responses import utc_now

VALIDATION_FAILED = "Validation failed. Please check the provided data."
CONSTRAINTS_VIOLATED = "Validation constraints violated. Please check your input."
MALFORMED_JSON = "Malformed JSON request. Please check the request body."
ACCESS_DENIED = "You don't have permission to access this resource"
TOO_MANY_REQUESTS = "Too many requests. Please try again later."
UNEXPECTED_ERROR = (
    "An unexpected error occurred. "
    "Please try again later or contact support if the problem persists."
)
NO_SUPPORTED_METHODS = "No supported methods"
NO_CONTENT_TYPE = "(none)"

Rendering = tuple[HTTPStatus, ErrorCode, str, list[str]]


def _status(value: HTTPStatus | int) -> HTTPStatus:
    try:
        return HTTPStatus(value)
    except ValueError:
        # Unregistered codes render as a generic server error.
        return HTTPStatus.INTERNAL_SERVER_ERROR


def _render(fault: Fault) -> Rendering:
    match fault:
        case ApplicationFault(message=message, status=status, code=code):
            return _status(status), code, message, []
        case ValidationFault(errors=errors):
            return (
                HTTPStatus.BAD_REQUEST,
                ErrorCode.INVALID_REQUEST,
                VALIDATION_FAILED,
                [str(e) for e in errors],
            )
        case TypeMismatchFault(name=name, expected_type=expected_type):
            return (
                HTTPStatus.BAD_REQUEST,
                ErrorCode.INVALID_PARAMETER_TYPE,
                f"The parameter '{name}' must be a valid {expected_type}",
                [],
            )
        case ConstraintFault(violations=violations):
            return (
                HTTPStatus.BAD_REQUEST,
                ErrorCode.CONSTRAINT_VIOLATION,
                CONSTRAINTS_VIOLATED,
                [str(v) for v in violations],
            )
        case MissingParamFault(name=name):
            return (
                HTTPStatus.BAD_REQUEST,
                ErrorCode.MISSING_PARAMETER,
                f"The required parameter '{name}' is missing",
                [],
            )
        case MalformedJsonFault(detail=detail):
            return (
                HTTPStatus.BAD_REQUEST,
                ErrorCode.MALFORMED_JSON,
                MALFORMED_JSON,
                [detail] if detail else [],
            )
        case AccessDeniedFault():
            return HTTPStatus.FORBIDDEN, ErrorCode.ACCESS_DENIED, ACCESS_DENIED, []
        case NotFoundFault(url=url):
            return (
                HTTPStatus.NOT_FOUND,
                ErrorCode.RESOURCE_NOT_FOUND,
                f"The requested resource '{url}' was not found",
                [],
            )
        case MethodNotAllowedFault(method=method, supported_methods=methods):
            supported = ", ".join(methods) if methods else NO_SUPPORTED_METHODS
            return (
                HTTPStatus.METHOD_NOT_ALLOWED,
                ErrorCode.METHOD_NOT_ALLOWED,
                f"The {method} method is not supported. Supported methods are: {supported}",
                [],
            )
        case MediaTypeFault(content_type=content_type, supported_types=types):
            return (
                HTTPStatus.UNSUPPORTED_MEDIA_TYPE,
                ErrorCode.UNSUPPORTED_MEDIA_TYPE,
                f"The media type {content_type or NO_CONTENT_TYPE} is not supported. "
                f"Supported types are: {', '.join(types)}",
                [],
            )
        case RateLimitFault():
            return (
                HTTPStatus.TOO_MANY_REQUESTS,
                ErrorCode.RATE_LIMIT_EXCEEDED,
                TOO_MANY_REQUESTS,
                [],
            )
        case _:
            # UnknownFault, and anything that is not a known variant.
            return (
                HTTPStatus.INTERNAL_SERVER_ERROR,
                ErrorCode.INTERNAL_ERROR,
                UNEXPECTED_ERROR,
                [],
            )


def dispatch(fault: Fault, path: str) -> ErrorResponse:
    """Build the error response for a fault.

    Args:
        fault: The fault raised while handling the request.
        path: Description of the request URI, e.g. ``uri=/api/v1/test``.

    Returns:
        A fresh ``ErrorResponse``. Never raises.
    """
    status, code, message, details = _render(fault)
    return ErrorResponse(
        timestamp=utc_now(),
        status=status.value,
        error=status.phrase,
        code=code.name,
        message=message,
        path=path,
        details=details,
        suggestion=code.suggestion,
    )

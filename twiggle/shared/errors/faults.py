"""
Fault variants rendered by the error dispatcher.

A fault is the closed set of request-processing failures the API knows
how to describe. Each variant carries only the data its message needs.
The ``from_*`` helpers translate framework and library exceptions into
faults so the dispatcher never inspects exception types itself.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Union

from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from twiggle.shared.errors.codes import ErrorCode

BODY_LOCATION = "body"
JSON_INVALID = "json_invalid"
MISSING = "missing"

# Pydantic error types that do not spell out the expected type in their name.
_EXPECTED_TYPE_OVERRIDES = {
    "int_from_float": "int",
    "uuid_parsing": "UUID",
    "uuid_type": "UUID",
    "decimal_parsing": "Decimal",
    "decimal_type": "Decimal",
    "string_type": "str",
    "date_from_datetime_parsing": "date",
}


@dataclass(frozen=True)
class FieldError:
    """A single field (or property path) and what is wrong with it."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(frozen=True)
class ApplicationFault:
    message: str
    status: HTTPStatus
    code: ErrorCode


@dataclass(frozen=True)
class ValidationFault:
    errors: tuple[FieldError, ...]


@dataclass(frozen=True)
class TypeMismatchFault:
    name: str
    expected_type: str


@dataclass(frozen=True)
class ConstraintFault:
    violations: tuple[FieldError, ...]


@dataclass(frozen=True)
class MissingParamFault:
    name: str


@dataclass(frozen=True)
class MalformedJsonFault:
    detail: str | None = None


@dataclass(frozen=True)
class AccessDeniedFault:
    pass


@dataclass(frozen=True)
class NotFoundFault:
    url: str


@dataclass(frozen=True)
class MethodNotAllowedFault:
    method: str
    supported_methods: tuple[str, ...] | None = None


@dataclass(frozen=True)
class MediaTypeFault:
    content_type: str | None
    supported_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class RateLimitFault:
    policy_name: str | None = None


@dataclass(frozen=True)
class UnknownFault:
    pass


Fault = Union[
    ApplicationFault,
    ValidationFault,
    TypeMismatchFault,
    ConstraintFault,
    MissingParamFault,
    MalformedJsonFault,
    AccessDeniedFault,
    NotFoundFault,
    MethodNotAllowedFault,
    MediaTypeFault,
    RateLimitFault,
    UnknownFault,
]


def _dotted(loc: Iterable[Any]) -> str:
    return ".".join(str(part) for part in loc)


def _expected_type(error_type: str) -> str:
    """Derive a readable type name from a pydantic error type."""
    if error_type in _EXPECTED_TYPE_OVERRIDES:
        return _EXPECTED_TYPE_OVERRIDES[error_type]
    for suffix in ("_parsing", "_type"):
        if error_type.endswith(suffix):
            return error_type[: -len(suffix)]
    return error_type


def _is_type_error(error_type: str) -> bool:
    return (
        error_type.endswith("_parsing")
        or error_type.endswith("_type")
        or error_type in _EXPECTED_TYPE_OVERRIDES
    )


def _is_body_error(error: Mapping[str, Any]) -> bool:
    return tuple(error.get("loc", ()))[:1] == (BODY_LOCATION,)


def _body_field(loc: Sequence[Any]) -> str:
    return _dotted(loc[1:]) or BODY_LOCATION


def from_request_errors(errors: Sequence[Mapping[str, Any]]) -> Fault:
    """Translate FastAPI request validation errors into a fault.

    Args:
        errors: The ``errors()`` list of a ``RequestValidationError``.

    Returns:
        ``MalformedJsonFault`` when the body could not be parsed,
        ``ValidationFault`` when only body fields are invalid, otherwise
        the fault matching the first invalid query/path/header parameter.
    """
    for error in errors:
        if error.get("type") == JSON_INVALID:
            ctx = error.get("ctx") or {}
            return MalformedJsonFault(detail=ctx.get("error"))

    body_errors = [e for e in errors if _is_body_error(e)]
    param_errors = [e for e in errors if not _is_body_error(e)]

    if not param_errors:
        return ValidationFault(
            errors=tuple(
                FieldError(_body_field(tuple(e.get("loc", ()))), e.get("msg", ""))
                for e in body_errors
            )
        )

    first = param_errors[0]
    error_type = first.get("type", "")
    name = _dotted(tuple(first.get("loc", ()))[1:])
    if error_type == MISSING:
        return MissingParamFault(name=name)
    if _is_type_error(error_type):
        return TypeMismatchFault(name=name, expected_type=_expected_type(error_type))
    return ConstraintFault(
        violations=tuple(
            FieldError(_dotted(tuple(e.get("loc", ()))[1:]), e.get("msg", ""))
            for e in param_errors
        )
    )


def from_validation_error(exc: ValidationError) -> ConstraintFault:
    """Translate a pydantic error raised inside a handler body."""
    return ConstraintFault(
        violations=tuple(
            FieldError(_dotted(error["loc"]) or exc.title, error["msg"])
            for error in exc.errors()
        )
    )


def from_http_exception(
    exc: StarletteHTTPException,
    method: str,
    path: str,
    content_type: str | None,
    supported_media_types: Sequence[str],
) -> Fault:
    """Translate a routing-level HTTP exception into a fault by status."""
    status = exc.status_code
    if status == HTTPStatus.NOT_FOUND:
        return NotFoundFault(url=path)
    if status == HTTPStatus.METHOD_NOT_ALLOWED:
        allow = (exc.headers or {}).get("Allow", "")
        methods = tuple(m.strip() for m in allow.split(",") if m.strip())
        return MethodNotAllowedFault(method=method, supported_methods=methods or None)
    if status == HTTPStatus.UNSUPPORTED_MEDIA_TYPE:
        return MediaTypeFault(
            content_type=content_type,
            supported_types=tuple(supported_media_types),
        )
    if status in (HTTPStatus.UNAUTHORIZED, HTTPStatus.FORBIDDEN):
        return AccessDeniedFault()
    if status == HTTPStatus.TOO_MANY_REQUESTS:
        return RateLimitFault()
    if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
        return UnknownFault()
    try:
        http_status = HTTPStatus(status)
    except ValueError:
        http_status = HTTPStatus.BAD_REQUEST
    return ApplicationFault(
        message=str(exc.detail),
        status=http_status,
        code=ErrorCode.INVALID_REQUEST,
    )

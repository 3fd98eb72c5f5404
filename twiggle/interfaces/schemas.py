"""
Pydantic schemas for Twiggle API responses.

These schemas define the wire contract shared by every endpoint.
All response envelopes are immutable once built.
No business logic belongs here.
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_serializer

TIMESTAMP_FORMAT = "%d-%m-%Y %H:%M:%S"

DataT = TypeVar("DataT")


class TimestampedResponse(BaseModel):
    """Base envelope carrying the instant the response was built."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(
        ...,
        description="Creation instant, formatted dd-MM-yyyy HH:mm:ss",
        json_schema_extra={"example": "19-10-2026 14:03:27"},
    )
    status: int = Field(..., description="HTTP status code")

    @field_serializer("timestamp")
    def _serialize_timestamp(self, value: datetime) -> str:
        return value.strftime(TIMESTAMP_FORMAT)


class SuccessResponse(TimestampedResponse, Generic[DataT]):
    """Envelope for 2xx responses.

    Attributes:
        message: Human-readable outcome.
        data: Endpoint payload, may be null.
    """

    message: str
    data: DataT | None = None


class ErrorResponse(TimestampedResponse):
    """Envelope for every error response.

    Attributes:
        error: HTTP reason phrase.
        code: ErrorCode name.
        message: Human-readable description of the failure.
        path: Description of the request URI.
        details: Per-field or per-violation lines, possibly empty.
        suggestion: Remediation hint for the caller.
    """

    error: str = Field(..., json_schema_extra={"example": "Bad Request"})
    code: str | None = Field(None, json_schema_extra={"example": "INVALID_REQUEST"})
    message: str
    path: str = Field(..., json_schema_extra={"example": "uri=/api/v1/test-error"})
    details: list[str] = Field(default_factory=list)
    suggestion: str | None = None


class HealthResponse(BaseModel):
    """Response schema for the health endpoint."""

    status: str
    version: str


class InfoResponse(BaseModel):
    """Response schema for the info endpoint."""

    name: str
    version: str
    description: str


class ApiGroupItem(BaseModel):
    """A documentation group and where its OpenAPI document is served."""

    name: str
    url: str

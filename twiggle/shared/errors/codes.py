"""
Error codes exposed to API clients.

Each code carries a fixed remediation hint that is returned in the
``suggestion`` field of every error response. The set is closed:
codes are part of the public API contract.
"""

from enum import Enum


class ErrorCode(Enum):
    """Stable error codes, valued by their client-facing suggestion."""

    # Client validation errors
    INVALID_REQUEST = "Please review the validation errors and correct your request."
    INVALID_PARAMETER_TYPE = "Please ensure the parameter value matches the required type."
    CONSTRAINT_VIOLATION = "Please check the input constraints in the API documentation."
    MISSING_PARAMETER = (
        "Please include all required parameters as specified in the documentation."
    )
    MALFORMED_JSON = "Please verify the JSON syntax and data types in your request."
    INVALID_ARGUMENT = "Please check the argument values against the API specifications."
    UNSUPPORTED_MEDIA_TYPE = "Please use one of the supported media types for this endpoint."

    # Authentication & authorization errors
    ACCESS_DENIED = (
        "Please ensure you have the necessary permissions or authenticate properly."
    )

    # Resource & method errors
    RESOURCE_NOT_FOUND = (
        "Please verify the requested resource exists and the URL is correct."
    )
    METHOD_NOT_ALLOWED = "Please use one of the supported HTTP methods for this endpoint."

    # System errors
    INTERNAL_ERROR = "Please try again later or contact support if the issue persists."
    RATE_LIMIT_EXCEEDED = (
        "Please wait and try your request again later. "
        "Contact support if you need a higher rate limit."
    )

    @property
    def suggestion(self) -> str:
        """Remediation hint shown to the caller."""
        return self.value

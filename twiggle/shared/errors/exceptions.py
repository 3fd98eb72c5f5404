"""
Exceptions raised by Twiggle request handlers.

Handlers raise these instead of building error responses; the
centralized handlers turn them into the canonical error body.
No framework imports allowed.
"""

from http import HTTPStatus

from twiggle.shared.errors.codes import ErrorCode


class ApplicationError(Exception):
    """A business-rule or validation failure detected by a handler.

    Attributes:
        message: Human-readable message returned to the client verbatim.
        status: HTTP status of the response.
        code: Error code; ``INTERNAL_ERROR`` unless given explicitly.
    """

    def __init__(
        self,
        message: str,
        status: HTTPStatus | int,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
    ) -> None:
        if message is None:
            raise ValueError("message must not be None")
        if status is None:
            raise ValueError("status must not be None")
        if code is None:
            raise ValueError("code must not be None")
        self.message = message
        self.status = HTTPStatus(status)
        self.code = code
        super().__init__(self.message)


class RateLimitExceededError(Exception):
    """Raised when a request cannot acquire a permit from its policy."""

    def __init__(self, policy_name: str) -> None:
        super().__init__(f"Rate limit exceeded for policy: {policy_name}")
        self.policy_name = policy_name

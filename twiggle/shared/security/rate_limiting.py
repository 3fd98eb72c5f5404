"""
Rate limiting policies and enforcement.

Each endpoint group is guarded by a named policy: a quota of permits
per refresh window. Requests that cannot take a permit immediately are
rejected, never queued. Counting is delegated to slowapi's limiter
(fixed-window strategy over in-memory ``limits`` storage), which owns
the shared counters and their synchronization.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta

from limits import RateLimitItem, RateLimitItemPerSecond
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from twiggle.core.config import settings
from twiggle.shared.errors.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

POLICY_NAMESPACE = "policy"
ZERO_TIMEOUT = timedelta(0)


@dataclass(frozen=True)
class RateLimiterPolicy:
    """A named quota consulted before a handler runs.

    Attributes:
        name: Unique policy key.
        limit_for_period: Permits available per refresh window.
        limit_refresh_period: Window length, in whole seconds.
        timeout_duration: How long a request may wait for a permit.
            Always zero: requests fail fast.
    """

    name: str
    limit_for_period: int
    limit_refresh_period: timedelta
    timeout_duration: timedelta = ZERO_TIMEOUT

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("policy name must not be empty")
        if self.limit_for_period < 1:
            raise ValueError(
                f"limit_for_period must be positive, got {self.limit_for_period}"
            )
        seconds = self.limit_refresh_period.total_seconds()
        if seconds < 1 or seconds != int(seconds):
            raise ValueError(
                "limit_refresh_period must be a positive whole number of seconds"
            )
        if self.timeout_duration != ZERO_TIMEOUT:
            raise ValueError("timeout_duration must be zero; requests are never queued")

    @property
    def limit_item(self) -> RateLimitItem:
        """The equivalent ``limits`` item: N permits per window."""
        return RateLimitItemPerSecond(
            self.limit_for_period, int(self.limit_refresh_period.total_seconds())
        )


STANDARD_API = RateLimiterPolicy("standard-api", 300, timedelta(minutes=1))
TEST_ERROR = RateLimiterPolicy("test-error", 30, timedelta(seconds=10))
ACTUATOR = RateLimiterPolicy("actuator", 60, timedelta(minutes=1))

DEFAULT_POLICIES = (STANDARD_API, TEST_ERROR, ACTUATOR)


class RateLimiterRegistry:
    """Named policies sharing one slowapi limiter.

    Policies are fixed at construction; only the limiter's counters
    change afterwards.
    """

    def __init__(
        self,
        policies: Iterable[RateLimiterPolicy] = DEFAULT_POLICIES,
        per_client: bool = False,
        limiter: Limiter | None = None,
    ) -> None:
        self._policies: dict[str, RateLimiterPolicy] = {}
        for policy in policies:
            if policy.name in self._policies:
                raise ValueError(f"Duplicate rate limiter policy: {policy.name}")
            self._policies[policy.name] = policy
        self.per_client = per_client
        self._limiter = limiter or Limiter(
            key_func=get_remote_address,
            strategy="fixed-window",
            storage_uri="memory://",
        )

    @property
    def limiter(self) -> Limiter:
        return self._limiter

    @property
    def policies(self) -> tuple[RateLimiterPolicy, ...]:
        return tuple(self._policies.values())

    def policy(self, name: str) -> RateLimiterPolicy:
        """Look up a policy by name.

        Raises:
            KeyError: If no policy has this name.
        """
        try:
            return self._policies[name]
        except KeyError:
            raise KeyError(f"Unknown rate limiter policy: {name}") from None

    def try_acquire(self, name: str, client: str | None = None) -> bool:
        """Take one permit from the named policy without waiting.

        Args:
            name: Policy name.
            client: Caller address; only used when counting per client.

        Returns:
            True if the request may proceed.
        """
        policy = self.policy(name)
        identifiers = [POLICY_NAMESPACE, policy.name]
        if self.per_client and client:
            identifiers.append(client)
        return self._limiter.limiter.hit(policy.limit_item, *identifiers)

    def reset(self) -> None:
        """Clear every counter, restoring all permits."""
        self._limiter.reset()


rate_limiters = RateLimiterRegistry(per_client=settings.rate_limit_per_client)


class RateLimit:
    """FastAPI dependency enforcing a named policy before the handler.

    Usage::

        @router.get("/test", dependencies=[Depends(RateLimit("standard-api"))])
    """

    def __init__(self, policy_name: str) -> None:
        self.policy_name = policy_name

    def __call__(self, request: Request) -> None:
        registry: RateLimiterRegistry = getattr(
            request.app.state, "rate_limiters", rate_limiters
        )
        if not registry.try_acquire(self.policy_name, get_remote_address(request)):
            logger.warning(
                "Rate limit exceeded: policy=%s path=%s",
                self.policy_name,
                request.url.path,
            )
            raise RateLimitExceededError(self.policy_name)

"""
Retry policies.

A RetryPolicy bounds a retry loop by wall-clock time (not attempt count),
fixes the delay between attempts and decides which error kinds are worth
retrying. Delays are fixed and un-jittered; RATE_LIMITED always waits the
long rate-limit delay, whatever the policy's default delay is.
"""

from dataclasses import dataclass
from typing import Callable

from remote_reconciler.config import Settings
from remote_reconciler.exceptions import RemoteError
from remote_reconciler.models.enums import ErrorKind


RetryPredicate = Callable[[RemoteError], bool]


def retry_any(error: RemoteError) -> bool:
    """Retry every classified failure until the window closes."""
    return True


def retry_conflicts(error: RemoteError) -> bool:
    """Retry only eventual-consistency conflicts."""
    return error.kind == ErrorKind.CONFLICT


def retry_rate_limited(error: RemoteError) -> bool:
    """Retry only when the API throttled us."""
    return error.kind == ErrorKind.RATE_LIMITED


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded-duration retry policy.

    Attributes:
        name: Policy name used in logs ("read", "create", "lookup", ...)
        max_duration: Wall-clock bound of the whole loop in seconds
        delay: Fixed delay before the next attempt (seconds)
        retryable: Predicate accepting the errors worth another attempt
        rate_limit_delay: Delay after a RATE_LIMITED failure (seconds)
    """

    name: str
    max_duration: float
    delay: float
    retryable: RetryPredicate
    rate_limit_delay: float = 30.0

    def __post_init__(self) -> None:
        """Validate policy invariants."""
        if self.max_duration <= 0:
            raise ValueError("max_duration must be > 0")
        if self.delay < 0:
            raise ValueError("delay must be >= 0")
        if self.rate_limit_delay < 0:
            raise ValueError("rate_limit_delay must be >= 0")

    def is_retryable(self, error: RemoteError) -> bool:
        if error.kind == ErrorKind.VALIDATION:
            return False
        return self.retryable(error)

    def delay_for(self, error: RemoteError) -> float:
        """Delay to wait before retrying after `error`."""
        if error.kind == ErrorKind.RATE_LIMITED:
            # A larger Retry-After from the server wins over the fixed delay
            return max(self.rate_limit_delay, error.retry_after or 0.0)
        return self.delay

    @classmethod
    def read(cls, settings: Settings) -> "RetryPolicy":
        """Fetch by identity: 2-minute window, everything retried."""
        return cls(
            name="read",
            max_duration=settings.READ_RETRY_WINDOW_SECONDS,
            delay=settings.RETRY_DELAY_SECONDS,
            retryable=retry_any,
            rate_limit_delay=settings.RATE_LIMIT_DELAY_SECONDS,
        )

    @classmethod
    def create(cls, settings: Settings) -> "RetryPolicy":
        """Create: 1-minute window, only resource-specific transient codes retried."""
        return cls(
            name="create",
            max_duration=settings.CREATE_RETRY_WINDOW_SECONDS,
            delay=settings.RETRY_DELAY_SECONDS,
            retryable=retry_conflicts,
            rate_limit_delay=settings.RATE_LIMIT_DELAY_SECONDS,
        )

    @classmethod
    def lookup(cls, settings: Settings) -> "RetryPolicy":
        """Search by filter: 2-minute window, only rate limiting retried."""
        return cls(
            name="lookup",
            max_duration=settings.LOOKUP_RETRY_WINDOW_SECONDS,
            delay=settings.RETRY_DELAY_SECONDS,
            retryable=retry_rate_limited,
            rate_limit_delay=settings.RATE_LIMIT_DELAY_SECONDS,
        )

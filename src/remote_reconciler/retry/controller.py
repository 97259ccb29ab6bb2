"""
Retry controller.

Wraps a single remote operation with bounded-duration retry:

    1. Await the operation; on success return immediately
    2. On failure classify the error
    3. Non-retryable under the policy -> raise it
    4. Retryable -> pick the delay (long fixed delay for RATE_LIMITED)
    5. If elapsed + delay would pass max_duration -> raise the last error
    6. Otherwise sleep and go to 1

The final failure is never swallowed: the last classified RemoteError is
raised, chained to the raw client error.

Usage:
    controller = RetryController()
    remote = await controller.run(policy, lambda: client.get(endpoint, "PX1"))
"""

import asyncio
import time
from typing import Awaitable, Callable, Collection, TypeVar

import httpx
import structlog

from remote_reconciler.classifier import classify
from remote_reconciler.client.exceptions import RemoteClientError
from remote_reconciler.exceptions import RemoteError
from remote_reconciler.monitoring.metrics import retry_attempts_total, retry_exhausted_total
from remote_reconciler.retry.policy import RetryPolicy

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def _raise(error: RemoteError, raw: BaseException):
    if error is raw:
        raise error
    raise error from raw


class RetryController:
    """
    Executes operations under a RetryPolicy.

    The controller holds no per-call state and can be shared by every
    reconciler. Clock and sleep are injectable so tests can drive time.

    Attributes:
        clock: Monotonic clock returning seconds
        sleep: Awaitable sleep taking seconds
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.clock = clock
        self.sleep = sleep

    async def run(
        self,
        policy: RetryPolicy,
        op: Callable[[], Awaitable[T]],
        *,
        operation: str = "remote call",
        conflict_statuses: Collection[int] = (),
    ) -> T:
        """
        Run `op` until it succeeds, fails non-retryably, or the window closes.

        Args:
            policy: Retry policy (window, delays, retryable predicate)
            op: Zero-argument coroutine function performing one attempt
            operation: Label for logs and metrics
            conflict_statuses: Resource-specific statuses classified as CONFLICT

        Returns:
            The value returned by the successful attempt

        Raises:
            RemoteError: Last classified failure
        """
        start = self.clock()
        attempt = 0

        while True:
            attempt += 1
            try:
                result = await op()
            except (RemoteClientError, RemoteError, httpx.HTTPError) as exc:
                raw = exc
                error = classify(exc, conflict_statuses=conflict_statuses)
            else:
                if attempt > 1:
                    logger.info(
                        "Remote call succeeded after retry",
                        operation=operation,
                        policy=policy.name,
                        attempts=attempt,
                        elapsed_s=round(self.clock() - start, 3),
                    )
                return result

            if not policy.is_retryable(error):
                logger.warning(
                    "Remote call failed, not retryable",
                    operation=operation,
                    policy=policy.name,
                    attempt=attempt,
                    kind=error.kind.value,
                    http_status=error.http_status,
                    error=error.message,
                )
                _raise(error, raw)

            delay = policy.delay_for(error)
            elapsed = self.clock() - start

            if elapsed + delay > policy.max_duration:
                retry_exhausted_total.labels(operation=operation, kind=error.kind.value).inc()
                logger.error(
                    "Retry window exhausted",
                    operation=operation,
                    policy=policy.name,
                    attempts=attempt,
                    elapsed_s=round(elapsed, 3),
                    max_duration_s=policy.max_duration,
                    kind=error.kind.value,
                    http_status=error.http_status,
                    error=error.message,
                )
                _raise(error, raw)

            retry_attempts_total.labels(operation=operation, kind=error.kind.value).inc()
            logger.warning(
                "Remote call failed, retrying",
                operation=operation,
                policy=policy.name,
                attempt=attempt,
                kind=error.kind.value,
                http_status=error.http_status,
                delay_s=delay,
                error=error.message,
            )
            await self.sleep(delay)

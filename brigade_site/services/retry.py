"""
Query Retrier

Bounded retry for idempotent document reads that can fail transiently
(statement timeouts, exhausted connection slots). The policy is an
explicit value so callers and tests can swap the backoff or the
transience check without touching the retry loop.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

from brigade_site.config import settings
from brigade_site.exceptions import QueryFailedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_MARKERS = ("timeout", "connection slots")


def is_transient_error(exc: BaseException) -> bool:
    """True for errors worth retrying.

    The error's own message may mention a timeout or exhausted connection
    slots; a wrapped cause only counts when it mentions a timeout.
    """
    message = str(exc).lower()
    if any(marker in message for marker in TRANSIENT_MARKERS):
        return True
    cause = exc.__cause__ or exc.__context__
    return cause is not None and "timeout" in str(cause).lower()


def linear_backoff(base_delay_ms: int, attempt: int) -> float:
    """Delay in milliseconds before retrying after failed attempt number ``attempt`` (1-based)."""
    return base_delay_ms * attempt


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    base_delay_ms: int = 1000
    backoff: Callable[[int, int], float] = field(default=linear_backoff)
    is_transient: Callable[[BaseException], bool] = field(default=is_transient_error)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must not be negative")

    def delay_seconds(self, attempt: int) -> float:
        return self.backoff(self.base_delay_ms, attempt) / 1000

    @classmethod
    def from_settings(cls) -> RetryPolicy:
        return cls(max_attempts=settings.query_max_attempts, base_delay_ms=settings.query_base_delay_ms)


async def with_retry(
    policy: RetryPolicy,
    operation: Callable[[], Awaitable[T]],
    *,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> T:
    """Run ``operation`` under ``policy``.

    Non-transient errors propagate unchanged on first occurrence. When every
    attempt fails transiently, QueryFailedError is raised from the last error.
    Only wrap idempotent reads: the operation may run ``max_attempts`` times.
    """
    for attempt in range(1, policy.max_attempts + 1):
        try:
            return await operation()
        except Exception as exc:
            if not policy.is_transient(exc):
                raise
            if attempt >= policy.max_attempts:
                logger.error("Query failed after %d attempts: %s", attempt, exc)
                raise QueryFailedError(
                    f"Query failed after {attempt} attempts",
                    last_error=exc,
                    attempts=attempt,
                ) from exc
            delay = policy.delay_seconds(attempt)
            logger.warning("Transient query error (attempt %d/%d), retrying in %.1fs: %s", attempt, policy.max_attempts, delay, exc)
            await sleep(delay)

    # max_attempts >= 1 guarantees the loop returns or raises
    raise QueryFailedError("Query failed", attempts=policy.max_attempts)


async def retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay_ms: int = 1000,
) -> T:
    return await with_retry(RetryPolicy(max_attempts=max_attempts, base_delay_ms=base_delay_ms), operation)

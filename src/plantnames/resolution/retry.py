"""Bounded retry with exponential, jittered backoff."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

from plantnames.core.exceptions import RateLimitError, RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY = 1.0
DEFAULT_JITTER = 1.0


def requested_wait(error: BaseException) -> float:
    """Largest Retry-After a node sent anywhere in the cause chain of ``error``."""
    wait = 0.0
    current: BaseException | None = error
    while current is not None:
        if isinstance(current, RateLimitError) and current.retry_after:
            wait = max(wait, current.retry_after)
        current = current.__cause__
    return wait


@dataclass
class RetryPolicy:
    """
    Re-invokes a failing async operation a bounded number of times.

    The operation gets ``max_retries + 1`` attempts in total. Between
    attempts it waits ``base_delay * 2**attempt + uniform(0, jitter)``
    seconds, with ``attempt`` counted from zero. The jitter keeps ids that
    fail together from retrying in lockstep. A Retry-After sent with a 429
    raises the wait to at least that many seconds.
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay: float = DEFAULT_BASE_DELAY
    jitter: float = DEFAULT_JITTER
    retry_on: tuple[type[BaseException], ...] = (Exception,)
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep, repr=False)
    uniform: Callable[[float, float], float] = field(default=random.uniform, repr=False)

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay(self, attempt: int) -> float:
        """Backoff before the attempt following ``attempt`` (0-indexed)."""
        jitter = self.uniform(0.0, self.jitter) if self.jitter > 0 else 0.0
        return self.base_delay * 2**attempt + jitter

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        label: str = "remote call",
    ) -> T:
        """
        Run ``operation`` until it succeeds or the attempt budget is spent.

        Args:
            operation: Zero-argument coroutine factory, called once per attempt
            label: Human-readable description used in logs and errors

        Returns:
            Whatever the first successful attempt returned

        Raises:
            RetryExhaustedError: The final attempt failed; the last error is
                chained as ``__cause__``
        """
        for attempt in range(self.max_attempts):
            try:
                return await operation()
            except self.retry_on as e:
                if attempt == self.max_retries:
                    logger.error(f"Failed {label} after {self.max_retries} retries: {e}")
                    raise RetryExhaustedError(label, self.max_attempts, e) from e

                wait = max(self.delay(attempt), requested_wait(e))
                logger.warning(
                    f"{label} failed (attempt {attempt + 1}/{self.max_attempts}), "
                    f"retrying in {wait:.2f}s: {e}"
                )
                await self.sleep(wait)

        raise AssertionError("unreachable")


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = DEFAULT_MAX_RETRIES,
    label: str = "remote call",
) -> T:
    """Run ``operation`` under a default-configured :class:`RetryPolicy`."""
    return await RetryPolicy(max_retries=max_retries).run(operation, label)

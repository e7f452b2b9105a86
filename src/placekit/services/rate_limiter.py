"""Sliding window rate limiter.

This module provides a thread-safe limiter that admits at most ``limit``
calls in any ``period`` second window. Callers over quota are blocked until
the oldest admission ages out; nothing is ever rejected.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from collections.abc import Callable

from placekit.shared.errors import ApplicationError, ErrorCode, ErrorContext
from placekit.shared.logging import log_operation_success

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """Thread-safe sliding window rate limiter.

    The limiter keeps the timestamps of admissions inside the current window.
    When the window is full, ``admit`` sleeps until the oldest timestamp
    leaves it, then records a new one.

    Args:
        limit: Maximum admissions per window
        period: Window length in seconds
        clock: Monotonic time source (default: time.monotonic)
        sleep: Sleep function (default: time.sleep)

    Raises:
        ApplicationError: If limit or period are invalid
    """

    def __init__(
        self,
        limit: int,
        period: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        context = ErrorContext(
            operation="rate_limiter_init",
            additional_data={"limit": limit, "period": period},
        )
        if limit <= 0:
            raise ApplicationError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Limit must be positive, got: {limit}",
                context=context,
            )
        if period <= 0:
            raise ApplicationError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Period must be positive, got: {period}",
                context=context,
            )

        self.limit = limit
        self.period = period
        self._clock = clock
        self._sleep = sleep
        self._timestamps: deque[float] = deque()
        self._lock = threading.Lock()

    def admit(self) -> float:
        """Block until a slot is free in the window, then take it.

        Returns:
            Seconds spent waiting
        """
        waited = 0.0
        # Sleeping under the lock serializes waiting callers in arrival order
        with self._lock:
            now = self._clock()
            self._prune(now)

            if len(self._timestamps) >= self.limit:
                wait = self._timestamps[0] + self.period - now
                if wait > 0:
                    logger.debug(
                        "Rate limit of %d per %ss reached, sleeping %.3fs",
                        self.limit,
                        self.period,
                        wait,
                    )
                    self._sleep(wait)
                    waited = wait
                now = self._clock()
                self._prune(now)
                # A clock that did not advance still frees the oldest slot
                while len(self._timestamps) >= self.limit:
                    self._timestamps.popleft()

            self._timestamps.append(now)

        if waited:
            log_operation_success(
                logger=logger,
                operation="rate_limiter_admit",
                duration_ms=waited * 1000,
                context={"limit": self.limit, "period": self.period},
            )
        return waited

    def in_window(self) -> int:
        """Number of admissions inside the current window."""
        with self._lock:
            self._prune(self._clock())
            return len(self._timestamps)

    def reset(self) -> None:
        with self._lock:
            self._timestamps.clear()

    def _prune(self, now: float) -> None:
        cutoff = now - self.period
        while self._timestamps and self._timestamps[0] <= cutoff:
            self._timestamps.popleft()

"""Blocking sliding-window rate limiter.

Notes:
- Per-process only: each limiter instance owns its own window.
- Thread-safe: admission (check + record) and eviction share one lock.
- Slots free up only when the background eviction pass removes timestamps,
  so a slot may stay taken for up to one extra tick past its nominal expiry.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from registry_gateway.adapters.rate_limit.base import (
    AbstractRateLimiter,
    RateLimitStats,
    WindowConfig,
)
from registry_gateway.adapters.rate_limit.eviction import EvictionScheduler
from registry_gateway.adapters.rate_limit.window_tracker import WindowTracker
from registry_gateway.core.errors import AdmissionCancelledError

logger = logging.getLogger(__name__)


def default_tick_seconds(window_seconds: float) -> float:
    """Eviction period used when none is given.

    One second for windows measured in seconds or longer, a tenth of the
    window for shorter ones, so a freed slot lags its expiry by at most one
    such tick.
    """

    return min(1.0, window_seconds / 10)


class SlidingWindowRateLimiter(AbstractRateLimiter):
    """Admit at most ``max_requests`` callers within any rolling window.

    Callers that find the window full block on a condition variable. They
    are woken as soon as an eviction pass frees capacity, and re-check at
    least every ``poll_interval_seconds`` so cancellation is noticed
    promptly. No ordering is guaranteed between blocked callers.

    The eviction scheduler starts on construction and runs until
    :meth:`close`. Always close the limiter (or use it as a context
    manager) once it is no longer needed.
    """

    def __init__(
        self,
        *,
        window_seconds: float,
        max_requests: int,
        tick_seconds: float | None = None,
        poll_interval_seconds: float = 0.01,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the limiter and start its eviction scheduler.

        Args:
            window_seconds: Length of the rolling window in seconds.
            max_requests: Maximum admissions within one window.
            tick_seconds: Eviction period; defaults to
                :func:`default_tick_seconds` of the window.
            poll_interval_seconds: Longest sleep between re-checks while blocked.
            clock: Time source in seconds; must not go backwards.

        Raises:
            ValueError: If any numeric argument is not positive.
        """
        if poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be > 0")

        self._config = WindowConfig(window_seconds=window_seconds, max_requests=max_requests)
        self._poll_interval = poll_interval_seconds
        self._clock = clock
        self._tracker = WindowTracker()
        self._condition = threading.Condition(threading.Lock())
        self._closed = False
        self._waiting = 0
        self._admitted_total = 0
        self._evicted_total = 0

        self._scheduler = EvictionScheduler(
            self.evict_expired,
            interval_seconds=(
                default_tick_seconds(window_seconds) if tick_seconds is None else tick_seconds
            ),
        )
        self._scheduler.start()

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return (
            f"SlidingWindowRateLimiter(window_seconds={self._config.window_seconds}, "
            f"max_requests={self._config.max_requests}, size={len(self._tracker)}, "
            f"closed={self._closed})"
        )

    @property
    def config(self) -> WindowConfig:
        return self._config

    @property
    def tick_seconds(self) -> float:
        return self._scheduler.interval_seconds

    def admit(self, cancel_event: threading.Event | None = None) -> None:
        """Block until the window has room, then record one admission.

        Args:
            cancel_event: Optional event; once set, a blocked caller gives up
                within one poll interval.

        Raises:
            AdmissionCancelledError: If ``cancel_event`` was set or the
                limiter was closed before a slot was obtained.
        """

        started = time.perf_counter()
        blocked = False

        with self._condition:
            self._waiting += 1
            try:
                while True:
                    if self._closed:
                        raise AdmissionCancelledError(
                            code="limiter_closed",
                            message="Rate limiter has been shut down",
                        )
                    if cancel_event is not None and cancel_event.is_set():
                        raise AdmissionCancelledError(
                            code="admission_cancelled",
                            message="Waiting for a rate limit slot was cancelled",
                        )
                    if self._tracker.current_size() < self._config.max_requests:
                        self._tracker.record_admission(self._clock())
                        self._admitted_total += 1
                        in_window = self._tracker.current_size()
                        break

                    blocked = True
                    self._condition.wait(timeout=self._poll_interval)
            finally:
                self._waiting -= 1

        logger.debug(
            "rate_limit.admitted",
            extra={
                "limit": self._config.max_requests,
                "in_window": in_window,
                "blocked": blocked,
                "wait_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )

    def evict_expired(self) -> int:
        """Remove timestamps older than the window and wake blocked callers.

        This is the eviction scheduler's task; it may also be called directly.

        Returns:
            Number of timestamps removed.
        """

        with self._condition:
            removed = self._tracker.evict_expired(self._clock(), self._config.window_seconds)
            if removed:
                self._evicted_total += removed
                self._condition.notify_all()
            in_window = self._tracker.current_size()

        if removed:
            logger.debug(
                "rate_limit.evicted",
                extra={"removed": removed, "in_window": in_window},
            )
        return removed

    def current_size(self) -> int:
        with self._condition:
            return self._tracker.current_size()

    def stats(self) -> RateLimitStats:
        with self._condition:
            in_window = self._tracker.current_size()
            return RateLimitStats(
                limit=self._config.max_requests,
                window_seconds=self._config.window_seconds,
                in_window=in_window,
                available=0 if self._closed else max(0, self._config.max_requests - in_window),
                admitted_total=self._admitted_total,
                evicted_total=self._evicted_total,
                waiting=self._waiting,
                closed=self._closed,
            )

    def close(self) -> None:
        """Stop the eviction scheduler and cancel every blocked caller.

        Idempotent. Admissions attempted after close fail with
        AdmissionCancelledError.
        """

        with self._condition:
            already_closed = self._closed
            self._closed = True
            self._condition.notify_all()

        # Join outside the lock: the scheduler may be waiting to acquire it.
        self._scheduler.stop()

        if not already_closed:
            logger.info(
                "rate_limit.closed",
                extra={
                    "admitted_total": self._admitted_total,
                    "evicted_total": self._evicted_total,
                },
            )

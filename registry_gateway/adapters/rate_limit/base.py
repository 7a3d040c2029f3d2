"""Rate limiter interfaces.

The document service depends on this abstraction (not the concrete
implementation) so the admission strategy can be swapped without touching
the submission path.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class WindowConfig:
    """Immutable sliding-window configuration.

    Attributes:
        window_seconds: Length of the rolling window in seconds.
        max_requests: Maximum admissions within any rolling window.
    """

    window_seconds: float
    max_requests: int

    def __post_init__(self) -> None:
        if isinstance(self.max_requests, bool) or not isinstance(self.max_requests, int):
            raise ValueError("max_requests must be an integer")
        if self.max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        if self.window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")


@dataclass(frozen=True)
class RateLimitStats:
    """Point-in-time snapshot of a limiter's accounting.

    Attributes:
        limit: Max admissions per window.
        window_seconds: Rolling window length.
        in_window: Timestamps currently tracked.
        available: Admissions possible right now without blocking.
        admitted_total: Admissions since construction.
        evicted_total: Timestamps evicted since construction.
        waiting: Callers currently blocked in admit().
        closed: Whether the limiter has been shut down.
    """

    limit: int
    window_seconds: float
    in_window: int
    available: int
    admitted_total: int
    evicted_total: int
    waiting: int
    closed: bool


class AbstractRateLimiter(ABC):
    """Interface for blocking rate limiters."""

    @abstractmethod
    def admit(self, cancel_event: threading.Event | None = None) -> None:
        """Block until an admission slot is available, then take it.

        Args:
            cancel_event: Optional event; setting it unblocks the caller.

        Raises:
            AdmissionCancelledError: If the wait was cancelled or the limiter
                was closed.
        """
        raise NotImplementedError

    @abstractmethod
    def stats(self) -> RateLimitStats:
        """Return a snapshot of the limiter's accounting."""
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Release background resources and cancel blocked callers."""
        raise NotImplementedError

    def __enter__(self) -> "AbstractRateLimiter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

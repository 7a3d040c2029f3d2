"""Bookkeeping of recent admission timestamps."""

from __future__ import annotations


class WindowTracker:
    """Multiset of admission timestamps for one sliding window.

    Not thread-safe on its own: the owning limiter serializes every call
    under its lock.
    """

    def __init__(self) -> None:
        self._timestamps: list[float] = []

    def __len__(self) -> int:
        return len(self._timestamps)

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return f"WindowTracker(size={len(self._timestamps)})"

    def record_admission(self, now: float) -> None:
        self._timestamps.append(now)

    def evict_expired(self, now: float, window_seconds: float) -> int:
        """Drop every timestamp that is at least one window old.

        Args:
            now: Current clock reading.
            window_seconds: Window length, in the clock's unit.

        Returns:
            Number of timestamps removed.
        """

        kept = [t for t in self._timestamps if now - t < window_seconds]
        removed = len(self._timestamps) - len(kept)
        if removed:
            self._timestamps = kept
        return removed

    def current_size(self) -> int:
        return len(self._timestamps)

"""Background thread that runs a prune task on a fixed cadence."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

logger = logging.getLogger(__name__)


class EvictionScheduler:
    """Run ``task`` once per ``interval_seconds``, starting one interval in.

    Ticks are scheduled at a fixed rate: a slow task run shortens the next
    sleep instead of shifting every later tick. If a run overshoots a whole
    interval the missed ticks are skipped, not replayed.
    """

    def __init__(
        self,
        task: Callable[[], object],
        *,
        interval_seconds: float,
        name: str = "rate-limit-eviction",
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")

        self._task = task
        self._interval = interval_seconds
        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._thread.is_alive() and not self._stop_event.is_set()

    def start(self) -> None:
        self._thread.start()
        logger.debug(
            "rate_limit.scheduler_started",
            extra={"thread": self._thread.name, "interval_s": self._interval},
        )

    def stop(self, timeout: float | None = 5.0) -> None:
        """Signal the thread to exit and wait for it.

        Safe to call more than once, and from the scheduler thread itself.
        """

        self._stop_event.set()
        if self._thread.is_alive() and threading.current_thread() is not self._thread:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning(
                    "rate_limit.scheduler_stop_timeout",
                    extra={"thread": self._thread.name, "timeout_s": timeout},
                )

    def _run(self) -> None:
        next_run = time.monotonic() + self._interval
        while not self._stop_event.wait(max(0.0, next_run - time.monotonic())):
            try:
                self._task()
            except Exception:
                logger.exception("rate_limit.eviction_failed")

            next_run += self._interval
            now = time.monotonic()
            if next_run < now:
                # Overran: realign on the grid instead of firing a burst.
                missed = int((now - next_run) // self._interval) + 1
                next_run += missed * self._interval

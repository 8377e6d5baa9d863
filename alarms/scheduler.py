from __future__ import annotations

import logging
import time
from threading import TIMEOUT_MAX, Event, Thread
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ScheduledTask:
    """Cancel token for a deferred or periodic callback running on its own thread."""

    def __init__(self, callback: Callable[[], None], delay: float, repeat: bool, name: str):
        self.callback = callback
        self.delay = min(max(0.0, delay), TIMEOUT_MAX)
        self.repeat = repeat
        self._cancelled = Event()
        self._thread = Thread(target=self._run, name=name, daemon=True)

    def start(self) -> "ScheduledTask":
        self._thread.start()
        return self

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread.is_alive():
            self._thread.join(timeout=timeout)

    def _run(self) -> None:
        # Deadlines advance by a fixed step so repeats do not drift by the callback run time.
        next_due = time.monotonic() + self.delay
        while not self._cancelled.wait(max(0.0, next_due - time.monotonic())):
            try:
                self.callback()
            except Exception:
                logger.error("Scheduled callback %s failed", self.callback, exc_info=True)
            if not self.repeat:
                break
            next_due += self.delay


class ThreadScheduler:
    def schedule_repeating(self, interval: float, callback: Callable[[], None], name: str = "alarm-tick") -> ScheduledTask:
        return ScheduledTask(callback, interval, repeat=True, name=name).start()

    def schedule_once(self, delay: float, callback: Callable[[], None], name: str = "alarm-timeout") -> ScheduledTask:
        return ScheduledTask(callback, delay, repeat=False, name=name).start()

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from threading import Lock
from typing import Callable, Optional, Protocol, Union

from .display import DisplaySurface
from .parser import InvalidInput, TimeUnit, parse_duration, to_seconds
from .scheduler import ThreadScheduler

logger = logging.getLogger(__name__)

COMPLETE_STATUS = "Alarm complete. Set a new one:"


class AlarmState(Enum):
    IDLE = "idle"
    ARMED = "armed"


@dataclass
class Alarm:
    total_seconds: int
    remaining_seconds: int
    value: int
    unit: TimeUnit
    armed: bool = True


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule_repeating(self, interval: float, callback: Callable[[], None]) -> Cancellable: ...

    def schedule_once(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class AlarmController:
    """Owns the single countdown alarm and its tick and timeout activities.

    Every mutation of the alarm and every report to the display happens under
    one lock, tagged with the generation that scheduled it. Re-arming or
    cancelling bumps the generation, so activities of a superseded alarm that
    are already running can no longer report anything.

    The tick and timeout activities are independent schedules; the final
    ``00:00`` tick may reach the display before or after the completion
    report.
    """

    def __init__(
        self,
        display: DisplaySurface,
        notify: Callable[[str], None],
        sound_resource: str,
        scheduler: Optional[Scheduler] = None,
        tick_interval: float = 1.0,
    ):
        self.display = display
        self.notify = notify
        self.sound_resource = sound_resource
        self.scheduler = scheduler or ThreadScheduler()
        self.tick_interval = tick_interval

        self._lock = Lock()
        self._alarm: Optional[Alarm] = None
        self._generation = 0
        self._tick_task: Optional[Cancellable] = None
        self._timeout_task: Optional[Cancellable] = None
        self._closed = False

    def set_alarm(self, raw_value: str, unit: Union[TimeUnit, str]) -> Optional[Alarm]:
        """Arm a new alarm, replacing any current one.

        Returns a snapshot of the armed alarm, or ``None`` when the input was
        rejected. A rejected input still cancels the previous alarm.
        """

        with self._lock:
            if self._closed:
                raise RuntimeError("AlarmController has been shut down")
            superseded = self._teardown_locked()
            if superseded:
                logger.info("Superseding alarm with %ss left", superseded.remaining_seconds)
            try:
                value = parse_duration(raw_value)
                unit = TimeUnit.from_label(unit)
            except InvalidInput as exc:
                logger.warning("Rejected alarm input %r: %s", raw_value, exc)
                self.display.report_status(str(exc))
                return None

            total = to_seconds(value, unit)
            alarm = Alarm(total_seconds=total, remaining_seconds=total, value=value, unit=unit)
            self._alarm = alarm
            generation = self._generation
            self.display.report_countdown(alarm.remaining_seconds)

            self._tick_task = self.scheduler.schedule_repeating(
                self.tick_interval, lambda: self._tick(generation)
            )
            self._timeout_task = self.scheduler.schedule_once(
                total * self.tick_interval, lambda: self._expire(generation)
            )
            self.display.report_status(f"Alarm set for {value} {unit.value.lower()}.")
            logger.info("Alarm armed for %s %s (%ss)", value, unit.value.lower(), total)
            return replace(alarm)

    def cancel(self) -> bool:
        """Disarm the current alarm. Returns False when nothing was armed."""

        with self._lock:
            cancelled = self._teardown_locked()
        if cancelled:
            logger.info("Alarm cancelled with %ss left", cancelled.remaining_seconds)
        return cancelled is not None

    def shutdown(self) -> None:
        with self._lock:
            self._teardown_locked()
            self._closed = True

    def snapshot(self) -> Optional[Alarm]:
        with self._lock:
            return replace(self._alarm) if self._alarm else None

    @property
    def armed(self) -> bool:
        with self._lock:
            return self._alarm is not None and self._alarm.armed

    @property
    def state(self) -> AlarmState:
        return AlarmState.ARMED if self.armed else AlarmState.IDLE

    def _teardown_locked(self) -> Optional[Alarm]:
        self._generation += 1
        for task in (self._tick_task, self._timeout_task):
            if task is not None:
                task.cancel()
        self._tick_task = None
        self._timeout_task = None
        previous = self._alarm if self._alarm and self._alarm.armed else None
        if self._alarm is not None:
            self._alarm.armed = False
        self._alarm = None
        return previous

    def _tick(self, generation: int) -> None:
        with self._lock:
            alarm = self._alarm
            if generation != self._generation or alarm is None:
                return
            if alarm.remaining_seconds <= 0:
                self._stop_ticking_locked()
                return
            alarm.remaining_seconds -= 1
            self.display.report_countdown(alarm.remaining_seconds)
            if alarm.remaining_seconds <= 0:
                self._stop_ticking_locked()

    def _stop_ticking_locked(self) -> None:
        if self._tick_task is not None:
            self._tick_task.cancel()
            self._tick_task = None

    def _expire(self, generation: int) -> None:
        with self._lock:
            alarm = self._alarm
            if generation != self._generation or alarm is None or not alarm.armed:
                return
            self._timeout_task = None
            logger.info("Alarm expired after %ss", alarm.total_seconds)

        # Unlocked: set_alarm and cancel never wait on playback setup.
        try:
            self.notify(self.sound_resource)
        except Exception:
            logger.error("Alarm notifier failed", exc_info=True)

        with self._lock:
            if generation != self._generation or self._alarm is not alarm:
                logger.info("Alarm superseded while its sound was starting")
                return
            self.display.report_completion()
            self.display.report_status(COMPLETE_STATUS)
            alarm.armed = False

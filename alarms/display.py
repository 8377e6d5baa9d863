from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from queue import Empty, Queue
from typing import Callable, Optional, Protocol

from .parser import format_countdown


class DisplaySurface(Protocol):
    def report_status(self, text: str) -> None: ...

    def report_countdown(self, remaining_seconds: int) -> None: ...

    def report_completion(self) -> None: ...


class EventKind(Enum):
    STATUS = "status"
    COUNTDOWN = "countdown"
    COMPLETION = "completion"


@dataclass(frozen=True)
class DisplayEvent:
    kind: EventKind
    text: str = ""
    remaining_seconds: Optional[int] = None


class QueueDisplay:
    """Display surface that hands reports to the presentation thread.

    Any thread may report; exactly one consumer calls :meth:`drain`.
    """

    def __init__(self) -> None:
        self._events: "Queue[DisplayEvent]" = Queue()

    def report_status(self, text: str) -> None:
        self._events.put(DisplayEvent(EventKind.STATUS, text=text))

    def report_countdown(self, remaining_seconds: int) -> None:
        self._events.put(
            DisplayEvent(
                EventKind.COUNTDOWN,
                text=format_countdown(remaining_seconds),
                remaining_seconds=remaining_seconds,
            )
        )

    def report_completion(self) -> None:
        self._events.put(DisplayEvent(EventKind.COMPLETION, text="Time's up!"))

    def drain(self, handler: Callable[[DisplayEvent], None], limit: Optional[int] = None) -> int:
        handled = 0
        while limit is None or handled < limit:
            try:
                event = self._events.get_nowait()
            except Empty:
                break
            handler(event)
            handled += 1
        return handled

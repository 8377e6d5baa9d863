from typing import Callable, List

import pytest

from alarms.display import DisplayEvent, EventKind, QueueDisplay


class FakeTask:
    def __init__(self, seq: int, callback: Callable[[], None], due: float, interval: float, repeat: bool):
        self.seq = seq
        self.callback = callback
        self.due = due
        self.interval = interval
        self.repeat = repeat
        self.cancelled = False
        self.cancel_calls = 0

    def cancel(self) -> None:
        self.cancel_calls += 1
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by an explicit clock instead of threads."""

    def __init__(self) -> None:
        self.now = 0.0
        self.tasks: List[FakeTask] = []

    def schedule_repeating(self, interval, callback):
        return self._add(callback, interval, repeat=True)

    def schedule_once(self, delay, callback):
        return self._add(callback, delay, repeat=False)

    def _add(self, callback, delay, repeat):
        task = FakeTask(len(self.tasks), callback, self.now + delay, delay, repeat)
        self.tasks.append(task)
        return task

    @property
    def live_tasks(self) -> List[FakeTask]:
        return [t for t in self.tasks if not t.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.live_tasks if t.due <= target + 1e-9]
            if not due:
                break
            task = min(due, key=lambda t: (t.due, t.seq))
            self.now = task.due
            if task.repeat:
                task.due += task.interval
            else:
                task.cancelled = True
            task.callback()
        self.now = target


class RecordingDisplay(QueueDisplay):
    def __init__(self) -> None:
        super().__init__()
        self.events: List[DisplayEvent] = []

    def collect(self) -> List[DisplayEvent]:
        self.drain(self.events.append)
        return self.events

    def texts(self, kind: EventKind) -> List[str]:
        return [e.text for e in self.collect() if e.kind is kind]

    def clear(self) -> None:
        self.collect()
        self.events.clear()


class NotifySpy:
    def __init__(self) -> None:
        self.calls: List[str] = []

    def __call__(self, resource_id: str) -> None:
        self.calls.append(resource_id)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture
def notify() -> NotifySpy:
    return NotifySpy()

import pytest

pytest.importorskip("tkinter")

import alarm_gui  # noqa: E402
from alarm_gui import IDLE_COUNTDOWN, AlarmWindow  # noqa: E402
from alarms.controller import COMPLETE_STATUS  # noqa: E402
from alarms.display import QueueDisplay  # noqa: E402


class FakeVar:
    def __init__(self, value=""):
        self.value = value

    def set(self, value):
        self.value = value

    def get(self):
        return self.value


def _window(display):
    # Skips Tk widget construction; event handling only touches the variables.
    window = AlarmWindow.__new__(AlarmWindow)
    window.master = None
    window.display = display
    window._alerting = False
    window._schedule_poll = lambda: None
    window.status_var = FakeVar("Alarm set for 5 seconds.")
    window.countdown_var = FakeVar("Countdown: 00:00")
    return window


def test_popup_shows_before_labels_reset(monkeypatch):
    display = QueueDisplay()
    window = _window(display)
    seen = []

    def showwarning(title, message, parent=None):
        # Tk keeps running after() callbacks while the popup is open.
        window._poll()
        seen.append((title, message, window.countdown_var.get(), window.status_var.get()))

    monkeypatch.setattr(alarm_gui.messagebox, "showwarning", showwarning)
    display.report_completion()
    display.report_status(COMPLETE_STATUS)

    window._poll()

    assert seen == [("ALARM ALERT!", "Time's up!", "Countdown: 00:00", "Alarm set for 5 seconds.")]
    assert window.countdown_var.get() == f"Countdown: {IDLE_COUNTDOWN}"
    assert window.status_var.get() == COMPLETE_STATUS
    assert window._alerting is False

"""Countdown alarm core: controller, notifier and display channel."""

from .controller import Alarm, AlarmController, AlarmState
from .display import DisplayEvent, EventKind, QueueDisplay
from .notifier import FailureKind, Notifier
from .parser import InvalidInput, TimeUnit, format_countdown, parse_duration

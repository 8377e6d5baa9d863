from __future__ import annotations

from enum import Enum
from typing import Union


class TimeUnit(Enum):
    SECONDS = "Seconds"
    MINUTES = "Minutes"

    @property
    def factor(self) -> int:
        return 1 if self is TimeUnit.SECONDS else 60

    @classmethod
    def from_label(cls, label: Union[str, "TimeUnit"]) -> "TimeUnit":
        if isinstance(label, TimeUnit):
            return label
        cleaned = (label or "").strip().lower()
        for unit in cls:
            if unit.value.lower() == cleaned:
                return unit
        raise ValueError(f"Unknown time unit: {label!r}")


class InvalidInput(ValueError):
    """Duration text that cannot arm an alarm."""


NOT_A_NUMBER = "Invalid input. Please enter a number."
NOT_POSITIVE = "Please enter a positive number."

# Accepted range matches a 32-bit signed integer.
MIN_VALUE = -(2**31)
MAX_VALUE = 2**31 - 1


def parse_duration(raw_value: str) -> int:
    """Parse user-entered duration text into a positive integer."""

    cleaned = (raw_value or "").strip()
    # int() also accepts "1_000" and non-ASCII digits; only an optional sign and ASCII digits are a duration here.
    body = cleaned[1:] if cleaned[:1] in ("+", "-") else cleaned
    if not body.isascii() or not body.isdigit():
        raise InvalidInput(NOT_A_NUMBER)
    value = int(cleaned)
    if not MIN_VALUE <= value <= MAX_VALUE:
        raise InvalidInput(NOT_A_NUMBER)
    if value <= 0:
        raise InvalidInput(NOT_POSITIVE)
    return value


def to_seconds(value: int, unit: TimeUnit) -> int:
    return value * unit.factor


def format_countdown(seconds: int) -> str:
    seconds = max(0, seconds)
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"

from __future__ import annotations

import logging
import wave
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Protocol

from .sounds import Clip, load_clip, system_beep

logger = logging.getLogger(__name__)


class FailureKind(Enum):
    RESOURCE_NOT_FOUND = "ResourceNotFound"
    UNSUPPORTED_FORMAT = "UnsupportedFormat"
    DEVICE_UNAVAILABLE = "DeviceUnavailable"
    IO_FAILURE = "IOFailure"


class NotifierError(Exception):
    kind: FailureKind

    def __init__(self, resource_id: str, detail: str = ""):
        self.resource_id = resource_id
        self.detail = detail
        super().__init__(f"{self.kind.value}: {resource_id}" + (f" ({detail})" if detail else ""))


class ResourceNotFound(NotifierError):
    kind = FailureKind.RESOURCE_NOT_FOUND


class UnsupportedFormat(NotifierError):
    kind = FailureKind.UNSUPPORTED_FORMAT


class DeviceUnavailable(NotifierError):
    kind = FailureKind.DEVICE_UNAVAILABLE


class IOFailure(NotifierError):
    kind = FailureKind.IO_FAILURE


class ClipSink(Protocol):
    def play(self, clip: Clip) -> None: ...


class Notifier:
    """Plays the alarm sound once, falling back to a system beep on any failure."""

    def __init__(
        self,
        player: Optional[ClipSink],
        volume: float = 1.0,
        beep: Callable[[], None] = system_beep,
    ):
        self.player = player
        self.volume = volume
        self.beep = beep

    def notify(self, resource_id: str) -> None:
        try:
            clip = self._load(resource_id)
            self._start(resource_id, clip)
        except NotifierError as exc:
            logger.warning(
                "Alarm sound failed (%s), using system beep: %s",
                exc.kind.value,
                exc,
                extra={"failure_kind": exc.kind.value},
            )
            self.beep()
            return
        logger.info("Playing alarm sound %s (%.1fs)", resource_id, clip.duration_seconds)

    def _load(self, resource_id: str) -> Clip:
        path = Path(resource_id)
        try:
            return load_clip(path, volume=self.volume)
        except FileNotFoundError as exc:
            raise ResourceNotFound(resource_id) from exc
        except (wave.Error, EOFError) as exc:
            raise UnsupportedFormat(resource_id, str(exc)) from exc
        except OSError as exc:
            raise IOFailure(resource_id, str(exc)) from exc

    def _start(self, resource_id: str, clip: Clip) -> None:
        if self.player is None:
            raise DeviceUnavailable(resource_id, "no output device")
        try:
            self.player.play(clip)
        except OSError as exc:
            raise DeviceUnavailable(resource_id, str(exc)) from exc

import logging
from dataclasses import dataclass
from threading import Lock, Thread
from typing import List, Optional

import pyaudio

from alarms.sounds import Clip

logger = logging.getLogger(__name__)


def create_pyaudio() -> pyaudio.PyAudio:
    pa = pyaudio.PyAudio()
    return pa


@dataclass
class OutputDeviceInfo:
    index: int
    name: str
    rate: int
    channels: int


def list_output_devices(pa: pyaudio.PyAudio) -> List[OutputDeviceInfo]:
    devices: List[OutputDeviceInfo] = []
    for i in range(pa.get_device_count()):
        info = pa.get_device_info_by_index(i)
        channels = int(info.get("maxOutputChannels", 0))
        if channels > 0:
            devices.append(
                OutputDeviceInfo(
                    index=i,
                    name=info.get("name", "unknown"),
                    rate=int(info.get("defaultSampleRate", 44100)),
                    channels=channels,
                )
            )
    return devices


def get_output_device(pa: pyaudio.PyAudio, device_index: Optional[int]) -> OutputDeviceInfo:
    if device_index is None:
        device_index = int(pa.get_default_output_device_info()["index"])
    info = pa.get_device_info_by_index(device_index)
    rate = int(info.get("defaultSampleRate", 44100))
    channels = int(info.get("maxOutputChannels", 1)) or 1
    logger.info("Selected output device %s: %s (rate=%s, channels=%s)", device_index, info.get("name"), rate, channels)
    return OutputDeviceInfo(index=device_index, name=info.get("name", "unknown"), rate=rate, channels=channels)


class ClipPlayer:
    """Plays decoded clips on a PyAudio output device without blocking the caller.

    Opening the stream happens synchronously so a busy or missing device
    surfaces as ``OSError`` to the caller; the frames are written by a
    daemon thread.
    """

    def __init__(self, pa: pyaudio.PyAudio, device_index: Optional[int] = None, frames_per_buffer: int = 1024):
        self.pa = pa
        self.device_index = device_index
        self.frames_per_buffer = frames_per_buffer
        self._lock = Lock()
        self._active: List[Thread] = []

    def play(self, clip: Clip) -> None:
        stream = self.pa.open(
            format=pyaudio.paInt16,
            channels=clip.channels,
            rate=clip.rate,
            output=True,
            output_device_index=self.device_index,
            frames_per_buffer=self.frames_per_buffer,
        )
        worker = Thread(target=self._write, args=(stream, clip.to_bytes()), name="alarm-playback", daemon=True)
        with self._lock:
            self._active = [t for t in self._active if t.is_alive()]
            self._active.append(worker)
        worker.start()

    def wait(self, timeout: Optional[float] = None) -> None:
        with self._lock:
            active = list(self._active)
        for worker in active:
            worker.join(timeout=timeout)

    def _write(self, stream, audio_bytes: bytes) -> None:
        chunk = self.frames_per_buffer * 2
        try:
            for start in range(0, len(audio_bytes), chunk):
                stream.write(audio_bytes[start : start + chunk])
        except OSError as exc:
            logger.warning("Alarm playback interrupted: %s", exc)
        finally:
            stream.stop_stream()
            stream.close()

from __future__ import annotations

import logging
import sys
import wave
from dataclasses import dataclass
from pathlib import Path

import numpy as np

try:
    import winsound
except ImportError:  # pragma: no cover - non-Windows fallback
    winsound = None  # type: ignore

logger = logging.getLogger(__name__)

_SAMPLE_DTYPES = {1: np.uint8, 2: np.int16, 4: np.int32}


@dataclass
class Clip:
    samples: np.ndarray  # int16, interleaved
    rate: int
    channels: int

    @property
    def duration_seconds(self) -> float:
        frames = len(self.samples) // max(1, self.channels)
        return frames / self.rate if self.rate else 0.0

    def to_bytes(self) -> bytes:
        return self.samples.astype(np.int16).tobytes()


def load_clip(path: Path, volume: float = 1.0) -> Clip:
    """Decode a PCM WAV file into 16-bit samples.

    Raises FileNotFoundError, OSError, EOFError or wave.Error; the caller
    decides how each one is reported.
    """

    if not path.is_file():
        raise FileNotFoundError(str(path))
    with wave.open(str(path), "rb") as wav:
        width = wav.getsampwidth()
        channels = wav.getnchannels()
        rate = wav.getframerate()
        raw = wav.readframes(wav.getnframes())
    dtype = _SAMPLE_DTYPES.get(width)
    if dtype is None:
        raise wave.Error(f"unsupported sample width: {width * 8} bits")
    if not raw:
        raise EOFError(f"no audio frames in {path}")

    samples = np.frombuffer(raw, dtype=dtype).astype(np.float64)
    if width == 1:
        samples = (samples - 128.0) * 256.0
    elif width == 4:
        samples = samples / 65536.0
    gain = min(max(volume, 0.0), 1.0)
    samples = np.clip(samples * gain, -32768, 32767).astype(np.int16)
    return Clip(samples=samples, rate=rate, channels=channels)


def ensure_alarm_sound(path: Path, duration_seconds: float = 1.5) -> None:
    if path.exists():
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    sample_rate = 24000
    freq = 880.0
    amplitude = 0.4
    t = np.arange(int(duration_seconds * sample_rate)) / sample_rate
    tone = (32767 * amplitude * np.sin(2 * np.pi * freq * t)).astype("<i2")
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(sample_rate)
        wav.writeframes(tone.tobytes())
    logger.info("Generated default alarm sound at %s", path)


def system_beep() -> None:
    if winsound:
        try:
            winsound.MessageBeep(winsound.MB_ICONEXCLAMATION)
            return
        except RuntimeError:
            logger.debug("winsound.MessageBeep failed, falling back to terminal bell")
    try:
        sys.stdout.write("\a")
        sys.stdout.flush()
    except (AttributeError, OSError, ValueError):
        logger.debug("Terminal bell unavailable")
    logger.info("Beep")

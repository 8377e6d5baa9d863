import logging
import logging.handlers
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from alarms.parser import TimeUnit


def _get_env_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip() in {"1", "true", "True", "yes", "YES", "y"}


def _get_env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    try:
        return int(val)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer") from exc


def _get_env_float(name: str, default: float) -> float:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    try:
        return float(val)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be a float") from exc


@dataclass(frozen=True)
class Config:
    alarm_sound_path: Path
    alarm_volume: float
    generate_alarm_sound: bool
    output_device_index: Optional[int]
    default_time_unit: TimeUnit
    tick_interval_ms: int
    debug: bool
    log_level: str

    @property
    def tick_interval(self) -> float:
        return self.tick_interval_ms / 1000.0


def load_config(env_path: Optional[Path] = None) -> Config:
    if env_path is None:
        env_path = Path(".env")
    if env_path.exists():
        load_dotenv(env_path)

    alarm_sound_path = Path(os.getenv("ALARM_SOUND_PATH") or "sound/alarm.wav")
    alarm_volume = min(max(_get_env_float("ALARM_VOLUME", 1.0), 0.0), 1.0)
    generate_alarm_sound = _get_env_bool("ALARM_GENERATE_SOUND", False)
    output_device_env = os.getenv("OUTPUT_DEVICE_INDEX")
    output_device_index = _get_env_int("OUTPUT_DEVICE_INDEX", 0) if output_device_env else None
    try:
        default_time_unit = TimeUnit.from_label(os.getenv("DEFAULT_TIME_UNIT") or TimeUnit.MINUTES.value)
    except ValueError as exc:
        raise ValueError("Environment variable DEFAULT_TIME_UNIT must be Seconds or Minutes") from exc
    tick_interval_ms = _get_env_int("TICK_INTERVAL_MS", 1000)
    if tick_interval_ms <= 0:
        raise ValueError("Environment variable TICK_INTERVAL_MS must be positive")
    debug = _get_env_bool("DEBUG", False)
    log_level = "DEBUG" if debug else os.getenv("LOG_LEVEL", "INFO").upper()

    return Config(
        alarm_sound_path=alarm_sound_path,
        alarm_volume=alarm_volume,
        generate_alarm_sound=generate_alarm_sound,
        output_device_index=output_device_index,
        default_time_unit=default_time_unit,
        tick_interval_ms=tick_interval_ms,
        debug=debug,
        log_level=log_level,
    )


def setup_logging(log_level: str = "INFO", logs_dir: Path = Path("logs")) -> None:
    logs_dir.mkdir(parents=True, exist_ok=True)

    log_path = logs_dir / "alarm_clock.log"
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        handlers=[file_handler, console_handler],
    )

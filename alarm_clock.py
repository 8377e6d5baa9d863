import logging
import tkinter as tk

from alarm_gui import AlarmWindow
from audio_io import ClipPlayer, create_pyaudio, get_output_device
from alarms import AlarmController, Notifier, QueueDisplay
from alarms.sounds import ensure_alarm_sound
from config import Config, load_config, setup_logging

logger = logging.getLogger("alarm_clock")


def build_player(config: Config):
    """Open PyAudio for playback; ``None`` leaves the notifier on the beep fallback."""

    pa = create_pyaudio()
    try:
        device = get_output_device(pa, config.output_device_index)
    except OSError as exc:
        logger.error("Audio output error: %s. Try another OUTPUT_DEVICE_INDEX.", exc)
        pa.terminate()
        return None, None
    return pa, ClipPlayer(pa, device_index=device.index)


def main() -> None:
    config = load_config()
    setup_logging(config.log_level)
    logger.info("Starting alarm clock")

    if config.generate_alarm_sound:
        ensure_alarm_sound(config.alarm_sound_path)
    elif not config.alarm_sound_path.exists():
        logger.warning("ALARM_SOUND_PATH does not exist, alarms will use the system beep: %s", config.alarm_sound_path)

    pa, player = build_player(config)
    notifier = Notifier(player, volume=config.alarm_volume)
    display = QueueDisplay()
    controller = AlarmController(
        display=display,
        notify=notifier.notify,
        sound_resource=str(config.alarm_sound_path),
        tick_interval=config.tick_interval,
    )

    try:
        root = tk.Tk()
        window = AlarmWindow(root, controller, display, default_unit=config.default_time_unit)
        window.run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        controller.shutdown()
        if pa is not None:
            pa.terminate()
        logger.info("Alarm clock stopped")


if __name__ == "__main__":
    main()

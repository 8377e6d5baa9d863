import logging

from alarm_clock import build_player
from alarms import Notifier
from config import load_config, setup_logging


def main():
    config = load_config()
    setup_logging(config.log_level)
    pa, player = build_player(config)
    notifier = Notifier(player, volume=config.alarm_volume)
    print(f"Playing {config.alarm_sound_path} ...")
    notifier.notify(str(config.alarm_sound_path))
    if player is not None:
        player.wait(timeout=30)
    if pa is not None:
        pa.terminate()
    logging.shutdown()


if __name__ == "__main__":
    main()

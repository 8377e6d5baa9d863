from audio_io import create_pyaudio, list_output_devices


def main():
    pa = create_pyaudio()
    try:
        default_index = int(pa.get_default_output_device_info()["index"])
    except OSError:
        default_index = None

    print("\n=== OUTPUT DEVICES (Speakers) ===\n")
    for device in list_output_devices(pa):
        marker = "*" if device.index == default_index else " "
        print(
            f"[OUT{marker}] Index {device.index}: {device.name} | "
            f"rate={device.rate} | "
            f"channels={device.channels}"
        )
    pa.terminate()


if __name__ == "__main__":
    main()

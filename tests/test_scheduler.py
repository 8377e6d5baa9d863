import threading
import time

from alarms.scheduler import ThreadScheduler


def test_once_fires_a_single_time():
    calls = []
    fired = threading.Event()

    def callback():
        calls.append(1)
        fired.set()

    task = ThreadScheduler().schedule_once(0.01, callback)

    assert fired.wait(timeout=2)
    task.join(timeout=2)
    assert calls == [1]


def test_cancel_before_firing_prevents_callback():
    calls = []
    task = ThreadScheduler().schedule_once(5, lambda: calls.append(1))

    task.cancel()
    task.join(timeout=2)

    assert task.cancelled
    assert calls == []


def test_repeating_runs_until_cancelled():
    ticks = []
    enough = threading.Event()

    def tick():
        ticks.append(1)
        if len(ticks) >= 3:
            enough.set()

    task = ThreadScheduler().schedule_repeating(0.01, tick)

    assert enough.wait(timeout=2)
    task.cancel()
    task.cancel()
    task.join(timeout=2)
    count = len(ticks)
    assert count >= 3
    time.sleep(0.05)
    assert len(ticks) == count


def test_failing_callback_is_logged(caplog):
    done = threading.Event()

    def boom():
        done.set()
        raise RuntimeError("boom")

    task = ThreadScheduler().schedule_once(0.01, boom)

    assert done.wait(timeout=2)
    task.join(timeout=2)
    assert "Scheduled callback" in caplog.text


def test_huge_delay_is_capped():
    task = ThreadScheduler().schedule_once(1e30, lambda: None)

    assert task.delay == threading.TIMEOUT_MAX
    task.cancel()
    task.join(timeout=2)
    assert task.cancelled


def test_repeating_keeps_cadence_despite_slow_callback():
    stamps = []
    enough = threading.Event()

    def slow_tick():
        stamps.append(time.monotonic())
        time.sleep(0.04)
        if len(stamps) >= 5:
            enough.set()

    task = ThreadScheduler().schedule_repeating(0.05, slow_tick)
    assert enough.wait(timeout=5)
    task.cancel()
    task.join(timeout=2)

    # Four gaps at a fixed 0.05s step; waiting 0.05s after each callback would take 0.36s.
    assert stamps[4] - stamps[0] < 0.3

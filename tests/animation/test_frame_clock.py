import time

import pytest

from ringchart.animation.frame_clock import RealTimeClock, RecordingClock


def test_recording_clock_advances_by_fixed_fps():
    clock = RecordingClock(t0_ms=1000.0, fps=60.0)
    assert clock.fps == 60.0
    assert clock.frame_index == 0
    assert clock.now_ms() == pytest.approx(1000.0)

    clock.tick()
    assert clock.frame_index == 1
    assert clock.now_ms() == pytest.approx(1000.0 + 1000.0 / 60.0)

    for _ in range(59):
        clock.tick()
    assert clock.frame_index == 60
    assert clock.now_ms() == pytest.approx(2000.0)


def test_recording_clock_rejects_non_positive_fps():
    with pytest.raises(ValueError):
        RecordingClock(fps=0.0)


def test_real_time_clock_returns_elapsed_milliseconds():
    start_time = time.perf_counter() - 1.0
    clock = RealTimeClock(start_time=start_time)
    assert 500.0 < clock.now_ms() < 1500.0
    clock.tick()

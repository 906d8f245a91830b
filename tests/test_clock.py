"""Tests for live and recording frame clocks."""

import pytest

from canvas_recorder.clock import LiveClock, RecordingClock


def test_live_clock_measures_time_between_ticks():
    """Live deltas are wall-clock milliseconds since the previous tick."""
    times = iter([1.0, 1.016, 1.050])
    clock = LiveClock(time_source=lambda: next(times))

    deltas = [clock.delta(tick) for tick in range(3)]

    assert deltas[0] == 0.0
    assert deltas[1] == pytest.approx(16.0)
    assert deltas[2] == pytest.approx(34.0)


def test_recording_clock_is_cumulative():
    """Recording delta for tick K is K * 1000 / fps."""
    clock = RecordingClock(fps=10)

    assert [clock.delta(tick) for tick in range(4)] == [0.0, 100.0, 200.0, 300.0]


def test_recording_clock_ignores_call_order():
    """Recording deltas only depend on the tick index."""
    clock = RecordingClock(fps=3)

    assert clock.delta(7) == 7 * (1000 / 3)
    assert clock.delta(2) == 2 * (1000 / 3)


def test_recording_clock_rejects_non_positive_fps():
    with pytest.raises(ValueError):
        RecordingClock(fps=0)

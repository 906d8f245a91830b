"""Frame clocks producing the delta passed to the draw callback.

Live runs report real elapsed time between ticks. Recording runs report a
cumulative timeline derived from the tick index only, so recorded output does
not depend on how fast frames are actually produced.
"""

import time
from typing import Callable

from .constants import MS_PER_SECOND


class LiveClock:
    """Wall-clock frame timer. Delta is milliseconds since the previous tick."""

    def __init__(self, time_source: Callable[[], float] = time.perf_counter):
        """
        Initialize the clock.

        Args:
            time_source: Monotonic clock returning seconds
        """
        self._time_source = time_source
        self._previous: float | None = None

    def delta(self, tick: int) -> float:
        """Return elapsed milliseconds since the last call, 0.0 on the first tick."""
        del tick
        now = self._time_source()
        previous, self._previous = self._previous, now
        if previous is None:
            return 0.0
        return (now - previous) * MS_PER_SECOND


class RecordingClock:
    """Fixed-step frame timeline. Delta for tick K is ``K * 1000 / fps``."""

    def __init__(self, fps: int):
        if fps <= 0:
            raise ValueError("fps must be positive")
        self.fps = fps
        self.frame_step = MS_PER_SECOND / fps

    def delta(self, tick: int) -> float:
        return tick * self.frame_step

"""Tick loop driving the draw callback while a run is active."""

import asyncio
import inspect
import logging
import time
from typing import Any, Callable

from PIL import ImageDraw

from .capture import FrameCapturer
from .clock import LiveClock, RecordingClock
from .config import RecorderConfig
from .surface import Surface

logger = logging.getLogger(__name__)

DrawCallback = Callable[[ImageDraw.ImageDraw, float], Any]


class FrameScheduler:
    """Runs clear -> draw -> capture once per tick until halted or out of frames."""

    def __init__(
        self,
        surface: Surface,
        config: RecorderConfig,
        draw_callback: DrawCallback,
        capturer: FrameCapturer | None = None,
        time_source: Callable[[], float] = time.perf_counter,
    ):
        """
        Initialize scheduler.

        Args:
            surface: Surface passed to the draw callback
            config: Settings of the run being driven
            draw_callback: Called as ``draw_callback(context, delta_ms)``; may return an awaitable
            capturer: Frame capturer, only given when recording
            time_source: Monotonic clock in seconds used for live pacing
        """
        self.surface = surface
        self.config = config
        self.draw_callback = draw_callback
        self.capturer = capturer
        self._time_source = time_source
        self.clock: LiveClock | RecordingClock
        if config.record:
            self.clock = RecordingClock(config.fps)
        else:
            self.clock = LiveClock(time_source)
        self.interval = 1.0 / config.fps
        self.ticks = 0
        self._halted = asyncio.Event()

    @property
    def halted(self) -> bool:
        return self._halted.is_set()

    def halt(self) -> None:
        """Ask the loop to exit after the current tick, waking it if it is waiting."""
        self._halted.set()

    def _frames_left(self) -> bool:
        return not self.config.frames or self.ticks < self.config.frames

    async def run(self) -> int:
        """
        Drive ticks until halted or the frame limit is reached.

        Returns:
            Number of completed ticks

        Raises:
            Exception: Whatever the draw callback raises, unchanged
        """
        next_deadline = self._time_source()
        while not self.halted and self._frames_left():
            await self._tick(self.ticks)
            self.ticks += 1
            if self.halted or not self._frames_left():
                break

            if self.config.record:
                # Deterministic timeline: only yield to the event loop
                await asyncio.sleep(0)
            else:
                next_deadline += self.interval
                now = self._time_source()
                if next_deadline < now:
                    next_deadline = now
                await self._wait(next_deadline - now)
        return self.ticks

    async def _tick(self, index: int) -> None:
        if self.config.clear:
            self.surface.clear(self.config.color)

        delta = self.clock.delta(index)
        logger.debug("Tick %d (delta=%.3fms)", index, delta)
        result = self.draw_callback(self.surface.context, delta)
        if inspect.isawaitable(result):
            await result

        if self.capturer is not None:
            await self.capturer.capture(index)

    async def _wait(self, timeout: float) -> None:
        if timeout <= 0:
            await asyncio.sleep(0)
            return
        try:
            await asyncio.wait_for(self._halted.wait(), timeout)
        except asyncio.TimeoutError:
            pass  # next frame is due

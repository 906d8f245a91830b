"""Recorder session: owns the surface, configuration and the active run."""

import asyncio
import logging
from concurrent.futures import Executor
from typing import Any, Callable

from PIL import ImageDraw

from .capture import FrameCapturer
from .config import CompletionCallback, RecorderConfig
from .errors import ArchiveError, InvalidStateError
from .output import ArchiveBuilder, FrameArchive, frame_name_width, resolve_frame_encoder
from .scheduler import DrawCallback, FrameScheduler
from .state import RunState, RunStateMachine
from .surface import Surface

logger = logging.getLogger(__name__)

StopCallback = Callable[[], Any]


class RecorderSession:
    """
    Drives a draw callback against a surface and optionally records every tick.

    A session moves Idle -> Running -> Stopped; ``reset()`` brings it back to
    Idle with default settings. Configuration and callback registration are
    only accepted while Idle.

    Example:
        session = RecorderSession()
        session.configure(size=(320, 240), fps=30, frames=90)

        @session.register_draw_callback
        def draw(context, delta):
            context.ellipse((10, 10, 50, 50), fill="black")

        archive = session.run_sync()
    """

    def __init__(self, surface: Surface | None = None, executor: Executor | None = None):
        """
        Initialize session with default settings.

        Args:
            surface: Surface to draw on; a new one is created when omitted
            executor: Executor for frame encodes; None uses the event loop default
        """
        self._config = RecorderConfig()
        self.surface = surface or Surface(*self._config.size)
        if self.surface.size != self._config.size:
            self.surface.resize(*self._config.size)
        self.executor = executor
        self._state = RunStateMachine()
        self._draw_callback: DrawCallback | None = None
        self._stop_callbacks: list[StopCallback] = []
        self._scheduler: FrameScheduler | None = None
        self._archive: ArchiveBuilder | None = None
        self._task: asyncio.Task | None = None

    @property
    def config(self) -> RecorderConfig:
        return self._config

    @property
    def state(self) -> RunState:
        return self._state.state

    @property
    def context(self) -> ImageDraw.ImageDraw:
        return self.surface.context

    def configure(self, **options: Any) -> RecorderConfig:
        """
        Merge options over the current configuration.

        Args:
            **options: size, color, clear, record, fps, frames, on_complete, image_format

        Returns:
            The new configuration

        Raises:
            InvalidStateError: If a run has started since the last reset
            InvalidConfigurationError: If an option is unknown or invalid
        """
        self._state.require_idle("configure")
        config = self._config.merged(**options)
        if "size" in options:
            self.surface.resize(*config.size)
        self._config = config
        return config

    def register_draw_callback(self, callback: DrawCallback) -> DrawCallback:
        """Set the function called as ``callback(context, delta_ms)`` every tick."""
        self._state.require_idle("register a draw callback")
        self._draw_callback = callback
        return callback

    def register_completion_callback(self, callback: CompletionCallback) -> CompletionCallback:
        """Set the function receiving the finished archive (same as ``on_complete``)."""
        self.configure(on_complete=callback)
        return callback

    def register_stop_callback(self, callback: StopCallback) -> StopCallback:
        """Add a function called with no arguments whenever a run stops."""
        self._state.require_idle("register a stop callback")
        self._stop_callbacks.append(callback)
        return callback

    def start(self) -> asyncio.Task:
        """
        Start a run on the running event loop.

        Returns:
            Task resolving to the delivered archive, or None when nothing was recorded

        Raises:
            InvalidStateError: If not Idle or no draw callback is registered
            RuntimeError: If called outside a running event loop
        """
        loop = asyncio.get_running_loop()
        self._begin()
        self._task = loop.create_task(self._drive())
        return self._task

    async def run(self) -> FrameArchive | None:
        """Start a run and wait for it to finish. See ``start``."""
        self._begin()
        return await self._drive()

    def run_sync(self) -> FrameArchive | None:
        """Run to completion on a fresh event loop."""
        return asyncio.run(self.run())

    def stop(self) -> None:
        """
        Stop the active run after its current tick.

        Frames already captured are still encoded and delivered.

        Raises:
            InvalidStateError: If no run is active
        """
        self._state.stop()
        logger.info("Run stopped")
        if self._scheduler is not None:
            self._scheduler.halt()

    def reset(self) -> None:
        """Abandon any run without delivering it and restore the defaults."""
        task, self._task = self._task, None
        scheduler, self._scheduler = self._scheduler, None
        archive, self._archive = self._archive, None

        self._state.reset()
        if scheduler is not None:
            scheduler.halt()
        if task is not None and not task.done():
            task.cancel()
        if archive is not None:
            archive.discard()

        self._draw_callback = None
        self._stop_callbacks = []
        self._config = RecorderConfig()
        self.surface.resize(*self._config.size)

    def _begin(self) -> None:
        if self._draw_callback is None:
            raise InvalidStateError("Cannot start without a draw callback")
        self._state.start()

        config = self._config
        if self.surface.size != config.size:
            self.surface.resize(*config.size)

        capturer = None
        self._archive = None
        if config.record:
            encoder = resolve_frame_encoder(config.image_format)
            self._archive = ArchiveBuilder(encoder.extension, frame_name_width(config.frames))
            capturer = FrameCapturer(self.surface, encoder, self._archive, self.executor)
        self._scheduler = FrameScheduler(self.surface, config, self._draw_callback, capturer)
        logger.info(
            "Run started (%dx%d, record=%s, fps=%d, frames=%s)",
            config.width,
            config.height,
            config.record,
            config.fps,
            config.frames or "unbounded",
        )

    async def _drive(self) -> FrameArchive | None:
        scheduler, archive = self._scheduler, self._archive
        assert scheduler is not None

        try:
            ticks = await scheduler.run()
        except asyncio.CancelledError:
            if scheduler is self._scheduler:
                self._abort(scheduler, archive)
            raise
        except Exception:
            if scheduler is not self._scheduler:
                # reset() inside the tick discarded the archive mid-capture
                logger.debug("Abandoned run ended during tick %d", scheduler.ticks)
                return None
            self._abort(scheduler, archive)
            raise

        # reset() during the last tick: the run was abandoned
        if scheduler is not self._scheduler:
            return None

        if self._state.halt():
            logger.info("Run reached its frame limit after %d ticks", ticks)
        try:
            return await self._deliver(scheduler, archive)
        finally:
            if scheduler is self._scheduler:
                self._notify_stopped()

    def _abort(self, scheduler: FrameScheduler, archive: ArchiveBuilder | None) -> None:
        self._state.halt()
        self._archive = None
        if archive is not None:
            archive.discard()
        logger.info("Run aborted after %d ticks", scheduler.ticks)
        self._notify_stopped()

    async def _deliver(
        self, scheduler: FrameScheduler, archive: ArchiveBuilder | None
    ) -> FrameArchive | None:
        self._archive = None
        if archive is None:
            return None
        if not len(archive):
            logger.warning("Recording stopped before any frame was captured, no archive delivered")
            archive.discard()
            return None

        try:
            result = await archive.finalize()
        except ArchiveError:
            if scheduler is not self._scheduler:
                logger.debug("Run was reset while packing, encode failure ignored")
                return None
            raise
        if scheduler is not self._scheduler:
            logger.debug("Run was reset while packing, archive dropped")
            return None
        logger.info("Archive ready: %d frames, %d bytes", len(result), len(result.data))
        if scheduler.config.on_complete is not None:
            scheduler.config.on_complete(result)
        return result

    def _notify_stopped(self) -> None:
        for callback in list(self._stop_callbacks):
            callback()

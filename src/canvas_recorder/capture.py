"""Frame capture: snapshot the surface after a tick and queue it for encoding."""

import asyncio
import logging
from concurrent.futures import Executor

from .constants import MAX_PENDING_ENCODES
from .errors import ArchiveError
from .output import ArchiveBuilder, FrameEncoder
from .surface import Surface

logger = logging.getLogger(__name__)


class FrameCapturer:
    """Reads surface pixels and hands encode jobs to an archive builder."""

    def __init__(
        self,
        surface: Surface,
        encoder: FrameEncoder,
        archive: ArchiveBuilder,
        executor: Executor | None = None,
        max_pending: int = MAX_PENDING_ENCODES,
    ):
        """
        Initialize capturer.

        Args:
            surface: Surface the draw callback paints on
            encoder: Lossless still-image encoder
            archive: Builder that owns the captured frames
            executor: Where encodes run; None uses the event loop default
            max_pending: Encodes allowed in flight before ``capture`` waits
        """
        self.surface = surface
        self.encoder = encoder
        self.archive = archive
        self.executor = executor
        self.max_pending = max_pending

    async def capture(self, index: int) -> None:
        """
        Snapshot the surface for tick ``index`` and submit its encode job.

        The pixel read happens before the first await, so the next tick cannot
        change the frame while it is being encoded. Once more than
        ``max_pending`` encodes are queued, waits for the oldest ones.
        """
        raw = self.surface.read_pixels()
        width, height = self.surface.size
        loop = asyncio.get_running_loop()
        job = loop.run_in_executor(self.executor, self.encoder.encode, raw, width, height)
        try:
            self.archive.submit(index, job)
        except ArchiveError:
            job.cancel()
            raise
        logger.debug("Captured frame %d (%dx%d)", index, width, height)
        await self.archive.throttle(self.max_pending)

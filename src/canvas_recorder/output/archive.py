"""Ordered frame accumulation and store-only ZIP packing."""

import asyncio
import inspect
import logging
import zipfile
from collections import deque
from dataclasses import dataclass
from io import BytesIO
from typing import Awaitable, Union

from ..constants import ARCHIVE_MEDIA_TYPE, ARCHIVE_TIMESTAMP, FRAME_NAME_WIDTH
from ..errors import ArchiveError

logger = logging.getLogger(__name__)

PendingPayload = Union[bytes, Awaitable[bytes]]


@dataclass(frozen=True, slots=True)
class FrameRecord:
    """One encoded frame and its position in the run."""
    index: int
    payload: bytes


@dataclass(frozen=True)
class FrameArchive:
    """Finalized archive handed to the completion callback."""
    data: bytes
    names: tuple[str, ...]
    media_type: str = ARCHIVE_MEDIA_TYPE

    def __len__(self) -> int:
        return len(self.names)

    def __bytes__(self) -> bytes:
        return self.data

    def write(self, path: str) -> None:
        """
        Write the archive bytes to a file.

        Args:
            path: Destination file path
        """
        with open(path, "wb") as f:
            f.write(self.data)


def frame_name_width(frame_limit: int) -> int:
    """Digits needed so every entry name of a run has the same width."""
    if frame_limit <= 0:
        return FRAME_NAME_WIDTH
    return max(FRAME_NAME_WIDTH, len(str(frame_limit - 1)))


def frame_entry_name(index: int, extension: str, width: int = FRAME_NAME_WIDTH) -> str:
    """Build the archive entry name for a frame index (``000000.png``)."""
    return f"{index:0{width}d}{extension}"


class ZipArchiveWriter:
    """Store-only ZIP container with reproducible entry metadata."""

    def __init__(self) -> None:
        self._buffer = BytesIO()
        self._zip = zipfile.ZipFile(self._buffer, "w", compression=zipfile.ZIP_STORED)
        self._names: list[str] = []
        self._closed = False

    def add_entry(self, name: str, payload: bytes) -> None:
        if self._closed:
            raise ArchiveError("Archive already finalized")
        if name in self._names:
            raise ArchiveError(f"Duplicate archive entry: {name}")

        info = zipfile.ZipInfo(name, date_time=ARCHIVE_TIMESTAMP)
        info.compress_type = zipfile.ZIP_STORED
        info.external_attr = 0o644 << 16
        self._zip.writestr(info, payload)
        self._names.append(name)

    def finalize(self) -> FrameArchive:
        if self._closed:
            raise ArchiveError("Archive already finalized")
        self._zip.close()
        self._closed = True
        return FrameArchive(data=self._buffer.getvalue(), names=tuple(self._names))


class ArchiveBuilder:
    """Collects frame payloads in submission order and packs them into one archive."""

    def __init__(self, extension: str, name_width: int = FRAME_NAME_WIDTH):
        """
        Initialize an empty builder.

        Args:
            extension: Entry name extension matching the frame encoder
            name_width: Zero-padded digits in entry names
        """
        self.extension = extension
        self.name_width = name_width
        self._pending: list[PendingPayload] = []
        self._running: deque[asyncio.Future] = deque()
        self._finalized = False

    def __len__(self) -> int:
        return len(self._pending)

    def submit(self, index: int, payload: PendingPayload) -> None:
        """
        Queue a frame payload, or an awaitable producing one.

        Args:
            index: Tick index; must be the next index in sequence
            payload: Encoded bytes or a pending encode job

        Raises:
            ArchiveError: If the builder is finalized or the index is out of order
        """
        if self._finalized:
            raise ArchiveError("Archive already finalized")
        expected = len(self._pending)
        if index != expected:
            raise ArchiveError(f"Frame {index} submitted out of order, expected {expected}")
        self._pending.append(payload)
        if isinstance(payload, asyncio.Future):
            self._running.append(payload)

    async def throttle(self, limit: int) -> None:
        """Wait for the oldest running encodes until at most ``limit`` remain queued."""
        while len(self._running) > limit:
            oldest = self._running.popleft()
            if not oldest.done():
                # failures are reported by finalize, not here
                await asyncio.wait([oldest])

    async def finalize(self) -> FrameArchive:
        """
        Await every pending payload and pack the frames in index order.

        Returns:
            The finalized archive

        Raises:
            ArchiveError: If a frame failed to encode or the builder was finalized before
        """
        if self._finalized:
            raise ArchiveError("Archive already finalized")
        self._finalized = True
        pending, self._pending = self._pending, []
        self._running.clear()

        # gather keeps submission order whatever order the encodes finish in
        results = await asyncio.gather(*(_resolve(p) for p in pending), return_exceptions=True)
        for index, result in enumerate(results):
            if isinstance(result, BaseException):
                raise ArchiveError(f"Failed to encode frame {index}: {result}") from result

        records = [FrameRecord(index=i, payload=payload) for i, payload in enumerate(results)]
        writer = ZipArchiveWriter()
        for record in records:
            writer.add_entry(
                frame_entry_name(record.index, self.extension, self.name_width),
                record.payload,
            )
        archive = writer.finalize()
        logger.debug("Packed %d frames (%d bytes)", len(archive), len(archive.data))
        return archive

    def discard(self) -> None:
        """Drop all frames, cancelling encodes that are still running."""
        pending, self._pending = self._pending, []
        self._running.clear()
        for payload in pending:
            if isinstance(payload, asyncio.Future):
                payload.cancel()
            elif inspect.iscoroutine(payload):
                payload.close()
        self._finalized = True


async def _resolve(payload: PendingPayload) -> bytes:
    if isinstance(payload, bytes):
        return payload
    return await payload

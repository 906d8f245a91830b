"""Drive a draw callback on a Pillow surface and record each frame into a ZIP archive."""

from .config import RecorderConfig
from .errors import ArchiveError, InvalidConfigurationError, InvalidStateError, RecorderError
from .output import FrameArchive, FrameRecord
from .session import RecorderSession
from .state import RunState
from .surface import Surface

__all__ = [
    "ArchiveError",
    "FrameArchive",
    "FrameRecord",
    "InvalidConfigurationError",
    "InvalidStateError",
    "RecorderConfig",
    "RecorderError",
    "RecorderSession",
    "RunState",
    "Surface",
]

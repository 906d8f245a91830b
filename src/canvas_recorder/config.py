"""Run configuration with defaults and validation."""

from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any, Callable

from .constants import (
    DEFAULT_CLEAR,
    DEFAULT_COLOR,
    DEFAULT_FPS,
    DEFAULT_FRAMES,
    DEFAULT_IMAGE_FORMAT,
    DEFAULT_RECORD,
    DEFAULT_SIZE,
)
from .errors import InvalidConfigurationError
from .output import supported_image_formats
from .surface import Color, to_rgba

if TYPE_CHECKING:
    from .output import FrameArchive

CompletionCallback = Callable[["FrameArchive"], Any]


@dataclass(frozen=True)
class RecorderConfig:
    """Settings for one recorder run. Instances are immutable; use ``merged``."""
    size: tuple[int, int] = DEFAULT_SIZE
    color: Color | None = DEFAULT_COLOR
    clear: bool = DEFAULT_CLEAR
    record: bool = DEFAULT_RECORD
    fps: int = DEFAULT_FPS
    frames: int = DEFAULT_FRAMES
    on_complete: CompletionCallback | None = None
    image_format: str = DEFAULT_IMAGE_FORMAT

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    def merged(self, **options: Any) -> "RecorderConfig":
        """
        Return a copy with the given options replaced.

        Args:
            **options: Any of size, color, clear, record, fps, frames, on_complete, image_format

        Returns:
            A validated RecorderConfig

        Raises:
            InvalidConfigurationError: On unknown option names or invalid values
        """
        unknown = sorted(set(options) - _OPTION_NAMES)
        if unknown:
            raise InvalidConfigurationError(f"Unknown option(s): {', '.join(unknown)}")

        if "size" in options:
            options["size"] = _validate_size(options["size"])
        if "color" in options:
            _validate_color(options["color"])
        for name in ("clear", "record"):
            if name in options and not isinstance(options[name], bool):
                raise InvalidConfigurationError(f"'{name}' must be a bool, got {options[name]!r}")
        if "fps" in options and (not _is_int(options["fps"]) or options["fps"] <= 0):
            raise InvalidConfigurationError(f"'fps' must be a positive integer, got {options['fps']!r}")
        if "frames" in options and (not _is_int(options["frames"]) or options["frames"] < 0):
            raise InvalidConfigurationError(
                f"'frames' must be a non-negative integer, got {options['frames']!r}"
            )
        if "on_complete" in options:
            callback = options["on_complete"]
            if callback is not None and not callable(callback):
                raise InvalidConfigurationError("'on_complete' must be callable or None")
        if "image_format" in options:
            options["image_format"] = _validate_image_format(options["image_format"])

        return replace(self, **options)


_OPTION_NAMES = frozenset(field.name for field in fields(RecorderConfig))


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate_size(size: Any) -> tuple[int, int]:
    try:
        width, height = size
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"'size' must be a (width, height) pair, got {size!r}")
    if not (_is_int(width) and _is_int(height)) or width <= 0 or height <= 0:
        raise InvalidConfigurationError(f"'size' must hold two positive integers, got {size!r}")
    return (width, height)


def _validate_color(color: Any) -> None:
    try:
        to_rgba(color)
    except ValueError as e:
        raise InvalidConfigurationError(f"Invalid color {color!r}: {e}")


def _validate_image_format(image_format: Any) -> str:
    name = str(image_format).lower().removeprefix(".")
    if name not in supported_image_formats():
        supported = ", ".join(supported_image_formats())
        raise InvalidConfigurationError(
            f"Unsupported image format: {image_format}. Supported formats: {supported}"
        )
    return name

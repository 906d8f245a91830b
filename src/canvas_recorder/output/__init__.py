"""Frame encoders and the archive they are packed into."""

from .archive import (
    ArchiveBuilder,
    FrameArchive,
    FrameRecord,
    ZipArchiveWriter,
    frame_entry_name,
    frame_name_width,
)
from .base import FrameEncoder, PillowFrameEncoder
from .png_encoder import PngFrameEncoder
from .webp_encoder import WebPFrameEncoder

# Encoders carry their own extension and media type
_IMAGE_FORMATS: dict[str, type[FrameEncoder]] = {
    "png": PngFrameEncoder,
    "webp": WebPFrameEncoder,
}


def resolve_frame_encoder(image_format: str) -> FrameEncoder:
    """
    Resolve the frame encoder for an image format name.

    Args:
        image_format: Format name, case-insensitive (``png`` or ``webp``)

    Returns:
        A FrameEncoder instance

    Raises:
        ValueError: If the format is not supported
    """
    encoder_class = _IMAGE_FORMATS.get(image_format.lower().removeprefix("."))
    if encoder_class is None:
        supported = ", ".join(supported_image_formats())
        raise ValueError(f"Unsupported image format: {image_format}. Supported formats: {supported}")
    return encoder_class()


def supported_image_formats() -> tuple[str, ...]:
    """Return supported image format names."""
    return tuple(_IMAGE_FORMATS.keys())


def media_type_for_image_format(image_format: str) -> str:
    """Resolve media type for a supported image format."""
    return resolve_frame_encoder(image_format).media_type


__all__ = [
    "ArchiveBuilder",
    "FrameArchive",
    "FrameEncoder",
    "FrameRecord",
    "PillowFrameEncoder",
    "PngFrameEncoder",
    "WebPFrameEncoder",
    "ZipArchiveWriter",
    "frame_entry_name",
    "frame_name_width",
    "media_type_for_image_format",
    "resolve_frame_encoder",
    "supported_image_formats",
]

"""Pillow-backed drawing surface the draw callback paints on."""

from typing import Union

from PIL import Image, ImageColor, ImageDraw

from .constants import TRANSPARENT

Color = Union[str, tuple[int, ...]]
RGBA = tuple[int, int, int, int]


def to_rgba(color: Color | None) -> RGBA:
    """
    Normalize a color to an RGBA tuple.

    Args:
        color: Pillow color string (``"black"``, ``"#ff0000"``, ``"rgb(1, 2, 3)"``),
            an RGB/RGBA tuple, or None for fully transparent

    Returns:
        RGBA tuple with channels in 0..255

    Raises:
        ValueError: If the color cannot be parsed
    """
    if color is None:
        return TRANSPARENT
    if isinstance(color, str):
        return ImageColor.getcolor(color, "RGBA")  # type: ignore[return-value]
    if isinstance(color, tuple) and len(color) in (3, 4):
        channels = tuple(color)
        if all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in channels):
            return channels if len(channels) == 4 else (*channels, 255)  # type: ignore[return-value]
    raise ValueError(f"Unsupported color: {color!r}")


class Surface:
    """Mutable RGBA raster with a 2D drawing context."""

    def __init__(self, width: int, height: int):
        """
        Initialize a transparent surface.

        Args:
            width: Surface width in pixels
            height: Surface height in pixels
        """
        self._image = Image.new("RGBA", (width, height), TRANSPARENT)
        self._context = ImageDraw.Draw(self._image)

    @property
    def context(self) -> ImageDraw.ImageDraw:
        """Drawing context bound to the current raster."""
        return self._context

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    def resize(self, width: int, height: int) -> None:
        """Replace the raster with a transparent one of the given size."""
        self._image = Image.new("RGBA", (width, height), TRANSPARENT)
        self._context = ImageDraw.Draw(self._image)

    def clear(self, color: Color | None) -> None:
        """Fill every pixel with ``color``, or make the surface transparent."""
        self._image.paste(to_rgba(color), (0, 0, self.width, self.height))

    def read_pixels(self) -> bytes:
        """Return the raw RGBA buffer, row by row from the top-left pixel."""
        return self._image.tobytes()

    def get_pixel(self, x: int, y: int) -> RGBA:
        return self._image.getpixel((x, y))  # type: ignore[return-value]

"""WebP frame encoder."""

from .base import PillowFrameEncoder


class WebPFrameEncoder(PillowFrameEncoder):
    """Frame encoder for lossless WebP format."""

    @property
    def output_format(self) -> str:
        return "webp"

    @property
    def save_options(self) -> dict[str, object]:
        # exact keeps RGB values under fully transparent pixels
        return {
            "lossless": True,
            "quality": 100,
            "method": 4,
            "exact": True,
        }

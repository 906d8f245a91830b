"""PNG frame encoder."""

from .base import PillowFrameEncoder


class PngFrameEncoder(PillowFrameEncoder):
    """Frame encoder for PNG format."""

    @property
    def output_format(self) -> str:
        return "png"

    @property
    def save_options(self) -> dict[str, object]:
        return {"optimize": False, "compress_level": 6}

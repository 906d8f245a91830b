"""Base class for still-image frame encoders."""

from io import BytesIO
from abc import ABC, abstractmethod

from PIL import Image


class FrameEncoder(ABC):
    """Abstract base class for lossless frame encoders."""

    @property
    @abstractmethod
    def extension(self) -> str:
        """File extension used for archive entries (for example, ``.png``)."""
        raise NotImplementedError

    @property
    @abstractmethod
    def media_type(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def encode(self, raw: bytes, width: int, height: int) -> bytes:
        """
        Encode one raw frame into a still image.

        Args:
            raw: RGBA pixel buffer, row by row from the top-left pixel
            width: Frame width in pixels
            height: Frame height in pixels

        Returns:
            Encoded image as bytes
        """
        raise NotImplementedError


class PillowFrameEncoder(FrameEncoder, ABC):
    """Template encoder for Pillow-supported lossless image formats."""

    @property
    @abstractmethod
    def output_format(self) -> str:
        """Pillow format identifier (for example, ``png`` or ``webp``)."""
        raise NotImplementedError

    @property
    def extension(self) -> str:
        return f".{self.output_format}"

    @property
    def media_type(self) -> str:
        return f"image/{self.output_format}"

    def encode(self, raw: bytes, width: int, height: int) -> bytes:
        expected = width * height * 4
        if len(raw) != expected:
            raise ValueError(f"Invalid frame buffer size: got {len(raw)}, expected {expected}")

        image = Image.frombytes("RGBA", (width, height), raw)
        buffer = BytesIO()
        image.save(buffer, format=self.output_format, **self.save_options)
        return buffer.getvalue()

    @property
    def save_options(self) -> dict[str, object]:
        """Additional Pillow ``save`` kwargs for this format."""
        return {}

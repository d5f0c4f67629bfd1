from abc import ABC, abstractmethod

from preflight.imaging.models import GrayImage


class BaseImageDecoder(ABC):
    """Contract for image decoding adapters."""

    @abstractmethod
    def decode(self, data: bytes) -> GrayImage:
        """Decode image bytes into a grayscale pixel buffer.

        Args:
            data: Raw image file content.

        Returns:
            GrayImage with at least one pixel.

        Raises:
            DecodeError: if the bytes cannot be decoded.
        """

import io

import numpy as np
from PIL import Image, UnidentifiedImageError

from preflight.analysis.exceptions import DecodeError
from preflight.imaging.base import BaseImageDecoder
from preflight.imaging.models import GrayImage
from preflight.imaging.pixels import to_eight_bit, to_grayscale

# Single-channel modes deeper than 8 bits; converting them to RGBA saturates.
_WIDE_MODES = frozenset({"I", "F"})


def _is_wide(mode: str) -> bool:
    return mode in _WIDE_MODES or mode.startswith("I;16")


class PillowImageDecoder(BaseImageDecoder):
    """Decodes raster images with Pillow and converts them to 8-bit luma.

    16-bit and float exports (typical for radiographs and CT) are reduced
    to 8 bits from their own sample range instead of being clipped.
    """

    def decode(self, data: bytes) -> GrayImage:
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.seek(0)
                if _is_wide(img.mode):
                    gray = to_eight_bit(np.asarray(img))
                else:
                    gray = to_grayscale(np.asarray(img.convert("RGBA")))
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
            raise DecodeError(f"Pillow could not decode image: {exc}") from exc
        if gray.size == 0:
            raise DecodeError("Decoded image has no pixels")
        return GrayImage.from_array(gray)

import io

import numpy as np
from PIL import Image

from preflight.files.models import FileDescriptor
from preflight.imaging.models import GrayImage

LAB_REPORT_LINE = "Complete blood count for PERSON_1, collected 2025-01-10"


def scan_like_pixels(width: int = 2000, height: int = 1500) -> np.ndarray:
    """Textured grayscale export with a flat left band as background.

    The texture is two incommensurate sinusoids, giving stddev ~40, a high
    Laplacian variance, a dense histogram and similar gradient sums on both
    axes. The flat band covers the background sampling region.
    """
    x = np.arange(width, dtype=np.float64)
    y = np.arange(height, dtype=np.float64)
    pattern = (
        128.0
        + 45.0 * np.sin(2 * np.pi * x / 7.3)[None, :]
        + 45.0 * np.sin(2 * np.pi * y / 9.1)[:, None]
    )
    pattern[:, : int(width * 0.2)] = 128.0
    return np.clip(np.rint(pattern), 0, 255).astype(np.uint8)


def flat_pixels(width: int, height: int, value: int = 128) -> np.ndarray:
    return np.full((height, width), value, dtype=np.uint8)


def gray(pixels: np.ndarray) -> GrayImage:
    return GrayImage.from_array(pixels)


def png_bytes(pixels: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(pixels).save(buf, format="PNG")
    return buf.getvalue()


def descriptor(name: str, data: bytes = b"", content_type: str = "") -> FileDescriptor:
    return FileDescriptor.from_bytes(name, data, content_type)

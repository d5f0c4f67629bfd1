"""Pixel statistics over grayscale buffers.

All functions are pure: inputs are never modified and every metric is a
single or double pass over the pixels. Arithmetic is widened before any
subtraction so uint8 values never wrap around.
"""

import numpy as np

_LUMA = np.array([0.299, 0.587, 0.114])

BANDING_EMPTY_BINS = 140


def to_grayscale(pixel_buffer: np.ndarray) -> np.ndarray:
    """Convert an interleaved RGBA/RGB buffer to uint8 luma.

    Accepts ``(h, w, 4)``/``(h, w, 3)`` arrays or a flat RGBA sequence. A 2-D
    array is treated as already grayscale.
    """
    arr = np.asarray(pixel_buffer)
    if arr.ndim == 1:
        if arr.size % 4:
            raise ValueError("Flat pixel buffer length must be a multiple of 4 (RGBA)")
        arr = arr.reshape(-1, 4)
    elif arr.ndim == 2:
        return np.clip(arr, 0, 255).astype(np.uint8)
    if arr.shape[-1] not in (3, 4):
        raise ValueError(f"Expected 3 or 4 channels, got {arr.shape[-1]}")
    luma = arr[..., :3].astype(np.float64) @ _LUMA
    return np.clip(np.rint(luma), 0, 255).astype(np.uint8)


def to_eight_bit(values: np.ndarray) -> np.ndarray:
    """Reduce a single-channel 16-bit, 32-bit or float buffer to uint8.

    Non-negative integers up to 65535 are treated as 16-bit samples and
    divided by 257, so 65535 maps to 255. Anything else (negative, wider or
    float data) is min-max windowed onto 0..255; a constant buffer becomes 0.
    """
    arr = np.asarray(values)
    if arr.size == 0:
        return np.zeros(arr.shape, dtype=np.uint8)
    if np.issubdtype(arr.dtype, np.integer):
        lo, hi = int(arr.min()), int(arr.max())
        if lo >= 0 and hi <= 0xFFFF:
            return np.rint(arr.astype(np.float64) / 257.0).astype(np.uint8)
    wide = np.nan_to_num(arr.astype(np.float64))
    lo, hi = float(wide.min()), float(wide.max())
    if hi <= lo:
        return np.zeros(wide.shape, dtype=np.uint8)
    scaled = (wide - lo) * 255.0 / (hi - lo)
    return np.clip(np.rint(scaled), 0, 255).astype(np.uint8)


def stddev(g: np.ndarray) -> float:
    """Population standard deviation; 0.0 for an empty buffer."""
    values = np.asarray(g, dtype=np.float64)
    if values.size == 0:
        return 0.0
    return float(values.std())


def laplacian_variance(g: np.ndarray) -> float:
    """Variance of the 4-neighbour Laplacian over interior pixels. Higher is sharper."""
    img = np.asarray(g, dtype=np.float64)
    if img.ndim != 2 or img.shape[0] < 3 or img.shape[1] < 3:
        return 0.0
    response = (
        img[:-2, 1:-1]
        + img[2:, 1:-1]
        + img[1:-1, :-2]
        + img[1:-1, 2:]
        - 4.0 * img[1:-1, 1:-1]
    )
    return float(response.var())


def _region(g: np.ndarray, x0: int, y0: int, x1: int, y1: int) -> np.ndarray:
    height, width = g.shape[:2]
    x0, x1 = max(0, x0), min(width, x1)
    y0, y1 = max(0, y0), min(height, y1)
    if x1 <= x0 or y1 <= y0:
        return g[0:0, 0:0]
    return g[y0:y1, x0:x1]


def mean_rect(g: np.ndarray, x0: int, y0: int, x1: int, y1: int) -> float:
    """Mean of ``[x0, x1) x [y0, y1)``; 0.0 for an empty rectangle."""
    region = _region(np.asarray(g), x0, y0, x1, y1)
    if region.size == 0:
        return 0.0
    return float(region.mean(dtype=np.float64))


def stddev_rect(g: np.ndarray, x0: int, y0: int, x1: int, y1: int) -> float:
    """Population standard deviation of a rectangle; 0.0 when empty."""
    return stddev(_region(np.asarray(g), x0, y0, x1, y1))


def region_box(
    width: int, height: int, fx0: float, fy0: float, fx1: float, fy1: float
) -> tuple[int, int, int, int]:
    """Turn a fractional box into pixel bounds covering at least one pixel."""

    def span(size: int, f0: float, f1: float) -> tuple[int, int]:
        if size <= 0:
            return 0, 0
        start = min(int(size * f0), size - 1)
        end = max(int(size * f1), start + 1)
        return start, min(end, size)

    x0, x1 = span(width, fx0, fx1)
    y0, y1 = span(height, fy0, fy1)
    return x0, y0, x1, y1


def histogram(g: np.ndarray) -> np.ndarray:
    """256-bin intensity histogram."""
    values = np.clip(np.asarray(g).ravel(), 0, 255).astype(np.int64)
    return np.bincount(values, minlength=256)


def empty_bins(hist: np.ndarray) -> int:
    """Count bins 1..254 with no samples (extremes excluded)."""
    return int(np.count_nonzero(np.asarray(hist)[1:255] == 0))


def has_banding(g: np.ndarray, threshold: int = BANDING_EMPTY_BINS) -> bool:
    """Posterization check: too many empty histogram bins."""
    return empty_bins(histogram(g)) > threshold


def gradient_sums(g: np.ndarray) -> tuple[int, int]:
    """Total absolute horizontal (gx) and vertical (gy) differences over interior pixels."""
    img = np.asarray(g, dtype=np.int64)
    if img.ndim != 2 or img.shape[0] < 3 or img.shape[1] < 3:
        return 0, 0
    inner = img[1:-1, 1:-1]
    gx = int(np.abs(inner - img[1:-1, :-2]).sum())
    gy = int(np.abs(inner - img[:-2, 1:-1]).sum())
    return gx, gy


def motion(gx: int, gy: int) -> tuple[str, float]:
    """Dominant gradient axis and the max/min ratio of the two sums.

    A flat image (both sums zero) has ratio 1.0.
    """
    axis = "x" if gx > gy else "y"
    if gx == 0 and gy == 0:
        return axis, 1.0
    return axis, max(gx, gy) / max(1, min(gx, gy))

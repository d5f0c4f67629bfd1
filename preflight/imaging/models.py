from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True)
class GrayImage:
    """Decoded single-channel image; ``pixels`` has shape (height, width), uint8."""

    width: int
    height: int
    pixels: np.ndarray = field(repr=False, compare=False)

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "GrayImage":
        height, width = pixels.shape[:2]
        return cls(width=int(width), height=int(height), pixels=pixels)

    @property
    def megapixels(self) -> float:
        return (self.width * self.height) / 1e6

from dataclasses import dataclass

from preflight.imaging.models import GrayImage


@dataclass(frozen=True)
class RenderedPage:
    """First page of a PDF rendered to grayscale, with its text layer."""

    image: GrayImage
    text: str
    page_count: int
    scale: float

    @property
    def has_text_layer(self) -> bool:
        return bool(self.text.strip())

from abc import ABC, abstractmethod

from preflight.pdf.models import RenderedPage


class BasePdfRenderer(ABC):
    """Contract for all PDF rendering adapters."""

    @abstractmethod
    def render(self, pdf_bytes: bytes, scale: float = 2.0) -> RenderedPage:
        """Render the first page of a PDF and extract its text.

        Args:
            pdf_bytes: Raw PDF file content.
            scale: Render scale relative to 72 DPI.

        Returns:
            RenderedPage with a grayscale image and the page text.

        Raises:
            ParseError: if the document cannot be opened or rendered.
        """

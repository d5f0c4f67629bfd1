import io

import numpy as np
import pdfplumber

from preflight.analysis.exceptions import ParseError
from preflight.imaging.models import GrayImage
from preflight.imaging.pixels import to_grayscale
from preflight.pdf.base import BasePdfRenderer
from preflight.pdf.models import RenderedPage

_BASE_DPI = 72


class PdfPlumberRenderer(BasePdfRenderer):
    """Renders PDF pages with pdfplumber (pypdfium2 backend)."""

    def render(self, pdf_bytes: bytes, scale: float = 2.0) -> RenderedPage:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                if not pdf.pages:
                    raise ParseError("PDF has no pages")
                page = pdf.pages[0]
                text = page.extract_text() or ""
                rendered = page.to_image(resolution=int(_BASE_DPI * scale)).original
                rgb = np.asarray(rendered.convert("RGB"))
                page_count = len(pdf.pages)
        except ParseError:
            raise
        except Exception as exc:
            raise ParseError(f"pdfplumber render failed: {exc}") from exc
        return RenderedPage(
            image=GrayImage.from_array(to_grayscale(rgb)),
            text=text,
            page_count=page_count,
            scale=scale,
        )

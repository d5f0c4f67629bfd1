import numpy as np
import pymupdf

from preflight.analysis.exceptions import ParseError
from preflight.imaging.models import GrayImage
from preflight.imaging.pixels import to_grayscale
from preflight.pdf.base import BasePdfRenderer
from preflight.pdf.models import RenderedPage


class PyMuPdfRenderer(BasePdfRenderer):
    """Renders PDF pages with PyMuPDF."""

    def render(self, pdf_bytes: bytes, scale: float = 2.0) -> RenderedPage:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.page_count == 0:
                    raise ParseError("PDF has no pages")
                page = doc[0]
                text = page.get_text()
                pix = page.get_pixmap(matrix=pymupdf.Matrix(scale, scale), alpha=False)
                rgb = np.frombuffer(pix.samples, dtype=np.uint8).reshape(
                    pix.height, pix.stride
                )[:, : pix.width * pix.n].reshape(pix.height, pix.width, pix.n)
                page_count = doc.page_count
        except ParseError:
            raise
        except Exception as exc:
            raise ParseError(f"pymupdf render failed: {exc}") from exc
        return RenderedPage(
            image=GrayImage.from_array(to_grayscale(rgb)),
            text=text,
            page_count=page_count,
            scale=scale,
        )

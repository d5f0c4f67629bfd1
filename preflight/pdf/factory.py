from preflight.config.settings import Settings
from preflight.pdf.base import BasePdfRenderer
from preflight.pdf.pdfplumber_adapter import PdfPlumberRenderer
from preflight.pdf.pymupdf_adapter import PyMuPdfRenderer


class PdfRendererFactory:
    """Picks the engine that rasterizes the first page of PDF uploads.

    Both engines return the page as grayscale plus its text layer, so the PDF
    report and lab PDF analyzers score the same either way.
    """

    ADAPTERS: dict[str, type[BasePdfRenderer]] = {
        "pdfplumber": PdfPlumberRenderer,
        "pymupdf": PyMuPdfRenderer,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfRenderer:
        engine = settings.pdf_engine.lower()
        renderer_cls = cls.ADAPTERS.get(engine)
        if renderer_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}' for first-page rendering. "
                f"Set PDF_ENGINE to one of: {', '.join(cls.ADAPTERS)}"
            )
        return renderer_cls()

"""Generic document checks used when no medical family matches."""

import io

import docx
from docx.table import Table

from preflight.analysis.exceptions import DecodeError, ParseError, PreflightError
from preflight.analysis.policy import DocumentImagePolicy, DocxPolicy
from preflight.analysis.result import AnalysisResult, ResultBuilder
from preflight.analysis.tiering import Level, interpolate, tier_at_least
from preflight.analyzers.base import DEFAULT_DEGRADED_SCORE, BaseAnalyzer
from preflight.files.models import FileDescriptor
from preflight.imaging import pixels
from preflight.imaging.base import BaseImageDecoder
from preflight.imaging.models import GrayImage
from preflight.routing.predicates import facts

DOCUMENT_REMINDER = "Check that every page is present, upright and legible."


class DocumentImageAnalyzer(BaseAnalyzer):
    """Photos and scans of documents; resolution is scored on a linear scale."""

    label = "document image"

    def __init__(
        self,
        decoder: BaseImageDecoder,
        policy: DocumentImagePolicy,
        *,
        degraded_score: float = DEFAULT_DEGRADED_SCORE,
    ) -> None:
        super().__init__(degraded_score=degraded_score)
        self._decoder = decoder
        self._policy = policy

    def _analyze(self, descriptor: FileDescriptor) -> AnalysisResult:
        return self.score(self._decoder.decode(descriptor.read()))

    def score(self, image: GrayImage) -> AnalysisResult:
        policy = self._policy
        result = ResultBuilder()

        megapixels = image.megapixels
        result.detail(f"MP: {megapixels:.2f} ({image.width}x{image.height})")
        result.add(
            interpolate(
                megapixels,
                policy.resolution_min_mp,
                policy.resolution_max_mp,
                policy.resolution_points,
            )
        )
        if megapixels < policy.resolution_min_mp:
            result.advise("Very low resolution.")
        elif megapixels < policy.resolution_max_mp:
            result.advise("Low resolution: aim for >= 300 DPI.")

        sharpness = pixels.laplacian_variance(image.pixels)
        result.detail(f"Sharpness(LapVar): {sharpness:.1f}")
        points, level = tier_at_least(sharpness, policy.sharpness_cuts, policy.sharpness)
        result.add(points)
        if level is Level.MID:
            result.advise("Slight blur.")
        elif level is Level.LOW:
            result.advise("Blurry: retake or rescan.")

        contrast = pixels.stddev(image.pixels)
        result.detail(f"Contrast(stddev): {contrast:.1f}")
        points, level = tier_at_least(contrast, policy.contrast_cuts, policy.contrast)
        result.add(points)
        if level is not Level.HIGH:
            result.advise("Low contrast: improve lighting or scanner settings.")

        result.add(policy.bonus)
        return result.build()

    def failure_message(self, exc: PreflightError) -> str:
        if isinstance(exc, DecodeError):
            return "Could not decode image"
        return super().failure_message(exc)


def _table_text(tables: list[Table]) -> list[str]:
    parts: list[str] = []
    for table in tables:
        for row in table.rows:
            # merged cells repeat in row.cells
            parts.extend(dict.fromkeys(cell.text for cell in row.cells))
    return parts


def docx_text(data: bytes) -> str:
    """Text of a .docx: body paragraphs, tables, and defined headers and footers.

    Raises:
        ParseError: if python-docx cannot open the package.
    """
    try:
        document = docx.Document(io.BytesIO(data))
    except Exception as exc:
        raise ParseError(f"not a valid DOCX document: {exc}") from exc

    parts = [paragraph.text for paragraph in document.paragraphs]
    parts += _table_text(document.tables)
    for section in document.sections:
        for part in (section.header, section.footer):
            if part.is_linked_to_previous:
                continue
            parts += [paragraph.text for paragraph in part.paragraphs]
            parts += _table_text(part.tables)
    return " ".join(part for part in parts if part.strip())


class DocxAnalyzer(BaseAnalyzer):
    """Word documents: container validity and amount of extractable text."""

    label = "DOCX"

    def __init__(
        self, policy: DocxPolicy, *, degraded_score: float = DEFAULT_DEGRADED_SCORE
    ) -> None:
        super().__init__(degraded_score=degraded_score)
        self._policy = policy

    def _analyze(self, descriptor: FileDescriptor) -> AnalysisResult:
        return self.score(docx_text(descriptor.read()))

    def score(self, text: str) -> AnalysisResult:
        policy = self._policy
        result = ResultBuilder().add(policy.container)
        chars = len(" ".join(text.split()))
        result.detail(f"Text chars: {chars}")
        points, level = tier_at_least(chars, policy.text_cuts, policy.text)
        result.add(points)
        if level is Level.MID:
            result.advise("Little extractable text: check the document is not a pasted scan.")
        elif level is Level.LOW:
            result.advise("No extractable text: embedded scans will need OCR.")
        result.add(policy.completeness).advise(DOCUMENT_REMINDER)
        return result.build()

    def failure_message(self, exc: PreflightError) -> str:
        return "Could not open DOCX, limited checks"


class DocumentAnalyzer(BaseAnalyzer):
    """Generic document family: PDF, image or DOCX."""

    label = "document"

    def __init__(
        self,
        *,
        pdf: BaseAnalyzer,
        image: BaseAnalyzer,
        docx: BaseAnalyzer,
        unknown_score: float = 55,
    ) -> None:
        super().__init__()
        self._pdf = pdf
        self._image = image
        self._docx = docx
        self._unknown_score = unknown_score

    def _analyze(self, descriptor: FileDescriptor) -> AnalysisResult:
        f = facts(descriptor)
        if f.is_pdf:
            return self._pdf.analyze(descriptor)
        if f.is_image:
            return self._image.analyze(descriptor)
        if f.is_docx:
            return self._docx.analyze(descriptor)
        return AnalysisResult.of(
            self._unknown_score,
            messages=["Unsupported document format for OCR preflight."],
        )

from preflight.analysis.exceptions import ParseError, PreflightError
from preflight.analysis.policy import PdfPolicy
from preflight.analysis.result import AnalysisResult, ResultBuilder
from preflight.analysis.tiering import Level, tier_at_least
from preflight.analyzers.base import DEFAULT_DEGRADED_SCORE, BaseAnalyzer
from preflight.files.models import FileDescriptor
from preflight.imaging import pixels
from preflight.pdf.base import BasePdfRenderer
from preflight.pdf.models import RenderedPage

LAB_REPORT_REMINDER = "Check patient name, date, test panel, and reference ranges present."


def text_layer_chars(text: str) -> int:
    """Length of the page text with whitespace runs collapsed."""
    return len(" ".join(text.split()))


class PdfReportAnalyzer(BaseAnalyzer):
    """Scores the first page of a PDF: text layer, render size and contrast."""

    label = "PDF"

    def __init__(
        self,
        renderer: BasePdfRenderer,
        policy: PdfPolicy,
        *,
        scale: float = 2.0,
        reminder: str = LAB_REPORT_REMINDER,
        degraded_score: float = DEFAULT_DEGRADED_SCORE,
    ) -> None:
        super().__init__(degraded_score=degraded_score)
        self._renderer = renderer
        self._policy = policy
        self._scale = scale
        self._reminder = reminder

    def _analyze(self, descriptor: FileDescriptor) -> AnalysisResult:
        page = self._renderer.render(descriptor.read(), scale=self._scale)
        return self.score(page)

    def score(self, page: RenderedPage) -> AnalysisResult:
        policy = self._policy
        result = ResultBuilder()

        if text_layer_chars(page.text) > policy.text_min_chars:
            result.add(policy.text_layer).detail("Text layer: yes")
        else:
            result.detail("Text layer: no").advise("Scanned PDF: OCR will be required.")

        image = page.image
        result.detail(f"Render MP: {image.megapixels:.2f} (scale {page.scale:g})")
        points, level = tier_at_least(image.megapixels, policy.render_cuts, policy.render)
        result.add(points)
        if level is Level.MID:
            result.advise("Low resolution: prefer >= 300 DPI.")
        elif level is Level.LOW:
            result.advise("Very low page resolution: rescan at >= 300 DPI.")

        result.detail(f"Sharpness(LapVar): {pixels.laplacian_variance(image.pixels):.1f}")
        contrast = pixels.stddev(image.pixels)
        result.detail(f"Contrast(stddev): {contrast:.1f}")
        points, _level = tier_at_least(contrast, policy.contrast_cuts, policy.contrast)
        result.add(points)

        result.detail(f"Pages: {page.page_count}")
        result.add(policy.completeness).advise(self._reminder)
        return result.build()

    def failure_message(self, exc: PreflightError) -> str:
        if isinstance(exc, ParseError):
            return "PDF parse error, limited checks"
        return super().failure_message(exc)

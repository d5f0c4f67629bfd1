from preflight.analysis.exceptions import DecodeError, PreflightError
from preflight.analysis.policy import LabImagePolicy
from preflight.analysis.result import AnalysisResult, ResultBuilder
from preflight.analysis.tiering import Level, tier_at_least
from preflight.analyzers.base import DEFAULT_DEGRADED_SCORE, BaseAnalyzer
from preflight.files.models import FileDescriptor
from preflight.imaging import pixels
from preflight.imaging.base import BaseImageDecoder
from preflight.imaging.models import GrayImage


class LabImageAnalyzer(BaseAnalyzer):
    """Photographed or scanned lab sheets: resolution, sharpness, contrast."""

    label = "lab image"

    def __init__(
        self,
        decoder: BaseImageDecoder,
        policy: LabImagePolicy,
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

        result.detail(f"MP: {image.megapixels:.2f}")
        points, level = tier_at_least(image.megapixels, policy.resolution_cuts, policy.resolution)
        result.add(points)
        if level is Level.MID:
            result.advise("Low resolution: aim for higher DPI.")
        elif level is Level.LOW:
            result.advise("Very low resolution.")

        sharpness = pixels.laplacian_variance(image.pixels)
        result.detail(f"Sharpness(LapVar): {sharpness:.1f}")
        points, level = tier_at_least(sharpness, policy.sharpness_cuts, policy.sharpness)
        result.add(points)
        if level is Level.MID:
            result.advise("Slight blur.")
        elif level is Level.LOW:
            result.advise("Blurry: rescan.")

        contrast = pixels.stddev(image.pixels)
        result.detail(f"Contrast(stddev): {contrast:.1f}")
        points, level = tier_at_least(contrast, policy.contrast_cuts, policy.contrast)
        result.add(points)
        if level is Level.MID:
            result.advise("Low contrast.")
        elif level is Level.LOW:
            result.advise("Very low contrast.")
        return result.build()

    def failure_message(self, exc: PreflightError) -> str:
        if isinstance(exc, DecodeError):
            return "Could not decode lab image"
        return super().failure_message(exc)

"""Quality checks for X-ray scans and CT/MR/US image exports."""

from collections.abc import Sequence
from dataclasses import dataclass

from preflight.analysis.exceptions import DecodeError, PreflightError
from preflight.analysis.policy import ScanExportPolicy
from preflight.analysis.result import AnalysisResult, ResultBuilder
from preflight.analysis.tiering import Level, tier_at_least, tier_at_most
from preflight.analyzers.base import DEFAULT_DEGRADED_SCORE, BaseAnalyzer
from preflight.files.models import FileDescriptor
from preflight.imaging import pixels
from preflight.imaging.base import BaseImageDecoder
from preflight.imaging.models import GrayImage

MED_IMAGING_REMINDERS = (
    "Prefer original DICOM for analysis.",
    "Ensure pixel spacing/orientation metadata is preserved on upload.",
)
XRAY_REMINDERS = (
    "Prefer original DICOM for analysis.",
    "Include the full anatomical region and the laterality marker.",
)

_CENTER = (0.4, 0.4, 0.6, 0.6)
_CORNERS = (
    (0.0, 0.0, 0.1, 0.1),
    (0.9, 0.0, 1.0, 0.1),
    (0.0, 0.9, 0.1, 1.0),
    (0.9, 0.9, 1.0, 1.0),
)
_BACKGROUND = (0.05, 0.45, 0.15, 0.55)


@dataclass(frozen=True)
class ScanMetrics:
    megapixels: float
    sharpness: float
    contrast: float
    uniformity_delta: float
    background_sigma: float
    empty_bins: int
    motion_axis: str
    motion_ratio: float


def measure_scan(image: GrayImage) -> ScanMetrics:
    """Compute every pixel metric the scan policy scores."""
    g, w, h = image.pixels, image.width, image.height
    center = pixels.mean_rect(g, *pixels.region_box(w, h, *_CENTER))
    corner_means = [pixels.mean_rect(g, *pixels.region_box(w, h, *box)) for box in _CORNERS]
    edge = sum(corner_means) / len(corner_means)
    gx, gy = pixels.gradient_sums(g)
    axis, ratio = pixels.motion(gx, gy)
    return ScanMetrics(
        megapixels=image.megapixels,
        sharpness=pixels.laplacian_variance(g),
        contrast=pixels.stddev(g),
        uniformity_delta=abs(center - edge),
        background_sigma=pixels.stddev_rect(g, *pixels.region_box(w, h, *_BACKGROUND)),
        empty_bins=pixels.empty_bins(pixels.histogram(g)),
        motion_axis=axis,
        motion_ratio=ratio,
    )


def score_scan(
    metrics: ScanMetrics, policy: ScanExportPolicy, reminders: Sequence[str] = ()
) -> AnalysisResult:
    result = ResultBuilder()

    result.detail(f"MP: {metrics.megapixels:.2f}")
    points, level = tier_at_least(metrics.megapixels, policy.size_cuts, policy.size)
    result.add(points)
    if level is Level.MID:
        result.advise("Low resolution: prefer a larger matrix.")
    elif level is Level.LOW:
        result.advise("Very low resolution export.")

    result.detail(f"Sharpness(LapVar): {metrics.sharpness:.1f}")
    points, level = tier_at_least(metrics.sharpness, policy.sharpness_cuts, policy.sharpness)
    result.add(points)
    if level is Level.MID:
        result.advise("Slight blur: check for motion.")
    elif level is Level.LOW:
        result.advise("Blurry: repeat acquisition or export.")

    result.detail(f"Contrast(stddev): {metrics.contrast:.1f}")
    points, level = tier_at_least(metrics.contrast, policy.contrast_cuts, policy.contrast)
    result.add(points)
    if level is Level.MID:
        result.advise("Low dynamic range: window/level suboptimal.")
    elif level is Level.LOW:
        result.advise("Very low dynamic range.")

    result.detail(
        f"Uniformity delta(center-edge): {metrics.uniformity_delta:.1f}, "
        f"BG noise sigma: {metrics.background_sigma:.1f}, "
        f"Motion axis: {metrics.motion_axis} (ratio {metrics.motion_ratio:.2f})"
    )
    points, level = tier_at_most(metrics.uniformity_delta, policy.uniformity_cuts, policy.uniformity)
    result.add(points)
    if level is not Level.HIGH:
        result.advise("Uneven illumination between center and edges.")

    result.detail(f"Empty histogram bins: {metrics.empty_bins}")
    if metrics.empty_bins > policy.banding_empty_bins:
        result.add(policy.banding_penalty)
        result.advise(
            "Posterization/banding detected: avoid 8-bit re-exports; keep original DICOM."
        )
    if metrics.background_sigma >= policy.noise_sigma:
        result.add(policy.noise_penalty)
        result.advise("High noise: adjust dose, averaging, or reconstruction.")
    if metrics.motion_ratio >= policy.motion_ratio:
        result.add(policy.motion_penalty)
        result.advise("Motion artifacts likely: consider breath-hold or stabilization.")

    result.add(policy.bonus)
    result.advise(*reminders)
    return result.build()


class ScanExportAnalyzer(BaseAnalyzer):
    """Scores decoded radiograph or cross-sectional exports by pixel statistics."""

    label = "image export"

    def __init__(
        self,
        decoder: BaseImageDecoder,
        policy: ScanExportPolicy,
        *,
        reminders: Sequence[str] = MED_IMAGING_REMINDERS,
        degraded_score: float = DEFAULT_DEGRADED_SCORE,
    ) -> None:
        super().__init__(degraded_score=degraded_score)
        self._decoder = decoder
        self._policy = policy
        self._reminders = tuple(reminders)

    def _analyze(self, descriptor: FileDescriptor) -> AnalysisResult:
        image = self._decoder.decode(descriptor.read())
        return score_scan(measure_scan(image), self._policy, self._reminders)

    def failure_message(self, exc: PreflightError) -> str:
        if isinstance(exc, DecodeError):
            return "Could not decode image export"
        return super().failure_message(exc)

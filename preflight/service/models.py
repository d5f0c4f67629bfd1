from dataclasses import dataclass

from preflight.analysis.families import Family
from preflight.analysis.result import AnalysisResult
from preflight.analysis.verdict import Thresholds, Verdict


def human_size(size: int) -> str:
    """Format a byte count as B/KB/MB/GB with one decimal above bytes."""
    value = float(size)
    for unit in ("B", "KB", "MB"):
        if value < 1024:
            return f"{int(value)} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


@dataclass(frozen=True)
class PreflightReport:
    """Outcome of preflighting one file, as consumed by the UI and upload gate."""

    file_name: str
    content_type: str
    size: int
    family: Family
    result: AnalysisResult
    thresholds: Thresholds
    verdict: Verdict

    @property
    def upload_allowed(self) -> bool:
        return self.verdict is Verdict.ACCEPT

    def upload_metadata(self) -> dict[str, object]:
        """Quality fields sent alongside an upload."""
        return {
            "preflight_score": self.result.score,
            "preflight_valid": self.upload_allowed,
            "preflight_tag": self.family.value,
        }

    def to_dict(self) -> dict[str, object]:
        return {
            "file_name": self.file_name,
            "content_type": self.content_type,
            "size": self.size,
            "family": self.family.value,
            "score": self.result.score,
            "verdict": self.verdict.value,
            "upload_allowed": self.upload_allowed,
            "degraded": self.result.degraded,
            "thresholds": {
                "accept": self.thresholds.accept,
                "borderline": self.thresholds.borderline,
            },
            "messages": list(self.result.messages),
            "details": list(self.result.details),
        }

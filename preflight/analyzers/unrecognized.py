from preflight.analysis.exceptions import PreflightError, UnsupportedFormatError
from preflight.analysis.result import AnalysisResult
from preflight.analyzers.base import BaseAnalyzer
from preflight.files.models import FileDescriptor

FORMAT_TIP = "Tip: ensure proper file extension or MIME type."


class UnrecognizedAnalyzer(BaseAnalyzer):
    """Files no family accepts: UnsupportedFormatError becomes a neutral result."""

    label = "unrecognized file"

    def __init__(self, score: float = 50) -> None:
        super().__init__(degraded_score=score)

    def _analyze(self, descriptor: FileDescriptor) -> AnalysisResult:
        raise UnsupportedFormatError(
            f"{descriptor.name} ({descriptor.content_type or 'unknown type'})"
        )

    def degraded(self, exc: PreflightError) -> AnalysisResult:
        result = super().degraded(exc)
        return AnalysisResult.of(
            result.score, [*result.messages, FORMAT_TIP], result.details, degraded=True
        )

    def failure_message(self, exc: PreflightError) -> str:
        return "No analyzer matched file type"

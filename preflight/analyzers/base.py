from abc import ABC, abstractmethod
from typing import ClassVar

from preflight.analysis.exceptions import PreflightError
from preflight.analysis.result import AnalysisResult
from preflight.files.models import FileDescriptor
from preflight.logging.logger import Log

DEFAULT_DEGRADED_SCORE = 50


class BaseAnalyzer(ABC):
    """Contract for all family analyzers.

    ``analyze`` is the only public entry point. Collaborator failures raised
    as ``PreflightError`` inside ``_analyze`` are turned into a degraded
    result by ``degraded`` so callers always receive a score.
    """

    label: ClassVar[str] = "file"

    def __init__(self, *, degraded_score: float = DEFAULT_DEGRADED_SCORE) -> None:
        self._degraded_score = degraded_score

    def analyze(self, descriptor: FileDescriptor) -> AnalysisResult:
        """Score one file; never raises for collaborator failures."""
        try:
            return self._analyze(descriptor)
        except PreflightError as exc:
            Log.warning(f"{self.label} analysis of {descriptor.name} degraded: {exc}")
            return self.degraded(exc)

    @abstractmethod
    def _analyze(self, descriptor: FileDescriptor) -> AnalysisResult:
        raise NotImplementedError

    def degraded(self, exc: PreflightError) -> AnalysisResult:
        """Fixed reduced-confidence result carrying the error description."""
        return AnalysisResult.of(
            self._degraded_score,
            messages=[f"{self.failure_message(exc)}: {exc}"],
            details=[f"{type(exc).__name__}: {exc}"],
            degraded=True,
        )

    def failure_message(self, exc: PreflightError) -> str:
        return f"Could not analyze {self.label}, limited checks"

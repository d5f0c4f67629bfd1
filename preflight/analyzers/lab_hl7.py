import re

from preflight.analysis.exceptions import ParseError, PreflightError
from preflight.analysis.policy import Hl7Policy
from preflight.analysis.result import AnalysisResult, ResultBuilder
from preflight.analyzers.base import DEFAULT_DEGRADED_SCORE, BaseAnalyzer
from preflight.files.models import FileDescriptor

_SEGMENT_SPLIT_RE = re.compile(r"\r\n|\r|\n")


def segment_ids(text: str) -> list[str]:
    """Segment identifiers (text before the first '|') of every non-empty line."""
    ids = (line.split("|", 1)[0].strip() for line in _SEGMENT_SPLIT_RE.split(text))
    return [segment for segment in ids if segment]


class LabHl7Analyzer(BaseAnalyzer):
    """Segment presence checks for HL7 v2 result messages."""

    label = "HL7"

    def __init__(
        self, policy: Hl7Policy, *, degraded_score: float = DEFAULT_DEGRADED_SCORE
    ) -> None:
        super().__init__(degraded_score=degraded_score)
        self._policy = policy

    def _analyze(self, descriptor: FileDescriptor) -> AnalysisResult:
        data = descriptor.read()
        if b"\x00" in data:
            raise ParseError("message contains binary data")
        return self.score(segment_ids(data.decode("utf-8", errors="replace")))

    def score(self, segments: list[str]) -> AnalysisResult:
        policy = self._policy
        result = ResultBuilder()
        present = set(segments)
        results = segments.count("OBX")

        if {"MSH", "PID"} <= present:
            result.add(policy.header_identity)
        else:
            result.advise("Missing MSH/PID segments.")
        if "OBR" in present:
            result.add(policy.order)
        else:
            result.advise("Missing OBR order segment.")
        if results:
            result.add(min(policy.results_cap, policy.result_each * results))
        else:
            result.advise("No OBX result segments.")

        result.add(policy.completion)
        result.detail(f"Segments: {len(segments)} (OBX: {results})")
        return result.build()

    def failure_message(self, exc: PreflightError) -> str:
        return "HL7 parse error"

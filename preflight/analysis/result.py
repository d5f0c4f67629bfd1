"""Analysis results and the aggregation rules every analyzer shares."""

from collections.abc import Iterable
from dataclasses import dataclass, field

MIN_SCORE = 0
MAX_SCORE = 100


def clamp_score(score: float) -> int:
    """Round and clamp an accumulated score to [0, 100]."""
    return max(MIN_SCORE, min(MAX_SCORE, int(round(score))))


def dedupe_messages(messages: Iterable[object]) -> tuple[str, ...]:
    """Trim messages, drop empty ones and keep the first occurrence of each."""
    seen: set[str] = set()
    out: list[str] = []
    for message in messages:
        key = str(message).strip()
        if key and key not in seen:
            seen.add(key)
            out.append(key)
    return tuple(out)


@dataclass(frozen=True)
class AnalysisResult:
    """Score, advisory messages and raw metric lines for one analyzed file."""

    score: int
    messages: tuple[str, ...] = ()
    details: tuple[str, ...] = ()
    degraded: bool = False

    @classmethod
    def of(
        cls,
        score: float,
        messages: Iterable[str] = (),
        details: Iterable[str] = (),
        *,
        degraded: bool = False,
    ) -> "AnalysisResult":
        """Build a result, applying the clamp and message de-duplication."""
        return cls(
            score=clamp_score(score),
            messages=dedupe_messages(messages),
            details=tuple(details),
            degraded=degraded,
        )


@dataclass
class ResultBuilder:
    """Accumulates points, advisories and details while checks run."""

    score: float = 0.0
    messages: list[str] = field(default_factory=list)
    details: list[str] = field(default_factory=list)

    def add(self, points: float) -> "ResultBuilder":
        self.score += points
        return self

    def advise(self, *messages: str) -> "ResultBuilder":
        self.messages.extend(messages)
        return self

    def detail(self, line: str) -> "ResultBuilder":
        self.details.append(line)
        return self

    def build(self) -> AnalysisResult:
        return AnalysisResult.of(self.score, self.messages, self.details)

from dataclasses import dataclass
from enum import Enum


class Verdict(str, Enum):
    """Upload-gate classification of a score."""

    ACCEPT = "accept"
    BORDERLINE = "borderline"
    REJECT = "reject"


@dataclass(frozen=True)
class Thresholds:
    """Accept/borderline cut points for one document family."""

    accept: int = 85
    borderline: int = 70

    def __post_init__(self) -> None:
        if self.accept <= self.borderline:
            raise ValueError(
                f"accept ({self.accept}) must be greater than borderline ({self.borderline})"
            )


def classify(score: int, thresholds: Thresholds) -> Verdict:
    """Map a score to a verdict; monotonic in score for fixed thresholds."""
    if score >= thresholds.accept:
        return Verdict.ACCEPT
    if score >= thresholds.borderline:
        return Verdict.BORDERLINE
    return Verdict.REJECT

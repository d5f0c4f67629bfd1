from enum import Enum

from preflight.analysis.policy import Cuts, Tier


class Level(str, Enum):
    HIGH = "high"
    MID = "mid"
    LOW = "low"


def tier_at_least(value: float, cuts: Cuts, points: Tier) -> tuple[float, Level]:
    """Bracket a higher-is-better metric: ``>= high`` then ``>= mid``."""
    if value >= cuts.high:
        return points.high, Level.HIGH
    if value >= cuts.mid:
        return points.mid, Level.MID
    return points.low, Level.LOW


def tier_at_most(value: float, cuts: Cuts, points: Tier) -> tuple[float, Level]:
    """Bracket a lower-is-better metric: ``<= high`` then ``<= mid``."""
    if value <= cuts.high:
        return points.high, Level.HIGH
    if value <= cuts.mid:
        return points.mid, Level.MID
    return points.low, Level.LOW


def interpolate(value: float, low: float, high: float, points: float) -> float:
    """Linear score between two bounds, flat outside them."""
    if high <= low:
        return points if value >= high else 0.0
    fraction = (value - low) / (high - low)
    return points * max(0.0, min(1.0, fraction))

import pytest

from preflight.analysis.policy import Cuts, Tier
from preflight.analysis.tiering import Level, interpolate, tier_at_least, tier_at_most

POINTS = Tier(20, 12, 6)


class TestTierAtLeast:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(150, (20, Level.HIGH)), (120, (20, Level.HIGH)), (60, (12, Level.MID)), (59.9, (6, Level.LOW))],
    )
    def test_brackets(self, value: float, expected: tuple[float, Level]) -> None:
        assert tier_at_least(value, Cuts(120, 60), POINTS) == expected


class TestTierAtMost:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, (20, Level.HIGH)), (8, (20, Level.HIGH)), (20, (12, Level.MID)), (20.1, (6, Level.LOW))],
    )
    def test_brackets(self, value: float, expected: tuple[float, Level]) -> None:
        assert tier_at_most(value, Cuts(8, 20), POINTS) == expected


class TestInterpolate:
    def test_below_range_is_zero(self) -> None:
        assert interpolate(0.2, 0.5, 3.0, 40) == 0.0

    def test_above_range_is_full(self) -> None:
        assert interpolate(12.0, 0.5, 3.0, 40) == 40

    def test_midpoint(self) -> None:
        assert interpolate(1.75, 0.5, 3.0, 40) == pytest.approx(20.0)

    def test_degenerate_range(self) -> None:
        assert interpolate(1.0, 1.0, 1.0, 10) == 10
        assert interpolate(0.5, 1.0, 1.0, 10) == 0.0

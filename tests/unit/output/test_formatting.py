"""Tests for display formatting."""
from __future__ import annotations

import pytest

from hoopstats.output.formatting import (
    RatingTier,
    format_made_attempted,
    format_minutes,
    format_number,
    format_percentage,
    format_plus_minus,
    period_label,
    rating_tier,
)


class TestRatingTier:
    """Tests for badge thresholds."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (22.0, RatingTier.HIGH),
            (15.0, RatingTier.HIGH),
            (14.9, RatingTier.MEDIUM),
            (10.0, RatingTier.MEDIUM),
            (9.9, RatingTier.LOW),
            (-3.0, RatingTier.LOW),
        ],
    )
    def test_default_thresholds(self, value: float, expected: RatingTier) -> None:
        """Thresholds should be inclusive at 15 and 10."""
        assert rating_tier(value) is expected

    def test_custom_thresholds(self) -> None:
        """Custom thresholds should be honored."""
        assert rating_tier(12.0, high=12.0, medium=5.0) is RatingTier.HIGH
        assert rating_tier(4.0, high=12.0, medium=5.0) is RatingTier.LOW


class TestFormatting:
    """Tests for number formatting helpers."""

    def test_percentage(self) -> None:
        """Percentages should round to one decimal by default."""
        assert format_percentage(46.666) == "46.7%"
        assert format_percentage(0.0) == "0.0%"
        assert format_percentage(55.556, decimals=2) == "55.56%"

    def test_number(self) -> None:
        """Whole numbers should drop decimals."""
        assert format_number(18) == "18"
        assert format_number(16.0) == "16"
        assert format_number(3.24) == "3.2"
        assert format_number(3.75, decimals=2) == "3.75"
        assert format_number(9.96) == "10"
        assert format_number(-0.04) == "0"

    def test_minutes(self) -> None:
        """Fractional minutes should render as mm:ss."""
        assert format_minutes(32.5) == "32:30"
        assert format_minutes(0) == "0:00"
        assert format_minutes(6.25) == "6:15"

    def test_plus_minus(self) -> None:
        """Positive plus/minus should carry an explicit sign."""
        assert format_plus_minus(7) == "+7"
        assert format_plus_minus(-3) == "-3"
        assert format_plus_minus(0) == "0"
        assert format_plus_minus(-0.4) == "0"
        assert format_plus_minus(0.3) == "0"
        assert format_plus_minus(0.6) == "+1"
        assert format_plus_minus(-0.04, decimals=1) == "0.0"
        assert format_plus_minus(2.46, decimals=1) == "+2.5"

    def test_made_attempted(self) -> None:
        """Made/attempted pairs should render with a slash."""
        assert format_made_attempted(7, 15) == "7/15"


class TestPeriodLabel:
    """Tests for period labels."""

    @pytest.mark.parametrize(
        ("period", "label"),
        [(1, "Q1"), (4, "Q4"), (5, "OT1"), (7, "OT3")],
    )
    def test_labels(self, period: int, label: str) -> None:
        """Regulation periods are quarters; later periods are overtimes."""
        assert period_label(period) == label

    def test_custom_regulation(self) -> None:
        """Two-half games should go to overtime after period 2."""
        assert period_label(3, regulation_periods=2) == "OT1"

"""Display formatting for stats and ratings.

Example:
    >>> format_percentage(46.666)
    '46.7%'
    >>> format_minutes(32.5)
    '32:30'
    >>> rating_tier(16.0)
    <RatingTier.HIGH: 'high'>
"""

from __future__ import annotations

from enum import Enum

# Default badge thresholds for EFF / GmSc / IoS
HIGH_RATING_THRESHOLD: float = 15.0
MEDIUM_RATING_THRESHOLD: float = 10.0

REGULATION_PERIODS: int = 4


class RatingTier(Enum):
    """Badge tier for a composite metric."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def rating_tier(
    value: float,
    high: float = HIGH_RATING_THRESHOLD,
    medium: float = MEDIUM_RATING_THRESHOLD,
) -> RatingTier:
    """Classify a metric value against badge thresholds (inclusive)."""
    if value >= high:
        return RatingTier.HIGH
    if value >= medium:
        return RatingTier.MEDIUM
    return RatingTier.LOW


def format_percentage(value: float, decimals: int = 1) -> str:
    """Format a 0-100 percentage, e.g. ``46.7%``."""
    return f"{value:.{decimals}f}%"


def format_number(value: float, decimals: int = 1) -> str:
    """Format a number with fixed decimals; whole numbers drop the decimals."""
    text = f"{value:.{decimals}f}"
    rounded = float(text)
    if rounded.is_integer():
        return str(int(rounded))
    return text


def format_minutes(minutes: float) -> str:
    """Format fractional minutes as ``mm:ss``."""
    total_seconds = round(minutes * 60)
    return f"{total_seconds // 60}:{total_seconds % 60:02d}"


def format_plus_minus(value: float, decimals: int = 0) -> str:
    """Format plus/minus with an explicit sign for positive values."""
    rounded = float(f"{value:.{decimals}f}")
    # Values that round to zero carry no sign
    if rounded == 0:
        rounded = 0.0
    text = f"{rounded:.{decimals}f}"
    if rounded > 0:
        return f"+{text}"
    return text


def format_made_attempted(made: float, attempted: float, decimals: int = 0) -> str:
    """Format a made/attempted pair, e.g. ``7/15``."""
    return f"{made:.{decimals}f}/{attempted:.{decimals}f}"


def period_label(period: int, regulation_periods: int = REGULATION_PERIODS) -> str:
    """Return ``Q1``-``Q4`` in regulation and ``OT1`` onwards in overtime."""
    if period <= regulation_periods:
        return f"Q{period}"
    return f"OT{period - regulation_periods}"

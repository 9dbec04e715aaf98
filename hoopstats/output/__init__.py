"""Presentation helpers: formatting, box scores and shot charts.

Submodules:
    formatting: Percentages, minutes, plus/minus and rating badges
    boxscore: Per-team box scores and game leaders
    shotchart: Shot filtering, zone splits and court classification
"""

from __future__ import annotations

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
from hoopstats.output.boxscore import BoxScore, BoxScoreRow, GameLeader, game_leaders
from hoopstats.output.shotchart import (
    ShootingSummary,
    ShotChart,
    ShotDistance,
    ShotRecord,
    ShotResult,
    ShotZone,
    ZoneStats,
    classify_location,
)

__all__ = [
    "BoxScore",
    "BoxScoreRow",
    "GameLeader",
    "RatingTier",
    "ShootingSummary",
    "ShotChart",
    "ShotDistance",
    "ShotRecord",
    "ShotResult",
    "ShotZone",
    "ZoneStats",
    "classify_location",
    "format_made_attempted",
    "format_minutes",
    "format_number",
    "format_percentage",
    "format_plus_minus",
    "game_leaders",
    "period_label",
    "rating_tier",
]

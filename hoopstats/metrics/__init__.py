"""Box-score metrics for players and teams.

Submodules:
    statline: Raw per-game counting-stat record
    calculator: Shooting splits, EFF, GmSc, IoS and per-game rates
    aggregation: Season totals, averages and per-player summaries
    team: Team totals, eFG%, TS% and AST/TO

Example:
    >>> from hoopstats.metrics import calculate_advanced_metrics, season_averages
    >>> averages = season_averages(game_log)
    >>> metrics = calculate_advanced_metrics(averages)
"""

from __future__ import annotations

from hoopstats.metrics.aggregation import (
    PlayerSeasonSummary,
    aggregate_by_player,
    aggregate_season_totals,
    season_averages,
    statlines_to_frame,
    summarize_player,
)
from hoopstats.metrics.calculator import (
    AdvancedMetrics,
    MetricsCalculator,
    ShootingPercentages,
    calculate_advanced_metrics,
    efficiency,
    game_score,
    index_of_success,
    shooting_percentages,
    total_rebounds,
    two_point_attempted,
    two_point_made,
)
from hoopstats.metrics.statline import (
    COUNTING_FIELDS,
    PlayerGameStatline,
    empty_statline,
)
from hoopstats.metrics.team import TeamMetrics, calculate_team_metrics, team_totals

__all__ = [
    "COUNTING_FIELDS",
    "AdvancedMetrics",
    "MetricsCalculator",
    "PlayerGameStatline",
    "PlayerSeasonSummary",
    "ShootingPercentages",
    "TeamMetrics",
    "aggregate_by_player",
    "aggregate_season_totals",
    "calculate_advanced_metrics",
    "calculate_team_metrics",
    "efficiency",
    "empty_statline",
    "game_score",
    "index_of_success",
    "season_averages",
    "shooting_percentages",
    "statlines_to_frame",
    "summarize_player",
    "team_totals",
    "total_rebounds",
    "two_point_attempted",
    "two_point_made",
]

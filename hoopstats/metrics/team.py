"""Team-level game metrics.

Team totals are the field-wise sum of the team's player statlines. On top of
the player shooting splits, teams get effective field-goal percentage, true
shooting percentage, assist-to-turnover ratio and a points distribution.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass

from hoopstats.metrics.aggregation import aggregate_season_totals
from hoopstats.metrics.calculator import (
    percentage,
    shooting_percentages,
    total_rebounds,
    two_point_made,
)
from hoopstats.metrics.statline import PlayerGameStatline
from hoopstats.types import TeamId

# Free-throw attempt weight in the true-shooting denominator
TS_FREE_THROW_WEIGHT: float = 0.44


@dataclass(frozen=True)
class TeamMetrics:
    """Derived team metrics for one game.

    Attributes:
        team_id: Team identity.
        totals: Summed team statline.
        total_rebounds: ORB + DRB credited to players.
        field_goal_percentage: FG%.
        three_point_percentage: 3P%.
        free_throw_percentage: FT%.
        two_point_percentage: 2P%.
        effective_field_goal_percentage: eFG%, threes weighted 1.5x.
        true_shooting_percentage: TS%.
        assist_to_turnover_ratio: AST/TO, or raw assists with no turnovers.
        two_point_points: Points from two-pointers.
        three_point_points: Points from three-pointers.
        free_throw_points: Points from free throws.
    """

    team_id: TeamId
    totals: PlayerGameStatline
    total_rebounds: float
    field_goal_percentage: float
    three_point_percentage: float
    free_throw_percentage: float
    two_point_percentage: float
    effective_field_goal_percentage: float
    true_shooting_percentage: float
    assist_to_turnover_ratio: float
    two_point_points: float
    three_point_points: float
    free_throw_points: float

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary format."""
        data = asdict(self)
        data["totals"] = self.totals.to_dict()
        return data


def team_totals(
    statlines: Sequence[PlayerGameStatline],
    team_id: TeamId,
) -> PlayerGameStatline:
    """Sum a team's player statlines into one record stamped with the team id."""
    totals = aggregate_season_totals(statlines)
    totals.player_id = team_id
    return totals


def effective_field_goal_percentage(stat: PlayerGameStatline) -> float:
    """Return eFG% = 100 * (FGM + 0.5 * 3PM) / FGA, or 0.0 with no attempts."""
    return percentage(stat.fg_made + 0.5 * stat.three_made, stat.fg_attempted)


def true_shooting_percentage(stat: PlayerGameStatline) -> float:
    """Return TS% = 100 * PTS / (2 * (FGA + 0.44 * FTA)), or 0.0 with no attempts."""
    shooting_possessions = stat.fg_attempted + TS_FREE_THROW_WEIGHT * stat.ft_attempted
    return percentage(stat.points, 2 * shooting_possessions)


def assist_to_turnover_ratio(stat: PlayerGameStatline) -> float:
    """Return AST/TO; with no turnovers the raw assist count is returned."""
    if stat.turnovers > 0:
        return stat.assists / stat.turnovers
    return float(stat.assists)


def calculate_team_metrics(
    statlines: Sequence[PlayerGameStatline],
    team_id: TeamId,
) -> TeamMetrics:
    """Calculate team metrics from the team's player statlines.

    Args:
        statlines: Statlines of every player on the team for one game.
        team_id: Team identity for the totals record.

    Returns:
        TeamMetrics for the game.
    """
    totals = team_totals(statlines, team_id)
    shooting = shooting_percentages(totals)

    return TeamMetrics(
        team_id=team_id,
        totals=totals,
        total_rebounds=total_rebounds(totals),
        field_goal_percentage=shooting.field_goal_percentage,
        three_point_percentage=shooting.three_point_percentage,
        free_throw_percentage=shooting.free_throw_percentage,
        two_point_percentage=shooting.two_point_percentage,
        effective_field_goal_percentage=effective_field_goal_percentage(totals),
        true_shooting_percentage=true_shooting_percentage(totals),
        assist_to_turnover_ratio=assist_to_turnover_ratio(totals),
        two_point_points=2 * two_point_made(totals),
        three_point_points=3 * totals.three_made,
        free_throw_points=totals.ft_made,
    )

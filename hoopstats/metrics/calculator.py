"""Box-score metrics calculator.

This module derives shooting splits and composite performance indices from
a player's (or team's) raw counting stats:

- EFF (Efficiency): PTS + REB + AST + STL + BLK - missed FG - missed FT - TO
- GmSc (Game Score): Hollinger's weighted box-score composite
- IoS (Index of Success): positive actions (incl. fouls drawn) minus
  negative actions (incl. times blocked)

Every function is pure. Inputs are never validated or mutated; malformed
statlines (e.g. more makes than attempts) propagate into correspondingly
malformed results. Percentages are zero-guarded and returned on a 0-100
scale, unrounded.

Example:
    >>> from hoopstats.metrics import MetricsCalculator
    >>> metrics = MetricsCalculator.calculate_advanced_metrics(stat)
    >>> print(f"EFF {metrics.efficiency:.0f}, GmSc {metrics.game_score:.1f}")
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

from hoopstats.types import InvalidGamesPlayedError

if TYPE_CHECKING:
    from hoopstats.metrics.statline import PlayerGameStatline

# =============================================================================
# Constants
# =============================================================================

# Game Score coefficients
GMSC_FG_MADE: float = 0.4
GMSC_FG_ATTEMPTED: float = 0.7
GMSC_FT_MISSED: float = 0.4
GMSC_ORB: float = 0.7
GMSC_DRB: float = 0.3
GMSC_ASSISTS: float = 0.7
GMSC_BLOCKS: float = 0.7
GMSC_FOULS: float = 0.4


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class ShootingPercentages:
    """Zero-guarded shooting percentages on a 0-100 scale."""

    field_goal_percentage: float
    three_point_percentage: float
    free_throw_percentage: float
    two_point_percentage: float


@dataclass(frozen=True)
class AdvancedMetrics:
    """Derived metrics for a statline.

    Attributes:
        efficiency: EFF.
        game_score: GmSc.
        index_of_success: IoS.
        field_goal_percentage: FG%.
        three_point_percentage: 3P%.
        free_throw_percentage: FT%.
        two_point_percentage: 2P%.
        total_rebounds: ORB + DRB.
        two_point_made: FGM - 3PM.
        two_point_attempted: FGA - 3PA.
        minutes_per_game: Minutes divided by games played.
        points_per_game: Points divided by games played.
        rebounds_per_game: Total rebounds divided by games played.
        assists_per_game: Assists divided by games played.
    """

    efficiency: float
    game_score: float
    index_of_success: float
    field_goal_percentage: float
    three_point_percentage: float
    free_throw_percentage: float
    two_point_percentage: float
    total_rebounds: float
    two_point_made: float
    two_point_attempted: float
    minutes_per_game: float
    points_per_game: float
    rebounds_per_game: float
    assists_per_game: float

    def to_dict(self) -> dict[str, float]:
        """Convert metrics to dictionary format."""
        return asdict(self)


# =============================================================================
# Derived counting stats
# =============================================================================


def two_point_made(stat: PlayerGameStatline) -> float:
    """Return two-pointers made (FGM - 3PM)."""
    return stat.fg_made - stat.three_made


def two_point_attempted(stat: PlayerGameStatline) -> float:
    """Return two-pointers attempted (FGA - 3PA)."""
    return stat.fg_attempted - stat.three_attempted


def total_rebounds(stat: PlayerGameStatline) -> float:
    """Return total rebounds (ORB + DRB)."""
    return stat.orb + stat.drb


def percentage(made: float, attempted: float) -> float:
    """Return ``100 * made / attempted``, or 0.0 when nothing was attempted."""
    if attempted > 0:
        return made / attempted * 100
    return 0.0


def shooting_percentages(stat: PlayerGameStatline) -> ShootingPercentages:
    """Calculate FG%, 3P%, FT% and 2P% with division-by-zero protection.

    Args:
        stat: Statline to read.

    Returns:
        ShootingPercentages; any split with no attempts is exactly 0.0.
    """
    return ShootingPercentages(
        field_goal_percentage=percentage(stat.fg_made, stat.fg_attempted),
        three_point_percentage=percentage(stat.three_made, stat.three_attempted),
        free_throw_percentage=percentage(stat.ft_made, stat.ft_attempted),
        two_point_percentage=percentage(
            two_point_made(stat), two_point_attempted(stat)
        ),
    )


# =============================================================================
# Composite indices
# =============================================================================


def efficiency(stat: PlayerGameStatline) -> float:
    """Calculate Efficiency (EFF).

    EFF = PTS + REB + AST + STL + BLK - (FGA - FGM) - (FTA - FTM) - TO
    """
    field_goal_misses = stat.fg_attempted - stat.fg_made
    free_throw_misses = stat.ft_attempted - stat.ft_made

    return (
        stat.points
        + total_rebounds(stat)
        + stat.assists
        + stat.steals
        + stat.blocks
        - field_goal_misses
        - free_throw_misses
        - stat.turnovers
    )


def game_score(stat: PlayerGameStatline) -> float:
    """Calculate Game Score (GmSc).

    GmSc = PTS + 0.4*FGM - 0.7*FGA - 0.4*(FTA - FTM) + 0.7*ORB + 0.3*DRB
           + STL + 0.7*AST + 0.7*BLK - 0.4*PF - TO
    """
    free_throw_misses = stat.ft_attempted - stat.ft_made

    return (
        stat.points
        + GMSC_FG_MADE * stat.fg_made
        - GMSC_FG_ATTEMPTED * stat.fg_attempted
        - GMSC_FT_MISSED * free_throw_misses
        + GMSC_ORB * stat.orb
        + GMSC_DRB * stat.drb
        + stat.steals
        + GMSC_ASSISTS * stat.assists
        + GMSC_BLOCKS * stat.blocks
        - GMSC_FOULS * stat.fouls
        - stat.turnovers
    )


def index_of_success(stat: PlayerGameStatline) -> float:
    """Calculate Index of Success (IoS).

    IoS = (PTS + ORB + DRB + AST + STL + BLK + fouls drawn)
          - ((FGA - FGM) + (FTA - FTM) + TO + times blocked)
    """
    field_goal_misses = stat.fg_attempted - stat.fg_made
    free_throw_misses = stat.ft_attempted - stat.ft_made

    positive_actions = (
        stat.points
        + stat.orb
        + stat.drb
        + stat.assists
        + stat.steals
        + stat.blocks
        + stat.fouls_drawn
    )
    negative_actions = (
        field_goal_misses + free_throw_misses + stat.turnovers + stat.blocks_received
    )

    return positive_actions - negative_actions


def calculate_advanced_metrics(
    stat: PlayerGameStatline,
    games_played: int = 1,
) -> AdvancedMetrics:
    """Calculate all advanced metrics for a statline.

    Args:
        stat: Single-game statline or season totals.
        games_played: Divisor for the per-game rates.

    Returns:
        AdvancedMetrics bundle.

    Raises:
        InvalidGamesPlayedError: If games_played is less than one.
    """
    if games_played < 1:
        raise InvalidGamesPlayedError(
            f"games_played must be at least 1, got {games_played}"
        )

    shooting = shooting_percentages(stat)
    rebounds = total_rebounds(stat)

    return AdvancedMetrics(
        efficiency=efficiency(stat),
        game_score=game_score(stat),
        index_of_success=index_of_success(stat),
        field_goal_percentage=shooting.field_goal_percentage,
        three_point_percentage=shooting.three_point_percentage,
        free_throw_percentage=shooting.free_throw_percentage,
        two_point_percentage=shooting.two_point_percentage,
        total_rebounds=rebounds,
        two_point_made=two_point_made(stat),
        two_point_attempted=two_point_attempted(stat),
        minutes_per_game=stat.minutes_played / games_played,
        points_per_game=stat.points / games_played,
        rebounds_per_game=rebounds / games_played,
        assists_per_game=stat.assists / games_played,
    )


# =============================================================================
# Calculator facade
# =============================================================================


class MetricsCalculator:
    """Namespace bundling the metric functions.

    Example:
        >>> MetricsCalculator.shooting_percentages(stat).field_goal_percentage
        46.666666666666664
    """

    get_two_point_made = staticmethod(two_point_made)
    get_two_point_attempted = staticmethod(two_point_attempted)
    get_total_rebounds = staticmethod(total_rebounds)
    shooting_percentages = staticmethod(shooting_percentages)
    efficiency = staticmethod(efficiency)
    game_score = staticmethod(game_score)
    index_of_success = staticmethod(index_of_success)
    calculate_advanced_metrics = staticmethod(calculate_advanced_metrics)

    @staticmethod
    def aggregate_season_totals(
        statlines: list[PlayerGameStatline],
    ) -> PlayerGameStatline:
        """Sum statlines field-wise (see ``aggregation.aggregate_season_totals``)."""
        from hoopstats.metrics.aggregation import aggregate_season_totals

        return aggregate_season_totals(statlines)

    @staticmethod
    def season_averages(statlines: list[PlayerGameStatline]) -> PlayerGameStatline:
        """Average statlines field-wise (see ``aggregation.season_averages``)."""
        from hoopstats.metrics.aggregation import season_averages

        return season_averages(statlines)

    @staticmethod
    def empty_statline(player_id: str) -> PlayerGameStatline:
        """Return a zero-valued statline."""
        from hoopstats.metrics.statline import empty_statline

        return empty_statline(player_id)

"""Season aggregation of player statlines.

Totals are plain field-wise sums; averages divide every counting field by
the number of games. Averaged statlines hold per-game rates and must not be
fed back into ``aggregate_season_totals`` expecting counting semantics.

Example:
    >>> from hoopstats.metrics.aggregation import season_averages
    >>> averages = season_averages(game_log)
    >>> print(f"{averages.points:.1f} PPG")
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import pandas as pd

from hoopstats.metrics.calculator import (
    AdvancedMetrics,
    calculate_advanced_metrics,
    efficiency,
    game_score,
    index_of_success,
    total_rebounds,
)
from hoopstats.metrics.statline import (
    COUNTING_FIELDS,
    PlayerGameStatline,
    empty_statline,
)
from hoopstats.types import PlayerId


@dataclass(frozen=True)
class PlayerSeasonSummary:
    """Season view of one player.

    Attributes:
        player_id: Player identity.
        games_played: Number of statlines aggregated.
        totals: Field-wise sums.
        averages: Field-wise per-game averages.
        advanced: Metrics over the totals with per-game rates over games_played.
    """

    player_id: PlayerId
    games_played: int
    totals: PlayerGameStatline
    averages: PlayerGameStatline
    advanced: AdvancedMetrics


def aggregate_season_totals(
    statlines: Sequence[PlayerGameStatline],
) -> PlayerGameStatline:
    """Sum every counting field across statlines.

    Args:
        statlines: Game statlines, typically for one player.

    Returns:
        Totals statline carrying the first entry's identity, or an all-zero
        statline with an empty identity when no statlines are given.
    """
    if not statlines:
        return empty_statline("")

    totals = empty_statline(statlines[0].player_id)
    for stat in statlines:
        for name in COUNTING_FIELDS:
            setattr(totals, name, getattr(totals, name) + getattr(stat, name))
    return totals


def season_averages(statlines: Sequence[PlayerGameStatline]) -> PlayerGameStatline:
    """Average every counting field across statlines.

    Args:
        statlines: Game statlines, typically for one player.

    Returns:
        Statline-shaped record of per-game rates; all-zero when empty.
    """
    if not statlines:
        return empty_statline("")

    games_played = len(statlines)
    totals = aggregate_season_totals(statlines)
    averages = empty_statline(totals.player_id)
    for name in COUNTING_FIELDS:
        setattr(averages, name, getattr(totals, name) / games_played)
    return averages


def summarize_player(statlines: Sequence[PlayerGameStatline]) -> PlayerSeasonSummary:
    """Build totals, averages and advanced metrics for one player's games.

    Args:
        statlines: Non-empty list of the player's game statlines.

    Returns:
        PlayerSeasonSummary for the player.

    Raises:
        InvalidGamesPlayedError: If statlines is empty.
    """
    totals = aggregate_season_totals(statlines)
    return PlayerSeasonSummary(
        player_id=totals.player_id,
        games_played=len(statlines),
        totals=totals,
        averages=season_averages(statlines),
        advanced=calculate_advanced_metrics(totals, len(statlines)),
    )


def aggregate_by_player(
    statlines: Iterable[PlayerGameStatline],
) -> dict[PlayerId, PlayerSeasonSummary]:
    """Group statlines by player and summarize each group.

    Args:
        statlines: Statlines for any number of players and games.

    Returns:
        Mapping of player id to season summary, in first-seen order.
    """
    grouped: dict[PlayerId, list[PlayerGameStatline]] = {}
    for stat in statlines:
        grouped.setdefault(stat.player_id, []).append(stat)
    return {
        player_id: summarize_player(games) for player_id, games in grouped.items()
    }


def statlines_to_frame(statlines: Iterable[PlayerGameStatline]) -> pd.DataFrame:
    """Convert statlines to a DataFrame with derived metric columns.

    Args:
        statlines: Statlines to convert.

    Returns:
        DataFrame with ``player_id``, every counting field, and the derived
        ``total_rebounds``, ``efficiency``, ``game_score`` and
        ``index_of_success`` columns.
    """
    records = []
    for stat in statlines:
        record = stat.to_dict()
        record["total_rebounds"] = total_rebounds(stat)
        record["efficiency"] = efficiency(stat)
        record["game_score"] = game_score(stat)
        record["index_of_success"] = index_of_success(stat)
        records.append(record)

    columns = [
        "player_id",
        *COUNTING_FIELDS,
        "total_rebounds",
        "efficiency",
        "game_score",
        "index_of_success",
    ]
    return pd.DataFrame.from_records(records, columns=columns)

"""Box score assembly.

A box score lists every rostered player with their statline and advanced
metrics, rated against the badge thresholds, followed by team totals.
Players without a statline for the game appear with a zero statline.

Example:
    >>> box = BoxScore.for_team(home, record.team_statlines(home.team_id))
    >>> print(box.points, box.team_metrics.true_shooting_percentage)
    >>> leaders = game_leaders([home_box, away_box])
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

import pandas as pd

from hoopstats.config import Settings, get_settings
from hoopstats.metrics.calculator import AdvancedMetrics, calculate_advanced_metrics
from hoopstats.metrics.statline import (
    COUNTING_FIELDS,
    PlayerGameStatline,
    empty_statline,
)
from hoopstats.metrics.team import TeamMetrics, calculate_team_metrics
from hoopstats.output.formatting import RatingTier, rating_tier
from hoopstats.types import PlayerId, TeamId

if TYPE_CHECKING:
    from hoopstats.league.models import Player, Team

# Leader categories and the row attribute they rank by
LEADER_CATEGORIES: tuple[str, ...] = ("points", "assists", "rebounds", "efficiency")


@dataclass(frozen=True)
class BoxScoreRow:
    """One player line of a box score."""

    player_id: PlayerId
    name: str
    number: int | None
    statline: PlayerGameStatline
    advanced: AdvancedMetrics
    efficiency_tier: RatingTier
    game_score_tier: RatingTier
    index_of_success_tier: RatingTier


@dataclass(frozen=True)
class GameLeader:
    """Best player in one leader category."""

    category: str
    player_id: PlayerId
    name: str
    value: float


@dataclass
class BoxScore:
    """Box score for one team in one game.

    Attributes:
        team_id: Team identity.
        team_name: Team display name.
        rows: Player lines in roster order.
        team_metrics: Team totals and team-level metrics.
    """

    team_id: TeamId
    team_name: str
    rows: list[BoxScoreRow]
    team_metrics: TeamMetrics

    @classmethod
    def build(
        cls,
        team_id: TeamId,
        team_name: str,
        statlines: Iterable[PlayerGameStatline],
        players: Mapping[PlayerId, Player] | None = None,
        settings: Settings | None = None,
    ) -> BoxScore:
        """Build a box score from statlines.

        Args:
            team_id: Team identity.
            team_name: Team display name.
            statlines: Statlines for the game.
            players: Roster by player id; every rostered player gets a row,
                with a zero statline if they have none. Without a roster,
                one row per statline labelled by player id.
            settings: Settings for badge thresholds; defaults to the singleton.

        Returns:
            BoxScore for the team.
        """
        settings = settings or get_settings()
        by_player = {stat.player_id: stat for stat in statlines}

        if players is None:
            lines = [(pid, pid, None, stat) for pid, stat in by_player.items()]
        else:
            lines = [
                (
                    pid,
                    player.name,
                    player.number,
                    by_player.get(pid) or empty_statline(pid),
                )
                for pid, player in players.items()
            ]

        rows = [
            cls._row(pid, name, number, stat, settings)
            for pid, name, number, stat in lines
        ]
        team_metrics = calculate_team_metrics([row.statline for row in rows], team_id)
        return cls(
            team_id=team_id,
            team_name=team_name,
            rows=rows,
            team_metrics=team_metrics,
        )

    @classmethod
    def for_team(
        cls,
        team: Team,
        statlines: Iterable[PlayerGameStatline],
        settings: Settings | None = None,
    ) -> BoxScore:
        """Build a box score covering the team's full roster."""
        players = {player.player_id: player for player in team.players}
        return cls.build(team.team_id, team.name, statlines, players, settings)

    @staticmethod
    def _row(
        player_id: PlayerId,
        name: str,
        number: int | None,
        stat: PlayerGameStatline,
        settings: Settings,
    ) -> BoxScoreRow:
        advanced = calculate_advanced_metrics(stat)
        high = settings.high_rating_threshold
        medium = settings.medium_rating_threshold
        return BoxScoreRow(
            player_id=player_id,
            name=name,
            number=number,
            statline=stat,
            advanced=advanced,
            efficiency_tier=rating_tier(advanced.efficiency, high, medium),
            game_score_tier=rating_tier(advanced.game_score, high, medium),
            index_of_success_tier=rating_tier(advanced.index_of_success, high, medium),
        )

    @property
    def totals(self) -> PlayerGameStatline:
        """Team totals statline."""
        return self.team_metrics.totals

    @property
    def points(self) -> float:
        """Team points."""
        return self.totals.points

    def to_frame(self) -> pd.DataFrame:
        """Convert player rows to a DataFrame with advanced metric columns."""
        records = []
        for row in self.rows:
            record = {"player_id": row.player_id, "name": row.name, "number": row.number}
            record.update(row.statline.to_dict())
            record.update(row.advanced.to_dict())
            records.append(record)
        columns = [
            "player_id",
            "name",
            "number",
            *COUNTING_FIELDS,
            *AdvancedMetrics.__dataclass_fields__,
        ]
        return pd.DataFrame.from_records(records, columns=columns)


def _leader_value(row: BoxScoreRow, category: str) -> float:
    if category == "rebounds":
        return row.advanced.total_rebounds
    if category == "efficiency":
        return row.advanced.efficiency
    return getattr(row.statline, category)


def game_leaders(box_scores: Iterable[BoxScore]) -> dict[str, GameLeader]:
    """Find the leader in points, assists, rebounds and efficiency.

    Ties keep the first player encountered. Categories are omitted when no
    rows are given.

    Args:
        box_scores: Box scores of both teams.

    Returns:
        Mapping of category to GameLeader.
    """
    rows = [row for box in box_scores for row in box.rows]
    leaders: dict[str, GameLeader] = {}
    if not rows:
        return leaders

    for category in LEADER_CATEGORIES:
        best = max(rows, key=lambda r: _leader_value(r, category))
        leaders[category] = GameLeader(
            category=category,
            player_id=best.player_id,
            name=best.name,
            value=_leader_value(best, category),
        )
    return leaders

"""Shot chart aggregation.

Court coordinates are percentages of a half-court image with the basket at
(50, 85). The paint spans 35 <= x <= 65 with y >= 65; anything farther than
25 units from the basket looks like a three.

Example:
    >>> chart = ShotChart.from_events(record.shots)
    >>> home = chart.filter(team_id="home", distance=ShotDistance.THREE)
    >>> print(home.summary().three_point_percentage)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd

from hoopstats.metrics.calculator import percentage
from hoopstats.types import PlayerId, TeamId

if TYPE_CHECKING:
    from hoopstats.game.events import ShotEvent

# Court geometry (percent coordinates)
BASKET_X: float = 50.0
BASKET_Y: float = 85.0
PAINT_MIN_X: float = 35.0
PAINT_MAX_X: float = 65.0
PAINT_MIN_Y: float = 65.0
THREE_POINT_DISTANCE: float = 25.0


class ShotZone(Enum):
    """Court zone of a shot."""

    PAINT = "paint"
    MID_RANGE = "mid_range"
    THREE_POINT = "three_point"


class ShotResult(Enum):
    """Shot result filter."""

    ALL = "all"
    MADE = "made"
    MISSED = "missed"


class ShotDistance(Enum):
    """Shot value filter."""

    ALL = "all"
    TWO = "two"
    THREE = "three"


def classify_location(x: float, y: float) -> tuple[bool, bool]:
    """Classify a court tap.

    Args:
        x: Horizontal position, percent of court width.
        y: Vertical position, percent of court height.

    Returns:
        (in_paint, looks_like_three).
    """
    in_paint = PAINT_MIN_X <= x <= PAINT_MAX_X and y >= PAINT_MIN_Y
    distance = float(np.hypot(x - BASKET_X, y - BASKET_Y))
    return in_paint, distance > THREE_POINT_DISTANCE


@dataclass(frozen=True)
class ShotRecord:
    """One plotted shot."""

    player_id: PlayerId
    team_id: TeamId
    x: float
    y: float
    made: bool
    is_three: bool
    in_paint: bool = False
    is_transition: bool = False
    fouled_on_shot: bool = False
    period: int = 1
    game_clock: str = ""

    @classmethod
    def from_event(cls, event: ShotEvent) -> ShotRecord:
        """Build a shot record from a recorded shot event."""
        return cls(
            player_id=event.player_id,
            team_id=event.team_id,
            x=event.x,
            y=event.y,
            made=event.made,
            is_three=event.is_three,
            in_paint=event.in_paint,
            is_transition=event.is_transition,
            fouled_on_shot=event.fouled_on_shot,
            period=event.period,
            game_clock=event.game_clock,
        )

    @property
    def zone(self) -> ShotZone:
        """Zone of the shot; threes first, then the recorded paint flag."""
        if self.is_three:
            return ShotZone.THREE_POINT
        if self.in_paint:
            return ShotZone.PAINT
        return ShotZone.MID_RANGE


@dataclass(frozen=True)
class ShootingSummary:
    """Made/attempted totals and zero-guarded percentages of a shot set."""

    total_shots: int
    made_shots: int
    overall_percentage: float
    two_point_attempts: int
    two_point_made: int
    two_point_percentage: float
    three_point_attempts: int
    three_point_made: int
    three_point_percentage: float
    transition_attempts: int = 0
    transition_made: int = 0
    and_ones: int = 0

    def to_dict(self) -> dict[str, float]:
        """Convert summary to dictionary format."""
        return asdict(self)


@dataclass(frozen=True)
class ZoneStats:
    """Made/attempted in one court zone."""

    zone: ShotZone
    made: int
    attempted: int

    @property
    def percentage(self) -> float:
        """Zone FG%, 0.0 with no attempts."""
        return percentage(self.made, self.attempted)


class ShotChart:
    """Filterable collection of shots.

    Example:
        >>> chart = ShotChart(shots)
        >>> chart.zone_stats()[ShotZone.PAINT].percentage
        55.0
    """

    def __init__(self, shots: Iterable[ShotRecord]) -> None:
        self.shots: list[ShotRecord] = list(shots)

    @classmethod
    def from_events(cls, events: Iterable[ShotEvent]) -> ShotChart:
        """Build a chart from recorded shot events."""
        return cls(ShotRecord.from_event(event) for event in events)

    def __len__(self) -> int:
        return len(self.shots)

    def filter(
        self,
        team_id: TeamId | None = None,
        player_id: PlayerId | None = None,
        result: ShotResult = ShotResult.ALL,
        distance: ShotDistance = ShotDistance.ALL,
        transition: bool | None = None,
    ) -> ShotChart:
        """Return a chart restricted to matching shots.

        Args:
            team_id: Keep only this team's shots.
            player_id: Keep only this player's shots.
            result: Keep made, missed or all shots.
            distance: Keep twos, threes or all shots.
            transition: Keep only transition (True) or half-court (False)
                shots; None keeps both.

        Returns:
            New ShotChart.
        """
        selected = []
        for shot in self.shots:
            if team_id is not None and shot.team_id != team_id:
                continue
            if player_id is not None and shot.player_id != player_id:
                continue
            if result is ShotResult.MADE and not shot.made:
                continue
            if result is ShotResult.MISSED and shot.made:
                continue
            if distance is ShotDistance.TWO and shot.is_three:
                continue
            if distance is ShotDistance.THREE and not shot.is_three:
                continue
            if transition is not None and shot.is_transition != transition:
                continue
            selected.append(shot)
        return ShotChart(selected)

    def summary(self) -> ShootingSummary:
        """Summarize shooting overall, by shot value and in transition.

        ``and_ones`` counts made shots on which the shooter was fouled.
        """
        made = np.array([s.made for s in self.shots], dtype=bool)
        three = np.array([s.is_three for s in self.shots], dtype=bool)
        transition = np.array([s.is_transition for s in self.shots], dtype=bool)
        fouled = np.array([s.fouled_on_shot for s in self.shots], dtype=bool)

        total = len(self.shots)
        made_count = int(made.sum())
        two_attempts = int((~three).sum())
        two_made = int((made & ~three).sum())
        three_attempts = int(three.sum())
        three_made = int((made & three).sum())

        return ShootingSummary(
            total_shots=total,
            made_shots=made_count,
            overall_percentage=percentage(made_count, total),
            two_point_attempts=two_attempts,
            two_point_made=two_made,
            two_point_percentage=percentage(two_made, two_attempts),
            three_point_attempts=three_attempts,
            three_point_made=three_made,
            three_point_percentage=percentage(three_made, three_attempts),
            transition_attempts=int(transition.sum()),
            transition_made=int((made & transition).sum()),
            and_ones=int((made & fouled).sum()),
        )

    def zone_stats(self) -> dict[ShotZone, ZoneStats]:
        """Return made/attempted for every zone, including empty ones."""
        zones = np.array([s.zone.value for s in self.shots], dtype=object)
        made = np.array([s.made for s in self.shots], dtype=bool)

        stats = {}
        for zone in ShotZone:
            mask = zones == zone.value
            stats[zone] = ZoneStats(
                zone=zone,
                made=int((made & mask).sum()),
                attempted=int(mask.sum()),
            )
        return stats

    def hottest_zone(self) -> ShotZone | None:
        """Return the attempted zone with the best percentage, or None."""
        attempted = [z for z in self.zone_stats().values() if z.attempted > 0]
        if not attempted:
            return None
        return max(attempted, key=lambda z: z.percentage).zone

    def to_frame(self) -> pd.DataFrame:
        """Convert shots to a DataFrame with a ``zone`` column."""
        columns = [
            "player_id",
            "team_id",
            "x",
            "y",
            "made",
            "is_three",
            "in_paint",
            "is_transition",
            "fouled_on_shot",
            "period",
            "game_clock",
            "zone",
        ]
        records = [{**asdict(s), "zone": s.zone.value} for s in self.shots]
        return pd.DataFrame.from_records(records, columns=columns)

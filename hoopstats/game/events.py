"""Play-by-play event variants and their statline effects.

Each event kind is its own frozen dataclass with a typed payload; the
``GameEvent`` union covers all of them. ``apply_event`` folds one event into
a mapping of player statlines.

Example:
    >>> from hoopstats.game.events import ShotEvent, apply_event
    >>> shot = ShotEvent(team_id="home", period=1, game_clock="11:42",
    ...                  player_id="p1", made=True, is_three=True, x=12.0, y=40.0)
    >>> apply_event(statlines, shot)
"""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from hoopstats.metrics.statline import PlayerGameStatline, empty_statline
from hoopstats.types import InvalidEventError, PlayerId, TeamId

MAX_FREE_THROW_TRIP: int = 3
MAX_TEAM_POINTS_EVENT: int = 3


class EventKind(Enum):
    """Play-by-play event classification."""

    SHOT = "shot_attempt"
    FREE_THROW = "free_throw"
    REBOUND = "rebound"
    FOUL = "foul"
    TURNOVER = "turnover"
    SUBSTITUTION = "substitution"
    TEAM_POINTS = "team_points"
    PERIOD_END = "period_end"


class FoulType(Enum):
    """Foul classification."""

    PERSONAL = "personal"
    TECHNICAL = "technical"
    UNSPORTSMANLIKE = "unsportsmanlike"


class TurnoverType(Enum):
    """Turnover classification."""

    BAD_PASS = "bad_pass"
    LOST_BALL = "lost_ball"
    TRAVELING = "traveling"
    DOUBLE_DRIBBLE = "double_dribble"
    OFFENSIVE_FOUL = "offensive_foul"


def parse_game_clock(game_clock: str) -> int:
    """Convert a ``mm:ss`` game clock to seconds remaining.

    Raises:
        InvalidEventError: If the clock is not ``mm:ss`` with 0-59 seconds.
    """
    minutes, sep, seconds = game_clock.partition(":")
    if not sep or not minutes.isdigit() or not seconds.isdigit():
        raise InvalidEventError(f"Game clock must be mm:ss, got {game_clock!r}")
    if int(seconds) >= 60:
        raise InvalidEventError(f"Game clock seconds out of range: {game_clock!r}")
    return int(minutes) * 60 + int(seconds)


def format_game_clock(seconds: int) -> str:
    """Convert seconds remaining to a ``mm:ss`` game clock."""
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


# =============================================================================
# Event variants
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class BaseEvent:
    """Fields shared by every event.

    Attributes:
        team_id: Team the event belongs to.
        period: 1-based period number.
        game_clock: Clock remaining in the period, ``mm:ss``.
    """

    kind: ClassVar[EventKind]

    team_id: TeamId
    period: int
    game_clock: str

    @property
    def clock_seconds(self) -> int:
        """Seconds remaining in the period when the event happened."""
        return parse_game_clock(self.game_clock)


@dataclass(frozen=True, kw_only=True)
class ShotEvent(BaseEvent):
    """Field-goal attempt with court location in percent coordinates."""

    kind: ClassVar[EventKind] = EventKind.SHOT

    player_id: PlayerId
    made: bool
    is_three: bool
    x: float
    y: float
    assisted_by: PlayerId | None = None
    blocked_by: PlayerId | None = None
    in_paint: bool = False
    is_transition: bool = False
    fouled_on_shot: bool = False

    def __post_init__(self) -> None:
        if self.made and self.blocked_by is not None:
            raise InvalidEventError("A made shot cannot be blocked")
        if not self.made and self.assisted_by is not None:
            raise InvalidEventError("A missed shot cannot be assisted")
        if self.assisted_by == self.player_id:
            raise InvalidEventError("A player cannot assist their own shot")


@dataclass(frozen=True, kw_only=True)
class FreeThrowEvent(BaseEvent):
    """Free-throw trip; ``attempts`` holds one made/missed flag per shot."""

    kind: ClassVar[EventKind] = EventKind.FREE_THROW

    player_id: PlayerId
    attempts: tuple[bool, ...]

    def __post_init__(self) -> None:
        if not 1 <= len(self.attempts) <= MAX_FREE_THROW_TRIP:
            raise InvalidEventError(
                f"A free-throw trip has 1-{MAX_FREE_THROW_TRIP} attempts, "
                f"got {len(self.attempts)}"
            )

    @property
    def made(self) -> int:
        """Number of free throws made on the trip."""
        return sum(1 for attempt in self.attempts if attempt)


@dataclass(frozen=True, kw_only=True)
class ReboundEvent(BaseEvent):
    """Rebound; a ``None`` player is a team rebound."""

    kind: ClassVar[EventKind] = EventKind.REBOUND

    player_id: PlayerId | None
    offensive: bool


@dataclass(frozen=True, kw_only=True)
class FoulEvent(BaseEvent):
    """Foul committed by ``player_id``, optionally on ``fouled_player``."""

    kind: ClassVar[EventKind] = EventKind.FOUL

    player_id: PlayerId
    foul_type: FoulType = FoulType.PERSONAL
    fouled_player: PlayerId | None = None

    def __post_init__(self) -> None:
        if self.foul_type is FoulType.TECHNICAL and self.fouled_player is not None:
            raise InvalidEventError("A technical foul has no fouled player")


@dataclass(frozen=True, kw_only=True)
class TurnoverEvent(BaseEvent):
    """Turnover, optionally credited as a steal to ``stolen_by``."""

    kind: ClassVar[EventKind] = EventKind.TURNOVER

    player_id: PlayerId
    turnover_type: TurnoverType
    stolen_by: PlayerId | None = None


@dataclass(frozen=True, kw_only=True)
class SubstitutionEvent(BaseEvent):
    """Lineup change for one team."""

    kind: ClassVar[EventKind] = EventKind.SUBSTITUTION

    players_out: tuple[PlayerId, ...]
    players_in: tuple[PlayerId, ...]

    def __post_init__(self) -> None:
        if not self.players_out:
            raise InvalidEventError("A substitution needs at least one player")
        if len(self.players_out) != len(self.players_in):
            raise InvalidEventError(
                "Substitution must swap equal numbers of players "
                f"({len(self.players_out)} out, {len(self.players_in)} in)"
            )
        if len(set(self.players_out)) != len(self.players_out) or len(
            set(self.players_in)
        ) != len(self.players_in):
            raise InvalidEventError("Substitution lists contain duplicate players")
        if set(self.players_out) & set(self.players_in):
            raise InvalidEventError("A player cannot be subbed out and in at once")


@dataclass(frozen=True, kw_only=True)
class TeamPointsEvent(BaseEvent):
    """Points for a team whose players are not individually tracked."""

    kind: ClassVar[EventKind] = EventKind.TEAM_POINTS

    points: int

    def __post_init__(self) -> None:
        if not 1 <= self.points <= MAX_TEAM_POINTS_EVENT:
            raise InvalidEventError(
                f"Team points must be 1-{MAX_TEAM_POINTS_EVENT}, got {self.points}"
            )


@dataclass(frozen=True, kw_only=True)
class PeriodEndEvent(BaseEvent):
    """End of a period; the clock is normally ``00:00``."""

    kind: ClassVar[EventKind] = EventKind.PERIOD_END

    game_clock: str = "00:00"


GameEvent = Union[
    ShotEvent,
    FreeThrowEvent,
    ReboundEvent,
    FoulEvent,
    TurnoverEvent,
    SubstitutionEvent,
    TeamPointsEvent,
    PeriodEndEvent,
]


# =============================================================================
# Statline effects
# =============================================================================


def points_scored(event: GameEvent) -> int:
    """Return the points an event puts on the scoreboard for its team."""
    if isinstance(event, ShotEvent):
        if not event.made:
            return 0
        return 3 if event.is_three else 2
    if isinstance(event, FreeThrowEvent):
        return event.made
    if isinstance(event, TeamPointsEvent):
        return event.points
    return 0


def involved_players(event: GameEvent) -> list[PlayerId]:
    """Return every player id referenced by an event."""
    if isinstance(event, ShotEvent):
        candidates = [event.player_id, event.assisted_by, event.blocked_by]
    elif isinstance(event, FoulEvent):
        candidates = [event.player_id, event.fouled_player]
    elif isinstance(event, TurnoverEvent):
        candidates = [event.player_id, event.stolen_by]
    elif isinstance(event, (FreeThrowEvent, ReboundEvent)):
        candidates = [event.player_id]
    elif isinstance(event, SubstitutionEvent):
        candidates = [*event.players_out, *event.players_in]
    else:
        candidates = []
    return [player_id for player_id in candidates if player_id is not None]


def _statline(
    statlines: MutableMapping[PlayerId, PlayerGameStatline],
    player_id: PlayerId,
) -> PlayerGameStatline:
    if player_id not in statlines:
        statlines[player_id] = empty_statline(player_id)
    return statlines[player_id]


def apply_event(
    statlines: MutableMapping[PlayerId, PlayerGameStatline],
    event: GameEvent,
) -> None:
    """Fold one event into player statlines in place.

    Players missing from ``statlines`` get a fresh zero statline. Lineup
    events, team points and period ends leave statlines untouched; minutes
    and plus/minus depend on the lineup and are handled by the session.

    Args:
        statlines: Mapping of player id to the player's game statline.
        event: Event to apply.
    """
    if isinstance(event, ShotEvent):
        shooter = _statline(statlines, event.player_id)
        shooter.fg_attempted += 1
        if event.is_three:
            shooter.three_attempted += 1
        if event.made:
            shooter.fg_made += 1
            if event.is_three:
                shooter.three_made += 1
            shooter.points += points_scored(event)
            if event.assisted_by is not None:
                _statline(statlines, event.assisted_by).assists += 1
        elif event.blocked_by is not None:
            _statline(statlines, event.blocked_by).blocks += 1
            shooter.blocks_received += 1

    elif isinstance(event, FreeThrowEvent):
        shooter = _statline(statlines, event.player_id)
        shooter.ft_attempted += len(event.attempts)
        shooter.ft_made += event.made
        shooter.points += event.made

    elif isinstance(event, ReboundEvent):
        if event.player_id is None:
            return
        rebounder = _statline(statlines, event.player_id)
        if event.offensive:
            rebounder.orb += 1
        else:
            rebounder.drb += 1

    elif isinstance(event, FoulEvent):
        fouler = _statline(statlines, event.player_id)
        if event.foul_type is FoulType.TECHNICAL:
            fouler.tech_fouls += 1
        else:
            fouler.fouls += 1
            if event.foul_type is FoulType.UNSPORTSMANLIKE:
                fouler.unsportsmanlike_fouls += 1
            if event.fouled_player is not None:
                _statline(statlines, event.fouled_player).fouls_drawn += 1

    elif isinstance(event, TurnoverEvent):
        _statline(statlines, event.player_id).turnovers += 1
        if event.stolen_by is not None:
            _statline(statlines, event.stolen_by).steals += 1

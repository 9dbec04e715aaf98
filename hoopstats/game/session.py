"""Live play-by-play session for one game.

The event log is the single source of truth. Statlines, score, lineups,
minutes and plus/minus are a replay of the log, so undo is simply "drop the
last event and replay".

Minutes come from game-clock deltas: a player's stint runs from the clock at
which they entered (or the period started) to the clock at which they leave
(or the period ends). Every scoring event credits its points to the scoring
team's players on court and debits them from the opponents on court.

Example:
    >>> session = LiveGameSession("game-1", home, away)
    >>> session.record(ShotEvent(team_id=home.team_id, period=1, game_clock="11:40",
    ...                          player_id="p1", made=True, is_three=False,
    ...                          x=50.0, y=80.0))
    >>> session.score
    (2, 0)
    >>> record = session.complete()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from hoopstats.config import Settings, get_settings
from hoopstats.game.events import (
    FoulEvent,
    FoulType,
    FreeThrowEvent,
    GameEvent,
    PeriodEndEvent,
    ReboundEvent,
    ShotEvent,
    SubstitutionEvent,
    TeamPointsEvent,
    TurnoverEvent,
    apply_event,
    format_game_clock,
    points_scored,
)
from hoopstats.logging import SUCCESS, WARN, get_logger
from hoopstats.metrics.statline import PlayerGameStatline, empty_statline
from hoopstats.output.formatting import period_label
from hoopstats.types import (
    GameId,
    GameStateError,
    InvalidEventError,
    InvalidTeamError,
    PlayerId,
    TeamId,
    TournamentId,
)

if TYPE_CHECKING:
    from hoopstats.league.models import Team


MAX_ON_COURT: int = 5
DEFAULT_RECENT_EVENTS: int = 8


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class GameRecord:
    """Completed game, detached from the live session.

    Attributes:
        game_id: Game identity.
        home_team_id: Home team.
        away_team_id: Away team.
        home_score: Final home score.
        away_score: Final away score.
        statlines: Final statline per player.
        shots: Every shot attempt, in order.
        events: Full event log.
        team_of: Team id per player id.
        tournament_id: Tournament the game belongs to, if any.
        game_date: Free-form game date.
    """

    game_id: GameId
    home_team_id: TeamId
    away_team_id: TeamId
    home_score: int
    away_score: int
    statlines: Mapping[PlayerId, PlayerGameStatline]
    shots: tuple[ShotEvent, ...]
    events: tuple[GameEvent, ...]
    team_of: Mapping[PlayerId, TeamId]
    tournament_id: TournamentId | None = None
    game_date: str | None = None

    def team_statlines(self, team_id: TeamId) -> list[PlayerGameStatline]:
        """Return copies of the statlines of one team's players."""
        return [
            stat.copy()
            for player_id, stat in self.statlines.items()
            if self.team_of.get(player_id) == team_id
        ]

    def points_for(self, team_id: TeamId) -> int:
        """Return the final score of the given team."""
        if team_id == self.home_team_id:
            return self.home_score
        if team_id == self.away_team_id:
            return self.away_score
        raise InvalidEventError(f"Team {team_id} did not play in game {self.game_id}")

    def points_against(self, team_id: TeamId) -> int:
        """Return the final score of the given team's opponent."""
        if team_id == self.home_team_id:
            return self.away_score
        if team_id == self.away_team_id:
            return self.home_score
        raise InvalidEventError(f"Team {team_id} did not play in game {self.game_id}")

    @property
    def winner_id(self) -> TeamId | None:
        """Return the winning team, or None on a tie."""
        if self.home_score > self.away_score:
            return self.home_team_id
        if self.away_score > self.home_score:
            return self.away_team_id
        return None


@dataclass
class _ReplayState:
    """Derived game state rebuilt from the event log."""

    period: int
    clock: int
    statlines: dict[PlayerId, PlayerGameStatline]
    scores: dict[TeamId, int]
    on_court: dict[TeamId, list[PlayerId]]
    stint_start: dict[PlayerId, int] = field(default_factory=dict)
    team_rebounds: dict[TeamId, int] = field(default_factory=dict)


# =============================================================================
# Session
# =============================================================================


class LiveGameSession:
    """In-memory data-entry session for one game.

    Attributes:
        game_id: Game identity.
        home: Home team.
        away: Away team.
        tournament_id: Tournament the game belongs to, if any.
        game_date: Free-form game date.
    """

    def __init__(
        self,
        game_id: GameId,
        home: Team,
        away: Team,
        home_starters: list[PlayerId] | None = None,
        away_starters: list[PlayerId] | None = None,
        tournament_id: TournamentId | None = None,
        game_date: str | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Start a session with zeroed statlines for both rosters.

        Args:
            game_id: Game identity.
            home: Home team.
            away: Away team.
            home_starters: Starting home lineup; defaults to the first five.
            away_starters: Starting away lineup; defaults to the first five.
            tournament_id: Tournament the game belongs to, if any.
            game_date: Free-form game date.
            settings: Settings for period lengths; defaults to the singleton.

        Raises:
            InvalidTeamError: If teams overlap or a lineup is invalid.
        """
        if home.team_id == away.team_id:
            raise InvalidTeamError("A team cannot play itself")

        self.game_id = game_id
        self.home = home
        self.away = away
        self.tournament_id = tournament_id
        self.game_date = game_date
        self.settings = settings or get_settings()
        self._log = get_logger(__name__, game_id=game_id)

        self._team_of: dict[PlayerId, TeamId] = {}
        for team in (home, away):
            for player_id in team.player_ids:
                if player_id in self._team_of:
                    raise InvalidTeamError(
                        f"Player {player_id} is rostered on both teams"
                    )
                self._team_of[player_id] = team.team_id

        self._starters: dict[TeamId, list[PlayerId]] = {
            home.team_id: self._check_starters(home, home_starters),
            away.team_id: self._check_starters(away, away_starters),
        }
        self._events: list[GameEvent] = []
        self._completed = False
        self._state = self._replay()

        self._log.info("Started: {} vs {}", home.name, away.name)

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def period(self) -> int:
        """Current 1-based period."""
        return self._state.period

    @property
    def game_clock(self) -> str:
        """Clock remaining in the current period, ``mm:ss``."""
        return format_game_clock(self._state.clock)

    @property
    def period_label(self) -> str:
        """``Q1``-``Q4`` in regulation, ``OT1`` onwards in overtime."""
        return self._label_for(self.period)

    @property
    def score(self) -> tuple[int, int]:
        """(home, away) score."""
        return (
            self._state.scores[self.home.team_id],
            self._state.scores[self.away.team_id],
        )

    @property
    def is_completed(self) -> bool:
        """Whether the game has been completed."""
        return self._completed

    @property
    def events(self) -> tuple[GameEvent, ...]:
        """Event log, oldest first."""
        return tuple(self._events)

    @property
    def shots(self) -> list[ShotEvent]:
        """Shot attempts, oldest first."""
        return [e for e in self._events if isinstance(e, ShotEvent)]

    def statline(self, player_id: PlayerId) -> PlayerGameStatline:
        """Return a copy of one player's current statline."""
        self._team_for(player_id)
        return self._state.statlines[player_id].copy()

    def statlines(self, team_id: TeamId | None = None) -> list[PlayerGameStatline]:
        """Return copies of current statlines, optionally for one team."""
        return [
            stat.copy()
            for player_id, stat in self._state.statlines.items()
            if team_id is None or self._team_of[player_id] == team_id
        ]

    def on_court(self, team_id: TeamId) -> list[PlayerId]:
        """Return the players currently on court for a team."""
        self._check_team(team_id)
        return list(self._state.on_court[team_id])

    def team_rebounds(self, team_id: TeamId) -> int:
        """Return rebounds credited to the team rather than a player."""
        self._check_team(team_id)
        return self._state.team_rebounds.get(team_id, 0)

    def team_fouls(self, team_id: TeamId, period: int | None = None) -> int:
        """Count a team's non-technical fouls, in one period or the whole game."""
        self._check_team(team_id)
        return sum(
            1
            for e in self._events
            if isinstance(e, FoulEvent)
            and e.team_id == team_id
            and e.foul_type is not FoulType.TECHNICAL
            and (period is None or e.period == period)
        )

    def player_fouls(self, player_id: PlayerId, period: int | None = None) -> int:
        """Count a player's non-technical fouls, in one period or the whole game."""
        self._team_for(player_id)
        return sum(
            1
            for e in self._events
            if isinstance(e, FoulEvent)
            and e.player_id == player_id
            and e.foul_type is not FoulType.TECHNICAL
            and (period is None or e.period == period)
        )

    def is_fouled_out(self, player_id: PlayerId) -> bool:
        """Return whether the player has reached the foul-out limit."""
        return self.player_fouls(player_id) >= self.settings.foul_out_limit

    def recent_events(self, count: int = DEFAULT_RECENT_EVENTS) -> list[GameEvent]:
        """Return the last ``count`` events, newest first."""
        return list(reversed(self._events[-count:])) if count > 0 else []

    def describe_event(self, event: GameEvent) -> str:
        """Render an event as a one-line ledger entry."""
        player_id = getattr(event, "player_id", None)
        name = self._player_label(player_id) if player_id else "Team"

        if isinstance(event, ShotEvent):
            result = "made" if event.made else "missed"
            points = "3" if event.is_three else "2"
            return f"{name} {result} {points}PT shot"
        if isinstance(event, FreeThrowEvent):
            return f"{name} {event.made}/{len(event.attempts)} FT"
        if isinstance(event, ReboundEvent):
            side = "offensive" if event.offensive else "defensive"
            return f"{name} {side} rebound"
        if isinstance(event, FoulEvent):
            return f"{name} {event.foul_type.value} foul"
        if isinstance(event, TurnoverEvent):
            return f"{name} turnover ({event.turnover_type.value})"
        if isinstance(event, SubstitutionEvent):
            return f"Substitution at {event.game_clock}"
        if isinstance(event, TeamPointsEvent):
            return f"{self._team(event.team_id).name} +{event.points}"
        return f"End of {self._label_for(event.period)}"

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def record(self, event: GameEvent) -> None:
        """Validate and append an event to the log.

        Args:
            event: Event to record.

        Raises:
            GameStateError: If the game is completed.
            InvalidEventError: If the event does not fit the current game state.
        """
        self._check_active()
        self._validate(event)
        self._events.append(event)
        self._apply(self._state, event)

        if isinstance(event, FoulEvent) and self.is_fouled_out(event.player_id):
            self._log.warning("{} Player {} has fouled out", WARN, event.player_id)
        self._log.debug(self.describe_event(event))

    def undo(self) -> GameEvent | None:
        """Remove the last event and rebuild state.

        Returns:
            The removed event, or None if the log is empty.

        Raises:
            GameStateError: If the game is completed.
        """
        self._check_active()
        if not self._events:
            return None
        event = self._events.pop()
        self._state = self._replay()
        self._log.debug("Undid {}", event.kind.value)
        return event

    def end_period(self) -> PeriodEndEvent:
        """Close the current period and start the next one.

        Returns:
            The recorded period-end event.
        """
        self._check_active()
        event = PeriodEndEvent(
            team_id=self.home.team_id,
            period=self.period,
            game_clock=format_game_clock(0),
        )
        self.record(event)
        self._log.info("Started {}", self.period_label)
        return event

    def complete(self) -> GameRecord:
        """Mark the game completed and return its final record.

        Players still on court are credited minutes up to the current clock.

        Returns:
            Immutable GameRecord snapshot.

        Raises:
            GameStateError: If the game is already completed.
        """
        self._check_active()
        self._completed = True

        final = self._replay()
        for team_id in final.on_court:
            self._close_stints(final, team_id, final.clock)
        self._state = final

        home_score, away_score = self.score
        record = GameRecord(
            game_id=self.game_id,
            home_team_id=self.home.team_id,
            away_team_id=self.away.team_id,
            home_score=home_score,
            away_score=away_score,
            statlines=MappingProxyType(
                {pid: stat.copy() for pid, stat in final.statlines.items()}
            ),
            shots=tuple(self.shots),
            events=tuple(self._events),
            team_of=MappingProxyType(dict(self._team_of)),
            tournament_id=self.tournament_id,
            game_date=self.game_date,
        )
        self._log.info(
            "{} Final: {} {} - {} {}",
            SUCCESS,
            self.home.name,
            home_score,
            away_score,
            self.away.name,
        )
        return record

    # -------------------------------------------------------------------------
    # Replay
    # -------------------------------------------------------------------------

    def _replay(self) -> _ReplayState:
        """Rebuild derived state from the event log."""
        clock = self.settings.period_length_seconds(1)
        state = _ReplayState(
            period=1,
            clock=clock,
            statlines={pid: empty_statline(pid) for pid in self._team_of},
            scores={self.home.team_id: 0, self.away.team_id: 0},
            on_court={
                team_id: list(starters) for team_id, starters in self._starters.items()
            },
        )
        for starters in self._starters.values():
            for player_id in starters:
                state.stint_start[player_id] = clock

        for event in self._events:
            self._apply(state, event)
        return state

    def _apply(self, state: _ReplayState, event: GameEvent) -> None:
        """Fold one event into the derived state."""
        apply_event(state.statlines, event)
        state.clock = event.clock_seconds

        points = points_scored(event)
        if points:
            state.scores[event.team_id] += points
            opponent = self._opponent_of(event.team_id)
            for player_id in state.on_court[event.team_id]:
                state.statlines[player_id].plus_minus += points
            for player_id in state.on_court[opponent]:
                state.statlines[player_id].plus_minus -= points

        if isinstance(event, ReboundEvent) and event.player_id is None:
            state.team_rebounds[event.team_id] = (
                state.team_rebounds.get(event.team_id, 0) + 1
            )

        elif isinstance(event, SubstitutionEvent):
            lineup = state.on_court[event.team_id]
            for player_out, player_in in zip(event.players_out, event.players_in):
                self._credit_minutes(state, player_out, state.clock)
                lineup[lineup.index(player_out)] = player_in
                state.stint_start[player_in] = state.clock

        elif isinstance(event, PeriodEndEvent):
            for team_id in state.on_court:
                self._close_stints(state, team_id, state.clock)
            state.period += 1
            state.clock = self.settings.period_length_seconds(state.period)
            for lineup in state.on_court.values():
                for player_id in lineup:
                    state.stint_start[player_id] = state.clock

    def _close_stints(self, state: _ReplayState, team_id: TeamId, clock: int) -> None:
        for player_id in state.on_court[team_id]:
            self._credit_minutes(state, player_id, clock)

    @staticmethod
    def _credit_minutes(state: _ReplayState, player_id: PlayerId, clock: int) -> None:
        start = state.stint_start.pop(player_id, clock)
        state.statlines[player_id].minutes_played += (start - clock) / 60

    # -------------------------------------------------------------------------
    # Validation helpers
    # -------------------------------------------------------------------------

    def _validate(self, event: GameEvent) -> None:
        self._check_team(event.team_id)
        if event.period != self.period:
            raise InvalidEventError(
                f"Event is for period {event.period} but game is in period {self.period}"
            )
        clock = event.clock_seconds
        if clock > self._state.clock:
            raise InvalidEventError(
                f"Game clock {event.game_clock} is later than current clock "
                f"{self.game_clock}"
            )

        team_id = event.team_id
        if isinstance(event, ShotEvent):
            self._check_member(event.player_id, team_id)
            if event.assisted_by is not None:
                self._check_member(event.assisted_by, team_id)
            if event.blocked_by is not None:
                self._check_member(event.blocked_by, self._opponent_of(team_id))
        elif isinstance(event, FreeThrowEvent):
            self._check_member(event.player_id, team_id)
        elif isinstance(event, ReboundEvent):
            if event.player_id is not None:
                self._check_member(event.player_id, team_id)
        elif isinstance(event, FoulEvent):
            self._check_member(event.player_id, team_id)
            if event.fouled_player is not None:
                self._check_member(event.fouled_player, self._opponent_of(team_id))
        elif isinstance(event, TurnoverEvent):
            self._check_member(event.player_id, team_id)
            if event.stolen_by is not None:
                self._check_member(event.stolen_by, self._opponent_of(team_id))
        elif isinstance(event, SubstitutionEvent):
            lineup = self._state.on_court[team_id]
            for player_id in event.players_out:
                self._check_member(player_id, team_id)
                if player_id not in lineup:
                    raise InvalidEventError(f"Player {player_id} is not on court")
            for player_id in event.players_in:
                self._check_member(player_id, team_id)
                if player_id in lineup:
                    raise InvalidEventError(f"Player {player_id} is already on court")

    def _check_starters(
        self,
        team: Team,
        starters: list[PlayerId] | None,
    ) -> list[PlayerId]:
        if starters is None:
            starters = team.player_ids[:MAX_ON_COURT]
        if not starters or len(starters) > MAX_ON_COURT:
            raise InvalidTeamError(
                f"{team.name} needs 1-{MAX_ON_COURT} starters, got {len(starters)}"
            )
        if len(set(starters)) != len(starters):
            raise InvalidTeamError(f"{team.name} starters contain duplicates")
        for player_id in starters:
            if not team.has_player(player_id):
                raise InvalidTeamError(f"Starter {player_id} is not on {team.name}")
        return list(starters)

    def _check_active(self) -> None:
        if self._completed:
            raise GameStateError(f"Game {self.game_id} is already completed")

    def _check_team(self, team_id: TeamId) -> None:
        if team_id not in (self.home.team_id, self.away.team_id):
            raise InvalidEventError(f"Team {team_id} is not playing in {self.game_id}")

    def _check_member(self, player_id: PlayerId, team_id: TeamId) -> None:
        if self._team_of.get(player_id) != team_id:
            raise InvalidEventError(f"Player {player_id} is not on team {team_id}")

    def _team_for(self, player_id: PlayerId) -> TeamId:
        try:
            return self._team_of[player_id]
        except KeyError:
            raise InvalidEventError(
                f"Player {player_id} is not playing in {self.game_id}"
            ) from None

    def _team(self, team_id: TeamId) -> Team:
        return self.home if team_id == self.home.team_id else self.away

    def _opponent_of(self, team_id: TeamId) -> TeamId:
        if team_id == self.home.team_id:
            return self.away.team_id
        return self.home.team_id

    def _player_label(self, player_id: PlayerId) -> str:
        team_id = self._team_of.get(player_id)
        if team_id is None:
            return "Unknown"
        return self._team(team_id).get_player(player_id).label

    def _label_for(self, period: int) -> str:
        return period_label(period, self.settings.regulation_periods)

"""League entities: players, teams, tournaments and standings."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from hoopstats.types import (
    GameId,
    InvalidTeamError,
    PlayerId,
    TeamId,
    TournamentId,
    UnknownEntityError,
)

ABBREVIATION_PATTERN = re.compile(r"^[A-Z]{3}$")


@dataclass
class Player:
    """Rostered player.

    Attributes:
        player_id: Unique player identity.
        name: Display name.
        number: Jersey number.
        position: Position label (e.g. "PG").
        height: Free-form height, e.g. "6'3'' (1.91m)".
        weight: Free-form weight, e.g. "185 lbs (84 kg)".
        age: Age in years.
    """

    player_id: PlayerId
    name: str
    number: int
    position: str = ""
    height: str = ""
    weight: str = ""
    age: int | None = None

    @property
    def label(self) -> str:
        """Return ``Name #number`` for event ledgers and tables."""
        return f"{self.name} #{self.number}"


@dataclass
class Team:
    """Team with its roster.

    Attributes:
        team_id: Unique team identity.
        name: Display name.
        abbreviation: Three uppercase letters.
        players: Roster.
        description: Optional free text.
        current_tournament_id: Tournament the team currently plays in.
    """

    team_id: TeamId
    name: str
    abbreviation: str
    players: list[Player] = field(default_factory=list)
    description: str = ""
    current_tournament_id: TournamentId | None = None

    def __post_init__(self) -> None:
        if not ABBREVIATION_PATTERN.match(self.abbreviation):
            raise InvalidTeamError(
                f"Team abbreviation must be 3 uppercase letters, got {self.abbreviation!r}"
            )
        player_ids = [p.player_id for p in self.players]
        if len(player_ids) != len(set(player_ids)):
            raise InvalidTeamError(f"Team {self.team_id} has duplicate player ids")

    @property
    def player_ids(self) -> list[PlayerId]:
        """Return roster player ids in roster order."""
        return [p.player_id for p in self.players]

    def has_player(self, player_id: PlayerId) -> bool:
        """Return whether the player is on this roster."""
        return any(p.player_id == player_id for p in self.players)

    def get_player(self, player_id: PlayerId) -> Player:
        """Return a rostered player.

        Raises:
            UnknownEntityError: If the player is not on this roster.
        """
        for player in self.players:
            if player.player_id == player_id:
                return player
        raise UnknownEntityError(f"Player {player_id} not on team {self.team_id}")


@dataclass
class TournamentStanding:
    """Win/loss record of a team within a tournament."""

    team_id: TeamId
    wins: int = 0
    losses: int = 0
    points_for: int = 0
    points_against: int = 0
    games_played: int = 0

    @property
    def win_percentage(self) -> float:
        """Return wins as a percentage of games played (0.0 with no games)."""
        if self.games_played > 0:
            return self.wins / self.games_played * 100
        return 0.0

    @property
    def point_differential(self) -> int:
        """Return points for minus points against."""
        return self.points_for - self.points_against

    def record_result(self, points_for: int, points_against: int) -> None:
        """Add one game result to the standing."""
        self.games_played += 1
        self.points_for += points_for
        self.points_against += points_against
        if points_for > points_against:
            self.wins += 1
        elif points_for < points_against:
            self.losses += 1


@dataclass
class Tournament:
    """Tournament grouping teams, games and standings.

    Attributes:
        tournament_id: Unique tournament identity.
        name: Display name.
        year: Season year.
        month: Month label, e.g. "Jul".
        team_ids: Participating teams.
        game_ids: Games played in the tournament.
        standings: Standing per team id.
        description: Optional free text.
    """

    tournament_id: TournamentId
    name: str
    year: int
    month: str = ""
    team_ids: list[TeamId] = field(default_factory=list)
    game_ids: list[GameId] = field(default_factory=list)
    standings: dict[TeamId, TournamentStanding] = field(default_factory=dict)
    description: str = ""

    def standing(self, team_id: TeamId) -> TournamentStanding:
        """Return the team's standing, creating an empty one if needed."""
        if team_id not in self.standings:
            self.standings[team_id] = TournamentStanding(team_id=team_id)
        return self.standings[team_id]

"""Explicit in-memory league state.

``LeagueState`` owns every team, tournament and completed game, and is
passed to whatever code needs it instead of living in global state.

Example:
    >>> league = LeagueState()
    >>> league.add_team(team)
    >>> league.add_tournament(tournament)
    >>> league.add_team_to_tournament(team.team_id, tournament.tournament_id)
    >>> league.record_game(session.complete())
    >>> league.standings(tournament.tournament_id)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from hoopstats.game.session import GameRecord
from hoopstats.league.models import Player, Team, Tournament, TournamentStanding
from hoopstats.logging import get_logger
from hoopstats.metrics.aggregation import PlayerSeasonSummary, summarize_player
from hoopstats.metrics.statline import PlayerGameStatline
from hoopstats.types import (
    GameId,
    InvalidTeamError,
    PlayerId,
    TeamId,
    TournamentId,
    UnknownEntityError,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class TeamRecord:
    """Win/loss summary of a team across every recorded game."""

    team_id: TeamId
    wins: int
    losses: int
    games_played: int
    points_per_game: float
    points_allowed_per_game: float

    @property
    def win_percentage(self) -> float:
        """Return wins as a percentage of games played (0.0 with no games)."""
        if self.games_played > 0:
            return self.wins / self.games_played * 100
        return 0.0

    @property
    def point_differential(self) -> float:
        """Return per-game scoring margin."""
        return self.points_per_game - self.points_allowed_per_game


@dataclass
class LeagueState:
    """Teams, tournaments and completed games.

    Attributes:
        teams: Teams by id.
        tournaments: Tournaments by id.
        games: Completed games by id, in recording order.
    """

    teams: dict[TeamId, Team] = field(default_factory=dict)
    tournaments: dict[TournamentId, Tournament] = field(default_factory=dict)
    games: dict[GameId, GameRecord] = field(default_factory=dict)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_team(self, team_id: TeamId) -> Team:
        """Return a team by id.

        Raises:
            UnknownEntityError: If the team does not exist.
        """
        try:
            return self.teams[team_id]
        except KeyError:
            raise UnknownEntityError(f"Team {team_id} not found") from None

    def get_tournament(self, tournament_id: TournamentId) -> Tournament:
        """Return a tournament by id.

        Raises:
            UnknownEntityError: If the tournament does not exist.
        """
        try:
            return self.tournaments[tournament_id]
        except KeyError:
            raise UnknownEntityError(f"Tournament {tournament_id} not found") from None

    def get_game(self, game_id: GameId) -> GameRecord:
        """Return a completed game by id.

        Raises:
            UnknownEntityError: If the game does not exist.
        """
        try:
            return self.games[game_id]
        except KeyError:
            raise UnknownEntityError(f"Game {game_id} not found") from None

    def find_player(self, player_id: PlayerId) -> tuple[Player, Team]:
        """Return a player together with the team that rosters them.

        Raises:
            UnknownEntityError: If no team rosters the player.
        """
        for team in self.teams.values():
            if team.has_player(player_id):
                return team.get_player(player_id), team
        raise UnknownEntityError(f"Player {player_id} not found")

    # -------------------------------------------------------------------------
    # Teams
    # -------------------------------------------------------------------------

    def add_team(self, team: Team) -> Team:
        """Register a team, joining its current tournament if it has one.

        Raises:
            InvalidTeamError: If the team id is taken.
            UnknownEntityError: If its current tournament does not exist.
        """
        if team.team_id in self.teams:
            raise InvalidTeamError(f"Team {team.team_id} already exists")
        if team.current_tournament_id is not None:
            self.get_tournament(team.current_tournament_id)
        self.teams[team.team_id] = team
        if team.current_tournament_id is not None:
            self._join(team.team_id, team.current_tournament_id)
        logger.debug("Added team {} ({})", team.name, team.team_id)
        return team

    def update_team(self, team: Team) -> Team:
        """Replace a team, moving it between tournaments if that changed.

        Raises:
            UnknownEntityError: If the team or its new tournament does not exist.
        """
        previous = self.get_team(team.team_id)
        if team.current_tournament_id is not None:
            self.get_tournament(team.current_tournament_id)
        if previous.current_tournament_id != team.current_tournament_id:
            if previous.current_tournament_id in self.tournaments:
                self._leave(team.team_id, previous.current_tournament_id)
            if team.current_tournament_id is not None:
                self._join(team.team_id, team.current_tournament_id)
        self.teams[team.team_id] = team
        logger.debug("Updated team {}", team.team_id)
        return team

    def delete_team(self, team_id: TeamId) -> None:
        """Remove a team and drop it from every tournament.

        Raises:
            UnknownEntityError: If the team does not exist.
        """
        self.get_team(team_id)
        del self.teams[team_id]
        for tournament in self.tournaments.values():
            if team_id in tournament.team_ids:
                tournament.team_ids.remove(team_id)
        logger.debug("Deleted team {}", team_id)

    # -------------------------------------------------------------------------
    # Tournaments
    # -------------------------------------------------------------------------

    def add_tournament(self, tournament: Tournament) -> Tournament:
        """Register a tournament.

        Raises:
            InvalidTeamError: If the tournament id is taken.
        """
        if tournament.tournament_id in self.tournaments:
            raise InvalidTeamError(
                f"Tournament {tournament.tournament_id} already exists"
            )
        self.tournaments[tournament.tournament_id] = tournament
        logger.debug("Added tournament {}", tournament.name)
        return tournament

    def delete_tournament(self, tournament_id: TournamentId) -> None:
        """Remove a tournament and clear it as any team's current tournament."""
        self.get_tournament(tournament_id)
        del self.tournaments[tournament_id]
        for team in self.teams.values():
            if team.current_tournament_id == tournament_id:
                team.current_tournament_id = None
        logger.debug("Deleted tournament {}", tournament_id)

    def add_team_to_tournament(
        self,
        team_id: TeamId,
        tournament_id: TournamentId,
    ) -> None:
        """Enter a team into a tournament and make it the team's current one."""
        team = self.get_team(team_id)
        self._join(team_id, tournament_id)
        team.current_tournament_id = tournament_id

    def standings(self, tournament_id: TournamentId) -> list[TournamentStanding]:
        """Return standings sorted by wins, then point differential."""
        tournament = self.get_tournament(tournament_id)
        rows = [tournament.standing(team_id) for team_id in tournament.team_ids]
        return sorted(
            rows,
            key=lambda s: (s.wins, s.point_differential),
            reverse=True,
        )

    # -------------------------------------------------------------------------
    # Games
    # -------------------------------------------------------------------------

    def record_game(self, game: GameRecord) -> None:
        """Store a completed game and update tournament standings.

        Raises:
            InvalidTeamError: If the game id is already recorded.
            UnknownEntityError: If a team or the tournament is unknown.
        """
        if game.game_id in self.games:
            raise InvalidTeamError(f"Game {game.game_id} already recorded")
        self.get_team(game.home_team_id)
        self.get_team(game.away_team_id)

        if game.tournament_id is not None:
            tournament = self.get_tournament(game.tournament_id)
            for team_id in (game.home_team_id, game.away_team_id):
                if team_id not in tournament.team_ids:
                    tournament.team_ids.append(team_id)
                tournament.standing(team_id).record_result(
                    game.points_for(team_id), game.points_against(team_id)
                )
            tournament.game_ids.append(game.game_id)

        self.games[game.game_id] = game
        logger.info(
            "Recorded game {}: {} {} - {} {}",
            game.game_id,
            game.home_team_id,
            game.home_score,
            game.away_score,
            game.away_team_id,
        )

    def team_games(self, team_id: TeamId) -> list[GameRecord]:
        """Return every recorded game the team played, in recording order."""
        return [
            g
            for g in self.games.values()
            if team_id in (g.home_team_id, g.away_team_id)
        ]

    def team_record(self, team_id: TeamId) -> TeamRecord:
        """Summarize a team's results across every recorded game."""
        self.get_team(team_id)
        games = self.team_games(team_id)
        wins = sum(1 for g in games if g.winner_id == team_id)
        losses = sum(
            1 for g in games if g.winner_id is not None and g.winner_id != team_id
        )
        played = len(games)
        scored = sum(g.points_for(team_id) for g in games)
        allowed = sum(g.points_against(team_id) for g in games)
        return TeamRecord(
            team_id=team_id,
            wins=wins,
            losses=losses,
            games_played=played,
            points_per_game=scored / played if played else 0.0,
            points_allowed_per_game=allowed / played if played else 0.0,
        )

    def player_game_log(self, player_id: PlayerId) -> list[PlayerGameStatline]:
        """Return copies of the player's statline from every game they played."""
        return [
            g.statlines[player_id].copy()
            for g in self.games.values()
            if player_id in g.statlines
        ]

    def player_summary(self, player_id: PlayerId) -> PlayerSeasonSummary | None:
        """Return season totals, averages and metrics, or None with no games."""
        game_log = self.player_game_log(player_id)
        if not game_log:
            return None
        return summarize_player(game_log)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _join(self, team_id: TeamId, tournament_id: TournamentId) -> None:
        tournament = self.get_tournament(tournament_id)
        if team_id not in tournament.team_ids:
            tournament.team_ids.append(team_id)

    def _leave(self, team_id: TeamId, tournament_id: TournamentId) -> None:
        tournament = self.get_tournament(tournament_id)
        if team_id in tournament.team_ids:
            tournament.team_ids.remove(team_id)

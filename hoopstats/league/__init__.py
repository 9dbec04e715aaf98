"""League entities and the in-memory league state container.

Submodules:
    models: Player, Team, Tournament and TournamentStanding
    state: LeagueState owning teams, tournaments and completed games
"""

from __future__ import annotations

from hoopstats.league.models import Player, Team, Tournament, TournamentStanding
from hoopstats.league.state import LeagueState, TeamRecord

__all__ = [
    "LeagueState",
    "Player",
    "Team",
    "TeamRecord",
    "Tournament",
    "TournamentStanding",
]

"""Type aliases and exceptions shared across the stats tracker.

Example:
    >>> from hoopstats.types import HoopStatsError, UnknownEntityError
    >>> try:
    ...     league.get_team("team-missing")
    ... except UnknownEntityError as exc:
    ...     print(exc)
"""

from __future__ import annotations

# =============================================================================
# Type Aliases
# =============================================================================

PlayerId = str
TeamId = str
GameId = str
TournamentId = str


# =============================================================================
# Exceptions
# =============================================================================


class HoopStatsError(Exception):
    """Base exception for stats tracker errors."""


class InvalidGamesPlayedError(HoopStatsError, ValueError):
    """Games-played divisor below one."""


class GameStateError(HoopStatsError):
    """Operation not allowed in the current game state."""


class InvalidEventError(HoopStatsError, ValueError):
    """Event payload inconsistent with the game it is recorded into."""


class UnknownEntityError(HoopStatsError, KeyError):
    """Requested team, player, tournament or game not found."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep plain messages readable
        return str(self.args[0]) if self.args else ""


class InvalidTeamError(HoopStatsError, ValueError):
    """Team definition violates roster rules."""

"""Live game data entry.

Submodules:
    events: Tagged play-by-play event variants and their statline effects
    session: Live session replaying the event log into statlines
    validation: Statline invariant checks

Example:
    >>> from hoopstats.game import LiveGameSession, ShotEvent
    >>> session = LiveGameSession("game-1", home, away)
    >>> session.record(ShotEvent(...))
    >>> record = session.complete()
"""

from __future__ import annotations

from hoopstats.game.events import (
    BaseEvent,
    EventKind,
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
    TurnoverType,
    apply_event,
    format_game_clock,
    involved_players,
    parse_game_clock,
    points_scored,
)
from hoopstats.game.session import GameRecord, LiveGameSession
from hoopstats.game.validation import StatlineValidator, ValidationResult

__all__ = [
    "BaseEvent",
    "EventKind",
    "FoulEvent",
    "FoulType",
    "FreeThrowEvent",
    "GameEvent",
    "GameRecord",
    "LiveGameSession",
    "PeriodEndEvent",
    "ReboundEvent",
    "ShotEvent",
    "StatlineValidator",
    "SubstitutionEvent",
    "TeamPointsEvent",
    "TurnoverEvent",
    "TurnoverType",
    "ValidationResult",
    "apply_event",
    "format_game_clock",
    "involved_players",
    "parse_game_clock",
    "points_scored",
]

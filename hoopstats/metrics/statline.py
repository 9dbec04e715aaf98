"""Per-player game statline record.

A statline is the raw counting-stat record for one player in one game.
Total rebounds and two-point splits are always derived from the stored
fields and never stored themselves.

Example:
    >>> from hoopstats.metrics.statline import PlayerGameStatline, empty_statline
    >>> stat = empty_statline("player-1")
    >>> stat.points += 2
    >>> stat.to_dict()["points"]
    2
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Mapping

from hoopstats.types import PlayerId

# All additive fields, in box-score order
COUNTING_FIELDS: tuple[str, ...] = (
    "points",
    "fg_made",
    "fg_attempted",
    "three_made",
    "three_attempted",
    "ft_made",
    "ft_attempted",
    "orb",
    "drb",
    "assists",
    "steals",
    "blocks",
    "turnovers",
    "fouls",
    "tech_fouls",
    "unsportsmanlike_fouls",
    "fouls_drawn",
    "blocks_received",
    "plus_minus",
    "minutes_played",
)

# Keys accepted in place of canonical field names
_FIELD_ALIASES: dict[str, str] = {
    "playerId": "player_id",
}


def _to_number(name: str, value: Any) -> float:
    """Convert a raw field value to a finite number, keeping whole values int."""
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Field {name} must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Field {name} must be a number, got {value!r}") from e
        if number.is_integer():
            number = int(number)
    if not math.isfinite(number):
        raise ValueError(f"Field {name} must be finite, got {value!r}")
    return number


@dataclass
class PlayerGameStatline:
    """Raw counting stats for one player in one game.

    Raw records hold integer counts (``minutes_played`` may be fractional).
    Averaged records produced by season aggregation hold per-game floats in
    the same fields.

    Attributes:
        player_id: Opaque player identity.
        points: Points scored.
        fg_made: Field goals made (twos and threes).
        fg_attempted: Field goals attempted.
        three_made: Three-pointers made.
        three_attempted: Three-pointers attempted.
        ft_made: Free throws made.
        ft_attempted: Free throws attempted.
        orb: Offensive rebounds.
        drb: Defensive rebounds.
        assists: Assists.
        steals: Steals.
        blocks: Shots blocked by this player.
        turnovers: Turnovers.
        fouls: Personal fouls committed.
        tech_fouls: Technical fouls committed.
        unsportsmanlike_fouls: Unsportsmanlike fouls committed.
        fouls_drawn: Fouls drawn by this player.
        blocks_received: Times this player's shot was blocked.
        plus_minus: Score differential while on court.
        minutes_played: Minutes on court, fractional.
    """

    player_id: PlayerId
    points: float = 0
    fg_made: float = 0
    fg_attempted: float = 0
    three_made: float = 0
    three_attempted: float = 0
    ft_made: float = 0
    ft_attempted: float = 0
    orb: float = 0
    drb: float = 0
    assists: float = 0
    steals: float = 0
    blocks: float = 0
    turnovers: float = 0
    fouls: float = 0
    tech_fouls: float = 0
    unsportsmanlike_fouls: float = 0
    fouls_drawn: float = 0
    blocks_received: float = 0
    plus_minus: float = 0
    minutes_played: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PlayerGameStatline:
        """Build a statline from a mapping of field names.

        Missing counting fields default to zero and unknown keys are ignored.
        Numeric strings such as ``"18"`` are converted.
        ``playerId`` is accepted as an alias of ``player_id``.

        Args:
            data: Mapping of field name to value.

        Returns:
            New statline.

        Raises:
            KeyError: If no player identity is present.
            ValueError: If a counting field is not a finite number.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _FIELD_ALIASES.get(key, key)
            if name == "player_id":
                kwargs[name] = value
            elif name in known:
                kwargs[name] = _to_number(name, value)
        if "player_id" not in kwargs:
            raise KeyError("player_id")
        kwargs["player_id"] = str(kwargs["player_id"])
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert statline to dictionary format.

        Returns:
            Dictionary with the identity and every counting field.
        """
        data: dict[str, Any] = {"player_id": self.player_id}
        for name in COUNTING_FIELDS:
            data[name] = getattr(self, name)
        return data

    def copy(self) -> PlayerGameStatline:
        """Return an independent copy of this statline."""
        return PlayerGameStatline(**self.to_dict())


def empty_statline(player_id: PlayerId) -> PlayerGameStatline:
    """Return the canonical zero-valued statline for a player.

    Used as the default when a player has no record for a game and as the
    seed for season aggregation.

    Args:
        player_id: Identity to stamp on the record.

    Returns:
        Statline with every counting field set to zero.
    """
    return PlayerGameStatline(player_id=player_id)

"""Statline validation before metrics calculation.

The metrics calculator is a pure formula library and accepts whatever it is
given. This module is the separate pass that checks raw statlines for broken
made/attempted invariants and suspicious values.

Example:
    >>> from hoopstats.game.validation import StatlineValidator
    >>> validator = StatlineValidator()
    >>> result = validator.validate(stat)
    >>> if not result.valid:
    ...     print(f"Errors: {result.errors}")
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from hoopstats.logging import get_logger
from hoopstats.metrics.calculator import two_point_made
from hoopstats.metrics.statline import COUNTING_FIELDS, PlayerGameStatline

logger = get_logger(__name__)

# Fields allowed to go negative
SIGNED_FIELDS: frozenset[str] = frozenset({"plus_minus"})

# (made, attempted) pairs that must satisfy made <= attempted
MADE_ATTEMPTED_PAIRS: tuple[tuple[str, str], ...] = (
    ("fg_made", "fg_attempted"),
    ("three_made", "three_attempted"),
    ("ft_made", "ft_attempted"),
)

DEFAULT_FOUL_OUT_LIMIT: int = 5


@dataclass
class ValidationResult:
    """Result of statline validation.

    Attributes:
        valid: Whether validation passed.
        errors: List of error messages (validation failures).
        warnings: List of warning messages (potential issues).
    """

    valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(message)
        self.valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning (does not affect validity)."""
        self.warnings.append(message)

    def merge(self, other: ValidationResult) -> None:
        """Merge another validation result into this one."""
        if not other.valid:
            self.valid = False
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


class StatlineValidator:
    """Validates raw statlines.

    Checks:
    - No negative counts (plus/minus excepted)
    - Made never exceeds attempted for FG, 3P and FT
    - Three-point attempts fit inside field-goal attempts
    - Three-pointers made fit inside field goals made

    Warnings:
    - Points disagree with 2 * 2PM + 3 * 3PM + FTM
    - Personal fouls past the foul-out limit
    """

    def __init__(self, foul_out_limit: int = DEFAULT_FOUL_OUT_LIMIT) -> None:
        """Initialize statline validator.

        Args:
            foul_out_limit: Personal fouls allowed before disqualification.
        """
        self.foul_out_limit = foul_out_limit

    def validate(self, stat: PlayerGameStatline) -> ValidationResult:
        """Validate one statline.

        Args:
            stat: Statline to validate.

        Returns:
            ValidationResult with any errors or warnings.
        """
        result = ValidationResult()
        label = stat.player_id or "<unknown>"

        for name in COUNTING_FIELDS:
            if name in SIGNED_FIELDS:
                continue
            value = getattr(stat, name)
            if value < 0:
                result.add_error(f"{label}: {name} is negative ({value})")

        for made_field, attempted_field in MADE_ATTEMPTED_PAIRS:
            made = getattr(stat, made_field)
            attempted = getattr(stat, attempted_field)
            if made > attempted:
                result.add_error(
                    f"{label}: {made_field} ({made}) exceeds "
                    f"{attempted_field} ({attempted})"
                )

        if stat.three_attempted > stat.fg_attempted:
            result.add_error(
                f"{label}: three_attempted ({stat.three_attempted}) exceeds "
                f"fg_attempted ({stat.fg_attempted})"
            )
        if stat.three_made > stat.fg_made:
            result.add_error(
                f"{label}: three_made ({stat.three_made}) exceeds "
                f"fg_made ({stat.fg_made})"
            )

        expected_points = 2 * two_point_made(stat) + 3 * stat.three_made + stat.ft_made
        if stat.points != expected_points:
            result.add_warning(
                f"{label}: points ({stat.points}) do not match made shots "
                f"({expected_points})"
            )

        if stat.fouls > self.foul_out_limit:
            result.add_warning(
                f"{label}: {stat.fouls} fouls exceeds foul-out limit "
                f"({self.foul_out_limit})"
            )

        if not result.valid:
            logger.warning("Statline for {} failed validation: {}", label, result.errors)

        return result

    def validate_many(self, statlines: Iterable[PlayerGameStatline]) -> ValidationResult:
        """Validate several statlines and merge the results.

        Args:
            statlines: Statlines to validate.

        Returns:
            Merged ValidationResult.
        """
        result = ValidationResult()
        count = 0
        for stat in statlines:
            result.merge(self.validate(stat))
            count += 1
        logger.debug(
            "Validated {} statlines: {} errors, {} warnings",
            count,
            len(result.errors),
            len(result.warnings),
        )
        return result

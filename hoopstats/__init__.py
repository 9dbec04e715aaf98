"""Basketball statistics tracker.

A Python library and CLI that records live play-by-play into player
statlines and derives box scores, shooting splits, composite performance
indices (Efficiency, Game Score, Index of Success) and season aggregates.

Example:
    >>> from hoopstats.metrics import MetricsCalculator, empty_statline
    >>> stat = empty_statline("player-1")
    >>> MetricsCalculator.efficiency(stat)
    0
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "hoopstats Team"

# Public API exports
from hoopstats.config import Settings, get_settings

__all__ = [
    "Settings",
    "__author__",
    "__version__",
    "get_settings",
]

"""Courtside: live basketball stat tracking.

A scorekeeping core for live basketball games. It tracks the game clock,
quarter progression, per-player box-score statistics, the running score and
an undo history as a scorekeeper enters events.

Example:
    >>> from courtside import LiveGameTracker, StatType
    >>> from courtside.game.clock import ManualClock
    >>> tracker = LiveGameTracker(clock_factory=ManualClock)
    >>> _ = tracker.configure("Lakers", "Celtics")
    >>> snapshot = tracker.record_stat("p1", StatType.FIELD_GOAL_MADE)
    >>> print(snapshot.home_score)
    2
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Courtside Team"

# Public API exports
from courtside.config import Settings, get_settings
from courtside.game import GamePhase, LiveGameTracker, StatType

__all__ = [
    "GamePhase",
    "LiveGameTracker",
    "Settings",
    "StatType",
    "__author__",
    "__version__",
    "get_settings",
]

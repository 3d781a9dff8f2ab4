"""Live game tracking.

This package holds the scorekeeping state machine and its building blocks.

Submodules:
    models: Game, per-player box score and event-log data classes
    stats: Counter and score effects of each stat type
    clock: Recurring, cancellable tick sources
    tracker: The LiveGameTracker state machine

Example:
    >>> from courtside.game import LiveGameTracker, StatType
    >>> from courtside.game.clock import ManualClock
    >>> tracker = LiveGameTracker(clock_factory=ManualClock)
    >>> _ = tracker.toggle_clock()
    >>> tracker.clock.advance(720)
    720
    >>> tracker.snapshot().quarter
    2
"""

from __future__ import annotations

from courtside.game.clock import AsyncioClock, ManualClock
from courtside.game.models import (
    Game,
    GamePhase,
    GameSnapshot,
    PlayerGameStats,
    ScoringMode,
    StatAction,
    StatType,
)
from courtside.game.stats import (
    COUNTER_EFFECTS,
    apply_stat,
    check_stat,
    is_scoring,
    score_delta,
)
from courtside.game.tracker import LiveGameTracker

__all__ = [
    "COUNTER_EFFECTS",
    "AsyncioClock",
    "Game",
    "GamePhase",
    "GameSnapshot",
    "LiveGameTracker",
    "ManualClock",
    "PlayerGameStats",
    "ScoringMode",
    "StatAction",
    "StatType",
    "apply_stat",
    "check_stat",
    "is_scoring",
    "score_delta",
]

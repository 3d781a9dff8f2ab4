"""Type definitions, protocols and exceptions for Courtside.

This module defines common types, protocols, and type aliases used throughout
the application. Using protocols lets the tracker accept any roster or clock
implementation with static type checking.

Example:
    >>> from courtside.types import RosterProvider
    >>> def team_for(roster: RosterProvider, player_id: str) -> str | None:
    ...     return roster.team_of(player_id)
"""

from __future__ import annotations

from typing import Callable, Literal, Protocol

# =============================================================================
# Type Aliases
# =============================================================================

PlayerId = str
TeamId = str
GameId = str
TeamSide = Literal["home", "away"]
TickCallback = Callable[[], None]


# =============================================================================
# Protocols (Interfaces)
# =============================================================================


class TickSource(Protocol):
    """Protocol for a recurring, cancellable clock tick.

    Implementations call the callback they were built with once per elapsed
    interval while started.
    """

    @property
    def running(self) -> bool:
        """Whether ticks are currently scheduled."""
        ...

    def start(self) -> None:
        """Begin delivering ticks. No-op when already running."""
        ...

    def stop(self) -> None:
        """Cancel pending ticks. Safe to call repeatedly."""
        ...


class ClockFactory(Protocol):
    """Protocol for building a tick source bound to a callback."""

    def __call__(self, on_tick: TickCallback) -> TickSource:
        """Create a tick source that invokes ``on_tick`` per tick."""
        ...


class RosterProvider(Protocol):
    """Protocol for the roster collaborator used during stat entry."""

    def team_of(self, player_id: PlayerId) -> TeamId | None:
        """Return the team id a player belongs to, or None if unknown."""
        ...


# =============================================================================
# Exceptions
# =============================================================================


class CourtsideError(Exception):
    """Base exception for Courtside errors."""


class TrackerError(CourtsideError):
    """Error raised by the live game tracker."""


class InvalidTransition(TrackerError):
    """Operation is not allowed in the tracker's current phase."""


class EmptyHistory(TrackerError):
    """Undo requested with no recorded actions."""


class StatValueError(TrackerError, ValueError):
    """Stat magnitude would break the box-score invariants."""


class UnknownPlayerError(TrackerError):
    """Player cannot be resolved to either team in the game."""


class RosterError(CourtsideError):
    """Invalid roster operation (duplicate or unknown entry)."""

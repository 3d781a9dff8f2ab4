"""Replay recorded scorekeeping sessions through the tracker.

A session file is JSON of the form::

    {
        "home": "Lakers",
        "away": "Celtics",
        "roster": {"teams": [...], "players": [...]},
        "events": [
            {"action": "toggle_clock"},
            {"player": "23", "stat": "threePointerMade"},
            {"action": "tick", "seconds": 45},
            {"player": "0", "stat": "freeThrowMissed", "value": 1},
            {"action": "undo"},
            {"action": "advance_quarter"}
        ]
    }

``roster`` is optional; ``home_id``/``away_id`` default to the team names.
Events are applied in order against a tracker driven by a ManualClock, so
``tick`` events elapse game time deterministically.

Example:
    >>> session = load_session(Path("game.json"))
    >>> tracker = replay(session)
    >>> tracker.snapshot().home_score
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from courtside.game.clock import ManualClock
from courtside.game.tracker import LiveGameTracker
from courtside.logging import get_logger
from courtside.roster import Roster
from courtside.types import CourtsideError, RosterError, TrackerError

logger = get_logger(__name__)

# Control action name -> tracker method
CONTROL_ACTIONS: dict[str, str] = {
    "toggle_clock": "toggle_clock",
    "timeout": "timeout",
    "advance_quarter": "advance_quarter",
    "reset_clock": "reset_clock",
    "undo": "undo_last_action",
    "end_game": "end_game",
    "reset_game": "reset_game",
}


class ReplayError(CourtsideError):
    """Session file is malformed or an event was rejected."""


@dataclass
class ReplaySession:
    """A loaded scorekeeping session.

    Attributes:
        home: Home team display name.
        away: Away team display name.
        events: Raw event mappings in recorded order.
        roster: Optional roster for player labels and team scoring.
        home_id: Home team id, matching the roster's team id.
        away_id: Away team id, matching the roster's team id.
    """

    home: str
    away: str
    events: list[dict[str, Any]] = field(default_factory=list)
    roster: Roster | None = None
    home_id: str | None = None
    away_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReplaySession:
        """Create a session from a parsed session file.

        Raises:
            ReplayError: If required keys are missing or mistyped.
        """
        try:
            home = data["home"]
            away = data["away"]
        except KeyError as e:
            raise ReplayError(f"Session is missing required key {e}") from None
        for key in ("home", "away", "home_id", "away_id"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ReplayError(
                    f"Session '{key}' must be a string, got {value!r}"
                )

        events = data.get("events", [])
        if not isinstance(events, list):
            raise ReplayError("Session 'events' must be a list")

        roster = None
        if data.get("roster") is not None:
            try:
                roster = Roster.from_dict(data["roster"])
            except (KeyError, TypeError, ValueError, RosterError) as e:
                raise ReplayError(f"Invalid roster entry: {e!r}") from e

        return cls(
            home=home,
            away=away,
            events=events,
            roster=roster,
            home_id=data.get("home_id"),
            away_id=data.get("away_id"),
        )


def load_session(path: Path) -> ReplaySession:
    """Load a session file.

    Args:
        path: Path to the JSON session file.

    Returns:
        Parsed ReplaySession.

    Raises:
        ReplayError: If the file is not valid JSON or not a session.
    """
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ReplayError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ReplayError(f"{path} must contain a JSON object")

    session = ReplaySession.from_dict(data)
    logger.info("Loaded session {} with {} events", path, len(session.events))
    return session


def apply_event(tracker: LiveGameTracker, event: dict[str, Any]) -> None:
    """Apply one session event to the tracker.

    Raises:
        ReplayError: If the event shape is not recognised.
        TrackerError: If the tracker rejects the event.
    """
    if not isinstance(event, dict):
        raise ReplayError(f"Event must be a JSON object, got {event!r}")

    if "action" in event:
        action = event["action"]
        if not isinstance(action, str):
            raise ReplayError(f"Event 'action' must be a string, got {action!r}")
        if action == "tick":
            seconds = _int_field(event, "seconds")
            clock = tracker.clock
            if not isinstance(clock, ManualClock):
                raise ReplayError("Tick events need a manually driven clock")
            clock.advance(seconds)
            return
        method = CONTROL_ACTIONS.get(action)
        if method is None:
            raise ReplayError(f"Unknown action {action!r}")
        getattr(tracker, method)()
        return

    if "player" in event and "stat" in event:
        player, stat = event["player"], event["stat"]
        if isinstance(player, bool) or not isinstance(player, (str, int)):
            raise ReplayError(f"Event 'player' must be an id, got {player!r}")
        if not isinstance(stat, str):
            raise ReplayError(f"Event 'stat' must be a string, got {stat!r}")
        tracker.record_stat(str(player), stat, _int_field(event, "value"))
        return

    raise ReplayError(f"Event needs an 'action' or 'player' and 'stat': {event}")


def _int_field(event: dict[str, Any], key: str, default: int = 1) -> int:
    value = event.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ReplayError(f"Event '{key}' must be an integer, got {value!r}")
    return value


def replay(
    session: ReplaySession,
    scoring_mode: str | None = None,
) -> LiveGameTracker:
    """Run every event of a session through a fresh tracker.

    Args:
        session: Loaded session.
        scoring_mode: Overrides the configured scoring mode.

    Returns:
        The tracker after the last event.

    Raises:
        ReplayError: Wrapping the first event that could not be applied,
            with its position in the session.
    """
    try:
        tracker = LiveGameTracker(
            clock_factory=ManualClock,
            roster=session.roster,
            scoring_mode=scoring_mode,
        )
        tracker.configure(
            session.home,
            session.away,
            home_team_id=session.home_id,
            away_team_id=session.away_id,
        )
    except (TrackerError, TypeError, ValueError) as e:
        raise ReplayError(f"Cannot start session: {e}") from e

    for index, event in enumerate(session.events):
        try:
            apply_event(tracker, event)
        except (TrackerError, TypeError, ValueError) as e:
            tracker.close()
            raise ReplayError(f"Event {index} ({event}) failed: {e}") from e
        except ReplayError as e:
            tracker.close()
            raise ReplayError(f"Event {index}: {e}") from e

    final = tracker.snapshot()
    logger.info(
        "Replayed {} events: {} {} - {} {}",
        len(session.events),
        session.home,
        final.home_score,
        final.away_score,
        session.away,
    )
    return tracker

"""Shared pytest fixtures for Courtside tests.

This module contains fixtures used across multiple test modules:
- Configuration isolation (no COURTSIDE_* or logging variables leak in)
- Trackers driven by a ManualClock
- A two-team sample roster
- Sample replay sessions, as dicts and as files

Example:
    def test_something(configured_tracker):
        configured_tracker.record_stat("23", StatType.FIELD_GOAL_MADE)
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Generator

import pytest

from courtside.config import reset_settings
from courtside.game import LiveGameTracker, ManualClock
from courtside.roster import Player, Position, Roster, Team

SETTINGS_ENV_VARS = [
    "COURTSIDE_QUARTER_SECONDS",
    "COURTSIDE_QUARTERS",
    "COURTSIDE_TICK_INTERVAL",
    "COURTSIDE_SCORING_MODE",
    "LOG_LEVEL",
]


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Run each test against default settings with logs in a temp dir."""
    for key in SETTINGS_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.chdir(tmp_path)  # keep any .env in the repo out of the way

    reset_settings()
    yield
    reset_settings()


# =============================================================================
# Trackers
# =============================================================================


@pytest.fixture
def tracker() -> Generator[LiveGameTracker, None, None]:
    """Unconfigured tracker with a manually advanced clock."""
    t = LiveGameTracker(clock_factory=ManualClock)
    yield t
    t.close()


@pytest.fixture
def configured_tracker(tracker: LiveGameTracker) -> LiveGameTracker:
    """Tracker configured for Lakers (home) vs Celtics (away)."""
    tracker.configure("Lakers", "Celtics")
    return tracker


@pytest.fixture
def clock(configured_tracker: LiveGameTracker) -> ManualClock:
    """The manual clock owned by ``configured_tracker``."""
    clock = configured_tracker.clock
    assert isinstance(clock, ManualClock)
    return clock


# =============================================================================
# Roster
# =============================================================================


@pytest.fixture
def roster() -> Roster:
    """Two teams with two players each."""
    r = Roster()
    r.add_team(Team(id="LAL", name="Lakers"))
    r.add_team(Team(id="BOS", name="Celtics"))
    r.add_player(
        Player(id="23", name="LeBron James", jersey_number=23, team_id="LAL",
               position=Position.SMALL_FORWARD)
    )
    r.add_player(
        Player(id="3", name="Anthony Davis", jersey_number=3, team_id="LAL",
               position=Position.POWER_FORWARD)
    )
    r.add_player(
        Player(id="0", name="Jayson Tatum", jersey_number=0, team_id="BOS",
               position=Position.SMALL_FORWARD)
    )
    r.add_player(
        Player(id="7", name="Jaylen Brown", jersey_number=7, team_id="BOS",
               position=Position.SHOOTING_GUARD)
    )
    return r


# =============================================================================
# Replay Sessions
# =============================================================================


@pytest.fixture
def sample_session() -> dict[str, Any]:
    """Short first-quarter session with an undo and a made three."""
    return {
        "home": "Lakers",
        "away": "Celtics",
        "home_id": "LAL",
        "away_id": "BOS",
        "roster": {
            "teams": [
                {"id": "LAL", "name": "Lakers"},
                {"id": "BOS", "name": "Celtics"},
            ],
            "players": [
                {"id": "23", "name": "LeBron James", "jersey_number": 23,
                 "team_id": "LAL", "position": "Small Forward"},
                {"id": "0", "name": "Jayson Tatum", "jersey_number": 0,
                 "team_id": "BOS", "position": "Small Forward"},
            ],
        },
        "events": [
            {"action": "toggle_clock"},
            {"player": "23", "stat": "fieldGoalMade"},
            {"action": "tick", "seconds": 30},
            {"player": "0", "stat": "threePointerMade"},
            {"player": "0", "stat": "rebound"},
            {"action": "undo"},
            {"player": "23", "stat": "freeThrowMissed"},
            {"action": "tick", "seconds": 690},
        ],
    }


@pytest.fixture
def session_file(tmp_path: Path, sample_session: dict[str, Any]) -> Path:
    """Write ``sample_session`` to a JSON file and return its path."""
    path = tmp_path / "session.json"
    path.write_text(json.dumps(sample_session))
    return path


# =============================================================================
# Marker Helpers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")

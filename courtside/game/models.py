"""Data classes for live game state.

Holds the in-memory shapes the tracker mutates: the game itself, one box-score
record per player, and the immutable log entries used for undo.

Example:
    >>> from courtside.game.models import PlayerGameStats
    >>> stats = PlayerGameStats(player_id="p1", field_goals_made=3,
    ...                         field_goals_attempted=5, three_pointers_made=1,
    ...                         three_pointers_attempted=2)
    >>> stats.points
    7
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from enum import Enum

from courtside.types import GameId, PlayerId, TeamId, TeamSide

# =============================================================================
# Constants
# =============================================================================

DEFAULT_QUARTER_SECONDS: int = 12 * 60
DEFAULT_QUARTERS: int = 4

# Counters that are the "made" half of a shooting category, mapped to the
# matching "attempted" counter.
SHOOTING_PAIRS: dict[str, str] = {
    "field_goals_made": "field_goals_attempted",
    "three_pointers_made": "three_pointers_attempted",
    "free_throws_made": "free_throws_attempted",
}


# =============================================================================
# Enums
# =============================================================================


class StatType(str, Enum):
    """Scorekeeping event a player can be credited with."""

    FIELD_GOAL_MADE = "fieldGoalMade"
    FIELD_GOAL_MISSED = "fieldGoalMissed"
    THREE_POINTER_MADE = "threePointerMade"
    THREE_POINTER_MISSED = "threePointerMissed"
    FREE_THROW_MADE = "freeThrowMade"
    FREE_THROW_MISSED = "freeThrowMissed"
    REBOUND = "rebound"
    ASSIST = "assist"
    STEAL = "steal"
    BLOCK = "block"
    TURNOVER = "turnover"
    FOUL = "foul"


class ScoringMode(str, Enum):
    """Which team a scoring event credits."""

    HOME = "home"
    TEAM = "team"


class GamePhase(str, Enum):
    """Lifecycle phase of the tracked game."""

    SETUP = "setup"
    RUNNING = "running"
    PAUSED = "paused"
    QUARTER_BREAK = "quarter_break"
    COMPLETED = "completed"


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class PlayerGameStats:
    """Box-score counters for one player in one game.

    Derived values (points, rebounds, percentages, efficiency) are computed
    on access and never stored.
    """

    player_id: PlayerId
    game_id: GameId | None = None
    minutes_played: int = 0

    # Shooting
    field_goals_made: int = 0
    field_goals_attempted: int = 0
    three_pointers_made: int = 0
    three_pointers_attempted: int = 0
    free_throws_made: int = 0
    free_throws_attempted: int = 0

    # Other
    offensive_rebounds: int = 0
    defensive_rebounds: int = 0
    assists: int = 0
    steals: int = 0
    blocks: int = 0
    turnovers: int = 0
    personal_fouls: int = 0

    @property
    def total_rebounds(self) -> int:
        return self.offensive_rebounds + self.defensive_rebounds

    @property
    def points(self) -> int:
        two_pointers = self.field_goals_made - self.three_pointers_made
        return two_pointers * 2 + self.three_pointers_made * 3 + self.free_throws_made

    @property
    def field_goal_percentage(self) -> float:
        return _percentage(self.field_goals_made, self.field_goals_attempted)

    @property
    def three_point_percentage(self) -> float:
        return _percentage(self.three_pointers_made, self.three_pointers_attempted)

    @property
    def free_throw_percentage(self) -> float:
        return _percentage(self.free_throws_made, self.free_throws_attempted)

    @property
    def efficiency(self) -> int:
        """Net contribution: positives minus misses and turnovers, floored at 0."""
        missed_fg = self.field_goals_attempted - self.field_goals_made
        missed_ft = self.free_throws_attempted - self.free_throws_made
        value = (
            self.points
            + self.total_rebounds
            + self.assists
            + self.steals
            + self.blocks
            - missed_fg
            - missed_ft
            - self.turnovers
        )
        return max(value, 0)

    def counters(self) -> dict[str, int]:
        """Return the raw integer counters keyed by field name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in ("player_id", "game_id")
        }

    def is_empty(self) -> bool:
        """True when every counter is zero."""
        return not any(self.counters().values())

    def copy(self) -> PlayerGameStats:
        return replace(self)


@dataclass(frozen=True)
class StatAction:
    """Immutable log entry for one recorded stat event.

    Attributes:
        player_id: Player credited with the event.
        stat_type: Kind of event.
        value: Signed magnitude applied to the counters.
        timestamp: When the event was recorded.
        quarter: Quarter in which the event occurred.
        side: Team whose score the event credited.
    """

    player_id: PlayerId
    stat_type: StatType
    value: int
    timestamp: datetime
    quarter: int
    side: TeamSide = "home"


@dataclass
class Game:
    """One contest between a home and an away team."""

    home_team_id: TeamId = "home"
    away_team_id: TeamId = "away"
    home_team_name: str = "Home"
    away_team_name: str = "Away"
    id: GameId = field(default_factory=lambda: uuid.uuid4().hex)
    home_score: int = 0
    away_score: int = 0
    quarter: int = 1
    time_remaining: int = DEFAULT_QUARTER_SECONDS
    is_live: bool = False
    is_completed: bool = False
    quarter_scores: list[tuple[int, int] | None] = field(
        default_factory=lambda: [None] * DEFAULT_QUARTERS
    )
    player_stats: dict[PlayerId, PlayerGameStats] = field(default_factory=dict)
    date: datetime = field(default_factory=datetime.now)

    def score_for(self, side: TeamSide) -> int:
        return self.home_score if side == "home" else self.away_score


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the game handed to observers after each change.

    Player stats are copies; mutating them does not affect the tracker.
    """

    game_id: GameId
    home_team_id: TeamId
    away_team_id: TeamId
    home_team_name: str
    away_team_name: str
    home_score: int
    away_score: int
    quarter: int
    time_remaining: int
    is_live: bool
    is_completed: bool
    quarter_scores: tuple[tuple[int, int] | None, ...]
    player_stats: dict[PlayerId, PlayerGameStats]
    phase: GamePhase
    history_length: int

    @property
    def can_undo(self) -> bool:
        return self.history_length > 0 and not self.is_completed

    @classmethod
    def from_game(
        cls, game: Game, phase: GamePhase, history_length: int
    ) -> GameSnapshot:
        """Build a detached snapshot of ``game``."""
        return cls(
            game_id=game.id,
            home_team_id=game.home_team_id,
            away_team_id=game.away_team_id,
            home_team_name=game.home_team_name,
            away_team_name=game.away_team_name,
            home_score=game.home_score,
            away_score=game.away_score,
            quarter=game.quarter,
            time_remaining=game.time_remaining,
            is_live=game.is_live,
            is_completed=game.is_completed,
            quarter_scores=tuple(game.quarter_scores),
            player_stats={pid: s.copy() for pid, s in game.player_stats.items()},
            phase=phase,
            history_length=history_length,
        )


def _percentage(made: int, attempted: int) -> float:
    if attempted <= 0:
        return 0.0
    return made / attempted * 100

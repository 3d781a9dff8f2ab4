"""Live game stat tracker.

The tracker owns one authoritative Game and reacts to discrete stat events
and clock ticks, keeping the score, per-player box scores and the undo
history consistent with each other.

Phases:
    SETUP -> RUNNING <-> PAUSED -> QUARTER_BREAK -> RUNNING -> ... -> COMPLETED

COMPLETED is terminal: every mutating call except ``end_game`` (idempotent)
and ``reset_game`` (starts a new contest) is rejected with InvalidTransition.

Example:
    >>> from courtside.game.clock import ManualClock
    >>> tracker = LiveGameTracker(clock_factory=ManualClock)
    >>> _ = tracker.configure("Lakers", "Celtics")
    >>> tracker.record_stat("p1", StatType.THREE_POINTER_MADE).home_score
    3
    >>> tracker.undo_last_action().home_score
    0
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from functools import partial
from typing import Callable

from courtside.config import get_settings
from courtside.game.clock import AsyncioClock
from courtside.game.models import (
    Game,
    GamePhase,
    GameSnapshot,
    PlayerGameStats,
    StatAction,
    StatType,
)
from courtside.game.stats import apply_stat, check_stat, score_delta
from courtside.logging import get_logger
from courtside.types import (
    ClockFactory,
    EmptyHistory,
    InvalidTransition,
    PlayerId,
    RosterProvider,
    StatValueError,
    TeamId,
    TeamSide,
    TickSource,
    TrackerError,
    UnknownPlayerError,
)

SnapshotListener = Callable[[GameSnapshot], None]


class LiveGameTracker:
    """Maintains live game state for a scorekeeper.

    Every mutating operation returns the resulting GameSnapshot and passes it
    to registered listeners. A listener that raises is logged and skipped.

    Attributes:
        quarter_seconds: Length of each quarter in seconds.
        quarters: Number of quarters before the game ends.
        scoring_mode: "home" credits every score to the home team; "team"
            credits the team the player belongs to, via the roster.
    """

    def __init__(
        self,
        clock_factory: ClockFactory | None = None,
        roster: RosterProvider | None = None,
        scoring_mode: str | None = None,
        quarter_seconds: int | None = None,
        quarters: int | None = None,
    ) -> None:
        """Initialize the tracker with a placeholder home/away game.

        Args:
            clock_factory: Builds the tick source from the tracker's tick
                callback. Defaults to an AsyncioClock at the configured
                tick interval.
            roster: Roster collaborator, required for "team" scoring.
            scoring_mode: Overrides the configured scoring mode.
            quarter_seconds: Overrides the configured quarter length.
            quarters: Overrides the configured number of quarters.
        """
        settings = get_settings()

        self.quarter_seconds = quarter_seconds or settings.quarter_seconds
        self.quarters = quarters or settings.quarters
        self.scoring_mode = scoring_mode or settings.scoring_mode
        if self.scoring_mode not in ("home", "team"):
            raise ValueError(f"Unknown scoring mode: {self.scoring_mode}")
        if self.scoring_mode == "team" and roster is None:
            raise ValueError("Team scoring requires a roster")

        if clock_factory is None:
            clock_factory = partial(AsyncioClock, interval=settings.tick_interval)

        self._roster = roster
        self._clock: TickSource = clock_factory(self.tick)
        self._game = self._new_game()
        self._history: list[StatAction] = []
        self._actions_per_player: Counter[PlayerId] = Counter()
        self._phase = GamePhase.SETUP
        self._listeners: list[SnapshotListener] = []

    # =========================================================================
    # Observation
    # =========================================================================

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def clock(self) -> TickSource:
        return self._clock

    @property
    def history_length(self) -> int:
        return len(self._history)

    @property
    def can_undo(self) -> bool:
        return bool(self._history) and not self._game.is_completed

    @property
    def history(self) -> tuple[StatAction, ...]:
        return tuple(self._history)

    def snapshot(self) -> GameSnapshot:
        """Return a detached copy of the current game state."""
        return GameSnapshot.from_game(self._game, self._phase, len(self._history))

    def add_listener(self, listener: SnapshotListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SnapshotListener) -> None:
        self._listeners.remove(listener)

    # =========================================================================
    # Setup
    # =========================================================================

    def configure(
        self,
        home_team_name: str,
        away_team_name: str,
        home_team_id: TeamId | None = None,
        away_team_id: TeamId | None = None,
    ) -> GameSnapshot:
        """Start a fresh game between two named teams.

        Team ids default to the team names.

        Raises:
            InvalidTransition: If the game has left SETUP or a name is blank.
        """
        if self._phase is not GamePhase.SETUP:
            self._reject(f"configure is only valid in setup, not {self._phase.value}")
        if not isinstance(home_team_name, str) or not isinstance(away_team_name, str):
            self._reject("Team names must be strings")
        home_team_name = home_team_name.strip()
        away_team_name = away_team_name.strip()
        if not home_team_name or not away_team_name:
            self._reject("Team names cannot be empty")

        self._game = self._new_game(
            home_team_id=home_team_id or home_team_name,
            away_team_id=away_team_id or away_team_name,
            home_team_name=home_team_name,
            away_team_name=away_team_name,
        )
        self._clear_history()
        self._log.info(
            "Configured game {}: {} vs {}",
            self._game.id,
            home_team_name,
            away_team_name,
        )
        return self._notify()

    # =========================================================================
    # Clock
    # =========================================================================

    def toggle_clock(self) -> GameSnapshot:
        """Start the clock if stopped, stop it if running."""
        self._require_active("toggle_clock")
        if self._game.is_live:
            self._stop_clock()
            self._phase = GamePhase.PAUSED
            self._log.debug(
                "Clock paused at Q{} {}s", self._game.quarter, self._game.time_remaining
            )
        else:
            self._clock.start()
            self._game.is_live = True
            self._phase = GamePhase.RUNNING
            self._log.debug(
                "Clock running at Q{} {}s",
                self._game.quarter,
                self._game.time_remaining,
            )
        return self._notify()

    def tick(self) -> GameSnapshot:
        """Elapse one second of game time.

        A tick delivered while the clock is stopped has no effect. The tick
        that reaches zero stops the clock and advances the quarter.
        """
        if not self._game.is_live or self._game.is_completed:
            return self.snapshot()

        self._game.time_remaining = max(self._game.time_remaining - 1, 0)
        if self._game.time_remaining == 0:
            self._log.info("End of Q{}", self._game.quarter)
            self._stop_clock()
            return self.advance_quarter()
        return self._notify()

    def timeout(self) -> GameSnapshot:
        """Stop a running clock without touching quarter or score."""
        self._require_active("timeout")
        if self._game.is_live:
            self._stop_clock()
            self._phase = GamePhase.PAUSED
            self._log.info(
                "Timeout at Q{} {}s", self._game.quarter, self._game.time_remaining
            )
        return self._notify()

    def reset_clock(self) -> GameSnapshot:
        """Put the full quarter back on the clock and stop it."""
        self._require_active("reset_clock")
        if self._game.is_live:
            self._phase = GamePhase.PAUSED
        self._stop_clock()
        self._game.time_remaining = self.quarter_seconds
        return self._notify()

    # =========================================================================
    # Game flow
    # =========================================================================

    def advance_quarter(self) -> GameSnapshot:
        """Close out the current quarter.

        Snapshots the score into ``quarter_scores`` and moves to the next
        quarter with a stopped, full clock, or ends the game after the last
        quarter.
        """
        self._require_active("advance_quarter")
        game = self._game

        index = game.quarter - 1
        if 0 <= index < len(game.quarter_scores):
            game.quarter_scores[index] = (game.home_score, game.away_score)
        else:
            self._log.warning(
                "Quarter {} is outside the tracked quarter scores", game.quarter
            )

        if game.quarter < self.quarters:
            self._stop_clock()
            game.quarter += 1
            game.time_remaining = self.quarter_seconds
            self._phase = GamePhase.QUARTER_BREAK
            self._log.info(
                "Start of Q{}: {} {} - {} {}",
                game.quarter,
                game.home_team_name,
                game.home_score,
                game.away_score,
                game.away_team_name,
            )
            return self._notify()
        return self.end_game()

    def end_game(self) -> GameSnapshot:
        """Stop the clock and mark the game completed. Idempotent."""
        if self._game.is_completed:
            return self.snapshot()

        self._stop_clock()
        self._game.is_completed = True
        self._phase = GamePhase.COMPLETED
        self._finalize_stats()
        self._log.info(
            "Final: {} {} - {} {}",
            self._game.home_team_name,
            self._game.home_score,
            self._game.away_score,
            self._game.away_team_name,
        )
        return self._notify()

    def reset_game(self) -> GameSnapshot:
        """Discard all game state but keep the configured teams."""
        self._stop_clock()
        previous = self._game
        self._game = self._new_game(
            home_team_id=previous.home_team_id,
            away_team_id=previous.away_team_id,
            home_team_name=previous.home_team_name,
            away_team_name=previous.away_team_name,
        )
        self._clear_history()
        self._phase = GamePhase.SETUP
        self._log.info("Reset game, new id {}", self._game.id)
        return self._notify()

    # =========================================================================
    # Stats
    # =========================================================================

    def record_stat(
        self,
        player_id: PlayerId,
        stat_type: StatType | str,
        value: int = 1,
    ) -> GameSnapshot:
        """Record one stat event for a player.

        Args:
            player_id: Player credited with the event.
            stat_type: Kind of event, as a StatType or its string value.
            value: Signed magnitude, typically 1.

        Raises:
            InvalidTransition: If the game is completed.
            StatValueError: If the magnitude is zero or would break the
                box-score invariants.
            UnknownPlayerError: If team scoring cannot place the player.
        """
        self._require_active("record_stat")
        stat_type = StatType(stat_type)
        if isinstance(value, bool) or not isinstance(value, int):
            raise StatValueError(f"Stat magnitude must be an integer, got {value!r}")

        side = self._scoring_side(player_id)
        stats = self._game.player_stats.get(player_id)
        if stats is None:
            stats = PlayerGameStats(player_id=player_id, game_id=self._game.id)
        check_stat(stats, stat_type, value)

        action = StatAction(
            player_id=player_id,
            stat_type=stat_type,
            value=value,
            timestamp=datetime.now(),
            quarter=self._game.quarter,
            side=side,
        )
        self._history.append(action)
        self._actions_per_player[player_id] += 1
        self._game.player_stats.setdefault(player_id, stats)

        apply_stat(stats, stat_type, value)
        self._add_score(side, score_delta(stat_type, value))

        self._log.debug(
            "Q{} {}: {} {:+d} ({} {} - {})",
            action.quarter,
            player_id,
            stat_type.value,
            value,
            side,
            self._game.home_score,
            self._game.away_score,
        )
        return self._notify()

    def undo_last_action(self) -> GameSnapshot:
        """Reverse the most recent stat event.

        Raises:
            InvalidTransition: If the game is completed.
            EmptyHistory: If nothing has been recorded.
        """
        self._require_active("undo_last_action")
        if not self._history:
            self._log.warning("Undo requested with empty history")
            raise EmptyHistory("No recorded actions to undo")

        action = self._history.pop()
        stats = self._game.player_stats[action.player_id]
        apply_stat(stats, action.stat_type, -action.value)
        self._add_score(action.side, score_delta(action.stat_type, -action.value))

        self._actions_per_player[action.player_id] -= 1
        if self._actions_per_player[action.player_id] <= 0:
            # Player had no events before this one
            del self._actions_per_player[action.player_id]
            del self._game.player_stats[action.player_id]

        self._log.debug(
            "Undid {} {:+d} for {}",
            action.stat_type.value,
            action.value,
            action.player_id,
        )
        return self._notify()

    # =========================================================================
    # Teardown
    # =========================================================================

    def close(self) -> None:
        """Stop the clock and drop listeners."""
        self._stop_clock()
        self._listeners.clear()

    def __enter__(self) -> LiveGameTracker:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # =========================================================================
    # Internals
    # =========================================================================

    def _new_game(self, **teams: str) -> Game:
        game = Game(
            **teams,
            time_remaining=self.quarter_seconds,
            quarter_scores=[None] * self.quarters,
        )
        self._log = get_logger(__name__, game_id=game.id)
        return game

    def _clear_history(self) -> None:
        self._history.clear()
        self._actions_per_player.clear()

    def _stop_clock(self) -> None:
        self._clock.stop()
        self._game.is_live = False

    def _require_active(self, operation: str) -> None:
        if self._game.is_completed:
            self._reject(f"{operation} is not allowed after the game is completed")

    def _reject(self, message: str) -> None:
        self._log.warning("Rejected: {}", message)
        raise InvalidTransition(message)

    def _scoring_side(self, player_id: PlayerId) -> TeamSide:
        if self.scoring_mode == "home":
            return "home"

        if self._roster is None:
            raise TrackerError("Team scoring requires a roster")
        team_id = self._roster.team_of(player_id)
        if team_id is not None and team_id == self._game.home_team_id:
            return "home"
        if team_id is not None and team_id == self._game.away_team_id:
            return "away"
        self._log.warning("Player {} is not on either team", player_id)
        raise UnknownPlayerError(
            f"Player {player_id} is not on {self._game.home_team_id} "
            f"or {self._game.away_team_id}"
        )

    def _add_score(self, side: TeamSide, points: int) -> None:
        if side == "home":
            self._game.home_score += points
        else:
            self._game.away_score += points

    def _finalize_stats(self) -> None:
        # Reserved for end-of-game aggregates; the box score is final as-is
        for stats in self._game.player_stats.values():
            stats.game_id = self._game.id
        self._log.debug(
            "Finalized {} player box scores", len(self._game.player_stats)
        )

    def _notify(self) -> GameSnapshot:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            # State is already committed; listener errors are logged, not raised
            try:
                listener(snapshot)
            except Exception:
                self._log.exception("Snapshot listener {!r} failed", listener)
        return snapshot

"""Integration tests for a full tracked game.

Tests the complete flow from configuration through clock ticks, stat entry,
undo and quarter advances to the final box score.
"""

from __future__ import annotations

import random

import pytest

from courtside.game import (
    GamePhase,
    GameSnapshot,
    LiveGameTracker,
    ManualClock,
    StatType,
)
from courtside.game.models import SHOOTING_PAIRS
from courtside.output import box_score_frame, game_to_dict, team_totals
from courtside.roster import Roster
from courtside.types import EmptyHistory, StatValueError


def _assert_consistent(snap: GameSnapshot, mode: str, roster: Roster | None) -> None:
    """Box-score and score invariants that must hold after every event."""
    for stats in snap.player_stats.values():
        for made, attempted in SHOOTING_PAIRS.items():
            assert getattr(stats, attempted) >= getattr(stats, made)
        assert all(v >= 0 for v in stats.counters().values())
        assert stats.three_pointers_made <= stats.field_goals_made
        assert stats.points == (
            2 * (stats.field_goals_made - stats.three_pointers_made)
            + 3 * stats.three_pointers_made
            + stats.free_throws_made
        )

    if mode == "home":
        assert snap.home_score == sum(s.points for s in snap.player_stats.values())
        assert snap.away_score == 0
    else:
        assert roster is not None
        home = sum(
            s.points
            for pid, s in snap.player_stats.items()
            if roster.team_of(pid) == snap.home_team_id
        )
        away = sum(
            s.points
            for pid, s in snap.player_stats.items()
            if roster.team_of(pid) == snap.away_team_id
        )
        assert (snap.home_score, snap.away_score) == (home, away)


@pytest.mark.integration
class TestFullGame:
    """A regulation game played through the tracker."""

    def test_four_quarters(self, roster: Roster) -> None:
        """Play four timed quarters with scoring in each."""
        tracker = LiveGameTracker(
            clock_factory=ManualClock, roster=roster, scoring_mode="team"
        )
        tracker.configure("Lakers", "Celtics", home_team_id="LAL", away_team_id="BOS")
        clock = tracker.clock
        assert isinstance(clock, ManualClock)
        snapshots: list[GameSnapshot] = []
        tracker.add_listener(snapshots.append)

        for quarter in range(1, 5):
            assert tracker.snapshot().quarter == quarter
            tracker.toggle_clock()
            clock.advance(100)
            tracker.record_stat("23", StatType.FIELD_GOAL_MADE)
            tracker.record_stat("0", StatType.THREE_POINTER_MADE)
            tracker.timeout()
            tracker.record_stat("3", StatType.FREE_THROW_MADE)
            tracker.toggle_clock()
            clock.advance(620)

        final = tracker.snapshot()
        assert final.is_completed
        assert final.phase is GamePhase.COMPLETED
        assert final.quarter == 4
        assert (final.home_score, final.away_score) == (12, 12)
        assert final.quarter_scores == ((3, 3), (6, 6), (9, 9), (12, 12))
        assert snapshots[-1] == final
        assert not tracker.can_undo

        df = box_score_frame(final, roster=roster)
        assert df.loc["23", "PTS"] == 8
        assert df.loc["0", "3PM"] == 4
        assert df.loc["3", "player"] == "#3 Anthony Davis"

        data = game_to_dict(final, roster=roster)
        assert data["is_completed"] is True
        assert [q["home"] for q in data["quarter_breakdown"]] == [3, 3, 3, 3]

        totals = team_totals(final)
        assert totals.points == final.home_score + final.away_score

    def test_reset_and_replay_new_game(self) -> None:
        tracker = LiveGameTracker(clock_factory=ManualClock)
        tracker.configure("Lakers", "Celtics")
        tracker.record_stat("p1", StatType.THREE_POINTER_MADE)
        tracker.end_game()

        tracker.reset_game()
        tracker.record_stat("p2", StatType.FREE_THROW_MADE)
        snap = tracker.undo_last_action()

        assert snap.player_stats == {}
        assert snap.home_score == 0
        assert snap.home_team_name == "Lakers"


@pytest.mark.integration
@pytest.mark.slow
class TestRandomEventSequences:
    """Random event streams keep the tracker consistent."""

    @pytest.mark.parametrize("mode", ["home", "team"])
    @pytest.mark.parametrize("seed", [1, 7, 42])
    def test_invariants_hold(self, roster: Roster, mode: str, seed: int) -> None:
        rng = random.Random(seed)
        tracker = LiveGameTracker(
            clock_factory=ManualClock, roster=roster, scoring_mode=mode
        )
        tracker.configure("Lakers", "Celtics", home_team_id="LAL", away_team_id="BOS")
        clock = tracker.clock
        assert isinstance(clock, ManualClock)
        player_ids = ["23", "3", "0", "7"]
        recorded = 0

        for _ in range(400):
            if tracker.snapshot().is_completed:
                break
            roll = rng.random()
            if roll < 0.65:
                value = rng.choice([1, 1, 1, 2, -1])
                try:
                    tracker.record_stat(
                        rng.choice(player_ids), rng.choice(list(StatType)), value
                    )
                    recorded += 1
                except StatValueError:
                    pass
            elif roll < 0.8:
                try:
                    tracker.undo_last_action()
                    recorded -= 1
                except EmptyHistory:
                    assert recorded == 0
            elif roll < 0.9:
                tracker.toggle_clock()
            else:
                clock.advance(rng.randint(1, 120))

            snap = tracker.snapshot()
            assert snap.history_length == recorded
            assert 0 <= snap.time_remaining <= 720
            _assert_consistent(snap, mode, roster)

    def test_undo_everything_restores_empty_game(self, roster: Roster) -> None:
        rng = random.Random(3)
        tracker = LiveGameTracker(clock_factory=ManualClock)
        tracker.configure("Lakers", "Celtics")

        for _ in range(150):
            tracker.record_stat(rng.choice(["a", "b", "c"]), rng.choice(list(StatType)))

        while tracker.can_undo:
            tracker.undo_last_action()

        snap = tracker.snapshot()
        assert snap.player_stats == {}
        assert (snap.home_score, snap.away_score) == (0, 0)

"""Counter and score effects of stat events.

Each stat type maps to the box-score counters it moves. The same table is
used forwards when an event is recorded and with a negated delta when it is
undone, so a record followed by an undo always restores the counters.

Scoring composes additively: a made three-pointer earns the field-goal
credit (2 points) plus one additional point, for 3 in total.

Example:
    >>> from courtside.game.models import PlayerGameStats, StatType
    >>> stats = PlayerGameStats(player_id="p1")
    >>> apply_stat(stats, StatType.THREE_POINTER_MADE, 1)
    >>> stats.field_goals_made, stats.three_pointers_made
    (1, 1)
    >>> score_delta(StatType.THREE_POINTER_MADE, 1)
    3
"""

from __future__ import annotations

from courtside.game.models import SHOOTING_PAIRS, PlayerGameStats, StatType
from courtside.types import StatValueError

# =============================================================================
# Effect Tables
# =============================================================================

COUNTER_EFFECTS: dict[StatType, tuple[str, ...]] = {
    StatType.FIELD_GOAL_MADE: ("field_goals_made", "field_goals_attempted"),
    StatType.FIELD_GOAL_MISSED: ("field_goals_attempted",),
    StatType.THREE_POINTER_MADE: (
        "field_goals_made",
        "field_goals_attempted",
        "three_pointers_made",
        "three_pointers_attempted",
    ),
    StatType.THREE_POINTER_MISSED: (
        "field_goals_attempted",
        "three_pointers_attempted",
    ),
    StatType.FREE_THROW_MADE: ("free_throws_made", "free_throws_attempted"),
    StatType.FREE_THROW_MISSED: ("free_throws_attempted",),
    # The stat-entry grid has a single rebound button, booked as defensive
    StatType.REBOUND: ("defensive_rebounds",),
    StatType.ASSIST: ("assists",),
    StatType.STEAL: ("steals",),
    StatType.BLOCK: ("blocks",),
    StatType.TURNOVER: ("turnovers",),
    StatType.FOUL: ("personal_fouls",),
}

FIELD_GOAL_POINTS: int = 2
THREE_POINT_BONUS: int = 1
FREE_THROW_POINTS: int = 1

# Stat types that carry the made-field-goal score credit
FIELD_GOAL_MAKES: frozenset[StatType] = frozenset(
    {StatType.FIELD_GOAL_MADE, StatType.THREE_POINTER_MADE}
)


# =============================================================================
# Functions
# =============================================================================


def score_delta(stat_type: StatType, delta: int) -> int:
    """Return the points a stat event adds to the scoring team.

    Args:
        stat_type: Kind of event.
        delta: Signed magnitude (negative when undoing).

    Returns:
        Signed change to the team score.
    """
    points = 0
    if stat_type in FIELD_GOAL_MAKES:
        points += FIELD_GOAL_POINTS * delta
    if stat_type is StatType.THREE_POINTER_MADE:
        points += THREE_POINT_BONUS * delta
    if stat_type is StatType.FREE_THROW_MADE:
        points += FREE_THROW_POINTS * delta
    return points


def is_scoring(stat_type: StatType) -> bool:
    return score_delta(stat_type, 1) != 0


def check_stat(stats: PlayerGameStats, stat_type: StatType, delta: int) -> None:
    """Validate that applying ``delta`` keeps the counters consistent.

    Raises:
        StatValueError: If the delta is zero, drives a counter negative, or
            leaves a shooting category with more makes than attempts.
    """
    if delta == 0:
        raise StatValueError(f"Stat magnitude for {stat_type.value} cannot be zero")

    counters = stats.counters()
    for name in COUNTER_EFFECTS[stat_type]:
        counters[name] += delta
        if counters[name] < 0:
            raise StatValueError(
                f"{stat_type.value} by {delta} would make {name} negative "
                f"for player {stats.player_id}"
            )

    for made, attempted in SHOOTING_PAIRS.items():
        if counters[attempted] < counters[made]:
            raise StatValueError(
                f"{stat_type.value} by {delta} would leave {made} above "
                f"{attempted} for player {stats.player_id}"
            )


def apply_stat(stats: PlayerGameStats, stat_type: StatType, delta: int) -> None:
    """Apply a stat event's counter deltas in place.

    Args:
        stats: Player record to mutate.
        stat_type: Kind of event.
        delta: Signed magnitude; pass the negated value to undo.
    """
    for name in COUNTER_EFFECTS[stat_type]:
        setattr(stats, name, getattr(stats, name) + delta)

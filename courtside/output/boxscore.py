"""Box score and scoreboard output for tracked games.

Turns a game (a tracker snapshot or the Game itself) into the shapes the
presentation layer consumes: a pandas box score, team totals, per-quarter
points and a JSON-ready dictionary.

Example:
    >>> from courtside.output import box_score_frame, format_clock
    >>> df = box_score_frame(tracker.snapshot())
    >>> print(df[["player", "PTS", "REB"]])
    >>> format_clock(425)
    '07:05'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Union

import pandas as pd

from courtside.game.models import Game, GameSnapshot, PlayerGameStats
from courtside.logging import get_logger

if TYPE_CHECKING:
    from courtside.roster import Roster

logger = get_logger(__name__)

GameLike = Union[Game, GameSnapshot]

# =============================================================================
# Constants
# =============================================================================

# Box score column label -> PlayerGameStats attribute
BOX_SCORE_COLUMNS: dict[str, str] = {
    "MIN": "minutes_played",
    "FGM": "field_goals_made",
    "FGA": "field_goals_attempted",
    "FG%": "field_goal_percentage",
    "3PM": "three_pointers_made",
    "3PA": "three_pointers_attempted",
    "3P%": "three_point_percentage",
    "FTM": "free_throws_made",
    "FTA": "free_throws_attempted",
    "FT%": "free_throw_percentage",
    "OREB": "offensive_rebounds",
    "DREB": "defensive_rebounds",
    "REB": "total_rebounds",
    "AST": "assists",
    "STL": "steals",
    "BLK": "blocks",
    "TOV": "turnovers",
    "PF": "personal_fouls",
    "PTS": "points",
    "EFF": "efficiency",
}

PERCENTAGE_COLUMNS: tuple[str, ...] = ("FG%", "3P%", "FT%")


# =============================================================================
# Formatting
# =============================================================================


def format_clock(seconds: int | float) -> str:
    """Format remaining seconds as MM:SS."""
    total = max(int(seconds), 0)
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


# =============================================================================
# Box Score
# =============================================================================


def box_score_frame(game: GameLike, roster: Roster | None = None) -> pd.DataFrame:
    """Build a per-player box score.

    Args:
        game: Game or snapshot to read from.
        roster: Optional roster used to label players by jersey and name.

    Returns:
        DataFrame indexed by player id, in order of each player's first
        event, with one column per BOX_SCORE_COLUMNS entry.
    """
    rows = []
    for player_id, stats in game.player_stats.items():
        row: dict[str, Any] = {
            "player_id": player_id,
            "player": roster.player_name(player_id) if roster else player_id,
        }
        for label, attr in BOX_SCORE_COLUMNS.items():
            row[label] = getattr(stats, attr)
        rows.append(row)

    columns = ["player_id", "player", *BOX_SCORE_COLUMNS]
    df = pd.DataFrame(rows, columns=columns).set_index("player_id")
    if not df.empty:
        pct = list(PERCENTAGE_COLUMNS)
        df[pct] = df[pct].astype(float).round(1)
    logger.debug("Built box score with {} players", len(df))
    return df


def team_totals(game: GameLike) -> PlayerGameStats:
    """Sum every player's counters into a single team line.

    Percentages and points on the returned record are recomputed from the
    summed counters rather than averaged.
    """
    totals = PlayerGameStats(player_id="TOTAL", game_id=_game_id(game))
    for stats in game.player_stats.values():
        for name, value in stats.counters().items():
            setattr(totals, name, getattr(totals, name) + value)
    return totals


def quarter_breakdown(game: GameLike) -> list[dict[str, int]]:
    """Return points scored in each completed quarter.

    ``quarter_scores`` holds cumulative scores at the end of each quarter;
    this differences them into per-quarter points. Quarters that have not
    ended yet are omitted.
    """
    breakdown = []
    prev_home, prev_away = 0, 0
    for number, score in enumerate(game.quarter_scores, start=1):
        if score is None:
            continue
        home, away = score
        breakdown.append(
            {"quarter": number, "home": home - prev_home, "away": away - prev_away}
        )
        prev_home, prev_away = home, away
    return breakdown


def game_to_dict(game: GameLike, roster: Roster | None = None) -> dict[str, Any]:
    """Convert a game to a dictionary for JSON serialization."""
    players = []
    for player_id, stats in game.player_stats.items():
        entry: dict[str, Any] = {
            "player_id": player_id,
            "player": roster.player_name(player_id) if roster else player_id,
        }
        entry.update(stats.counters())
        entry.update(
            {
                "points": stats.points,
                "total_rebounds": stats.total_rebounds,
                "field_goal_percentage": round(stats.field_goal_percentage, 1),
                "three_point_percentage": round(stats.three_point_percentage, 1),
                "free_throw_percentage": round(stats.free_throw_percentage, 1),
                "efficiency": stats.efficiency,
            }
        )
        players.append(entry)

    data: dict[str, Any] = {
        "game_id": _game_id(game),
        "home_team": {"id": game.home_team_id, "name": game.home_team_name},
        "away_team": {"id": game.away_team_id, "name": game.away_team_name},
        "home_score": game.home_score,
        "away_score": game.away_score,
        "quarter": game.quarter,
        "time_remaining": game.time_remaining,
        "clock": format_clock(game.time_remaining),
        "is_live": game.is_live,
        "is_completed": game.is_completed,
        "quarter_scores": [
            list(s) if s is not None else None for s in game.quarter_scores
        ],
        "quarter_breakdown": quarter_breakdown(game),
        "players": players,
    }
    if isinstance(game, GameSnapshot):
        data["phase"] = game.phase.value
        data["history_length"] = game.history_length
    return data


def _game_id(game: GameLike) -> str:
    return game.game_id if isinstance(game, GameSnapshot) else game.id

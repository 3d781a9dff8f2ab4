"""Output generation for tracked games.

Submodules:
    boxscore: Box score DataFrame, team totals, quarter breakdown, JSON export

Example:
    >>> from courtside.output import box_score_frame, game_to_dict
    >>> df = box_score_frame(tracker.snapshot(), roster=roster)
    >>> payload = game_to_dict(tracker.snapshot())
"""

from __future__ import annotations

from courtside.output.boxscore import (
    BOX_SCORE_COLUMNS,
    box_score_frame,
    format_clock,
    game_to_dict,
    quarter_breakdown,
    team_totals,
)

__all__ = [
    "BOX_SCORE_COLUMNS",
    "box_score_frame",
    "format_clock",
    "game_to_dict",
    "quarter_breakdown",
    "team_totals",
]

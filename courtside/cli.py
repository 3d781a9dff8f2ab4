"""CLI entrypoint using Typer.

This module defines the command-line interface for Courtside. It replays
recorded scorekeeping sessions through the live game tracker and prints the
resulting scoreboard and box score.

Example:
    $ courtside --help
    $ courtside replay session.json
    $ courtside replay session.json --output final.json
    $ courtside replay session.json --json --scoring-mode team
    $ courtside stat-types
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from courtside import __version__
from courtside.config import get_settings
from courtside.game.models import ScoringMode
from courtside.logging import setup_logging

if TYPE_CHECKING:
    from courtside.game.models import GameSnapshot

# Initialize console for rich output
console = Console()

# Integer box score columns shown in the replay table
BOX_SCORE_TABLE_COLUMNS: tuple[str, ...] = (
    "PTS", "FGM", "FGA", "3PM", "3PA", "FTM", "FTA",
    "REB", "AST", "STL", "BLK", "TOV", "PF", "EFF",
)

app = typer.Typer(
    name="courtside",
    help="Live basketball stat tracking CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]courtside[/bold blue] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-V",
            help="Enable verbose output",
        ),
    ] = False,
) -> None:
    """Live basketball stat tracking CLI.

    Replays scorekeeping sessions and reports box scores.
    """
    settings = get_settings()
    log_level = "DEBUG" if verbose else settings.log_level
    setup_logging(level=log_level, log_dir=settings.log_dir_obj)


# =============================================================================
# Commands
# =============================================================================


@app.command("replay")
def replay_command(
    session_file: Annotated[
        Path,
        typer.Argument(
            help="JSON session file with teams, optional roster and events",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the final game as JSON to this path",
        ),
    ] = None,
    scoring_mode: Annotated[
        ScoringMode | None,
        typer.Option(
            "--scoring-mode",
            "-m",
            help="Credit scores to the home team or to the player's team",
            case_sensitive=False,
        ),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the final game as JSON instead of tables",
        ),
    ] = False,
) -> None:
    """Replay a scorekeeping session and print the box score."""
    from courtside.output import box_score_frame, game_to_dict
    from courtside.replay import load_session, replay
    from courtside.types import CourtsideError

    try:
        session = load_session(session_file)
        tracker = replay(
            session, scoring_mode=scoring_mode.value if scoring_mode else None
        )
    except CourtsideError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    snapshot = tracker.snapshot()
    tracker.close()
    game_data = game_to_dict(snapshot, roster=session.roster)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w") as f:
            json.dump(game_data, f, indent=2)

    if as_json:
        typer.echo(json.dumps(game_data, indent=2))
        return

    _print_scoreboard(snapshot)
    _print_quarters(snapshot)

    box_score = box_score_frame(snapshot, roster=session.roster)
    if box_score.empty:
        console.print("[yellow]No stats recorded[/yellow]")
    else:
        table = Table(title="Box Score")
        table.add_column("Player", style="cyan")
        for column in BOX_SCORE_TABLE_COLUMNS:
            table.add_column(column, justify="right")
        table.add_column("FG%", justify="right")
        for _, row in box_score.iterrows():
            table.add_row(
                str(row["player"]),
                *(str(int(row[c])) for c in BOX_SCORE_TABLE_COLUMNS),
                f"{row['FG%']:.1f}",
            )
        console.print(table)

    if output is not None:
        console.print(f"[green]Wrote game to {output}[/green]")


@app.command("stat-types")
def stat_types_command() -> None:
    """List the stat types a scorekeeper can record."""
    from courtside.game import COUNTER_EFFECTS, StatType, score_delta

    table = Table(title="Stat Types")
    table.add_column("Stat", style="cyan")
    table.add_column("Points", justify="right")
    table.add_column("Counters")

    for stat_type in StatType:
        table.add_row(
            stat_type.value,
            str(score_delta(stat_type, 1)),
            ", ".join(COUNTER_EFFECTS[stat_type]),
        )
    console.print(table)


def _print_scoreboard(snapshot: GameSnapshot) -> None:
    from courtside.output import format_clock

    if snapshot.is_completed:
        status = "[bold]FINAL[/bold]"
    elif snapshot.is_live:
        status = "[bold red]LIVE[/bold red]"
    else:
        status = f"[yellow]{snapshot.phase.value.replace('_', ' ').upper()}[/yellow]"

    console.print(
        Panel(
            f"[bold]{snapshot.home_team_name}[/bold] {snapshot.home_score}  -  "
            f"{snapshot.away_score} [bold]{snapshot.away_team_name}[/bold]\n"
            f"Q{snapshot.quarter}  {format_clock(snapshot.time_remaining)}  {status}",
            title="Scoreboard",
        )
    )


def _print_quarters(snapshot: GameSnapshot) -> None:
    from courtside.output import quarter_breakdown

    breakdown = quarter_breakdown(snapshot)
    if not breakdown:
        return

    table = Table(title="By Quarter")
    table.add_column("Team", style="cyan")
    for entry in breakdown:
        table.add_column(f"Q{entry['quarter']}", justify="right")
    table.add_row(snapshot.home_team_name, *(str(e["home"]) for e in breakdown))
    table.add_row(snapshot.away_team_name, *(str(e["away"]) for e in breakdown))
    console.print(table)


if __name__ == "__main__":
    app()

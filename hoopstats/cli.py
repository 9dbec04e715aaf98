"""CLI entrypoint using Typer.

This module defines the command-line interface for the stats tracker. Every
command reads a JSON file holding a list of statline objects (the same field
names as ``PlayerGameStatline.to_dict``) and renders results with rich.

Example:
    $ hoopstats --help
    $ hoopstats metrics game.json
    $ hoopstats season season.json --player p-7
    $ hoopstats boxscore game.json --team Hawks
    $ hoopstats validate game.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from hoopstats import __version__
from hoopstats.config import Settings, get_settings
from hoopstats.logging import get_logger, setup_logging
from hoopstats.metrics.statline import PlayerGameStatline
from hoopstats.output.formatting import format_number, format_percentage, rating_tier
from hoopstats.types import HoopStatsError

logger = get_logger(__name__)

# Initialize console for rich output
console = Console()

# Create main app
app = typer.Typer(
    name="hoopstats",
    help="Basketball statistics tracker CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Badge colors per rating tier
TIER_STYLES: dict[str, str] = {
    "high": "green",
    "medium": "yellow",
    "low": "red",
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]hoopstats[/bold blue] version {__version__}")
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
    """Basketball statistics tracker CLI.

    Computes shooting splits, Efficiency, Game Score and Index of Success
    from player statlines, aggregates seasons and renders box scores.
    """
    setup_logging(get_settings(), level="DEBUG" if verbose else None)


# =============================================================================
# Helpers
# =============================================================================


def load_statlines(path: Path) -> list[PlayerGameStatline]:
    """Load a JSON list of statline objects.

    Args:
        path: JSON file path.

    Returns:
        Parsed statlines in file order.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not a JSON list of objects, or a counting
            field is not a number.
        KeyError: If an entry has no player id.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of statlines")

    statlines = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ValueError(f"Entry {index} in {path} is not an object")
        try:
            statlines.append(PlayerGameStatline.from_dict(entry))
        except KeyError as e:
            raise KeyError(f"Entry {index} in {path} is missing {e.args[0]}") from e
        except ValueError as e:
            raise ValueError(f"Entry {index}: {e}") from e
    logger.debug("Loaded {} statlines from {}", len(statlines), path)
    return statlines


def _load_or_exit(path: Path) -> list[PlayerGameStatline]:
    try:
        return load_statlines(path)
    except (OSError, ValueError, KeyError, TypeError) as e:
        message = e.args[0] if isinstance(e, KeyError) and e.args else e
        console.print(f"[red]Error loading {path}: {message}[/red]")
        raise typer.Exit(1) from e


def _fmt(value: float, settings: Settings) -> str:
    return format_number(value, settings.display_decimals)


def _pct(value: float, settings: Settings) -> str:
    return format_percentage(value, settings.display_decimals)


def _badge(value: float, settings: Settings) -> str:
    tier = rating_tier(
        value,
        settings.high_rating_threshold,
        settings.medium_rating_threshold,
    )
    style = TIER_STYLES[tier.value]
    return f"[{style}]{_fmt(value, settings)}[/{style}]"


# =============================================================================
# Commands
# =============================================================================


@app.command("metrics")
def metrics_command(
    file: Annotated[
        Path,
        typer.Argument(help="JSON file with a list of statlines"),
    ],
    games: Annotated[
        int,
        typer.Option(
            "--games",
            "-g",
            help="Games played divisor for per-game rates",
        ),
    ] = 1,
) -> None:
    """Show advanced metrics for each statline.

    Displays shooting splits, EFF, GmSc and IoS, plus per-game rates when
    the statlines are season totals.
    """
    from hoopstats.metrics.calculator import calculate_advanced_metrics

    settings = get_settings()
    statlines = _load_or_exit(file)

    table = Table(title=f"Advanced Metrics ({file.name})")
    table.add_column("Player", style="cyan")
    table.add_column("PTS", justify="right")
    table.add_column("REB", justify="right")
    table.add_column("AST", justify="right")
    table.add_column("FG%", justify="right")
    table.add_column("3P%", justify="right")
    table.add_column("FT%", justify="right")
    table.add_column("EFF", justify="right")
    table.add_column("GmSc", justify="right")
    table.add_column("IoS", justify="right")
    if games > 1:
        table.add_column("PPG", justify="right", style="green")
        table.add_column("RPG", justify="right", style="green")
        table.add_column("APG", justify="right", style="green")

    for stat in statlines:
        try:
            metrics = calculate_advanced_metrics(stat, games)
        except HoopStatsError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1) from e

        row = [
            stat.player_id,
            _fmt(stat.points, settings),
            _fmt(metrics.total_rebounds, settings),
            _fmt(stat.assists, settings),
            _pct(metrics.field_goal_percentage, settings),
            _pct(metrics.three_point_percentage, settings),
            _pct(metrics.free_throw_percentage, settings),
            _badge(metrics.efficiency, settings),
            _badge(metrics.game_score, settings),
            _badge(metrics.index_of_success, settings),
        ]
        if games > 1:
            row.extend(
                [
                    _fmt(metrics.points_per_game, settings),
                    _fmt(metrics.rebounds_per_game, settings),
                    _fmt(metrics.assists_per_game, settings),
                ]
            )
        table.add_row(*row)

    console.print(table)


@app.command("season")
def season_command(
    file: Annotated[
        Path,
        typer.Argument(help="JSON file with a list of game statlines"),
    ],
    player: Annotated[
        str | None,
        typer.Option(
            "--player",
            "-p",
            help="Only show this player id",
        ),
    ] = None,
) -> None:
    """Aggregate game statlines into season totals and averages per player."""
    from hoopstats.metrics.aggregation import aggregate_by_player
    from hoopstats.metrics.calculator import efficiency
    from hoopstats.output.formatting import format_minutes

    settings = get_settings()
    summaries = aggregate_by_player(_load_or_exit(file))

    if player is not None:
        if player not in summaries:
            console.print(f"[red]Error: No statlines for player {player}[/red]")
            raise typer.Exit(1)
        summaries = {player: summaries[player]}

    if not summaries:
        console.print("[yellow]No statlines found[/yellow]")
        return

    table = Table(title="Season Averages")
    table.add_column("Player", style="cyan")
    table.add_column("GP", justify="right")
    table.add_column("MIN", justify="right")
    table.add_column("PPG", justify="right", style="green")
    table.add_column("RPG", justify="right")
    table.add_column("APG", justify="right")
    table.add_column("FG%", justify="right")
    table.add_column("3P%", justify="right")
    table.add_column("FT%", justify="right")
    table.add_column("EFF/G", justify="right")

    for summary in summaries.values():
        advanced = summary.advanced
        table.add_row(
            summary.player_id,
            str(summary.games_played),
            format_minutes(advanced.minutes_per_game),
            _fmt(advanced.points_per_game, settings),
            _fmt(advanced.rebounds_per_game, settings),
            _fmt(advanced.assists_per_game, settings),
            _pct(advanced.field_goal_percentage, settings),
            _pct(advanced.three_point_percentage, settings),
            _pct(advanced.free_throw_percentage, settings),
            _badge(efficiency(summary.averages), settings),
        )

    console.print(table)


@app.command("boxscore")
def boxscore_command(
    file: Annotated[
        Path,
        typer.Argument(help="JSON file with one team's statlines for a game"),
    ],
    team: Annotated[
        str,
        typer.Option(
            "--team",
            "-t",
            help="Team name for the table title",
        ),
    ] = "Team",
) -> None:
    """Render a box score with team totals and team shooting metrics."""
    from hoopstats.output.boxscore import BoxScore
    from hoopstats.output.formatting import (
        format_made_attempted,
        format_minutes,
        format_plus_minus,
    )

    settings = get_settings()
    box = BoxScore.build(team, team, _load_or_exit(file), settings=settings)

    table = Table(title=f"{box.team_name} Box Score")
    table.add_column("Player", style="cyan")
    table.add_column("MIN", justify="right")
    table.add_column("PTS", justify="right")
    table.add_column("FG", justify="right")
    table.add_column("3PT", justify="right")
    table.add_column("FT", justify="right")
    table.add_column("REB", justify="right")
    table.add_column("AST", justify="right")
    table.add_column("STL", justify="right")
    table.add_column("BLK", justify="right")
    table.add_column("TO", justify="right")
    table.add_column("PF", justify="right")
    table.add_column("+/-", justify="right")
    table.add_column("EFF", justify="right")

    for row in box.rows:
        stat = row.statline
        table.add_row(
            row.name,
            format_minutes(stat.minutes_played),
            _fmt(stat.points, settings),
            format_made_attempted(stat.fg_made, stat.fg_attempted),
            format_made_attempted(stat.three_made, stat.three_attempted),
            format_made_attempted(stat.ft_made, stat.ft_attempted),
            _fmt(row.advanced.total_rebounds, settings),
            _fmt(stat.assists, settings),
            _fmt(stat.steals, settings),
            _fmt(stat.blocks, settings),
            _fmt(stat.turnovers, settings),
            _fmt(stat.fouls, settings),
            format_plus_minus(stat.plus_minus),
            _badge(row.advanced.efficiency, settings),
        )

    totals = box.totals
    table.add_row(
        "[bold]Totals[/bold]",
        "",
        _fmt(totals.points, settings),
        format_made_attempted(totals.fg_made, totals.fg_attempted),
        format_made_attempted(totals.three_made, totals.three_attempted),
        format_made_attempted(totals.ft_made, totals.ft_attempted),
        _fmt(box.team_metrics.total_rebounds, settings),
        _fmt(totals.assists, settings),
        _fmt(totals.steals, settings),
        _fmt(totals.blocks, settings),
        _fmt(totals.turnovers, settings),
        _fmt(totals.fouls, settings),
        "",
        "",
    )
    console.print(table)

    metrics = box.team_metrics
    console.print(
        Panel(
            f"[bold]FG%:[/bold] {_pct(metrics.field_goal_percentage, settings)}\n"
            f"[bold]3P%:[/bold] {_pct(metrics.three_point_percentage, settings)}\n"
            f"[bold]FT%:[/bold] {_pct(metrics.free_throw_percentage, settings)}\n"
            f"[bold]eFG%:[/bold] "
            f"{_pct(metrics.effective_field_goal_percentage, settings)}\n"
            f"[bold]TS%:[/bold] {_pct(metrics.true_shooting_percentage, settings)}\n"
            f"[bold]AST/TO:[/bold] {metrics.assist_to_turnover_ratio:.2f}",
            title="Team Shooting",
        )
    )


@app.command("validate")
def validate_command(
    file: Annotated[
        Path,
        typer.Argument(help="JSON file with a list of statlines"),
    ],
) -> None:
    """Check statlines for broken made/attempted invariants.

    Exits with code 1 when any statline has errors. Warnings are reported
    but do not fail the check.
    """
    from hoopstats.game.validation import StatlineValidator

    settings = get_settings()
    statlines = _load_or_exit(file)
    validator = StatlineValidator(foul_out_limit=settings.foul_out_limit)
    result = validator.validate_many(statlines)

    for error in result.errors:
        console.print(f"[red]ERROR[/red] {error}")
    for warning in result.warnings:
        console.print(f"[yellow]WARNING[/yellow] {warning}")

    if not result.valid:
        console.print(
            f"[red]Validation failed: {len(result.errors)} errors "
            f"in {len(statlines)} statlines[/red]"
        )
        raise typer.Exit(1)

    console.print(
        f"[green]All {len(statlines)} statlines valid[/green] "
        f"({len(result.warnings)} warnings)"
    )


if __name__ == "__main__":
    app()

"""Main cli api for the frc_scheduler package."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from .config.app_config import AppConfig, apply_overrides
from .config.constants import CostComponent
from .engine import export_results, init_logging, run_annealer
from .io.observers import RichObserver
from .io.schedule_exporter import position_labels

if TYPE_CHECKING:
    from .data_model.schedule import Schedule

app = typer.Typer(
    help="FRC match schedule annealer",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()
logger = logging.getLogger(__name__)

ConfigOption = Annotated[Path | None, typer.Option("--config", "-c", help="Path to a JSON configuration file.")]


def cost_table(title: str, schedule: Schedule) -> Table:
    """Build a table of the cost components of a schedule."""
    table = Table(title=title)
    table.add_column("Component", style="cyan")
    table.add_column("Cost", justify="right", style="green")
    breakdown = schedule.cost_model.breakdown(schedule)
    for component in CostComponent:
        table.add_row(str(component), str(breakdown[component]))
    table.add_row("[bold]Total[/bold]", f"[bold]{sum(breakdown.values())}[/bold]")
    table.add_row("Duplicates", str(int(schedule.get_match_duplicates().sum())))
    return table


def allies_table(schedule: Schedule) -> Table:
    """Build a table of the distinct allies and opponents of every team."""
    allies, opponents = schedule.get_allies_and_opponents()
    table = Table(title="Allies and Opponents")
    table.add_column("Team", justify="right", style="cyan")
    table.add_column("# Allies", justify="right")
    table.add_column("Allies")
    table.add_column("# Opponents", justify="right")
    table.add_column("Opponents")
    for team in range(schedule.num_teams):
        table.add_row(
            str(team),
            str(len(allies[team])),
            " ".join(str(t) for t in sorted(allies[team])),
            str(len(opponents[team])),
            " ".join(str(t) for t in sorted(opponents[team])),
        )
    return table


def turnarounds_table(schedule: Schedule) -> Table:
    """Build a table with one row of turnarounds per team."""
    table = Table(title="Turnarounds")
    table.add_column("Team", justify="right", style="cyan")
    table.add_column("Matches", justify="right")
    table.add_column("Turnarounds")
    counts = schedule.matches_by_team()
    for team, row in enumerate(schedule.get_turnarounds().tolist()):
        table.add_row(str(team), str(counts.get(team, 0)), f"[{', '.join(str(t) for t in row)}]")
    return table


def matches_table(schedule: Schedule) -> Table:
    """Build a table with one row per match."""
    table = Table(title=f"Schedule ({schedule.num_matches} matches)")
    table.add_column("Match", justify="right", style="cyan")
    for label in position_labels():
        table.add_column(label, justify="right", style="blue" if label.startswith("Blue") else "red")
    for match_number, match in enumerate(schedule.iter_matches(), start=1):
        table.add_row(str(match_number), *(str(t) for t in match))
    return table


@app.command()
def run(
    config: ConfigOption = None,
    teams: Annotated[int | None, typer.Option("--teams", "-t", min=1, help="Number of teams.")] = None,
    matches_per_team: Annotated[int | None, typer.Option("--matches", "-m", min=1, help="Matches per team.")] = None,
    temperature: Annotated[float | None, typer.Option("--temperature", help="Initial temperature.")] = None,
    steps: Annotated[int | None, typer.Option("--steps", "-s", min=0, help="Number of annealing steps.")] = None,
    seed: Annotated[str | None, typer.Option("--seed", help="Random seed.")] = None,
    output_dir: Annotated[str | None, typer.Option("--output", "-o", help="Output directory.")] = None,
    show_schedule: Annotated[bool, typer.Option("--show-schedule", help="Print every match.")] = False,
    show_allies: Annotated[bool, typer.Option("--show-allies", help="Print allies and opponents.")] = False,
    show_turnarounds: Annotated[bool, typer.Option("--show-turnarounds", help="Print turnarounds.")] = False,
) -> None:
    """Build a random schedule and improve it by simulated annealing."""
    model = AppConfig.load_model(config)
    model = apply_overrides(
        model,
        {
            "schedule": {"num_teams": teams, "matches_per_team": matches_per_team},
            "annealing": {
                "initial_temperature": temperature,
                "max_steps": steps,
                "rng_seed": int(seed) if seed is not None and seed.isdigit() else seed,
            },
            "exports": {"output_dir": output_dir},
        },
    )
    app_config = AppConfig.build_from_model(model)
    init_logging(app_config)

    console.print(
        f"[cyan]Teams: {model.schedule.num_teams}, Matches per Team: {model.schedule.matches_per_team}, "
        f"Seed: {app_config.seed}[/cyan]"
    )
    start_time = time.time()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeRemainingColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Initializing...", total=None)
        schedule, annealer = run_annealer(app_config, observers=(RichObserver(progress, task),))

    duration = time.time() - start_time
    accepted, total, rate = annealer.stats.get_stats()
    console.print("[bold green]Run Complete![/bold green]")
    console.print(f"Duration: {duration:.2f}s")
    console.print(f"Initial Cost: {annealer.initial_cost}")
    console.print(f"Final Cost: {annealer.current_cost}")
    console.print(f"Moves Kept: {accepted}/{total} ({rate})")
    console.print(cost_table("Final Cost", schedule))

    if show_allies:
        console.print(allies_table(schedule))
    if show_turnarounds:
        console.print(turnarounds_table(schedule))
    if show_schedule:
        console.print(matches_table(schedule))

    for path in export_results(app_config, schedule, annealer):
        console.print(f"Saved: {path}")


@app.command(name="show")
def show_config(config: ConfigOption = None) -> None:
    """Print the resolved configuration."""
    model = AppConfig.load_model(config)
    console.print_json(model.model_dump_json())

"""Engine for programmatically running the FRC match scheduler."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .data_model.schedule import Schedule
from .io.observers import LoggingObserver
from .io.plot import Plot
from .io.schedule_exporter import CsvExporter, JsonExporter, TextExporter
from .metrics.cost import CostModel

if TYPE_CHECKING:
    from .annealing.annealer import Annealer
    from .config.app_config import AppConfig
    from .io.observers import AnnealObserver


logger = logging.getLogger(__name__)


def init_logging(app_config: AppConfig) -> None:
    """Initialize logging for the application."""
    logging_model = app_config.logging
    file = logging.FileHandler(
        filename=Path(logging_model.log_file),
        mode="w",
        encoding="utf-8",
        delay=True,
    )
    file.setLevel(logging_model.loglevel_file)
    file.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s[%(module)s] %(message)s"))

    console = logging.StreamHandler()
    console.setLevel(logging_model.loglevel_console)
    console.setFormatter(logging.Formatter("%(levelname)s[%(module)s] %(message)s"))

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.addHandler(file)
    root.addHandler(console)

    root.debug("Start: FRC Match Scheduler.")
    app_config.log_creation_info()


def build_schedule(app_config: AppConfig) -> Schedule:
    """Build the base schedule described by the configuration, shuffled if requested."""
    schedule_model = app_config.schedule
    schedule = Schedule(
        num_teams=schedule_model.num_teams,
        matches_per_team=schedule_model.matches_per_team,
        rng=app_config.rng,
        cost_model=CostModel(legacy=app_config.cost.legacy),
    )
    if schedule_model.shuffle:
        schedule.shuffle()
    return schedule


def run_annealer(
    app_config: AppConfig,
    observers: tuple[AnnealObserver, ...] = (),
) -> tuple[Schedule, Annealer]:
    """Build a schedule and improve it with the configured annealing parameters."""
    schedule = build_schedule(app_config)
    annealing = app_config.annealing
    annealer = schedule.optimize(
        initial_temperature=annealing.initial_temperature,
        max_steps=annealing.max_steps,
        observers=(LoggingObserver(), *observers),
        report_interval=annealing.report_interval,
    )
    return schedule, annealer


def export_results(app_config: AppConfig, schedule: Schedule, annealer: Annealer) -> list[Path]:
    """Write the enabled exports and return the paths written."""
    exports = app_config.exports
    output_dir = Path(exports.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    targets = (
        (exports.schedule_json, JsonExporter(), "schedule.json"),
        (exports.schedule_csv, CsvExporter(), "schedule.csv"),
        (exports.schedule_txt, TextExporter(), "schedule.txt"),
    )
    written = []
    for enabled, exporter, filename in targets:
        if not enabled:
            continue
        path = output_dir / filename
        if exporter.export(schedule, path):
            written.append(path)

    if exports.plot_cost and (plot_path := Plot(annealer.history).plot_cost("Annealing Cost", output_dir)):
        written.append(plot_path)

    return written

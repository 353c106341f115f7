"""Observers for the FRC schedule annealer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rich.progress import Progress, TaskID

    from ..annealing.history import MoveStats


logger = getLogger(__name__)


@dataclass(slots=True)
class AnnealObserver(ABC):
    """Abstract base class for observers of an annealing run."""

    @abstractmethod
    def on_start(self, max_steps: int, initial_cost: int) -> None:
        """Call at the start of the annealing run."""

    @abstractmethod
    def on_step_end(self, step: int, max_steps: int, cost: int, temperature: float) -> None:
        """Call after a reporting step to report status."""

    @abstractmethod
    def on_finish(self, initial_cost: int, final_cost: int, stats: MoveStats) -> None:
        """Call when the annealing run is finished."""


@dataclass(slots=True)
class LoggingObserver(AnnealObserver):
    """Observer that logs step and cost information."""

    def on_start(self, max_steps: int, initial_cost: int) -> None:
        """Log the start of the annealing run."""
        logger.debug("Starting annealing run for %d steps from cost %d.", max_steps, initial_cost)

    def on_step_end(self, step: int, max_steps: int, cost: int, temperature: float) -> None:
        """Log the cost and temperature of a step."""
        logger.debug("Cost %d | Temperature %.3g | Step %d/%d", cost, temperature, step, max_steps)

    def on_finish(self, initial_cost: int, final_cost: int, stats: MoveStats) -> None:
        """Log the completion of the annealing run."""
        logger.debug("Annealing run completed.")
        if final_cost > initial_cost:
            logger.warning("Final cost %d is higher than the initial cost %d.", final_cost, initial_cost)
        accepted, total, rate = stats.get_stats()
        logger.debug("Cost %d -> %d, moves kept: %d/%d (%s)", initial_cost, final_cost, accepted, total, rate)


@dataclass(slots=True)
class RichObserver(AnnealObserver):
    """Connects annealing progress to a Rich Progress Task."""

    progress: Progress
    task_id: TaskID

    def on_start(self, max_steps: int, initial_cost: int) -> None:
        """Initialize progress task."""
        self.progress.update(
            task_id=self.task_id,
            total=max_steps,
            description=f"[cyan]Starting...[/cyan] | [green]Cost: {initial_cost}[/green]",
        )

    def on_step_end(self, step: int, max_steps: int, cost: int, temperature: float) -> None:
        """Update progress task at step end."""
        self.progress.update(
            self.task_id,
            total=max_steps,
            completed=step,
            description=f"[cyan]T: {temperature:.3g}[/cyan] | [green]Cost: {cost}[/green]",
        )

    def on_finish(self, initial_cost: int, final_cost: int, stats: MoveStats) -> None:
        """Finalize progress task."""
        self.progress.update(
            self.task_id,
            description=f"[cyan]Done[/cyan] | [green]Cost: {initial_cost} -> {final_cost}[/green]",
        )

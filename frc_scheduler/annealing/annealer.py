"""Simulated annealing for FRC match schedules."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from ..config.constants import AnnealState, MoveOutcome
from ..exceptions import ScheduleConfigurationError
from .history import CostHistory, MoveStats

if TYPE_CHECKING:
    from ..data_model.schedule import Schedule
    from ..io.observers import AnnealObserver

logger = getLogger(__name__)


def acceptance_probability(cost_diff: int, temperature: float) -> float:
    """Return the Metropolis probability of accepting a move that raises the cost by cost_diff."""
    if temperature <= 0.0:
        return 0.0
    try:
        return math.exp(-cost_diff / temperature)
    except OverflowError:
        return 0.0


@dataclass(slots=True)
class Annealer:
    """Improves a schedule by swapping pairs of slots.

    Every step swaps two random slots and recomputes the full cost. A swap
    that does not raise the cost is kept. A swap that raises it is kept with
    the Metropolis probability, otherwise undone. After step i the
    temperature is divided by i + 1, so uphill moves stop being accepted
    after a few dozen steps. The run always takes exactly max_steps steps.
    A copy of the lowest cost schedule seen is kept as best_schedule.
    """

    schedule: Schedule
    initial_temperature: float
    max_steps: int
    observers: tuple[AnnealObserver, ...] = ()
    report_interval: int = 100

    state: AnnealState = field(default=AnnealState.RUNNING, init=False)
    temperature: float = field(default=0.0, init=False)
    initial_cost: int = field(default=0, init=False)
    current_cost: int = field(default=0, init=False)
    best_cost: int = field(default=0, init=False)
    best_schedule: Schedule | None = field(default=None, init=False, repr=False)
    history: CostHistory = field(init=False, repr=False)
    stats: MoveStats = field(default_factory=MoveStats, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate the run parameters and set up the initial state."""
        if self.initial_temperature <= 0:
            msg = f"initial_temperature must be positive, got {self.initial_temperature}."
            raise ScheduleConfigurationError(msg)

        if self.max_steps < 0:
            msg = f"max_steps must be non-negative, got {self.max_steps}."
            raise ScheduleConfigurationError(msg)

        if self.report_interval < 1:
            msg = f"report_interval must be at least 1, got {self.report_interval}."
            raise ScheduleConfigurationError(msg)

        self.temperature = float(self.initial_temperature)
        self.history = CostHistory.build(self.max_steps)

    def run(self) -> None:
        """Run all annealing steps on the schedule."""
        if self.state is AnnealState.DONE:
            msg = "Annealing run has already finished."
            raise RuntimeError(msg)

        self.initial_cost = self.schedule.get_cost()
        self.current_cost = self.initial_cost
        self.best_cost = self.initial_cost
        self.best_schedule = self.schedule.copy()
        self._notify_on_start()

        for i in range(self.max_steps):
            self.step(i)
            completed = i + 1
            if completed % self.report_interval == 0 or completed == self.max_steps:
                self._notify_on_step_end(completed)

        self.state = AnnealState.DONE
        self._notify_on_finish()

    def step(self, i: int) -> MoveOutcome:
        """Perform annealing step i and cool the temperature."""
        schedule = self.schedule
        idx1, idx2 = schedule.random_swap_indices()
        schedule.swap(idx1, idx2)
        new_cost = schedule.get_cost()
        cost_diff = new_cost - self.current_cost

        if cost_diff < 0:
            outcome = MoveOutcome.IMPROVED
        elif cost_diff == 0:
            outcome = MoveOutcome.NEUTRAL
        elif schedule.rng.random() < acceptance_probability(cost_diff, self.temperature):
            outcome = MoveOutcome.ACCEPTED
        else:
            outcome = MoveOutcome.REJECTED

        if outcome is MoveOutcome.REJECTED:
            schedule.swap(idx1, idx2)
        else:
            self.current_cost = new_cost
            if new_cost < self.best_cost:
                self.best_cost = new_cost
                self.best_schedule = schedule.copy()

        self.stats.count(outcome)
        self.temperature /= i + 1
        self.history.record(self.current_cost, self.temperature)
        return outcome

    def _notify_on_start(self) -> None:
        """Notify observers that the run has started."""
        for obs in self.observers:
            obs.on_start(self.max_steps, self.initial_cost)

    def _notify_on_step_end(self, completed: int) -> None:
        """Notify observers of progress."""
        for obs in self.observers:
            obs.on_step_end(completed, self.max_steps, self.current_cost, self.temperature)

    def _notify_on_finish(self) -> None:
        """Notify observers that the run has finished."""
        for obs in self.observers:
            obs.on_finish(self.initial_cost, self.current_cost, self.stats)

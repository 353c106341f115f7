"""Cost history and move statistics for the annealer."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field

import numpy as np

from ..config.constants import MoveOutcome

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CostHistory:
    """Cost and temperature after every annealing step.

    Costs are kept as exact Python ints in an object array. They can exceed
    the float64 range on large schedules.
    """

    costs: np.ndarray
    temperatures: np.ndarray
    step: int = 0

    @classmethod
    def build(cls, max_steps: int) -> CostHistory:
        """Create an empty history for max_steps steps."""
        return cls(
            costs=np.full(max_steps, fill_value=-1, dtype=object),
            temperatures=np.zeros(max_steps, dtype=float),
        )

    def record(self, cost: int, temperature: float) -> None:
        """Record the cost and temperature of the current step."""
        self.costs[self.step] = cost
        self.temperatures[self.step] = temperature
        self.step += 1

    def recorded_costs(self) -> np.ndarray:
        """Return the costs of the steps recorded so far."""
        return self.costs[: self.step]

    def recorded_temperatures(self) -> np.ndarray:
        """Return the temperatures of the steps recorded so far."""
        return self.temperatures[: self.step]


@dataclass(slots=True)
class MoveStats:
    """Class for collecting statistics on annealing moves."""

    outcomes: Counter = field(default_factory=Counter)

    def count(self, outcome: MoveOutcome) -> None:
        """Record the outcome of a move."""
        self.outcomes[outcome] += 1

    @property
    def total(self) -> int:
        """Return the number of moves recorded."""
        return sum(self.outcomes.values())

    def acceptance_rate(self) -> float:
        """Return the share of moves that were kept."""
        total = self.total
        if total == 0:
            return 0.0
        return 1.0 - self.outcomes[MoveOutcome.REJECTED] / total

    def get_stats(self) -> tuple[int, int, str]:
        """Get the accepted, total and rate of the recorded moves."""
        total = self.total
        accepted = total - self.outcomes[MoveOutcome.REJECTED]
        return accepted, total, f"{self.acceptance_rate():.2%}"

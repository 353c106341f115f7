"""Represents an FRC match schedule and the operations that mutate it."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from ..annealing.annealer import Annealer
from ..config.constants import DEFAULT_MATCHES_PER_TEAM, TEAMS_PER_MATCH
from ..exceptions import CapacityOverflowError, ScheduleConfigurationError
from ..metrics import metrics
from ..metrics.cost import CostModel
from .index import to_match_and_pos

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ..io.observers import AnnealObserver

logger = logging.getLogger(__name__)


def calc_num_matches(num_teams: int, matches_per_team: int) -> int:
    """Return the number of matches needed for every team to play matches_per_team times."""
    return math.ceil(num_teams * matches_per_team / TEAMS_PER_MATCH)


@dataclass(slots=True, eq=False)
class Schedule:
    """A num_matches x 6 grid of team ids.

    Positions 0-2 of a match are the blue alliance and 3-5 the red alliance.
    The grid is the only mutable state. Every metric and cost is recomputed
    from it on each call, so a result obtained before a swap or shuffle is
    stale afterwards.
    """

    num_teams: int
    matches_per_team: int = DEFAULT_MATCHES_PER_TEAM
    rng: np.random.Generator = field(default_factory=np.random.default_rng, repr=False)
    cost_model: CostModel = field(default_factory=CostModel, repr=False)
    num_matches: int = field(init=False)
    schedule: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate the parameters and build the round-robin base schedule."""
        if self.num_teams <= 0:
            msg = f"num_teams must be positive, got {self.num_teams}."
            raise ScheduleConfigurationError(msg)

        if self.matches_per_team <= 0:
            msg = f"matches_per_team must be positive, got {self.matches_per_team}."
            raise ScheduleConfigurationError(msg)

        self.num_matches = calc_num_matches(self.num_teams, self.matches_per_team)
        self._check_capacity()
        self.build()

    def _check_capacity(self) -> None:
        """Ensure the busiest team's turnarounds fit the turnaround table."""
        most_appearances = math.ceil(self.array_count / self.num_teams)
        if most_appearances - 1 > self.matches_per_team:
            raise CapacityOverflowError(0, most_appearances - 1, self.matches_per_team)

    def __len__(self) -> int:
        """Return the number of matches."""
        return self.num_matches

    def __eq__(self, other: object) -> bool:
        """Two schedules are equal if they assign the same teams to the same slots."""
        if not isinstance(other, Schedule):
            return NotImplemented
        return self.num_teams == other.num_teams and np.array_equal(self.schedule, other.schedule)

    @property
    def array_count(self) -> int:
        """Number of cells in the schedule, num_matches * 6."""
        return self.num_matches * TEAMS_PER_MATCH

    def build(self) -> None:
        """Fill the schedule with team ids 0..num_teams-1, wrapping around."""
        flat = np.arange(self.array_count, dtype=int) % self.num_teams
        self.schedule = flat.reshape(self.num_matches, TEAMS_PER_MATCH)
        logger.debug("Built base schedule: %d teams, %d matches.", self.num_teams, self.num_matches)

    def copy(self) -> Schedule:
        """Create a copy of the schedule sharing its generator and cost model."""
        clone = Schedule(
            num_teams=self.num_teams,
            matches_per_team=self.matches_per_team,
            rng=self.rng,
            cost_model=self.cost_model,
        )
        clone.schedule = self.schedule.copy()
        return clone

    def get_match(self, match: int) -> list[int]:
        """Return the six team ids of a match."""
        return self.schedule[match].tolist()

    def iter_matches(self) -> Iterator[list[int]]:
        """Yield the six team ids of every match in order."""
        for match in range(self.num_matches):
            yield self.get_match(match)

    def shuffle(self) -> None:
        """Randomly permute every cell of the schedule in place."""
        flat = self.schedule.reshape(-1)
        count = self.array_count
        for pos in range(count):
            other = int(self.rng.integers(pos, count))
            flat[pos], flat[other] = flat[other], flat[pos]
        self.schedule = flat.reshape(self.num_matches, TEAMS_PER_MATCH)
        logger.debug("Shuffled schedule of %d slots.", count)

    def swap(self, flat_index1: int, flat_index2: int) -> None:
        """Swap the teams at two flat indices."""
        match1, pos1 = to_match_and_pos(flat_index1)
        match2, pos2 = to_match_and_pos(flat_index2)
        grid = self.schedule
        grid[match1, pos1], grid[match2, pos2] = grid[match2, pos2], grid[match1, pos1]

    def random_swap_indices(self) -> tuple[int, int]:
        """Return two different, uniformly random flat indices."""
        index1 = int(self.rng.integers(self.array_count))
        index2 = int(self.rng.integers(self.array_count))
        while index1 == index2:
            index2 = int(self.rng.integers(self.array_count))
        return index1, index2

    def matches_by_team(self) -> dict[int, int]:
        """Return the number of matches played by each team appearing in the schedule."""
        return metrics.matches_by_team(self.schedule)

    def get_match_duplicates(self) -> np.ndarray:
        """Return the number of duplicate team assignments in each match."""
        return metrics.match_duplicates(self.schedule)

    def get_turnarounds(self) -> np.ndarray:
        """Return the num_teams x matches_per_team turnaround table."""
        return metrics.turnarounds(self.schedule, self.num_teams, self.matches_per_team)

    def get_allies_and_opponents(self) -> tuple[list[set[int]], list[set[int]]]:
        """Return the distinct allies and opponents of every team."""
        return metrics.allies_and_opponents(self.schedule, self.num_teams)

    def get_turnaround_cost(self) -> int:
        """Return the total cost of all turnarounds."""
        return self.cost_model.turnaround_cost(self)

    def get_ally_opponent_cost(self) -> tuple[int, int]:
        """Return the (ally, opponent) diversity costs."""
        return self.cost_model.ally_opponent_cost(self)

    def get_cost(self) -> int:
        """Return the total cost of the schedule."""
        return self.cost_model.total_cost(self)

    def optimize(
        self,
        initial_temperature: float,
        max_steps: int,
        observers: tuple[AnnealObserver, ...] = (),
        report_interval: int = 100,
    ) -> Annealer:
        """Improve the schedule in place by simulated annealing."""
        annealer = Annealer(
            schedule=self,
            initial_temperature=initial_temperature,
            max_steps=max_steps,
            observers=observers,
            report_interval=report_interval,
        )
        annealer.run()
        return annealer

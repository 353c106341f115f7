"""Cost model for FRC match schedules."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..config.constants import (
    ALLY_COST_BASE,
    NO_TURNAROUND,
    OPPONENT_COST_BASE,
    TEAMS_PER_ALLIANCE,
    TURNAROUND_COST_BASE,
    CostComponent,
)

if TYPE_CHECKING:
    from ..data_model.schedule import Schedule

logger = logging.getLogger(__name__)


def optimal_turnaround(num_matches: int, matches_per_team: int) -> int:
    """Return the evenly spaced turnaround, truncated to an integer."""
    return num_matches // matches_per_team


def diversity_cost(base: int, maximum: int, seen: int) -> int:
    """Return base ** (maximum - seen), or 0 when more than maximum were seen."""
    shortfall = maximum - seen
    return base**shortfall if shortfall >= 0 else 0


@dataclass(slots=True, frozen=True)
class CostModel:
    """Turns schedule metrics into a single cost, lower is better.

    Turnaround cost: turnarounds at the optimal spacing or one match below it
    are free. Each further match of shortfall multiplies the cost by 10.
    Turnarounds of at least twice the optimal spacing cost as much as the
    worst short turnaround. Turnarounds strictly between optimal and twice
    optimal are free.

    Ally and opponent cost: for each team, 2 (allies) or 10 (opponents) raised
    to the number of distinct partners it missed out of the most it could
    have met.

    With legacy set, two behaviors of the original scheduler are kept: the
    free band of the turnaround table also covers optimal - 2 while entry 2
    copies entry 1, and only the last team's opponent cost is counted.
    """

    legacy: bool = False

    def turnaround_costs(self, optimal: int) -> list[int]:
        """Return the cost of each turnaround from 0 up to optimal."""
        free_from = optimal - 2 if self.legacy else optimal - 1
        costs = [TURNAROUND_COST_BASE ** (optimal - i - 1) if i < free_from else 0 for i in range(optimal + 1)]
        if self.legacy and len(costs) > 2:
            costs[2] = costs[1]
        return costs

    def turnaround_cost(self, schedule: Schedule) -> int:
        """Return the total cost of all turnarounds of all teams."""
        optimal = optimal_turnaround(schedule.num_matches, schedule.matches_per_team)
        costs = self.turnaround_costs(optimal)
        total = 0
        for turnaround in schedule.get_turnarounds().ravel().tolist():
            if turnaround == NO_TURNAROUND:
                continue
            if 0 <= turnaround <= optimal:
                total += costs[turnaround]
            # Long gaps between matches
            elif turnaround >= 2 * optimal:
                total += costs[0]
        return total

    def ally_opponent_cost(self, schedule: Schedule) -> tuple[int, int]:
        """Return the (ally, opponent) costs summed over all teams."""
        n_teams = schedule.num_teams
        max_allies = min((TEAMS_PER_ALLIANCE - 1) * schedule.matches_per_team, n_teams - 1)
        max_opponents = min(TEAMS_PER_ALLIANCE * schedule.matches_per_team, n_teams - 1)
        allies, opponents = schedule.get_allies_and_opponents()

        ally_cost = 0
        opponent_cost = 0
        for team in range(n_teams):
            ally_cost += diversity_cost(ALLY_COST_BASE, max_allies, len(allies[team]))
            team_opponent_cost = diversity_cost(OPPONENT_COST_BASE, max_opponents, len(opponents[team]))
            if self.legacy:
                opponent_cost = team_opponent_cost
            else:
                opponent_cost += team_opponent_cost
        return ally_cost, opponent_cost

    def breakdown(self, schedule: Schedule) -> dict[CostComponent, int]:
        """Return each component of the schedule cost."""
        ally_cost, opponent_cost = self.ally_opponent_cost(schedule)
        return {
            CostComponent.TURNAROUND: self.turnaround_cost(schedule),
            CostComponent.ALLY: ally_cost,
            CostComponent.OPPONENT: opponent_cost,
        }

    def total_cost(self, schedule: Schedule) -> int:
        """Return the unweighted sum of the turnaround, ally and opponent costs."""
        return sum(self.breakdown(schedule).values())

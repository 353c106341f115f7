"""Tests for the schedule cost model."""

import numpy as np
import pytest

from frc_scheduler.config.constants import CostComponent
from frc_scheduler.data_model.schedule import Schedule
from frc_scheduler.metrics.cost import CostModel, diversity_cost, optimal_turnaround

LEGACY = CostModel(legacy=True)


@pytest.fixture
def turnaround_schedule(small_schedule: Schedule) -> Schedule:
    """Create a 12 team schedule with zero and long turnarounds for teams 0 and 1."""
    small_schedule.schedule = np.array(
        [
            [0, 0, 2, 3, 4, 5],
            [6, 7, 8, 9, 10, 11],
            [1, 3, 6, 1, 4, 7],
            [2, 5, 8, 9, 10, 11],
            [0, 4, 8, 2, 6, 10],
            [0, 5, 9, 3, 7, 11],
        ],
        dtype=int,
    )
    return small_schedule


def test_optimal_turnaround() -> None:
    """Test that the optimal turnaround is truncated."""
    assert optimal_turnaround(60, 12) == 5
    assert optimal_turnaround(100, 12) == 8
    assert optimal_turnaround(2, 12) == 0


def test_turnaround_costs_table() -> None:
    """Test that each match of shortfall below optimal costs ten times more."""
    assert CostModel().turnaround_costs(5) == [10000, 1000, 100, 10, 0, 0]
    assert CostModel().turnaround_costs(2) == [10, 0, 0]
    assert CostModel().turnaround_costs(1) == [0, 0]
    assert CostModel().turnaround_costs(0) == [0]


def test_turnaround_costs_table_legacy() -> None:
    """Test the legacy table with a wider free band and entry 2 copied from entry 1."""
    assert LEGACY.turnaround_costs(5) == [10000, 1000, 1000, 0, 0, 0]
    assert LEGACY.turnaround_costs(8) == [10**7, 10**6, 10**6, 10**4, 1000, 100, 0, 0, 0]
    assert LEGACY.turnaround_costs(1) == [0, 0]


def test_turnaround_cost_round_robin(base_schedule: Schedule) -> None:
    """Test that an evenly spaced schedule has no turnaround cost."""
    assert base_schedule.get_turnaround_cost() == 0


def test_turnaround_cost(turnaround_schedule: Schedule) -> None:
    """Test zero turnarounds and gaps of twice the optimal spacing."""
    # Optimal is 2, team 0 has [0, 4, 1] and team 1 has [0]
    assert turnaround_schedule.get_turnaround_cost() == 30
    assert LEGACY.turnaround_cost(turnaround_schedule) == 0


def test_turnaround_cost_between_optimal_and_double(base_schedule: Schedule) -> None:
    """Test that gaps longer than optimal but short of double cost nothing."""
    # Teams 0 and 6 trade matches 0 and 1, giving first turnarounds of 4 and 6
    base_schedule.swap(0, 6)
    row = base_schedule.get_turnarounds()[0].tolist()
    assert row[:2] == [4, 5]
    assert base_schedule.get_turnarounds()[6].tolist()[0] == 6
    assert base_schedule.get_turnaround_cost() == 0


def test_diversity_cost() -> None:
    """Test the exponential shortfall penalty."""
    assert diversity_cost(2, 6, 6) == 1
    assert diversity_cost(2, 6, 4) == 4
    assert diversity_cost(10, 9, 5) == 10**4
    assert diversity_cost(10, 9, 10) == 0


def test_ally_opponent_cost(small_schedule: Schedule) -> None:
    """Test the ally and opponent costs summed over all teams."""
    ally_cost, opponent_cost = small_schedule.get_ally_opponent_cost()
    assert ally_cost == 9 * 1 + 3 * 4
    assert opponent_cost == 11550


def test_ally_opponent_cost_legacy(small_schedule: Schedule) -> None:
    """Test that the legacy opponent cost only keeps the last team."""
    ally_cost, opponent_cost = LEGACY.ally_opponent_cost(small_schedule)
    assert ally_cost == 21
    assert opponent_cost == 100


def test_ally_opponent_cost_large_values(base_schedule: Schedule) -> None:
    """Test that costs far beyond 64-bit range are exact."""
    _, opponent_cost = base_schedule.get_ally_opponent_cost()
    # Every team meets the same 3 opponents: 10 ** (29 - 3) each
    assert opponent_cost == 30 * 10**26


def test_total_cost(small_schedule: Schedule) -> None:
    """Test that the total cost is the unweighted sum of its components."""
    breakdown = small_schedule.cost_model.breakdown(small_schedule)
    assert breakdown == {
        CostComponent.TURNAROUND: 0,
        CostComponent.ALLY: 21,
        CostComponent.OPPONENT: 11550,
    }
    assert small_schedule.get_cost() == 11571
    assert LEGACY.total_cost(small_schedule) == 121

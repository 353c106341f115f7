"""Tests for the simulated annealing optimizer."""

import math
from dataclasses import dataclass, field

import numpy as np
import pytest

from frc_scheduler.annealing.annealer import Annealer, acceptance_probability
from frc_scheduler.annealing.history import CostHistory, MoveStats
from frc_scheduler.config.constants import AnnealState, MoveOutcome
from frc_scheduler.data_model.schedule import Schedule
from frc_scheduler.exceptions import ScheduleConfigurationError
from frc_scheduler.io.observers import AnnealObserver


@dataclass(slots=True)
class RecordingObserver(AnnealObserver):
    """Observer that records every notification."""

    events: list[tuple] = field(default_factory=list)

    def on_start(self, max_steps: int, initial_cost: int) -> None:
        """Record the start of the run."""
        self.events.append(("start", max_steps, initial_cost))

    def on_step_end(self, step: int, max_steps: int, cost: int, temperature: float) -> None:
        """Record a reported step."""
        self.events.append(("step", step))

    def on_finish(self, initial_cost: int, final_cost: int, stats: MoveStats) -> None:
        """Record the end of the run."""
        self.events.append(("finish", initial_cost, final_cost, stats.total))


def test_acceptance_probability() -> None:
    """Test the Metropolis criterion and its limits."""
    assert acceptance_probability(1, 1.0) == pytest.approx(math.exp(-1))
    assert acceptance_probability(100, 200.0) == pytest.approx(math.exp(-0.5))
    assert acceptance_probability(5, 0.0) == 0.0
    assert acceptance_probability(10**400, 1.0) == 0.0
    assert acceptance_probability(1, 1e-300) == 0.0


def test_optimize_zero_steps(shuffled_schedule: Schedule) -> None:
    """Test that zero steps leave the schedule and cost unchanged."""
    before = shuffled_schedule.copy()
    cost_before = shuffled_schedule.get_cost()

    annealer = shuffled_schedule.optimize(initial_temperature=2000, max_steps=0)

    assert shuffled_schedule == before
    assert shuffled_schedule.get_cost() == cost_before
    assert annealer.state is AnnealState.DONE
    assert annealer.initial_cost == annealer.current_cost == cost_before
    assert annealer.history.recorded_costs().size == 0
    assert annealer.stats.total == 0
    assert annealer.best_schedule == shuffled_schedule


def test_optimize_improves(shuffled_schedule: Schedule) -> None:
    """Test that annealing keeps the teams and tracks the final cost."""
    teams_before = np.sort(shuffled_schedule.schedule.ravel())

    annealer = shuffled_schedule.optimize(initial_temperature=2000, max_steps=300)

    assert np.array_equal(np.sort(shuffled_schedule.schedule.ravel()), teams_before)
    assert annealer.state is AnnealState.DONE
    assert annealer.current_cost == shuffled_schedule.get_cost()
    assert annealer.best_cost <= annealer.initial_cost
    assert annealer.best_cost <= annealer.current_cost
    assert annealer.stats.total == 300

    costs = annealer.history.recorded_costs()
    assert costs.size == 300
    assert costs[-1] == annealer.current_cost
    # Once the temperature has collapsed, no move that raises the cost is kept
    assert np.all(np.diff(costs[10:]) <= 0)


def test_best_schedule_snapshot(shuffled_schedule: Schedule) -> None:
    """Test that the lowest cost schedule seen is kept apart from the working grid."""
    annealer = shuffled_schedule.optimize(initial_temperature=2000, max_steps=300)

    best = annealer.best_schedule
    assert best is not None
    assert best is not shuffled_schedule
    assert best.get_cost() == annealer.best_cost
    assert annealer.best_cost == min(annealer.history.recorded_costs().min(), annealer.initial_cost)


def test_optimize_cost_beyond_float_range() -> None:
    """Test a schedule whose turnaround cost exceeds the float64 range."""
    # Optimal turnaround is 317, so a short turnaround costs up to 10 ** 316
    schedule = Schedule(num_teams=1900, matches_per_team=2, rng=np.random.default_rng(1))
    schedule.shuffle()

    annealer = schedule.optimize(initial_temperature=10, max_steps=2)

    costs = annealer.history.recorded_costs()
    assert annealer.state is AnnealState.DONE
    assert costs[0] > 10**308
    assert costs[-1] == annealer.current_cost == schedule.get_cost()
    assert annealer.best_schedule.get_cost() == annealer.best_cost


def test_optimize_is_reproducible() -> None:
    """Test that runs with the same seed give the same schedule."""
    results = []
    for _ in range(2):
        schedule = Schedule(num_teams=18, matches_per_team=6, rng=np.random.default_rng(7))
        schedule.shuffle()
        schedule.optimize(initial_temperature=100, max_steps=200)
        results.append(schedule)
    assert results[0] == results[1]


def test_cooling_schedule(shuffled_schedule: Schedule) -> None:
    """Test that step i divides the temperature by i + 1."""
    annealer = shuffled_schedule.optimize(initial_temperature=1200, max_steps=5)
    temperatures = annealer.history.recorded_temperatures()
    assert temperatures.tolist() == pytest.approx([1200.0, 600.0, 200.0, 50.0, 10.0])
    assert annealer.temperature == pytest.approx(10.0)


def test_rejected_move_is_undone(small_schedule: Schedule) -> None:
    """Test that a move raising the cost at zero temperature is reverted."""
    annealer = Annealer(schedule=small_schedule, initial_temperature=1e-300, max_steps=50)
    annealer.initial_cost = annealer.current_cost = small_schedule.get_cost()
    annealer.temperature = 0.0
    for i in range(50):
        before = small_schedule.copy()
        outcome = annealer.step(i)
        if outcome is MoveOutcome.REJECTED:
            assert small_schedule == before
        assert outcome is not MoveOutcome.ACCEPTED
        assert annealer.current_cost == small_schedule.get_cost()


def test_observers_notified(small_schedule: Schedule) -> None:
    """Test observer notifications at start, every interval and finish."""
    observer = RecordingObserver()
    annealer = small_schedule.optimize(
        initial_temperature=10,
        max_steps=25,
        observers=(observer,),
        report_interval=10,
    )
    assert observer.events[0] == ("start", 25, annealer.initial_cost)
    assert observer.events[1:4] == [("step", 10), ("step", 20), ("step", 25)]
    assert observer.events[4] == ("finish", annealer.initial_cost, annealer.current_cost, 25)


def test_annealer_runs_once(small_schedule: Schedule) -> None:
    """Test that a finished annealer cannot be run again."""
    annealer = small_schedule.optimize(initial_temperature=10, max_steps=3)
    with pytest.raises(RuntimeError):
        annealer.run()


@pytest.mark.parametrize(
    ("initial_temperature", "max_steps", "report_interval"),
    [(0, 10, 1), (-5, 10, 1), (10, -1, 1), (10, 10, 0)],
)
def test_annealer_rejects_invalid_parameters(
    small_schedule: Schedule, initial_temperature: float, max_steps: int, report_interval: int
) -> None:
    """Test that invalid run parameters are rejected."""
    with pytest.raises(ScheduleConfigurationError):
        small_schedule.optimize(
            initial_temperature=initial_temperature,
            max_steps=max_steps,
            report_interval=report_interval,
        )


def test_cost_history() -> None:
    """Test recording into a cost history."""
    history = CostHistory.build(3)
    history.record(10, 5.0)
    history.record(8, 2.5)
    assert history.recorded_costs().tolist() == [10.0, 8.0]
    assert history.recorded_temperatures().tolist() == [5.0, 2.5]

    history = CostHistory.build(1)
    history.record(2**53 + 1, 1.0)
    assert history.recorded_costs()[0] == 2**53 + 1


def test_move_stats() -> None:
    """Test counting move outcomes."""
    stats = MoveStats()
    assert stats.acceptance_rate() == 0.0
    for outcome in (MoveOutcome.IMPROVED, MoveOutcome.NEUTRAL, MoveOutcome.ACCEPTED, MoveOutcome.REJECTED):
        stats.count(outcome)
    assert stats.total == 4
    assert stats.get_stats() == (3, 4, "75.00%")

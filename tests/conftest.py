"""Fixtures for testing frc_scheduler package."""

import numpy as np
import pytest

from frc_scheduler.data_model.schedule import Schedule

SEED = 12345


@pytest.fixture
def rng() -> np.random.Generator:
    """Create a seeded random generator."""
    return np.random.default_rng(SEED)


@pytest.fixture
def base_schedule(rng: np.random.Generator) -> Schedule:
    """Create an unshuffled 30 team, 12 matches per team schedule."""
    return Schedule(num_teams=30, matches_per_team=12, rng=rng)


@pytest.fixture
def shuffled_schedule(rng: np.random.Generator) -> Schedule:
    """Create a shuffled 30 team, 12 matches per team schedule."""
    schedule = Schedule(num_teams=30, matches_per_team=12, rng=rng)
    schedule.shuffle()
    return schedule


@pytest.fixture
def small_schedule() -> Schedule:
    """Create a 12 team, 3 matches per team schedule with a hand-written grid."""
    schedule = Schedule(num_teams=12, matches_per_team=3, rng=np.random.default_rng(SEED))
    schedule.schedule = np.array(
        [
            [0, 1, 2, 3, 4, 5],
            [6, 7, 8, 9, 10, 11],
            [0, 3, 6, 1, 4, 7],
            [2, 5, 8, 9, 10, 11],
            [0, 4, 8, 2, 6, 10],
            [1, 5, 9, 3, 7, 11],
        ],
        dtype=int,
    )
    return schedule

"""Module to hold constants for the scheduler."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

MAIN_PACKAGE_DIR = Path(__file__).resolve().parent.parent
CONFIG_FILE_DEFAULT = MAIN_PACKAGE_DIR / "config.json"
OUTPUT_DIR_DEFAULT = "frc_scheduler_output"
LOG_FILE_DEFAULT = "frc_scheduler.log"
RANDOM_SEED_RANGE = (1, 2**32 - 1)

TEAMS_PER_MATCH = 6
TEAMS_PER_ALLIANCE = 3
DEFAULT_MATCHES_PER_TEAM = 12
NO_TURNAROUND = -1

# Row index is a team's position, values are the positions of its allies.
ALLY_POSITIONS: tuple[tuple[int, ...], ...] = (
    (1, 2),
    (0, 2),
    (0, 1),
    (4, 5),
    (3, 5),
    (3, 4),
)

# Row index is a team's position, values are the positions of its opponents.
OPPONENT_POSITIONS: tuple[tuple[int, ...], ...] = (
    (3, 4, 5),
    (3, 4, 5),
    (3, 4, 5),
    (0, 1, 2),
    (0, 1, 2),
    (0, 1, 2),
)

ALLY_COST_BASE = 2
OPPONENT_COST_BASE = 10
TURNAROUND_COST_BASE = 10


class Alliance(StrEnum):
    """Enumeration of alliance colors."""

    BLUE = "Blue"
    RED = "Red"


class CostComponent(StrEnum):
    """Enumeration of the components of the schedule cost."""

    TURNAROUND = "Turnaround"
    ALLY = "Ally"
    OPPONENT = "Opponent"


class AnnealState(StrEnum):
    """Enumeration of annealer states."""

    RUNNING = "running"
    DONE = "done"


class MoveOutcome(StrEnum):
    """Enumeration of annealing move outcomes."""

    IMPROVED = "improved"
    NEUTRAL = "neutral"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

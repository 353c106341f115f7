"""Exceptions raised by the FRC match scheduler."""

from __future__ import annotations


class SchedulerError(Exception):
    """Base class for scheduler errors."""


class ScheduleConfigurationError(SchedulerError, ValueError):
    """Raised when a schedule or annealing run is requested with invalid parameters."""


class CapacityOverflowError(SchedulerError, RuntimeError):
    """Raised when a team's turnarounds do not fit the turnaround table."""

    def __init__(self, team: int, n_turnarounds: int, capacity: int) -> None:
        """Initialize with the offending team and the table capacity."""
        self.team = team
        self.n_turnarounds = n_turnarounds
        self.capacity = capacity
        msg = (
            f"Team {team} has {n_turnarounds} turnarounds but the turnaround table "
            f"only holds {capacity} per team."
        )
        super().__init__(msg)

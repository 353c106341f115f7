"""Read-only analyses of a schedule grid."""

from __future__ import annotations

import logging
from collections import Counter

import numpy as np

from ..config.constants import ALLY_POSITIONS, NO_TURNAROUND, OPPONENT_POSITIONS, TEAMS_PER_MATCH
from ..exceptions import CapacityOverflowError

logger = logging.getLogger(__name__)


def matches_by_team(schedule: np.ndarray) -> dict[int, int]:
    """Count the appearances of every team id found in the schedule.

    Keys are ordered by first appearance. Teams that never appear are absent,
    so the result can be shorter than the number of teams.
    """
    return dict(Counter(schedule.ravel().tolist()))


def match_duplicates(schedule: np.ndarray) -> np.ndarray:
    """Count the times a team fills more than one position of a match.

    A team in two positions of a match is one duplicate, in three positions
    two duplicates, and so on.
    """
    return np.array([TEAMS_PER_MATCH - len(set(match)) for match in schedule.tolist()], dtype=int)


def team_match_numbers(schedule: np.ndarray, num_teams: int) -> list[list[int]]:
    """Return the ordered match numbers each team is assigned to."""
    matches: list[list[int]] = [[] for _ in range(num_teams)]
    for match_number, match in enumerate(schedule.tolist()):
        for team in match:
            matches[team].append(match_number)
    return matches


def turnarounds(schedule: np.ndarray, num_teams: int, matches_per_team: int) -> np.ndarray:
    """Return the number of matches between each of a team's matches and its next.

    Row is the team and column the turnaround number. Rows are left-aligned
    and padded with -1 where a team has fewer turnarounds than
    matches_per_team. A zero turnaround means the team fills two positions of
    the same match.

    Raises:
        CapacityOverflowError: If a team has more than matches_per_team turnarounds.

    """
    table = np.full((num_teams, matches_per_team), NO_TURNAROUND, dtype=int)
    for team, match_numbers in enumerate(team_match_numbers(schedule, num_teams)):
        gaps = np.diff(match_numbers)
        if gaps.size > matches_per_team:
            raise CapacityOverflowError(team, int(gaps.size), matches_per_team)
        table[team, : gaps.size] = gaps
    return table


def allies_and_opponents(schedule: np.ndarray, num_teams: int) -> tuple[list[set[int]], list[set[int]]]:
    """Return the distinct allies and opponents each team meets over the schedule."""
    allies: list[set[int]] = [set() for _ in range(num_teams)]
    opponents: list[set[int]] = [set() for _ in range(num_teams)]
    for match in schedule.tolist():
        for pos, team in enumerate(match):
            allies[team].update(match[p] for p in ALLY_POSITIONS[pos])
            opponents[team].update(match[p] for p in OPPONENT_POSITIONS[pos])
    return allies, opponents

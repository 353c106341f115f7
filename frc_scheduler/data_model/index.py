"""Conversion between flat slot indices and (match, position) pairs.

Positions 0-2 are the blue alliance and 3-5 are the red alliance. Neither
function checks bounds; out-of-range input gives consistent but meaningless
results.
"""

from __future__ import annotations

from ..config.constants import TEAMS_PER_ALLIANCE, TEAMS_PER_MATCH, Alliance


def to_flat_index(match: int, pos: int) -> int:
    """Convert a match number and team position to a flat index."""
    return TEAMS_PER_MATCH * match + pos


def to_match_and_pos(index: int) -> tuple[int, int]:
    """Convert a flat index to a (match, position) pair."""
    return index // TEAMS_PER_MATCH, index % TEAMS_PER_MATCH


def alliance_of(pos: int) -> Alliance:
    """Return the alliance color of a team position."""
    return Alliance.BLUE if pos < TEAMS_PER_ALLIANCE else Alliance.RED

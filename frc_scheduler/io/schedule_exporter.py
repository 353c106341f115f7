"""Module for exporting schedules in various formats."""

from __future__ import annotations

import csv
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from ..config.constants import TEAMS_PER_ALLIANCE, TEAMS_PER_MATCH
from ..data_model.index import alliance_of

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from ..data_model.schedule import Schedule

logger = getLogger(__name__)


def position_labels() -> list[str]:
    """Return the column label of each team position, e.g. Blue1..Red3."""
    return [f"{alliance_of(pos)}{pos % TEAMS_PER_ALLIANCE + 1}" for pos in range(TEAMS_PER_MATCH)]


def format_match_line(match: list[int]) -> str:
    """Format the six team ids of a match as a compact JSON array."""
    return json.dumps(match, separators=(",", ":"))


@dataclass(slots=True)
class ScheduleExporter(ABC):
    """Abstract base class for exporting schedules."""

    def export(self, schedule: Schedule, path: Path) -> bool:
        """Export the schedule to a given filename, returning whether it was written."""
        if not schedule.num_matches:
            logger.warning("Cannot export an empty schedule.")
            return False

        try:
            self.write_to_file(schedule, path)
        except OSError:
            logger.exception("Failed to export schedule to %s", path)
            return False

        logger.debug("Schedule successfully exported to %s", path)
        return True

    @abstractmethod
    def write_to_file(self, schedule: Schedule, path: Path) -> None:
        """Write the schedule to a file."""


@dataclass(slots=True)
class JsonExporter(ScheduleExporter):
    """Exporter for schedules as a JSON array of matches, one match per line."""

    def render(self, schedule: Schedule) -> str:
        """Return the schedule as JSON text."""
        lines = ",\n".join(f"  {format_match_line(match)}" for match in schedule.iter_matches())
        return f"[\n{lines}\n]\n"

    def write_to_file(self, schedule: Schedule, path: Path) -> None:
        """Write the schedule to a JSON file."""
        path.write_text(self.render(schedule), encoding="utf-8")


@dataclass(slots=True)
class CsvExporter(ScheduleExporter):
    """Exporter for schedules in CSV format."""

    def rows(self, schedule: Schedule) -> Iterator[list[str | int]]:
        """Yield the header row and one row per match."""
        yield ["Match", *position_labels()]
        for match_number, match in enumerate(schedule.iter_matches(), start=1):
            yield [match_number, *match]

    def write_to_file(self, schedule: Schedule, path: Path) -> None:
        """Write the schedule to a CSV file."""
        with path.open("w", newline="", encoding="utf-8") as f:
            csv.writer(f).writerows(self.rows(schedule))


@dataclass(slots=True)
class TextExporter(ScheduleExporter):
    """Exporter for schedules as one match per line followed by the match count."""

    def render(self, schedule: Schedule) -> str:
        """Return the schedule as line-oriented text."""
        lines = [format_match_line(match) for match in schedule.iter_matches()]
        lines.append(f"Number of Matches: {schedule.num_matches}")
        return "\n".join(lines) + "\n"

    def write_to_file(self, schedule: Schedule, path: Path) -> None:
        """Write the schedule to a text file."""
        path.write_text(self.render(schedule), encoding="utf-8")

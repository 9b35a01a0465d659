"""Date graph of possible stay sequences for one bed."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Sequence

from backend.domain.models import VACANT, DateGraph, Guest, Occupied
from backend.utils.logger import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class ScheduleGraph:
    entry_date: int
    adjacency: DateGraph
    dates: tuple[int, ...]

    def edges_from(self, date: int):
        return self.adjacency[date]


def build_schedules_graph(guests: Sequence[Guest]) -> ScheduleGraph:
    """Build the directed acyclic graph of stays keyed by date.

    Every guest becomes an edge from its start date to its end date. Every date
    but the last also gets a ``Vacant`` edge to the date after it, appended
    behind its guest edges. Dates that no stay ends on (orphans) are only
    reachable through that edge, and a bed whose last stay ends on a date where
    nobody arrives can still wait for a later arrival.
    """
    if not guests:
        raise ValueError("cannot build a schedule graph without guests")

    dates = sorted({date for guest in guests for date in (guest.start, guest.end)})

    guests_by_start: dict[int, list[Guest]] = defaultdict(list)
    end_dates: set[int] = set()
    for guest in guests:
        guests_by_start[guest.start].append(guest)
        end_dates.add(guest.end)

    adjacency: DateGraph = {}
    for date in dates:
        adjacency[date] = [
            (guest.end, Occupied(guest.id))
            for guest in guests_by_start.get(date, [])
        ]

    entry_date = dates[0]
    orphan_count = 0
    for previous, date in zip(dates, dates[1:]):
        adjacency[previous].append((date, VACANT))
        if date not in end_dates:
            orphan_count += 1

    logger.debug(
        "Schedule graph built | guests=%s | dates=%s | orphan_dates=%s",
        len(guests),
        len(dates),
        orphan_count,
    )
    return ScheduleGraph(entry_date=entry_date, adjacency=adjacency, dates=tuple(dates))

"""Longest-path search over a schedule graph."""

from __future__ import annotations

from typing import Optional

from backend.domain.models import Occupied, Stay
from backend.services.graph_service import ScheduleGraph
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def longest_path_in_graph(graph: ScheduleGraph) -> list[Stay]:
    """Return the stays along the path hosting the most guests.

    Every path from the entry date to a terminal date (one without outgoing
    edges) is considered. The best continuation from each date is resolved
    once, latest date first, so a date shared by many paths is not searched
    again. ``Vacant`` edges are followed but left out of the result.

    Ties go to the path a depth-first walk taking edges in insertion order
    would complete last: at every date the latest of the equally good edges
    wins. The choice therefore only depends on input ordering.
    """
    best_count: dict[int, int] = {}
    best_edge: dict[int, Optional[tuple[int, Stay]]] = {}

    for date in reversed(graph.dates):
        count = 0
        chosen: Optional[tuple[int, Stay]] = None
        for target_date, stay in graph.edges_from(date):
            candidate = best_count[target_date] + (1 if isinstance(stay, Occupied) else 0)
            if chosen is None or candidate >= count:
                count = candidate
                chosen = (target_date, stay)
        best_count[date] = count
        best_edge[date] = chosen

    path: list[Stay] = []
    date = graph.entry_date
    while best_edge[date] is not None:
        date, stay = best_edge[date]
        if isinstance(stay, Occupied):
            path.append(stay)

    logger.debug(
        "Longest path resolved | dates=%s | hosted=%s",
        len(graph.dates),
        len(path),
    )
    return path

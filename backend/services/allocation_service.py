"""Round-based bed allocation and the scheduling facade."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from backend.domain.constraints import (
    SchedulerConfig,
    validate_scheduler_config,
    validate_scheduling_inputs,
)
from backend.domain.models import (
    AllocationResult,
    BedSchedule,
    Guest,
    Stay,
    hosted_guest_ids,
)
from backend.services.graph_service import build_schedules_graph
from backend.services.interval_service import earliest_finish_stays
from backend.services.matching_service import (
    SolverDependencyError,
    SolverNoSolutionError,
    allocate_exact,
)
from backend.services.path_service import longest_path_in_graph
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)

StaySelector = Callable[[Sequence[Guest]], list[Stay]]


@dataclass(frozen=True)
class RoundOutcome:
    schedule: tuple[Stay, ...]
    remaining: tuple[Guest, ...]


def graph_stays(guests: Sequence[Guest]) -> list[Stay]:
    """Select one bed's stays by longest path through the date graph."""
    return longest_path_in_graph(build_schedules_graph(guests))


def run_allocation_round(
    remaining: tuple[Guest, ...],
    select_stays: StaySelector = graph_stays,
) -> RoundOutcome:
    """Fill one bed from ``remaining`` and return what is left for the next."""
    if not remaining:
        return RoundOutcome(schedule=(), remaining=())

    schedule = tuple(select_stays(remaining))
    placed = set(hosted_guest_ids(schedule))
    return RoundOutcome(
        schedule=schedule,
        remaining=tuple(guest for guest in remaining if guest.id not in placed),
    )


def allocate_beds(
    bed_count: int,
    guests: Sequence[Guest],
    select_stays: StaySelector = graph_stays,
    strategy: str = "graph",
) -> AllocationResult:
    """Fill beds one after another, each with the most guests still unplaced.

    Bed ``1`` gets the best sequence over all guests, bed ``2`` the best over
    the rest, and so on. Once nobody is left the remaining beds stay empty.
    Guests still waiting after the last bed are reported as unscheduled.
    """
    validate_scheduling_inputs(bed_count, guests)
    if bed_count == 0 or not guests:
        return AllocationResult(
            schedules=[],
            unscheduled_guest_ids=[guest.id for guest in guests],
            strategy=strategy,
        )

    schedules: list[BedSchedule] = []
    remaining = tuple(guests)
    for bed_id in range(1, bed_count + 1):
        outcome = run_allocation_round(remaining, select_stays)
        schedules.append(BedSchedule(bed_id=bed_id, schedule=outcome.schedule))
        logger.debug(
            "Bed round completed | bed_id=%s | hosted=%s | remaining=%s",
            bed_id,
            len(remaining) - len(outcome.remaining),
            len(outcome.remaining),
        )
        remaining = outcome.remaining

    unscheduled = [guest.id for guest in remaining]
    if unscheduled:
        logger.warning(
            "Not enough beds for every guest | bed_count=%s | unscheduled=%s",
            bed_count,
            unscheduled,
        )
    return AllocationResult(
        schedules=schedules,
        unscheduled_guest_ids=unscheduled,
        strategy=strategy,
    )


def solve(bed_count: int, guests: Sequence[Guest]) -> list[BedSchedule]:
    """Schedule ``guests`` over ``bed_count`` beds with the graph search."""
    return allocate_beds(bed_count, guests).schedules


def allocate_with_fallback(
    *,
    bed_count: int,
    guests: Sequence[Guest],
    config: SchedulerConfig,
) -> AllocationResult:
    """Run the configured strategy; CP-SAT failures fall back to the graph search."""
    if config.strategy == "interval":
        return allocate_beds(bed_count, guests, earliest_finish_stays, strategy="interval")

    if config.strategy == "cp_sat":
        validate_scheduling_inputs(bed_count, guests)
        try:
            return allocate_exact(bed_count=bed_count, guests=guests, config=config)
        except (SolverDependencyError, SolverNoSolutionError) as exc:
            logger.warning("CP-SAT unavailable, using graph search | reason=%s", exc)

    return allocate_beds(bed_count, guests, graph_stays, strategy="graph")


class BedSchedulingService:
    """Business logic orchestration for bed scheduling requests."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    def build_config(self, strategy: Optional[str] = None) -> SchedulerConfig:
        config = SchedulerConfig(
            strategy=strategy if strategy is not None else self._settings.scheduler_strategy,
            cp_sat_max_time_seconds=self._settings.scheduler_cp_sat_max_time_seconds,
            cp_sat_workers=self._settings.scheduler_cp_sat_workers,
            cp_sat_random_seed=self._settings.scheduler_cp_sat_random_seed,
        )
        validate_scheduler_config(config)
        return config

    def schedule(
        self,
        *,
        bed_count: int,
        guests: Sequence[Guest],
        strategy: Optional[str] = None,
    ) -> AllocationResult:
        config = self.build_config(strategy)
        result = allocate_with_fallback(bed_count=bed_count, guests=guests, config=config)
        logger.info(
            (
                "Scheduling completed | strategy=%s | beds=%s | guests=%s | "
                "hosted=%s | unscheduled=%s"
            ),
            result.strategy,
            bed_count,
            len(guests),
            result.hosted_count,
            len(result.unscheduled_guest_ids),
        )
        return result

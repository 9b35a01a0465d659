"""Exact guest-to-bed assignment using CP-SAT."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

try:
    from ortools.sat.python import cp_model
except ModuleNotFoundError:  # pragma: no cover - runtime dependency guard
    cp_model = None  # type: ignore[assignment]

from backend.domain.constraints import SchedulerConfig
from backend.domain.models import AllocationResult, BedSchedule, Guest, Occupied
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class SolverDependencyError(Exception):
    """Raised when OR-Tools is unavailable in the runtime."""


class SolverNoSolutionError(Exception):
    """Raised when CP-SAT stops without a feasible assignment."""


@dataclass(frozen=True)
class BuildArtifacts:
    model: Any
    variables: dict[tuple[int, int], Any]
    bed_loads: list[Any]


def _ensure_solver_dependency() -> None:
    if cp_model is None:
        raise SolverDependencyError(
            "OR-Tools is not installed. Install 'ortools' to enable the cp_sat strategy."
        )


def active_guest_groups(guests: Sequence[Guest]) -> list[list[Guest]]:
    """Guests present together at each arrival date, when more than one.

    Two stays overlap exactly when both are present at the later arrival, so
    these groups cover every conflicting pair.
    """
    groups: list[list[Guest]] = []
    for date in sorted({guest.start for guest in guests}):
        active = [guest for guest in guests if guest.start <= date < guest.end]
        if len(active) > 1:
            groups.append(active)
    return groups


def build_model(*, bed_count: int, guests: Sequence[Guest]) -> BuildArtifacts:
    """Build the CP-SAT assignment model and return model artifacts."""
    _ensure_solver_dependency()
    model = cp_model.CpModel()
    beds = range(bed_count)
    variables: dict[tuple[int, int], cp_model.IntVar] = {}

    for guest in guests:
        for bed_index in beds:
            variables[(guest.id, bed_index)] = model.NewBoolVar(
                f"x_guest_{guest.id}_bed_{bed_index + 1}"
            )
        model.Add(sum(variables[(guest.id, bed_index)] for bed_index in beds) <= 1)

    for group in active_guest_groups(guests):
        for bed_index in beds:
            model.Add(sum(variables[(guest.id, bed_index)] for guest in group) <= 1)

    bed_loads: list[cp_model.IntVar] = []
    for bed_index in beds:
        load = model.NewIntVar(0, len(guests), f"load_bed_{bed_index + 1}")
        model.Add(load == sum(variables[(guest.id, bed_index)] for guest in guests))
        bed_loads.append(load)

    # Fuller beds first, matching the round-based allocators.
    for current, following in zip(bed_loads, bed_loads[1:]):
        model.Add(current >= following)

    model.Maximize(sum(bed_loads))
    return BuildArtifacts(model=model, variables=variables, bed_loads=bed_loads)


def solve_model(
    *,
    artifacts: BuildArtifacts,
    bed_count: int,
    guests: Sequence[Guest],
    config: SchedulerConfig,
) -> AllocationResult:
    """Solve the CP-SAT model and return bed schedules and unscheduled guests."""
    _ensure_solver_dependency()

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = float(config.cp_sat_max_time_seconds)
    solver.parameters.num_workers = config.cp_sat_workers
    solver.parameters.random_seed = config.cp_sat_random_seed

    status = solver.Solve(artifacts.model)
    status_name = solver.StatusName(status)
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        logger.warning("Bed assignment solve failed | status=%s", status_name)
        raise SolverNoSolutionError(f"CP-SAT returned status {status_name}")

    schedules: list[BedSchedule] = []
    assigned_ids: set[int] = set()
    for bed_index in range(bed_count):
        bed_guests = sorted(
            (
                guest
                for guest in guests
                if solver.Value(artifacts.variables[(guest.id, bed_index)]) == 1
            ),
            key=lambda guest: (guest.start, guest.end, guest.id),
        )
        assigned_ids.update(guest.id for guest in bed_guests)
        schedules.append(
            BedSchedule(
                bed_id=bed_index + 1,
                schedule=tuple(Occupied(guest.id) for guest in bed_guests),
            )
        )

    unscheduled = [guest.id for guest in guests if guest.id not in assigned_ids]
    logger.info(
        "Bed assignment solve completed | status=%s | hosted=%s | unscheduled=%s",
        status_name,
        len(assigned_ids),
        len(unscheduled),
    )
    return AllocationResult(
        schedules=schedules,
        unscheduled_guest_ids=unscheduled,
        strategy="cp_sat",
    )


def allocate_exact(
    *,
    bed_count: int,
    guests: Sequence[Guest],
    config: SchedulerConfig,
) -> AllocationResult:
    """Assign guests to beds maximizing the total number hosted."""
    if bed_count == 0 or not guests:
        return AllocationResult(
            schedules=[],
            unscheduled_guest_ids=[guest.id for guest in guests],
            strategy="cp_sat",
        )
    artifacts = build_model(bed_count=bed_count, guests=guests)
    return solve_model(
        artifacts=artifacts,
        bed_count=bed_count,
        guests=guests,
        config=config,
    )

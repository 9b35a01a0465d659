"""Domain models for guest stays and bed schedules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Guest:
    id: int
    start: int
    end: int


@dataclass(frozen=True)
class Occupied:
    """A bed taken by one guest."""

    guest_id: int


@dataclass(frozen=True)
class Vacant:
    """Structural placeholder bridging a date nobody checks out on."""


VACANT = Vacant()

Stay = Union[Occupied, Vacant]

# date -> ordered outgoing edges (target_date, stay)
DateGraph = dict[int, list[tuple[int, Stay]]]


def hosted_guest_ids(stays) -> list[int]:
    return [stay.guest_id for stay in stays if isinstance(stay, Occupied)]


@dataclass(frozen=True)
class BedSchedule:
    bed_id: int
    schedule: tuple[Stay, ...] = ()

    @property
    def guest_ids(self) -> list[int]:
        return hosted_guest_ids(self.schedule)

    @property
    def hosted_count(self) -> int:
        return len(self.guest_ids)


@dataclass(frozen=True)
class AllocationResult:
    schedules: list[BedSchedule]
    unscheduled_guest_ids: list[int] = field(default_factory=list)
    strategy: str = "graph"

    @property
    def hosted_count(self) -> int:
        return sum(schedule.hosted_count for schedule in self.schedules)

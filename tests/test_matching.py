from __future__ import annotations

from dataclasses import replace

import pytest

from backend.domain.constraints import SchedulerConfig
from backend.domain.models import Guest
from backend.services.allocation_service import BedSchedulingService, allocate_with_fallback
from backend.services.matching_service import active_guest_groups
from backend.services.occupancy_service import minimum_beds_required
from backend.utils.config import get_settings


OVERLAPPING_GUESTS = [
    Guest(1, 1, 5),
    Guest(2, 5, 9),
    Guest(3, 8, 10),
    Guest(4, 9, 11),
    Guest(5, 11, 12),
]


def _config(strategy: str = "cp_sat") -> SchedulerConfig:
    return SchedulerConfig(
        strategy=strategy,
        cp_sat_max_time_seconds=5,
        cp_sat_workers=1,
        cp_sat_random_seed=7,
    )


def test_active_groups_cover_each_overlapping_pair():
    groups = active_guest_groups(OVERLAPPING_GUESTS)

    assert [[guest.id for guest in group] for group in groups] == [[2, 3], [3, 4]]


def test_greedy_fallback_runs_when_cp_sat_unavailable(monkeypatch):
    monkeypatch.setattr("backend.services.matching_service.cp_model", None)

    first = allocate_with_fallback(bed_count=2, guests=OVERLAPPING_GUESTS, config=_config())
    second = allocate_with_fallback(bed_count=2, guests=OVERLAPPING_GUESTS, config=_config())

    assert first.strategy == "graph"
    assert [schedule.guest_ids for schedule in first.schedules] == [[1, 2, 4, 5], [3]]
    assert first == second


def test_cp_sat_hosts_everyone_when_beds_suffice():
    pytest.importorskip("ortools")

    result = allocate_with_fallback(bed_count=2, guests=OVERLAPPING_GUESTS, config=_config())

    assert result.strategy == "cp_sat"
    assert result.unscheduled_guest_ids == []
    assert result.hosted_count == 5
    counts = [schedule.hosted_count for schedule in result.schedules]
    assert counts == sorted(counts, reverse=True)


def test_cp_sat_single_bed_picks_maximum_chain():
    pytest.importorskip("ortools")

    result = allocate_with_fallback(bed_count=1, guests=OVERLAPPING_GUESTS, config=_config())

    assert [schedule.guest_ids for schedule in result.schedules] == [[1, 2, 4, 5]]
    assert result.unscheduled_guest_ids == [3]


def test_cp_sat_waits_past_date_without_arrivals():
    pytest.importorskip("ortools")
    guests = [Guest(1, 1, 2), Guest(2, 2, 3), Guest(3, 1, 4), Guest(4, 4, 5)]

    result = allocate_with_fallback(bed_count=1, guests=guests, config=_config())

    assert result.hosted_count == 3
    assert result.unscheduled_guest_ids == [3]


def test_cp_sat_hosts_all_with_minimum_bed_count():
    pytest.importorskip("ortools")
    guests = [
        Guest(1, 0, 4),
        Guest(2, 1, 3),
        Guest(3, 2, 6),
        Guest(4, 3, 5),
        Guest(5, 4, 8),
        Guest(6, 5, 7),
        Guest(7, 6, 9),
    ]
    bed_count = minimum_beds_required(guests)

    result = allocate_with_fallback(bed_count=bed_count, guests=guests, config=_config())

    assert bed_count == 3
    assert result.unscheduled_guest_ids == []
    by_id = {guest.id: guest for guest in guests}
    for schedule in result.schedules:
        stays = [by_id[guest_id] for guest_id in schedule.guest_ids]
        for earlier, later in zip(stays, stays[1:]):
            assert earlier.end <= later.start


def test_cp_sat_empty_inputs_return_no_schedules():
    result = allocate_with_fallback(bed_count=0, guests=OVERLAPPING_GUESTS, config=_config())

    assert result.schedules == []
    assert result.unscheduled_guest_ids == [1, 2, 3, 4, 5]


def test_service_cp_sat_strategy_from_settings():
    pytest.importorskip("ortools")
    get_settings.cache_clear()
    settings = replace(
        get_settings(),
        scheduler_strategy="cp_sat",
        scheduler_cp_sat_max_time_seconds=5,
        scheduler_cp_sat_workers=1,
    )

    result = BedSchedulingService(settings).schedule(bed_count=3, guests=OVERLAPPING_GUESTS)

    assert result.strategy == "cp_sat"
    assert [schedule.bed_id for schedule in result.schedules] == [1, 2, 3]
    assert result.hosted_count == 5

#!/usr/bin/env python3
"""Schedule the guests listed in a CSV or JSON file and print each bed."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.domain.constraints import STRATEGIES, ValidationError
from backend.repository.guest_repository import GuestFileError, GuestRepository
from backend.services.allocation_service import BedSchedulingService
from backend.services.occupancy_service import minimum_beds_required
from backend.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("guest_file", type=Path, help="CSV or JSON file with id,start,end")
    parser.add_argument("--beds", type=int, required=True, help="number of beds")
    parser.add_argument("--strategy", choices=STRATEGIES, default=None)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()

    try:
        guests = GuestRepository(settings).load_guests(args.guest_file)
        result = BedSchedulingService(settings).schedule(
            bed_count=args.beds,
            guests=guests,
            strategy=args.strategy,
        )
    except (GuestFileError, ValidationError) as exc:
        print(f"[FAIL] {exc}", file=sys.stderr)
        return 1

    print(SEPARATOR_LINE)
    print(f" Solving schedule for {args.beds} bed(s) and {len(guests)} guest(s)")
    print(f" Strategy: {result.strategy}")
    print(SEPARATOR_LINE)
    for schedule in result.schedules:
        guest_list = ", ".join(str(guest_id) for guest_id in schedule.guest_ids) or "-"
        print(f" Bed {schedule.bed_id}: {guest_list}")
    print(SEPARATOR_LINE)
    print(f" Hosted      : {result.hosted_count}")
    print(f" Unscheduled : {result.unscheduled_guest_ids or '-'}")
    print(f" Beds needed to host everyone: {minimum_beds_required(guests)}")
    print(SEPARATOR_LINE)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

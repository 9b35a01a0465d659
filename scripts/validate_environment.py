#!/usr/bin/env python3
"""Validate local bed scheduler environment readiness."""

from __future__ import annotations

import importlib
import shutil
import sys
import tempfile
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.domain.models import Guest
from backend.repository.guest_repository import GuestRepository
from backend.services.allocation_service import BedSchedulingService, solve
from backend.utils.config import get_settings

SEPARATOR_LINE = "=" * 44

SMOKE_GUESTS = [
    Guest(1, 1, 5),
    Guest(2, 5, 9),
    Guest(3, 8, 10),
    Guest(4, 9, 11),
    Guest(5, 11, 12),
]
SMOKE_EXPECTED = [[1, 2, 4, 5], [3]]


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True
    temp_dir = tempfile.mkdtemp(prefix="bed-scheduler-env-")

    # CHECK 1 - Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2 - Required packages importable with versions
    package_specs = [
        ("fastapi", "fastapi"),
        ("uvicorn", "uvicorn"),
        ("pydantic", "pydantic"),
        ("pandas", "pandas"),
        ("ortools", "ortools"),
        ("httpx", "httpx"),
        ("pytest", "pytest"),
    ]
    import_errors: list[str] = []
    from importlib.metadata import version

    for module_name, dist_name in package_specs:
        try:
            importlib.import_module(module_name)
            version(dist_name)
        except Exception as exc:  # pragma: no cover - runtime guard
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    try:
        settings = get_settings()

        # CHECK 3 - Graph search on the reference scenario
        try:
            schedules = solve(2, SMOKE_GUESTS)
            observed = [schedule.guest_ids for schedule in schedules]
            if observed != SMOKE_EXPECTED:
                raise RuntimeError(f"expected {SMOKE_EXPECTED}, got {observed}")
            ok, line = _print_result("Graph search scheduling", True)
        except Exception as exc:
            ok, line = _print_result("Graph search scheduling", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

        # CHECK 4 - CP-SAT scheduling
        try:
            result = BedSchedulingService(settings).schedule(
                bed_count=2,
                guests=SMOKE_GUESTS,
                strategy="cp_sat",
            )
            if result.strategy != "cp_sat":
                raise RuntimeError("CP-SAT unavailable, fell back to graph search")
            if result.hosted_count != len(SMOKE_GUESTS):
                raise RuntimeError(f"expected 5 hosted guests, got {result.hosted_count}")
            ok, line = _print_result("CP-SAT scheduling", True)
        except Exception as exc:
            ok, line = _print_result("CP-SAT scheduling", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

        # CHECK 5 - Guest file loading
        try:
            guest_file = Path(temp_dir) / "guests.csv"
            guest_file.write_text(
                "id,start,end\n"
                + "".join(f"{g.id},{g.start},{g.end}\n" for g in SMOKE_GUESTS),
                encoding="utf-8",
            )
            loaded = GuestRepository(settings).load_guests(guest_file)
            if loaded != SMOKE_GUESTS:
                raise RuntimeError("loaded guests differ from the written file")
            ok, line = _print_result("Guest file loading", True, f": {len(loaded)} guests")
        except Exception as exc:
            ok, line = _print_result("Guest file loading", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)

    print(SEPARATOR_LINE)
    print(" Bed Scheduler Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())

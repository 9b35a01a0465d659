"""Domain-level validation rules for bed scheduling."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from backend.domain.models import Guest


STRATEGIES = ("graph", "interval", "cp_sat")


class ValidationError(ValueError):
    """Raised when scheduling inputs are rejected before any bed is filled."""


class InvalidStayIntervalError(ValidationError):
    """Raised when a guest does not leave strictly after arriving."""


class DuplicateGuestIdError(ValidationError):
    """Raised when two guests share an id."""


class NegativeBedCountError(ValidationError):
    """Raised when fewer than zero beds are requested."""


class InvalidSchedulerConfigError(ValidationError):
    """Raised when strategy or solver settings are out of range."""


@dataclass(frozen=True)
class SchedulerConfig:
    strategy: str
    cp_sat_max_time_seconds: int
    cp_sat_workers: int
    cp_sat_random_seed: int


def validate_scheduler_config(config: SchedulerConfig) -> None:
    if config.strategy not in STRATEGIES:
        raise InvalidSchedulerConfigError(
            f"strategy must be one of {', '.join(STRATEGIES)}; got {config.strategy!r}"
        )
    if config.cp_sat_max_time_seconds <= 0:
        raise InvalidSchedulerConfigError("cp_sat_max_time_seconds must be > 0")
    if config.cp_sat_workers <= 0:
        raise InvalidSchedulerConfigError("cp_sat_workers must be > 0")
    if config.cp_sat_random_seed < 0:
        raise InvalidSchedulerConfigError("cp_sat_random_seed must be >= 0")


def validate_bed_count(bed_count: int) -> None:
    if bed_count < 0:
        raise NegativeBedCountError(f"bed_count must be >= 0, got {bed_count}")


def validate_guests(guests: Sequence[Guest]) -> None:
    for guest in guests:
        if guest.start >= guest.end:
            raise InvalidStayIntervalError(
                f"guest {guest.id} must end after it starts (start={guest.start}, end={guest.end})"
            )

    duplicates = sorted(
        guest_id
        for guest_id, count in Counter(guest.id for guest in guests).items()
        if count > 1
    )
    if duplicates:
        raise DuplicateGuestIdError(f"duplicate guest ids: {duplicates}")


def validate_scheduling_inputs(bed_count: int, guests: Sequence[Guest]) -> None:
    validate_bed_count(bed_count)
    validate_guests(guests)

"""Earliest-finish-time selection of non-overlapping stays."""

from __future__ import annotations

from typing import Optional, Sequence

from backend.domain.models import Guest, Occupied, Stay


def earliest_finish_stays(guests: Sequence[Guest]) -> list[Stay]:
    """Pick a maximum set of non-overlapping guests for a single bed.

    Guests are taken in order of departure; a guest fits when it arrives no
    earlier than the previous pick leaves. Equal departures favour the guest
    listed later, which lines up with the graph search tie-break.
    """
    ordered = sorted(
        enumerate(guests),
        key=lambda item: (item[1].end, -item[0]),
    )
    stays: list[Stay] = []
    free_from: Optional[int] = None
    for _, guest in ordered:
        if free_from is None or guest.start >= free_from:
            stays.append(Occupied(guest.id))
            free_from = guest.end
    return stays

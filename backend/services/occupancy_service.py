"""Occupancy profile of guest stays per date."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from backend.domain.models import Guest


OCCUPANCY_COLUMNS = ["date", "check_ins", "check_outs", "occupancy"]


def build_occupancy_frame(guests: Sequence[Guest]) -> pd.DataFrame:
    """Return one row per distinct date with arrivals, departures and occupancy.

    ``occupancy`` counts guests with ``start <= date < end``: a guest leaving
    on the day another arrives is not counted twice.
    """
    if not guests:
        return pd.DataFrame(columns=OCCUPANCY_COLUMNS)

    check_ins = pd.Series([guest.start for guest in guests]).value_counts()
    check_outs = pd.Series([guest.end for guest in guests]).value_counts()
    frame = (
        pd.DataFrame({"check_ins": check_ins, "check_outs": check_outs})
        .fillna(0)
        .astype(int)
        .sort_index()
    )
    frame["occupancy"] = (frame["check_ins"] - frame["check_outs"]).cumsum()
    frame.index.name = "date"
    return frame.reset_index()[OCCUPANCY_COLUMNS]


def minimum_beds_required(guests: Sequence[Guest]) -> int:
    """Largest number of guests present at the same time."""
    frame = build_occupancy_frame(guests)
    if frame.empty:
        return 0
    return int(frame["occupancy"].max())

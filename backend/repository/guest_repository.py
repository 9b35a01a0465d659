"""Repository layer responsible for reading guest files."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd

from backend.domain.models import Guest
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)

GUEST_COLUMNS = ["id", "start", "end"]


class GuestFileError(Exception):
    """Raised when a guest file is missing or cannot be turned into guests."""


class GuestRepository:
    """Loads guest stays from CSV or JSON so services stay format-agnostic."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    def _read_frame(self, path: Path) -> pd.DataFrame:
        suffix = path.suffix.lower()
        encoding = self._settings.guest_file_encoding
        try:
            if suffix == ".csv":
                return pd.read_csv(path, encoding=encoding)
            if suffix == ".json":
                return pd.read_json(
                    path,
                    orient="records",
                    encoding=encoding,
                    convert_dates=False,
                )
        except ValueError as exc:
            raise GuestFileError(f"{path} could not be parsed: {exc}") from exc
        raise GuestFileError(f"unsupported guest file type {suffix!r}; use .csv or .json")

    def load_guests(self, path: str | Path) -> list[Guest]:
        guest_path = Path(path)
        if not guest_path.is_file():
            raise GuestFileError(f"guest file not found: {guest_path}")

        frame = self._read_frame(guest_path)
        missing = [column for column in GUEST_COLUMNS if column not in frame.columns]
        if missing:
            raise GuestFileError(f"{guest_path} is missing columns: {', '.join(missing)}")

        values = frame[GUEST_COLUMNS]
        if values.isnull().to_numpy().any():
            raise GuestFileError(f"{guest_path} has blank id/start/end values")
        numeric = values.apply(pd.to_numeric, errors="coerce")
        if numeric.isnull().to_numpy().any() or (numeric % 1 != 0).to_numpy().any():
            raise GuestFileError(f"{guest_path} has non-integer id/start/end values")

        guests = [
            Guest(id=int(row.id), start=int(row.start), end=int(row.end))
            for row in numeric.astype("int64").itertuples(index=False)
        ]
        logger.info("Guests loaded | path=%s | guests=%s", guest_path, len(guests))
        return guests

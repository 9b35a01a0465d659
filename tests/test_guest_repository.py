from __future__ import annotations

import json
from dataclasses import replace

import pytest

from backend.domain.models import Guest
from backend.repository.guest_repository import GuestFileError, GuestRepository
from backend.utils.config import get_settings


def _build_repository() -> GuestRepository:
    get_settings.cache_clear()
    return GuestRepository(replace(get_settings(), guest_file_encoding="utf-8"))


def test_load_guests_from_csv(tmp_path):
    guest_file = tmp_path / "guests.csv"
    guest_file.write_text("id,start,end\n1,1,5\n2,5,9\n3,8,10\n", encoding="utf-8")

    guests = _build_repository().load_guests(guest_file)

    assert guests == [Guest(1, 1, 5), Guest(2, 5, 9), Guest(3, 8, 10)]


def test_load_guests_from_json_records(tmp_path):
    guest_file = tmp_path / "guests.json"
    guest_file.write_text(
        json.dumps(
            [
                {"id": 4, "start": 9, "end": 11},
                {"id": 5, "start": 11, "end": 12},
            ]
        ),
        encoding="utf-8",
    )

    guests = _build_repository().load_guests(str(guest_file))

    assert guests == [Guest(4, 9, 11), Guest(5, 11, 12)]


def test_extra_columns_are_ignored(tmp_path):
    guest_file = tmp_path / "guests.csv"
    guest_file.write_text("name,id,start,end\nAda,1,1,5\n", encoding="utf-8")

    assert _build_repository().load_guests(guest_file) == [Guest(1, 1, 5)]


def test_missing_file_raises(tmp_path):
    with pytest.raises(GuestFileError, match="not found"):
        _build_repository().load_guests(tmp_path / "absent.csv")


def test_unsupported_suffix_raises(tmp_path):
    guest_file = tmp_path / "guests.txt"
    guest_file.write_text("id,start,end\n1,1,5\n", encoding="utf-8")

    with pytest.raises(GuestFileError, match="unsupported"):
        _build_repository().load_guests(guest_file)


def test_missing_column_raises(tmp_path):
    guest_file = tmp_path / "guests.csv"
    guest_file.write_text("id,start\n1,1\n", encoding="utf-8")

    with pytest.raises(GuestFileError, match="end"):
        _build_repository().load_guests(guest_file)


def test_blank_value_raises(tmp_path):
    guest_file = tmp_path / "guests.csv"
    guest_file.write_text("id,start,end\n1,1,\n", encoding="utf-8")

    with pytest.raises(GuestFileError, match="blank"):
        _build_repository().load_guests(guest_file)


@pytest.mark.parametrize("bad_value", ["abc", "2.5"])
def test_non_integer_value_raises(tmp_path, bad_value):
    guest_file = tmp_path / "guests.csv"
    guest_file.write_text(f"id,start,end\n1,1,{bad_value}\n", encoding="utf-8")

    with pytest.raises(GuestFileError, match="non-integer"):
        _build_repository().load_guests(guest_file)

from datetime import datetime

import pytest
from pydantic import ValidationError

from visitorlog.entries import (
    VisitorEntry,
    build_sheet_payload,
    format_sheet_date,
    format_sheet_time,
    format_sheet_timestamp,
)
from visitorlog.rules import HEADER_ORDER


def _entry(**fields):
    data = {"name": "Asha", "mobile": "9876543210"}
    data.update(fields)
    return VisitorEntry(**data)


def test_name_and_mobile_are_validated():
    with pytest.raises(ValidationError):
        _entry(name="   ")
    with pytest.raises(ValidationError):
        _entry(mobile="12345")
    assert _entry(mobile="९८७६५४३२१०").mobile == "9876543210"


def test_counts_must_not_be_negative():
    with pytest.raises(ValidationError):
        _entry(male=-1)


def test_dates_must_parse_when_given():
    with pytest.raises(ValidationError):
        _entry(exit_date="someday")
    assert _entry(exit_date="").exit_date == ""


def test_sheet_formatting_helpers():
    assert format_sheet_date("2024-03-05") == "05/03/2024"
    assert format_sheet_date("") == ""
    assert format_sheet_time("9:5") == "09:05:00"
    assert format_sheet_time("18:30:15") == "18:30:15"
    assert format_sheet_timestamp("2024-03-05T10:30") == "05/03/2024 10:30:00"


def test_payload_defaults_and_column_order():
    now = datetime(2024, 3, 5, 8, 15, 0)
    payload = build_sheet_payload(
        _entry(name=" Asha ", male=2, female=1, children=1, exit_date="2024-03-08", room_number=" R1 "),
        now=now,
    )
    values = payload.values
    assert values["name"] == "Asha"
    assert values["room_number"] == "R1"
    assert values["timestamp"] == "05/03/2024 08:15:00"
    assert values["arrival_time"] == "08:15:00"
    assert values["exit_date"] == "08/03/2024"
    assert values["total_travellers"] == 4
    assert len(payload.sheet_values) == len(HEADER_ORDER)
    assert payload.sheet_values[HEADER_ORDER.index("name")] == "Asha"


def test_explicit_total_is_kept():
    payload = build_sheet_payload(_entry(male=1, total_travellers=6), now=datetime(2024, 1, 1))
    assert payload.values["total_travellers"] == 6

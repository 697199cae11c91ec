"""
Validation and sheet formatting for a new visitor entry.

The sheet stores dates day-first (dd/mm/yyyy) and times as HH:MM:SS, so a
submitted entry is reformatted before it is appended.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .dates import parse_date
from .models import EntryPayload
from .numbers import normalize_digits
from .rules import HEADER_ORDER, SHEET_DATE_FORMAT, SHEET_TIME_FORMAT

MOBILE_PATTERN = re.compile(r"^[0-9]{10}$")
TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{1,2})(?::(\d{1,2}))?")


class VisitorEntry(BaseModel):
    entry_number: str = ""
    manual_entry_number: str = ""
    timestamp: str = ""
    arrival_time: str = ""
    name: str
    male: float = Field(default=0, ge=0)
    female: float = Field(default=0, ge=0)
    children: float = Field(default=0, ge=0)
    address: str = ""
    pin_code: str = ""
    state: str = ""
    mobile: str
    whatsapp: str = ""
    from_where: str = ""
    purpose: str = ""
    destination: str = ""
    exit_date: str = ""
    photo: str = ""
    e_card: str = ""
    income_card: str = ""
    other_income_card: str = ""
    room_number: str = ""
    email: str = ""
    total_travellers: float = Field(default=0, ge=0)
    staying_travellers: float = Field(default=0, ge=0)
    gender_summary: str = ""
    occupancy_status: str = ""

    @field_validator("name")
    @classmethod
    def _name_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name is required")
        return value

    @field_validator("mobile")
    @classmethod
    def _ten_digit_mobile(cls, value: str) -> str:
        value = normalize_digits(value).strip()
        if not MOBILE_PATTERN.match(value):
            raise ValueError("mobile must be exactly 10 digits")
        return value

    @field_validator("timestamp", "exit_date")
    @classmethod
    def _parseable_date(cls, value: str) -> str:
        if value.strip() and parse_date(value) is None:
            raise ValueError("not a valid date")
        return value


def _format_number(value: float) -> Any:
    return int(value) if float(value).is_integer() else value


def format_sheet_date(value: str) -> str:
    if not value or not value.strip():
        return ""
    parsed = parse_date(value)
    if parsed is None:
        return normalize_digits(value).strip()
    return parsed.strftime(SHEET_DATE_FORMAT)


def format_sheet_time(value: str) -> str:
    text = normalize_digits(value).strip() if value else ""
    if not text:
        return ""
    match = TIME_PATTERN.match(text)
    if match is None:
        return text
    hour, minute, second = (int(part) if part else 0 for part in match.groups())
    return f"{hour:02d}:{minute:02d}:{second:02d}"


def format_sheet_timestamp(value: str) -> str:
    if not value or not value.strip():
        return ""
    parsed = parse_date(value)
    if parsed is None:
        return normalize_digits(value).strip()
    return f"{parsed.strftime(SHEET_DATE_FORMAT)} {parsed.strftime(SHEET_TIME_FORMAT)}"


def build_sheet_payload(entry: VisitorEntry, now: Optional[datetime] = None) -> EntryPayload:
    """
    Values to append for ``entry``, keyed by field and in sheet column order.

    Missing timestamp and arrival time default to ``now``; total travellers
    default to the male/female/children sum.
    """
    now = now or datetime.now()
    values = {}
    for field in HEADER_ORDER:
        value = getattr(entry, field)
        values[field] = value.strip() if isinstance(value, str) else value

    values["timestamp"] = format_sheet_timestamp(entry.timestamp) or (
        f"{now.strftime(SHEET_DATE_FORMAT)} {now.strftime(SHEET_TIME_FORMAT)}"
    )
    values["arrival_time"] = format_sheet_time(entry.arrival_time) or now.strftime(SHEET_TIME_FORMAT)
    values["exit_date"] = format_sheet_date(entry.exit_date)

    total = entry.total_travellers or (entry.male + entry.female + entry.children)
    values["total_travellers"] = total
    for field in ("male", "female", "children", "total_travellers", "staying_travellers"):
        values[field] = _format_number(values[field])

    return EntryPayload(values=values, sheet_values=[values[field] for field in HEADER_ORDER])

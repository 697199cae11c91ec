"""
Date parsing for sheet cells.

Responsibilities:
- spreadsheet serial numbers
- strict ISO-8601
- the explicit formats listed in rules.DATE_FORMATS (day-first wins)
- a free-form fallback via dateutil

Everything returns a naive local datetime or None. Nothing raises.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Any, Optional, Union

from dateutil import parser as dateutil_parser

from .numbers import normalize_digits
from .rules import DATE_FORMATS, DATE_LABEL_FORMAT, SERIAL_EPOCH

DateLike = Union[date, datetime]

_SERIAL_EPOCH = datetime(*SERIAL_EPOCH)
# Two defaults that differ in every calendar field; a free-form string that
# yields different results against them did not name a full date.
_PROBE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def _from_serial(value: float) -> Optional[datetime]:
    if not math.isfinite(value):
        return None
    try:
        return _SERIAL_EPOCH + timedelta(milliseconds=round(value * 86400 * 1000))
    except OverflowError:
        return None


def _as_local_naive(value: datetime) -> Optional[datetime]:
    if value.tzinfo is None:
        return value
    try:
        return value.astimezone().replace(tzinfo=None)
    except OverflowError:
        return None


def _parse_iso(text: str) -> Optional[datetime]:
    try:
        return _as_local_naive(datetime.fromisoformat(text))
    except ValueError:
        return None


def _parse_explicit(text: str) -> Optional[datetime]:
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _parse_free_form(text: str) -> Optional[datetime]:
    results = []
    for default in _PROBE_DEFAULTS:
        try:
            results.append(dateutil_parser.parse(text, dayfirst=True, default=default))
        except (ValueError, OverflowError):
            return None
    first, second = results
    if first.date() != second.date():
        return None
    return _as_local_naive(first)


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse a sheet cell into a datetime.

    Rules:
    - int/float is a spreadsheet serial day count (epoch 1899-12-30).
    - Text is digit-normalized and trimmed, then tried as ISO-8601, then
      against DATE_FORMATS in order, then free-form.
    - Anything that fails every step is None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _as_local_naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)):
        try:
            return _from_serial(float(value))
        except OverflowError:
            return None

    text = normalize_digits(value).strip()
    if not text:
        return None

    return _parse_iso(text) or _parse_explicit(text) or _parse_free_form(text)


def start_of_day(value: Optional[DateLike]) -> Optional[date]:
    """Calendar day of ``value``; None stays None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


def format_date_label(value: Optional[DateLike]) -> str:
    if value is None:
        return "Unknown"
    return value.strftime(DATE_LABEL_FORMAT)


def to_date_input_value(value: Optional[DateLike]) -> str:
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d")

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from .dates import start_of_day
from .models import FilterCriteria, VisitorRecord


def _date_matches(record: VisitorRecord, criteria: FilterCriteria) -> bool:
    if criteria.day is None and criteria.date_from is None and criteria.date_to is None:
        return True

    day = start_of_day(record.timestamp)
    if day is None:
        return False
    if criteria.day is not None:
        return day == criteria.day

    lower = criteria.date_from or date.min
    upper = criteria.date_to or date.max
    return lower <= day <= upper


def _search_matches(record: VisitorRecord, needle: str) -> bool:
    if not needle:
        return True
    parts = [record.name, record.mobile, record.entry_number, record.from_where]
    haystack = " ".join(part for part in parts if part).casefold()
    return needle in haystack


def apply_filters(records: Iterable[VisitorRecord], criteria: Optional[FilterCriteria] = None) -> List[VisitorRecord]:
    """
    Records matching both the date criterion and the search text.

    A single day takes precedence over a range; a missing range bound is
    unbounded. Records without a timestamp never match a date criterion.
    """
    if criteria is None:
        return list(records)

    needle = criteria.search.strip().casefold()
    return [
        record
        for record in records
        if _date_matches(record, criteria) and _search_matches(record, needle)
    ]


def resolve_target_date(criteria: Optional[FilterCriteria], today: Optional[date] = None) -> date:
    """Day to report occupancy for: the selected day, else range end, else start, else today."""
    if criteria is not None:
        for candidate in (criteria.day, criteria.date_to, criteria.date_from):
            if candidate is not None:
                return candidate
    return today or date.today()

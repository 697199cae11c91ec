"""
Point-in-time room occupancy.

A record occupies its room from its arrival day through its exit day
(explicit exit date, else arrival + stay_days). A stay that has ended frees
its room for the records that follow it. A record whose status is
"empty"/"vacant" frees its room once it has arrived, whichever order the
records come in.
"""

from __future__ import annotations

import logging
import unicodedata
from datetime import date, timedelta
from typing import Iterable, List, Optional, Set, Tuple

from .dates import start_of_day
from .models import GenderBreakdown, OccupancySummary, VisitorRecord
from .rules import DEFAULT_STAY_DAYS

logger = logging.getLogger(__name__)


def room_sort_key(room: str) -> Tuple[str, str]:
    return unicodedata.normalize("NFKD", room).casefold(), room


def arrival_day(record: VisitorRecord) -> Optional[date]:
    return start_of_day(record.arrival_date) or start_of_day(record.timestamp)


def exit_day(record: VisitorRecord, arrived: Optional[date], stay_days: int = DEFAULT_STAY_DAYS) -> Optional[date]:
    explicit = start_of_day(record.exit_date)
    if explicit is not None:
        return explicit
    if arrived is not None:
        return arrived + timedelta(days=stay_days)
    return None


def head_count(record: VisitorRecord) -> float:
    """People a present record accounts for; never zero."""
    for candidate in (
        record.staying_travellers,
        record.total_travellers,
        record.total_visitors,
        record.effective_breakdown().total,
    ):
        if candidate > 0:
            return candidate
    return 1.0


def compute_occupancy(
    records: Iterable[VisitorRecord],
    target_date: Optional[date] = None,
    stay_days: int = DEFAULT_STAY_DAYS,
) -> OccupancySummary:
    records = list(records)
    if not records:
        return OccupancySummary()

    day = start_of_day(target_date) or date.today()

    known_rooms: Set[str] = {record.room_number.strip() for record in records if record.room_number.strip()}
    occupied: Set[str] = set()
    vacated: Set[str] = set()
    total_people = male = female = children = 0.0

    for record in records:
        room = record.room_number.strip()
        arrived = arrival_day(record)
        if arrived is None or arrived > day:
            continue

        if record.is_vacancy_marker():
            if room:
                vacated.add(room)
            continue

        leaves = exit_day(record, arrived, stay_days)
        if leaves is not None and leaves < day:
            if room:
                occupied.discard(room)
            continue

        total_people += head_count(record)
        male += record.effective_male()
        female += record.effective_female()
        children += record.effective_children()
        if room:
            occupied.add(room)

    occupied -= vacated
    occupied_rooms: List[str] = sorted(occupied, key=room_sort_key)
    vacant_rooms: List[str] = sorted(known_rooms - occupied, key=room_sort_key)
    logger.debug("occupancy for %s: %d filled, %d vacant", day, len(occupied_rooms), len(vacant_rooms))

    return OccupancySummary(
        day=day,
        total_people=total_people,
        breakdown=GenderBreakdown(male=male, female=female, children=children),
        occupied_rooms=occupied_rooms,
        vacant_rooms=vacant_rooms,
        rooms_filled=len(occupied_rooms),
        rooms_vacant=len(vacant_rooms),
    )

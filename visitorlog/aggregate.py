"""
Summary totals and the per-day / per-state / per-origin datasets shown on
the dashboard.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List

from .dates import format_date_label, start_of_day
from .models import DailyBreakdown, GenderBreakdown, RankedCount, Totals, VisitorRecord
from .rules import RANKING_LIMIT, UNKNOWN_LABEL


def visitor_count(record: VisitorRecord) -> float:
    """
    Visitors represented by one record.

    Precedence: total travellers, staying travellers, the stored total, then
    the male/female/children sum (with the gender-summary fallback).
    """
    for candidate in (record.total_travellers, record.staying_travellers, record.total_visitors):
        if candidate > 0:
            return candidate
    return max(record.effective_breakdown().total, 0.0)


def aggregate_totals(records: Iterable[VisitorRecord]) -> Totals:
    visitors = male = female = children = 0.0
    entries = 0
    for record in records:
        visitors += visitor_count(record)
        male += record.effective_male()
        female += record.effective_female()
        children += record.effective_children()
        entries += 1
    return Totals(visitors=visitors, male=male, female=female, children=children, entries=entries)


def gender_totals(records: Iterable[VisitorRecord]) -> GenderBreakdown:
    totals = aggregate_totals(records)
    return GenderBreakdown(male=totals.male, female=totals.female, children=totals.children)


def daily_breakdown(records: Iterable[VisitorRecord]) -> List[DailyBreakdown]:
    """Male/female/children per arrival timestamp day, oldest first."""
    days: Dict[date, List[float]] = defaultdict(lambda: [0.0, 0.0, 0.0])
    for record in records:
        day = start_of_day(record.timestamp)
        if day is None:
            continue
        bucket = days[day]
        bucket[0] += record.effective_male()
        bucket[1] += record.effective_female()
        bucket[2] += record.effective_children()

    return [
        DailyBreakdown(day=day, label=format_date_label(day), male=m, female=f, children=c)
        for day, (m, f, c) in sorted(days.items())
    ]


def _rank(counts: Dict[str, float], limit: int) -> List[RankedCount]:
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [RankedCount(label=label, count=count) for label, count in ranked[:limit]]


def rank_by_state(
    records: Iterable[VisitorRecord], limit: int = RANKING_LIMIT, unknown_label: str = UNKNOWN_LABEL
) -> List[RankedCount]:
    # address stands in for state on rows from before the State column existed
    counts: Dict[str, float] = defaultdict(float)
    for record in records:
        key = record.state or record.address or unknown_label
        counts[key] += record.total_visitors or 1
    return _rank(counts, limit)


def rank_by_origin(
    records: Iterable[VisitorRecord], limit: int = RANKING_LIMIT, unknown_label: str = UNKNOWN_LABEL
) -> List[RankedCount]:
    counts: Dict[str, float] = defaultdict(float)
    for record in records:
        counts[record.from_where or unknown_label] += record.total_visitors
    return _rank(counts, limit)

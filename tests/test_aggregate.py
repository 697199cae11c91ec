from datetime import date, datetime

from visitorlog.aggregate import (
    aggregate_totals,
    daily_breakdown,
    gender_totals,
    rank_by_origin,
    rank_by_state,
    visitor_count,
)
from visitorlog.headers import HeaderResolver
from visitorlog.models import GenderBreakdown, VisitorRecord
from visitorlog.normalize import normalize_row


def test_empty_input_gives_zero_totals():
    totals = aggregate_totals([])
    assert totals.entries == 0
    assert (totals.visitors, totals.male, totals.female, totals.children) == (0, 0, 0, 0)


def test_gender_summary_fills_in_missing_counts():
    record = normalize_row({"Male": "0", "Female": "0", "Children": "0", "Gender Summary": "2,1,3,6"}, HeaderResolver())
    totals = aggregate_totals([record])
    assert (totals.male, totals.female, totals.children) == (2, 1, 3)
    assert totals.visitors == 6
    assert totals.entries == 1


def test_direct_counts_beat_summary():
    record = VisitorRecord(male=4, gender_breakdown=GenderBreakdown(male=2, female=1, children=3))
    totals = aggregate_totals([record])
    assert (totals.male, totals.female, totals.children) == (4, 1, 3)


def test_visitor_count_precedence():
    assert visitor_count(VisitorRecord(total_travellers=5, staying_travellers=3, total_visitors=5)) == 5
    assert visitor_count(VisitorRecord(staying_travellers=3, total_visitors=3)) == 3
    assert visitor_count(VisitorRecord(male=1, female=1)) == 2
    assert visitor_count(VisitorRecord()) == 0


def test_totals_are_non_negative_and_count_entries():
    records = [VisitorRecord(), VisitorRecord(male=1), VisitorRecord(total_travellers=3)]
    totals = aggregate_totals(records)
    assert totals.entries == len(records)
    assert min(totals.visitors, totals.male, totals.female, totals.children) >= 0
    assert totals.visitors == 4


def test_gender_totals():
    breakdown = gender_totals([VisitorRecord(male=1, female=2), VisitorRecord(children=3)])
    assert (breakdown.male, breakdown.female, breakdown.children) == (1, 2, 3)


def test_daily_breakdown_sorted_and_skips_undated():
    records = [
        VisitorRecord(male=1, timestamp=datetime(2024, 1, 3, 10)),
        VisitorRecord(female=2, timestamp=datetime(2024, 1, 1, 8)),
        VisitorRecord(male=2, timestamp=datetime(2024, 1, 3, 20)),
        VisitorRecord(children=5),
    ]
    days = daily_breakdown(records)
    assert [d.day for d in days] == [date(2024, 1, 1), date(2024, 1, 3)]
    assert days[1].male == 3
    assert days[0].label == "01 Jan 2024"


def test_state_ranking_falls_back_to_address_then_unknown():
    records = [
        VisitorRecord(state="Rajasthan", total_visitors=4),
        VisitorRecord(address="Bhopal, MP", total_visitors=6),
        VisitorRecord(state="Rajasthan"),
        VisitorRecord(),
    ]
    ranked = rank_by_state(records, unknown_label="Unknown")
    assert [(r.label, r.count) for r in ranked] == [("Bhopal, MP", 6), ("Rajasthan", 5), ("Unknown", 1)]


def test_origin_ranking_limit():
    records = [VisitorRecord(from_where=f"Town {i}", total_visitors=i) for i in range(1, 15)]
    ranked = rank_by_origin(records, limit=3)
    assert [r.label for r in ranked] == ["Town 14", "Town 13", "Town 12"]

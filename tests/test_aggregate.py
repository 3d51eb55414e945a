from datetime import date, time, timedelta

import pytest

from insights.aggregate import Aggregates, aggregate, longest_streak
from parsers.models import ClassType


@pytest.mark.parametrize("days, expected", [
    ([date(2025, 1, 1), date(2025, 1, 2), date(2025, 1, 3), date(2025, 1, 5)], 3),
    ([date(2025, 1, 1)], 1),
    ([], 0),
    ([date(2025, 1, 2), date(2025, 1, 2), date(2025, 1, 1)], 2),
    ([date(2025, 2, 28), date(2025, 3, 1), date(2025, 3, 10), date(2025, 3, 11), date(2025, 3, 12)], 3),
])
def test_longest_streak(days, expected):
    assert longest_streak(days) == expected


def test_total_minutes_for_nineteen_standard_classes(make_record):
    records = [make_record(day=date(2025, 1, 1) + timedelta(days=i)) for i in range(19)]
    stats = aggregate(records, 2025)
    assert stats.total_classes == 19
    assert stats.total_minutes == 950
    assert stats.longest_streak == 19


def test_minutes_follow_class_type(make_record):
    records = [
        make_record(class_type=ClassType.POWER30),
        make_record(day=date(2025, 12, 12), class_type=ClassType.ADVANCED65),
    ]
    assert aggregate(records, 2025).total_minutes == 95


def test_only_selected_year_counts(make_record):
    records = [make_record(), make_record(day=date(2024, 12, 30))]
    stats = aggregate(records, 2025)
    assert stats.total_classes == 1
    assert aggregate(records, 2024).monthly_activity[11] == 1


def test_instructor_ranking_ties_keep_encounter_order(make_record):
    records = [
        make_record(day=date(2025, 3, 4), instructor="Sam L."),
        make_record(day=date(2025, 3, 3), instructor="Nikki G."),
        make_record(day=date(2025, 3, 2), instructor="Nikki G."),
        make_record(day=date(2025, 3, 1), instructor="Sam L."),
        make_record(day=date(2025, 2, 1), instructor="Jo"),
        make_record(day=date(2025, 1, 1), instructor="Alex P."),
    ]
    first = aggregate(records, 2025)
    assert first.top_instructors == [("Sam L.", 2), ("Nikki G.", 2), ("Jo", 1)]
    assert first.distinct_instructors == 4
    assert aggregate(records, 2025, top_n=1).top_instructors == [("Sam L.", 2)]
    assert aggregate(records, 2025).top_instructors == first.top_instructors


def test_top_location_tie_goes_to_first_seen(make_record):
    records = [
        make_record(day=date(2025, 3, 4), location="Back Bay"),
        make_record(day=date(2025, 3, 3), location="Arsenal Yards"),
        make_record(day=date(2025, 3, 2), location="Arsenal Yards"),
        make_record(day=date(2025, 3, 1), location="Back Bay"),
    ]
    stats = aggregate(records, 2025)
    assert stats.top_location == "Back Bay"
    assert stats.location_counts == {"Back Bay": 2, "Arsenal Yards": 2}


def test_time_of_day_omits_empty_buckets(make_record):
    records = [
        make_record(day=date(2025, 3, 3), at=time(8, 0)),
        make_record(day=date(2025, 3, 2), at=time(11, 59)),
        make_record(day=date(2025, 3, 1), at=time(12, 0)),
        make_record(day=date(2025, 2, 1), at=time(16, 59)),
    ]
    slices = aggregate(records, 2025).time_of_day
    assert [(s.name, s.count, s.percent) for s in slices] == [("Morning", 2, 0.5), ("Afternoon", 2, 0.5)]


def test_evening_starts_at_five(make_record):
    stats = aggregate([make_record(at=time(17, 0))], 2025)
    assert [s.name for s in stats.time_of_day] == ["Evening"]
    assert stats.share("Evening") == 1.0
    assert stats.share("Morning") == 0.0


def test_monthly_and_class_type_distribution(make_record):
    records = [
        make_record(day=date(2025, 12, 13)),
        make_record(day=date(2025, 12, 12), class_type=ClassType.FOCUS50),
        make_record(day=date(2025, 1, 5)),
    ]
    stats = aggregate(records, 2025)
    assert stats.monthly_activity == [1] + [0] * 10 + [2]
    assert stats.class_type_counts == {"Signature50": 2, "Focus50": 1}


def test_empty_year():
    stats = aggregate([], 2025)
    assert stats == Aggregates(year=2025)
    assert stats.top_location == "Unknown"
    assert stats.monthly_activity == [0] * 12
    assert stats.time_of_day == []


def test_as_dict(make_record):
    out = aggregate([make_record()], 2025).as_dict()
    assert out["top_instructors"] == [{"name": "Nikki G.", "count": 1}]
    assert out["time_of_day"] == [{"name": "Morning", "count": 1, "percent": 1.0}]
    assert out["total_minutes"] == 50

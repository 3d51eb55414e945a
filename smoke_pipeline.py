"""Smoke test for the extraction + stats pipeline.

Tiny assert-based script, separate from the pytest suite, so it can be run
against a real export without any fixtures:

    python smoke_pipeline.py                 # built-in sample export
    python smoke_pipeline.py schedule.pdf    # a real "Completed" export

With a PDF it only checks the invariants that hold for any export. With the
built-in sample it also checks the exact records and stats.
"""

from __future__ import annotations

import sys
from datetime import date
from pprint import pprint

from insights import aggregate, build_report, classify
from parsers import available_years, extract_records, extract_records_from_bytes, normalize


# One row per layout the normalizer has to undo: plain, clock-first,
# letter-spaced, and a cancelled class that must not count.
SAMPLE_EXPORT = """Completed
Saturday 13 December, 2025 solidcore Signature50: Full Body MA, Arsenal Yards w/ Nikki Gagliano - Senior Master 8:00am EST (50 min)
Friday 12 December, 2025 solidcore Focus50: Arms & Abs MA, Arsenal Yards w/ Nikki Gagliano - Senior Master 6:30pm EST (50 min)
Wednesday 10 December, 2025 7:00am EST (50 min) solidcore Foundation50: Lower Body MA, Back Bay w/ Sam Lee - Coach
S u n d a y 7 D e c e m b e r , 2 0 2 5 s o l i d c o r e P o w e r 3 0 : F u l l B o d y M A , B a c k B a y w / J o r d a n R i v e r s 9 : 1 5 a m E S T ( 3 0 m i n )
Monday 30 December, 2024 solidcore Advanced65: Full Body MA, Seaport w/ Nikki Gagliano - Senior Master 5:45pm EST (65 min)
Tuesday 2 December, 2025 solidcore Signature50: Core MA, Back Bay w/ Sam Lee - Coach 12:15pm EST (50 min) Late Cancel
"""


def check_invariants(records) -> None:
    keys = [r.dedup_key for r in records]
    if len(keys) != len(set(keys)):
        raise AssertionError("duplicate (date, time, instructor) in output")

    dates = [r.date for r in records]
    if dates != sorted(dates, reverse=True):
        raise AssertionError("records are not sorted most recent first")

    for r in records:
        if not r.instructor:
            raise AssertionError(f"record without instructor: {r}")


def check_sample() -> None:
    if normalize(normalize(SAMPLE_EXPORT)) != normalize(SAMPLE_EXPORT):
        raise AssertionError("normalize is not idempotent on the sample")

    records = extract_records(SAMPLE_EXPORT)
    check_invariants(records)

    got = [(r.date, r.class_type.value, r.instructor, r.location) for r in records]
    expected = [
        (date(2025, 12, 13), "Signature50", "Nikki G.", "Arsenal Yards"),
        (date(2025, 12, 12), "Focus50", "Nikki G.", "Arsenal Yards"),
        (date(2025, 12, 10), "Foundation50", "Sam L.", "Back Bay"),
        (date(2025, 12, 7), "Power30", "Jordan R.", "Back Bay"),
        (date(2024, 12, 30), "Advanced65", "Nikki G.", "Seaport"),
    ]
    if got != expected:
        pprint(got)
        raise AssertionError("sample export did not parse as expected")

    if available_years(records) != [2025, 2024]:
        raise AssertionError(f"unexpected years: {available_years(records)}")

    stats = aggregate(records, 2025)
    if (stats.total_classes, stats.total_minutes, stats.longest_streak) != (4, 180, 2):
        raise AssertionError(f"unexpected stats: {stats}")
    if stats.top_location != "Arsenal Yards":
        raise AssertionError(f"unexpected top location: {stats.top_location}")

    label = classify(stats, records)
    if label.title != "Dawn Patrol":
        raise AssertionError(f"unexpected personality: {label}")

    print("OK: sample export -> 5 records, 2025 stats and personality as expected")


def check_pdf(path: str) -> None:
    with open(path, "rb") as f:
        data = f.read()

    records = extract_records_from_bytes(data)
    check_invariants(records)

    report = build_report(records)
    print(f"OK: {path} -> {len(records)} records, years {report['years']}")
    pprint(report["stats"])
    pprint(report["personality"])


def main() -> None:
    if len(sys.argv) > 1:
        check_pdf(sys.argv[1])
    else:
        check_sample()


if __name__ == "__main__":
    main()

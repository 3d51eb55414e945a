"""JSON-ready year report: records, stats and personality for one year."""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional, Sequence

from parsers.errors import EmptyResultError, NoRecordsForYearError
from parsers.models import AttendanceRecord
from parsers.pipeline import available_years, records_for_year

from .aggregate import DEFAULT_TOP_N, aggregate
from .personality import classify


def build_report(
    records: Sequence[AttendanceRecord],
    year: Optional[int] = None,
    top_n: int = DEFAULT_TOP_N,
) -> dict:
    """Render the report for `year` (default: the most recent year present).

    Raises `NoRecordsForYearError` when the selected year has no classes and
    `EmptyResultError` when there are no records at all.
    """
    years = available_years(records)
    if year is None:
        if not years:
            raise EmptyResultError()
        year = years[0]

    selected = records_for_year(records, year)
    if not selected:
        raise NoRecordsForYearError(year)

    stats = aggregate(selected, year, top_n=top_n)
    personality = classify(stats, selected)

    return {
        "years": years,
        "year": year,
        "records": [r.as_dict() for r in selected],
        "stats": stats.as_dict(),
        "personality": asdict(personality),
    }

"""Year-in-review statistics over a list of attendance records.

`aggregate` is a pure function: same records and year in, same `Aggregates`
out. Ties in the rankings go to whichever value shows up first in the
record list (records come out of the parsers most recent first).
"""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Iterable, Sequence

from parsers.models import AttendanceRecord


DEFAULT_TOP_N = 3
UNKNOWN_LOCATION = "Unknown"

MORNING = "Morning"
AFTERNOON = "Afternoon"
EVENING = "Evening"
AFTERNOON_STARTS = 12
EVENING_STARTS = 17


@dataclass(frozen=True)
class TimeOfDaySlice:
    name: str
    count: int
    percent: float


@dataclass(frozen=True)
class Aggregates:
    year: int
    total_classes: int = 0
    total_minutes: int = 0
    top_instructors: list[tuple[str, int]] = field(default_factory=list)
    distinct_instructors: int = 0
    top_location: str = UNKNOWN_LOCATION
    location_counts: dict[str, int] = field(default_factory=dict)
    monthly_activity: list[int] = field(default_factory=lambda: [0] * 12)
    time_of_day: list[TimeOfDaySlice] = field(default_factory=list)
    class_type_counts: dict[str, int] = field(default_factory=dict)
    longest_streak: int = 0

    def share(self, bucket: str) -> float:
        for s in self.time_of_day:
            if s.name == bucket:
                return s.percent
        return 0.0

    def as_dict(self) -> dict:
        out = asdict(self)
        out["top_instructors"] = [{"name": n, "count": c} for n, c in self.top_instructors]
        return out


def time_bucket(hour: int) -> str:
    if hour < AFTERNOON_STARTS:
        return MORNING
    if hour < EVENING_STARTS:
        return AFTERNOON
    return EVENING


def longest_streak(days: Iterable[date]) -> int:
    """Longest run of consecutive calendar days.

    >>> longest_streak([date(2025, 1, 1), date(2025, 1, 2), date(2025, 1, 3), date(2025, 1, 5)])
    3
    """
    ordered = sorted(set(days))
    if len(ordered) <= 1:
        return len(ordered)

    best = current = 1
    for prev, cur in zip(ordered, ordered[1:]):
        gap = (cur - prev).days
        if gap == 1:
            current += 1
        elif gap > 1:
            best = max(best, current)
            current = 1
    return max(best, current)


def aggregate(records: Sequence[AttendanceRecord], year: int, top_n: int = DEFAULT_TOP_N) -> Aggregates:
    rows = [r for r in records if r.date.year == year]
    if not rows:
        return Aggregates(year=year)

    total = len(rows)
    instructors = Counter(r.instructor for r in rows)
    locations = Counter(r.location for r in rows)
    class_types = Counter(r.class_type.value for r in rows)

    monthly = [0] * 12
    for r in rows:
        monthly[r.date.month - 1] += 1

    buckets = Counter(time_bucket(r.time.hour) for r in rows)
    time_of_day = [
        TimeOfDaySlice(name=name, count=buckets[name], percent=buckets[name] / total)
        for name in (MORNING, AFTERNOON, EVENING)
        if buckets[name] > 0
    ]

    return Aggregates(
        year=year,
        total_classes=total,
        total_minutes=sum(r.minutes for r in rows),
        top_instructors=instructors.most_common(top_n),
        distinct_instructors=len(instructors),
        # max() keeps the first of equal keys; Counter keeps insertion order.
        top_location=max(locations, key=locations.__getitem__),
        location_counts=dict(locations),
        monthly_activity=monthly,
        time_of_day=time_of_day,
        class_type_counts=dict(class_types),
        longest_streak=longest_streak(r.date for r in rows),
    )

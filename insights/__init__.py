"""Statistics and personality label for a year of attendance records."""

from .aggregate import Aggregates, TimeOfDaySlice, aggregate, longest_streak
from .personality import PersonalityLabel, classify
from .report import build_report

__all__ = [
    "Aggregates",
    "PersonalityLabel",
    "TimeOfDaySlice",
    "aggregate",
    "build_report",
    "classify",
    "longest_streak",
]

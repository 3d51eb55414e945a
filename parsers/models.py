"""Record types shared by the extraction pipeline and the stats engine.

`AttendanceRecord` is the only thing that leaves the parsers package; the
`MatchCandidate` is scratch state between the matcher and the builder.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from enum import Enum
from typing import Optional

from .errors import InvariantViolation


MIN_YEAR = 2000
MAX_YEAR = 2100


class ClassType(str, Enum):
    STARTER50 = "Starter50"
    FOUNDATION50 = "Foundation50"
    SIGNATURE50 = "Signature50"
    FOCUS50 = "Focus50"
    POWER30 = "Power30"
    ADVANCED50 = "Advanced50"
    ADVANCED65 = "Advanced65"

    @property
    def minutes(self) -> int:
        return _MINUTES[self]


_MINUTES = {
    ClassType.STARTER50: 50,
    ClassType.FOUNDATION50: 50,
    ClassType.SIGNATURE50: 50,
    ClassType.FOCUS50: 50,
    ClassType.POWER30: 30,
    ClassType.ADVANCED50: 50,
    ClassType.ADVANCED65: 65,
}

# Checked top to bottom against the lowercased, space-free code, so a
# specific code has to come before any shorter keyword it contains.
CLASS_TYPE_KEYWORDS: tuple[tuple[str, ClassType], ...] = (
    ("advanced65", ClassType.ADVANCED65),
    ("advanced", ClassType.ADVANCED50),
    ("power", ClassType.POWER30),
    ("foundation", ClassType.FOUNDATION50),
    ("starter", ClassType.STARTER50),
    ("focus", ClassType.FOCUS50),
    ("signature", ClassType.SIGNATURE50),
)

# Used when an associated fragment has no category code nearby.
FALLBACK_CLASS_TYPE = ClassType.SIGNATURE50


def canonical_class_type(raw: str) -> Optional[ClassType]:
    key = "".join(raw.split()).lower()
    for keyword, class_type in CLASS_TYPE_KEYWORDS:
        if keyword in key:
            return class_type
    return None


def format_clock(value: time) -> str:
    """Render a time the way the schedule export does: ``8:00am``."""
    hour = value.hour % 12 or 12
    suffix = "am" if value.hour < 12 else "pm"
    return f"{hour}:{value.minute:02d}{suffix}"


@dataclass(frozen=True)
class AttendanceRecord:
    date: date
    time: time
    class_type: ClassType
    variant: str
    instructor: str
    location: str

    def __post_init__(self) -> None:
        if not MIN_YEAR <= self.date.year <= MAX_YEAR:
            raise InvariantViolation(f"record year out of range: {self.date.isoformat()}")
        if not isinstance(self.class_type, ClassType):
            raise InvariantViolation(f"unknown class type: {self.class_type!r}")
        if not self.instructor:
            raise InvariantViolation("record without instructor")

    @property
    def minutes(self) -> int:
        return self.class_type.minutes

    @property
    def time_label(self) -> str:
        return format_clock(self.time)

    @property
    def dedup_key(self) -> tuple[date, time, str]:
        return (self.date, self.time, self.instructor)

    def as_dict(self) -> dict:
        return {
            "date": self.date.strftime("%m/%d/%Y"),
            "time": self.time_label,
            "type": self.class_type.value,
            "variant": self.variant,
            "instructor": self.instructor,
            "location": self.location,
            "minutes": self.minutes,
        }


@dataclass(frozen=True)
class MatchCandidate:
    """Unvalidated fragments of one entry plus where they were found."""

    day: str
    month: str
    year: str
    code: str
    variant: str
    region: str
    location: str
    instructor: str
    time: str
    duration: str
    start: int
    end: int
    date_offset: int
    category_offset: Optional[int]
    source: str = "entry"

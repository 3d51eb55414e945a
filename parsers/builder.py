"""Turn matcher candidates into validated `AttendanceRecord`s.

A candidate that fails any field check is skipped; the builder never raises
for a single bad row. Output is deduplicated on (date, time, instructor) and
sorted most recent first.
"""

from __future__ import annotations

import logging
import re
from datetime import date, time
from typing import Iterable

from .errors import RecoverableMatchFailure
from .grammar import MONTHS, ROLE_TITLES
from .models import MAX_YEAR, MIN_YEAR, AttendanceRecord, MatchCandidate, canonical_class_type
from .normalizer import collapse_letter_runs


logger = logging.getLogger(__name__)

MONTH_INDEX = {name.lower(): i for i, name in enumerate(MONTHS, start=1)}

ROLE_SUFFIX_RE = re.compile(
    r"\s+-\s+(?:" + "|".join(re.escape(r) for r in ROLE_TITLES) + r")\b.*$",
    re.IGNORECASE,
)
DASH_SUFFIX_RE = re.compile(r"\s+-\s+.*$")
TRUNCATION_RE = re.compile(r"\.{3}|\u2026")
SECONDARY_DELIMITER_RE = re.compile(r"\s*(?:\||//|\u2022|Playlist:).*$", re.IGNORECASE)
REGION_PREFIX_RE = re.compile(r"^[A-Z]{2},\s*")
CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2}) ?([ap])m$", re.IGNORECASE)


def _clean_spaces(s: str) -> str:
    return re.sub(r"\s+", " ", s.replace("\u00a0", " ")).strip()


def clean_free_text(raw: str) -> str:
    text = _clean_spaces(collapse_letter_runs(raw or ""))
    text = SECONDARY_DELIMITER_RE.sub("", text)
    return text.strip(" ,:-")


def clean_location(raw: str) -> str:
    return REGION_PREFIX_RE.sub("", clean_free_text(raw))


def normalize_instructor(raw: str) -> str:
    """Strip role and truncation markers, then abbreviate to "First L."."""
    name = _clean_spaces(collapse_letter_runs(raw or ""))
    name = ROLE_SUFFIX_RE.sub("", name)
    name = DASH_SUFFIX_RE.sub("", name)
    name = _clean_spaces(TRUNCATION_RE.sub("", name))

    tokens = name.split(" ") if name else []
    if not tokens:
        return ""
    if len(tokens) == 1:
        return tokens[0]
    return f"{tokens[0]} {tokens[-1][0]}."


def parse_date(candidate: MatchCandidate) -> date:
    month = MONTH_INDEX.get(candidate.month.lower().rstrip("."))
    if month is None:
        raise RecoverableMatchFailure(f"unknown month {candidate.month!r}")
    if not candidate.day:
        raise RecoverableMatchFailure("missing day")

    day, year = int(candidate.day), int(candidate.year)
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise RecoverableMatchFailure(f"year out of range: {year}")
    try:
        return date(year, month, day)
    except ValueError as e:
        raise RecoverableMatchFailure(str(e)) from e


def parse_clock(raw: str) -> time:
    m = CLOCK_RE.match(_clean_spaces(raw))
    if not m:
        raise RecoverableMatchFailure(f"bad time {raw!r}")
    hour, minute, half = int(m.group(1)), int(m.group(2)), m.group(3).lower()
    if not (1 <= hour <= 12 and 0 <= minute <= 59):
        raise RecoverableMatchFailure(f"bad time {raw!r}")
    return time(hour % 12 + (12 if half == "p" else 0), minute)


def build_one(candidate: MatchCandidate) -> AttendanceRecord:
    class_type = canonical_class_type(candidate.code)
    if class_type is None:
        raise RecoverableMatchFailure(f"unknown class code {candidate.code!r}")

    instructor = normalize_instructor(candidate.instructor)
    if not instructor:
        raise RecoverableMatchFailure("empty instructor")

    return AttendanceRecord(
        date=parse_date(candidate),
        time=parse_clock(candidate.time),
        class_type=class_type,
        variant=clean_free_text(candidate.variant),
        instructor=instructor,
        location=clean_location(candidate.location),
    )


def build(candidates: Iterable[MatchCandidate]) -> list[AttendanceRecord]:
    records: list[AttendanceRecord] = []
    seen: set[tuple] = set()

    for candidate in candidates:
        try:
            record = build_one(candidate)
        except RecoverableMatchFailure as e:
            logger.debug("skipping candidate at %d: %s", candidate.start, e)
            continue

        if record.dedup_key in seen:
            continue
        seen.add(record.dedup_key)
        records.append(record)

    # sorted() is stable, so same-day records keep text order.
    return sorted(records, key=lambda r: r.date, reverse=True)

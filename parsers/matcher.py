"""Find attendance entries in normalized schedule text.

Most rows are read in one go by `ENTRY_RE`. When the PDF text layer splits a
row so that its pieces are no longer contiguous, the date, the category
code and the "tail" (location / instructor / time / duration) are found on
their own and stitched back together by character offset in `associate`.

Contract:
- Input: output of `normalizer.normalize`.
- Output: `MatchCandidate`s in text order. Fields are raw strings; the
  builder validates them.
"""

from __future__ import annotations

import logging
import re
from bisect import bisect_left
from dataclasses import dataclass
from typing import Optional, Sequence

from .grammar import ANY_CODE, CANCEL_KEYWORDS, DATE, KNOWN_CODE, MARKER, MARKER_WORD, REGION, TAIL, VARIANT_TEXT
from .models import FALLBACK_CLASS_TYPE, MatchCandidate


logger = logging.getLogger(__name__)

MAX_ASSOCIATION_DISTANCE = 500
CANCEL_WINDOW = 100

# Sessions from other class families that share the schedule vocabulary.
DENYLIST = ("open studio", "workshop", "teacher training", "private session", "virtual")

ENTRY_RE = re.compile(
    rf"{DATE}\s+{MARKER}\s*(?P<code>{ANY_CODE})"
    rf"(?:\s*[:\-])?\s*(?P<variant>{VARIANT_TEXT})"
    rf"\s*{TAIL}",
    re.IGNORECASE,
)
DATE_RE = re.compile(DATE, re.IGNORECASE)
# The variant is read in a lookahead so it never consumes the next fragment.
CATEGORY_VARIANT = rf"(?:(?!{MARKER_WORD}|{KNOWN_CODE})[^()]){{0,80}}?"
CATEGORY_RE = re.compile(
    rf"(?:{MARKER}\s*)?\b(?P<code>{KNOWN_CODE})"
    rf"(?:(?=(?:\s*[:\-])?\s*(?P<variant>{CATEGORY_VARIANT})\s*(?:\(|{REGION}|\Z))|)",
    re.IGNORECASE,
)
TAIL_RE = re.compile(TAIL, re.IGNORECASE)
CANCEL_RE = re.compile("|".join(re.escape(k) for k in CANCEL_KEYWORDS), re.IGNORECASE)


@dataclass(frozen=True)
class DateFragment:
    day: str
    month: str
    year: str
    start: int


@dataclass(frozen=True)
class CategoryFragment:
    code: str
    start: int
    variant: str = ""


@dataclass(frozen=True)
class TailFragment:
    region: str
    location: str
    instructor: str
    time: str
    duration: str
    start: int
    end: int


def _day(m: re.Match) -> str:
    return m.group("day") or m.group("day_after") or ""


def find_dates(text: str) -> list[DateFragment]:
    return [
        DateFragment(day=_day(m), month=m.group("month"), year=m.group("year"), start=m.start())
        for m in DATE_RE.finditer(text)
    ]


def find_categories(text: str) -> list[CategoryFragment]:
    return [
        CategoryFragment(code=m.group("code"), start=m.start(), variant=m.group("variant") or "")
        for m in CATEGORY_RE.finditer(text)
    ]


def find_tails(text: str) -> list[TailFragment]:
    return [
        TailFragment(
            region=m.group("region"),
            location=m.group("location"),
            instructor=_instructor(m),
            time=m.group("time"),
            duration=m.group("duration"),
            start=m.start(),
            end=m.end(),
        )
        for m in TAIL_RE.finditer(text)
    ]


def _instructor(m: re.Match) -> str:
    # The role rides along so the builder strips it with the same rules
    # whichever pattern found the row.
    if m.group("role"):
        return f"{m.group('instructor')} - {m.group('role')}"
    return m.group("instructor")


def nearest_preceding(fragments: Sequence[DateFragment], offset: int, max_distance: int) -> Optional[DateFragment]:
    """Closest fragment starting strictly before `offset`, if within reach."""
    starts = [f.start for f in fragments]
    i = bisect_left(starts, offset)
    if i == 0:
        return None
    candidate = fragments[i - 1]
    if offset - candidate.start > max_distance:
        return None
    return candidate


def nearest(fragments: Sequence[CategoryFragment], offset: int, max_distance: int) -> Optional[CategoryFragment]:
    """Closest fragment on either side; ties go to the one on the left."""
    best: Optional[CategoryFragment] = None
    for fragment in fragments:
        distance = abs(fragment.start - offset)
        if distance > max_distance:
            continue
        if best is None or (distance, fragment.start) < (abs(best.start - offset), best.start):
            best = fragment
    return best


def associate(
    tails: Sequence[TailFragment],
    dates: Sequence[DateFragment],
    categories: Sequence[CategoryFragment],
    max_distance: int = MAX_ASSOCIATION_DISTANCE,
) -> list[MatchCandidate]:
    """Pair each tail with its nearest preceding date and nearest category.

    A tail with no date within `max_distance` is dropped. A tail with no
    category nearby falls back to the default class type.
    """
    candidates: list[MatchCandidate] = []
    for tail in tails:
        found_date = nearest_preceding(dates, tail.start, max_distance)
        if found_date is None:
            logger.debug("dropping tail at %d: no date within %d chars", tail.start, max_distance)
            continue
        category = nearest(categories, tail.start, max_distance)
        candidates.append(
            MatchCandidate(
                day=found_date.day,
                month=found_date.month,
                year=found_date.year,
                code=category.code if category else FALLBACK_CLASS_TYPE.value,
                variant=category.variant if category else "",
                region=tail.region,
                location=tail.location,
                instructor=tail.instructor,
                time=tail.time,
                duration=tail.duration,
                start=tail.start,
                end=tail.end,
                date_offset=found_date.start,
                category_offset=category.start if category else None,
                source="associated",
            )
        )
    return candidates


def _entry_candidate(m: re.Match) -> MatchCandidate:
    return MatchCandidate(
        day=_day(m),
        month=m.group("month"),
        year=m.group("year"),
        code=m.group("code"),
        variant=m.group("variant"),
        region=m.group("region"),
        location=m.group("location"),
        instructor=_instructor(m),
        time=m.group("time"),
        duration=m.group("duration"),
        start=m.start(),
        end=m.end(),
        date_offset=m.start(),
        category_offset=m.start("code"),
    )


def cancelled_indexes(text: str, candidates: Sequence[MatchCandidate]) -> set[int]:
    """Indexes of candidates with a cancellation keyword in their window.

    The window runs `CANCEL_WINDOW` characters either side of the candidate
    span. A status printed between two close rows cancels both.
    """
    hits = [(m.start(), m.end()) for m in CANCEL_RE.finditer(text)]
    return {
        i for i, c in enumerate(candidates)
        if any(start >= c.start - CANCEL_WINDOW and end <= c.end + CANCEL_WINDOW for start, end in hits)
    }


def is_denylisted(candidate: MatchCandidate) -> bool:
    fields = f"{candidate.variant} {candidate.location}".lower()
    return any(term in fields for term in DENYLIST)


def match(normalized: str) -> list[MatchCandidate]:
    entries = [_entry_candidate(m) for m in ENTRY_RE.finditer(normalized)]
    spans = [(c.start, c.end) for c in entries]

    loose_tails = [
        tail for tail in find_tails(normalized)
        if not any(start <= tail.start < end for start, end in spans)
    ]
    associated: list[MatchCandidate] = []
    if loose_tails:
        associated = associate(loose_tails, find_dates(normalized), find_categories(normalized))
        logger.debug("associated %d of %d loose tails", len(associated), len(loose_tails))

    found = sorted(entries + associated, key=lambda c: c.start)
    cancelled = cancelled_indexes(normalized, found)

    kept: list[MatchCandidate] = []
    for i, candidate in enumerate(found):
        if i in cancelled or is_denylisted(candidate):
            logger.debug("excluding candidate at %d", candidate.start)
            continue
        kept.append(candidate)
    return kept

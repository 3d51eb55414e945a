"""Repair PDF text-extraction artifacts before matching.

The schedule export comes out of the PDF text layer with letters spaced
apart ("S i g n a t u r e 5 0"), odd colon glyphs, split "a m" suffixes and,
on some pages, the columns of a row in a different order. `normalize` undoes
those so a single entry pattern can read every row.

Every pass is a text -> text rewrite and `normalize` is idempotent.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .grammar import (
    CLOCK,
    DATE,
    MARKER,
    MARKER_KEYWORD,
    MARKER_WORD,
    MONTHS,
    ROLE,
    STRICT_NAME,
    WEEKDAYS,
)
from .models import ClassType


COLON_GLYPHS = {"\u2236": ":", "\uff1a": ":", "\ua789": ":"}

# (keyword, canonical form). A spaced-out occurrence of the keyword is
# rewritten to the canonical form; unspaced text is left alone.
DESPACE_KEYWORDS: tuple[tuple[str, str], ...] = tuple(
    [(month, month) for month in MONTHS]
    + [(day, day) for day in WEEKDAYS]
    + [(class_type.value, class_type.value) for class_type in ClassType]
    + [
        (MARKER_KEYWORD, MARKER_KEYWORD),
        ("Late Cancel", "Late Cancel"),
        ("Cancelled", "Cancelled"),
        ("Canceled", "Canceled"),
        ("No Show", "No Show"),
    ]
)

WHITESPACE_RE = re.compile(r"\s+")
DIGIT_RUN_RE = re.compile(r"(?<!\d)\d(?: \d)+(?!\d)")
REGION_SPLIT_RE = re.compile(r"(?<![A-Za-z])([A-Z])\s?([A-Z])\s*,")
SLASH_SPLIT_RE = re.compile(r"\b([Ww])\s+/\s*")
TIME_SUFFIX_RE = re.compile(r"(?<!\d)(\d{1,2})\s*:\s*(\d{2})\s*([AaPp])\.?\s*([Mm])\.?(?![A-Za-z])")
LETTER_RUN_RE = re.compile(r"(?<![^\W\d_])[^\W\d_](?: [^\W\d_]){2,}(?![^\W\d_]|/)")
CAMEL_BOUNDARY_RE = re.compile(r"([a-z])([A-Z])")


def _keyword_pattern(keyword: str) -> re.Pattern:
    # A lone letter right before or after the match means the keyword is
    # only part of a longer spaced-out word ("M a r c h e s e"); those runs
    # are left to collapse_letter_runs.
    chars = [re.escape(ch) for ch in keyword if not ch.isspace()]
    return re.compile(
        r"(?<![A-Za-z0-9])(?<!(?<![A-Za-z])[A-Za-z] )"
        + r"\s*".join(chars)
        + r"(?![A-Za-z0-9])(?! [A-Za-z](?![A-Za-z]))",
        re.IGNORECASE,
    )


_KEYWORD_PATTERNS = [(_keyword_pattern(keyword), canonical) for keyword, canonical in DESPACE_KEYWORDS]


@dataclass(frozen=True)
class ReorderRule:
    name: str
    pattern: re.Pattern
    replacement: str


REORDER_RULES: tuple[ReorderRule, ...] = (
    # "solidcore Saturday 13 December, 2025 Signature50 ..." puts the marker
    # ahead of the date.
    ReorderRule(
        name="marker_before_date",
        pattern=re.compile(rf"(?P<marker>{MARKER})\s+(?P<date>{DATE})", re.IGNORECASE),
        replacement=r"\g<date> \g<marker>",
    ),
    # "... 2025 8:00am EST (50 min) solidcore Signature50 ... w/ Nikki G."
    # puts the clock ahead of the marker instead of after the instructor.
    ReorderRule(
        name="clock_before_marker",
        pattern=re.compile(
            rf"(?P<clock>{CLOCK})\s+"
            rf"(?P<body>{MARKER}\s*(?:(?!{MARKER_WORD})[^()]){{1,240}}?\bw/\s*{STRICT_NAME}(?:\s+-\s+{ROLE})?)",
            re.IGNORECASE,
        ),
        replacement=r"\g<body> \g<clock>",
    ),
)


def _clean_spaces(s: str) -> str:
    return WHITESPACE_RE.sub(" ", s.replace("\u00a0", " ")).strip()


def _despace(match: re.Match, canonical: str) -> str:
    found = match.group(0)
    if any(ch.isspace() for ch in found):
        return canonical
    return found


def despace_keywords(text: str) -> str:
    for pattern, canonical in _KEYWORD_PATTERNS:
        text = pattern.sub(lambda m, c=canonical: _despace(m, c), text)
    return text


def _join_letters(match: re.Match) -> str:
    return CAMEL_BOUNDARY_RE.sub(r"\1 \2", match.group(0).replace(" ", ""))


def collapse_letter_runs(text: str) -> str:
    """Join runs of single spaced letters and re-split them on case changes.

    "N i k k i G a g l i a n o" -> "Nikki Gagliano"
    """
    return LETTER_RUN_RE.sub(_join_letters, text)


def _canonical_time(match: re.Match) -> str:
    hour, minute, half, _ = match.groups()
    return f"{hour}:{minute}{half.lower()}m"


def reorder(text: str) -> str:
    for rule in REORDER_RULES:
        text = rule.pattern.sub(rule.replacement, text)
    return text


def normalize(raw: str) -> str:
    if not raw:
        return ""

    text = raw
    for glyph, colon in COLON_GLYPHS.items():
        text = text.replace(glyph, colon)
    text = _clean_spaces(text)

    text = DIGIT_RUN_RE.sub(lambda m: m.group(0).replace(" ", ""), text)
    text = despace_keywords(text)
    text = REGION_SPLIT_RE.sub(r"\1\2,", text)
    text = SLASH_SPLIT_RE.sub(r"\1/ ", text)
    text = TIME_SUFFIX_RE.sub(_canonical_time, text)
    text = collapse_letter_runs(text)
    # Collapsing letter runs can expose a keyword that was split across
    # two runs.
    text = despace_keywords(text)
    text = reorder(text)

    return _clean_spaces(text)

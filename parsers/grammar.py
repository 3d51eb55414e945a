"""Token patterns for the schedule export.

A completed-class row, once the text is normalized, reads:

    Saturday 13 December, 2025 solidcore Signature50: Full Body
    MA, Arsenal Yards w/ Nikki Gagliano - Senior Master 8:00am EST (50 min)

The pieces below are plain pattern strings so the normalizer (reorder rules)
and the matcher (entry / fragment patterns) compose them the same way. All
of them expect ``re.IGNORECASE``; the parts that must stay case-sensitive
(region codes, timezones, capitalized names) scope it off locally.
"""

from __future__ import annotations

import re


WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
MARKER_KEYWORD = "solidcore"
CODE_FAMILIES = ("Signature", "Foundation", "Starter", "Focus", "Advanced", "Power")
ROLE_TITLES = (
    "Senior Master", "Master Coach", "Master", "Pro Coach",
    "Head Coach", "Lead Coach", "Coach", "Instructor",
)
CANCEL_KEYWORDS = ("cancelled", "canceled", "late cancel", "no show")


def _one_of(words) -> str:
    return "(?:" + "|".join(re.escape(w) for w in words) + ")"


WEEKDAY = _one_of(WEEKDAYS)
MONTH = _one_of(MONTHS)
ROLE = _one_of(ROLE_TITLES)

# Day number before the month ("13 Saturday December, 2025") or after it
# ("Saturday, December 13, 2025"); the weekday may sit on either side of
# the leading day number.
DATE = (
    rf"(?:\b{WEEKDAY},?\s+)?"
    rf"(?:(?<!\d)(?P<day>\d{{1,2}})(?:st|nd|rd|th)?,?\s+)?"
    rf"(?:{WEEKDAY},?\s+)?"
    rf"\b(?P<month>{MONTH})\.?(?:\s*,)?"
    rf"(?:\s*(?P<day_after>\d{{1,2}})(?:st|nd|rd|th)?(?!\d)(?:\s*,)?)?"
    rf"\s+(?P<year>\d{{4}})(?!\d)"
)

MARKER_WORD = rf"\[?{MARKER_KEYWORD}"
MARKER = rf"\[?{MARKER_KEYWORD}\]?"

ANY_CODE = r"[a-z]+ ?\d{2}(?!\d)"
KNOWN_CODE = rf"{_one_of(CODE_FAMILIES)} ?\d{{2}}(?!\d)"

REGION = r"\b(?-i:[A-Z]{2})(?=,)"

LETTER = r"[^\W\d_]"
NAME_TOKEN = rf"{LETTER}(?:{LETTER}|['.\-\u2026])*"
NAME = rf"{NAME_TOKEN}(?:\s+{NAME_TOKEN}){{0,3}}"

# Stricter name used when text is being moved around: capitalized tokens
# only, and never a word that starts the next row.
_STOP_WORDS = _one_of(WEEKDAYS + MONTHS + (MARKER_KEYWORD, "Late", "Cancelled", "Canceled", "No Show", "Completed"))
CAPITALIZED_TOKEN = rf"(?-i:[A-Z])(?:{LETTER}|['.\-\u2026])*"
STRICT_NAME = rf"{CAPITALIZED_TOKEN}(?:\s+(?!{_STOP_WORDS}\b){CAPITALIZED_TOKEN}){{0,3}}"

ROLE_SUFFIX = r"[^\d()]{1,40}?"

TIME = r"\d{1,2}:\d{2} ?[ap]m(?![a-z])"
TIMEZONE = r"(?-i:[A-Z]{2,4})(?![a-z])"
DURATION = r"\(\s*(?P<duration>\d{1,3})\s*min(?:ute)?s?\s*\)"
CLOCK = rf"{TIME}(?:\s+{TIMEZONE})?\s*\(\s*\d{{1,3}}\s*min(?:ute)?s?\s*\)"

# Free-text fields are bounded and may not run into another row's marker,
# so one malformed row can't swallow its neighbor.
VARIANT_TEXT = rf"(?:(?!{MARKER_WORD})[^()]){{0,80}}?"
LOCATION_TEXT = rf"(?:(?!{MARKER_WORD}|\bw/)[^()]){{1,60}}?"

TAIL = (
    rf"(?P<region>{REGION}),\s*(?P<location>{LOCATION_TEXT})"
    rf"\s*\bw/\s*(?P<instructor>{NAME})"
    rf"(?:\s+-\s+(?P<role>{ROLE_SUFFIX}))?"
    rf"\s*(?P<time>{TIME})"
    rf"(?:\s+(?P<tz>{TIMEZONE}))?"
    rf"\s*{DURATION}"
)

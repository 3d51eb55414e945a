"""Extraction entry points.

Contract:
- Input: the flat text of one schedule export (plus its page count when it
  came from a PDF), or the raw PDF bytes.
- Output: `AttendanceRecord`s, deduplicated, most recent first.

Whole-run failures are the only errors that leave this module:
`NoTextExtractedError` when there is (almost) no text at all, and
`EmptyResultError` when there is text but nothing in it looks like a class.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .builder import build
from .errors import EmptyResultError, NoTextExtractedError
from .matcher import match
from .models import AttendanceRecord
from .normalizer import normalize
from .pdf_text import ProgressFn, extract_text_from_bytes


logger = logging.getLogger(__name__)

# Below this many non-blank characters per page the PDF is almost certainly
# a scan.
MIN_CHARS_PER_PAGE = 50


def _has_enough_text(text: str, page_count: Optional[int]) -> bool:
    chars = sum(1 for ch in text if not ch.isspace())
    return chars >= MIN_CHARS_PER_PAGE * max(page_count or 1, 1)


def extract_records(text: str, page_count: Optional[int] = None) -> list[AttendanceRecord]:
    if not _has_enough_text(text or "", page_count):
        raise NoTextExtractedError()

    normalized = normalize(text)
    candidates = match(normalized)
    records = build(candidates)
    logger.debug("%d candidates -> %d records", len(candidates), len(records))

    if not records:
        raise EmptyResultError()
    return records


def extract_records_from_bytes(file_bytes: bytes, on_progress: Optional[ProgressFn] = None) -> list[AttendanceRecord]:
    extracted = extract_text_from_bytes(file_bytes, on_progress=on_progress)
    return extract_records(extracted.text, page_count=extracted.page_count)


def available_years(records: Iterable[AttendanceRecord]) -> list[int]:
    return sorted({r.date.year for r in records}, reverse=True)


def records_for_year(records: Iterable[AttendanceRecord], year: int) -> list[AttendanceRecord]:
    return [r for r in records if r.date.year == year]


if __name__ == "__main__":
    import sys
    from pprint import pprint

    with open(sys.argv[1], "rb") as f:
        data = f.read()
    out = extract_records_from_bytes(data)
    print("records:", len(out), "years:", available_years(out))
    pprint([r.as_dict() for r in out[:10]])

from __future__ import annotations

from datetime import date, time

import pytest

from parsers import pdf_text
from parsers.models import AttendanceRecord, ClassType, MatchCandidate


@pytest.fixture
def make_record():
    def _make(day=date(2025, 12, 13), at=time(8, 0), class_type=ClassType.SIGNATURE50,
              variant="Full Body", instructor="Nikki G.", location="Arsenal Yards"):
        return AttendanceRecord(
            date=day,
            time=at,
            class_type=class_type,
            variant=variant,
            instructor=instructor,
            location=location,
        )

    return _make


@pytest.fixture
def make_candidate():
    def _make(**overrides):
        fields = dict(
            day="13",
            month="December",
            year="2025",
            code="Signature50",
            variant="Full Body",
            region="MA",
            location="Arsenal Yards",
            instructor="Nikki Gagliano - Senior Master",
            time="8:00am",
            duration="50",
            start=0,
            end=120,
            date_offset=0,
            category_offset=27,
        )
        fields.update(overrides)
        return MatchCandidate(**fields)

    return _make


class FakePage:
    def __init__(self, text):
        self._text = text

    def extract_text(self):
        return self._text


class FakePDF:
    def __init__(self, pages):
        self.pages = [FakePage(t) for t in pages]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def fake_pdf(monkeypatch):
    """Make pdfplumber.open return a document with the given page texts."""

    def _install(pages):
        monkeypatch.setattr(pdf_text.pdfplumber, "open", lambda stream: FakePDF(pages))

    return _install


@pytest.fixture
def broken_pdf(monkeypatch):
    def _open(stream):
        raise ValueError("not a PDF")

    monkeypatch.setattr(pdf_text.pdfplumber, "open", _open)

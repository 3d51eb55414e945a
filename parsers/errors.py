"""Failure conditions surfaced by the extraction pipeline.

Only whole-run failures reach the caller; each one carries a stable `code`
and a message that can be shown to the user as-is.
"""

from __future__ import annotations


class RecoverableMatchFailure(ValueError):
    """One candidate failed field validation. Never leaves the builder."""


class InvariantViolation(RuntimeError):
    """A record was constructed in a state the builder should have rejected."""


class ExtractionError(Exception):
    code = "extraction_failed"
    default_message = "Failed to parse the PDF. Please try again."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NoTextExtractedError(ExtractionError):
    code = "no_text"
    default_message = (
        "We couldn't read any text from this PDF. It may be a scanned image; "
        "export the schedule page again with 'Save as PDF'."
    )


class EmptyResultError(ExtractionError):
    code = "no_records"
    default_message = (
        "No classes found in this PDF. Make sure you uploaded the completed "
        "schedule export."
    )


class UnreadableDocumentError(ExtractionError):
    code = "unreadable_document"
    default_message = "This file doesn't look like a readable PDF."


class NoRecordsForYearError(ExtractionError):
    code = "no_records_for_year"

    def __init__(self, year: int):
        self.year = year
        super().__init__(f"No classes found for {year}. Try selecting a different year.")

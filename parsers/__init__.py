"""Schedule-export parsing.

Raw text (or PDF bytes) in, `AttendanceRecord`s out. See `pipeline` for the
entry points and `errors` for the failures a caller has to handle.
"""

from .errors import (
    EmptyResultError,
    ExtractionError,
    NoRecordsForYearError,
    NoTextExtractedError,
    UnreadableDocumentError,
)
from .models import AttendanceRecord, ClassType
from .normalizer import normalize
from .pipeline import available_years, extract_records, extract_records_from_bytes, records_for_year

__all__ = [
    "AttendanceRecord",
    "ClassType",
    "EmptyResultError",
    "ExtractionError",
    "NoRecordsForYearError",
    "NoTextExtractedError",
    "UnreadableDocumentError",
    "available_years",
    "extract_records",
    "extract_records_from_bytes",
    "normalize",
    "records_for_year",
]

"""PDF -> flat text, one document at a time.

This is the only part of the parsers package that touches the binary
document. Pages are read in order with pdfplumber and joined with newlines;
the caller gets the page count too so it can tell an image-only PDF from a
wrong document.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Callable, Optional

import pdfplumber

from .errors import UnreadableDocumentError


logger = logging.getLogger(__name__)

ProgressFn = Callable[[float], None]


@dataclass(frozen=True)
class ExtractedText:
    text: str
    page_count: int


def extract_text_from_bytes(file_bytes: bytes, on_progress: Optional[ProgressFn] = None) -> ExtractedText:
    pages: list[str] = []
    try:
        with pdfplumber.open(io.BytesIO(file_bytes)) as pdf:
            total = len(pdf.pages)
            for i, page in enumerate(pdf.pages, start=1):
                pages.append(page.extract_text() or "")
                if on_progress:
                    on_progress(i / total)
    except Exception as e:
        raise UnreadableDocumentError() from e

    logger.debug("extracted %d pages", len(pages))
    return ExtractedText(text="\n".join(pages), page_count=len(pages))

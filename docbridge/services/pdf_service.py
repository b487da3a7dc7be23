"""PDF text extraction.

Text layer only. A scanned, image-only PDF has no text layer and is reported
as an extraction failure.
"""
from __future__ import annotations

import logging
from typing import List

import PyPDF2

from docbridge.errors import ExtractionError

logger = logging.getLogger(__name__)

NO_TEXT_MESSAGE = "No text could be extracted from this PDF. It may be scanned image-only."


def extract_pdf_text(pdf_path: str) -> str:
    try:
        reader = PyPDF2.PdfReader(pdf_path)
        parts: List[str] = []
        for page in reader.pages:
            parts.append(page.extract_text() or "")
    except Exception as e:
        raise ExtractionError(f"Failed to extract text from PDF: {e}") from e

    text = "\n".join(parts)
    if not text.strip():
        raise ExtractionError(NO_TEXT_MESSAGE)

    logger.debug("Extracted %d characters from %d pages", len(text), len(parts))
    return text


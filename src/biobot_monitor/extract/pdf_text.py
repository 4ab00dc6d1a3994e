from __future__ import annotations

import logging
from pathlib import Path

from pypdf import PdfReader

logger = logging.getLogger(__name__)


def extract_pdf_text(path: str | Path) -> list[str]:
    """Return the text of each page of a PDF, one string per page."""
    reader = PdfReader(str(path))
    pages = [page.extract_text() or "" for page in reader.pages]
    logger.debug("Extracted text from %d pages of %s", len(pages), path)
    return pages

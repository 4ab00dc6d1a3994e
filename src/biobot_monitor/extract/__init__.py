"""Report text and table extraction."""

from .pdf_text import extract_pdf_text
from .table import ParseError, extract_table, extract_table_from_pages, parse_data_line

__all__ = [
    "ParseError",
    "extract_pdf_text",
    "extract_table",
    "extract_table_from_pages",
    "parse_data_line",
]

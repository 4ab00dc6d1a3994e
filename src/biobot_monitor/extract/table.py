"""Recover the Biobot sample table from text extracted out of the report PDF.

Published rows look like::

    12/25/2024   1500   1200   1450   1180   100   120   90   110

Columns are separated by runs of whitespace and their alignment is not
reliable, so values are mapped by position only:

    south copies, north copies, south 7-day avg, north 7-day avg,
    south CI low, south CI high, north CI low, north CI high

Confidence-interval columns are deltas from the central value, not bounds.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Iterable

from biobot_monitor.models import (
    SYSTEM_NORTH,
    SYSTEM_SOUTH,
    ExtractedTable,
    ParsedDataRow,
    SeriesRecord,
)
from biobot_monitor.utils.datetime_utils import parse_sample_date

logger = logging.getLogger(__name__)

FIELD_COUNT = 8

_DATE_PREFIX = re.compile(r"^\s*\d{1,2}/\d{1,2}/\d{4}")
_DATE_TOKEN = re.compile(r"\d{1,2}/\d{1,2}/\d{4}")
_WHITESPACE = re.compile(r"\s+")
# Plain decimals, or commas only in thousands positions. No underscores, nan or inf.
_NUMBER = re.compile(r"[+-]?(?:(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

# (system, copies, 7-day avg, CI low, CI high) as positions in the 8 numeric slots.
_SYSTEM_COLUMNS = (
    (SYSTEM_SOUTH, 0, 2, 4, 5),
    (SYSTEM_NORTH, 1, 3, 6, 7),
)


class ParseError(ValueError):
    """Raised when no data rows can be recovered from the document text."""


def parse_data_line(line: str) -> ParsedDataRow | None:
    parts = _WHITESPACE.split(line.strip())
    if not parts or not _DATE_TOKEN.fullmatch(parts[0]):
        return None

    values: list[float | None] = [None] * FIELD_COUNT
    for index, token in enumerate(parts[1 : FIELD_COUNT + 1]):
        values[index] = _to_number(token)

    return ParsedDataRow(parts[0], *values)


def is_candidate_line(line: str) -> bool:
    return _DATE_PREFIX.match(line) is not None


def extract_table(raw_text: str) -> ExtractedTable:
    dated_rows = []
    for line in raw_text.splitlines():
        if not is_candidate_line(line):
            continue

        row = parse_data_line(line)
        if row is None or row.is_empty():
            continue

        try:
            sample_date = parse_sample_date(row.date)
        except ValueError:
            logger.warning("Skipping row with invalid calendar date: %s", row.date)
            continue
        dated_rows.append((sample_date, row))

    if not dated_rows:
        raise ParseError("No data could be extracted from PDF")

    dated_rows.sort(key=lambda item: item[0])

    per_system: dict[str, list[SeriesRecord]] = {}
    for system, copies_at, avg_at, low_at, high_at in _SYSTEM_COLUMNS:
        records = []
        for sample_date, row in dated_rows:
            values = row.numeric_values()
            if values[copies_at] is None:
                continue
            records.append(
                SeriesRecord(
                    date=sample_date,
                    copies_per_ml=values[copies_at],
                    seven_day_avg=values[avg_at],
                    lower_ci=values[low_at],
                    upper_ci=values[high_at],
                    system=system,
                )
            )
        per_system[system] = records

    combined = [record for records in per_system.values() for record in records]
    combined.sort(key=lambda record: (record.date, record.system))

    logger.info(
        "Extracted %d rows (north=%d south=%d)",
        len(dated_rows),
        len(per_system[SYSTEM_NORTH]),
        len(per_system[SYSTEM_SOUTH]),
    )

    return ExtractedTable(
        per_system=per_system,
        combined=combined,
        rows=[row for _, row in dated_rows],
    )


def extract_table_from_pages(pages: Iterable[str]) -> ExtractedTable:
    return extract_table("\n".join(pages))


def _to_number(token: str) -> float | None:
    if not _NUMBER.fullmatch(token):
        return None
    value = float(token.replace(",", ""))
    if math.isinf(value):
        return None
    return value

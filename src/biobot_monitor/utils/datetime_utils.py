from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from dateutil import parser

SAMPLE_DATE_FORMAT = "%m/%d/%Y"
STATE_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_timestamp(value: datetime | None = None) -> str:
    moment = to_utc(value) if value is not None else datetime.now(timezone.utc)
    return moment.strftime(STATE_TIMESTAMP_FORMAT)


def parse_sample_date(value: str) -> date:
    """Parse a publisher date such as ``12/25/2024`` or ``1/5/2024``."""
    return datetime.strptime(value.strip(), SAMPLE_DATE_FORMAT).date()


def parse_iso_date(value: Any) -> date | None:
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        return parser.isoparse(value).date()

    raise ValueError(f"Unsupported date value: {value!r}")

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

SYSTEM_NORTH = "North"
SYSTEM_SOUTH = "South"
SYSTEMS = (SYSTEM_NORTH, SYSTEM_SOUTH)


@dataclass(slots=True, frozen=True)
class UpdateCheckResult:
    is_new: bool
    sample_date: date | None
    resource_ref: str | None
    resource_url: str | None
    previous_date: date | None
    error: str | None = None

    @classmethod
    def found(
        cls,
        *,
        is_new: bool,
        sample_date: date,
        resource_ref: str,
        resource_url: str,
        previous_date: date | None,
    ) -> UpdateCheckResult:
        return cls(
            is_new=is_new,
            sample_date=sample_date,
            resource_ref=resource_ref,
            resource_url=resource_url,
            previous_date=previous_date,
            error=None,
        )

    @classmethod
    def failed(cls, message: str) -> UpdateCheckResult:
        return cls(
            is_new=False,
            sample_date=None,
            resource_ref=None,
            resource_url=None,
            previous_date=None,
            error=message or "unknown error",
        )

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def sample_date_iso(self) -> str | None:
        return self.sample_date.isoformat() if self.sample_date else None


@dataclass(slots=True)
class ParsedDataRow:
    date: str
    south_copies: float | None = None
    north_copies: float | None = None
    south_7day_avg: float | None = None
    north_7day_avg: float | None = None
    south_low_ci: float | None = None
    south_high_ci: float | None = None
    north_low_ci: float | None = None
    north_high_ci: float | None = None

    def numeric_values(self) -> list[float | None]:
        return [
            self.south_copies,
            self.north_copies,
            self.south_7day_avg,
            self.north_7day_avg,
            self.south_low_ci,
            self.south_high_ci,
            self.north_low_ci,
            self.north_high_ci,
        ]

    def is_empty(self) -> bool:
        return all(value is None for value in self.numeric_values())


@dataclass(slots=True, frozen=True)
class SeriesRecord:
    date: date
    copies_per_ml: float
    seven_day_avg: float | None
    lower_ci: float | None
    upper_ci: float | None
    system: str

    def interval_bounds(self) -> tuple[float, float] | None:
        """Absolute interval from the published CI deltas, if both are known."""
        if self.lower_ci is None or self.upper_ci is None:
            return None
        return (self.copies_per_ml - self.lower_ci, self.copies_per_ml + self.upper_ci)


@dataclass(slots=True)
class ExtractedTable:
    per_system: dict[str, list[SeriesRecord]]
    combined: list[SeriesRecord]
    rows: list[ParsedDataRow] = field(default_factory=list)

    @property
    def north(self) -> list[SeriesRecord]:
        return self.per_system.get(SYSTEM_NORTH, [])

    @property
    def south(self) -> list[SeriesRecord]:
        return self.per_system.get(SYSTEM_SOUTH, [])

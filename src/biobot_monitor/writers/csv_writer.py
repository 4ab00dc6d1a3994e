from __future__ import annotations

import csv
import logging
import shutil
from pathlib import Path
from typing import Iterable

from biobot_monitor.models import ExtractedTable, SeriesRecord

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["date", "copies_per_ml", "seven_day_avg", "lower_ci", "upper_ci", "system"]
MISSING_VALUE = "NA"

NORTH_FILENAME = "north_system.csv"
SOUTH_FILENAME = "south_system.csv"
COMBINED_FILENAME = "combined_data.csv"


def write_series_csv(records: Iterable[SeriesRecord], path: str | Path) -> int:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with target.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(CSV_COLUMNS)
        for record in records:
            writer.writerow(
                [
                    record.date.isoformat(),
                    _format_number(record.copies_per_ml),
                    _format_number(record.seven_day_avg),
                    _format_number(record.lower_ci),
                    _format_number(record.upper_ci),
                    record.system,
                ]
            )
            count += 1

    logger.info("Saved %d rows to %s", count, target.name)
    return count


def save_extracted_table(table: ExtractedTable, output_dir: str | Path) -> dict[str, Path]:
    directory = Path(output_dir)
    paths = {
        "north": directory / NORTH_FILENAME,
        "south": directory / SOUTH_FILENAME,
        "combined": directory / COMBINED_FILENAME,
    }
    write_series_csv(table.north, paths["north"])
    write_series_csv(table.south, paths["south"])
    write_series_csv(table.combined, paths["combined"])
    return paths


def publish_file(source: str | Path, destination_dir: str | Path) -> Path:
    directory = Path(destination_dir)
    directory.mkdir(parents=True, exist_ok=True)
    destination = directory / Path(source).name
    shutil.copyfile(source, destination)
    logger.info("Copied %s to %s", Path(source).name, directory)
    return destination


def _format_number(value: float | None) -> str:
    if value is None:
        return MISSING_VALUE
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))

from __future__ import annotations

from datetime import date

from biobot_monitor.models import SeriesRecord
from biobot_monitor.extract import extract_table
from biobot_monitor.writers import save_extracted_table, write_series_csv


def test_write_series_csv_formats_numbers_and_missing_values(tmp_path) -> None:
    records = [
        SeriesRecord(
            date=date(2024, 12, 25),
            copies_per_ml=1500.0,
            seven_day_avg=1450.5,
            lower_ci=None,
            upper_ci=120.0,
            system="South",
        )
    ]
    path = tmp_path / "out" / "south_system.csv"

    count = write_series_csv(records, path)

    assert count == 1
    assert path.read_text(encoding="utf-8").splitlines() == [
        "date,copies_per_ml,seven_day_avg,lower_ci,upper_ci,system",
        "2024-12-25,1500,1450.5,NA,120,South",
    ]


def test_save_extracted_table_writes_three_files(tmp_path) -> None:
    table = extract_table("12/25/2024 1500 1200\n12/26/2024 1600\n")

    paths = save_extracted_table(table, tmp_path / "processed")

    assert sorted(path.name for path in paths.values()) == [
        "combined_data.csv",
        "north_system.csv",
        "south_system.csv",
    ]
    assert len(paths["north"].read_text(encoding="utf-8").splitlines()) == 2
    assert len(paths["south"].read_text(encoding="utf-8").splitlines()) == 3
    assert len(paths["combined"].read_text(encoding="utf-8").splitlines()) == 4

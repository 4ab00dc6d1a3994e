from __future__ import annotations

from datetime import date

import pytest

from biobot_monitor.extract import ParseError, extract_table, extract_table_from_pages, parse_data_line

REPORT_TEXT = """
MWRA Biobot Data
Sample Date  Southern  Northern  S 7day  N 7day  S Low  S High  N Low  N High
12/27/2024   1600   1300   1500   1250   110   130   95   115
12/25/2024   1500   1200   1450   1180   100   120   90   110
   1/5/2025  1000   900
12/26/2024   abc    1250
1/10/2025
Page 1 of 2
"""


def test_parse_full_line() -> None:
    row = parse_data_line("12/25/2024  1500  1200  1450  1180  100  120  90  110")

    assert row is not None
    assert row.date == "12/25/2024"
    assert row.numeric_values() == [1500, 1200, 1450, 1180, 100, 120, 90, 110]


def test_parse_short_line_pads_trailing_fields() -> None:
    row = parse_data_line("12/25/2024  1500  1200")

    assert row is not None
    assert row.south_copies == 1500
    assert row.north_copies == 1200
    assert row.numeric_values()[2:] == [None] * 6


@pytest.mark.parametrize(
    "line",
    ["", "   ", "not a date 1500", "2024-12-25 1500", "12/25/24 1500 1200", "12/25/2024x 1500"],
)
def test_parse_rejects_lines_without_valid_date(line: str) -> None:
    assert parse_data_line(line) is None


def test_parse_keeps_position_when_token_is_not_numeric() -> None:
    row = parse_data_line("12/25/2024 1500 n/a 1450 1180 100")

    assert row is not None
    assert row.south_copies == 1500
    assert row.north_copies is None
    assert row.south_7day_avg == 1450
    assert row.north_7day_avg == 1180
    assert row.south_low_ci == 100
    assert row.south_high_ci is None


def test_parse_handles_whitespace_decimals_and_extra_tokens() -> None:
    row = parse_data_line("   1/5/2024\t1500.5    1,200.25  3 4 5 6 7 8 9 10  ")

    assert row is not None
    assert row.date == "1/5/2024"
    assert row.south_copies == 1500.5
    assert row.north_copies == 1200.25
    assert row.north_high_ci == 8


def test_extract_table_sorts_and_partitions_by_system() -> None:
    table = extract_table(REPORT_TEXT)

    assert [record.date for record in table.south] == [
        date(2024, 12, 25),
        date(2024, 12, 27),
        date(2025, 1, 5),
    ]
    assert [record.date for record in table.north] == [
        date(2024, 12, 25),
        date(2024, 12, 26),
        date(2024, 12, 27),
        date(2025, 1, 5),
    ]

    first_south = table.south[0]
    assert first_south.copies_per_ml == 1500
    assert first_south.seven_day_avg == 1450
    assert first_south.lower_ci == 100
    assert first_south.upper_ci == 120
    assert first_south.system == "South"

    first_north = table.north[0]
    assert first_north.copies_per_ml == 1200
    assert first_north.seven_day_avg == 1180
    assert first_north.lower_ci == 90
    assert first_north.upper_ci == 110

    assert table.north[-1].seven_day_avg is None
    assert table.north[-1].lower_ci is None


def test_combined_is_sorted_by_date_then_system() -> None:
    table = extract_table(REPORT_TEXT)

    keys = [(record.date, record.system) for record in table.combined]
    assert keys == sorted(keys)
    assert keys[:2] == [(date(2024, 12, 25), "North"), (date(2024, 12, 25), "South")]
    assert len(table.combined) == len(table.north) + len(table.south)


def test_rows_without_any_values_are_excluded() -> None:
    table = extract_table(REPORT_TEXT)

    all_dates = {record.date for record in table.combined}
    assert date(2025, 1, 10) not in all_dates
    assert len(table.rows) == 4


def test_extraction_is_repeatable() -> None:
    assert extract_table(REPORT_TEXT) == extract_table(REPORT_TEXT)


def test_duplicate_dates_pass_through() -> None:
    text = "12/25/2024 1500 1200\n12/25/2024 1550 1210\n"

    table = extract_table(text)

    assert [record.copies_per_ml for record in table.south] == [1500, 1550]
    assert [record.copies_per_ml for record in table.north] == [1200, 1210]
    assert len(table.combined) == 4


def test_ci_values_are_deltas_not_bounds() -> None:
    record = extract_table("12/25/2024 1500 1200 1450 1180 100 120 90 110").south[0]

    assert record.lower_ci == 100
    assert record.interval_bounds() == (1400, 1620)


def test_invalid_calendar_date_is_skipped() -> None:
    table = extract_table("2/30/2024 1 2\n3/1/2024 5 6\n")

    assert [record.date for record in table.south] == [date(2024, 3, 1)]


def test_no_rows_raises_parse_error() -> None:
    with pytest.raises(ParseError):
        extract_table("This has no data lines\n1/10/2025\n")


def test_pages_are_joined_before_parsing() -> None:
    table = extract_table_from_pages(["12/25/2024 1500 1200", "12/26/2024 1600 1300"])

    assert [record.date for record in table.south] == [date(2024, 12, 25), date(2024, 12, 26)]


@pytest.mark.parametrize("token", ["1_500", "1,2,3", "12,34", "nan", "inf", "1e999", "-"])
def test_malformed_number_tokens_are_missing(token: str) -> None:
    row = parse_data_line(f"12/25/2024 {token} 1200")

    assert row is not None
    assert row.south_copies is None
    assert row.north_copies == 1200


def test_thousands_separators_are_accepted() -> None:
    row = parse_data_line("12/25/2024 1,500 12,345,678.5 -3.5 2e3")

    assert row is not None
    assert row.numeric_values()[:4] == [1500, 12345678.5, -3.5, 2000]

"""Output sinks for extracted series."""

from .csv_writer import publish_file, save_extracted_table, write_series_csv

__all__ = ["publish_file", "save_extracted_table", "write_series_csv"]

"""
ETL Package

Reading raw sales into the staging relation and writing cleaned output.
"""
from src.housing_cleaner.etl.loaders import (
    StagingLoader,
    read_raw_csv,
    write_cleaned_csv,
    read_raw_table,
    write_raw_table,
    write_cleaned_table,
)

__all__ = [
    "StagingLoader",
    "read_raw_csv",
    "write_cleaned_csv",
    "read_raw_table",
    "write_raw_table",
    "write_cleaned_table",
]

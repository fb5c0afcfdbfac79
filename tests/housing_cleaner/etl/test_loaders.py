"""
Tests for ETL Loaders

Staging copies, schema checks and CSV / database round trips.
"""
import csv
from datetime import date

import pandas as pd
import pytest
from sqlalchemy import create_engine, inspect

from src.housing_cleaner.db.base import Base, import_all_models
from src.housing_cleaner.errors import SchemaMismatch
from src.housing_cleaner.etl.loaders import (
    StagingLoader,
    read_raw_csv,
    read_raw_table,
    write_cleaned_csv,
    write_cleaned_table,
    write_raw_table,
)
from src.housing_cleaner.models.schema import RAW_COLUMNS


@pytest.fixture(scope="function")
def test_engine(tmp_path):
    """Create a file-backed SQLite database with the raw table."""
    engine = create_engine(f"sqlite:///{tmp_path / 'housing.db'}")
    import_all_models()
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


class TestStagingLoader:
    """Tests for StagingLoader class"""

    def test_load_returns_independent_copy(self, sample_raw_frame):
        staging = StagingLoader().load(sample_raw_frame)

        staging.loc[0, "SalePrice"] = "0"
        staging.drop(index=1, inplace=True)

        assert sample_raw_frame.loc[0, "SalePrice"] == "$240,000"
        assert len(sample_raw_frame) == 5

    def test_load_performs_no_conversion(self, sample_raw_frame):
        staging = StagingLoader().load(sample_raw_frame)

        pd.testing.assert_frame_equal(staging, sample_raw_frame.reset_index(drop=True))

    def test_missing_columns(self, sample_raw_frame):
        raw = sample_raw_frame.drop(columns=["ParcelID", "OwnerAddress"])

        with pytest.raises(SchemaMismatch) as exc_info:
            StagingLoader().load(raw)

        assert exc_info.value.missing_columns == ["ParcelID", "OwnerAddress"]
        assert "ParcelID" in str(exc_info.value)

    def test_null_unique_id(self, record_factory, frame_factory):
        raw = frame_factory([record_factory("1")])
        raw.loc[0, "UniqueID"] = None

        with pytest.raises(SchemaMismatch) as exc_info:
            StagingLoader().load(raw)

        assert "null UniqueID" in str(exc_info.value)

    def test_duplicate_unique_id(self, record_factory, frame_factory):
        raw = frame_factory([record_factory("7"), record_factory("7")])

        with pytest.raises(SchemaMismatch) as exc_info:
            StagingLoader().load(raw)

        assert "not unique" in str(exc_info.value)

    def test_extra_columns_are_carried(self, sample_raw_frame):
        raw = sample_raw_frame.assign(Notes="x")

        staging = StagingLoader().load(raw)

        assert "Notes" in staging.columns


class TestCsvLoaders:
    """Tests for CSV reading and writing"""

    def test_read_raw_csv_keeps_text_and_nulls(self, tmp_path):
        path = tmp_path / "raw.csv"
        row = [
            "0100", "007 00 0 125.00", "SINGLE FAMILY", "", "9-Apr-13", "$240,000",
            "20130412-0036474", "N", "NA", "", "2.30", "GENERAL SERVICES DISTRICT",
            "50000", "168200", "235700", "1986", "3", "3", "0",
        ]
        with open(path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(RAW_COLUMNS)
            writer.writerow(row)

        df = read_raw_csv(path)

        first = df.iloc[0]
        assert first["UniqueID"] == "0100"
        assert first["Acreage"] == "2.30"
        assert first["PropertyAddress"] is None
        assert first["OwnerAddress"] is None
        # "NA" is a value, not a missing marker
        assert first["OwnerName"] == "NA"

    def test_read_raw_csv_rejects_unquoted_commas(self, tmp_path):
        """A row with more fields than the header must not shift columns"""
        path = tmp_path / "raw.csv"
        row = [
            "1", "007 00 0 125.00", "SF", "1 A ST, NASHVILLE", "9-Apr-13", "$240,000",
            "20130412-0036474", "N", "SMITH", "1 A ST, NASHVILLE, TN", "2.30",
            "GENERAL SERVICES DISTRICT", "50000", "168200", "235700", "1986", "3", "3", "0",
        ]
        path.write_text(",".join(RAW_COLUMNS) + "\n" + ",".join(row) + "\n")

        with pytest.raises(SchemaMismatch) as exc_info:
            StagingLoader().load(read_raw_csv(path))

        assert "malformed rows" in str(exc_info.value)

    def test_read_raw_csv_rejects_long_later_row(self, tmp_path):
        path = tmp_path / "raw.csv"
        good = ["2"] + [""] * (len(RAW_COLUMNS) - 1)
        long = ["3"] + [""] * len(RAW_COLUMNS)
        path.write_text("\n".join(",".join(r) for r in (RAW_COLUMNS, good, long)) + "\n")

        with pytest.raises(SchemaMismatch):
            read_raw_csv(path)

    def test_write_cleaned_csv_creates_parents(self, tmp_path, sample_raw_frame):
        path = tmp_path / "processed" / "clean.csv"

        written = write_cleaned_csv(sample_raw_frame, path)

        assert written == path
        assert path.exists()
        assert len(pd.read_csv(path)) == 5


class TestTableLoaders:
    """Tests for database table reading and writing"""

    def test_raw_table_round_trip(self, test_engine, sample_raw_frame):
        written = write_raw_table(sample_raw_frame, test_engine, "housingdata")

        df = read_raw_table(test_engine, "housingdata")

        assert written == 5
        assert len(df) == 5
        assert set(RAW_COLUMNS) <= set(df.columns)
        row = df[df["UniqueID"] == "39432"].iloc[0]
        assert row["PropertyAddress"] is None
        assert row["SalePrice"] == "150000"

    def test_write_cleaned_table(self, test_engine):
        cleaned = pd.DataFrame({
            "UniqueID": ["1", "2"],
            "SaleDate": [date(2013, 4, 9), None],
            "SalePrice": pd.array([240000, None], dtype="Int64"),
        })

        count = write_cleaned_table(cleaned, test_engine, "housingdata_staging1")

        assert count == 2
        assert "housingdata_staging1" in inspect(test_engine).get_table_names()
        back = pd.read_sql_table("housingdata_staging1", test_engine)
        assert back["UniqueID"].tolist() == ["1", "2"]

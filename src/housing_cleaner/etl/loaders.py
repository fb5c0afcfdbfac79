"""
ETL Loaders

Read raw housing sales from CSV files or database tables, create the staging
copy the pipeline mutates, and write the cleaned relation back out.
"""
import warnings
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd
from sqlalchemy.engine import Engine

from src.housing_cleaner.errors import SchemaMismatch
from src.housing_cleaner.models.schema import RAW_COLUMNS, UNIQUE_ID
from src.housing_cleaner.utils.logger import get_logger

logger = get_logger(__name__)


class StagingLoader:
    """
    Create the mutable staging copy of a raw relation.

    The raw relation is validated against the expected schema and never
    modified, so the pipeline can be re-run against the same source.
    """

    def __init__(self, expected_columns: Optional[List[str]] = None):
        self.expected_columns = list(expected_columns or RAW_COLUMNS)

    def validate(self, raw: pd.DataFrame) -> None:
        """
        Check the raw relation's shape.

        Raises:
            SchemaMismatch: If expected columns are missing or UniqueID is
                null or not unique
        """
        missing = [c for c in self.expected_columns if c not in raw.columns]
        if missing:
            raise SchemaMismatch(missing)

        if UNIQUE_ID in self.expected_columns:
            ids = raw[UNIQUE_ID]
            null_ids = int(ids.isna().sum())
            if null_ids:
                raise SchemaMismatch(detail=f"{null_ids} record(s) with null {UNIQUE_ID}")

            duplicated = ids[ids.duplicated()].unique().tolist()
            if duplicated:
                raise SchemaMismatch(
                    detail=f"{UNIQUE_ID} is not unique: {', '.join(map(str, duplicated[:5]))}"
                )

    def load(self, raw: pd.DataFrame) -> pd.DataFrame:
        """
        Validate the raw relation and return an independent staging copy.

        Args:
            raw: Raw relation, all columns text

        Returns:
            Deep copy of raw with a fresh RangeIndex
        """
        self.validate(raw)

        staging = raw.copy(deep=True).reset_index(drop=True)

        extra = [c for c in staging.columns if c not in self.expected_columns]
        logger.info(
            "staging_created",
            records=len(staging),
            columns=len(staging.columns),
            extra_columns=extra or None,
        )
        return staging


def read_raw_csv(path: Union[str, Path]) -> pd.DataFrame:
    """
    Read a raw housing sales file with every column as text.

    Empty cells are read as null; no other values are treated as missing.

    Args:
        path: Path to a comma-delimited file with a header row

    Returns:
        Raw relation

    Raises:
        SchemaMismatch: If any row has more fields than the header
    """
    try:
        with warnings.catch_warnings():
            # pandas only warns when index_col=False truncates a long row
            warnings.simplefilter("error", pd.errors.ParserWarning)
            df = pd.read_csv(
                path,
                dtype=str,
                keep_default_na=False,
                na_values=[""],
                index_col=False,
            )
    except (pd.errors.ParserError, pd.errors.ParserWarning) as e:
        logger.error("raw_csv_malformed", path=str(path), error=str(e))
        raise SchemaMismatch(detail=f"malformed rows in {path}: {e}") from e

    if not isinstance(df.index, pd.RangeIndex):
        raise SchemaMismatch(detail=f"malformed rows in {path}: leading fields read as index")

    df = df.astype(object).where(df.notna(), None)
    logger.info("raw_csv_read", path=str(path), records=len(df))
    return df


def write_cleaned_csv(df: pd.DataFrame, path: Union[str, Path]) -> Path:
    """Write the cleaned relation to a CSV file, creating parent directories."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)
    logger.info("cleaned_csv_written", path=str(output_path), records=len(df))
    return output_path


def read_raw_table(engine: Engine, table_name: str) -> pd.DataFrame:
    """
    Read the raw relation from a database table.

    Args:
        engine: SQLAlchemy engine
        table_name: Raw table name (e.g. "housingdata")

    Returns:
        Raw relation with NULLs as None
    """
    df = pd.read_sql_table(table_name, engine)
    df = df.astype(object).where(df.notna(), None)
    logger.info("raw_table_read", table=table_name, records=len(df))
    return df


def write_cleaned_table(
    df: pd.DataFrame,
    engine: Engine,
    table_name: str,
    if_exists: str = "replace",
) -> int:
    """
    Write the cleaned relation to a database table.

    Args:
        df: Cleaned relation
        engine: SQLAlchemy engine
        table_name: Destination table (e.g. "housingdata_staging1")
        if_exists: pandas to_sql behaviour when the table exists

    Returns:
        Number of rows written
    """
    df.to_sql(table_name, engine, if_exists=if_exists, index=False)
    logger.info("cleaned_table_written", table=table_name, records=len(df))
    return len(df)


def write_raw_table(df: pd.DataFrame, engine: Engine, table_name: str) -> int:
    """
    Append raw records to an existing raw table.

    Every value is written as text; nulls stay NULL.

    Returns:
        Number of rows written
    """
    raw = df.astype(object).where(df.notna(), None)
    raw = raw.apply(lambda col: col.map(lambda v: v if v is None else str(v)))
    raw.to_sql(table_name, engine, if_exists="append", index=False)
    logger.info("raw_table_loaded", table=table_name, records=len(raw))
    return len(raw)

"""
Data Deduplication Pipeline

Removes sale records that repeat the same natural key.
"""
from dataclasses import dataclass
from typing import Any, List, Optional, Set

import pandas as pd

from src.housing_cleaner.models.schema import NATURAL_KEY, UNIQUE_ID, identifier_sort_key
from src.housing_cleaner.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class DeduplicationReport:
    """Outcome of a deduplication pass."""
    records_before: int
    records_removed: int
    duplicate_groups: int

    @property
    def records_after(self) -> int:
        return self.records_before - self.records_removed


class SaleDeduplicator:
    """
    Deduplicates sale records by natural key.

    Records are partitioned by the natural key and ranked within each
    partition by UniqueID. Only the rank-1 record of each partition survives.
    Nulls in key columns group together, as with SQL PARTITION BY.
    """

    def __init__(self, key_columns: Optional[List[str]] = None):
        self.key_columns = list(key_columns or NATURAL_KEY)
        self.mutated_rows: Set[Any] = set()
        logger.info("sale_deduplicator_initialized", key_columns=len(self.key_columns))

    @property
    def records_mutated(self) -> int:
        """Records deleted by the latest pass."""
        return len(self.mutated_rows)

    def rank_duplicates(self, df: pd.DataFrame) -> pd.Series:
        """
        Rank each record within its natural-key partition.

        Args:
            df: Working relation

        Returns:
            1-based rank aligned with df.index
        """
        if df.empty:
            return pd.Series([], index=df.index, dtype="int64")

        sort_keys = dict(zip(df.index, map(identifier_sort_key, df[UNIQUE_ID])))
        order = sorted(sort_keys, key=sort_keys.get)
        ordered = df.loc[order, self.key_columns].astype(object)

        ranks = ordered.groupby(self.key_columns, dropna=False, sort=False).cumcount() + 1
        return ranks.reindex(df.index).astype("int64")

    def count_duplicates(self, df: pd.DataFrame) -> int:
        """Number of records that a deduplication pass would remove."""
        return int((self.rank_duplicates(df) > 1).sum())

    def remove_duplicates(self, df: pd.DataFrame) -> DeduplicationReport:
        """
        Delete every record ranked after the first in its partition.

        The relation is modified in place.

        Args:
            df: Working relation

        Returns:
            DeduplicationReport with counts
        """
        records_before = len(df)
        ranks = self.rank_duplicates(df)
        losers = ranks.index[ranks > 1]

        duplicate_groups = 0
        if len(losers):
            duplicate_groups = (
                df.loc[losers, self.key_columns]
                .astype(object)
                .drop_duplicates()
                .shape[0]
            )

        df.drop(index=losers, inplace=True)
        self.mutated_rows = set(losers)

        report = DeduplicationReport(
            records_before=records_before,
            records_removed=len(losers),
            duplicate_groups=duplicate_groups,
        )

        logger.info(
            "duplicates_removed",
            records_before=report.records_before,
            records_removed=report.records_removed,
            duplicate_groups=report.duplicate_groups,
        )

        return report

"""
Helpers for computing basic data-quality metrics on the sales relation.
"""
from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from src.housing_cleaner.models.schema import NATURAL_KEY, PROPERTY_ADDRESS, SOLD_AS_VACANT
from src.housing_cleaner.pipelines.deduplication import SaleDeduplicator


def compute_cleaning_metrics(df: pd.DataFrame) -> Dict[str, Any]:
    """Return row count, missing addresses, duplicates and SoldAsVacant counts."""
    metrics: Dict[str, Any] = {
        "records": len(df),
        "missing_property_address": None,
        "natural_key_duplicates": None,
        "sold_as_vacant": {},
    }
    if df.empty:
        return metrics

    if PROPERTY_ADDRESS in df.columns:
        metrics["missing_property_address"] = int(df[PROPERTY_ADDRESS].isna().sum())

    if all(c in df.columns for c in NATURAL_KEY):
        metrics["natural_key_duplicates"] = SaleDeduplicator().count_duplicates(df)

    if SOLD_AS_VACANT in df.columns:
        metrics["sold_as_vacant"] = {
            str(k): int(v) for k, v in df[SOLD_AS_VACANT].value_counts().sort_index().items()
        }
    return metrics

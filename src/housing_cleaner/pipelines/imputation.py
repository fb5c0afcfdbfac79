"""
Property Address Imputation

Fills missing property addresses from other sales of the same parcel.
"""
import warnings
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, List, Set, Tuple

import pandas as pd

from src.housing_cleaner.errors import AmbiguousImputation
from src.housing_cleaner.models.schema import (
    PARCEL_ID,
    PROPERTY_ADDRESS,
    UNIQUE_ID,
    identifier_sort_key,
)
from src.housing_cleaner.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ImputationReport:
    """Outcome of an imputation pass."""
    missing_before: int = 0
    addresses_imputed: int = 0
    ambiguous: int = 0
    unresolved: int = 0


def _is_null(value: Any) -> bool:
    return value is None or (not isinstance(value, str) and pd.isna(value))


class AddressImputer:
    """
    Imputes null PropertyAddress values using same-parcel donor records.

    The donor index is built once from the relation before any value is
    filled, so imputed addresses never act as donors. Among several donors
    the one with the lowest UniqueID wins; differing donor addresses raise an
    AmbiguousImputation warning.
    """

    def __init__(self):
        self.mutated_rows: Set[Any] = set()
        logger.info("address_imputer_initialized")

    @property
    def records_mutated(self) -> int:
        """Rows whose address was filled by the latest pass."""
        return len(self.mutated_rows)

    def build_donor_index(self, df: pd.DataFrame) -> Dict[Any, List[Tuple[Any, str]]]:
        """
        Map parcel ID to its (UniqueID, address) donors, lowest UniqueID first.

        Records with a null parcel ID or null address are not donors.
        """
        index: Dict[Any, List[Tuple[Any, str]]] = defaultdict(list)
        for unique_id, parcel_id, address in zip(df[UNIQUE_ID], df[PARCEL_ID], df[PROPERTY_ADDRESS]):
            if _is_null(parcel_id) or _is_null(address):
                continue
            index[parcel_id].append((unique_id, address))

        for donors in index.values():
            donors.sort(key=lambda d: identifier_sort_key(d[0]))
        return dict(index)

    def impute(self, df: pd.DataFrame) -> ImputationReport:
        """
        Fill null property addresses in place.

        Args:
            df: Working relation

        Returns:
            ImputationReport
        """
        report = ImputationReport()
        self.mutated_rows = set()

        missing = df.index[df[PROPERTY_ADDRESS].isna()]
        report.missing_before = len(missing)
        if not len(missing):
            logger.info("no_missing_property_addresses")
            return report

        donor_index = self.build_donor_index(df)
        fills: Dict[Any, str] = {}

        for idx in missing:
            unique_id = df.at[idx, UNIQUE_ID]
            parcel_id = df.at[idx, PARCEL_ID]
            donors = [] if _is_null(parcel_id) else [
                d for d in donor_index.get(parcel_id, []) if d[0] != unique_id
            ]

            if not donors:
                report.unresolved += 1
                continue

            chosen = donors[0][1]
            candidates = {address for _, address in donors}
            if len(candidates) > 1:
                report.ambiguous += 1
                warning = AmbiguousImputation(unique_id, parcel_id, candidates, chosen)
                logger.warning(
                    "ambiguous_imputation",
                    unique_id=unique_id,
                    parcel_id=parcel_id,
                    candidates=len(candidates),
                    chosen=chosen,
                )
                warnings.warn(warning, stacklevel=2)

            fills[idx] = chosen

        if fills:
            df.loc[list(fills), PROPERTY_ADDRESS] = pd.Series(fills, dtype=object)
        report.addresses_imputed = len(fills)
        self.mutated_rows = set(fills)

        logger.info(
            "property_addresses_imputed",
            missing_before=report.missing_before,
            imputed=report.addresses_imputed,
            ambiguous=report.ambiguous,
            unresolved=report.unresolved,
        )

        return report

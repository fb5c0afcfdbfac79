"""
Field Normalization Transformer

Converts the loosely typed text columns of the sales relation into typed
values: sale dates, whole-dollar prices and values, acreage, counts and the
canonical sold-as-vacant flag.
"""
import math
import numbers
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

import pandas as pd

from src.housing_cleaner.errors import ParseError
from src.housing_cleaner.models.schema import (
    ACREAGE,
    COUNT_COLUMNS,
    SALE_DATE,
    SALE_PRICE,
    SOLD_AS_VACANT,
    UNIQUE_ID,
    VALUE_COLUMNS,
)
from src.housing_cleaner.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SALE_DATE_FORMAT = "%d-%b-%y"

SOLD_AS_VACANT_MAP = {"Y": "Yes", "N": "No"}

PARSE_ERROR_POLICIES = ("abort", "nullify")

_DIGITS = re.compile(r"[0-9]+")
_DECIMAL = re.compile(r"[0-9]+(\.[0-9]*)?|\.[0-9]+")
_PRICE_NOISE = re.compile(r"[$,\s]")


def _is_null(value: Any) -> bool:
    return value is None or (not isinstance(value, (str, date)) and pd.isna(value))


def _as_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else str(value).strip()


def _whole_number(value: numbers.Real, column: str) -> int:
    if not math.isfinite(value) or value < 0 or value != int(value):
        raise ParseError(column, value, reason="expected a non-negative whole number")
    return int(value)


def parse_sale_date(value: Any, fmt: str = DEFAULT_SALE_DATE_FORMAT) -> Optional[date]:
    """
    Parse a sale date such as "18-Jan-13".

    Args:
        value: Raw cell value; dates pass through unchanged
        fmt: strptime format

    Returns:
        Calendar date, or None for null/empty cells

    Raises:
        ParseError: If the text does not match fmt
    """
    if _is_null(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = _as_text(value)
    if not text:
        return None
    try:
        return datetime.strptime(text, fmt).date()
    except ValueError as e:
        raise ParseError(SALE_DATE, value, reason=str(e)) from e


def coerce_sale_price(value: Any) -> Optional[int]:
    """
    Convert a sale price such as "$1,200,000" to whole dollars.

    Currency symbols, thousands separators and whitespace are stripped.
    An empty string is null, not zero.

    Raises:
        ParseError: If anything other than digits remains
    """
    if _is_null(value):
        return None
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return _whole_number(value, SALE_PRICE)

    text = _PRICE_NOISE.sub("", str(value))
    if not text:
        return None
    if not _DIGITS.fullmatch(text):
        raise ParseError(SALE_PRICE, value, reason="non-digit characters")
    return int(text)


def coerce_integer(value: Any, column: str) -> Optional[int]:
    """
    Convert a digits-only cell to an integer.

    Separators are not stripped; "1,000" is rejected rather than truncated.

    Raises:
        ParseError: If the cell holds anything but digits
    """
    if _is_null(value):
        return None
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return _whole_number(value, column)

    text = _as_text(value)
    if not text:
        return None
    if not _DIGITS.fullmatch(text):
        raise ParseError(column, value, reason="expected digits only")
    return int(text)


def coerce_acreage(value: Any) -> Optional[float]:
    """
    Convert acreage such as "2.30" to a float.

    Raises:
        ParseError: If the cell is not an unsigned decimal number
    """
    if _is_null(value):
        return None
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        if not math.isfinite(value) or value < 0:
            raise ParseError(ACREAGE, value, reason="expected a non-negative number")
        return float(value)

    text = _as_text(value)
    if not text:
        return None
    if not _DECIMAL.fullmatch(text):
        raise ParseError(ACREAGE, value, reason="expected a decimal number")
    return float(text)


def canonicalize_sold_as_vacant(value: Any) -> Any:
    """Map "Y"/"N" to "Yes"/"No"; every other value is returned unchanged."""
    if _is_null(value):
        return value
    return SOLD_AS_VACANT_MAP.get(value, value)


def _differs(old: Any, new: Any) -> bool:
    if _is_null(old) and _is_null(new):
        return False
    if _is_null(old) or _is_null(new):
        return True
    if isinstance(old, str) != isinstance(new, str):
        return True
    return bool(old != new)


@dataclass
class NormalizationReport:
    """Outcome of a normalization pass."""
    columns_normalized: List[str] = field(default_factory=list)
    cells_changed: Dict[str, int] = field(default_factory=dict)
    cells_nullified: Dict[str, int] = field(default_factory=dict)
    sold_as_vacant_before: Dict[str, int] = field(default_factory=dict)
    sold_as_vacant_after: Dict[str, int] = field(default_factory=dict)

    @property
    def total_nullified(self) -> int:
        return sum(self.cells_nullified.values())


class FieldNormalizer:
    """
    Normalizes column formats of the working relation in place.

    Columns are converted one at a time. How unparseable cells are handled
    depends on on_parse_error:

    - "abort": raise ParseError and stop
    - "nullify": replace the cell with null, log it and continue
    """

    def __init__(self, on_parse_error: str = "abort", sale_date_format: str = DEFAULT_SALE_DATE_FORMAT):
        if on_parse_error not in PARSE_ERROR_POLICIES:
            raise ValueError(
                f"Unknown parse error policy '{on_parse_error}'. "
                f"Valid options: {', '.join(PARSE_ERROR_POLICIES)}"
            )
        self.on_parse_error = on_parse_error
        self.sale_date_format = sale_date_format
        self.mutated_rows: Set[Any] = set()
        logger.info("field_normalizer_initialized", on_parse_error=on_parse_error)

    @property
    def records_mutated(self) -> int:
        """Rows with at least one cell rewritten so far."""
        return len(self.mutated_rows)

    def column_rules(self) -> Dict[str, Tuple[Callable[[Any], Any], Optional[str]]]:
        """Converter and resulting pandas dtype per column, in processing order."""
        rules: Dict[str, Tuple[Callable[[Any], Any], Optional[str]]] = {
            SALE_DATE: (lambda v: parse_sale_date(v, self.sale_date_format), None),
            SALE_PRICE: (coerce_sale_price, "Int64"),
        }
        for column in VALUE_COLUMNS:
            rules[column] = (lambda v, c=column: coerce_integer(v, c), "Int64")
        rules[ACREAGE] = (coerce_acreage, "Float64")
        for column in COUNT_COLUMNS:
            rules[column] = (lambda v, c=column: coerce_integer(v, c), "Int64")
        rules[SOLD_AS_VACANT] = (canonicalize_sold_as_vacant, None)
        return rules

    def normalize(self, df: pd.DataFrame) -> NormalizationReport:
        """
        Normalize every known column of the working relation.

        Args:
            df: Working relation, modified in place

        Returns:
            NormalizationReport

        Raises:
            ParseError: Under the "abort" policy, on the first bad cell
        """
        report = NormalizationReport()
        self.mutated_rows = set()

        if SOLD_AS_VACANT in df.columns:
            report.sold_as_vacant_before = self._value_counts(df[SOLD_AS_VACANT])

        for column, (convert, dtype) in self.column_rules().items():
            if column not in df.columns:
                logger.warning("column_not_present", column=column)
                continue
            self._normalize_column(df, column, convert, dtype, report)

        if SOLD_AS_VACANT in df.columns:
            report.sold_as_vacant_after = self._value_counts(df[SOLD_AS_VACANT])

        logger.info(
            "fields_normalized",
            columns=len(report.columns_normalized),
            records_mutated=len(self.mutated_rows),
            cells_nullified=report.total_nullified,
        )
        return report

    def _normalize_column(
        self,
        df: pd.DataFrame,
        column: str,
        convert: Callable[[Any], Any],
        dtype: Optional[str],
        report: NormalizationReport,
    ) -> None:
        ids = df[UNIQUE_ID] if UNIQUE_ID in df.columns else pd.Series(None, index=df.index)
        converted = []
        changed_rows = []
        nullified = 0

        for idx, value in df[column].items():
            try:
                new_value = convert(value)
            except ParseError as e:
                unique_id = ids[idx]
                if self.on_parse_error == "abort":
                    logger.error(
                        "parse_failed",
                        column=column,
                        value=str(value)[:50],
                        unique_id=unique_id,
                    )
                    raise ParseError(column, value, unique_id=unique_id, reason=e.reason) from None
                logger.warning(
                    "cell_nullified",
                    column=column,
                    value=str(value)[:50],
                    unique_id=unique_id,
                )
                new_value = None
                nullified += 1

            if _differs(value, new_value):
                changed_rows.append(idx)
            converted.append(new_value)

        if dtype:
            df[column] = pd.array(converted, dtype=dtype)
        else:
            df[column] = pd.Series(converted, index=df.index, dtype=object)

        report.columns_normalized.append(column)
        self.mutated_rows.update(changed_rows)
        report.cells_changed[column] = len(changed_rows)
        if nullified:
            report.cells_nullified[column] = nullified

        logger.debug("column_normalized", column=column, changed=len(changed_rows), nullified=nullified)

    @staticmethod
    def _value_counts(series: pd.Series) -> Dict[str, int]:
        counts = series.value_counts(dropna=True)
        return {str(k): int(v) for k, v in counts.items()}

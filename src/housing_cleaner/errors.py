"""
Cleaning Errors

Exception and warning types raised by the cleaning pipeline stages.
"""
from typing import Any, Iterable, Optional


class CleaningError(Exception):
    """Base class for all cleaning pipeline errors."""


class SchemaMismatch(CleaningError):
    """
    Raised when the raw relation does not have the expected shape.

    Attributes:
        missing_columns: Expected columns absent from the input
        detail: Additional description (e.g. identifier problems)
    """

    def __init__(self, missing_columns: Iterable[str] = (), detail: Optional[str] = None):
        self.missing_columns = list(missing_columns)
        self.detail = detail
        parts = []
        if self.missing_columns:
            parts.append(f"missing columns: {', '.join(self.missing_columns)}")
        if detail:
            parts.append(detail)
        super().__init__("; ".join(parts) or "schema mismatch")


class ParseError(CleaningError):
    """
    Raised when a cell's text does not match the format expected for its column.

    Attributes:
        column: Column being normalized
        value: Offending raw value
        unique_id: Identifier of the offending record, when known
    """

    def __init__(self, column: str, value: Any, unique_id: Optional[str] = None, reason: Optional[str] = None):
        self.column = column
        self.value = value
        self.unique_id = unique_id
        self.reason = reason
        message = f"cannot parse {column}={value!r}"
        if unique_id is not None:
            message += f" (UniqueID={unique_id})"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class StageFailed(CleaningError):
    """
    Raised by the pipeline when one of its stages fails.

    Attributes:
        stage: Name of the failing stage
        records_mutated: Working-relation rows already rewritten or removed
        cause: The original exception
    """

    def __init__(self, stage: str, records_mutated: int, cause: BaseException):
        self.stage = stage
        self.records_mutated = records_mutated
        self.cause = cause
        super().__init__(
            f"stage '{stage}' failed after mutating {records_mutated} record(s): {cause}"
        )


class AmbiguousImputation(UserWarning):
    """
    Several donor records with differing addresses existed for one imputation.

    Informational only; the lowest donor identifier is used.
    """

    def __init__(self, unique_id: str, parcel_id: str, candidates: Iterable[str], chosen: str):
        self.unique_id = unique_id
        self.parcel_id = parcel_id
        self.candidates = sorted(set(candidates))
        self.chosen = chosen
        super().__init__(
            f"UniqueID={unique_id} parcel={parcel_id}: {len(self.candidates)} candidate addresses, "
            f"chose {chosen!r}"
        )

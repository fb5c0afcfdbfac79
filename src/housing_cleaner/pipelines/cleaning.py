"""
Housing Sales Cleaning Pipeline

Runs the cleaning stages in order over a staging copy of the raw relation:
load, deduplicate, normalize, impute, parse addresses, prune columns.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set

import pandas as pd

from config.settings import Settings, settings as default_settings
from src.housing_cleaner.errors import StageFailed
from src.housing_cleaner.etl.loaders import StagingLoader
from src.housing_cleaner.models.sale_record import CleanedSaleRecord
from src.housing_cleaner.models.schema import OWNER_ADDRESS, PROPERTY_ADDRESS
from src.housing_cleaner.pipelines.deduplication import DeduplicationReport, SaleDeduplicator
from src.housing_cleaner.pipelines.imputation import AddressImputer, ImputationReport
from src.housing_cleaner.transformers.address_parser import AddressParseReport, AddressParser
from src.housing_cleaner.transformers.field_normalizer import FieldNormalizer, NormalizationReport
from src.housing_cleaner.utils.logger import bind_stage, clear_stage, get_logger

logger = get_logger(__name__)


@dataclass
class CleaningReport:
    """Summary of a cleaning run."""
    raw_records: int = 0
    cleaned_records: int = 0
    stages_completed: List[str] = field(default_factory=list)
    deduplication: Optional[DeduplicationReport] = None
    normalization: Optional[NormalizationReport] = None
    imputation: Optional[ImputationReport] = None
    address_parsing: Optional[AddressParseReport] = None
    columns_dropped: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CleaningResult:
    """Cleaned relation and the report describing how it was produced."""
    data: pd.DataFrame
    report: CleaningReport


class CleaningPipeline:
    """
    One-shot cleaning pipeline over a raw housing sales relation.

    Each stage finishes its pass over the whole relation before the next one
    starts. A failing stage aborts the run with StageFailed, which names the
    stage and how many working-relation records had already been mutated.
    The raw relation passed to run() is never modified; after a failure the
    partially cleaned relation remains available as `working`.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        loader: Optional[StagingLoader] = None,
        deduplicator: Optional[SaleDeduplicator] = None,
        normalizer: Optional[FieldNormalizer] = None,
        imputer: Optional[AddressImputer] = None,
        parser: Optional[AddressParser] = None,
    ):
        self.config = config or default_settings
        self.loader = loader or StagingLoader()
        self.deduplicator = deduplicator or SaleDeduplicator()
        self.normalizer = normalizer or FieldNormalizer(
            on_parse_error=self.config.on_parse_error,
            sale_date_format=self.config.sale_date_format,
        )
        self.imputer = imputer or AddressImputer()
        self.parser = parser or AddressParser()
        self._touched_rows: Set[Any] = set()
        self.working: Optional[pd.DataFrame] = None

    def run(self, raw: pd.DataFrame) -> CleaningResult:
        """
        Clean a raw relation.

        Args:
            raw: Raw relation with the expected text columns

        Returns:
            CleaningResult with the cleaned DataFrame and report

        Raises:
            StageFailed: If any stage fails
        """
        report = CleaningReport(raw_records=len(raw))
        self._touched_rows = set()
        self.working = None
        logger.info("cleaning_started", raw_records=len(raw))

        staging = self._run_stage("load", lambda: self.loader.load(raw))
        self.working = staging
        report.stages_completed.append("load")

        report.deduplication = self._run_stage(
            "deduplicate",
            lambda: self.deduplicator.remove_duplicates(staging),
            self.deduplicator,
        )
        report.stages_completed.append("deduplicate")

        report.normalization = self._run_stage(
            "normalize",
            lambda: self.normalizer.normalize(staging),
            self.normalizer,
        )
        report.stages_completed.append("normalize")

        # Imputation must precede parsing so filled addresses are split too
        report.imputation = self._run_stage(
            "impute",
            lambda: self.imputer.impute(staging),
            self.imputer,
        )
        report.stages_completed.append("impute")

        report.address_parsing = self._run_stage(
            "parse_addresses",
            lambda: self.parser.parse(staging),
            self.parser,
        )
        report.stages_completed.append("parse_addresses")

        if self.config.drop_source_addresses:
            report.columns_dropped = self._run_stage("prune_columns", lambda: self.prune_columns(staging))
            report.stages_completed.append("prune_columns")

        if self.config.validate_output:
            self._run_stage("validate", lambda: self.validate(staging))
            report.stages_completed.append("validate")

        report.cleaned_records = len(staging)
        logger.info(
            "cleaning_complete",
            raw_records=report.raw_records,
            cleaned_records=report.cleaned_records,
            stages=report.stages_completed,
        )
        return CleaningResult(data=staging, report=report)

    @property
    def records_mutated(self) -> int:
        """Working-relation rows rewritten or removed by the completed stages."""
        return len(self._touched_rows)

    def _run_stage(self, stage: str, action: Callable[[], Any], worker: Any = None) -> Any:
        bind_stage(stage)
        try:
            result = action()
        except Exception as e:
            touched = self._touched_rows | (worker.mutated_rows if worker is not None else set())
            logger.error(
                "stage_failed",
                error=str(e),
                error_type=type(e).__name__,
                records_mutated=len(touched),
            )
            raise StageFailed(stage, len(touched), e) from e
        finally:
            clear_stage()

        if worker is not None:
            self._touched_rows |= worker.mutated_rows
        return result

    @staticmethod
    def prune_columns(df: pd.DataFrame) -> List[str]:
        """Drop the source address columns replaced by their split subfields."""
        dropped = [c for c in (OWNER_ADDRESS, PROPERTY_ADDRESS) if c in df.columns]
        df.drop(columns=dropped, inplace=True)
        logger.info("columns_dropped", columns=dropped)
        return dropped

    @staticmethod
    def validate(df: pd.DataFrame) -> int:
        """
        Validate every cleaned row against CleanedSaleRecord.

        Returns:
            Number of rows validated

        Raises:
            pydantic.ValidationError: On the first invalid row
        """
        count = 0
        for row in df.to_dict(orient="records"):
            CleanedSaleRecord.from_row(row)
            count += 1
        logger.info("cleaned_rows_validated", count=count)
        return count

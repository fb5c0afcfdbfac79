"""
Pipelines Package

Record-level cleaning stages and the pipeline that runs them:
- Deduplication: natural-key duplicate removal
- Imputation: same-parcel property address filling
- Cleaning: end-to-end orchestration
"""
from src.housing_cleaner.pipelines.deduplication import SaleDeduplicator, DeduplicationReport
from src.housing_cleaner.pipelines.imputation import AddressImputer, ImputationReport
from src.housing_cleaner.pipelines.cleaning import CleaningPipeline, CleaningReport, CleaningResult

__all__ = [
    "SaleDeduplicator",
    "DeduplicationReport",
    "AddressImputer",
    "ImputationReport",
    "CleaningPipeline",
    "CleaningReport",
    "CleaningResult",
]

"""
CLI script to clean a raw housing sales file or table.

Examples:
    python scripts/run_cleaning.py --input data/nashville_housing.csv
    python scripts/run_cleaning.py --from-table --to-table --on-parse-error nullify
"""
import argparse
import sys
from pathlib import Path

# Add parent directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import settings
from src.housing_cleaner.db.session import get_engine
from src.housing_cleaner.errors import CleaningError, StageFailed
from src.housing_cleaner.etl.loaders import (
    read_raw_csv,
    read_raw_table,
    write_cleaned_csv,
    write_cleaned_table,
)
from src.housing_cleaner.monitoring.data_quality import compute_cleaning_metrics
from src.housing_cleaner.pipelines.cleaning import CleaningPipeline
from src.housing_cleaner.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Clean raw housing sale records")
    parser.add_argument("--input", type=Path, default=Path(settings.raw_csv_path), help="Raw CSV file")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(settings.cleaned_csv_path) if settings.cleaned_csv_path else None,
        help="Where to write the cleaned CSV",
    )
    parser.add_argument("--from-table", action="store_true", help="Read the raw relation from the database")
    parser.add_argument("--to-table", action="store_true", help="Write the cleaned relation to the database")
    parser.add_argument(
        "--on-parse-error",
        choices=["abort", "nullify"],
        default=settings.on_parse_error,
        help="Abort the run or null the cell when a value cannot be parsed",
    )
    parser.add_argument(
        "--keep-source-addresses",
        action="store_true",
        help="Keep PropertyAddress and OwnerAddress next to their split columns",
    )
    parser.add_argument("--validate", action="store_true", help="Validate every cleaned row")
    return parser.parse_args(argv)


def print_metrics(title: str, metrics: dict) -> None:
    print(f"\n{'='*60}")
    print(title)
    print(f"{'='*60}")
    print(f"Records:                  {metrics['records']:,}")
    if metrics["missing_property_address"] is not None:
        print(f"Missing PropertyAddress:  {metrics['missing_property_address']:,}")
    if metrics["natural_key_duplicates"] is not None:
        print(f"Natural-key duplicates:   {metrics['natural_key_duplicates']:,}")
    for value, count in metrics["sold_as_vacant"].items():
        print(f"SoldAsVacant {value!r}: {count:,}")


def main(argv=None) -> int:
    """Run the cleaning pipeline and print before/after summaries."""
    args = parse_args(argv)
    setup_logging()

    config = settings.model_copy(update={
        "on_parse_error": args.on_parse_error,
        "drop_source_addresses": not args.keep_source_addresses,
        "validate_output": args.validate or settings.validate_output,
    })

    try:
        if args.from_table:
            raw = read_raw_table(get_engine(), config.raw_table_name)
        else:
            raw = read_raw_csv(args.input)
    except (OSError, ValueError, CleaningError) as e:
        logger.error("raw_read_failed", error=str(e))
        print(f"Could not read raw data: {e}")
        return 1

    print_metrics("RAW DATA", compute_cleaning_metrics(raw))

    pipeline = CleaningPipeline(config=config)
    try:
        result = pipeline.run(raw)
    except StageFailed as e:
        print(f"\nCleaning failed in stage '{e.stage}' after mutating {e.records_mutated:,} record(s)")
        print(f"Cause: {e.cause}")
        return 1
    except CleaningError as e:
        print(f"\nCleaning failed: {e}")
        return 1

    report = result.report
    print_metrics("CLEANED DATA", compute_cleaning_metrics(result.data))
    print(f"\nDuplicates removed:   {report.deduplication.records_removed:,}")
    print(f"Addresses imputed:    {report.imputation.addresses_imputed:,}")
    print(f"Ambiguous imputation: {report.imputation.ambiguous:,}")
    print(f"Cells nullified:      {report.normalization.total_nullified:,}")

    if args.output:
        write_cleaned_csv(result.data, args.output)
        print(f"\nCleaned CSV written to {args.output}")
    if args.to_table:
        write_cleaned_table(result.data, get_engine(), config.staging_table_name)
        print(f"Cleaned table written to {config.staging_table_name}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Create the raw housing sales table and bulk load a CSV file into it.
"""
import argparse
import sys
from pathlib import Path

# Add parent directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import func, select

from config.settings import settings
from src.housing_cleaner.db.models import RawHousingSale
from src.housing_cleaner.db.session import create_all_tables, get_db_session, get_engine
from src.housing_cleaner.etl.loaders import read_raw_csv, write_raw_table
from src.housing_cleaner.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def main():
    """Create tables, then optionally load the raw CSV."""
    parser = argparse.ArgumentParser(description="Create and load the raw housing sales table")
    parser.add_argument("--csv", type=Path, default=None, help="Raw CSV to load into the table")
    args = parser.parse_args()

    setup_logging()
    engine = get_engine()

    logger.info("creating_tables", database_url=settings.database_url)
    create_all_tables(engine)

    if args.csv:
        raw = read_raw_csv(args.csv)
        write_raw_table(raw, engine, RawHousingSale.__tablename__)

    with get_db_session(engine) as session:
        count = session.scalar(select(func.count()).select_from(RawHousingSale))

    print(f"\n{'='*60}")
    print(f"Table {RawHousingSale.__tablename__}: {count:,} rows")
    print(f"{'='*60}\n")


if __name__ == "__main__":
    main()

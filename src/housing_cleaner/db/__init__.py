"""
Database Package

Raw table definition and connection management.
"""
from src.housing_cleaner.db.base import Base
from src.housing_cleaner.db.models import RawHousingSale
from src.housing_cleaner.db.session import (
    create_db_engine,
    get_engine,
    get_db_session,
    create_all_tables,
)

__all__ = [
    "Base",
    "RawHousingSale",
    "create_db_engine",
    "get_engine",
    "get_db_session",
    "create_all_tables",
]

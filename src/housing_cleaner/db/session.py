"""
Database Session Management

Engine and session factories for the housing sales database.
"""
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from config.settings import settings
from src.housing_cleaner.utils.logger import get_logger

logger = get_logger(__name__)


def create_db_engine(database_url: Optional[str] = None) -> Engine:
    """
    Create a database engine.

    Args:
        database_url: SQLAlchemy URL; defaults to settings.database_url

    Returns:
        SQLAlchemy engine
    """
    url = make_url(database_url or settings.database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        url,
        pool_pre_ping=True,  # Verify connections before using
        echo=settings.database_echo,
    )

    @event.listens_for(engine, "connect")
    def receive_connect(dbapi_conn, connection_record):
        logger.debug("database_connection_established", dialect=engine.name)

    return engine


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Engine for settings.database_url, created on first use."""
    return create_db_engine()


@contextmanager
def get_db_session(engine: Optional[Engine] = None) -> Generator[Session, None, None]:
    """
    Get database session with automatic commit and rollback.

    Usage:
        with get_db_session() as session:
            session.add(record)

    Yields:
        Database session

    Raises:
        Exception: Re-raises any exception after rollback
    """
    factory = sessionmaker(bind=engine or get_engine(), autoflush=False, expire_on_commit=False)
    session = factory()
    try:
        yield session
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error(
            "database_session_rollback",
            error=str(e),
            error_type=type(e).__name__
        )
        raise
    finally:
        session.close()


def create_all_tables(engine: Optional[Engine] = None) -> None:
    """
    Create the raw housing sales table if it does not exist.
    """
    from src.housing_cleaner.db.base import Base, import_all_models

    import_all_models()
    Base.metadata.create_all(bind=engine or get_engine())
    logger.info("database_tables_created")

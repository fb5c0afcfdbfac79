"""
SQLAlchemy Base

Declarative base for the housing sales tables.
"""
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all database models.
    """


def import_all_models():
    """
    Import all models to register them with SQLAlchemy Base.

    Call before create_all() so every table is known to the metadata.
    """
    from src.housing_cleaner.db import models  # noqa: F401

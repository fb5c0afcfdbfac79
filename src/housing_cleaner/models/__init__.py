"""
Models Package

Column schema and the cleaned sale record model.
"""
from src.housing_cleaner.models.sale_record import CleanedSaleRecord
from src.housing_cleaner.models import schema

__all__ = ["CleanedSaleRecord", "schema"]

"""
Transformers Package

Column-level conversions: field normalization and address splitting.
"""
from src.housing_cleaner.transformers.field_normalizer import FieldNormalizer, NormalizationReport
from src.housing_cleaner.transformers.address_parser import (
    AddressParser,
    split_owner_address,
    split_property_address,
)

__all__ = [
    "FieldNormalizer",
    "NormalizationReport",
    "AddressParser",
    "split_owner_address",
    "split_property_address",
]

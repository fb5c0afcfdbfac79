"""
Housing Sales Cleaner - Core Package

One-shot cleaning of property sale records: deduplication, field
normalization, address imputation and address parsing.
"""

__version__ = "0.1.0"

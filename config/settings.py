"""
Configuration Settings

Centralized configuration management using Pydantic and environment variables.
"""
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Values can be overridden in a .env file at the project root.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Database settings
    database_url: str = "sqlite:///data/housing.db"
    database_echo: bool = False  # Set to True for SQL query logging
    raw_table_name: str = "housingdata"
    staging_table_name: str = "housingdata_staging1"

    # Data file paths
    raw_csv_path: str = "data/nashville_housing.csv"
    cleaned_csv_path: Optional[str] = "data/processed/nashville_housing_clean.csv"

    # Cleaning settings
    sale_date_format: str = "%d-%b-%y"
    on_parse_error: Literal["abort", "nullify"] = "abort"
    drop_source_addresses: bool = True
    validate_output: bool = False

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "json"

    # Application settings
    environment: str = "development"


# Singleton instance
settings = Settings()

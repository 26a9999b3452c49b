"""
Configuration Management for Split Calculator

Uses pydantic-settings for type-safe configuration from environment variables.
Every variable is prefixed with SPLITCALC_, e.g. SPLITCALC_CURRENCY_SYMBOL.

DESIGN DECISION: All configuration is centralized here.
Nothing in the calculator needs credentials, so every field has a default
and the app runs without a .env file.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from splitcalc.models.ledger import RemovalPolicy


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPLITCALC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Export
    export_filename: str = Field(
        default="split_calculator.csv",
        min_length=1,
        description="File name suggested to the caller for CSV downloads"
    )
    sharer_separator: str = Field(
        default=", ",
        description="Separator placed between sharer names in the export"
    )

    # Display
    currency_symbol: str = Field(
        default="$",
        description="Symbol prefixed to displayed amounts"
    )
    display_precision: int = Field(
        default=2,
        ge=0,
        le=6,
        description="Decimal places used when showing amounts"
    )

    # Ledger behaviour
    person_removal_policy: RemovalPolicy = Field(
        default=RemovalPolicy.STRIP,
        description="Cascade applied to items when a person is removed"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum level for the structured log"
    )
    log_format: str = Field(
        default="json",
        pattern="^(json|console)$",
        description="Render log lines as JSON or for a terminal"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept 'info' as well as 'INFO'."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> AppSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return AppSettings()

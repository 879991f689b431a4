"""
Configuration Management for Merchant Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every setting has a default, so the dashboard starts with no .env at all;
environment variables only tune behaviour (log level, merchant defaults,
spreadsheet sheet names and date formats).
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ledger.models.reports import DateWindow


class MerchantSettings(BaseSettings):
    """Defaults for the (single) merchant that owns every transaction."""

    model_config = SettingsConfigDict(
        env_prefix="MERCHANT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_id: int = Field(
        default=1,
        ge=1,
        description="Merchant id used for new entries and as import fallback"
    )
    default_name: str = Field(
        default="Loja Principal",
        min_length=1,
        description="Merchant display name used for new entries and as import fallback"
    )


class SpreadsheetSettings(BaseSettings):
    """Spreadsheet import/export configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SPREADSHEET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sheet names within the exported workbooks
    transactions_sheet_name: str = Field(
        default="Transactions",
        description="Name of the sheet holding exported transactions"
    )
    chart_of_accounts_sheet_name: str = Field(
        default="Plano de Contas",
        description="Name of the sheet holding the chart of accounts reference"
    )

    date_formats: str = Field(
        default="%d-%m-%Y,%d/%m/%Y",
        description="Comma-separated strptime formats tried in order on import"
    )
    export_date_format: str = Field(
        default="%d-%m-%Y",
        description="strftime format used for the date column on export"
    )

    @property
    def date_formats_list(self) -> list[str]:
        """Get import date formats as a list, in fallback order."""
        return [fmt.strip() for fmt in self.date_formats.split(",") if fmt.strip()]


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Standard logging level name"
    )
    log_json: bool = Field(
        default=True,
        description="Render log lines as JSON (False renders for the console)"
    )

    # Display
    currency_symbol: str = Field(
        default="R$",
        description="Currency symbol for headline figures"
    )
    default_window: DateWindow = Field(
        default=DateWindow.LAST_MONTH,
        description="Initial window of the expense, revenue and net income charts"
    )
    seed_sample_data: bool = Field(
        default=True,
        description="Seed the store with sample transactions on start"
    )

    # File upload limits
    max_upload_size_mb: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Maximum spreadsheet upload size in MB"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept level names the logging module knows about."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def max_upload_size_bytes(self) -> int:
        """Get max upload size in bytes."""
        return self.max_upload_size_mb * 1024 * 1024


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def app(self) -> AppSettings:
        return AppSettings()

    @property
    def merchant(self) -> MerchantSettings:
        return MerchantSettings()

    @property
    def spreadsheet(self) -> SpreadsheetSettings:
        return SpreadsheetSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    "<setting_name>_error" entry for every section that failed to load.
    """
    results = {}

    settings = get_settings()

    for name in ("app", "merchant", "spreadsheet"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results

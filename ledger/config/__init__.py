"""Configuration package."""

from ledger.config.settings import (
    AppSettings,
    MerchantSettings,
    Settings,
    SpreadsheetSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "MerchantSettings",
    "Settings",
    "SpreadsheetSettings",
    "get_settings",
    "validate_all_settings",
]

"""Configuration package."""

from cashapp.config.settings import CashAppSettings, get_settings

__all__ = [
    "CashAppSettings",
    "get_settings",
]

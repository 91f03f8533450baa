"""
Configuration Management for CashApp

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every setting has a default, so the app runs with no configuration at all.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cashapp.models.item import BUSINESS_ITEMS_KEY, PRIVATE_ITEMS_KEY, Collection


class CashAppSettings(BaseSettings):
    """
    Main application settings.
    
    Loads configuration from CASHAPP_* environment variables and .env file.
    """
    
    model_config = SettingsConfigDict(
        env_prefix="CASHAPP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    # Storage
    storage_dir: Path = Field(
        default=Path("~/.cashapp"),
        validate_default=True,
        description="Directory holding the persisted expense lists"
    )
    private_items_key: str = Field(
        default=PRIVATE_ITEMS_KEY,
        min_length=1,
        description="Storage key for the private list"
    )
    business_items_key: str = Field(
        default=BUSINESS_ITEMS_KEY,
        min_length=1,
        description="Storage key for the business list"
    )
    write_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts per write before the write is reported as failed"
    )
    
    # Error policy
    strict_persistence: bool = Field(
        default=False,
        description="Raise on write failures instead of reporting them"
    )
    
    # Display
    currency_code: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="ISO currency code used when showing prices"
    )
    
    @field_validator('storage_dir')
    @classmethod
    def expand_storage_dir(cls, v: Path) -> Path:
        return v.expanduser()
    
    @field_validator('currency_code')
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()
    
    def key_for(self, collection: Collection) -> str:
        """Storage key configured for a collection."""
        if collection is Collection.PRIVATE:
            return self.private_items_key
        return self.business_items_key


@lru_cache()
def get_settings() -> CashAppSettings:
    """
    Get application settings (cached).
    
    Call get_settings.cache_clear() to reload if needed.
    """
    return CashAppSettings()

"""
Application Configuration

Uses pydantic-settings for environment variable loading with validation.
All compiler tunables are centralized here.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Compiler settings loaded from environment variables.

    Environment variables can be set directly or via .env file,
    e.g. ENTITYFORMS_DEFAULT_SORT_ORDER=500.
    """

    model_config = SettingsConfigDict(
        env_prefix="ENTITYFORMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Grouping
    # ==========================================================================
    default_fieldset_id: str = Field(
        default="general",
        description="Fieldset id for fields without an explicit group"
    )

    default_fieldset_label: str = Field(
        default="General",
        description="Display label of the default fieldset"
    )

    default_sort_order: int = Field(
        default=1000,
        description="Sort order assigned to fields without x-sort-order (sorts last)"
    )

    # ==========================================================================
    # Descriptor traversal
    # ==========================================================================
    max_unwrap_depth: int = Field(
        default=10,
        ge=1,
        description="Maximum wrapper layers stripped before traversal gives up"
    )

    # ==========================================================================
    # Field presentation
    # ==========================================================================
    long_text_threshold: int = Field(
        default=255,
        description="String maxLength above which a textarea editor is used"
    )

    full_width_col_span: int = Field(
        default=12,
        description="Grid column span used for long-text editors"
    )

    default_currency: str = Field(
        default="USD",
        description="Currency code for currency fields without x-currency"
    )

    # ==========================================================================
    # Logging
    # ==========================================================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level applied by configure_logging()"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()

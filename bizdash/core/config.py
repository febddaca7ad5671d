"""
Settings and environment management module for the dashboard backend.

This module provides centralized configuration management using pydantic-settings,
which loads settings from environment variables and .env files.

Key Features:
- Environment variable validation and type coercion
- Sensible defaults for development (no variable is required)
- Singleton pattern via @lru_cache for efficient access

Environment Variables:
- APP_NAME: API title (default: Business Dashboard API)
- LOG_LEVEL: Root logging level (default: INFO)
- CORS_ORIGINS: JSON list of allowed browser origins

Derivation Defaults:
- heatmap_saturation_count: 5 (client count at which a heatmap cell is fully intense)
- milestone_due_soon_days: 3 (days before due date a milestone is "due soon")
- overdue_high_priority_days: 7 (days late above which an overdue alert is high)
- overdue_medium_priority_days: 3 (days late above which an overdue alert is medium)

Usage:
    from bizdash.core.config import get_settings

    settings = get_settings()
    saturation = settings.heatmap_saturation_count
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Title reported by the API.
        app_version: Version reported by the API.
        log_level: Logging level name for logging.basicConfig.
        cors_origins: Browser origins allowed to call the API.
        heatmap_saturation_count: Client count mapped to intensity 1.0.
        milestone_due_soon_days: Window for the due_soon milestone state.
        overdue_high_priority_days: Days late for a high priority overdue alert.
        overdue_medium_priority_days: Days late for a medium priority overdue alert.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,
    )

    # =========================================================================
    # Service
    # =========================================================================

    app_name: str = 'Business Dashboard API'
    app_version: str = '1.0.0'
    log_level: str = 'INFO'

    # Dashboard dev server origins
    cors_origins: List[str] = [
        'http://localhost:5173',
        'http://127.0.0.1:5173',
    ]

    # =========================================================================
    # Derivation Defaults
    # =========================================================================

    # A cell with this many clients renders at full intensity
    heatmap_saturation_count: int = Field(default=5, gt=0)

    # Pending milestones due within this many days are flagged due_soon
    milestone_due_soon_days: int = Field(default=3, ge=0)

    # Overdue project alert priority: > high days -> high, > medium days -> medium
    overdue_high_priority_days: int = Field(default=7, ge=0)
    overdue_medium_priority_days: int = Field(default=3, ge=0)


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings: The cached settings instance.

    Note:
        To refresh settings in tests, clear the cache:
        >>> get_settings.cache_clear()
    """
    return Settings()

"""
Core infrastructure package for the dashboard backend.

Provides:
- Configuration management via pydantic-settings
- Reference-time helpers shared by models and services
- FastAPI dependency injection utilities

Re-exports key components for simplified imports:

    from bizdash.core import get_settings, SettingsDep, AsOfDep
"""

from bizdash.core.config import Settings, get_settings
from bizdash.core.clock import (
    MONTH_LABELS,
    ceil_days,
    ensure_utc,
    in_month,
    resolve_as_of,
    utc_now,
)
from bizdash.core.dependencies import (
    get_settings_dependency,
    get_reference_time,
    SettingsDep,
    AsOfDep,
)

__all__ = [
    # Configuration management (from config.py)
    'Settings',
    'get_settings',
    # Reference time (from clock.py)
    'MONTH_LABELS',
    'ceil_days',
    'ensure_utc',
    'in_month',
    'resolve_as_of',
    'utc_now',
    # FastAPI dependency injection (from dependencies.py)
    'get_settings_dependency',
    'get_reference_time',
    'SettingsDep',
    'AsOfDep',
]

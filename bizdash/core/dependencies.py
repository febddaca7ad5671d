"""
FastAPI dependency injection module for the dashboard backend.

Key Dependencies Provided:
- get_settings_dependency: Returns the cached Settings singleton
- SettingsDep: Type alias for injecting Settings into endpoints
- get_reference_time: Resolves the optional ?as_of= query parameter
- AsOfDep: Type alias for the resolved reference time

Usage Examples:
    @router.post("/kpis")
    async def kpis(snapshot: RecordSnapshot, as_of: AsOfDep) -> KPISummary:
        ...

    # Tests can swap configuration:
    app.dependency_overrides[get_settings_dependency] = lambda: test_settings
"""

from datetime import datetime
from typing import Annotated, Optional

from fastapi import Depends, Query

from bizdash.core.clock import resolve_as_of
from bizdash.core.config import Settings, get_settings


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    Thin wrapper around get_settings() so FastAPI's dependency override
    mechanism can replace configuration in tests.
    """
    return get_settings()


# =============================================================================
# Reference Time Dependency
# =============================================================================

def get_reference_time(
    as_of: Optional[datetime] = Query(
        default=None,
        description="Reference time for the derivations (ISO 8601, defaults to now, UTC)",
    ),
) -> datetime:
    """
    Resolve the reference time for a request.

    Derivations never read the clock themselves; the request decides which
    instant "now" is, so the same snapshot and as_of always give the same output.

    Returns:
        Aware UTC datetime.
    """
    return resolve_as_of(as_of)


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]

AsOfDep = Annotated[datetime, Depends(get_reference_time)]

"""
Reference-time helpers shared by the models and the derivation services.

Every derivation takes its reference time as an explicit argument; only the
outermost caller (an API handler or build_dashboard) falls back to utc_now().
All datetimes are compared as timezone-aware UTC values.
"""

import math
from datetime import datetime, timezone
from typing import Optional

SECONDS_PER_DAY = 24 * 60 * 60

# Month labels as shown on the dashboard charts
MONTH_LABELS = [
    "Jan", "Fev", "Mar", "Abr", "Mai", "Jun",
    "Jul", "Ago", "Set", "Out", "Nov", "Dez",
]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    Naive datetimes are interpreted as UTC; aware ones are converted.

    Args:
        value: Naive or aware datetime

    Returns:
        Aware datetime in UTC
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def resolve_as_of(as_of: Optional[datetime]) -> datetime:
    """Return as_of normalized to UTC, or the current time when omitted."""
    if as_of is None:
        return utc_now()
    return ensure_utc(as_of)


def ceil_days(delta_seconds: float) -> int:
    """
    Round a duration in seconds up to whole days.

    Partial days count as whole days: one second late is one day late, and one
    second early is zero days.
    """
    return math.ceil(delta_seconds / SECONDS_PER_DAY)


def in_month(value: datetime, year: int, month_index: int) -> bool:
    """
    Check whether a datetime falls in a calendar month.

    Args:
        value: Datetime to test (normalized to UTC first)
        year: Calendar year
        month_index: Zero-based month index (0 = January)
    """
    value = ensure_utc(value)
    return value.year == year and value.month - 1 == month_index

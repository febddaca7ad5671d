"""
Dashboard filter service.

Applies the dashboard filter bar to a snapshot before derivation:

- sector: all | technology | marketing | consultoria
- source: all | indicacao | google | linkedin
- window_days: 7 | 30 | 90 | 365, or None for no time window

Client filters match the sector/source label by case-insensitive substring, the
same rule the heatmap uses. Projects and subscriptions that reference a client
removed by the filter are dropped; records without a clientId are kept. The time
window keeps projects started, and proposals and alerts created, within the
last window_days up to and including the reference time; records dated after
the reference time are dropped. Alerts without createdAt are kept.

Filtering returns a new snapshot. Collections that were not loaded stay None.
"""

from datetime import datetime, timedelta
from typing import Dict, Optional, Set, Union

from bizdash.core.clock import ensure_utc
from bizdash.models import RecordSnapshot, SectorFilter, SourceFilter
from bizdash.services.heatmap import matches_label


ALLOWED_WINDOW_DAYS = (7, 30, 90, 365)

SECTOR_LABELS: Dict[SectorFilter, str] = {
    SectorFilter.TECHNOLOGY: "Tecnologia",
    SectorFilter.MARKETING: "Marketing",
    SectorFilter.CONSULTORIA: "Consultoria",
}

SOURCE_LABELS: Dict[SourceFilter, str] = {
    SourceFilter.INDICACAO: "Indicação",
    SourceFilter.GOOGLE: "Google Ads",
    SourceFilter.LINKEDIN: "LinkedIn",
}


class InvalidFilterError(ValueError):
    """Raised when a filter key or window is not one of the allowed values."""


def parse_sector_filter(value: Union[str, SectorFilter, None]) -> SectorFilter:
    """
    Convert a filter key to SectorFilter.

    Raises:
        InvalidFilterError: If the key is unknown.
    """
    if value is None:
        return SectorFilter.ALL
    try:
        return SectorFilter(value.lower() if isinstance(value, str) else value)
    except ValueError:
        raise InvalidFilterError(
            f"Invalid sector filter: {value}. "
            f"Valid values: {[s.value for s in SectorFilter]}"
        )


def parse_source_filter(value: Union[str, SourceFilter, None]) -> SourceFilter:
    """
    Convert a filter key to SourceFilter.

    Raises:
        InvalidFilterError: If the key is unknown.
    """
    if value is None:
        return SourceFilter.ALL
    try:
        return SourceFilter(value.lower() if isinstance(value, str) else value)
    except ValueError:
        raise InvalidFilterError(
            f"Invalid source filter: {value}. "
            f"Valid values: {[s.value for s in SourceFilter]}"
        )


def validate_window_days(window_days: Optional[int]) -> Optional[int]:
    """
    Check the time window against the filter bar options.

    Raises:
        InvalidFilterError: If the window is not 7, 30, 90 or 365.
    """
    if window_days is not None and window_days not in ALLOWED_WINDOW_DAYS:
        raise InvalidFilterError(
            f"Invalid window_days: {window_days}. "
            f"Valid values: {list(ALLOWED_WINDOW_DAYS)}"
        )
    return window_days


def apply_filters(
    snapshot: RecordSnapshot,
    now: datetime,
    sector: Union[str, SectorFilter, None] = None,
    source: Union[str, SourceFilter, None] = None,
    window_days: Optional[int] = None,
) -> RecordSnapshot:
    """
    Restrict a snapshot to the selected sector, source and time window.

    Args:
        snapshot: Input snapshot, left unchanged
        now: Reference time closing the time window
        sector: Sector filter key (None or "all" for no filter)
        source: Source filter key (None or "all" for no filter)
        window_days: Time window in days (None for no window)

    Returns:
        Filtered snapshot

    Raises:
        InvalidFilterError: If a key or the window is invalid.
    """
    sector_key = parse_sector_filter(sector)
    source_key = parse_source_filter(source)
    window_days = validate_window_days(window_days)

    updates: Dict[str, object] = {}

    if (sector_key != SectorFilter.ALL or source_key != SourceFilter.ALL) \
            and snapshot.clients is not None:
        kept_clients = [
            c for c in snapshot.clients
            if (sector_key == SectorFilter.ALL
                or matches_label(c.sector, SECTOR_LABELS[sector_key]))
            and (source_key == SourceFilter.ALL
                 or matches_label(c.source, SOURCE_LABELS[source_key]))
        ]
        kept_ids: Set[str] = {c.id for c in kept_clients}
        removed_ids: Set[str] = {c.id for c in snapshot.clients} - kept_ids
        updates["clients"] = kept_clients

        if snapshot.projects is not None:
            updates["projects"] = [
                p for p in snapshot.projects if p.clientId not in removed_ids
            ]
        if snapshot.subscriptions is not None:
            updates["subscriptions"] = [
                s for s in snapshot.subscriptions if s.clientId not in removed_ids
            ]

    if window_days is not None:
        window_end = ensure_utc(now)
        window_start = window_end - timedelta(days=window_days)
        projects = updates.get("projects", snapshot.projects)
        if projects is not None:
            updates["projects"] = [
                p for p in projects if window_start <= p.startDate <= window_end
            ]
        if snapshot.proposals is not None:
            updates["proposals"] = [
                p for p in snapshot.proposals
                if window_start <= p.createdAt <= window_end
            ]
        if snapshot.alerts is not None:
            updates["alerts"] = [
                a for a in snapshot.alerts
                if a.createdAt is None or window_start <= a.createdAt <= window_end
            ]

    return snapshot.model_copy(update=updates)

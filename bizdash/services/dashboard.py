"""
Dashboard aggregate service.

Runs every derivation on one snapshot and one reference time and assembles the
DashboardResponse consumed by the dashboard page. Each section is recomputed on
every call; nothing is cached between calls.
"""

import logging
from datetime import datetime
from typing import Optional

from bizdash.core.clock import resolve_as_of
from bizdash.core.config import Settings
from bizdash.models import DashboardResponse, RecordSnapshot
from bizdash.services.alerts import summarize_alerts
from bizdash.services.funnel import build_client_funnel
from bizdash.services.heatmap import DEFAULT_SATURATION_COUNT, build_sector_heatmap
from bizdash.services.kpi import calculate_kpis
from bizdash.services.milestones import DEFAULT_DUE_SOON_DAYS, summarize_milestones
from bizdash.services.pipeline import group_pipeline
from bizdash.services.proposals import calculate_proposal_insights
from bizdash.services.revenue_breakdown import build_revenue_breakdown
from bizdash.services.timeline import build_project_timeline, build_revenue_timeline


logger = logging.getLogger(__name__)


def build_dashboard(
    snapshot: RecordSnapshot,
    as_of: Optional[datetime] = None,
    settings: Optional[Settings] = None,
) -> DashboardResponse:
    """
    Compute the full dashboard from a snapshot.

    Args:
        snapshot: Record collections; collections left as None count as empty
        as_of: Reference time, defaults to now (UTC)
        settings: Derivation settings; module defaults are used when omitted

    Returns:
        DashboardResponse with every section computed at as_of
    """
    now = resolve_as_of(as_of)
    saturation = (
        settings.heatmap_saturation_count if settings else DEFAULT_SATURATION_COUNT
    )
    due_soon_days = (
        settings.milestone_due_soon_days if settings else DEFAULT_DUE_SOON_DAYS
    )

    missing = [
        name for name, value in snapshot if value is None
    ]
    if missing:
        logger.debug(f"Collections not loaded, treated as empty: {missing}")

    dashboard = DashboardResponse(
        asOf=now,
        kpis=calculate_kpis(
            snapshot.projects, snapshot.clients, snapshot.subscriptions, now
        ),
        funnel=build_client_funnel(snapshot.clients),
        projectTimeline=build_project_timeline(snapshot.projects, now),
        revenueTimeline=build_revenue_timeline(snapshot.projects, now),
        heatmap=build_sector_heatmap(snapshot.clients, saturation_count=saturation),
        pipeline=group_pipeline(snapshot.projects),
        revenueBreakdown=build_revenue_breakdown(
            snapshot.projects, snapshot.subscriptions
        ),
        proposals=calculate_proposal_insights(snapshot.proposals, now),
        alerts=summarize_alerts(snapshot.alerts),
        milestones=summarize_milestones(snapshot.milestones, now, due_soon_days),
    )

    logger.info(
        f"Dashboard built as_of={now.isoformat()}: "
        f"{len(snapshot.clients or [])} clients, "
        f"{len(snapshot.projects or [])} projects, "
        f"{len(snapshot.subscriptions or [])} subscriptions"
    )
    return dashboard

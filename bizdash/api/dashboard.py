"""
FastAPI router module for dashboard metric endpoints.

Every endpoint receives the record snapshot in the request body and derives its
view model from that snapshot only; no records are fetched or cached here.

Key Endpoints:
- POST /dashboard: Every section in one response
- POST /dashboard/kpis: KPI card values
- POST /dashboard/funnel: Client funnel
- POST /dashboard/timeline/projects: Monthly project timeline
- POST /dashboard/timeline/revenue: Monthly realized revenue
- POST /dashboard/heatmap: Sector x source heatmap
- POST /dashboard/pipeline: Project pipeline proportions
- POST /dashboard/revenue-breakdown: Revenue by status and subscriptions
- POST /dashboard/proposals: Proposal counters
- POST /dashboard/alerts/summary: Unread alert summary
- POST /dashboard/alerts/overdue-projects: Overdue project alert drafts
- POST /dashboard/milestones: Milestone states
- POST /dashboard/export/{section}: One section as CSV

Common query parameters:
- as_of: Reference time (defaults to now, UTC)
- sector / source / window_days: Dashboard filter bar selection
"""

import logging
from datetime import datetime
from typing import Annotated, List, Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response

from bizdash.core.dependencies import AsOfDep, SettingsDep
from bizdash.models import (
    AlertDraft,
    AlertSummary,
    ClientFunnel,
    DashboardResponse,
    ExportSection,
    KPISummary,
    MilestoneSummary,
    PipelineSlice,
    ProjectTimeline,
    ProposalInsights,
    RecordSnapshot,
    RevenueBreakdown,
    RevenueTimeline,
    SectorHeatmap,
)
from bizdash.services.alerts import detect_overdue_project_alerts, summarize_alerts
from bizdash.services.dashboard import build_dashboard
from bizdash.services.export import export_section_csv
from bizdash.services.filters import InvalidFilterError, apply_filters
from bizdash.services.funnel import build_client_funnel
from bizdash.services.heatmap import build_sector_heatmap
from bizdash.services.kpi import calculate_kpis
from bizdash.services.milestones import summarize_milestones
from bizdash.services.pipeline import group_pipeline
from bizdash.services.proposals import calculate_proposal_insights
from bizdash.services.revenue_breakdown import build_revenue_breakdown
from bizdash.services.timeline import build_project_timeline, build_revenue_timeline


# =============================================================================
# Module Configuration
# =============================================================================

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard")

SectorQuery = Annotated[
    Optional[str],
    Query(description="Sector filter (all, technology, marketing, consultoria)"),
]
SourceQuery = Annotated[
    Optional[str],
    Query(description="Source filter (all, indicacao, google, linkedin)"),
]
WindowQuery = Annotated[
    Optional[int],
    Query(description="Time window in days (7, 30, 90, 365)"),
]


# =============================================================================
# Helper Functions
# =============================================================================


def _filtered(
    snapshot: RecordSnapshot,
    as_of: datetime,
    sector: Optional[str],
    source: Optional[str],
    window_days: Optional[int],
) -> RecordSnapshot:
    """
    Apply the filter bar selection to a snapshot.

    Raises:
        HTTPException 400: If a filter key or window is invalid.
    """
    try:
        return apply_filters(
            snapshot,
            as_of,
            sector=sector,
            source=source,
            window_days=window_days,
        )
    except InvalidFilterError as e:
        logger.warning(f"Dashboard request rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))


def _server_error(section: str, error: Exception) -> HTTPException:
    logger.error(f"Error computing {section}: {error}", exc_info=True)
    return HTTPException(
        status_code=500,
        detail=f"Error computing {section}: {str(error)}",
    )


# =============================================================================
# Full Dashboard
# =============================================================================


@router.post("", response_model=DashboardResponse)
async def get_dashboard(
    snapshot: RecordSnapshot,
    as_of: AsOfDep,
    settings: SettingsDep,
    sector: SectorQuery = None,
    source: SourceQuery = None,
    window_days: WindowQuery = None,
) -> DashboardResponse:
    """
    Compute every dashboard section for one snapshot.

    Raises:
        HTTPException 400: If a filter is invalid.
        HTTPException 500: If a derivation fails.
    """
    filtered = _filtered(snapshot, as_of, sector, source, window_days)
    try:
        return build_dashboard(filtered, as_of=as_of, settings=settings)
    except Exception as e:
        raise _server_error("dashboard", e)


# =============================================================================
# Individual Sections
# =============================================================================


@router.post("/kpis", response_model=KPISummary)
async def get_kpis(
    snapshot: RecordSnapshot,
    as_of: AsOfDep,
    sector: SectorQuery = None,
    source: SourceQuery = None,
    window_days: WindowQuery = None,
) -> KPISummary:
    """Compute the KPI card values."""
    filtered = _filtered(snapshot, as_of, sector, source, window_days)
    try:
        return calculate_kpis(
            filtered.projects, filtered.clients, filtered.subscriptions, as_of
        )
    except Exception as e:
        raise _server_error("kpis", e)


@router.post("/funnel", response_model=ClientFunnel)
async def get_funnel(
    snapshot: RecordSnapshot,
    as_of: AsOfDep,
    sector: SectorQuery = None,
    source: SourceQuery = None,
) -> ClientFunnel:
    """Compute the client funnel."""
    filtered = _filtered(snapshot, as_of, sector, source, None)
    try:
        return build_client_funnel(filtered.clients)
    except Exception as e:
        raise _server_error("funnel", e)


@router.post("/timeline/projects", response_model=ProjectTimeline)
async def get_project_timeline(
    snapshot: RecordSnapshot,
    as_of: AsOfDep,
    sector: SectorQuery = None,
    source: SourceQuery = None,
) -> ProjectTimeline:
    """Compute the monthly project timeline of the as_of year."""
    filtered = _filtered(snapshot, as_of, sector, source, None)
    try:
        return build_project_timeline(filtered.projects, as_of)
    except Exception as e:
        raise _server_error("project timeline", e)


@router.post("/timeline/revenue", response_model=RevenueTimeline)
async def get_revenue_timeline(
    snapshot: RecordSnapshot,
    as_of: AsOfDep,
    sector: SectorQuery = None,
    source: SourceQuery = None,
) -> RevenueTimeline:
    """Compute realized monthly revenue of the as_of year."""
    filtered = _filtered(snapshot, as_of, sector, source, None)
    try:
        return build_revenue_timeline(filtered.projects, as_of)
    except Exception as e:
        raise _server_error("revenue timeline", e)


@router.post("/heatmap", response_model=SectorHeatmap)
async def get_heatmap(
    snapshot: RecordSnapshot,
    settings: SettingsDep,
) -> SectorHeatmap:
    """Compute the sector x source heatmap."""
    try:
        return build_sector_heatmap(
            snapshot.clients,
            saturation_count=settings.heatmap_saturation_count,
        )
    except Exception as e:
        raise _server_error("heatmap", e)


@router.post("/pipeline", response_model=List[PipelineSlice])
async def get_pipeline(
    snapshot: RecordSnapshot,
    as_of: AsOfDep,
    sector: SectorQuery = None,
    source: SourceQuery = None,
    window_days: WindowQuery = None,
) -> List[PipelineSlice]:
    """Group projects by pipeline stage."""
    filtered = _filtered(snapshot, as_of, sector, source, window_days)
    try:
        return group_pipeline(filtered.projects)
    except Exception as e:
        raise _server_error("pipeline", e)


@router.post("/revenue-breakdown", response_model=RevenueBreakdown)
async def get_revenue_breakdown(
    snapshot: RecordSnapshot,
    as_of: AsOfDep,
    sector: SectorQuery = None,
    source: SourceQuery = None,
    window_days: WindowQuery = None,
) -> RevenueBreakdown:
    """Compute revenue by project status and annualized subscriptions."""
    filtered = _filtered(snapshot, as_of, sector, source, window_days)
    try:
        return build_revenue_breakdown(filtered.projects, filtered.subscriptions)
    except Exception as e:
        raise _server_error("revenue breakdown", e)


@router.post("/proposals", response_model=ProposalInsights)
async def get_proposal_insights(
    snapshot: RecordSnapshot,
    as_of: AsOfDep,
    window_days: WindowQuery = None,
) -> ProposalInsights:
    """Compute proposal counters."""
    filtered = _filtered(snapshot, as_of, None, None, window_days)
    try:
        return calculate_proposal_insights(filtered.proposals, as_of)
    except Exception as e:
        raise _server_error("proposal insights", e)


# =============================================================================
# Alerts and Milestones
# =============================================================================


@router.post("/alerts/summary", response_model=AlertSummary)
async def get_alert_summary(snapshot: RecordSnapshot) -> AlertSummary:
    """Summarize unread alerts."""
    try:
        return summarize_alerts(snapshot.alerts)
    except Exception as e:
        raise _server_error("alert summary", e)


@router.post("/alerts/overdue-projects", response_model=List[AlertDraft])
async def get_overdue_project_alerts(
    snapshot: RecordSnapshot,
    as_of: AsOfDep,
    settings: SettingsDep,
) -> List[AlertDraft]:
    """
    Propose project_delayed alerts for overdue projects.

    The drafts are returned to the caller; storing them is the record source's
    responsibility.
    """
    try:
        drafts = detect_overdue_project_alerts(
            snapshot.projects,
            snapshot.alerts,
            as_of,
            high_after_days=settings.overdue_high_priority_days,
            medium_after_days=settings.overdue_medium_priority_days,
        )
    except Exception as e:
        raise _server_error("overdue project alerts", e)

    if drafts:
        logger.info(f"Proposed {len(drafts)} overdue project alerts")
    return drafts


@router.post("/milestones", response_model=MilestoneSummary)
async def get_milestones(
    snapshot: RecordSnapshot,
    as_of: AsOfDep,
    settings: SettingsDep,
) -> MilestoneSummary:
    """Classify milestones by urgency."""
    try:
        return summarize_milestones(
            snapshot.milestones, as_of, settings.milestone_due_soon_days
        )
    except Exception as e:
        raise _server_error("milestones", e)


# =============================================================================
# Export
# =============================================================================


@router.post("/export/{section}")
async def export_section(
    section: str,
    snapshot: RecordSnapshot,
    as_of: AsOfDep,
    settings: SettingsDep,
    sector: SectorQuery = None,
    source: SourceQuery = None,
    window_days: WindowQuery = None,
) -> Response:
    """
    Export one dashboard section as CSV.

    Raises:
        HTTPException 400: If the section or a filter is invalid.
        HTTPException 500: If the export fails.
    """
    if section not in {s.value for s in ExportSection}:
        logger.warning(f"Export rejected: unknown section {section}")
        raise HTTPException(
            status_code=400,
            detail=f"Invalid export section: {section}. "
                   f"Valid values: {[s.value for s in ExportSection]}",
        )

    filtered = _filtered(snapshot, as_of, sector, source, window_days)
    try:
        dashboard = build_dashboard(filtered, as_of=as_of, settings=settings)
        csv_text = export_section_csv(dashboard, section)
    except Exception as e:
        raise _server_error(f"{section} export", e)

    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="dashboard_{section}.csv"'
        },
    )

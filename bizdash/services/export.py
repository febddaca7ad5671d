"""
Dashboard export service.

Converts dashboard sections into pandas DataFrames and CSV text for the
dashboard's "Exportar" action.

Sections:
- kpis: one row, one column per KPI
- funnel: one row per stage
- project_timeline: one row per month
- revenue_timeline: one row per month
- heatmap: sector x source pivot of client counts
- pipeline: one row per non-empty stage
- revenue_breakdown: one row per project status
"""

from typing import Callable, Dict, Union

import pandas as pd

from bizdash.models import DashboardResponse, ExportSection
from bizdash.services.filters import InvalidFilterError


def kpis_frame(dashboard: DashboardResponse) -> pd.DataFrame:
    return pd.DataFrame([dashboard.kpis.model_dump()])


def funnel_frame(dashboard: DashboardResponse) -> pd.DataFrame:
    return pd.DataFrame(
        [stage.model_dump() for stage in dashboard.funnel.stages],
        columns=["label", "count", "percentage", "color"],
    )


def project_timeline_frame(dashboard: DashboardResponse) -> pd.DataFrame:
    return pd.DataFrame(
        [bucket.model_dump() for bucket in dashboard.projectTimeline.buckets],
        columns=[
            "month", "totalValue", "completedProjects",
            "activeProjects", "totalProjects",
        ],
    )


def revenue_timeline_frame(dashboard: DashboardResponse) -> pd.DataFrame:
    return pd.DataFrame(
        [month.model_dump() for month in dashboard.revenueTimeline.months],
        columns=["month", "revenue", "growthPercentage"],
    )


def heatmap_frame(dashboard: DashboardResponse) -> pd.DataFrame:
    """
    Pivot heatmap cells into a sector x source count table.

    Row and column order follow the heatmap's label order.
    """
    heatmap = dashboard.heatmap
    cells = pd.DataFrame(
        [cell.model_dump() for cell in heatmap.cells],
        columns=["sector", "source", "count", "intensity"],
    )
    pivot = cells.pivot(index="sector", columns="source", values="count")
    pivot = pivot.reindex(index=heatmap.sectors, columns=heatmap.sources)
    pivot.columns.name = None
    return pivot.fillna(0).astype(int)


def pipeline_frame(dashboard: DashboardResponse) -> pd.DataFrame:
    return pd.DataFrame(
        [s.model_dump(mode="json") for s in dashboard.pipeline],
        columns=["stage", "label", "count", "percentage", "color"],
    )


def revenue_breakdown_frame(dashboard: DashboardResponse) -> pd.DataFrame:
    return pd.DataFrame(
        [s.model_dump(mode="json") for s in dashboard.revenueBreakdown.byStatus],
        columns=["status", "label", "value", "color"],
    )


SECTION_FRAMES: Dict[ExportSection, Callable[[DashboardResponse], pd.DataFrame]] = {
    ExportSection.KPIS: kpis_frame,
    ExportSection.FUNNEL: funnel_frame,
    ExportSection.PROJECT_TIMELINE: project_timeline_frame,
    ExportSection.REVENUE_TIMELINE: revenue_timeline_frame,
    ExportSection.HEATMAP: heatmap_frame,
    ExportSection.PIPELINE: pipeline_frame,
    ExportSection.REVENUE_BREAKDOWN: revenue_breakdown_frame,
}


def section_frame(
    dashboard: DashboardResponse,
    section: Union[str, ExportSection],
) -> pd.DataFrame:
    """
    Build the DataFrame for one dashboard section.

    Raises:
        InvalidFilterError: If the section name is unknown.
    """
    try:
        key = ExportSection(section)
    except ValueError:
        raise InvalidFilterError(
            f"Invalid export section: {section}. "
            f"Valid values: {[s.value for s in ExportSection]}"
        )
    return SECTION_FRAMES[key](dashboard)


def export_section_csv(
    dashboard: DashboardResponse,
    section: Union[str, ExportSection],
) -> str:
    """
    Render one dashboard section as CSV text.

    The heatmap keeps its sector index as the first column; other sections are
    written without the DataFrame index.

    Raises:
        InvalidFilterError: If the section name is unknown.
    """
    frame = section_frame(dashboard, section)
    keep_index = ExportSection(section) == ExportSection.HEATMAP
    return frame.to_csv(index=keep_index)

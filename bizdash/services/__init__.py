"""
Dashboard Services Module

Metric derivation services for the business dashboard. Every service is a pure
function of the records and reference time it receives: no I/O, no caching,
safe to call concurrently.

Services:
- kpi: MRR, conversion, average project value, overdue, churn, LTV
- funnel: Client funnel stages
- timeline: Monthly project timeline and realized revenue timeline
- heatmap: Sector x acquisition source heatmap
- pipeline: Project counts per pipeline stage
- revenue_breakdown: Revenue by project status and subscriptions
- proposals: Proposal counters
- alerts: Overdue project rule and unread alert summary
- milestones: Milestone urgency states
- filters: Dashboard filter bar applied to a snapshot
- dashboard: All sections in one response
- export: CSV export of dashboard sections

All services are consumed by the API layer (bizdash/api/).
"""

# =============================================================================
# KPI Service Exports
# =============================================================================

from bizdash.services.kpi import (
    calculate_kpis,
    calculate_mrr,
    calculate_conversion_rate,
    calculate_avg_project_value,
    count_overdue_projects,
    calculate_churn_rate,
    calculate_ltv,
    count_active_subscriptions,
)

# =============================================================================
# Funnel, Pipeline and Heatmap Exports
# =============================================================================

from bizdash.services.funnel import build_client_funnel
from bizdash.services.pipeline import group_pipeline, count_by_stage, PIPELINE_STAGES
from bizdash.services.heatmap import (
    build_sector_heatmap,
    count_matrix,
    matches_label,
    HEATMAP_SECTORS,
    HEATMAP_SOURCES,
)

# =============================================================================
# Timeline Service Exports
# =============================================================================

from bizdash.services.timeline import (
    build_project_timeline,
    build_revenue_timeline,
    calculate_monthly_revenue,
    growth_percentage,
)

# =============================================================================
# Revenue, Proposals, Alerts and Milestones Exports
# =============================================================================

from bizdash.services.revenue_breakdown import build_revenue_breakdown
from bizdash.services.proposals import calculate_proposal_insights
from bizdash.services.alerts import (
    detect_overdue_project_alerts,
    summarize_alerts,
    overdue_priority,
)
from bizdash.services.milestones import classify_milestone, summarize_milestones

# =============================================================================
# Filters, Dashboard and Export Exports
# =============================================================================

from bizdash.services.filters import apply_filters, InvalidFilterError
from bizdash.services.dashboard import build_dashboard
from bizdash.services.export import export_section_csv, section_frame


__all__ = [
    # ----- KPI Service -----
    'calculate_kpis',
    'calculate_mrr',
    'calculate_conversion_rate',
    'calculate_avg_project_value',
    'count_overdue_projects',
    'calculate_churn_rate',
    'calculate_ltv',
    'count_active_subscriptions',
    # ----- Funnel / Pipeline / Heatmap -----
    'build_client_funnel',
    'group_pipeline',
    'count_by_stage',
    'PIPELINE_STAGES',
    'build_sector_heatmap',
    'count_matrix',
    'matches_label',
    'HEATMAP_SECTORS',
    'HEATMAP_SOURCES',
    # ----- Timeline Service -----
    'build_project_timeline',
    'build_revenue_timeline',
    'calculate_monthly_revenue',
    'growth_percentage',
    # ----- Revenue / Proposals / Alerts / Milestones -----
    'build_revenue_breakdown',
    'calculate_proposal_insights',
    'detect_overdue_project_alerts',
    'summarize_alerts',
    'overdue_priority',
    'classify_milestone',
    'summarize_milestones',
    # ----- Filters / Dashboard / Export -----
    'apply_filters',
    'InvalidFilterError',
    'build_dashboard',
    'export_section_csv',
    'section_frame',
]

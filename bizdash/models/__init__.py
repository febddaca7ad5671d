"""
Package initialization file for dashboard models.

Exports all Pydantic schemas and enumerations from schemas.py and enums.py so
other modules can import them from bizdash.models directly.

Usage:
    from bizdash.models import (
        Client,
        Project,
        RecordSnapshot,
        KPISummary,
        ProjectStatus,
        # ... etc
    )
"""

# =============================================================================
# Enums
# =============================================================================

from bizdash.models.enums import (
    # Record statuses
    ClientStatus,
    UpsellPotential,
    ProjectStatus,
    SubscriptionStatus,
    ProposalStatus,
    # Alerts and milestones
    AlertType,
    AlertPriority,
    EntityType,
    MilestoneState,
    MilestoneAction,
    # Filters and export
    SectorFilter,
    SourceFilter,
    ExportSection,
)


# =============================================================================
# Schemas
# =============================================================================

from bizdash.models.schemas import (
    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------
    Client,
    Project,
    Subscription,
    Alert,
    Milestone,
    Proposal,
    RecordSnapshot,

    # -------------------------------------------------------------------------
    # View models
    # -------------------------------------------------------------------------
    KPISummary,
    FunnelStage,
    ClientFunnel,
    PipelineSlice,
    TimelineBucket,
    ProjectTimeline,
    RevenueMonth,
    RevenueTimeline,
    HeatmapCell,
    SectorHeatmap,
    RevenueStatusSlice,
    RevenueSplitSlice,
    RevenueBreakdown,
    ProposalInsights,
    AlertDraft,
    AlertSummary,
    MilestoneStatus,
    MilestoneSummary,
    DashboardResponse,
)


__all__ = [
    # Enums
    'ClientStatus',
    'UpsellPotential',
    'ProjectStatus',
    'SubscriptionStatus',
    'ProposalStatus',
    'AlertType',
    'AlertPriority',
    'EntityType',
    'MilestoneState',
    'MilestoneAction',
    'SectorFilter',
    'SourceFilter',
    'ExportSection',
    # Records
    'Client',
    'Project',
    'Subscription',
    'Alert',
    'Milestone',
    'Proposal',
    'RecordSnapshot',
    # View models
    'KPISummary',
    'FunnelStage',
    'ClientFunnel',
    'PipelineSlice',
    'TimelineBucket',
    'ProjectTimeline',
    'RevenueMonth',
    'RevenueTimeline',
    'HeatmapCell',
    'SectorHeatmap',
    'RevenueStatusSlice',
    'RevenueSplitSlice',
    'RevenueBreakdown',
    'ProposalInsights',
    'AlertDraft',
    'AlertSummary',
    'MilestoneStatus',
    'MilestoneSummary',
    'DashboardResponse',
]

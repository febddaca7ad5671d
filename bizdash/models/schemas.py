"""
Pydantic record and view models for the business dashboard backend.

Records (Client, Project, Subscription, Alert, Milestone, Proposal) mirror the
JSON shapes served by the dashboard's record source, using the same camelCase
field names. View models are the plain structures consumed by the chart and card
components: funnel stages, monthly timeline buckets, heatmap cells, pipeline
slices and the flat KPI summary.

Records are frozen: the derivation layer only reads them.

All models use Pydantic v2 syntax.
"""

from datetime import datetime
from typing import Annotated, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from bizdash.core.clock import ensure_utc
from bizdash.models.enums import (
    AlertPriority,
    AlertType,
    ClientStatus,
    EntityType,
    MilestoneAction,
    MilestoneState,
    ProjectStatus,
    ProposalStatus,
    SubscriptionStatus,
    UpsellPotential,
)


# Datetimes are stored as aware UTC so comparisons never mix naive and aware values
UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]

_RECORD_CONFIG = ConfigDict(str_strip_whitespace=True, frozen=True)


# =============================================================================
# Records
# =============================================================================


class Client(BaseModel):
    """
    Client record with the subscription flag computed by the record source.

    hasActiveSubscription is true when the client owns at least one active
    subscription; it drives the prospect/active split in KPIs and the funnel.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "c-001",
                "name": "Ana Souza",
                "company": "Souza Tech",
                "sector": "Tecnologia e Inovação",
                "source": "Indicação",
                "status": "active",
                "hasActiveSubscription": True,
                "nps": 9.0,
            }
        },
    )

    id: str = Field(..., min_length=1, description="Client identifier")
    name: str = Field(default="", description="Contact name")
    company: str = Field(default="", description="Company name")
    sector: str = Field(default="", description="Business sector (free text)")
    source: str = Field(default="", description="Acquisition channel (free text)")
    status: ClientStatus = Field(
        default=ClientStatus.PROSPECT,
        description="Relationship status (active, prospect, inactive)",
    )
    hasActiveSubscription: bool = Field(
        default=False,
        description="Whether the client has at least one active subscription",
    )
    nps: Optional[float] = Field(default=None, description="Net Promoter Score")
    upsellPotential: Optional[UpsellPotential] = Field(
        default=None,
        description="Upsell potential (low, medium, high)",
    )


class Project(BaseModel):
    """Project record. value is the contracted amount."""
    model_config = _RECORD_CONFIG

    id: str = Field(..., min_length=1, description="Project identifier")
    name: str = Field(default="", description="Project name")
    clientId: Optional[str] = Field(default=None, description="Owning client id")
    value: float = Field(..., ge=0, description="Contracted value")
    status: ProjectStatus = Field(
        default=ProjectStatus.DISCOVERY,
        description="Lifecycle status",
    )
    startDate: UtcDatetime = Field(..., description="Project start date")
    dueDate: UtcDatetime = Field(..., description="Delivery due date")


class Subscription(BaseModel):
    """Recurring subscription billed monthly."""
    model_config = _RECORD_CONFIG

    id: str = Field(..., min_length=1, description="Subscription identifier")
    clientId: Optional[str] = Field(default=None, description="Owning client id")
    amount: float = Field(..., ge=0, description="Monthly amount")
    status: SubscriptionStatus = Field(
        default=SubscriptionStatus.ACTIVE,
        description="Subscription status (active, paused, cancelled)",
    )
    billingDay: Optional[int] = Field(
        default=None, ge=1, le=31, description="Day of month the subscription bills"
    )


class Alert(BaseModel):
    """Dashboard alert raised by a notification rule."""
    model_config = _RECORD_CONFIG

    id: str = Field(..., min_length=1, description="Alert identifier")
    type: AlertType = Field(..., description="Alert category")
    title: str = Field(..., description="Short title")
    description: str = Field(default="", description="Alert body")
    isRead: bool = Field(default=False, description="Whether the alert was read")
    entityId: Optional[str] = Field(default=None, description="Referenced record id")
    entityType: Optional[EntityType] = Field(
        default=None, description="Referenced record kind"
    )
    priority: AlertPriority = Field(
        default=AlertPriority.MEDIUM, description="Alert priority"
    )
    createdAt: Optional[UtcDatetime] = Field(default=None, description="Creation time")


class Milestone(BaseModel):
    """Project milestone."""
    model_config = _RECORD_CONFIG

    id: str = Field(..., min_length=1, description="Milestone identifier")
    projectId: Optional[str] = Field(default=None, description="Owning project id")
    title: str = Field(..., description="Milestone title")
    dueDate: UtcDatetime = Field(..., description="Due date")
    isCompleted: bool = Field(default=False, description="Whether it was delivered")
    requiresClientApproval: bool = Field(
        default=False, description="Whether delivery needs client sign-off"
    )


class Proposal(BaseModel):
    """Commercial proposal text."""
    # text is kept verbatim; its length is counted
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Proposal identifier")
    text: str = Field(default="", description="Proposal body")
    status: ProposalStatus = Field(default=ProposalStatus.DRAFT, description="Status")
    createdAt: UtcDatetime = Field(..., description="Creation time")


class RecordSnapshot(BaseModel):
    """
    Explicit snapshot of the record collections behind one dashboard render.

    A collection left as None has not been loaded yet; every derivation treats it
    as empty. The service never fetches or caches records itself.
    """
    model_config = ConfigDict(frozen=True)

    clients: Optional[List[Client]] = None
    projects: Optional[List[Project]] = None
    subscriptions: Optional[List[Subscription]] = None
    alerts: Optional[List[Alert]] = None
    milestones: Optional[List[Milestone]] = None
    proposals: Optional[List[Proposal]] = None


# =============================================================================
# KPI Summary
# =============================================================================


class KPISummary(BaseModel):
    """
    Flat mapping of the business KPIs shown on the dashboard cards.

    Percentages are in the 0-100 range; monetary values are unformatted.
    """
    mrr: float = Field(..., description="Monthly recurring revenue")
    conversionRate: float = Field(..., description="Active / (prospects + active) %")
    avgProjectValue: float = Field(..., description="Mean project value")
    overdueProjects: int = Field(..., description="Open projects past their due date")
    churnRate: float = Field(..., description="Cancelled subscriptions %")
    ltv: float = Field(..., description="Annualized MRR per active client")
    activeSubscriptions: int = Field(..., description="Active subscription count")


# =============================================================================
# Funnel and Pipeline
# =============================================================================


class FunnelStage(BaseModel):
    """One stage of the client funnel."""
    label: str
    count: int
    percentage: float
    color: str


class ClientFunnel(BaseModel):
    """Client funnel stages (Total, Prospects, Ativos, Inativos) and conversion."""
    stages: List[FunnelStage]
    conversionRate: float


class PipelineSlice(BaseModel):
    """Project count for one pipeline stage."""
    stage: ProjectStatus
    label: str
    count: int
    percentage: float
    color: str


# =============================================================================
# Timelines
# =============================================================================


class TimelineBucket(BaseModel):
    """Projects started in one calendar month."""
    month: str
    totalValue: float
    completedProjects: int
    activeProjects: int
    totalProjects: int


class ProjectTimeline(BaseModel):
    """Twelve monthly buckets of the reference year, January first."""
    year: int
    buckets: List[TimelineBucket]
    totalYearValue: float
    totalYearProjects: int


class RevenueMonth(BaseModel):
    """Realized revenue of one month and its growth over the previous month."""
    month: str
    revenue: float
    growthPercentage: float


class RevenueTimeline(BaseModel):
    """Realized monthly revenue; months after the reference month are zero."""
    year: int
    currentMonth: str
    months: List[RevenueMonth]
    currentMonthRevenue: float
    previousMonthRevenue: float
    growthPercentage: float
    totalRevenue: float


# =============================================================================
# Heatmap
# =============================================================================


class HeatmapCell(BaseModel):
    """Client count for one (sector, source) intersection."""
    sector: str
    source: str
    count: int
    intensity: float = Field(..., ge=0, le=1)


class SectorHeatmap(BaseModel):
    """Fixed sector x source grid, sector-major order."""
    sectors: List[str]
    sources: List[str]
    cells: List[HeatmapCell]
    maxCount: int


# =============================================================================
# Revenue Breakdown
# =============================================================================


class RevenueStatusSlice(BaseModel):
    """Project value summed for one project status."""
    status: ProjectStatus
    label: str
    value: float
    color: str


class RevenueSplitSlice(BaseModel):
    """Projects vs annualized subscriptions share."""
    name: str
    value: float
    color: str


class RevenueBreakdown(BaseModel):
    """Revenue by project status plus the project/subscription split."""
    byStatus: List[RevenueStatusSlice]
    split: List[RevenueSplitSlice]
    projectRevenue: float
    monthlySubscriptionRevenue: float
    annualSubscriptionRevenue: float
    totalRevenue: float


# =============================================================================
# Proposals
# =============================================================================


class ProposalInsights(BaseModel):
    """Proposal counters for the insights card."""
    totalProposals: int
    sentProposals: int
    draftProposals: int
    avgCharacterCount: int
    thisMonthProposals: int
    conversionRate: float


# =============================================================================
# Alerts and Milestones
# =============================================================================


class AlertDraft(BaseModel):
    """
    Alert proposed by a notification rule, not yet stored.

    Persisting the draft is the record source's job.
    """
    type: AlertType
    title: str
    description: str
    entityId: str
    entityType: EntityType
    priority: AlertPriority
    daysOverdue: int


class AlertSummary(BaseModel):
    """Unread alert counters and the unread alerts in display order."""
    total: int
    unread: int
    unreadByType: Dict[str, int]
    unreadByPriority: Dict[str, int]
    unreadAlerts: List[Alert]


class MilestoneStatus(BaseModel):
    """Milestone with its derived urgency state and next action."""
    milestone: Milestone
    state: MilestoneState
    daysUntilDue: int
    nextAction: MilestoneAction


class MilestoneSummary(BaseModel):
    """Counts per state and pending milestones ordered by due date."""
    counts: Dict[str, int]
    pending: List[MilestoneStatus]


# =============================================================================
# Dashboard
# =============================================================================


class DashboardResponse(BaseModel):
    """Every dashboard view model computed from one snapshot and reference time."""
    asOf: datetime
    kpis: KPISummary
    funnel: ClientFunnel
    projectTimeline: ProjectTimeline
    revenueTimeline: RevenueTimeline
    heatmap: SectorHeatmap
    pipeline: List[PipelineSlice]
    revenueBreakdown: RevenueBreakdown
    proposals: ProposalInsights
    alerts: AlertSummary
    milestones: MilestoneSummary

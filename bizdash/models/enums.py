"""
Enumeration definitions for the business dashboard backend.

All enums inherit from both `str` and `Enum` so that Pydantic models serialize
them as plain strings in API responses and accept the raw strings stored by the
dashboard's record source.

Record status sets are closed: a value outside these enums fails validation
instead of silently falling through the derivation logic.
"""

from enum import Enum


class ClientStatus(str, Enum):
    """
    Relationship status of a client.

    - active: Paying client
    - prospect: Lead not yet converted
    - inactive: Former client, counted in the funnel "Inativos" stage
    """
    ACTIVE = "active"
    PROSPECT = "prospect"
    INACTIVE = "inactive"


class UpsellPotential(str, Enum):
    """Upsell potential recorded on the client form."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ProjectStatus(str, Enum):
    """
    Project lifecycle status.

    The first four values are pipeline stages; completed and cancelled are
    terminal and never count as overdue or active.
    """
    DISCOVERY = "discovery"
    DEVELOPMENT = "development"
    DELIVERY = "delivery"
    POST_SALE = "post_sale"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SubscriptionStatus(str, Enum):
    """
    Recurring subscription status.

    Only active subscriptions contribute to MRR; cancelled ones count toward churn.
    Paused subscriptions are neither.
    """
    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class AlertType(str, Enum):
    """Alert categories raised by the notification rules."""
    PROJECT_DELAYED = "project_delayed"
    PAYMENT_PENDING = "payment_pending"
    UPSELL_OPPORTUNITY = "upsell_opportunity"
    MILESTONE_DUE = "milestone_due"
    SUBSCRIPTION_DUE = "subscription_due"
    SUBSCRIPTION_OVERDUE = "subscription_overdue"


class AlertPriority(str, Enum):
    """
    Alert priority levels.

    Declaration order is ascending severity; see ALERT_PRIORITY_RANK in
    services/alerts.py for the ordering used when listing alerts.
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class EntityType(str, Enum):
    """Kind of record an alert points at."""
    PROJECT = "project"
    CLIENT = "client"
    SUBSCRIPTION = "subscription"


class ProposalStatus(str, Enum):
    """Proposal status. Sent proposals count as converted."""
    DRAFT = "draft"
    SENT = "sent"


class MilestoneState(str, Enum):
    """
    Derived milestone urgency state.

    - completed: Milestone delivered
    - overdue: Due date already passed
    - due_soon: Due within the due-soon window (default 3 days)
    - upcoming: Due later than the due-soon window
    """
    COMPLETED = "completed"
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    UPCOMING = "upcoming"


class MilestoneAction(str, Enum):
    """Next action suggested for a milestone."""
    NONE = "none"
    NOTIFY_CLIENT = "notify_client"
    DELIVER = "deliver"


class SectorFilter(str, Enum):
    """
    Sector filter keys of the dashboard filter bar.

    Each key except ALL maps to a sector label matched by substring.
    """
    ALL = "all"
    TECHNOLOGY = "technology"
    MARKETING = "marketing"
    CONSULTORIA = "consultoria"


class SourceFilter(str, Enum):
    """Acquisition-source filter keys of the dashboard filter bar."""
    ALL = "all"
    INDICACAO = "indicacao"
    GOOGLE = "google"
    LINKEDIN = "linkedin"


class ExportSection(str, Enum):
    """Dashboard sections that can be exported as CSV."""
    KPIS = "kpis"
    FUNNEL = "funnel"
    PROJECT_TIMELINE = "project_timeline"
    REVENUE_TIMELINE = "revenue_timeline"
    HEATMAP = "heatmap"
    PIPELINE = "pipeline"
    REVENUE_BREAKDOWN = "revenue_breakdown"

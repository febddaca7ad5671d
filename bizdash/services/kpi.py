"""
KPI aggregation service for the dashboard cards.

Computes the fixed set of scalar business metrics from the project, client and
subscription collections of a snapshot.

KPIs:
- mrr = sum(amount) over active subscriptions
- conversionRate = active / (prospects + active) * 100
- avgProjectValue = sum(value) / project count
- overdueProjects = open projects with dueDate < now
- churnRate = cancelled subscriptions / all subscriptions * 100
- ltv = (mrr * 12) / active clients
- activeSubscriptions = active subscription count

Every ratio has an explicit zero-denominator fallback of 0. A collection that is
None (not loaded yet) is treated as empty.
"""

from datetime import datetime
from typing import Optional, Sequence

from bizdash.core.clock import ensure_utc
from bizdash.models import (
    Client,
    KPISummary,
    Project,
    ProjectStatus,
    Subscription,
    SubscriptionStatus,
)


# Statuses that close a project; closed projects are never overdue
CLOSED_PROJECT_STATUSES = frozenset({ProjectStatus.COMPLETED, ProjectStatus.CANCELLED})

# Months used to annualize MRR for LTV
MONTHS_PER_YEAR = 12


# =============================================================================
# Individual Metrics
# =============================================================================


def calculate_mrr(subscriptions: Optional[Sequence[Subscription]]) -> float:
    """
    Calculate monthly recurring revenue.

    Args:
        subscriptions: Subscription collection, or None when not loaded

    Returns:
        Sum of amount over subscriptions with status active, 0 when empty

    Example:
        >>> calculate_mrr([])
        0.0
    """
    return float(sum(
        s.amount for s in subscriptions or []
        if s.status == SubscriptionStatus.ACTIVE
    ))


def count_active_subscriptions(subscriptions: Optional[Sequence[Subscription]]) -> int:
    """Count subscriptions with status active."""
    return len([
        s for s in subscriptions or []
        if s.status == SubscriptionStatus.ACTIVE
    ])


def calculate_conversion_rate(clients: Optional[Sequence[Client]]) -> float:
    """
    Calculate the prospect-to-active conversion rate.

    Prospects are clients without an active subscription; active clients have
    one. Every client is one or the other, so the denominator is the client
    count.

    Args:
        clients: Client collection, or None when not loaded

    Returns:
        Percentage in [0, 100], 0 when there are no clients
    """
    clients = clients or []
    active_clients = len([c for c in clients if c.hasActiveSubscription])
    prospects = len(clients) - active_clients
    denominator = prospects + active_clients
    if denominator == 0:
        return 0.0
    return active_clients / denominator * 100


def calculate_avg_project_value(projects: Optional[Sequence[Project]]) -> float:
    """
    Calculate the mean contracted project value.

    Returns:
        sum(value) / len(projects), 0 when there are no projects
    """
    projects = projects or []
    if not projects:
        return 0.0
    return sum(p.value for p in projects) / len(projects)


def count_overdue_projects(
    projects: Optional[Sequence[Project]],
    now: datetime,
) -> int:
    """
    Count open projects whose due date has passed.

    Args:
        projects: Project collection, or None when not loaded
        now: Reference time

    Returns:
        Number of projects with dueDate < now and status not completed/cancelled
    """
    now = ensure_utc(now)
    return len([
        p for p in projects or []
        if p.dueDate < now and p.status not in CLOSED_PROJECT_STATUSES
    ])


def calculate_churn_rate(subscriptions: Optional[Sequence[Subscription]]) -> float:
    """
    Calculate the share of cancelled subscriptions.

    Returns:
        Percentage in [0, 100], 0 when there are no subscriptions
    """
    subscriptions = subscriptions or []
    if not subscriptions:
        return 0.0
    cancelled = len([
        s for s in subscriptions if s.status == SubscriptionStatus.CANCELLED
    ])
    return cancelled / len(subscriptions) * 100


def calculate_ltv(mrr: float, active_clients: int) -> float:
    """
    Calculate lifetime value as annualized MRR per active client.

    Args:
        mrr: Monthly recurring revenue
        active_clients: Number of clients with an active subscription

    Returns:
        (mrr * 12) / active_clients, 0 when there are no active clients
    """
    if active_clients == 0:
        return 0.0
    return (mrr * MONTHS_PER_YEAR) / active_clients


# =============================================================================
# KPI Summary
# =============================================================================


def calculate_kpis(
    projects: Optional[Sequence[Project]],
    clients: Optional[Sequence[Client]],
    subscriptions: Optional[Sequence[Subscription]],
    now: datetime,
) -> KPISummary:
    """
    Compute every dashboard KPI in one pass over the snapshot.

    Pure function: the same collections and reference time always produce the
    same summary.

    Args:
        projects: Project collection (None treated as empty)
        clients: Client collection (None treated as empty)
        subscriptions: Subscription collection (None treated as empty)
        now: Reference time used for the overdue check

    Returns:
        KPISummary with unformatted values

    Example:
        >>> calculate_kpis(None, None, None, now=datetime(2026, 1, 1)).mrr
        0.0
    """
    mrr = calculate_mrr(subscriptions)
    active_clients = len([c for c in clients or [] if c.hasActiveSubscription])

    return KPISummary(
        mrr=mrr,
        conversionRate=calculate_conversion_rate(clients),
        avgProjectValue=calculate_avg_project_value(projects),
        overdueProjects=count_overdue_projects(projects, now),
        churnRate=calculate_churn_rate(subscriptions),
        ltv=calculate_ltv(mrr, active_clients),
        activeSubscriptions=count_active_subscriptions(subscriptions),
    )

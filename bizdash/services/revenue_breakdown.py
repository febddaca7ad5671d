"""
Revenue breakdown service.

Splits revenue into project value per project status and annualized
subscription revenue:

- byStatus: sum of project value per status, statuses in lifecycle order,
  only statuses that have projects
- monthlySubscriptionRevenue: MRR
- annualSubscriptionRevenue: MRR * 12
- totalRevenue: project revenue + annual subscription revenue
- split: "Projetos" vs "Assinaturas (Anual)", slices with value 0 dropped
"""

from typing import Dict, List, Optional, Sequence

from bizdash.models import (
    Project,
    ProjectStatus,
    RevenueBreakdown,
    RevenueSplitSlice,
    RevenueStatusSlice,
    Subscription,
)
from bizdash.services.kpi import MONTHS_PER_YEAR, calculate_mrr


STATUS_COLORS: Dict[ProjectStatus, str] = {
    ProjectStatus.DISCOVERY: "#9333ea",
    ProjectStatus.DEVELOPMENT: "#3b82f6",
    ProjectStatus.DELIVERY: "#22c55e",
    ProjectStatus.POST_SALE: "#f59e0b",
    ProjectStatus.COMPLETED: "#10b981",
    ProjectStatus.CANCELLED: "#ef4444",
}

PROJECTS_SLICE = ("Projetos", "#3b82f6")
SUBSCRIPTIONS_SLICE = ("Assinaturas (Anual)", "#22c55e")


def status_label(status: ProjectStatus) -> str:
    """
    Display label for a project status.

    >>> status_label(ProjectStatus.POST_SALE)
    'Post sale'
    """
    return status.value.replace("_", " ").capitalize()


def sum_value_by_status(
    projects: Optional[Sequence[Project]],
) -> Dict[ProjectStatus, float]:
    """Sum project value per status, keeping lifecycle order."""
    totals: Dict[ProjectStatus, float] = {}
    for status in ProjectStatus:
        values = [p.value for p in projects or [] if p.status == status]
        if values:
            totals[status] = float(sum(values))
    return totals


def build_revenue_breakdown(
    projects: Optional[Sequence[Project]],
    subscriptions: Optional[Sequence[Subscription]],
) -> RevenueBreakdown:
    """
    Build the revenue breakdown view model.

    Args:
        projects: Project collection, or None when not loaded
        subscriptions: Subscription collection, or None when not loaded

    Returns:
        RevenueBreakdown
    """
    by_status = sum_value_by_status(projects)
    project_revenue = float(sum(by_status.values()))
    monthly = calculate_mrr(subscriptions)
    annual = monthly * MONTHS_PER_YEAR

    split: List[RevenueSplitSlice] = [
        RevenueSplitSlice(name=name, value=value, color=color)
        for (name, color), value in (
            (PROJECTS_SLICE, project_revenue),
            (SUBSCRIPTIONS_SLICE, annual),
        )
        if value > 0
    ]

    return RevenueBreakdown(
        byStatus=[
            RevenueStatusSlice(
                status=status,
                label=status_label(status),
                value=value,
                color=STATUS_COLORS[status],
            )
            for status, value in by_status.items()
        ],
        split=split,
        projectRevenue=project_revenue,
        monthlySubscriptionRevenue=monthly,
        annualSubscriptionRevenue=annual,
        totalRevenue=project_revenue + annual,
    )

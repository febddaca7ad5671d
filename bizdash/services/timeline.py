"""
Monthly timeline service for the project and revenue charts.

Both timelines use the twelve calendar months of the reference year, January
first, and assign a project to the month of its startDate (UTC).

Project Timeline:
- totalValue: sum of value of projects started in the month
- completedProjects: status completed or post_sale
- activeProjects: status not completed and not cancelled
- totalProjects: bucket size

post_sale projects count as both completed and active.

Revenue Timeline:
- Realized revenue only: projects with status delivery, post_sale or completed
- Months after the reference month are 0, never estimated
- growth = (current - previous) / previous * 100 when previous > 0, else 0
"""

from datetime import datetime
from typing import List, Optional, Sequence

from bizdash.core.clock import MONTH_LABELS, ensure_utc, in_month
from bizdash.models import (
    Project,
    ProjectStatus,
    ProjectTimeline,
    RevenueMonth,
    RevenueTimeline,
    TimelineBucket,
)


COMPLETED_STATUSES = frozenset({ProjectStatus.COMPLETED, ProjectStatus.POST_SALE})

INACTIVE_STATUSES = frozenset({ProjectStatus.COMPLETED, ProjectStatus.CANCELLED})

# Statuses whose project value counts as realized revenue
REVENUE_STATUSES = frozenset({
    ProjectStatus.DELIVERY,
    ProjectStatus.POST_SALE,
    ProjectStatus.COMPLETED,
})


def _projects_in_month(
    projects: Sequence[Project],
    year: int,
    month_index: int,
) -> List[Project]:
    return [p for p in projects if in_month(p.startDate, year, month_index)]


def growth_percentage(current: float, previous: float) -> float:
    """
    Month-over-month growth.

    Returns:
        (current - previous) / previous * 100, or 0 when previous <= 0
    """
    if previous <= 0:
        return 0.0
    return (current - previous) / previous * 100


# =============================================================================
# Project Timeline
# =============================================================================


def build_project_timeline(
    projects: Optional[Sequence[Project]],
    now: datetime,
) -> ProjectTimeline:
    """
    Distribute projects into the twelve months of the reference year.

    Projects started in other years are left out. Buckets are always produced in
    calendar order regardless of input order.

    Args:
        projects: Project collection, or None when not loaded
        now: Reference time; its year selects the timeline year

    Returns:
        ProjectTimeline with twelve buckets and yearly totals

    Example:
        >>> timeline = build_project_timeline([], now=datetime(2026, 5, 1))
        >>> len(timeline.buckets), timeline.totalYearValue
        (12, 0.0)
    """
    projects = projects or []
    year = ensure_utc(now).year

    buckets: List[TimelineBucket] = []
    for month_index, label in enumerate(MONTH_LABELS):
        in_bucket = _projects_in_month(projects, year, month_index)
        buckets.append(TimelineBucket(
            month=label,
            totalValue=float(sum(p.value for p in in_bucket)),
            completedProjects=len([
                p for p in in_bucket if p.status in COMPLETED_STATUSES
            ]),
            activeProjects=len([
                p for p in in_bucket if p.status not in INACTIVE_STATUSES
            ]),
            totalProjects=len(in_bucket),
        ))

    return ProjectTimeline(
        year=year,
        buckets=buckets,
        totalYearValue=float(sum(b.totalValue for b in buckets)),
        totalYearProjects=sum(b.totalProjects for b in buckets),
    )


# =============================================================================
# Revenue Timeline
# =============================================================================


def calculate_monthly_revenue(
    projects: Optional[Sequence[Project]],
    now: datetime,
) -> List[float]:
    """
    Realized revenue for each month of the reference year.

    Args:
        projects: Project collection, or None when not loaded
        now: Reference time; months after its month are forced to 0

    Returns:
        Twelve revenue values, January first
    """
    projects = projects or []
    now = ensure_utc(now)
    current_month = now.month - 1

    revenue: List[float] = []
    for month_index in range(len(MONTH_LABELS)):
        if month_index > current_month:
            revenue.append(0.0)
            continue
        revenue.append(float(sum(
            p.value
            for p in _projects_in_month(projects, now.year, month_index)
            if p.status in REVENUE_STATUSES
        )))
    return revenue


def build_revenue_timeline(
    projects: Optional[Sequence[Project]],
    now: datetime,
) -> RevenueTimeline:
    """
    Build the realized revenue timeline with month-over-month growth.

    January has no previous month in the timeline and reports 0 growth.

    Args:
        projects: Project collection, or None when not loaded
        now: Reference time

    Returns:
        RevenueTimeline with twelve months and the current month's figures
    """
    now = ensure_utc(now)
    current_month = now.month - 1
    revenue = calculate_monthly_revenue(projects, now)

    months: List[RevenueMonth] = []
    for month_index, label in enumerate(MONTH_LABELS):
        previous = revenue[month_index - 1] if month_index > 0 else 0.0
        months.append(RevenueMonth(
            month=label,
            revenue=revenue[month_index],
            growthPercentage=growth_percentage(revenue[month_index], previous),
        ))

    current_revenue = revenue[current_month]
    previous_revenue = revenue[current_month - 1] if current_month > 0 else 0.0

    return RevenueTimeline(
        year=now.year,
        currentMonth=MONTH_LABELS[current_month],
        months=months,
        currentMonthRevenue=current_revenue,
        previousMonthRevenue=previous_revenue,
        growthPercentage=growth_percentage(current_revenue, previous_revenue),
        totalRevenue=float(sum(revenue)),
    )

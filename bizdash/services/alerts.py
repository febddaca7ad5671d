"""
Alert derivation service.

Implements the overdue-project notification rule and the unread alert summary
shown in the dashboard alerts section.

Overdue Project Rule:
- A project is overdue when dueDate < now and its status is not completed or
  cancelled
- No new alert is proposed while an unread project_delayed alert already exists
  for the same project; read alerts do not block a new one
- daysOverdue = ceil((now - dueDate) / 1 day)
- priority: high when daysOverdue > 7, medium when > 3, low otherwise

The rule returns AlertDraft objects. Storing them belongs to the record source.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Set

from bizdash.core.clock import ceil_days, ensure_utc
from bizdash.models import (
    Alert,
    AlertDraft,
    AlertPriority,
    AlertSummary,
    AlertType,
    EntityType,
    Project,
)
from bizdash.services.kpi import CLOSED_PROJECT_STATUSES


logger = logging.getLogger(__name__)

DEFAULT_HIGH_PRIORITY_DAYS = 7
DEFAULT_MEDIUM_PRIORITY_DAYS = 3

# Higher rank is listed first
ALERT_PRIORITY_RANK: Dict[AlertPriority, int] = {
    AlertPriority.CRITICAL: 3,
    AlertPriority.HIGH: 2,
    AlertPriority.MEDIUM: 1,
    AlertPriority.LOW: 0,
}


# =============================================================================
# Overdue Project Rule
# =============================================================================


def overdue_priority(
    days_overdue: int,
    high_after_days: int = DEFAULT_HIGH_PRIORITY_DAYS,
    medium_after_days: int = DEFAULT_MEDIUM_PRIORITY_DAYS,
) -> AlertPriority:
    """
    Map days overdue to an alert priority.

    Example:
        >>> overdue_priority(8)
        <AlertPriority.HIGH: 'high'>
        >>> overdue_priority(4)
        <AlertPriority.MEDIUM: 'medium'>
        >>> overdue_priority(3)
        <AlertPriority.LOW: 'low'>
    """
    if days_overdue > high_after_days:
        return AlertPriority.HIGH
    if days_overdue > medium_after_days:
        return AlertPriority.MEDIUM
    return AlertPriority.LOW


def _open_delay_alert_ids(alerts: Sequence[Alert]) -> Set[str]:
    """Project ids that already have an unread project_delayed alert."""
    return {
        a.entityId
        for a in alerts
        if a.type == AlertType.PROJECT_DELAYED
        and a.entityType == EntityType.PROJECT
        and not a.isRead
        and a.entityId is not None
    }


def detect_overdue_project_alerts(
    projects: Optional[Sequence[Project]],
    existing_alerts: Optional[Sequence[Alert]],
    now: datetime,
    high_after_days: int = DEFAULT_HIGH_PRIORITY_DAYS,
    medium_after_days: int = DEFAULT_MEDIUM_PRIORITY_DAYS,
) -> List[AlertDraft]:
    """
    Propose project_delayed alerts for overdue projects.

    Args:
        projects: Project collection, or None when not loaded
        existing_alerts: Stored alerts used for de-duplication
        now: Reference time
        high_after_days: Days overdue above which priority is high
        medium_after_days: Days overdue above which priority is medium

    Returns:
        One AlertDraft per overdue project without an open delay alert, in
        project order
    """
    now = ensure_utc(now)
    already_alerted = _open_delay_alert_ids(existing_alerts or [])

    drafts: List[AlertDraft] = []
    for project in projects or []:
        if project.status in CLOSED_PROJECT_STATUSES or project.dueDate >= now:
            continue
        if project.id in already_alerted:
            continue

        days_overdue = ceil_days((now - project.dueDate).total_seconds())
        due_label = project.dueDate.strftime("%d/%m/%Y")
        drafts.append(AlertDraft(
            type=AlertType.PROJECT_DELAYED,
            title=f"Projeto Atrasado: {project.name}",
            description=(
                f'O projeto "{project.name}" está atrasado há {days_overdue} dias. '
                f"Data de entrega: {due_label}"
            ),
            entityId=project.id,
            entityType=EntityType.PROJECT,
            priority=overdue_priority(days_overdue, high_after_days, medium_after_days),
            daysOverdue=days_overdue,
        ))

    logger.debug(
        f"Overdue project rule: {len(drafts)} new alerts, "
        f"{len(already_alerted)} projects already alerted"
    )
    return drafts


# =============================================================================
# Alert Summary
# =============================================================================


def summarize_alerts(alerts: Optional[Sequence[Alert]]) -> AlertSummary:
    """
    Summarize unread alerts for the alerts section.

    Unread alerts are ordered by priority (critical first), then by createdAt
    (newest first); alerts without createdAt come last within their priority.

    Args:
        alerts: Alert collection, or None when not loaded

    Returns:
        AlertSummary with counts keyed by enum value
    """
    alerts = alerts or []
    unread = [a for a in alerts if not a.isRead]

    by_type: Dict[str, int] = {t.value: 0 for t in AlertType}
    by_priority: Dict[str, int] = {p.value: 0 for p in AlertPriority}
    for alert in unread:
        by_type[alert.type.value] += 1
        by_priority[alert.priority.value] += 1

    ordered = sorted(
        unread,
        key=lambda a: (
            ALERT_PRIORITY_RANK[a.priority],
            a.createdAt is not None,
            a.createdAt.timestamp() if a.createdAt is not None else 0.0,
        ),
        reverse=True,
    )

    return AlertSummary(
        total=len(alerts),
        unread=len(unread),
        unreadByType=by_type,
        unreadByPriority=by_priority,
        unreadAlerts=ordered,
    )

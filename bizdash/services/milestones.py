"""
Milestone status service for the "Próximos Milestones" panel.

State rules:
- completed: isCompleted is true
- otherwise daysUntilDue = ceil((dueDate - now) / 1 day)
  - daysUntilDue < 0            -> overdue
  - daysUntilDue <= due-soon    -> due_soon (default 3 days)
  - otherwise                   -> upcoming

Next action: none when completed, notify_client when the milestone needs
client approval, deliver otherwise.
"""

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from bizdash.core.clock import ceil_days, ensure_utc
from bizdash.models import (
    Milestone,
    MilestoneAction,
    MilestoneState,
    MilestoneStatus,
    MilestoneSummary,
)


DEFAULT_DUE_SOON_DAYS = 3


def classify_milestone(
    milestone: Milestone,
    now: datetime,
    due_soon_days: int = DEFAULT_DUE_SOON_DAYS,
) -> MilestoneStatus:
    """
    Derive the urgency state and next action of a milestone.

    Args:
        milestone: Milestone record
        now: Reference time
        due_soon_days: Days before due date that count as due_soon

    Returns:
        MilestoneStatus
    """
    now = ensure_utc(now)
    days_until_due = ceil_days((milestone.dueDate - now).total_seconds())

    if milestone.isCompleted:
        state = MilestoneState.COMPLETED
    elif days_until_due < 0:
        state = MilestoneState.OVERDUE
    elif days_until_due <= due_soon_days:
        state = MilestoneState.DUE_SOON
    else:
        state = MilestoneState.UPCOMING

    if milestone.isCompleted:
        action = MilestoneAction.NONE
    elif milestone.requiresClientApproval:
        action = MilestoneAction.NOTIFY_CLIENT
    else:
        action = MilestoneAction.DELIVER

    return MilestoneStatus(
        milestone=milestone,
        state=state,
        daysUntilDue=days_until_due,
        nextAction=action,
    )


def summarize_milestones(
    milestones: Optional[Sequence[Milestone]],
    now: datetime,
    due_soon_days: int = DEFAULT_DUE_SOON_DAYS,
) -> MilestoneSummary:
    """
    Count milestones per state and list the pending ones by due date.

    Args:
        milestones: Milestone collection, or None when not loaded
        now: Reference time
        due_soon_days: Days before due date that count as due_soon

    Returns:
        MilestoneSummary; counts has every state as a key
    """
    statuses = [
        classify_milestone(m, now, due_soon_days) for m in milestones or []
    ]

    counts: Dict[str, int] = {s.value: 0 for s in MilestoneState}
    for status in statuses:
        counts[status.state.value] += 1

    pending: List[MilestoneStatus] = sorted(
        (s for s in statuses if s.state != MilestoneState.COMPLETED),
        key=lambda s: s.milestone.dueDate,
    )

    return MilestoneSummary(counts=counts, pending=pending)

"""
Pytest test module for the alert and milestone services.

Test Categories:
- TestOverduePriority: Days overdue to priority mapping
- TestOverdueProjectAlerts: Overdue rule, de-duplication, draft content
- TestAlertSummary: Unread counters and display order
- TestMilestoneClassification: State boundaries and next action
- TestMilestoneSummary: Counts and pending order
"""

from datetime import timedelta

import pytest

from bizdash.models import (
    Alert,
    AlertPriority,
    AlertType,
    EntityType,
    Milestone,
    MilestoneAction,
    MilestoneState,
    Project,
    ProjectStatus,
)
from bizdash.services.alerts import (
    detect_overdue_project_alerts,
    overdue_priority,
    summarize_alerts,
)
from bizdash.services.milestones import classify_milestone, summarize_milestones


class TestOverduePriority:
    """Priority thresholds are strict: more than N days."""

    @pytest.mark.parametrize("days,expected", [
        (1, AlertPriority.LOW),
        (3, AlertPriority.LOW),
        (4, AlertPriority.MEDIUM),
        (7, AlertPriority.MEDIUM),
        (8, AlertPriority.HIGH),
        (40, AlertPriority.HIGH),
    ])
    def test_default_thresholds(self, days, expected):
        assert overdue_priority(days) == expected

    def test_custom_thresholds(self):
        assert overdue_priority(2, high_after_days=1, medium_after_days=0) == AlertPriority.HIGH
        assert overdue_priority(1, high_after_days=1, medium_after_days=0) == AlertPriority.MEDIUM


class TestOverdueProjectAlerts:
    """project_delayed drafts for overdue projects."""

    def test_sample_snapshot(self, sample_projects, sample_alerts, as_of):
        drafts = detect_overdue_project_alerts(sample_projects, sample_alerts, as_of)

        # p2 already has an unread delay alert; p3's alert was read
        assert [d.entityId for d in drafts] == ["p3", "p6"]
        assert all(d.type == AlertType.PROJECT_DELAYED for d in drafts)
        assert all(d.entityType == EntityType.PROJECT for d in drafts)

    def test_days_overdue_round_up(self, sample_projects, as_of):
        drafts = {
            d.entityId: d
            for d in detect_overdue_project_alerts(sample_projects, [], as_of)
        }
        # 10.5, 2.5 and exactly 5 days late
        assert drafts["p2"].daysOverdue == 11
        assert drafts["p3"].daysOverdue == 3
        assert drafts["p6"].daysOverdue == 5
        assert drafts["p2"].priority == AlertPriority.HIGH
        assert drafts["p3"].priority == AlertPriority.LOW
        assert drafts["p6"].priority == AlertPriority.MEDIUM

    def test_draft_text(self, sample_projects, as_of):
        draft = detect_overdue_project_alerts(sample_projects, [], as_of)[1]
        assert draft.entityId == "p3"
        assert draft.title == "Projeto Atrasado: Landing Page"
        assert draft.description == (
            'O projeto "Landing Page" está atrasado há 3 dias. '
            "Data de entrega: 13/06/2026"
        )

    def test_read_alert_does_not_block(self, as_of):
        project = Project(
            id="p", name="X", value=1, status=ProjectStatus.DELIVERY,
            startDate=as_of - timedelta(days=30), dueDate=as_of - timedelta(days=1),
        )
        read = Alert(
            id="a", type=AlertType.PROJECT_DELAYED, title="t", isRead=True,
            entityId="p", entityType=EntityType.PROJECT,
        )
        unread = read.model_copy(update={"isRead": False})

        assert len(detect_overdue_project_alerts([project], [read], as_of)) == 1
        assert detect_overdue_project_alerts([project], [unread], as_of) == []

    def test_other_alert_types_do_not_block(self, as_of):
        project = Project(
            id="p", value=1, status=ProjectStatus.DEVELOPMENT,
            startDate=as_of - timedelta(days=30), dueDate=as_of - timedelta(days=1),
        )
        other = Alert(
            id="a", type=AlertType.MILESTONE_DUE, title="t",
            entityId="p", entityType=EntityType.PROJECT,
        )
        assert len(detect_overdue_project_alerts([project], [other], as_of)) == 1

    def test_closed_projects_are_skipped(self, as_of):
        projects = [
            Project(
                id=status.value, value=1, status=status,
                startDate=as_of - timedelta(days=30),
                dueDate=as_of - timedelta(days=10),
            )
            for status in (ProjectStatus.COMPLETED, ProjectStatus.CANCELLED)
        ]
        assert detect_overdue_project_alerts(projects, None, as_of) == []

    @pytest.mark.edge
    def test_no_projects(self, as_of):
        assert detect_overdue_project_alerts(None, None, as_of) == []


class TestAlertSummary:
    """Unread alert summary."""

    def test_counters(self, sample_alerts):
        summary = summarize_alerts(sample_alerts)

        assert summary.total == 5
        assert summary.unread == 4
        assert summary.unreadByType["project_delayed"] == 1
        assert summary.unreadByType["payment_pending"] == 1
        assert summary.unreadByType["subscription_due"] == 0
        assert summary.unreadByPriority == {
            "low": 1, "medium": 0, "high": 2, "critical": 1,
        }

    def test_order_priority_then_newest(self, sample_alerts):
        order = [a.id for a in summarize_alerts(sample_alerts).unreadAlerts]
        # a4 has no createdAt and goes after a1 within high priority
        assert order == ["a5", "a1", "a4", "a2"]

    def test_every_alert_type_is_a_key(self):
        summary = summarize_alerts([])
        assert set(summary.unreadByType) == {t.value for t in AlertType}
        assert set(summary.unreadByPriority) == {p.value for p in AlertPriority}

    @pytest.mark.edge
    def test_no_alerts(self):
        summary = summarize_alerts(None)
        assert summary.total == 0
        assert summary.unread == 0
        assert summary.unreadAlerts == []


class TestMilestoneClassification:
    """State boundaries in whole days relative to the reference time."""

    @pytest.mark.parametrize("offset_days,expected", [
        (-1, MilestoneState.OVERDUE),
        (0, MilestoneState.DUE_SOON),
        (3, MilestoneState.DUE_SOON),
        (4, MilestoneState.UPCOMING),
    ])
    def test_state_boundaries(self, as_of, offset_days, expected):
        milestone = Milestone(
            id="m", title="t", dueDate=as_of + timedelta(days=offset_days)
        )
        status = classify_milestone(milestone, as_of)
        assert status.state == expected
        assert status.daysUntilDue == offset_days

    def test_partial_day_rounds_up(self, as_of):
        milestone = Milestone(id="m", title="t", dueDate=as_of + timedelta(hours=73))
        status = classify_milestone(milestone, as_of)
        assert status.daysUntilDue == 4
        assert status.state == MilestoneState.UPCOMING

    def test_custom_due_soon_window(self, as_of):
        milestone = Milestone(id="m", title="t", dueDate=as_of + timedelta(days=5))
        assert classify_milestone(milestone, as_of, due_soon_days=7).state == MilestoneState.DUE_SOON

    def test_completed_wins_over_dates(self, as_of):
        milestone = Milestone(
            id="m", title="t", isCompleted=True, dueDate=as_of - timedelta(days=30)
        )
        status = classify_milestone(milestone, as_of)
        assert status.state == MilestoneState.COMPLETED
        assert status.nextAction == MilestoneAction.NONE

    def test_next_action(self, as_of):
        due = as_of + timedelta(days=10)
        approval = Milestone(id="a", title="t", dueDate=due, requiresClientApproval=True)
        plain = Milestone(id="b", title="t", dueDate=due)
        assert classify_milestone(approval, as_of).nextAction == MilestoneAction.NOTIFY_CLIENT
        assert classify_milestone(plain, as_of).nextAction == MilestoneAction.DELIVER


class TestMilestoneSummary:
    """Milestone counts and the pending list."""

    def test_counts(self, sample_milestones, as_of):
        summary = summarize_milestones(sample_milestones, as_of)
        assert summary.counts == {
            "completed": 1, "overdue": 1, "due_soon": 1, "upcoming": 1,
        }

    def test_pending_ordered_by_due_date(self, sample_milestones, as_of):
        pending = summarize_milestones(sample_milestones, as_of).pending
        assert [p.milestone.id for p in pending] == ["m2", "m3", "m4"]
        assert pending[1].nextAction == MilestoneAction.NOTIFY_CLIENT

    @pytest.mark.edge
    def test_no_milestones(self, as_of):
        summary = summarize_milestones(None, as_of)
        assert summary.pending == []
        assert all(count == 0 for count in summary.counts.values())

"""
Pytest Configuration and Shared Fixtures for the Business Dashboard Tests.

This module provides fixtures and configuration for all backend tests:
- Async test execution with pytest-asyncio (router handlers are coroutines)
- A fixed reference time so every derivation is deterministic
- A small sample snapshot covering every record collection and status
- Settings instances for tests that override derivation thresholds

Sample Snapshot (reference time 2026-06-15 12:00 UTC):
- 5 clients: 2 with an active subscription, 1 inactive, 1 outside the heatmap grid
- 6 projects: one per status, 3 overdue open projects, 1 started in 2025
- 4 subscriptions: 2 active (MRR 800), 1 cancelled, 1 paused
- 5 alerts: 4 unread, 1 created 45 days before the reference time
- 4 milestones: one per derived state
- 3 proposals: 2 sent, 2 created in the reference month
"""

from datetime import datetime, timezone
from typing import List

import pytest

from bizdash.core.config import Settings
from bizdash.models import (
    Alert,
    AlertPriority,
    AlertType,
    Client,
    ClientStatus,
    EntityType,
    Milestone,
    Project,
    ProjectStatus,
    Proposal,
    ProposalStatus,
    RecordSnapshot,
    Subscription,
    SubscriptionStatus,
)


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Configure custom pytest markers for test organization.

    Custom markers defined:
    - api: Tests that go through the FastAPI router or application
    - edge: Boundary and empty-input behavior

    Usage:
        # Run only the service-level tests:
        pytest -m "not api"
    """
    config.addinivalue_line(
        'markers',
        'api: marks tests exercising the FastAPI layer'
    )
    config.addinivalue_line(
        'markers',
        'edge: marks boundary and empty-input tests'
    )


def utc(*args) -> datetime:
    """Shorthand for an aware UTC datetime."""
    return datetime(*args, tzinfo=timezone.utc)


# ============================================================
# REFERENCE TIME AND SETTINGS
# ============================================================

@pytest.fixture
def as_of() -> datetime:
    """Reference time used by every derivation in the tests: mid June 2026."""
    return utc(2026, 6, 15, 12, 0)


@pytest.fixture
def settings() -> Settings:
    """Settings with the default derivation thresholds."""
    return Settings()


# ============================================================
# SAMPLE RECORDS
# ============================================================

@pytest.fixture
def sample_clients() -> List[Client]:
    """
    Clients spread over the heatmap grid.

    c1 and c4 have an active subscription; c3 is inactive; c5's sector and
    source match no heatmap label.
    """
    return [
        Client(
            id="c1", name="Ana", company="Souza Tech",
            sector="Tecnologia e Inovação", source="Indicação Direta",
            status=ClientStatus.ACTIVE, hasActiveSubscription=True,
        ),
        Client(
            id="c2", name="Bruno", company="Agência Norte",
            sector="Marketing Digital", source="Google Ads",
            status=ClientStatus.PROSPECT,
        ),
        Client(
            id="c3", name="Carla", company="CL Consultoria",
            sector="Consultoria", source="LinkedIn",
            status=ClientStatus.INACTIVE,
        ),
        Client(
            id="c4", name="Diego", company="Dev House",
            sector="tecnologia", source="google ads",
            status=ClientStatus.ACTIVE, hasActiveSubscription=True,
        ),
        Client(
            id="c5", name="Eva", company="Loja Eva",
            sector="Varejo", source="Instagram",
            status=ClientStatus.PROSPECT,
        ),
    ]


@pytest.fixture
def sample_projects() -> List[Project]:
    """
    One project per status.

    Overdue at the reference time: p2 (10.5 days), p3 (2.5 days), p6 (5 days).
    p6 started in 2025 and is outside the 2026 timelines.
    """
    return [
        Project(
            id="p1", name="Portal", clientId="c1", value=10000,
            status=ProjectStatus.COMPLETED,
            startDate=utc(2026, 1, 10), dueDate=utc(2026, 3, 1),
        ),
        Project(
            id="p2", name="App Mobile", clientId="c1", value=5000,
            status=ProjectStatus.DEVELOPMENT,
            startDate=utc(2026, 5, 5), dueDate=utc(2026, 6, 5),
        ),
        Project(
            id="p3", name="Landing Page", clientId="c2", value=8000,
            status=ProjectStatus.DELIVERY,
            startDate=utc(2026, 6, 1), dueDate=utc(2026, 6, 13),
        ),
        Project(
            id="p4", name="CRM", clientId="c4", value=2000,
            status=ProjectStatus.POST_SALE,
            startDate=utc(2026, 5, 20), dueDate=utc(2026, 6, 30),
        ),
        Project(
            id="p5", name="Auditoria", clientId="c3", value=3000,
            status=ProjectStatus.CANCELLED,
            startDate=utc(2026, 2, 1), dueDate=utc(2026, 3, 1),
        ),
        Project(
            id="p6", name="Branding", clientId="c2", value=4000,
            status=ProjectStatus.DISCOVERY,
            startDate=utc(2025, 12, 1), dueDate=utc(2026, 6, 10, 12, 0),
        ),
    ]


@pytest.fixture
def sample_subscriptions() -> List[Subscription]:
    """Two active subscriptions (MRR 800), one cancelled, one paused."""
    return [
        Subscription(id="s1", clientId="c1", amount=500, status=SubscriptionStatus.ACTIVE),
        Subscription(id="s2", clientId="c4", amount=300, status=SubscriptionStatus.ACTIVE),
        Subscription(id="s3", clientId="c2", amount=200, status=SubscriptionStatus.CANCELLED),
        Subscription(id="s4", clientId="c3", amount=100, status=SubscriptionStatus.PAUSED),
    ]


@pytest.fixture
def sample_alerts() -> List[Alert]:
    """
    Stored alerts.

    a1 is an unread delay alert for p2; a3 is a read delay alert for p3.
    """
    return [
        Alert(
            id="a1", type=AlertType.PROJECT_DELAYED, title="Projeto Atrasado: App Mobile",
            entityId="p2", entityType=EntityType.PROJECT,
            priority=AlertPriority.HIGH, createdAt=utc(2026, 6, 10),
        ),
        Alert(
            id="a2", type=AlertType.PAYMENT_PENDING, title="Pagamento pendente",
            entityId="s1", entityType=EntityType.SUBSCRIPTION,
            priority=AlertPriority.LOW, createdAt=utc(2026, 6, 14),
        ),
        Alert(
            id="a3", type=AlertType.PROJECT_DELAYED, title="Projeto Atrasado: Landing Page",
            entityId="p3", entityType=EntityType.PROJECT, isRead=True,
            priority=AlertPriority.MEDIUM, createdAt=utc(2026, 6, 1),
        ),
        Alert(
            id="a4", type=AlertType.UPSELL_OPPORTUNITY, title="Oportunidade de upsell",
            entityId="c1", entityType=EntityType.CLIENT,
            priority=AlertPriority.HIGH,
        ),
        Alert(
            id="a5", type=AlertType.MILESTONE_DUE, title="Milestone vencendo",
            priority=AlertPriority.CRITICAL, createdAt=utc(2026, 5, 1),
        ),
    ]


@pytest.fixture
def sample_milestones() -> List[Milestone]:
    """One milestone per derived state, listed out of due date order."""
    return [
        Milestone(
            id="m4", projectId="p4", title="Treinamento",
            dueDate=utc(2026, 7, 15),
        ),
        Milestone(
            id="m1", projectId="p1", title="Go-live", isCompleted=True,
            dueDate=utc(2026, 6, 1),
        ),
        Milestone(
            id="m3", projectId="p3", title="Aprovação do layout",
            requiresClientApproval=True, dueDate=utc(2026, 6, 17, 12, 0),
        ),
        Milestone(
            id="m2", projectId="p2", title="Beta",
            dueDate=utc(2026, 6, 14),
        ),
    ]


@pytest.fixture
def sample_proposals() -> List[Proposal]:
    """Three proposals with 100, 50 and 30 characters of text."""
    return [
        Proposal(id="pr1", text="a" * 100, status=ProposalStatus.SENT,
                 createdAt=utc(2026, 6, 1)),
        Proposal(id="pr2", text="b" * 50, status=ProposalStatus.DRAFT,
                 createdAt=utc(2026, 6, 10)),
        Proposal(id="pr3", text="c" * 30, status=ProposalStatus.SENT,
                 createdAt=utc(2026, 3, 1)),
    ]


@pytest.fixture
def sample_snapshot(
    sample_clients: List[Client],
    sample_projects: List[Project],
    sample_subscriptions: List[Subscription],
    sample_alerts: List[Alert],
    sample_milestones: List[Milestone],
    sample_proposals: List[Proposal],
) -> RecordSnapshot:
    """Snapshot holding every sample collection."""
    return RecordSnapshot(
        clients=sample_clients,
        projects=sample_projects,
        subscriptions=sample_subscriptions,
        alerts=sample_alerts,
        milestones=sample_milestones,
        proposals=sample_proposals,
    )


@pytest.fixture
def empty_snapshot() -> RecordSnapshot:
    """Snapshot with no collection loaded."""
    return RecordSnapshot()

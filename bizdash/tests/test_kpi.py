"""
Pytest test module for the KPI aggregation service.

Test Categories:
- TestIndividualMetrics: MRR, conversion, average value, overdue, churn, LTV
- TestCalculateKPIs: Full summary on the sample snapshot
- TestZeroDenominators: Empty and missing collections never divide by zero
"""

from datetime import timedelta

import pytest

from bizdash.models import (
    Client,
    KPISummary,
    Project,
    ProjectStatus,
    Subscription,
    SubscriptionStatus,
)
from bizdash.services.kpi import (
    calculate_avg_project_value,
    calculate_churn_rate,
    calculate_conversion_rate,
    calculate_kpis,
    calculate_ltv,
    calculate_mrr,
    count_active_subscriptions,
    count_overdue_projects,
)
from bizdash.tests.conftest import utc


class TestIndividualMetrics:
    """Each KPI formula on the sample records."""

    def test_mrr_sums_only_active_subscriptions(self, sample_subscriptions):
        assert calculate_mrr(sample_subscriptions) == pytest.approx(800.0)

    def test_paused_subscription_is_neither_mrr_nor_churn(self):
        subs = [Subscription(id="s", amount=100, status=SubscriptionStatus.PAUSED)]
        assert calculate_mrr(subs) == 0.0
        assert calculate_churn_rate(subs) == 0.0

    def test_active_subscription_count(self, sample_subscriptions):
        assert count_active_subscriptions(sample_subscriptions) == 2

    def test_conversion_rate(self, sample_clients):
        # 2 active out of 5 clients
        assert calculate_conversion_rate(sample_clients) == pytest.approx(40.0)

    def test_avg_project_value(self, sample_projects):
        assert calculate_avg_project_value(sample_projects) == pytest.approx(32000 / 6)

    def test_overdue_excludes_closed_projects(self, sample_projects, as_of):
        # p2, p3 and p6 are late; p1 (completed) and p5 (cancelled) are not counted
        assert count_overdue_projects(sample_projects, as_of) == 3

    def test_project_due_exactly_now_is_not_overdue(self, as_of):
        project = Project(
            id="p", value=1, status=ProjectStatus.DEVELOPMENT,
            startDate=as_of - timedelta(days=10), dueDate=as_of,
        )
        assert count_overdue_projects([project], as_of) == 0
        assert count_overdue_projects([project], as_of + timedelta(seconds=1)) == 1

    def test_churn_rate(self, sample_subscriptions):
        assert calculate_churn_rate(sample_subscriptions) == pytest.approx(25.0)

    def test_ltv_annualizes_mrr_per_active_client(self):
        assert calculate_ltv(800.0, 2) == pytest.approx(4800.0)

    def test_all_cancelled_is_full_churn(self):
        subs = [
            Subscription(id=str(i), amount=10, status=SubscriptionStatus.CANCELLED)
            for i in range(3)
        ]
        assert calculate_churn_rate(subs) == pytest.approx(100.0)

    def test_avg_value_times_count_is_total(self, sample_projects):
        avg = calculate_avg_project_value(sample_projects)
        assert avg * len(sample_projects) == pytest.approx(
            sum(p.value for p in sample_projects)
        )


class TestCalculateKPIs:
    """Full KPI summary."""

    def test_sample_snapshot(
        self, sample_projects, sample_clients, sample_subscriptions, as_of
    ):
        kpis = calculate_kpis(
            sample_projects, sample_clients, sample_subscriptions, as_of
        )

        assert isinstance(kpis, KPISummary)
        assert kpis.mrr == pytest.approx(800.0)
        assert kpis.conversionRate == pytest.approx(40.0)
        assert kpis.avgProjectValue == pytest.approx(5333.3333, rel=1e-6)
        assert kpis.overdueProjects == 3
        assert kpis.churnRate == pytest.approx(25.0)
        assert kpis.ltv == pytest.approx(4800.0)
        assert kpis.activeSubscriptions == 2

    def test_same_inputs_same_output(
        self, sample_projects, sample_clients, sample_subscriptions, as_of
    ):
        first = calculate_kpis(sample_projects, sample_clients, sample_subscriptions, as_of)
        second = calculate_kpis(sample_projects, sample_clients, sample_subscriptions, as_of)
        assert first == second

    def test_naive_reference_time_is_treated_as_utc(
        self, sample_projects, sample_clients, sample_subscriptions, as_of
    ):
        naive = as_of.replace(tzinfo=None)
        assert calculate_kpis(
            sample_projects, sample_clients, sample_subscriptions, naive
        ) == calculate_kpis(
            sample_projects, sample_clients, sample_subscriptions, as_of
        )

    def test_percentages_stay_in_range(
        self, sample_projects, sample_clients, sample_subscriptions, as_of
    ):
        kpis = calculate_kpis(sample_projects, sample_clients, sample_subscriptions, as_of)
        assert 0 <= kpis.conversionRate <= 100
        assert 0 <= kpis.churnRate <= 100


@pytest.mark.edge
class TestZeroDenominators:
    """Ratios fall back to 0 instead of dividing by zero."""

    def test_all_collections_missing(self, as_of):
        kpis = calculate_kpis(None, None, None, as_of)
        assert kpis == KPISummary(
            mrr=0, conversionRate=0, avgProjectValue=0, overdueProjects=0,
            churnRate=0, ltv=0, activeSubscriptions=0,
        )

    def test_all_collections_empty(self, as_of):
        assert calculate_kpis([], [], [], as_of) == calculate_kpis(None, None, None, as_of)

    def test_only_prospects(self):
        clients = [Client(id="c"), Client(id="d")]
        assert calculate_conversion_rate(clients) == 0.0

    def test_ltv_without_active_clients(self):
        assert calculate_ltv(1000.0, 0) == 0.0

    def test_mrr_with_no_active_clients_keeps_ltv_zero(self):
        subs = [Subscription(id="s", amount=250, status=SubscriptionStatus.ACTIVE)]
        kpis = calculate_kpis([], [Client(id="c")], subs, utc(2026, 1, 1))
        assert kpis.mrr == pytest.approx(250.0)
        assert kpis.ltv == 0.0

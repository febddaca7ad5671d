"""
Client funnel service.

Buckets the client collection into the funnel stages shown on the funnel chart:

    Total -> Prospects / Ativos / Inativos

- Prospects: clients without an active subscription
- Ativos: clients with an active subscription
- Inativos: clients whose status is inactive

Inativos overlaps Prospects (an inactive client has no active subscription), so
stage counts are not meant to add up to Total.
"""

from typing import List, Optional, Sequence

from bizdash.models import Client, ClientFunnel, ClientStatus, FunnelStage


# Stage labels and chart colors, in display order
STAGE_TOTAL = ("Total", "#6366f1")
STAGE_PROSPECTS = ("Prospects", "#f59e0b")
STAGE_ACTIVE = ("Ativos", "#22c55e")
STAGE_INACTIVE = ("Inativos", "#ef4444")


def _percentage(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return count / total * 100


def build_client_funnel(clients: Optional[Sequence[Client]]) -> ClientFunnel:
    """
    Build the ordered client funnel.

    Each stage's percentage is count / total clients * 100, and 0 for every stage
    when there are no clients. The funnel conversion rate is Ativos / Total.

    Args:
        clients: Client collection, or None when not loaded

    Returns:
        ClientFunnel with four stages in display order

    Example:
        >>> funnel = build_client_funnel([])
        >>> [s.count for s in funnel.stages]
        [0, 0, 0, 0]
    """
    clients = clients or []
    total = len(clients)
    active = len([c for c in clients if c.hasActiveSubscription])
    prospects = total - active
    inactive = len([c for c in clients if c.status == ClientStatus.INACTIVE])

    stages: List[FunnelStage] = []
    for (label, color), count in (
        (STAGE_TOTAL, total),
        (STAGE_PROSPECTS, prospects),
        (STAGE_ACTIVE, active),
        (STAGE_INACTIVE, inactive),
    ):
        stages.append(FunnelStage(
            label=label,
            count=count,
            percentage=_percentage(count, total),
            color=color,
        ))

    return ClientFunnel(
        stages=stages,
        conversionRate=_percentage(active, total),
    )

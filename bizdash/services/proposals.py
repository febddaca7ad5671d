"""
Proposal insights service for the proposals card.

- totalProposals / sentProposals / draftProposals: counters by status
- avgCharacterCount: mean length of the proposal text, halves rounded up
- thisMonthProposals: proposals created in the reference month
- conversionRate: sent / total * 100
"""

import math
from datetime import datetime
from typing import Optional, Sequence

from bizdash.core.clock import ensure_utc, in_month
from bizdash.models import Proposal, ProposalInsights, ProposalStatus


def calculate_proposal_insights(
    proposals: Optional[Sequence[Proposal]],
    now: datetime,
) -> ProposalInsights:
    """
    Compute proposal counters.

    Args:
        proposals: Proposal collection, or None when not loaded
        now: Reference time selecting "this month"

    Returns:
        ProposalInsights; averages and rates are 0 when there are no proposals
    """
    proposals = proposals or []
    now = ensure_utc(now)
    total = len(proposals)
    sent = len([p for p in proposals if p.status == ProposalStatus.SENT])
    draft = len([p for p in proposals if p.status == ProposalStatus.DRAFT])

    # halves round up: 2.5 -> 3
    avg_chars = (
        math.floor(sum(len(p.text) for p in proposals) / total + 0.5) if total else 0
    )
    this_month = len([
        p for p in proposals if in_month(p.createdAt, now.year, now.month - 1)
    ])

    return ProposalInsights(
        totalProposals=total,
        sentProposals=sent,
        draftProposals=draft,
        avgCharacterCount=avg_chars,
        thisMonthProposals=this_month,
        conversionRate=sent / total * 100 if total else 0.0,
    )

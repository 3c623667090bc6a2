"""
Aggregates over customer collections for the dashboard.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from shared.config import get_config
from ..rules.models import Customer, CustomerStatus
from .snapshot import DeliveryCounts, round_half_up


@dataclass(frozen=True)
class SegmentSummary:
    """Customer count, revenue and share of one segment."""
    name: str
    count: int
    revenue: float
    share: float


@dataclass(frozen=True)
class AudienceSummary:
    """Headline numbers for a customer collection."""
    total: int
    active: int
    total_revenue: float
    average_order_value: float


def segment_breakdown(
    customers: Sequence[Customer],
    segments: Optional[Sequence[str]] = None
) -> List[SegmentSummary]:
    """One summary per segment label, in the order given.

    ``share`` is a percentage of the whole collection.
    """
    if segments is None:
        segments = get_config().default_segments
    
    total = len(customers)
    breakdown = []
    for name in segments:
        members = [customer for customer in customers if customer.segment == name]
        breakdown.append(SegmentSummary(
            name=name,
            count=len(members),
            revenue=sum(customer.total_spent for customer in members),
            share=(len(members) / total) * 100 if total else 0.0
        ))
    
    return breakdown


def audience_summary(customers: Sequence[Customer]) -> AudienceSummary:
    """Headline totals for a customer collection."""
    revenue = sum(customer.total_spent for customer in customers)
    orders = sum(customer.total_orders for customer in customers)
    
    return AudienceSummary(
        total=len(customers),
        active=sum(1 for customer in customers if customer.status == CustomerStatus.ACTIVE),
        total_revenue=revenue,
        average_order_value=revenue / orders if orders else 0.0
    )


@dataclass(frozen=True)
class CampaignSummary:
    """Delivery totals across sent campaigns."""
    campaigns: int
    total_sent: int
    average_rate: float
    overall_rate: int


def campaign_summary(deliveries: Sequence[DeliveryCounts]) -> CampaignSummary:
    """Aggregate delivery counts of several campaigns.

    ``average_rate`` is the mean of the unrounded per-campaign percentages
    (0 for a campaign with an empty audience). ``overall_rate`` is sent
    messages over all audiences combined, as a whole percentage.
    """
    total_sent = sum(counts.sent for counts in deliveries)
    total_audience = sum(counts.total for counts in deliveries)
    rates = [counts.sent / counts.total * 100 if counts.total else 0.0 for counts in deliveries]
    
    return CampaignSummary(
        campaigns=len(deliveries),
        total_sent=total_sent,
        average_rate=sum(rates) / len(rates) if rates else 0.0,
        overall_rate=round_half_up(total_sent / total_audience * 100) if total_audience else 0
    )

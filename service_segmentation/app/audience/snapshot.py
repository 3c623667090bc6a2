"""
Frozen campaign audiences and delivery counts.

A campaign's audience is computed once, synchronously, when the campaign
is created. Delivery reporting works from that snapshot and never
re-evaluates the rules.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence, Tuple

from shared.config import get_config
from shared.errors import ValidationError
from shared.logging import campaign_context, get_logger
from ..rules.engine import Clock, utc_now
from ..rules.models import Connector, Customer, Rule
from .filter import AudienceFilter


logger = get_logger("segmentation.snapshot")


@dataclass(frozen=True)
class AudienceSnapshot:
    """Audience of a campaign as it was when the campaign was created."""
    campaign_id: Optional[str]
    rules: Tuple[Rule, ...]
    customer_ids: Tuple[str, ...]
    taken_at: datetime

    @property
    def size(self) -> int:
        return len(self.customer_ids)


@dataclass(frozen=True)
class DeliveryCounts:
    """Simulated delivery outcome for a snapshot."""
    sent: int
    failed: int

    @property
    def total(self) -> int:
        return self.sent + self.failed

    @property
    def rate(self) -> int:
        """Delivered share of the audience as a whole percentage, 0 for an empty audience."""
        if not self.total:
            return 0
        return round_half_up(self.sent / self.total * 100)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounded up."""
    return math.floor(value + 0.5)


def take_snapshot(
    customers: Sequence[Customer],
    rules: Sequence[Rule],
    campaign_id: Optional[str] = None,
    clock: Optional[Clock] = None
) -> AudienceSnapshot:
    """Select the audience for ``rules`` and freeze it."""
    clock = clock or utc_now
    with campaign_context(campaign_id):
        taken_at = clock()
        audience = AudienceFilter(clock=lambda: taken_at).select(customers, rules)
        
        snapshot = AudienceSnapshot(
            campaign_id=campaign_id,
            rules=tuple(rules),
            customer_ids=tuple(customer.id for customer in audience),
            taken_at=taken_at
        )
        
        logger.info(
            "Audience snapshot taken",
            audience_size=snapshot.size,
            rules=describe_rules(rules)
        )
    
    return snapshot


def delivery_counts(snapshot: AudienceSnapshot, success_rate: Optional[float] = None) -> DeliveryCounts:
    """Split a snapshot's size into sent and failed deliveries."""
    if success_rate is None:
        success_rate = get_config().delivery_success_rate
    
    if not 0.0 <= success_rate <= 1.0:
        raise ValidationError(
            "Delivery success rate must be between 0 and 1",
            details={"success_rate": success_rate}
        )
    
    sent = math.floor(snapshot.size * success_rate)
    return DeliveryCounts(sent=sent, failed=snapshot.size - sent)


def describe_rules(rules: Sequence[Rule]) -> str:
    """Human-readable rendering of a rule chain in authored order."""
    if not rules:
        return "All customers"
    
    parts = []
    for index, rule in enumerate(rules):
        if index > 0:
            connector = rules[index - 1].connector or Connector.AND
            parts.append(getattr(connector, "value", connector))
        parts.append(
            f"{getattr(rule.field, 'value', rule.field)} "
            f"{getattr(rule.operator, 'value', rule.operator)} {rule.value}"
        )
    
    return " ".join(parts)

"""
Audience selection for campaigns.
"""

from typing import List, Optional, Sequence

from shared.config import get_config
from shared.logging import get_logger
from ..rules.engine import Clock, RuleEvaluator, utc_now
from ..rules.models import Customer, Rule


class AudienceFilter:
    """Applies a rule chain across a customer collection."""
    
    def __init__(
        self,
        evaluator: Optional[RuleEvaluator] = None,
        clock: Optional[Clock] = None,
        preview_limit: Optional[int] = None
    ):
        self.logger = get_logger("segmentation.audience_filter")
        self.clock = clock or (evaluator.clock if evaluator else utc_now)
        self.evaluator = evaluator or RuleEvaluator(clock=self.clock)
        self.preview_limit = preview_limit
    
    def select(self, customers: Sequence[Customer], rules: Sequence[Rule]) -> List[Customer]:
        """Return the customers matching ``rules``, in their original order.

        With no rules every customer is in the audience. The clock is read
        once so the whole pass is evaluated at the same instant.
        """
        if not rules:
            return list(customers)
        
        now = self.clock()
        audience = [
            customer for customer in customers
            if self.evaluator.matches(customer, rules, now=now)
        ]
        
        self.logger.debug(
            "Audience selected",
            rules=len(rules),
            customers=len(customers),
            audience=len(audience)
        )
        
        return audience
    
    def size(self, customers: Sequence[Customer], rules: Sequence[Rule]) -> int:
        """Number of customers in the audience."""
        return len(self.select(customers, rules))
    
    def preview(
        self,
        customers: Sequence[Customer],
        rules: Sequence[Rule],
        limit: Optional[int] = None
    ) -> List[Customer]:
        """First ``limit`` audience members for the live preview table."""
        if limit is None:
            limit = self.preview_limit if self.preview_limit is not None else get_config().preview_limit
        return self.select(customers, rules)[:max(limit, 0)]


def select_audience(
    customers: Sequence[Customer],
    rules: Sequence[Rule],
    clock: Optional[Clock] = None
) -> List[Customer]:
    """Customers matching ``rules``; every customer when ``rules`` is empty."""
    return AudienceFilter(clock=clock).select(customers, rules)


def audience_size(
    customers: Sequence[Customer],
    rules: Sequence[Rule],
    clock: Optional[Clock] = None
) -> int:
    """Size of the audience selected by ``rules``."""
    return AudienceFilter(clock=clock).size(customers, rules)


def preview_audience(
    customers: Sequence[Customer],
    rules: Sequence[Rule],
    limit: Optional[int] = None,
    clock: Optional[Clock] = None
) -> List[Customer]:
    """First audience members for the live preview table."""
    return AudienceFilter(clock=clock).preview(customers, rules, limit=limit)

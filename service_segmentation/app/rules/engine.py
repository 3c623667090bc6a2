"""
Rule evaluation engine for the Segmentation Service.

Rules are folded strictly left to right: the connector stored on rule
``i - 1`` joins rule ``i`` to the result accumulated so far, so
``A AND B OR C`` is ``(A AND B) OR C``. There is no AND-before-OR
precedence.
"""

import math
import operator as op
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Sequence

from shared.logging import get_logger
from .models import (
    Customer, Rule, RuleField, RuleOperator, Connector, NUMERIC_FIELDS, TEXT_FIELDS
)


Clock = Callable[[], datetime]

SECONDS_PER_DAY = 86400

_INFINITIES = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}
_RADIX_PREFIXES = ("0x", "0o", "0b")

_NUMERIC_COMPARISONS: Dict[RuleOperator, Callable[[float, float], bool]] = {
    RuleOperator.GREATER_THAN: op.gt,
    RuleOperator.LESS_THAN: op.lt,
    RuleOperator.GREATER_OR_EQUAL: op.ge,
    RuleOperator.LESS_OR_EQUAL: op.le,
    RuleOperator.EQUALS: op.eq,
}

_DAYS_SINCE_COMPARISONS: Dict[RuleOperator, Callable[[float, float], bool]] = {
    RuleOperator.GREATER_THAN: op.gt,
    RuleOperator.LESS_THAN: op.lt,
}


def utc_now() -> datetime:
    """Default clock: the current wall-clock time in UTC."""
    return datetime.now(timezone.utc)


def to_number(value: Any) -> float:
    """Coerce a rule value to a number, NaN when it cannot be read as one."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if text in _INFINITIES:
            return _INFINITIES[text]
        lowered = text.lower()
        # float() also reads "inf", "nan" and digit separators
        if "_" in text or "inf" in lowered or "nan" in lowered:
            return math.nan
        try:
            if lowered.startswith(_RADIX_PREFIXES):
                return float(int(text, 0))
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def parse_order_date(raw: str) -> Optional[datetime]:
    """Parse an ISO order date; date-only and naive values are read as UTC."""
    try:
        text = raw.strip()
    except AttributeError:
        return None
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        return _as_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


def days_since(raw_date: str, now: datetime) -> Optional[int]:
    """Whole days elapsed between ``raw_date`` and ``now``, rounded down."""
    last_order = parse_order_date(raw_date)
    if last_order is None:
        return None
    elapsed = (_as_utc(now) - last_order).total_seconds()
    return math.floor(elapsed / SECONDS_PER_DAY)


class RuleEvaluator:
    """Decides whether a single customer satisfies an ordered rule chain.

    The evaluator keeps no state between calls. The clock is only read
    when a caller does not supply ``now``.
    """
    
    def __init__(self, clock: Optional[Clock] = None):
        self.logger = get_logger("segmentation.rule_evaluator")
        self.clock = clock or utc_now
    
    def matches(self, customer: Customer, rules: Sequence[Rule], now: Optional[datetime] = None) -> bool:
        """Fold ``rules`` left to right against ``customer``.

        An empty chain returns True; the audience filter short-circuits
        that case before calling in.
        """
        if not rules:
            return True
        if now is None:
            now = self.clock()
        
        result = self.evaluate_rule(customer, rules[0], now)
        for previous, rule in zip(rules, rules[1:]):
            rule_result = self.evaluate_rule(customer, rule, now)
            if (previous.connector or Connector.AND) == Connector.AND:
                result = result and rule_result
            else:
                result = result or rule_result
        
        return result
    
    def evaluate_rule(self, customer: Customer, rule: Rule, now: datetime) -> bool:
        """Evaluate one rule. Malformed or unknown rules never match."""
        if rule.operator == RuleOperator.UNKNOWN:
            self._degraded(rule, "unknown operator")
            return False
        
        if rule.field in NUMERIC_FIELDS:
            return self._evaluate_numeric(self._numeric_value(customer, rule.field), rule)
        
        if rule.field in TEXT_FIELDS:
            return self._evaluate_text(self._text_value(customer, rule.field), rule)
        
        if rule.field == RuleField.LAST_ORDER_DATE:
            return self._evaluate_days_since(customer, rule, now)
        
        self._degraded(rule, "unknown field")
        return False
    
    def _evaluate_numeric(self, actual: float, rule: Rule) -> bool:
        compare = _NUMERIC_COMPARISONS.get(rule.operator)
        if compare is None:
            self._degraded(rule, "operator not supported for numeric field")
            return False
        
        expected = to_number(rule.value)
        if math.isnan(expected):
            self._degraded(rule, "value is not a number")
            return False
        
        return compare(actual, expected)
    
    def _evaluate_text(self, actual: str, rule: Rule) -> bool:
        # Any operator other than "=" means "differs from"
        same = isinstance(rule.value, str) and actual == rule.value
        if rule.operator == RuleOperator.EQUALS:
            return same
        return not same
    
    def _evaluate_days_since(self, customer: Customer, rule: Rule, now: datetime) -> bool:
        compare = _DAYS_SINCE_COMPARISONS.get(rule.operator)
        if compare is None:
            self._degraded(rule, "operator not supported for lastOrderDate")
            return False
        
        elapsed_days = days_since(customer.last_order_date, now)
        if elapsed_days is None:
            self.logger.debug(
                "Unparsable last order date",
                customer_id=customer.id,
                last_order_date=customer.last_order_date
            )
            return False
        
        expected = to_number(rule.value)
        if math.isnan(expected):
            self._degraded(rule, "value is not a number")
            return False
        
        return compare(elapsed_days, expected)
    
    @staticmethod
    def _numeric_value(customer: Customer, field: RuleField) -> float:
        if field == RuleField.TOTAL_SPENT:
            return customer.total_spent
        return customer.total_orders
    
    @staticmethod
    def _text_value(customer: Customer, field: RuleField) -> str:
        if field == RuleField.SEGMENT:
            return customer.segment
        status = customer.status
        return status.value if hasattr(status, "value") else str(status)
    
    def _degraded(self, rule: Rule, reason: str) -> None:
        self.logger.debug(
            "Rule evaluates as non-match",
            rule_id=rule.rule_id,
            field=getattr(rule.field, "value", rule.field),
            operator=getattr(rule.operator, "value", rule.operator),
            reason=reason
        )


_default_evaluator = RuleEvaluator()


def matches(customer: Customer, rules: Sequence[Rule], now: Optional[datetime] = None) -> bool:
    """Evaluate ``rules`` against ``customer`` with the default evaluator."""
    return _default_evaluator.matches(customer, rules, now=now)

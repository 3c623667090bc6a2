"""
Authoring checks for campaign rule chains.

The engine itself tolerates malformed rules (they simply never match).
These helpers let the campaign builder tell the user what is wrong
before a campaign is saved.
"""

import math
from dataclasses import dataclass, asdict
from typing import List, Optional, Sequence

from shared.errors import ValidationError
from .engine import to_number
from .models import Rule, RuleField, RuleOperator, TEXT_FIELDS, SUPPORTED_OPERATORS


@dataclass(frozen=True)
class RuleIssue:
    """A problem found in one rule of a chain."""
    index: int
    rule_id: Optional[str]
    message: str


def find_rule_issues(rules: Sequence[Rule]) -> List[RuleIssue]:
    """Return every authoring problem in ``rules``, in chain order."""
    issues: List[RuleIssue] = []
    
    for index, rule in enumerate(rules):
        messages = _rule_problems(rule)
        issues.extend(RuleIssue(index=index, rule_id=rule.rule_id, message=message) for message in messages)
    
    return issues


def _rule_problems(rule: Rule) -> List[str]:
    if rule.field == RuleField.UNKNOWN:
        return ["Unknown field"]
    
    problems: List[str] = []
    if rule.operator == RuleOperator.UNKNOWN:
        problems.append("Unknown operator")
    elif rule.operator not in SUPPORTED_OPERATORS[rule.field]:
        problems.append(f"Operator '{rule.operator.value}' is not available for '{rule.field.value}'")
    
    if rule.field in TEXT_FIELDS:
        if not isinstance(rule.value, str) or not rule.value:
            problems.append("Value must be a non-empty label")
    elif math.isnan(to_number(rule.value)):
        problems.append("Value must be a number")
    
    return problems


def check_rules(rules: Sequence[Rule]) -> None:
    """Raise ValidationError when ``rules`` has any authoring problem."""
    issues = find_rule_issues(rules)
    if issues:
        raise ValidationError(
            "Invalid audience rules",
            details={"issues": [asdict(issue) for issue in issues]}
        )

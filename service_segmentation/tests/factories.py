"""
Customer and rule factories for segmentation tests.
"""

from typing import Any, List, Optional

from service_segmentation.app.rules.models import (
    Customer, CustomerPayload, CustomerStatus, Rule, RuleField, RuleOperator, Connector
)
from shared.test_helpers import TestDataFactory


class CustomerFactory:
    """Factory for creating test customers."""

    @staticmethod
    def create_test_customers() -> List[Customer]:
        """Create the sample customer collection."""
        return [
            CustomerPayload.model_validate(record).to_customer()
            for record in TestDataFactory.create_test_customer_records()
        ]

    @staticmethod
    def create_customer(
        customer_id: str = "c-1",
        total_spent: float = 0,
        total_orders: int = 0,
        last_order_date: str = "2024-05-01",
        segment: str = "Regular",
        status: CustomerStatus = CustomerStatus.ACTIVE
    ) -> Customer:
        """Create a single customer with only the interesting fields set."""
        return Customer(
            id=customer_id,
            name=f"Customer {customer_id}",
            email=f"{customer_id}@example.com",
            phone="+91 9000000000",
            total_spent=total_spent,
            total_orders=total_orders,
            last_order_date=last_order_date,
            segment=segment,
            status=status
        )


def make_rule(
    field: str,
    operator: str,
    value: Any,
    connector: Optional[str] = None,
    rule_id: Optional[str] = None
) -> Rule:
    """Build a Rule from raw tokens, the way the campaign builder sends them."""
    return Rule(
        field=RuleField(field),
        operator=RuleOperator(operator),
        value=value,
        connector=Connector(connector) if connector else None,
        rule_id=rule_id
    )

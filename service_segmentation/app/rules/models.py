"""
Rule and customer data models for the Segmentation Service.
"""

from typing import Any, Dict, FrozenSet, Optional, Union
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


RuleValue = Union[str, int, float]


class RuleField(str, Enum):
    """Customer attributes a rule can filter on."""
    TOTAL_SPENT = "totalSpent"
    TOTAL_ORDERS = "totalOrders"
    SEGMENT = "segment"
    STATUS = "status"
    LAST_ORDER_DATE = "lastOrderDate"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


class RuleOperator(str, Enum):
    """Comparison operators."""
    GREATER_THAN = ">"
    LESS_THAN = "<"
    GREATER_OR_EQUAL = ">="
    LESS_OR_EQUAL = "<="
    EQUALS = "="
    NOT_EQUALS = "!="
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


class Connector(str, Enum):
    """How the next rule combines with the running result."""
    AND = "AND"
    OR = "OR"


class CustomerStatus(str, Enum):
    """Customer status."""
    ACTIVE = "active"
    INACTIVE = "inactive"


NUMERIC_FIELDS: FrozenSet[RuleField] = frozenset({RuleField.TOTAL_SPENT, RuleField.TOTAL_ORDERS})
TEXT_FIELDS: FrozenSet[RuleField] = frozenset({RuleField.SEGMENT, RuleField.STATUS})

# Operators the campaign builder offers per field
SUPPORTED_OPERATORS: Dict[RuleField, FrozenSet[RuleOperator]] = {
    RuleField.TOTAL_SPENT: frozenset({
        RuleOperator.GREATER_THAN, RuleOperator.LESS_THAN, RuleOperator.GREATER_OR_EQUAL,
        RuleOperator.LESS_OR_EQUAL, RuleOperator.EQUALS,
    }),
    RuleField.TOTAL_ORDERS: frozenset({
        RuleOperator.GREATER_THAN, RuleOperator.LESS_THAN, RuleOperator.GREATER_OR_EQUAL,
        RuleOperator.LESS_OR_EQUAL, RuleOperator.EQUALS,
    }),
    RuleField.SEGMENT: frozenset({RuleOperator.EQUALS, RuleOperator.NOT_EQUALS}),
    RuleField.STATUS: frozenset({RuleOperator.EQUALS, RuleOperator.NOT_EQUALS}),
    RuleField.LAST_ORDER_DATE: frozenset({RuleOperator.GREATER_THAN, RuleOperator.LESS_THAN}),
}


@dataclass(frozen=True)
class Customer:
    """A buyer record as seen by the segmentation engine."""
    id: str
    name: str
    email: str
    phone: str
    total_spent: float
    total_orders: int
    last_order_date: str
    segment: str
    status: CustomerStatus = CustomerStatus.ACTIVE


@dataclass(frozen=True)
class Rule:
    """One audience filter condition.

    ``connector`` describes how the *next* rule in the chain combines with
    the result accumulated so far; the last rule's connector is unused.
    """
    field: RuleField
    operator: RuleOperator
    value: RuleValue
    connector: Optional[Connector] = None
    rule_id: Optional[str] = None


class CustomerPayload(BaseModel):
    """Customer record in the dashboard's camelCase shape."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Customer ID")
    name: str = Field("", description="Display name")
    email: str = Field("", description="Email address")
    phone: str = Field("", description="Phone number")
    total_spent: float = Field(0.0, ge=0, alias="totalSpent", description="Lifetime spend")
    total_orders: int = Field(0, ge=0, alias="totalOrders", description="Lifetime order count")
    last_order_date: str = Field(..., alias="lastOrderDate", description="ISO date of last order")
    segment: str = Field("New", description="Segment label")
    status: CustomerStatus = Field(CustomerStatus.ACTIVE, description="Customer status")

    def to_customer(self) -> Customer:
        return Customer(
            id=self.id,
            name=self.name,
            email=self.email,
            phone=self.phone,
            total_spent=self.total_spent,
            total_orders=self.total_orders,
            last_order_date=self.last_order_date,
            segment=self.segment,
            status=self.status,
        )


class RulePayload(BaseModel):
    """Rule as authored in the campaign builder.

    Parsing is lenient: unknown field or operator tokens become ``UNKNOWN``
    and evaluate as non-matching, an unrecognized connector falls back to AND.
    """
    id: Optional[str] = Field(None, description="Rule ID")
    field: RuleField = Field(..., description="Customer attribute")
    operator: RuleOperator = Field(..., description="Comparison operator")
    value: RuleValue = Field(..., description="Comparison value")
    connector: Optional[Connector] = Field(None, description="Connector to the next rule")

    @field_validator("field", mode="before")
    @classmethod
    def _parse_field(cls, value: Any) -> RuleField:
        return RuleField(str(value))

    @field_validator("operator", mode="before")
    @classmethod
    def _parse_operator(cls, value: Any) -> RuleOperator:
        return RuleOperator(str(value))

    @field_validator("connector", mode="before")
    @classmethod
    def _parse_connector(cls, value: Any) -> Optional[Connector]:
        if value is None or value == "":
            return None
        if value in (Connector.AND.value, Connector.OR.value):
            return Connector(value)
        return Connector.AND

    def to_rule(self) -> Rule:
        return Rule(
            field=self.field,
            operator=self.operator,
            value=self.value,
            connector=self.connector,
            rule_id=self.id,
        )

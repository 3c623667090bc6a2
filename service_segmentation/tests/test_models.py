"""
Unit tests for segmentation models.
"""

import dataclasses
import pytest
from pydantic import ValidationError as PydanticValidationError

from service_segmentation.app.rules.models import (
    Connector, CustomerPayload, CustomerStatus, Rule, RuleField, RuleOperator, RulePayload,
    SUPPORTED_OPERATORS
)
from service_segmentation.tests.factories import CustomerFactory
from shared.test_helpers import TestDataFactory


class TestRulePayload:
    """Test cases for RulePayload parsing."""

    def test_parse_rule(self):
        rule = RulePayload(id="r1", field="totalSpent", operator=">=", value=500, connector="OR").to_rule()

        assert rule == Rule(
            field=RuleField.TOTAL_SPENT,
            operator=RuleOperator.GREATER_OR_EQUAL,
            value=500,
            connector=Connector.OR,
            rule_id="r1"
        )

    def test_unknown_tokens_become_unknown(self):
        rule = RulePayload(field="age", operator="between", value="1").to_rule()

        assert rule.field == RuleField.UNKNOWN
        assert rule.operator == RuleOperator.UNKNOWN

    @pytest.mark.parametrize("raw,expected", [
        (None, None),
        ("", None),
        ("AND", Connector.AND),
        ("OR", Connector.OR),
        ("XOR", Connector.AND),
    ])
    def test_connector_parsing(self, raw, expected):
        payload = RulePayload(field="segment", operator="=", value="VIP", connector=raw)

        assert payload.connector == expected

    def test_string_value_kept(self):
        assert RulePayload(field="totalSpent", operator=">", value="abc").value == "abc"


class TestCustomerPayload:
    """Test cases for CustomerPayload parsing."""

    def test_camel_case_record(self):
        record = TestDataFactory.create_test_customer_records()[3]

        customer = CustomerPayload.model_validate(record).to_customer()

        assert customer.id == "4"
        assert customer.total_spent == 3000
        assert customer.total_orders == 2
        assert customer.last_order_date == "2024-01-10"
        assert customer.status == CustomerStatus.INACTIVE

    def test_negative_spend_rejected(self):
        with pytest.raises(PydanticValidationError):
            CustomerPayload(id="x", totalSpent=-1, lastOrderDate="2024-01-01")

    def test_customer_is_frozen(self):
        customer = CustomerFactory.create_customer()

        with pytest.raises(dataclasses.FrozenInstanceError):
            customer.segment = "VIP"


def test_supported_operators_cover_known_fields():
    assert set(SUPPORTED_OPERATORS) == set(RuleField) - {RuleField.UNKNOWN}
    assert RuleOperator.NOT_EQUALS in SUPPORTED_OPERATORS[RuleField.SEGMENT]
    assert RuleOperator.NOT_EQUALS not in SUPPORTED_OPERATORS[RuleField.TOTAL_SPENT]

"""
Shared fixtures for segmentation tests.
"""

import pytest

from service_segmentation.tests.factories import CustomerFactory
from shared.test_helpers import FROZEN_NOW, FrozenClock


@pytest.fixture
def customers():
    """Sample customer collection."""
    return CustomerFactory.create_test_customers()


@pytest.fixture
def frozen_clock():
    """Clock pinned to FROZEN_NOW."""
    return FrozenClock(FROZEN_NOW)

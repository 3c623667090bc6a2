"""
Shared utilities for the segmentation service.

- config: Service configuration via pydantic-settings
- logging: Structured logging with campaign correlation
- errors: Canonical error types and responses
- test_helpers: Factories for test customers and rules

Do not import from service_* packages into shared/.
"""

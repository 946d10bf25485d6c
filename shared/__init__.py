"""
Shared utilities for the Access Policy Engine.

This package aggregates common building blocks consumed by the engine:

- config: Engine configuration via pydantic-settings
- logging: Structured logging with correlation context
- errors: Canonical error types and responses
- test_helpers: Factories for subjects and resources used in tests

Do not import from policy_engine into shared/.
"""

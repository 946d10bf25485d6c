"""
Unit tests for shared utilities.
"""

import pytest

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from shared.config import EngineConfig, get_config
from shared.errors import (
    AccessPolicyException, ErrorResponse, EvaluatorError, PolicyConfigurationError,
    UnhandledVariantError, ValidationError
)
from shared.logging import (
    add_correlation_context, add_service_context, add_timestamp, clear_context, set_request_id,
    set_subject_context
)
from shared.test_helpers import test_environment


class TestErrors:
    """Test cases for error types."""

    def test_to_response(self):
        """Test errors convert to the standard response model."""
        error = PolicyConfigurationError("bad policy", {"policy": "p"})
        response = error.to_response()

        assert isinstance(response, ErrorResponse)
        assert response.code == "POLICY_CONFIGURATION_ERROR"
        assert response.message == "bad policy"
        assert response.details == {"policy": "p"}

    def test_hierarchy(self):
        """Test every engine error shares the base class."""
        for error in (
            ValidationError(),
            PolicyConfigurationError(),
            UnhandledVariantError(["public"]),
            EvaluatorError("RULE"),
        ):
            assert isinstance(error, AccessPolicyException)

    def test_unhandled_variant_message(self):
        """Test missing variants are sorted and named in the message."""
        error = UnhandledVariantError(["public", "premium"], policy="strict")

        assert error.variants == ["premium", "public"]
        assert str(error) == "Policy 'strict': Unhandled visibility variants: premium, public"
        assert error.to_response().details["variants"] == ["premium", "public"]

    def test_evaluator_error(self):
        """Test evaluator errors name the failing evaluator."""
        error = EvaluatorError("DENY_BANNED", "lookup unavailable")

        assert error.code == "EVALUATOR_ERROR"
        assert error.message == "DENY_BANNED: lookup unavailable"
        assert error.details["evaluator"] == "DENY_BANNED"


class TestConfig:
    """Test cases for configuration."""

    def test_defaults(self, monkeypatch):
        """Test defaults without environment overrides."""
        for key in test_environment.get_mock_config():
            monkeypatch.delenv(key, raising=False)

        config = get_config()

        assert config.env == "local"
        assert config.log_level == "info"
        assert config.trace_decisions is False
        assert config.service_name == "policy_engine"

    def test_environment(self, monkeypatch):
        """Test values are read from prefixed environment variables."""
        for key, value in test_environment.get_mock_config().items():
            monkeypatch.setenv(key, value)

        config = EngineConfig()

        assert config.env == "test"
        assert config.log_level == "debug"
        assert config.log_json is False
        assert config.trace_decisions is True
        assert config.service_name == "policy_engine_test"

    def test_overrides(self):
        """Test explicit overrides win."""
        assert get_config(trace_decisions=True).trace_decisions is True


class TestLoggingContext:
    """Test cases for log processors."""

    @pytest.fixture(autouse=True)
    def reset_context(self):
        clear_context()
        yield
        clear_context()

    def test_service_from_logger_name(self):
        """Test the service is taken from the dotted logger name."""
        event = add_service_context(None, "info", {"logger": "policy_engine.engine"})

        assert event["service"] == "policy_engine"

    def test_correlation_context(self):
        """Test request and subject ids are attached when set."""
        request_id = set_request_id()
        set_subject_context("alice")

        event = add_correlation_context(None, "info", {})

        assert event["request_id"] == request_id
        assert event["subject_id"] == "alice"

    def test_cleared_context(self):
        """Test nothing is attached once context is cleared."""
        set_request_id("req-1")
        clear_context()

        assert add_correlation_context(None, "info", {}) == {}

    def test_epoch_timestamp_keeps_iso_timestamp(self):
        """Test the epoch timestamp does not overwrite the ISO one."""
        event = add_timestamp(None, "info", {"timestamp": "2026-10-17T12:00:00Z"})

        assert event["timestamp"] == "2026-10-17T12:00:00Z"
        assert isinstance(event["timestamp_epoch"], float)

"""
Shared error handling for the Access Policy Engine.

Authorization outcomes are never errors. The exceptions below cover the
separate failure channel: invalid input, misconfigured policies, and
evaluators that break.
"""

from typing import Dict, Any, Optional, Iterable
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class AccessPolicyException(Exception):
    """Base exception for the policy engine."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class ValidationError(AccessPolicyException):
    """Structurally invalid subject or resource."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class PolicyConfigurationError(AccessPolicyException):
    """A policy that cannot be evaluated as constructed."""

    def __init__(self, message: str = "Invalid policy configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("POLICY_CONFIGURATION_ERROR", message, details)


class UnhandledVariantError(AccessPolicyException):
    """Visibility variants that no evaluator in a policy resolves."""

    def __init__(self, variants: Iterable[str], policy: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.variants = sorted(str(getattr(v, "value", v)) for v in variants)
        message = f"Unhandled visibility variants: {', '.join(self.variants)}"
        if policy:
            message = f"Policy '{policy}': {message}"
        merged = {"variants": self.variants, "policy": policy}
        merged.update(details or {})
        super().__init__("UNHANDLED_VARIANT", message, merged)


class EvaluatorError(AccessPolicyException):
    """An evaluator raised instead of returning a decision."""

    def __init__(self, evaluator: str, message: str = "Evaluator failed", details: Optional[Dict[str, Any]] = None):
        self.evaluator = evaluator
        merged = {"evaluator": evaluator}
        merged.update(details or {})
        super().__init__("EVALUATOR_ERROR", f"{evaluator}: {message}", merged)

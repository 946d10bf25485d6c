"""
Decision engine.

The engine is stateless: a decision is a pure function of the policy, the
subject and the resource. `PolicyEngine` only adds configuration-driven
logging around the same functions.
"""

import time
from typing import Iterator, Optional

from shared.config import EngineConfig, get_config
from shared.errors import AccessPolicyException, EvaluatorError, ValidationError
from shared.logging import configure_logging, get_logger
from .models import Decision, EvaluationResult, Resource, Subject, TraceEntry, variant_name
from .policy import Policy

logger = get_logger("policy_engine.engine")


def _checked(policy: Policy, subject: Subject, resource: Resource) -> Iterator[TraceEntry]:
    """Chain walk yielding each opinion as a Decision, wrapping evaluator failures."""
    for item in policy.evaluators:
        try:
            decision = Decision(item(subject, resource))
        except AccessPolicyException:
            raise
        except Exception as e:
            logger.error(
                "Evaluator failed",
                policy=policy.name,
                evaluator=item.name,
                error=str(e)
            )
            raise EvaluatorError(item.name, str(e), {"policy": policy.name}) from e
        yield TraceEntry(evaluator=item.name, decision=decision)


def decide(policy: Policy, subject: Subject, resource: Resource) -> Decision:
    """Run the policy's evaluator chain and combine the opinions."""
    if not policy.evaluators:
        return Decision(policy.combinator(iter(())))
    return Decision(policy.combinator(entry.decision for entry in _checked(policy, subject, resource)))


def resolve(decision: Decision, default_on_abstain: bool) -> bool:
    """Map a decision to a boolean, using the caller's explicit default for abstain."""
    if not isinstance(default_on_abstain, bool):
        raise ValidationError(
            "default_on_abstain must be an explicit boolean",
            {"default_on_abstain": repr(default_on_abstain)}
        )
    if decision is Decision.ALLOW:
        return True
    if decision is Decision.DENY:
        return False
    return default_on_abstain


def is_allowed(policy: Policy, subject: Subject, resource: Resource, default_on_abstain: bool) -> bool:
    """Whether access is permitted; `default_on_abstain` decides when nobody has an opinion."""
    return resolve(decide(policy, subject, resource), default_on_abstain)


def evaluate(policy: Policy, subject: Subject, resource: Resource,
             default_on_abstain: bool) -> EvaluationResult:
    """Evaluate with every opinion recorded, for callers that audit decisions."""
    start_time = time.time()

    trace = tuple(_checked(policy, subject, resource))
    decision = Decision(policy.combinator(entry.decision for entry in trace))

    if decision.is_decisive:
        deciders = [e.evaluator for e in trace if e.decision is decision]
        if deciders:
            reason = f"{policy.combinator.name}: '{deciders[0]}' returned {decision.value}"
        else:
            reason = f"{policy.combinator.name} resolved to {decision.value}"
    elif trace:
        reason = f"All evaluators abstained; default {'allow' if default_on_abstain else 'deny'} applied"
    else:
        reason = f"Policy has no evaluators; default {'allow' if default_on_abstain else 'deny'} applied"

    return EvaluationResult(
        decision=decision,
        allowed=resolve(decision, default_on_abstain),
        policy=policy.name,
        reason=reason,
        trace=trace,
        evaluation_time_ms=(time.time() - start_time) * 1000
    )


class PolicyEngine:
    """Engine facade with logging driven by configuration."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or get_config()
        self.logger = get_logger(f"{self.config.service_name}.engine")

    @classmethod
    def from_config(cls, config: Optional[EngineConfig] = None) -> "PolicyEngine":
        """Build an engine and configure structured logging for it."""
        config = config or get_config()
        configure_logging(config.service_name, config.log_level, json_output=config.log_json)
        return cls(config)

    def decide(self, policy: Policy, subject: Subject, resource: Resource) -> Decision:
        decision = decide(policy, subject, resource)
        if self.config.trace_decisions:
            self.logger.debug(
                "Policy decision",
                policy=policy.name,
                subject_id=subject.subject_id,
                visibility=variant_name(resource.visibility),
                decision=decision.value
            )
        return decision

    def is_allowed(self, policy: Policy, subject: Subject, resource: Resource,
                   default_on_abstain: bool) -> bool:
        return resolve(self.decide(policy, subject, resource), default_on_abstain)

    def evaluate(self, policy: Policy, subject: Subject, resource: Resource,
                 default_on_abstain: bool) -> EvaluationResult:
        result = evaluate(policy, subject, resource, default_on_abstain)
        if self.config.trace_decisions:
            self.logger.debug(
                "Policy evaluation result",
                policy=policy.name,
                subject_id=subject.subject_id,
                decision=result.decision.value,
                allowed=result.allowed,
                reason=result.reason,
                trace=[(e.evaluator, e.decision.value) for e in result.trace]
            )
        return result

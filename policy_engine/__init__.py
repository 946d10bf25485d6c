"""
Policy engine package.

Authorization decisions from policies expressed as data: an ordered chain
of pure evaluators, each answering allow, deny or abstain, and a
combinator that reduces their opinions into one decision.

Modules of interest:
- models: Decision, Subject, Resource and evaluation results.
- evaluators: the Evaluator value type and decorator.
- combinators: first-decisive, unanimous, deny-overrides and majority.
- policy: the immutable Policy value and its variant builders.
- engine: decide / is_allowed / evaluate and the PolicyEngine facade.
- rules: the rule library.
- validation: visibility exhaustiveness check.
- policies: named policies built from the rule library.
"""

from .models import Decision, Tier, Visibility, Subject, Resource, TraceEntry, EvaluationResult
from .evaluators import ANY_VISIBILITY, Evaluator, evaluator
from .combinators import (
    Combinator, FIRST_DECISIVE, UNANIMOUS, DENY_OVERRIDES, MAJORITY, get_combinator
)
from .validation import check_exhaustive, unhandled_variants
from .policy import Policy
from .engine import PolicyEngine, decide, evaluate, is_allowed
from .rules import RULE_LIBRARY, deny_banned, get_rule
from .policies import anniversary_policy, baseline_policy, debug_policy, strict_policy

__all__ = [
    'Decision', 'Tier', 'Visibility', 'Subject', 'Resource', 'TraceEntry', 'EvaluationResult',
    'ANY_VISIBILITY', 'Evaluator', 'evaluator',
    'Combinator', 'FIRST_DECISIVE', 'UNANIMOUS', 'DENY_OVERRIDES', 'MAJORITY', 'get_combinator',
    'check_exhaustive', 'unhandled_variants',
    'Policy',
    'PolicyEngine', 'decide', 'evaluate', 'is_allowed',
    'RULE_LIBRARY', 'deny_banned', 'get_rule',
    'anniversary_policy', 'baseline_policy', 'debug_policy', 'strict_policy',
]

"""
Combinators reduce the ordered opinions of a policy's evaluators into one
Decision.

Every combinator is a total function over finite sequences of decisions,
including the empty sequence. Decisions are handed over as an iterator so
a combinator may stop consuming early; it must return the same result as
if it had consumed everything.
"""

from typing import Callable, Dict, Iterable
from dataclasses import dataclass

from shared.errors import PolicyConfigurationError
from .models import Decision

ReduceFn = Callable[[Iterable[Decision]], Decision]


@dataclass(frozen=True)
class Combinator:
    """A named reduction strategy over decisions."""
    name: str
    reduce: ReduceFn
    # Policies pairing this combinator with no evaluators are rejected
    requires_evaluators: bool = False

    def __call__(self, decisions: Iterable[Decision]) -> Decision:
        return self.reduce(decisions)

    def __repr__(self) -> str:
        return f"Combinator({self.name!r})"


def first_decisive(decisions: Iterable[Decision]) -> Decision:
    """First non-abstain decision in order, else abstain."""
    for decision in decisions:
        if decision is not Decision.ABSTAIN:
            return decision
    return Decision.ABSTAIN


def unanimous(decisions: Iterable[Decision]) -> Decision:
    """Allow only if every opinion given is allow and at least one is given."""
    seen_allow = False
    for decision in decisions:
        if decision is Decision.DENY:
            return Decision.DENY
        if decision is Decision.ALLOW:
            seen_allow = True
    return Decision.ALLOW if seen_allow else Decision.ABSTAIN


def deny_overrides(decisions: Iterable[Decision]) -> Decision:
    """Any deny wins; otherwise first-decisive over the rest."""
    first = Decision.ABSTAIN
    for decision in decisions:
        if decision is Decision.DENY:
            return Decision.DENY
        if first is Decision.ABSTAIN:
            first = decision
    return first


def majority(decisions: Iterable[Decision]) -> Decision:
    """More allows than denies allows, and vice versa; ties abstain."""
    allows = denies = 0
    for decision in decisions:
        if decision is Decision.ALLOW:
            allows += 1
        elif decision is Decision.DENY:
            denies += 1
    if allows > denies:
        return Decision.ALLOW
    if denies > allows:
        return Decision.DENY
    return Decision.ABSTAIN


FIRST_DECISIVE = Combinator("first_decisive", first_decisive)
UNANIMOUS = Combinator("unanimous", unanimous)
DENY_OVERRIDES = Combinator("deny_overrides", deny_overrides)
MAJORITY = Combinator("majority", majority, requires_evaluators=True)

STANDARD_COMBINATORS: Dict[str, Combinator] = {
    c.name: c for c in (FIRST_DECISIVE, UNANIMOUS, DENY_OVERRIDES, MAJORITY)
}


def get_combinator(name: str) -> Combinator:
    """Look up a standard combinator by name."""
    try:
        return STANDARD_COMBINATORS[name]
    except KeyError:
        raise PolicyConfigurationError(
            f"Unknown combinator '{name}'",
            {"combinator": name, "available": sorted(STANDARD_COMBINATORS)}
        ) from None

"""
Rule library: reusable named evaluators that policies are assembled from.

Each rule answers one narrow question and abstains when the question does
not apply. A tier mismatch on a premium resource is "no opinion", never a
denial, so later rules in the chain keep the chance to allow.
"""

from types import MappingProxyType
from typing import Callable, Container, Mapping, Union

from shared.errors import PolicyConfigurationError
from .evaluators import ANY_VISIBILITY, Evaluator, evaluator
from .models import Decision, Resource, Subject, Tier, Visibility

BanLookup = Union[Container[str], Callable[[str], bool]]


@evaluator("ALLOW_ADMINS")
def allow_admins(subject: Subject, resource: Resource) -> Decision:
    """Administrators can access anything."""
    return Decision.ALLOW if subject.is_admin else Decision.ABSTAIN


@evaluator("OWNER_CAN_ACCESS", handles=[Visibility.PRIVATE])
def owner_can_access(subject: Subject, resource: Resource) -> Decision:
    """Owners can access their own resources."""
    return Decision.ALLOW if subject.subject_id == resource.owner_id else Decision.ABSTAIN


@evaluator("ALLOW_BY_VISIBILITY", handles=[Visibility.PUBLIC, Visibility.PREMIUM])
def allow_by_visibility(subject: Subject, resource: Resource) -> Decision:
    """Tiered access by resource visibility."""
    if resource.visibility == Visibility.PUBLIC:
        return Decision.ALLOW
    if resource.visibility == Visibility.PREMIUM:
        return Decision.ALLOW if subject.tier == Tier.PREMIUM else Decision.ABSTAIN
    # private resources are decided by ownership; unknown variants are not ours
    return Decision.ABSTAIN


@evaluator("FREE_PREMIUM_ACCESS", handles=[Visibility.PREMIUM])
def free_premium_access(subject: Subject, resource: Resource) -> Decision:
    """Promotional access to premium resources for every tier."""
    return Decision.ALLOW if resource.visibility == Visibility.PREMIUM else Decision.ABSTAIN


@evaluator("ALLOW_ALL", handles=[ANY_VISIBILITY])
def allow_all(subject: Subject, resource: Resource) -> Decision:
    """Unconditional access, for debugging environments only."""
    return Decision.ALLOW


def deny_banned(banned: BanLookup, name: str = "DENY_BANNED") -> Evaluator:
    """Build the ban check around an injected, read-only lookup.

    `banned` is either a container of subject identifiers, snapshotted here
    so later changes to the caller's collection cannot leak into the policy,
    or a callable answering whether an identifier is banned.
    """
    if callable(banned):
        is_banned = banned
    else:
        snapshot = frozenset(banned)
        is_banned = snapshot.__contains__

    def check(subject: Subject, resource: Resource) -> Decision:
        return Decision.DENY if is_banned(subject.subject_id) else Decision.ABSTAIN

    return Evaluator(name=name, fn=check, description="Banned subjects cannot access anything.")


RULE_LIBRARY: Mapping[str, Evaluator] = MappingProxyType({
    rule.name: rule for rule in (
        allow_admins,
        owner_can_access,
        allow_by_visibility,
        free_premium_access,
        allow_all,
    )
})


def get_rule(name: str) -> Evaluator:
    """Look up a fixed rule by name."""
    try:
        return RULE_LIBRARY[name]
    except KeyError:
        raise PolicyConfigurationError(
            f"Unknown rule '{name}'",
            {"rule": name, "available": sorted(RULE_LIBRARY)}
        ) from None


# Upper-case aliases matching the rule names
ALLOW_ADMINS = allow_admins
OWNER_CAN_ACCESS = owner_can_access
ALLOW_BY_VISIBILITY = allow_by_visibility
FREE_PREMIUM_ACCESS = free_premium_access
ALLOW_ALL = allow_all

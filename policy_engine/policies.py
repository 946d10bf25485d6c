"""
Named policies assembled from the rule library.

The ban lookup is injected by the caller when a policy is built; nothing
here reads process-wide state.
"""

from .combinators import FIRST_DECISIVE
from .models import Visibility
from .policy import Policy
from .rules import (
    ALLOW_ADMINS, ALLOW_ALL, ALLOW_BY_VISIBILITY, FREE_PREMIUM_ACCESS,
    OWNER_CAN_ACCESS, BanLookup, deny_banned
)


def baseline_policy(banned: BanLookup = frozenset()) -> Policy:
    """Admins, then bans, then ownership, then tiered visibility."""
    return Policy(
        name="baseline",
        evaluators=(
            ALLOW_ADMINS,
            deny_banned(banned),
            OWNER_CAN_ACCESS,
            ALLOW_BY_VISIBILITY,
        ),
        combinator=FIRST_DECISIVE,
        description="Normal access rules.",
        require_coverage=Visibility,
    )


def anniversary_policy(banned: BanLookup = frozenset()) -> Policy:
    """Baseline with everyone granted premium access."""
    return baseline_policy(banned).with_evaluator_before(
        ALLOW_BY_VISIBILITY.name,
        FREE_PREMIUM_ACCESS,
        name="anniversary",
        require_coverage=Visibility,
    )


def strict_policy(banned: BanLookup = frozenset()) -> Policy:
    """Only admins and owners get in. Covers private resources only."""
    return Policy(
        name="strict",
        evaluators=(ALLOW_ADMINS, deny_banned(banned), OWNER_CAN_ACCESS),
        combinator=FIRST_DECISIVE,
        description="No tiered access.",
    )


def debug_policy() -> Policy:
    """Everything is accessible."""
    return Policy(
        name="debug",
        evaluators=(ALLOW_ALL,),
        combinator=FIRST_DECISIVE,
        description="Debugging only.",
        require_coverage=Visibility,
    )

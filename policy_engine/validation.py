"""
Visibility exhaustiveness check.

A policy covers a visibility variant when some evaluator that declares it
handles the variant returns a non-abstain decision for at least one sample
pair. Samples are non-admin subjects of every tier, each against a resource
of the variant that they own and one owned by somebody else. Admin bypass
is excluded from the samples since it says nothing about visibility.
"""

from typing import Iterable, Iterator, List, Tuple

from shared.errors import AccessPolicyException, EvaluatorError, UnhandledVariantError
from shared.logging import get_logger
from .models import Decision, Resource, Subject, Tier, Visibility, variant_name

logger = get_logger("policy_engine.validation")

SAMPLE_SUBJECT_ID = "sample-subject"
SAMPLE_OTHER_OWNER_ID = "sample-owner"


def sample_pairs(variant: str) -> Iterator[Tuple[Subject, Resource]]:
    """Subject/resource pairs used to test whether a variant is resolvable."""
    for tier in Tier:
        subject = Subject(subject_id=SAMPLE_SUBJECT_ID, tier=tier, is_admin=False)
        for owner_id in (SAMPLE_SUBJECT_ID, SAMPLE_OTHER_OWNER_ID):
            yield subject, Resource(visibility=variant_name(variant), owner_id=owner_id)


def _resolves(policy, variant: str) -> bool:
    candidates = [e for e in policy.evaluators if e.handles_variant(variant)]
    if not candidates:
        return False
    for subject, resource in sample_pairs(variant):
        for item in candidates:
            try:
                decision = Decision(item(subject, resource))
            except AccessPolicyException:
                raise
            except Exception as e:
                logger.error(
                    "Evaluator failed during coverage check",
                    policy=policy.name,
                    evaluator=item.name,
                    variant=variant,
                    error=str(e)
                )
                raise EvaluatorError(item.name, str(e), {"policy": policy.name, "variant": variant}) from e
            if decision is not Decision.ABSTAIN:
                return True
    return False


def unhandled_variants(policy, variants: Iterable[str] = Visibility) -> List[str]:
    """Variants in use that the policy never resolves, in input order."""
    missing = []
    for variant in variants:
        name = variant_name(variant)
        if not _resolves(policy, name) and name not in missing:
            missing.append(name)
    return missing


def check_exhaustive(policy, variants: Iterable[str] = Visibility) -> None:
    """Raise UnhandledVariantError unless every variant is resolved somewhere."""
    missing = unhandled_variants(policy, variants)
    if missing:
        logger.warning(
            "Policy does not cover visibility variants",
            policy=policy.name,
            variants=missing
        )
        raise UnhandledVariantError(missing, policy=policy.name)

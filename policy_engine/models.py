"""
Data models for the policy engine.
"""

from typing import Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum

from shared.errors import ValidationError


class Decision(str, Enum):
    """Tri-state outcome of an evaluator or a policy."""
    ALLOW = "allow"
    DENY = "deny"
    ABSTAIN = "abstain"

    @property
    def is_decisive(self) -> bool:
        return self is not Decision.ABSTAIN


class Tier(str, Enum):
    """Subject subscription tiers."""
    BASIC = "basic"
    PREMIUM = "premium"


class Visibility(str, Enum):
    """Known resource visibility variants.

    The set is open: a Resource may carry any other non-empty string as a
    future variant, which rules that do not know it must abstain on.
    """
    PUBLIC = "public"
    PREMIUM = "premium"
    PRIVATE = "private"


@dataclass(frozen=True)
class Subject:
    """The identity requesting access."""
    subject_id: str
    tier: Tier = Tier.BASIC
    is_admin: bool = False

    def __post_init__(self):
        if not isinstance(self.subject_id, str) or not self.subject_id:
            raise ValidationError(
                "Subject identifier must be a non-empty string",
                {"subject_id": self.subject_id}
            )
        try:
            tier = Tier(self.tier)
        except ValueError:
            raise ValidationError(
                f"Unknown subject tier '{self.tier}'",
                {"subject_id": self.subject_id, "tier": str(self.tier)}
            ) from None
        object.__setattr__(self, "tier", tier)
        if not isinstance(self.is_admin, bool):
            raise ValidationError(
                "Subject admin flag must be a boolean",
                {"subject_id": self.subject_id, "is_admin": repr(self.is_admin)}
            )


@dataclass(frozen=True)
class Resource:
    """The resource being accessed."""
    visibility: str
    owner_id: str

    def __post_init__(self):
        if not isinstance(self.visibility, str) or not self.visibility:
            raise ValidationError(
                "Resource visibility must be a non-empty string",
                {"visibility": self.visibility}
            )
        if not isinstance(self.owner_id, str):
            raise ValidationError(
                "Resource owner must be a string",
                {"owner_id": self.owner_id}
            )
        # Normalize known variants to the enum; keep unknown ones as given
        try:
            object.__setattr__(self, "visibility", Visibility(self.visibility))
        except ValueError:
            pass


@dataclass(frozen=True)
class TraceEntry:
    """One evaluator's opinion within a decision."""
    evaluator: str
    decision: Decision


@dataclass(frozen=True)
class EvaluationResult:
    """Result of evaluating a policy, with the full decision trace."""
    decision: Decision
    allowed: bool
    policy: str
    reason: Optional[str] = None
    trace: Tuple[TraceEntry, ...] = field(default_factory=tuple)
    evaluation_time_ms: float = 0.0

    @property
    def deciding_evaluator(self) -> Optional[str]:
        """First evaluator whose opinion matches the final decision."""
        if not self.decision.is_decisive:
            return None
        for entry in self.trace:
            if entry.decision is self.decision:
                return entry.evaluator
        return None


def variant_name(variant) -> str:
    """Plain string form of a visibility variant, enum member or not."""
    if isinstance(variant, Enum):
        return str(variant.value)
    return str(variant)

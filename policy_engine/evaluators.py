"""
Evaluator value type.

An evaluator is a named, pure function of (Subject, Resource) returning a
Decision. It answers one narrow question and abstains whenever that
question does not apply.
"""

from typing import Callable, FrozenSet, Iterable, Optional
from dataclasses import dataclass, field

from .models import Decision, Resource, Subject, variant_name

EvaluatorFn = Callable[[Subject, Resource], Decision]

# Wildcard for evaluators that take a position on every visibility variant
ANY_VISIBILITY = "*"


@dataclass(frozen=True)
class Evaluator:
    """A named access rule."""
    name: str
    fn: EvaluatorFn
    handles: FrozenSet[str] = frozenset()
    description: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "handles", frozenset(variant_name(v) for v in self.handles))

    def __call__(self, subject: Subject, resource: Resource) -> Decision:
        return self.fn(subject, resource)

    def handles_variant(self, variant: str) -> bool:
        """Whether this rule takes a position on resources of the variant."""
        return ANY_VISIBILITY in self.handles or variant_name(variant) in self.handles

    def __repr__(self) -> str:
        return f"Evaluator({self.name!r})"


def evaluator(name: str, handles: Iterable[str] = (), description: Optional[str] = None):
    """Decorator turning a plain function into an Evaluator.

    Example:
        @evaluator("DENY_NIGHT_SHIFT")
        def deny_night_shift(subject, resource):
            ...
    """
    def wrap(fn: EvaluatorFn) -> Evaluator:
        return Evaluator(
            name=name,
            fn=fn,
            handles=frozenset(variant_name(v) for v in handles),
            description=description or (fn.__doc__ or "").strip() or None
        )
    return wrap

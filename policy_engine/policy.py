"""
Policy: an ordered, immutable sequence of evaluators plus a combinator.

Policies are values. They are built once, shared read-only, and never
patched in place; every variant builder returns a new Policy.
"""

from typing import Iterable, Iterator, List, Optional, Tuple
from dataclasses import dataclass, field, replace, InitVar

from shared.errors import PolicyConfigurationError
from .combinators import Combinator, FIRST_DECISIVE
from .evaluators import Evaluator
from .validation import check_exhaustive


@dataclass(frozen=True)
class Policy:
    """One complete access-control strategy."""
    name: str
    evaluators: Tuple[Evaluator, ...] = ()
    combinator: Combinator = FIRST_DECISIVE
    description: Optional[str] = field(default=None, compare=False)
    require_coverage: InitVar[Optional[Iterable[str]]] = None

    def __post_init__(self, require_coverage):
        evaluators = tuple(self.evaluators)
        object.__setattr__(self, "evaluators", evaluators)

        for position, item in enumerate(evaluators):
            if not isinstance(item, Evaluator):
                raise PolicyConfigurationError(
                    f"Policy '{self.name}' contains a non-evaluator at position {position}",
                    {"policy": self.name, "position": position, "type": type(item).__name__}
                )

        names = [e.name for e in evaluators]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise PolicyConfigurationError(
                f"Policy '{self.name}' lists evaluators more than once",
                {"policy": self.name, "duplicates": duplicates}
            )

        if not isinstance(self.combinator, Combinator):
            raise PolicyConfigurationError(
                f"Policy '{self.name}' has no valid combinator",
                {"policy": self.name, "type": type(self.combinator).__name__}
            )

        if not evaluators and self.combinator.requires_evaluators:
            raise PolicyConfigurationError(
                f"Combinator '{self.combinator.name}' requires at least one evaluator",
                {"policy": self.name, "combinator": self.combinator.name}
            )

        if require_coverage is not None:
            check_exhaustive(self, require_coverage)

    def __len__(self) -> int:
        return len(self.evaluators)

    def __iter__(self) -> Iterator[Evaluator]:
        return iter(self.evaluators)

    @property
    def evaluator_names(self) -> List[str]:
        return [e.name for e in self.evaluators]

    def _index_of(self, name: str) -> int:
        for index, item in enumerate(self.evaluators):
            if item.name == name:
                return index
        raise PolicyConfigurationError(
            f"Policy '{self.name}' has no evaluator named '{name}'",
            {"policy": self.name, "evaluator": name, "available": self.evaluator_names}
        )

    def _derive(self, evaluators: Iterable[Evaluator], name: Optional[str],
                require_coverage: Optional[Iterable[str]], **changes) -> "Policy":
        return replace(
            self,
            name=name or self.name,
            evaluators=tuple(evaluators),
            require_coverage=require_coverage,
            **changes
        )

    def with_evaluator_before(self, target: str, new: Evaluator, name: Optional[str] = None,
                              require_coverage: Optional[Iterable[str]] = None) -> "Policy":
        """New policy with `new` inserted just before the evaluator named `target`."""
        index = self._index_of(target)
        items = list(self.evaluators)
        items.insert(index, new)
        return self._derive(items, name, require_coverage)

    def with_evaluator_after(self, target: str, new: Evaluator, name: Optional[str] = None,
                             require_coverage: Optional[Iterable[str]] = None) -> "Policy":
        """New policy with `new` inserted just after the evaluator named `target`."""
        index = self._index_of(target)
        items = list(self.evaluators)
        items.insert(index + 1, new)
        return self._derive(items, name, require_coverage)

    def appended(self, *new: Evaluator, name: Optional[str] = None,
                 require_coverage: Optional[Iterable[str]] = None) -> "Policy":
        """New policy with evaluators added at the end of the chain."""
        return self._derive(self.evaluators + tuple(new), name, require_coverage)

    def without(self, target: str, name: Optional[str] = None,
                require_coverage: Optional[Iterable[str]] = None) -> "Policy":
        """New policy with the evaluator named `target` removed."""
        index = self._index_of(target)
        items = self.evaluators[:index] + self.evaluators[index + 1:]
        return self._derive(items, name, require_coverage)

    def with_combinator(self, combinator: Combinator, name: Optional[str] = None,
                        require_coverage: Optional[Iterable[str]] = None) -> "Policy":
        """Same chain, different reduction strategy."""
        return self._derive(self.evaluators, name, require_coverage, combinator=combinator)

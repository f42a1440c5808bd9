"""
Ordered rule lists.

A RuleList is evaluated top-down. first_match() stops at the first rule
whose condition holds and returns its outcome; rules below it are never
consulted, so the list order IS the tie-break order. all_matches() returns
every matching outcome, still in list order.

A rule's outcome is either a plain value or a callable taking the context.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

C = TypeVar("C")
R = TypeVar("R")


@dataclass(frozen=True)
class Rule(Generic[C, R]):
    """One named condition -> outcome pair."""
    name: str
    when: Callable[[C], bool]
    then: Any

    def applies(self, context: C) -> bool:
        return bool(self.when(context))

    def outcome(self, context: C) -> R:
        if callable(self.then):
            return self.then(context)
        return self.then


class RuleList(Generic[C, R]):
    """Priority-ordered rules with an optional default outcome."""

    def __init__(self, rules: Sequence[Rule], default: Any = None):
        self.rules: Tuple[Rule, ...] = tuple(rules)
        self.default = default
        names = [r.name for r in self.rules]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate rule names: {names}")

    def evaluate(self, context: C) -> Tuple[Optional[str], R]:
        """(name of the rule that fired, outcome). Name is None for the default."""
        for rule in self.rules:
            if rule.applies(context):
                return rule.name, rule.outcome(context)
        if callable(self.default):
            return None, self.default(context)
        return None, self.default

    def first_match(self, context: C) -> R:
        return self.evaluate(context)[1]

    def all_matches(self, context: C) -> List[R]:
        return [rule.outcome(context) for rule in self.rules if rule.applies(context)]

    @property
    def names(self) -> List[str]:
        return [r.name for r in self.rules]

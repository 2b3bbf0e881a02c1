"""
AssertKit — Constraint Abstract Base Class

A Constraint is an immutable predicate over a value. Every variant
implements three things:

  matches(value)  -> bool   the pass/fail decision
  describe()      -> str    what is being checked, e.g. "is equal to 5"
  cost()          -> int    number of atomic checks it represents

evaluate() packages one decision into an Evaluation record for a reporter.
Constraints compose through the combinators (Not, And, Or, Xor), reachable
here through the ``~``, ``&``, ``|`` and ``^`` operators.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from assertkit.engine.exporter import export
from assertkit.engine.types import Evaluation


class Constraint(ABC):
    """Abstract interface for every constraint variant."""

    @abstractmethod
    def matches(self, value: Any) -> bool:
        """True when ``value`` satisfies the constraint."""

    @abstractmethod
    def describe(self) -> str:
        """Human-readable statement of the check, phrased to follow a value."""

    def cost(self) -> int:
        """Atomic checks represented. 1 for atomic constraints."""
        return 1

    def failure_description(self, value: Any) -> str:
        """Why ``value`` failed, phrased as 'Failed asserting that ...'."""
        return f"Failed asserting that {export(value)} {self.describe()}."

    def evaluate(self, value: Any, message: str = "") -> Evaluation:
        matched = self.matches(value)
        return Evaluation(
            matched=matched,
            cost=self.cost(),
            description=self.describe(),
            failure="" if matched else self.failure_description(value),
            message=message,
        )

    def __len__(self) -> int:
        return self.cost()

    def __bool__(self) -> bool:
        # an empty And has length 0 but is still a constraint
        return True

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"<{type(self).__name__}: {self.describe()}>"

    # ── Composition ──────────────────────────────────────────────────

    def __invert__(self) -> Constraint:
        from assertkit.constraints.combinators import Not

        return Not(self)

    def __and__(self, other: Any) -> Constraint:
        from assertkit.constraints.combinators import And

        return And(self, other)

    def __or__(self, other: Any) -> Constraint:
        from assertkit.constraints.combinators import Or

        return Or(self, other)

    def __xor__(self, other: Any) -> Constraint:
        from assertkit.constraints.combinators import Xor

        return Xor(self, other)

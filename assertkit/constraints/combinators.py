"""
AssertKit — Constraint Combinators

Boolean algebra over constraints. Members may be any Constraint, including
other combinators, nested to any depth the caller builds. Plain values given
as members are wrapped in IsEqual.

  Not(c)        not c                              cost = c.cost()
  And(*cs)      all match, empty And matches       cost = sum
  Or(*cs)       any matches, empty Or never does   cost = sum
  Xor(*cs)      odd number of members match        cost = sum
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from assertkit.constraints.atomic import IsEqual
from assertkit.constraints.base import Constraint
from assertkit.engine.errors import InvalidArgumentError
from assertkit.engine.exporter import export


def _as_constraint(member: Any) -> Constraint:
    if isinstance(member, Constraint):
        return member
    return IsEqual(member)


class Not(Constraint):
    """Logical negation of one constraint."""

    def __init__(self, constraint: Constraint) -> None:
        if not isinstance(constraint, Constraint):
            raise InvalidArgumentError(1, "Constraint")
        self._inner = constraint

    @property
    def inner(self) -> Constraint:
        return self._inner

    def matches(self, value: Any) -> bool:
        return not self._inner.matches(value)

    def describe(self) -> str:
        return f"not {self._inner.describe()}"

    def cost(self) -> int:
        return self._inner.cost()


class _Composite(Constraint):
    """Shared member handling for the n-ary combinators."""

    _joiner = " and "

    def __init__(self, *constraints: Any) -> None:
        self._members: tuple[Constraint, ...] = tuple(_as_constraint(c) for c in constraints)

    @classmethod
    def of(cls, constraints: Iterable[Any]) -> _Composite:
        return cls(*constraints)

    @property
    def members(self) -> tuple[Constraint, ...]:
        return self._members

    def describe(self) -> str:
        return self._joiner.join(member.describe() for member in self._members)

    def cost(self) -> int:
        return sum(member.cost() for member in self._members)


class And(_Composite):
    """All members must match. Short-circuits on the first failure."""

    def matches(self, value: Any) -> bool:
        return self.first_failure(value) is None

    def first_failure(self, value: Any) -> Constraint | None:
        for member in self._members:
            if not member.matches(value):
                return member
        return None

    def failure_description(self, value: Any) -> str:
        failing = self.first_failure(value)
        if failing is None:
            return super().failure_description(value)
        return failing.failure_description(value)


class Or(_Composite):
    """At least one member must match."""

    _joiner = " or "

    def matches(self, value: Any) -> bool:
        return any(member.matches(value) for member in self._members)

    def failure_description(self, value: Any) -> str:
        if not self._members:
            return f"Failed asserting that {export(value)} matches an empty disjunction."
        return super().failure_description(value)


class Xor(_Composite):
    """An odd number of members must match. For two members: exactly one."""

    _joiner = " xor "

    def matches(self, value: Any) -> bool:
        matched = sum(1 for member in self._members if member.matches(value))
        return matched % 2 == 1

    def failure_description(self, value: Any) -> str:
        if not self._members:
            return f"Failed asserting that {export(value)} matches an empty exclusive disjunction."
        return super().failure_description(value)

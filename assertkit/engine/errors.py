"""
AssertKit — Engine Error Hierarchy

All exceptions raised by the evaluation engine and the assertion facade.

Namespace: assertkit.engine.errors

A constraint that does not match is NOT an error inside the engine: matches()
returns False and the facade decides whether to raise AssertionFailedError.
Depth-bound truncation in the comparator never raises either.

Severity guide:
  InvalidArgumentError    caller error, never retried
  AttributeNotFoundError  name absent after the full ancestor walk
  AssertionFailedError    facade escalation of a mismatch
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from assertkit.engine.types import Evaluation


class AssertKitError(Exception):
    """Base for all AssertKit errors."""


class InvalidArgumentError(AssertKitError, ValueError):
    """
    The caller passed a malformed argument.

    Raised for invalid identifiers, wrong-shaped subjects and invalid
    constraint configuration (negative tolerance, non-callable predicate,
    uncompilable pattern).
    """

    def __init__(self, argument: int | str, expected: str) -> None:
        self.argument = argument
        self.expected = expected
        super().__init__(f"Argument #{argument} must be a {expected}")


class InvalidNameError(InvalidArgumentError):
    """The attribute name does not match the identifier pattern."""


class InvalidSubjectError(InvalidArgumentError):
    """The subject is not a class (static lookup) or not an instance."""


class AttributeNotFoundError(AssertKitError, LookupError):
    """The attribute is absent from the subject and every ancestor."""

    def __init__(self, name: str, where: str) -> None:
        self.name = name
        self.where = where
        super().__init__(f'Attribute "{name}" not found in {where}.')


class AssertionFailedError(AssertKitError, AssertionError):
    """
    A constraint evaluated by the facade did not match.

    Subclasses AssertionError so pytest and unittest report it as a plain
    test failure. ``evaluation`` is None for explicit fail() calls.
    """

    def __init__(self, message: str, evaluation: Evaluation | None = None) -> None:
        self.evaluation = evaluation
        super().__init__(message)


class IncompleteTestError(AssertKitError):
    """Signals that the running test is marked incomplete."""


class SkippedTestError(AssertKitError):
    """Signals that the running test is marked skipped."""

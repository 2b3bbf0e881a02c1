"""
AssertKit — Constraint Evaluation Engine

Structural equality, composable constraints, visibility-independent
attribute resolution and document structure comparison for test assertions.
"""

from assertkit.constraints import And, Constraint, IsEqual, Not, Or, Xor
from assertkit.engine import (
    AssertionCounter,
    AssertionFailedError,
    AttributeNotFoundError,
    InvalidArgumentError,
    InvalidNameError,
    InvalidSubjectError,
    TreeNode,
    ValueComparator,
    equal_structure,
    equals,
    resolve_attribute,
)
from assertkit.facade import Assert, assert_that

__version__ = "0.1.0"

__all__ = [
    "Assert",
    "assert_that",
    "Constraint",
    "IsEqual",
    "And",
    "Not",
    "Or",
    "Xor",
    "AssertionCounter",
    "ValueComparator",
    "equals",
    "resolve_attribute",
    "TreeNode",
    "equal_structure",
    "AssertionFailedError",
    "AttributeNotFoundError",
    "InvalidArgumentError",
    "InvalidNameError",
    "InvalidSubjectError",
]

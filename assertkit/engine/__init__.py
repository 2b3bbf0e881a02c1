"""
AssertKit — Evaluation Engine

Pure, synchronous building blocks: the value comparator, the attribute
resolver, the structural tree comparator and the assertion counter.
"""

from assertkit.engine.attributes import (
    get_object_attribute,
    get_static_attribute,
    resolve_attribute,
)
from assertkit.engine.comparator import ValueComparator, comparison_options, equals
from assertkit.engine.counter import AssertionCounter
from assertkit.engine.errors import (
    AssertionFailedError,
    AssertKitError,
    AttributeNotFoundError,
    IncompleteTestError,
    InvalidArgumentError,
    InvalidNameError,
    InvalidSubjectError,
    SkippedTestError,
)
from assertkit.engine.structure import TreeNode, compare_structure, equal_structure
from assertkit.engine.types import ComparisonResult, Evaluation, MismatchKind, StructureMismatch

__all__ = [
    "ValueComparator",
    "equals",
    "comparison_options",
    "get_object_attribute",
    "get_static_attribute",
    "resolve_attribute",
    "AssertionCounter",
    "TreeNode",
    "compare_structure",
    "equal_structure",
    "ComparisonResult",
    "Evaluation",
    "MismatchKind",
    "StructureMismatch",
    "AssertKitError",
    "AssertionFailedError",
    "AttributeNotFoundError",
    "IncompleteTestError",
    "InvalidArgumentError",
    "InvalidNameError",
    "InvalidSubjectError",
    "SkippedTestError",
]

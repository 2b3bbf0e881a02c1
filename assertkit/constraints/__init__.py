"""
AssertKit — Constraints

Composable predicates: the abstract Constraint, the atomic variants and the
boolean combinators.
"""

from assertkit.constraints.atomic import (
    ArrayHasKey,
    Attribute,
    Callback,
    ClassHasAttribute,
    ClassHasStaticAttribute,
    ContainsOnly,
    Count,
    GreaterThan,
    HasEqualStructure,
    IsAnything,
    IsEmpty,
    IsEqual,
    IsFalse,
    IsFinite,
    IsIdentical,
    IsInfinite,
    IsInstanceOf,
    IsJson,
    IsNan,
    IsNull,
    IsTrue,
    IsType,
    LessThan,
    ObjectHasAttribute,
    RegularExpression,
    StringContains,
    StringEndsWith,
    StringStartsWith,
    TraversableContains,
)
from assertkit.constraints.base import Constraint
from assertkit.constraints.combinators import And, Not, Or, Xor

__all__ = [
    "Constraint",
    "And",
    "Not",
    "Or",
    "Xor",
    "ArrayHasKey",
    "Attribute",
    "Callback",
    "ClassHasAttribute",
    "ClassHasStaticAttribute",
    "ContainsOnly",
    "Count",
    "GreaterThan",
    "HasEqualStructure",
    "IsAnything",
    "IsEmpty",
    "IsEqual",
    "IsFalse",
    "IsFinite",
    "IsIdentical",
    "IsInfinite",
    "IsInstanceOf",
    "IsJson",
    "IsNan",
    "IsNull",
    "IsTrue",
    "IsType",
    "LessThan",
    "ObjectHasAttribute",
    "RegularExpression",
    "StringContains",
    "StringEndsWith",
    "StringStartsWith",
    "TraversableContains",
]

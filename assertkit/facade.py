"""
AssertKit — Assertion Facade

Thin layer over the engine: validates arguments, builds a constraint, adds
its cost to the counter, evaluates it and raises AssertionFailedError on a
mismatch. No comparison logic lives here.

Usage:
    checks = Assert()
    checks.assert_equals([1, 2], [2, 1], canonicalize=True)
    checks.assert_that(5, logical_and(greater_than(1), less_than(10)))
    checks.get_count()   # 2

Module-level functions of the same names use a shared default instance.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

import structlog

from assertkit.config import AssertKitConfig, ComparisonConfig
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
from assertkit.engine.attributes import (
    get_object_attribute,
    get_static_attribute,
    resolve_attribute,
)
from assertkit.engine.comparator import comparison_options
from assertkit.engine.counter import AssertionCounter
from assertkit.engine.errors import (
    AssertionFailedError,
    IncompleteTestError,
    InvalidArgumentError,
    SkippedTestError,
)
from assertkit.engine.structure import TreeNode

logger = structlog.get_logger().bind(system="assertkit.facade")

_UNSET: Any = object()


# ─── Constraint Factories ─────────────────────────────────────────


def logical_and(*constraints: Any) -> And:
    return And(*constraints)


def logical_or(*constraints: Any) -> Or:
    return Or(*constraints)


def logical_not(constraint: Constraint) -> Not:
    return Not(constraint)


def logical_xor(*constraints: Any) -> Xor:
    return Xor(*constraints)


def anything() -> IsAnything:
    return IsAnything()


def is_true() -> IsTrue:
    return IsTrue()


def is_false() -> IsFalse:
    return IsFalse()


def is_null() -> IsNull:
    return IsNull()


def is_finite() -> IsFinite:
    return IsFinite()


def is_infinite() -> IsInfinite:
    return IsInfinite()


def is_nan() -> IsNan:
    return IsNan()


def is_empty() -> IsEmpty:
    return IsEmpty()


def is_json() -> IsJson:
    return IsJson()


def callback(predicate: Callable[[Any], Any]) -> Callback:
    return Callback(predicate)


def attribute(constraint: Constraint, name: str) -> Attribute:
    return Attribute(constraint, name)


def equal_to(
    value: Any,
    tolerance: float = 0.0,
    max_depth: int = 10,
    canonicalize: bool = False,
    ignore_case: bool = False,
) -> IsEqual:
    return IsEqual(value, tolerance, max_depth, canonicalize, ignore_case)


def attribute_equal_to(
    name: str,
    value: Any,
    tolerance: float = 0.0,
    max_depth: int = 10,
    canonicalize: bool = False,
    ignore_case: bool = False,
) -> Attribute:
    return Attribute(equal_to(value, tolerance, max_depth, canonicalize, ignore_case), name)


def identical_to(value: Any) -> IsIdentical:
    return IsIdentical(value)


def is_instance_of(cls: type | tuple[type, ...]) -> IsInstanceOf:
    return IsInstanceOf(cls)


def is_type(type_name: str) -> IsType:
    return IsType(type_name)


def contains(
    value: Any,
    check_for_object_identity: bool = True,
    check_for_non_object_identity: bool = False,
) -> TraversableContains:
    return TraversableContains(value, check_for_object_identity, check_for_non_object_identity)


def contains_only(kind: str | type) -> ContainsOnly:
    return ContainsOnly(kind)


def array_has_key(key: Any) -> ArrayHasKey:
    return ArrayHasKey(key)


def count_of(expected: int) -> Count:
    return Count(expected)


def greater_than(value: Any) -> GreaterThan:
    return GreaterThan(value)


def greater_than_or_equal(value: Any) -> Or:
    return Or(IsEqual(value), GreaterThan(value))


def less_than(value: Any) -> LessThan:
    return LessThan(value)


def less_than_or_equal(value: Any) -> Or:
    return Or(IsEqual(value), LessThan(value))


def matches_regular_expression(pattern: str) -> RegularExpression:
    return RegularExpression(pattern)


def string_contains(needle: str, ignore_case: bool = False) -> StringContains:
    return StringContains(needle, ignore_case)


def string_starts_with(prefix: str) -> StringStartsWith:
    return StringStartsWith(prefix)


def string_ends_with(suffix: str) -> StringEndsWith:
    return StringEndsWith(suffix)


def object_has_attribute(name: str) -> ObjectHasAttribute:
    return ObjectHasAttribute(name)


def class_has_attribute(name: str) -> ClassHasAttribute:
    return ClassHasAttribute(name)


def class_has_static_attribute(name: str) -> ClassHasStaticAttribute:
    return ClassHasStaticAttribute(name)


# ─── Facade ───────────────────────────────────────────────────────


class Assert:
    """
    Assertion entry points bound to one counter.

    Equality assertions fall back to the configured comparison defaults when
    the caller leaves tolerance/max_depth/canonicalize/ignore_case unset.
    """

    def __init__(
        self,
        counter: AssertionCounter | None = None,
        config: AssertKitConfig | None = None,
    ) -> None:
        self._counter = counter if counter is not None else AssertionCounter()
        comparison = config.comparison if config is not None else ComparisonConfig()
        self._defaults = comparison.to_options()
        self._log = logger

    @property
    def counter(self) -> AssertionCounter:
        return self._counter

    # -- Core -----------------------------------------------------------------

    def assert_that(self, value: Any, constraint: Constraint, message: str = "") -> None:
        """Count, evaluate, and raise on mismatch."""
        if not isinstance(constraint, Constraint):
            raise InvalidArgumentError(2, "Constraint")
        self._counter.add(constraint.cost())
        evaluation = constraint.evaluate(value, message)
        if evaluation.matched:
            return
        self._log.debug(
            "assertion_failed",
            constraint=type(constraint).__name__,
            cost=evaluation.cost,
        )
        raise AssertionFailedError(evaluation.render(), evaluation)

    def fail(self, message: str = "") -> None:
        self._counter.increment()
        raise AssertionFailedError(message)

    def get_count(self) -> int:
        return self._counter.count

    def reset_count(self) -> None:
        self._counter.reset()

    def mark_test_incomplete(self, message: str = "") -> None:
        raise IncompleteTestError(message)

    def mark_test_skipped(self, message: str = "") -> None:
        raise SkippedTestError(message)

    # -- Attribute reading ----------------------------------------------------

    def read_attribute(self, subject: Any, name: str) -> Any:
        return resolve_attribute(subject, name)

    def get_static_attribute(self, cls: type | str, name: str) -> Any:
        return get_static_attribute(cls, name)

    def get_object_attribute(self, obj: Any, name: str) -> Any:
        return get_object_attribute(obj, name)

    # -- Equality -------------------------------------------------------------

    def _equal_to(
        self,
        expected: Any,
        tolerance: Any,
        max_depth: Any,
        canonicalize: Any,
        ignore_case: Any,
    ) -> IsEqual:
        defaults = self._defaults
        # tolerance is the fourth argument of assert_equals / assert_not_equals
        options = comparison_options(
            defaults.tolerance if tolerance is _UNSET else tolerance,
            defaults.max_depth if max_depth is _UNSET else max_depth,
            defaults.canonicalize if canonicalize is _UNSET else canonicalize,
            defaults.ignore_case if ignore_case is _UNSET else ignore_case,
            first_argument=4,
        )
        return IsEqual(expected, options=options)

    def assert_equals(
        self,
        expected: Any,
        actual: Any,
        message: str = "",
        tolerance: float = _UNSET,
        max_depth: int = _UNSET,
        canonicalize: bool = _UNSET,
        ignore_case: bool = _UNSET,
    ) -> None:
        constraint = self._equal_to(expected, tolerance, max_depth, canonicalize, ignore_case)
        self.assert_that(actual, constraint, message)

    def assert_not_equals(
        self,
        expected: Any,
        actual: Any,
        message: str = "",
        tolerance: float = _UNSET,
        max_depth: int = _UNSET,
        canonicalize: bool = _UNSET,
        ignore_case: bool = _UNSET,
    ) -> None:
        constraint = self._equal_to(expected, tolerance, max_depth, canonicalize, ignore_case)
        self.assert_that(actual, Not(constraint), message)

    def assert_attribute_equals(
        self,
        expected: Any,
        attribute_name: str,
        subject: Any,
        message: str = "",
        tolerance: float = _UNSET,
        max_depth: int = _UNSET,
        canonicalize: bool = _UNSET,
        ignore_case: bool = _UNSET,
    ) -> None:
        self.assert_equals(
            expected,
            resolve_attribute(subject, attribute_name),
            message,
            tolerance,
            max_depth,
            canonicalize,
            ignore_case,
        )

    def assert_same(self, expected: Any, actual: Any, message: str = "") -> None:
        self.assert_that(actual, IsIdentical(expected), message)

    def assert_not_same(self, expected: Any, actual: Any, message: str = "") -> None:
        self.assert_that(actual, Not(IsIdentical(expected)), message)

    def assert_attribute_same(
        self, expected: Any, attribute_name: str, subject: Any, message: str = ""
    ) -> None:
        self.assert_same(expected, resolve_attribute(subject, attribute_name), message)

    # -- Scalars --------------------------------------------------------------

    def assert_true(self, condition: Any, message: str = "") -> None:
        self.assert_that(condition, IsTrue(), message)

    def assert_false(self, condition: Any, message: str = "") -> None:
        self.assert_that(condition, IsFalse(), message)

    def assert_null(self, actual: Any, message: str = "") -> None:
        self.assert_that(actual, IsNull(), message)

    def assert_not_null(self, actual: Any, message: str = "") -> None:
        self.assert_that(actual, Not(IsNull()), message)

    def assert_instance_of(self, cls: type, actual: Any, message: str = "") -> None:
        self.assert_that(actual, IsInstanceOf(cls), message)

    def assert_greater_than(self, expected: Any, actual: Any, message: str = "") -> None:
        self.assert_that(actual, GreaterThan(expected), message)

    def assert_less_than(self, expected: Any, actual: Any, message: str = "") -> None:
        self.assert_that(actual, LessThan(expected), message)

    # -- Collections ----------------------------------------------------------

    def assert_count(self, expected_count: int, haystack: Any, message: str = "") -> None:
        if not isinstance(expected_count, int) or isinstance(expected_count, bool):
            raise InvalidArgumentError(1, "integer")
        if not isinstance(haystack, Iterable):
            raise InvalidArgumentError(2, "countable or iterable")
        self.assert_that(haystack, Count(expected_count), message)

    def assert_attribute_count(
        self, expected_count: int, attribute_name: str, subject: Any, message: str = ""
    ) -> None:
        self.assert_count(expected_count, resolve_attribute(subject, attribute_name), message)

    def assert_empty(self, actual: Any, message: str = "") -> None:
        self.assert_that(actual, IsEmpty(), message)

    def assert_not_empty(self, actual: Any, message: str = "") -> None:
        self.assert_that(actual, Not(IsEmpty()), message)

    def assert_contains(
        self,
        needle: Any,
        haystack: Any,
        message: str = "",
        ignore_case: bool = False,
        check_for_object_identity: bool = True,
        check_for_non_object_identity: bool = False,
    ) -> None:
        constraint: Constraint
        if isinstance(haystack, str):
            if not isinstance(needle, str):
                raise InvalidArgumentError(1, "string")
            constraint = StringContains(needle, ignore_case)
        elif isinstance(haystack, Iterable):
            constraint = TraversableContains(
                needle, check_for_object_identity, check_for_non_object_identity
            )
        else:
            raise InvalidArgumentError(2, "iterable or string")
        self.assert_that(haystack, constraint, message)

    def assert_attribute_contains(
        self,
        needle: Any,
        attribute_name: str,
        subject: Any,
        message: str = "",
        ignore_case: bool = False,
        check_for_object_identity: bool = True,
        check_for_non_object_identity: bool = False,
    ) -> None:
        self.assert_contains(
            needle,
            resolve_attribute(subject, attribute_name),
            message,
            ignore_case,
            check_for_object_identity,
            check_for_non_object_identity,
        )

    def assert_contains_only(self, kind: str | type, haystack: Any, message: str = "") -> None:
        if not isinstance(haystack, Iterable):
            raise InvalidArgumentError(2, "iterable")
        self.assert_that(haystack, ContainsOnly(kind), message)

    def assert_array_has_key(self, key: Any, array: Any, message: str = "") -> None:
        if not isinstance(array, (Mapping, list, tuple)):
            raise InvalidArgumentError(2, "mapping or sequence")
        self.assert_that(array, ArrayHasKey(key), message)

    # -- Strings --------------------------------------------------------------

    def assert_regexp(self, pattern: str, string: Any, message: str = "") -> None:
        if not isinstance(string, str):
            raise InvalidArgumentError(2, "string")
        self.assert_that(string, RegularExpression(pattern), message)

    def assert_string_starts_with(self, prefix: str, string: Any, message: str = "") -> None:
        if not isinstance(prefix, str):
            raise InvalidArgumentError(1, "string")
        self.assert_that(string, StringStartsWith(prefix), message)

    def assert_string_ends_with(self, suffix: str, string: Any, message: str = "") -> None:
        if not isinstance(suffix, str):
            raise InvalidArgumentError(1, "string")
        self.assert_that(string, StringEndsWith(suffix), message)

    def assert_json(self, actual: Any, message: str = "") -> None:
        if not isinstance(actual, str):
            raise InvalidArgumentError(1, "string")
        self.assert_that(actual, IsJson(), message)

    # -- Objects & classes ----------------------------------------------------

    def assert_object_has_attribute(self, name: str, obj: Any, message: str = "") -> None:
        self.assert_that(obj, ObjectHasAttribute(name), message)

    def assert_class_has_attribute(self, name: str, cls: Any, message: str = "") -> None:
        if not isinstance(cls, type):
            raise InvalidArgumentError(2, "class")
        self.assert_that(cls, ClassHasAttribute(name), message)

    def assert_class_has_static_attribute(self, name: str, cls: Any, message: str = "") -> None:
        if not isinstance(cls, type):
            raise InvalidArgumentError(2, "class")
        self.assert_that(cls, ClassHasStaticAttribute(name), message)

    # -- Documents ------------------------------------------------------------

    def assert_equal_xml_structure(
        self,
        expected: TreeNode | str,
        actual: TreeNode | str,
        check_attributes: bool = False,
        message: str = "",
    ) -> None:
        if isinstance(expected, str):
            expected = TreeNode.from_xml(expected)
        if isinstance(actual, str):
            actual = TreeNode.from_xml(actual)
        self.assert_that(actual, HasEqualStructure(expected, check_attributes), message)


# ─── Module-level Default ─────────────────────────────────────────

default_assert = Assert()

assert_that = default_assert.assert_that
fail = default_assert.fail
get_count = default_assert.get_count
reset_count = default_assert.reset_count
mark_test_incomplete = default_assert.mark_test_incomplete
mark_test_skipped = default_assert.mark_test_skipped
read_attribute = default_assert.read_attribute
assert_equals = default_assert.assert_equals
assert_not_equals = default_assert.assert_not_equals
assert_attribute_equals = default_assert.assert_attribute_equals
assert_same = default_assert.assert_same
assert_not_same = default_assert.assert_not_same
assert_attribute_same = default_assert.assert_attribute_same
assert_true = default_assert.assert_true
assert_false = default_assert.assert_false
assert_null = default_assert.assert_null
assert_not_null = default_assert.assert_not_null
assert_instance_of = default_assert.assert_instance_of
assert_greater_than = default_assert.assert_greater_than
assert_less_than = default_assert.assert_less_than
assert_count = default_assert.assert_count
assert_attribute_count = default_assert.assert_attribute_count
assert_empty = default_assert.assert_empty
assert_not_empty = default_assert.assert_not_empty
assert_contains = default_assert.assert_contains
assert_attribute_contains = default_assert.assert_attribute_contains
assert_contains_only = default_assert.assert_contains_only
assert_array_has_key = default_assert.assert_array_has_key
assert_regexp = default_assert.assert_regexp
assert_string_starts_with = default_assert.assert_string_starts_with
assert_string_ends_with = default_assert.assert_string_ends_with
assert_json = default_assert.assert_json
assert_object_has_attribute = default_assert.assert_object_has_attribute
assert_class_has_attribute = default_assert.assert_class_has_attribute
assert_class_has_static_attribute = default_assert.assert_class_has_static_attribute
assert_equal_xml_structure = default_assert.assert_equal_xml_structure

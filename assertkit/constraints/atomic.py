"""
AssertKit — Atomic Constraints

Leaf predicates. Each captures its configuration at construction and costs
one check. Equality-based variants delegate to the Value Comparator;
attribute-based variants delegate to the Attribute Resolver.
"""

from __future__ import annotations

import inspect
import json
import math
import re
from collections.abc import Callable, Iterable, Mapping, Sized
from numbers import Number
from typing import Any

from assertkit.constraints.base import Constraint
from assertkit.engine.attributes import (
    get_static_attribute,
    has_object_attribute,
    has_static_attribute,
    resolve_attribute,
    validate_attribute_name,
)
from assertkit.engine.comparator import ValueComparator, comparison_options
from assertkit.engine.errors import AttributeNotFoundError, InvalidArgumentError
from assertkit.engine.exporter import export, export_type
from assertkit.engine.structure import TreeNode, compare_structure
from assertkit.primitives.common import ComparisonOptions

# ─── Trivial ──────────────────────────────────────────────────────


class IsAnything(Constraint):
    def matches(self, value: Any) -> bool:
        return True

    def describe(self) -> str:
        return "is anything"


class IsTrue(Constraint):
    def matches(self, value: Any) -> bool:
        return value is True

    def describe(self) -> str:
        return "is true"


class IsFalse(Constraint):
    def matches(self, value: Any) -> bool:
        return value is False

    def describe(self) -> str:
        return "is false"


class IsNull(Constraint):
    def matches(self, value: Any) -> bool:
        return value is None

    def describe(self) -> str:
        return "is null"


# ─── Equality & Identity ──────────────────────────────────────────


class IsEqual(Constraint):
    """
    Structural equality with a fixed expected value.

    The comparison options (tolerance, depth bound, canonicalization, case
    folding) are captured at construction and never change afterwards.
    """

    def __init__(
        self,
        value: Any,
        tolerance: float = 0.0,
        max_depth: int = 10,
        canonicalize: bool = False,
        ignore_case: bool = False,
        options: ComparisonOptions | None = None,
    ) -> None:
        if options is None:
            options = comparison_options(
                tolerance, max_depth, canonicalize, ignore_case, first_argument=2
            )
        self._value = value
        self._comparator = ValueComparator(options)

    @property
    def value(self) -> Any:
        return self._value

    @property
    def options(self) -> ComparisonOptions:
        return self._comparator.options

    def matches(self, value: Any) -> bool:
        return self._comparator.equals(self._value, value)

    def describe(self) -> str:
        text = f"is equal to {export(self._value)}"
        options = self._comparator.options
        if options.tolerance:
            text += f" with delta <{options.tolerance!r}>"
        if options.canonicalize:
            text += " ignoring order"
        if options.ignore_case:
            text += " ignoring case"
        return text

    def failure_description(self, value: Any) -> str:
        result = self._comparator.compare(self._value, value)
        text = super().failure_description(value)
        if result.matched or not result.reason:
            return text
        where = f" at {result.location}" if result.path else ""
        return f"{text}\nDifference{where}: {result.reason}."


class IsIdentical(Constraint):
    """
    The actual value is the expected object.

    Booleans use the comparator's boolean leaf rule; numbers and strings,
    which Python may or may not intern, compare by exact type and value.
    """

    def __init__(self, value: Any) -> None:
        self._value = value

    def matches(self, value: Any) -> bool:
        expected = self._value
        if isinstance(expected, bool) or isinstance(value, bool):
            return ValueComparator().equals(expected, value)
        if isinstance(expected, (Number, str, bytes)):
            return type(expected) is type(value) and expected == value
        return expected is value

    def describe(self) -> str:
        if isinstance(self._value, (Number, str, bytes)) or self._value is None:
            return f"is identical to {export(self._value)}"
        return f"is identical to an object of class {export_type(self._value)}"


# ─── Types ────────────────────────────────────────────────────────


class IsInstanceOf(Constraint):
    def __init__(self, cls: type | tuple[type, ...]) -> None:
        classes = cls if isinstance(cls, tuple) else (cls,)
        if not classes or not all(isinstance(c, type) for c in classes):
            raise InvalidArgumentError(1, "class or tuple of classes")
        self._cls = cls

    def matches(self, value: Any) -> bool:
        return isinstance(value, self._cls)

    def describe(self) -> str:
        if isinstance(self._cls, tuple):
            names = ", ".join(c.__qualname__ for c in self._cls)
            return f"is an instance of one of ({names})"
        return f'is an instance of class "{self._cls.__qualname__}"'


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (Number, str, bytes))


_TYPE_CHECKS: dict[str, Callable[[Any], bool]] = {
    "bool": lambda v: isinstance(v, bool),
    "int": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "float": lambda v: isinstance(v, float),
    "numeric": lambda v: isinstance(v, Number) and not isinstance(v, bool),
    "str": lambda v: isinstance(v, str),
    "bytes": lambda v: isinstance(v, bytes),
    "null": lambda v: v is None,
    "list": lambda v: isinstance(v, list),
    "tuple": lambda v: isinstance(v, tuple),
    "dict": lambda v: isinstance(v, dict),
    "mapping": lambda v: isinstance(v, Mapping),
    "set": lambda v: isinstance(v, (set, frozenset)),
    "scalar": _is_scalar,
    "callable": callable,
    "iterable": lambda v: isinstance(v, Iterable),
    "object": lambda v: v is not None,
}

TYPE_ALIASES: dict[str, str] = {
    "boolean": "bool",
    "integer": "int",
    "double": "float",
    "string": "str",
    "none": "null",
    "array": "list",
}


class IsType(Constraint):
    """The value is of a named built-in kind (``int``, ``numeric``, ``str`` ...)."""

    def __init__(self, type_name: str) -> None:
        name = TYPE_ALIASES.get(type_name.lower(), type_name.lower())
        if name not in _TYPE_CHECKS:
            raise InvalidArgumentError(1, f"one of {', '.join(sorted(_TYPE_CHECKS))}")
        self._type_name = name

    def matches(self, value: Any) -> bool:
        return _TYPE_CHECKS[self._type_name](value)

    def describe(self) -> str:
        return f"is of type {self._type_name}"


# ─── Numbers ──────────────────────────────────────────────────────


class _Ordering(Constraint):
    _phrase = ""

    def __init__(self, value: Any) -> None:
        self._value = value

    def _compare(self, value: Any) -> bool:
        raise NotImplementedError

    def matches(self, value: Any) -> bool:
        try:
            return bool(self._compare(value))
        except TypeError:
            return False

    def describe(self) -> str:
        return f"{self._phrase} {export(self._value)}"


class GreaterThan(_Ordering):
    _phrase = "is greater than"

    def _compare(self, value: Any) -> bool:
        return value > self._value


class LessThan(_Ordering):
    _phrase = "is less than"

    def _compare(self, value: Any) -> bool:
        return value < self._value


class IsFinite(Constraint):
    def matches(self, value: Any) -> bool:
        try:
            return math.isfinite(value)
        except TypeError:
            return False

    def describe(self) -> str:
        return "is finite"


class IsInfinite(Constraint):
    def matches(self, value: Any) -> bool:
        try:
            return math.isinf(value)
        except TypeError:
            return False

    def describe(self) -> str:
        return "is infinite"


class IsNan(Constraint):
    def matches(self, value: Any) -> bool:
        try:
            return math.isnan(value)
        except TypeError:
            return False

    def describe(self) -> str:
        return "is nan"


# ─── Collections ──────────────────────────────────────────────────


class IsEmpty(Constraint):
    def matches(self, value: Any) -> bool:
        if isinstance(value, Sized):
            return len(value) == 0
        return not value

    def describe(self) -> str:
        return "is empty"


class Count(Constraint):
    def __init__(self, expected: int) -> None:
        if not isinstance(expected, int) or isinstance(expected, bool):
            raise InvalidArgumentError(1, "integer")
        self._expected = expected

    def matches(self, value: Any) -> bool:
        return isinstance(value, Sized) and len(value) == self._expected

    def describe(self) -> str:
        return f"count matches {self._expected}"

    def failure_description(self, value: Any) -> str:
        if isinstance(value, Sized):
            return f"Failed asserting that actual size {len(value)} matches expected size {self._expected}."
        return super().failure_description(value)


class ArrayHasKey(Constraint):
    """A mapping contains the key, or a sequence has the index."""

    def __init__(self, key: Any) -> None:
        self._key = key

    def matches(self, value: Any) -> bool:
        if isinstance(value, Mapping):
            return self._key in value
        if isinstance(value, (list, tuple)) and isinstance(self._key, int) and not isinstance(self._key, bool):
            return -len(value) <= self._key < len(value)
        return False

    def describe(self) -> str:
        return f"has the key {export(self._key)}"


class TraversableContains(Constraint):
    """
    An iterable yields the needle.

    Object needles are found by identity when ``check_for_object_identity``;
    scalar needles require the same type when ``check_for_non_object_identity``.
    """

    def __init__(
        self,
        value: Any,
        check_for_object_identity: bool = True,
        check_for_non_object_identity: bool = False,
    ) -> None:
        self._value = value
        self._object_identity = check_for_object_identity
        self._non_object_identity = check_for_non_object_identity

    def matches(self, value: Any) -> bool:
        if not isinstance(value, Iterable) or isinstance(value, (str, bytes)):
            return False
        if isinstance(value, Mapping):
            value = value.values()
        needle = self._value
        is_object = not (_is_scalar(needle) or needle is None)
        for item in value:
            if is_object and self._object_identity:
                if item is needle:
                    return True
            elif not is_object and self._non_object_identity:
                if IsIdentical(needle).matches(item):
                    return True
            elif item == needle:
                return True
        return False

    def describe(self) -> str:
        return f"contains {export(self._value)}"


class ContainsOnly(Constraint):
    """Every item of an iterable is of a named kind or an instance of a class."""

    def __init__(self, kind: str | type) -> None:
        if isinstance(kind, type):
            self._check: Constraint = IsInstanceOf(kind)
        else:
            self._check = IsType(kind)

    def matches(self, value: Any) -> bool:
        if not isinstance(value, Iterable) or isinstance(value, (str, bytes)):
            return False
        if isinstance(value, Mapping):
            value = value.values()
        return all(self._check.matches(item) for item in value)

    def describe(self) -> str:
        return f"contains only values that {self._check.describe()}"


# ─── Strings ──────────────────────────────────────────────────────


class StringContains(Constraint):
    def __init__(self, needle: str, ignore_case: bool = False) -> None:
        self._needle = needle
        self._ignore_case = ignore_case

    def matches(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        if self._ignore_case:
            return self._needle.casefold() in value.casefold()
        return self._needle in value

    def describe(self) -> str:
        suffix = " ignoring case" if self._ignore_case else ""
        return f"contains {export(self._needle)}{suffix}"


class StringStartsWith(Constraint):
    def __init__(self, prefix: str) -> None:
        self._prefix = prefix

    def matches(self, value: Any) -> bool:
        return isinstance(value, str) and value.startswith(self._prefix)

    def describe(self) -> str:
        return f"starts with {export(self._prefix)}"


class StringEndsWith(Constraint):
    def __init__(self, suffix: str) -> None:
        self._suffix = suffix

    def matches(self, value: Any) -> bool:
        return isinstance(value, str) and value.endswith(self._suffix)

    def describe(self) -> str:
        return f"ends with {export(self._suffix)}"


class RegularExpression(Constraint):
    """The string contains a match for the pattern (``re.search``)."""

    def __init__(self, pattern: str | re.Pattern[str]) -> None:
        try:
            self._pattern = re.compile(pattern)
        except (re.error, TypeError) as exc:
            raise InvalidArgumentError(1, "valid regular expression") from exc

    def matches(self, value: Any) -> bool:
        return isinstance(value, str) and self._pattern.search(value) is not None

    def describe(self) -> str:
        return f"matches PCRE pattern {export(self._pattern.pattern)}"


class IsJson(Constraint):
    def matches(self, value: Any) -> bool:
        if not isinstance(value, (str, bytes)) or not value:
            return False
        try:
            json.loads(value)
        except ValueError:
            return False
        return True

    def describe(self) -> str:
        return "is valid JSON"


# ─── Callbacks ────────────────────────────────────────────────────


class Callback(Constraint):
    """User predicate. Exceptions it raises propagate to the caller."""

    def __init__(self, predicate: Callable[[Any], Any]) -> None:
        if not callable(predicate):
            raise InvalidArgumentError(1, "callable")
        self._predicate = predicate

    def matches(self, value: Any) -> bool:
        return bool(self._predicate(value))

    def describe(self) -> str:
        return "is accepted by specified callback"


# ─── Attributes ───────────────────────────────────────────────────


class ObjectHasAttribute(Constraint):
    def __init__(self, name: str) -> None:
        self._name = validate_attribute_name(name, argument=1)

    def matches(self, value: Any) -> bool:
        if value is None or isinstance(value, type):
            return False
        return has_object_attribute(value, self._name) or has_static_attribute(type(value), self._name)

    def describe(self) -> str:
        return f'has attribute "{self._name}"'


class ClassHasAttribute(Constraint):
    """The class declares the field: class-level, annotated, or slotted."""

    def __init__(self, name: str) -> None:
        self._name = validate_attribute_name(name, argument=1)

    def matches(self, value: Any) -> bool:
        if not isinstance(value, type):
            return False
        if has_static_attribute(value, self._name):
            return True
        for klass in value.__mro__:
            if self._name in inspect.get_annotations(klass):
                return True
            slots = vars(klass).get("__slots__", ())
            if isinstance(slots, str):
                slots = (slots,)
            if self._name in slots or f"__{self._name}" in slots:
                return True
        return False

    def describe(self) -> str:
        return f'has attribute "{self._name}"'


class ClassHasStaticAttribute(Constraint):
    def __init__(self, name: str) -> None:
        self._name = validate_attribute_name(name, argument=1)

    def matches(self, value: Any) -> bool:
        if not isinstance(value, type):
            return False
        try:
            get_static_attribute(value, self._name)
        except AttributeNotFoundError:
            return False
        return True

    def describe(self) -> str:
        return f'has static attribute "{self._name}"'


class Attribute(Constraint):
    """
    Resolve a field of the value, then apply an inner constraint to it.

    Resolution errors (invalid name, missing field) propagate unchanged.
    """

    def __init__(self, constraint: Constraint, name: str) -> None:
        if not isinstance(constraint, Constraint):
            raise InvalidArgumentError(1, "Constraint")
        self._inner = constraint
        self._name = validate_attribute_name(name)

    def matches(self, value: Any) -> bool:
        return self._inner.matches(resolve_attribute(value, self._name))

    def describe(self) -> str:
        return f'attribute "{self._name}" {self._inner.describe()}'

    def cost(self) -> int:
        return self._inner.cost()

    def failure_description(self, value: Any) -> str:
        return self._inner.failure_description(resolve_attribute(value, self._name))


# ─── Structure ────────────────────────────────────────────────────


class HasEqualStructure(Constraint):
    """A TreeNode has the same tag/attribute-name/child-count shape."""

    def __init__(self, expected: TreeNode, check_attributes: bool = False) -> None:
        self._expected = expected
        self._check_attributes = check_attributes

    def matches(self, value: Any) -> bool:
        if not isinstance(value, TreeNode):
            return False
        return not compare_structure(self._expected, value, self._check_attributes)

    def describe(self) -> str:
        return f'has the same structure as node "{self._expected.tag}"'

    def failure_description(self, value: Any) -> str:
        if not isinstance(value, TreeNode):
            return f"Failed asserting that {export_type(value)} is a tree node."
        mismatches = compare_structure(self._expected, value, self._check_attributes)
        return "\n".join(m.message for m in mismatches)

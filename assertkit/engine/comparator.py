"""
AssertKit — Value Comparator

Recursive structural equality with numeric tolerance, a recursion-depth
bound, order canonicalization and case-insensitive string leaves.

Dispatch order (first rule whose shape matches both operands wins):
  1. bool        distinct leaf, never equal to a number
  2. number      |expected - actual| <= tolerance, NaN never equal
  3. str/bytes   exact, or casefolded with ignore_case
  4. mapping     equal key sets, then values recursively
  5. sequence    equal lengths, then elements (sorted first if canonicalize)
  6. set         unordered, always compared via canonical sort
  7. object      same concrete type, then fields recursively

Structural rules (4-7) consume one unit of ``max_depth``. Once the budget is
spent, two structures are equal only if they are the same object. This is a
depth bound, not cycle detection: a deep acyclic structure is treated exactly
like a cycle. Neither operand is ever mutated.

Usage:
    equals([1.0, "A"], [1.01, "a"], tolerance=0.05, ignore_case=True)
    ValueComparator(ComparisonOptions(canonicalize=True)).compare(a, b)
"""

from __future__ import annotations

import inspect
import math
from collections.abc import Mapping, Sequence, Set
from fractions import Fraction
from numbers import Number
from typing import Any

import structlog
from pydantic import ValidationError

from assertkit.engine.errors import InvalidArgumentError
from assertkit.engine.exporter import export, export_type
from assertkit.engine.types import ComparisonResult
from assertkit.primitives.common import ComparisonOptions

logger = structlog.get_logger().bind(system="assertkit.comparator")

_TEXT_TYPES = (str, bytes)

# Rank of each shape inside canonical sort keys. Keys of different ranks are
# never compared beyond the rank itself, so the payload types may differ.
_RANK_NONE = 0
_RANK_BOOL = 1
_RANK_NUMBER = 2
_RANK_TEXT = 3
_RANK_SEQUENCE = 4
_RANK_MAPPING = 5
_RANK_SET = 6
_RANK_OTHER = 7


class _Mismatch(Exception):
    """Internal short-circuit carrying the first difference."""

    def __init__(self, path: list[str], reason: str) -> None:
        super().__init__(reason)
        self.path = path
        self.reason = reason


class ValueComparator:
    """
    Structural-equality comparator bound to one set of options.

    Stateless between calls; one instance may be shared by any number of
    constraints.
    """

    def __init__(self, options: ComparisonOptions | None = None) -> None:
        self._options = options or ComparisonOptions()
        self._log = logger

    @property
    def options(self) -> ComparisonOptions:
        return self._options

    def equals(self, expected: Any, actual: Any) -> bool:
        return self.compare(expected, actual).matched

    def compare(self, expected: Any, actual: Any) -> ComparisonResult:
        """Compare and report the location of the first difference."""
        try:
            self._compare(expected, actual, self._options.max_depth, [])
        except _Mismatch as mismatch:
            return ComparisonResult(matched=False, path=mismatch.path, reason=mismatch.reason)
        return ComparisonResult(matched=True)

    # -- Dispatch -------------------------------------------------------------

    def _compare(self, expected: Any, actual: Any, depth: int, path: list[str]) -> None:
        if isinstance(expected, bool) or isinstance(actual, bool):
            self._compare_bool(expected, actual, path)
            return

        if _is_number(expected) and _is_number(actual):
            self._compare_number(expected, actual, path)
            return

        if isinstance(expected, _TEXT_TYPES) or isinstance(actual, _TEXT_TYPES):
            self._compare_text(expected, actual, path)
            return

        if expected is None or actual is None:
            if expected is not actual:
                raise _Mismatch(path, f"{export(actual)} is not {export(expected)}")
            return

        if isinstance(expected, Mapping) and isinstance(actual, Mapping):
            if self._depth_exhausted(expected, actual, depth, path):
                return
            self._compare_mapping(expected, actual, depth - 1, path)
            return

        if _is_sequence(expected) and _is_sequence(actual):
            if self._depth_exhausted(expected, actual, depth, path):
                return
            self._compare_sequence(expected, actual, depth - 1, path)
            return

        if isinstance(expected, Set) and isinstance(actual, Set):
            if self._depth_exhausted(expected, actual, depth, path):
                return
            self._compare_unordered(list(expected), list(actual), depth - 1, path)
            return

        if _is_container(expected) or _is_container(actual):
            raise _Mismatch(
                path,
                f"{export_type(actual)} does not have the shape of {export_type(expected)}",
            )

        self._compare_object(expected, actual, depth, path)

    def _depth_exhausted(self, expected: Any, actual: Any, depth: int, path: list[str]) -> bool:
        """True when the budget is spent and the pair counts as equal (same object)."""
        if depth > 0:
            return False
        self._log.debug("depth_bound_reached", path="".join(path), max_depth=self._options.max_depth)
        if expected is actual:
            return True
        raise _Mismatch(path, f"maximum comparison depth {self._options.max_depth} reached")

    # -- Leaves ---------------------------------------------------------------

    def _compare_bool(self, expected: Any, actual: Any, path: list[str]) -> None:
        if not (isinstance(expected, bool) and isinstance(actual, bool)) or expected != actual:
            raise _Mismatch(path, f"{export(actual)} is not {export(expected)}")

    def _compare_number(self, expected: Any, actual: Any, path: list[str]) -> None:
        if expected == actual:
            return
        if _is_nan(expected) or _is_nan(actual):
            raise _Mismatch(path, "NaN is never equal to anything")
        if _difference(expected, actual) <= self._options.tolerance:
            return
        delta = f" (tolerance {self._options.tolerance!r})" if self._options.tolerance else ""
        raise _Mismatch(path, f"{export(actual)} does not match {export(expected)}{delta}")

    def _compare_text(self, expected: Any, actual: Any, path: list[str]) -> None:
        if type(expected) is not type(actual) and not (
            isinstance(expected, str) and isinstance(actual, str)
            or isinstance(expected, bytes) and isinstance(actual, bytes)
        ):
            raise _Mismatch(path, f"{export_type(actual)} is not {export_type(expected)}")
        if self._options.ignore_case:
            if _fold(expected) == _fold(actual):
                return
        elif expected == actual:
            return
        raise _Mismatch(path, f"{export(actual)} does not match {export(expected)}")

    # -- Structures -----------------------------------------------------------

    def _compare_mapping(
        self, expected: Mapping[Any, Any], actual: Mapping[Any, Any], depth: int, path: list[str]
    ) -> None:
        expected_keys = set(expected.keys())
        actual_keys = set(actual.keys())
        if expected_keys != actual_keys:
            missing = sorted(map(repr, expected_keys - actual_keys))
            extra = sorted(map(repr, actual_keys - expected_keys))
            parts = []
            if missing:
                parts.append(f"missing keys {', '.join(missing)}")
            if extra:
                parts.append(f"unexpected keys {', '.join(extra)}")
            raise _Mismatch(path, "; ".join(parts))
        for key in expected:
            self._compare(expected[key], actual[key], depth, [*path, f"[{key!r}]"])

    def _compare_sequence(
        self, expected: Sequence[Any], actual: Sequence[Any], depth: int, path: list[str]
    ) -> None:
        if len(expected) != len(actual):
            raise _Mismatch(path, f"length {len(actual)} does not match {len(expected)}")
        if self._options.canonicalize:
            self._compare_unordered(list(expected), list(actual), depth, path)
            return
        for index, (exp_item, act_item) in enumerate(zip(expected, actual)):
            self._compare(exp_item, act_item, depth, [*path, f"[{index}]"])

    def _compare_unordered(
        self, expected: list[Any], actual: list[Any], depth: int, path: list[str]
    ) -> None:
        if len(expected) != len(actual):
            raise _Mismatch(path, f"size {len(actual)} does not match {len(expected)}")
        expected_sorted = sorted(expected, key=self.canonical_key)
        actual_sorted = sorted(actual, key=self.canonical_key)
        for index, (exp_item, act_item) in enumerate(zip(expected_sorted, actual_sorted)):
            self._compare(exp_item, act_item, depth, [*path, f"<sorted {index}>"])

    def _compare_object(self, expected: Any, actual: Any, depth: int, path: list[str]) -> None:
        if type(expected) is not type(actual):
            raise _Mismatch(path, f"{export_type(actual)} is not an instance of {export_type(expected)}")

        expected_fields = object_fields(expected)
        actual_fields = object_fields(actual)
        if expected_fields is None or actual_fields is None:
            if expected is actual or expected == actual:
                return
            raise _Mismatch(path, f"{export(actual)} does not match {export(expected)}")

        if self._depth_exhausted(expected, actual, depth, path):
            return
        self._compare_mapping(expected_fields, actual_fields, depth - 1, [*path, f"<{type(expected).__name__}>"])

    # -- Canonical keys -------------------------------------------------------

    def canonical_key(self, value: Any) -> tuple[Any, ...]:
        """
        Total-order sort key used by canonicalization.

        Two values that compare equal under exact options produce equal keys,
        so sorting both sides lines equal elements up pairwise.
        """
        return self._key(value, self._options.max_depth)

    def _key(self, value: Any, depth: int) -> tuple[Any, ...]:
        if value is None:
            return (_RANK_NONE,)
        if isinstance(value, bool):
            return (_RANK_BOOL, int(value))
        if _is_number(value):
            if _is_nan(value):
                return (_RANK_NUMBER, 1, 0.0)
            try:
                return (_RANK_NUMBER, 0, float(value))
            except OverflowError:
                # beyond float range; exact ints and fractions still order against floats
                return (_RANK_NUMBER, 0, value)
            except TypeError:
                return (_RANK_NUMBER, 2, repr(value))
        if isinstance(value, _TEXT_TYPES):
            text = _fold(value) if self._options.ignore_case else value
            if isinstance(text, bytes):
                text = text.decode("latin-1")
            return (_RANK_TEXT, text)
        if depth <= 0:
            return (_RANK_OTHER, export_type(value), id(value))
        if isinstance(value, Mapping):
            items = sorted((repr(k), self._key(v, depth - 1)) for k, v in value.items())
            return (_RANK_MAPPING, tuple(items))
        if _is_sequence(value):
            keys = [self._key(v, depth - 1) for v in value]
            if self._options.canonicalize:
                keys.sort()
            return (_RANK_SEQUENCE, tuple(keys))
        if isinstance(value, Set):
            return (_RANK_SET, tuple(sorted(self._key(v, depth - 1) for v in value)))
        fields = object_fields(value)
        if fields is not None:
            items = sorted((k, self._key(v, depth - 1)) for k, v in fields.items())
            return (_RANK_OTHER, export_type(value), tuple(items))
        return (_RANK_OTHER, export_type(value), repr(value))


# ── Helpers ──────────────────────────────────────────────────────────────────


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _is_nan(value: Any) -> bool:
    # NaN is the only number unequal to itself; no float conversion involved
    return value != value


def _difference(expected: Any, actual: Any) -> Any:
    """
    Absolute difference of two numbers, exact wherever the types allow.

    Same-kind pairs (int, Fraction, Decimal) subtract exactly. Mixed pairs
    that cannot subtract directly, or that overflow a float, go through
    Fraction. Infinite operands give an infinite difference.
    """
    try:
        return abs(expected - actual)
    except (TypeError, OverflowError):
        pass
    try:
        return abs(Fraction(expected) - Fraction(actual))
    except (TypeError, ValueError, OverflowError):
        return math.inf


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _is_container(value: Any) -> bool:
    return isinstance(value, (Mapping, Set)) or _is_sequence(value)


def _fold(text: str | bytes) -> str | bytes:
    if isinstance(text, bytes):
        return text.lower()
    return text.casefold()


def object_fields(value: Any) -> dict[str, Any] | None:
    """
    Declared fields of an object: instance ``__dict__`` plus ``__slots__``.

    Name-mangled private fields are included under their mangled names.
    Returns None for objects that expose no fields (builtins, C types) and
    for classes, modules and routines, which only compare by identity.
    """
    if inspect.isclass(value) or inspect.ismodule(value) or inspect.isroutine(value):
        return None
    fields: dict[str, Any] = {}
    found = False
    try:
        namespace = object.__getattribute__(value, "__dict__")
    except AttributeError:
        namespace = None
    if isinstance(namespace, dict):
        fields.update(namespace)
        found = True

    for klass in type(value).__mro__:
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot.startswith("__") and slot.endswith("__"):
                continue
            name = _mangle(klass, slot)
            descriptor = vars(klass).get(name)
            if descriptor is None:
                continue
            found = True
            try:
                fields[name] = descriptor.__get__(value, klass)
            except AttributeError:
                # declared but never assigned
                continue
    return fields if found else None


def _mangle(klass: type, name: str) -> str:
    if name.startswith("__") and not name.endswith("__"):
        return f"_{klass.__name__.lstrip('_')}{name}"
    return name


def equals(
    expected: Any,
    actual: Any,
    tolerance: float = 0.0,
    max_depth: int = 10,
    canonicalize: bool = False,
    ignore_case: bool = False,
) -> bool:
    """Structural equality of ``expected`` and ``actual`` under the given options."""
    options = comparison_options(tolerance, max_depth, canonicalize, ignore_case, first_argument=3)
    return ValueComparator(options).equals(expected, actual)


# ── Options ──────────────────────────────────────────────────────────────────

_OPTION_FIELDS = ("tolerance", "max_depth", "canonicalize", "ignore_case")

_OPTION_EXPECTED = {
    "tolerance": "non-negative number",
    "max_depth": "non-negative integer",
    "canonicalize": "boolean",
    "ignore_case": "boolean",
}


def comparison_options(
    tolerance: Any = 0.0,
    max_depth: Any = 10,
    canonicalize: Any = False,
    ignore_case: Any = False,
    first_argument: int = 3,
) -> ComparisonOptions:
    """
    Validated ComparisonOptions for a caller-facing entry point.

    ``first_argument`` is the position of ``tolerance`` in the caller's
    signature; the remaining options follow it in order. Rejected values
    raise InvalidArgumentError naming that position.
    """
    try:
        return ComparisonOptions(
            tolerance=tolerance,
            max_depth=max_depth,
            canonicalize=canonicalize,
            ignore_case=ignore_case,
        )
    except ValidationError as exc:
        field = str(exc.errors()[0]["loc"][0])
        raise InvalidArgumentError(
            first_argument + _OPTION_FIELDS.index(field), _OPTION_EXPECTED[field]
        ) from exc

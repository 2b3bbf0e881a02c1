"""
Unit tests for the Value Comparator.

Covers numeric tolerance, boolean leaves, case folding, canonicalization,
mapping/object recursion, the depth bound and the first-difference path.
"""

from __future__ import annotations

import itertools
from decimal import Decimal
from fractions import Fraction

import pytest

from assertkit.engine.comparator import ValueComparator, comparison_options, equals, object_fields
from assertkit.engine.errors import InvalidArgumentError
from assertkit.primitives.common import ComparisonOptions


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y


class Secret:
    def __init__(self, value):
        self.__value = value


class Slotted:
    __slots__ = ("a", "__b")

    def __init__(self, a, b):
        self.a = a
        self.__b = b


# ─── Numbers ──────────────────────────────────────────────────────────────────


class TestNumbers:
    @pytest.mark.parametrize("value", [0, 1, -7, 3.25, 10**20, Decimal("1.5")])
    def test_number_equals_itself(self, value):
        assert equals(value, value)

    def test_int_and_float_compare_by_value(self):
        assert equals(1, 1.0)

    def test_within_tolerance(self):
        assert equals(1.0, 1.05, tolerance=0.1)
        assert equals(10, 9, tolerance=1)

    def test_outside_tolerance(self):
        assert not equals(1.0, 1.2, tolerance=0.1)

    def test_zero_tolerance_is_exact(self):
        assert not equals(1.0, 1.0000001)

    def test_nan_never_equal(self):
        nan = float("nan")
        assert not equals(nan, nan)
        assert not equals(nan, nan, tolerance=1e9)

    def test_infinity_compares_by_value(self):
        inf = float("inf")
        assert equals(inf, inf)
        assert equals(-inf, -inf)
        assert not equals(inf, -inf)
        assert not equals(inf, 1e308, tolerance=1.0)

    def test_decimal_against_float_uses_tolerance(self):
        assert equals(Decimal("1.10"), 1.1, tolerance=1e-9)

    def test_number_against_string_is_unequal(self):
        assert not equals(1, "1")

    def test_integers_beyond_float_range(self):
        big = 10**400
        assert equals(big, big)
        assert not equals(big, big + 1)
        assert equals(big, big + 1, tolerance=5)
        assert not equals(big, 1.0)
        assert not equals(big, float("inf"))

    def test_big_integers_under_canonicalize(self):
        big = 10**400
        assert equals([big, 1, 2.5], [2.5, big, 1], canonicalize=True)
        assert not equals([big, 1], [1, big + 1], canonicalize=True)

    def test_fractions_compare_exactly(self):
        assert equals(Fraction(1, 3), Fraction(1, 3))
        assert not equals(Fraction(1, 3), Fraction(1, 3) + Fraction(1, 10**50))
        assert equals(Fraction(1, 3), 0.3333, tolerance=1e-3)

    def test_decimal_nan_never_equal(self):
        assert not equals(Decimal("NaN"), Decimal("NaN"))


# ─── Booleans ─────────────────────────────────────────────────────────────────


class TestBooleans:
    def test_same_booleans(self):
        assert equals(True, True)
        assert equals(False, False)

    def test_different_booleans(self):
        assert not equals(True, False)

    def test_bool_never_equals_number(self):
        assert not equals(True, 1)
        assert not equals(0, False)
        assert not equals(True, 1.0, tolerance=1.0)


# ─── Strings ──────────────────────────────────────────────────────────────────


class TestStrings:
    def test_exact(self):
        assert equals("abc", "abc")
        assert not equals("ABC", "abc")

    def test_ignore_case(self):
        assert equals("ABC", "abc", ignore_case=True)

    def test_ignore_case_casefolds(self):
        assert equals("STRASSE", "straße", ignore_case=True)

    def test_bytes_ignore_case(self):
        assert equals(b"ABC", b"abc", ignore_case=True)

    def test_str_against_bytes(self):
        assert not equals("abc", b"abc")

    def test_ignore_case_does_not_apply_to_keys(self):
        assert not equals({"A": 1}, {"a": 1}, ignore_case=True)
        assert equals({"k": "A"}, {"k": "a"}, ignore_case=True)


# ─── Sequences & Canonicalization ─────────────────────────────────────────────


class TestSequences:
    def test_equal_lists(self):
        assert equals([1, [2, 3]], [1, [2, 3]])

    def test_list_and_tuple_are_both_sequences(self):
        assert equals([1, 2], (1, 2))

    def test_length_mismatch(self):
        assert not equals([1, 2], [1, 2, 3])

    def test_tolerance_not_applied_to_length(self):
        assert not equals([1], [1, 1], tolerance=5)

    def test_order_matters_without_canonicalize(self):
        assert not equals([1, 2], [2, 1])

    def test_canonicalize_ignores_order(self):
        assert equals([1, 2], [2, 1], canonicalize=True)

    def test_canonicalize_is_multiset_equality(self):
        assert not equals([1, 1, 2], [1, 2, 2], canonicalize=True)

    def test_canonicalize_nested(self):
        assert equals([[3, 1], [2]], [[2], [1, 3]], canonicalize=True)

    def test_canonicalize_mixed_types(self):
        assert equals([None, "a", 1, True], [True, 1, None, "a"], canonicalize=True)

    def test_canonicalize_with_ignore_case(self):
        assert equals(["B", "a"], ["A", "b"], canonicalize=True, ignore_case=True)

    @pytest.mark.parametrize("perm", list(itertools.permutations([1, 2, 3])))
    def test_every_permutation_equal_under_canonicalize(self, perm):
        original = [1, 2, 3]
        assert equals(original, list(perm), canonicalize=True)
        assert equals(original, list(perm)) == (list(perm) == original)

    def test_sets_are_unordered(self):
        assert equals({1, 2, 3}, {3, 2, 1})
        assert not equals({1, 2}, {1, 3})

    def test_sequence_against_mapping(self):
        assert not equals([1, 2], {0: 1, 1: 2})


# ─── Mappings & Objects ───────────────────────────────────────────────────────


class TestMappings:
    def test_key_order_irrelevant(self):
        assert equals({"a": 1, "b": 2}, {"b": 2, "a": 1})

    def test_missing_key(self):
        assert not equals({"a": 1, "b": 2}, {"a": 1})

    def test_values_recursed_with_tolerance(self):
        assert equals({"a": [1.0, 2.0]}, {"a": [1.01, 1.99]}, tolerance=0.05)

    def test_canonicalize_reaches_nested_sequences(self):
        assert equals({"a": [1, 2]}, {"a": [2, 1]}, canonicalize=True)


class TestObjects:
    def test_same_fields(self):
        assert equals(Point(1, 2), Point(1, 2))

    def test_different_fields(self):
        assert not equals(Point(1, 2), Point(1, 3))

    def test_different_types(self):
        assert not equals(Point(1, 2), Secret(1))

    def test_private_fields_compared(self):
        assert equals(Secret(5), Secret(5))
        assert not equals(Secret(5), Secret(6))

    def test_slots_compared(self):
        assert equals(Slotted(1, 2), Slotted(1, 2))
        assert not equals(Slotted(1, 2), Slotted(1, 3))

    def test_object_fields_include_mangled_names(self):
        assert object_fields(Secret(1)) == {"_Secret__value": 1}
        assert object_fields(Slotted(1, 2)) == {"a": 1, "_Slotted__b": 2}

    def test_tolerance_inside_objects(self):
        assert equals(Point(1.0, 2.0), Point(1.001, 2.0), tolerance=0.01)

    def test_comparison_does_not_mutate(self):
        expected = {"a": [3, 1, 2]}
        actual = {"a": [2, 3, 1]}
        assert equals(expected, actual, canonicalize=True)
        assert expected == {"a": [3, 1, 2]}
        assert actual == {"a": [2, 3, 1]}

    def test_functions_compare_by_identity(self):
        def f():
            return 1

        def g():
            return 1

        assert equals(f, f)
        assert not equals(f, g)

    def test_none(self):
        assert equals(None, None)
        assert not equals(None, 0)
        assert not equals([], None)


# ─── Depth Bound ──────────────────────────────────────────────────────────────


def _nested(levels: int) -> list:
    root: list = []
    node = root
    for _ in range(levels):
        child: list = []
        node.append(child)
        node = child
    return root


class TestDepthBound:
    def test_self_referential_structures_are_unequal(self):
        a: list = []
        a.append(a)
        b: list = []
        b.append(b)
        assert not equals(a, b, max_depth=10)

    def test_self_referential_structure_equals_itself(self):
        a: list = []
        a.append(a)
        assert equals(a, a)

    def test_deep_acyclic_structure_is_unequal(self):
        assert not equals(_nested(1000), _nested(1000), max_depth=10)

    def test_structure_within_budget_is_equal(self):
        assert equals(_nested(5), _nested(5), max_depth=10)

    def test_zero_depth_still_compares_leaves(self):
        assert equals(3, 3, max_depth=0)
        assert not equals([1], [1], max_depth=0)

    def test_self_referential_dicts(self):
        a: dict = {}
        a["self"] = a
        b: dict = {}
        b["self"] = b
        assert not equals(a, b)


# ─── Comparison Result ────────────────────────────────────────────────────────


class TestComparisonResult:
    def test_match_has_no_path(self):
        result = ValueComparator().compare([1], [1])
        assert result.matched
        assert result.path == []
        assert result.reason == ""

    def test_path_to_first_difference(self):
        result = ValueComparator().compare({"a": [1, 2]}, {"a": [1, 3]})
        assert not result.matched
        assert result.path == ["['a']", "[1]"]
        assert result.location == "['a'][1]"
        assert "3" in result.reason

    def test_missing_keys_named(self):
        result = ValueComparator().compare({"a": 1, "b": 2}, {"a": 1, "c": 2})
        assert "missing keys 'b'" in result.reason
        assert "unexpected keys 'c'" in result.reason

    def test_options_are_frozen(self):
        comparator = ValueComparator(ComparisonOptions(tolerance=0.5))
        with pytest.raises(Exception):
            comparator.options.tolerance = 1.0  # type: ignore[misc]

    def test_negative_tolerance_rejected(self):
        with pytest.raises(ValueError):
            ComparisonOptions(tolerance=-1.0)


# ─── Option Validation ────────────────────────────────────────────────────────


class TestOptionValidation:
    def test_negative_tolerance_is_invalid_argument(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            equals(1, 1, tolerance=-1)
        assert exc_info.value.argument == 3

    def test_negative_depth_is_invalid_argument(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            equals(1, 1, max_depth=-1)
        assert exc_info.value.argument == 4

    def test_wrongly_typed_option(self):
        with pytest.raises(InvalidArgumentError):
            equals(1, 1, tolerance="wide")  # type: ignore[arg-type]

    def test_argument_position_follows_caller(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            comparison_options(max_depth=-5, first_argument=2)
        assert exc_info.value.argument == 3
        assert "non-negative integer" in str(exc_info.value)

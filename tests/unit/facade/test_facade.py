"""
Unit tests for the assertion facade.

Covers the counter contract (cost added before evaluation, including on
failure), failure escalation, configured defaults, argument validation and
the attribute-based and document assertions.
"""

from __future__ import annotations

import pytest

from assertkit import facade
from assertkit.config import AssertKitConfig, ComparisonConfig
from assertkit.constraints import And, GreaterThan, IsEqual, LessThan
from assertkit.engine.counter import AssertionCounter
from assertkit.engine.errors import (
    AssertionFailedError,
    AttributeNotFoundError,
    IncompleteTestError,
    InvalidArgumentError,
    InvalidNameError,
    SkippedTestError,
)
from assertkit.facade import Assert


class Wallet:
    currency = "EUR"

    def __init__(self) -> None:
        self.__coins = [1, 2, 5]
        self._owner = "ada"
        self.entries = [{"id": 1}, 2]


@pytest.fixture
def checks() -> Assert:
    return Assert()


# ─── Counting ─────────────────────────────────────────────────────────────────


class TestCounting:
    def test_each_passing_assertion_counts(self, checks: Assert):
        checks.assert_true(True)
        checks.assert_equals(1, 1)
        assert checks.get_count() == 2

    def test_composite_cost(self, checks: Assert):
        checks.assert_that(5, And(GreaterThan(1), LessThan(10), IsEqual(5)))
        assert checks.get_count() == 3

    def test_failed_assertion_still_counts(self, checks: Assert):
        with pytest.raises(AssertionFailedError):
            checks.assert_that(0, And(GreaterThan(1), LessThan(10)))
        assert checks.get_count() == 2

    def test_fail_counts_once(self, checks: Assert):
        with pytest.raises(AssertionFailedError, match="boom"):
            checks.fail("boom")
        assert checks.get_count() == 1

    def test_reset(self, checks: Assert):
        checks.assert_true(True)
        checks.reset_count()
        assert checks.get_count() == 0

    def test_invalid_arguments_do_not_count(self, checks: Assert):
        with pytest.raises(InvalidArgumentError):
            checks.assert_contains(1, "abc")
        assert checks.get_count() == 0

    def test_shared_counter(self):
        counter = AssertionCounter()
        Assert(counter).assert_true(True)
        Assert(counter).assert_true(True)
        assert counter.count == 2


# ─── Failure Escalation ───────────────────────────────────────────────────────


class TestFailures:
    def test_failure_is_assertion_error(self, checks: Assert):
        with pytest.raises(AssertionError):
            checks.assert_equals(1, 2)

    def test_message_precedes_failure(self, checks: Assert):
        with pytest.raises(AssertionFailedError) as exc_info:
            checks.assert_equals(1, 2, "totals differ")
        text = str(exc_info.value)
        assert text.startswith("totals differ\n")
        assert "Failed asserting that 2 is equal to 1." in text

    def test_evaluation_attached(self, checks: Assert):
        with pytest.raises(AssertionFailedError) as exc_info:
            checks.assert_greater_than(10, 3)
        evaluation = exc_info.value.evaluation
        assert evaluation is not None
        assert not evaluation.matched
        assert evaluation.description == "is greater than 10"

    def test_rejects_non_constraint(self, checks: Assert):
        with pytest.raises(InvalidArgumentError):
            checks.assert_that(1, 1)  # type: ignore[arg-type]

    def test_mark_incomplete(self, checks: Assert):
        with pytest.raises(IncompleteTestError):
            checks.mark_test_incomplete("later")

    def test_mark_skipped(self, checks: Assert):
        with pytest.raises(SkippedTestError):
            checks.mark_test_skipped("no network")


# ─── Equality ─────────────────────────────────────────────────────────────────


class TestEquality:
    def test_options_forwarded(self, checks: Assert):
        checks.assert_equals([1.0, 2.0], [2.01, 1.0], tolerance=0.1, canonicalize=True)
        checks.assert_equals("ABC", "abc", ignore_case=True)

    def test_not_equals(self, checks: Assert):
        checks.assert_not_equals(1, 2)
        with pytest.raises(AssertionFailedError):
            checks.assert_not_equals(1, 1)

    def test_configured_defaults(self):
        config = AssertKitConfig(comparison=ComparisonConfig(tolerance=0.5))
        checks = Assert(config=config)
        checks.assert_equals(1.0, 1.3)
        with pytest.raises(AssertionFailedError):
            checks.assert_equals(1.0, 1.3, tolerance=0.0)

    def test_invalid_options_rejected_before_counting(self, checks: Assert):
        with pytest.raises(InvalidArgumentError) as exc_info:
            checks.assert_equals(1, 1, tolerance=-1)
        assert exc_info.value.argument == 4
        with pytest.raises(InvalidArgumentError):
            checks.assert_not_equals(1, 2, max_depth="deep")
        assert checks.get_count() == 0

    def test_same(self, checks: Assert):
        items: list = []
        checks.assert_same(items, items)
        checks.assert_not_same(items, [])
        with pytest.raises(AssertionFailedError):
            checks.assert_same(items, [])


# ─── Attributes ───────────────────────────────────────────────────────────────


class TestAttributeAssertions:
    def test_attribute_equals_reads_private_field(self, checks: Assert):
        checks.assert_attribute_equals([1, 2, 5], "coins", Wallet())

    def test_attribute_count(self, checks: Assert):
        checks.assert_attribute_count(3, "coins", Wallet())

    def test_attribute_contains(self, checks: Assert):
        checks.assert_attribute_contains(5, "coins", Wallet())
        checks.assert_attribute_contains("AD", "_owner", Wallet(), ignore_case=True)

    def test_attribute_contains_identity_flags(self, checks: Assert):
        with pytest.raises(AssertionFailedError):
            checks.assert_attribute_contains({"id": 1}, "entries", Wallet())
        checks.assert_attribute_contains(
            {"id": 1}, "entries", Wallet(), check_for_object_identity=False
        )
        checks.assert_attribute_contains(2.0, "entries", Wallet())
        with pytest.raises(AssertionFailedError):
            checks.assert_attribute_contains(
                2.0, "entries", Wallet(), check_for_non_object_identity=True
            )

    def test_attribute_same(self, checks: Assert):
        checks.assert_attribute_same("EUR", "currency", Wallet)

    def test_missing_attribute(self, checks: Assert):
        with pytest.raises(AttributeNotFoundError):
            checks.assert_attribute_equals(1, "nope", Wallet())

    def test_invalid_attribute_name(self, checks: Assert):
        with pytest.raises(InvalidNameError):
            checks.assert_attribute_equals(1, "no pe", Wallet())

    def test_read_attribute(self, checks: Assert):
        assert checks.read_attribute(Wallet(), "coins") == [1, 2, 5]
        assert checks.get_static_attribute(Wallet, "currency") == "EUR"

    def test_class_assertions(self, checks: Assert):
        checks.assert_class_has_attribute("currency", Wallet)
        checks.assert_class_has_static_attribute("currency", Wallet)
        checks.assert_object_has_attribute("coins", Wallet())
        with pytest.raises(InvalidArgumentError):
            checks.assert_class_has_attribute("currency", Wallet())


# ─── Collections & Strings ────────────────────────────────────────────────────


class TestCollectionsAndStrings:
    def test_contains_dispatch(self, checks: Assert):
        checks.assert_contains("ell", "hello")
        checks.assert_contains(2, [1, 2])
        with pytest.raises(AssertionFailedError):
            checks.assert_contains(3, [1, 2])

    def test_count_rejects_non_iterable(self, checks: Assert):
        with pytest.raises(InvalidArgumentError):
            checks.assert_count(1, 5)

    def test_count_failure_text(self, checks: Assert):
        with pytest.raises(AssertionFailedError, match="actual size 1 matches expected size 2"):
            checks.assert_count(2, [1])

    def test_empty(self, checks: Assert):
        checks.assert_empty([])
        checks.assert_not_empty([0])

    def test_contains_only(self, checks: Assert):
        checks.assert_contains_only("int", [1, 2])
        with pytest.raises(AssertionFailedError):
            checks.assert_contains_only(str, [1])

    def test_array_has_key(self, checks: Assert):
        checks.assert_array_has_key("a", {"a": 1})
        with pytest.raises(InvalidArgumentError):
            checks.assert_array_has_key("a", "abc")

    def test_strings(self, checks: Assert):
        checks.assert_regexp(r"^\d{3}$", "123")
        checks.assert_string_starts_with("foo", "foobar")
        checks.assert_string_ends_with("bar", "foobar")
        checks.assert_json('{"ok": true}')
        with pytest.raises(InvalidArgumentError):
            checks.assert_regexp(r"\d", 123)


# ─── Documents ────────────────────────────────────────────────────────────────


class TestXmlStructure:
    def test_equal_structure(self, checks: Assert):
        checks.assert_equal_xml_structure("<a><b>1</b></a>", "<a><b>2</b></a>")
        assert checks.get_count() == 1

    def test_child_count_failure(self, checks: Assert):
        with pytest.raises(AssertionFailedError, match='Number of child nodes of "a" differs'):
            checks.assert_equal_xml_structure("<a><b/></a>", "<a><b/><c/></a>")

    def test_missing_attribute_failure(self, checks: Assert):
        with pytest.raises(AssertionFailedError, match='Could not find attribute "x"'):
            checks.assert_equal_xml_structure('<a x="1"/>', "<a/>", check_attributes=True)


# ─── Module-level Functions ───────────────────────────────────────────────────


class TestModuleFunctions:
    def test_default_instance(self):
        facade.reset_count()
        facade.assert_equals(1, 1)
        facade.assert_that(3, facade.logical_or(facade.equal_to(3), facade.is_null()))
        assert facade.get_count() == 3
        facade.reset_count()

    def test_factories(self):
        assert facade.greater_than_or_equal(3).matches(3)
        assert not facade.less_than_or_equal(3).matches(4)
        assert facade.logical_not(facade.is_nan()).matches(1.0)
        assert facade.attribute_equal_to("currency", "EUR").matches(Wallet())
        assert facade.contains_only("str").matches(["a"])

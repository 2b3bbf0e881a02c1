"""
AssertKit — Engine Types

Result records produced by the comparator, the constraints and the
structural tree comparator. Reporters read these; the engine never formats
anything beyond the plain strings stored here.
"""

from __future__ import annotations

import enum

from pydantic import Field

from assertkit.primitives.common import AssertKitBaseModel

# ─── Value Comparison ─────────────────────────────────────────────


class ComparisonResult(AssertKitBaseModel):
    """Outcome of a structural-equality comparison."""

    matched: bool = True
    path: list[str] = Field(default_factory=list)  # location of first difference
    reason: str = ""                               # empty when matched

    @property
    def location(self) -> str:
        """Dotted location string, e.g. ``[2]['name']``. Empty at the root."""
        return "".join(self.path)


# ─── Constraint Evaluation ────────────────────────────────────────


class Evaluation(AssertKitBaseModel):
    """Result of evaluating one constraint against one value."""

    matched: bool
    cost: int = 1
    description: str = ""   # constraint.describe()
    failure: str = ""       # failure text, empty when matched
    message: str = ""       # caller-supplied context

    def render(self) -> str:
        """Message and failure text joined the way the facade reports them."""
        if not self.message:
            return self.failure
        return f"{self.message}\n{self.failure}"


# ─── Structural Comparison ────────────────────────────────────────


class MismatchKind(enum.StrEnum):
    """What part of a tree node failed to match."""

    TAG = "tag"
    ATTRIBUTE_COUNT = "attribute_count"
    ATTRIBUTE_MISSING = "attribute_missing"
    CHILD_COUNT = "child_count"


FATAL_MISMATCHES: frozenset[MismatchKind] = frozenset({
    MismatchKind.TAG,
    MismatchKind.CHILD_COUNT,
})


class StructureMismatch(AssertKitBaseModel):
    """One difference found by the structural tree comparator."""

    path: str
    kind: MismatchKind
    message: str
    fatal: bool = False

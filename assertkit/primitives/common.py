"""
AssertKit — Common Primitives

Shared base models used across the engine, constraints and facade.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# ─── Base Models ──────────────────────────────────────────────────


class AssertKitBaseModel(BaseModel):
    """Base model for all AssertKit records."""

    model_config = {"populate_by_name": True, "from_attributes": True}


class FrozenModel(AssertKitBaseModel):
    """Immutable record. Used for configuration captured at construction."""

    model_config = {"populate_by_name": True, "from_attributes": True, "frozen": True}


class ComparisonOptions(FrozenModel):
    """Options for the structural-equality comparator."""

    tolerance: float = Field(default=0.0, ge=0.0)   # numeric leaves only
    max_depth: int = Field(default=10, ge=0)        # structural recursion budget
    canonicalize: bool = False                      # ignore sequence order
    ignore_case: bool = False                       # string leaves only, never keys

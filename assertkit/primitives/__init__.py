"""
AssertKit — Primitives

Base models shared by every layer.
"""

from assertkit.primitives.common import AssertKitBaseModel, ComparisonOptions, FrozenModel

__all__ = [
    "AssertKitBaseModel",
    "ComparisonOptions",
    "FrozenModel",
]

"""
AssertKit — Value Exporter

Renders arbitrary values into short, deterministic text for constraint
descriptions and failure messages. Large containers and long strings are
truncated; mapping and set contents are emitted in a stable order.
"""

from __future__ import annotations

import math
import reprlib
from collections.abc import Mapping, Set
from typing import Any

_MAX_STRING = 80


class _Exporter(reprlib.Repr):
    def __init__(self) -> None:
        super().__init__()
        self.maxlevel = 4
        self.maxlist = 8
        self.maxtuple = 8
        self.maxdict = 8
        self.maxset = 8
        self.maxfrozenset = 8
        self.maxstring = _MAX_STRING
        self.maxother = _MAX_STRING

    def repr_float(self, x: float, level: int) -> str:
        if math.isnan(x):
            return "nan"
        if math.isinf(x):
            return "inf" if x > 0 else "-inf"
        return repr(x)

    def repr_instance(self, x: Any, level: int) -> str:
        if isinstance(x, type):
            return f"<class {x.__module__}.{x.__qualname__}>"
        return super().repr_instance(x, level)


_exporter = _Exporter()


def export(value: Any) -> str:
    """Short human-readable rendering of ``value``."""
    if isinstance(value, Mapping) and not isinstance(value, dict):
        value = dict(value)
    if isinstance(value, Set) and not isinstance(value, (set, frozenset)):
        value = set(value)
    return _exporter.repr(value)


def export_type(value: Any) -> str:
    """Qualified type name of ``value``, e.g. ``builtins.list``."""
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"

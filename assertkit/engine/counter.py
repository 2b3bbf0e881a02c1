"""
AssertKit — Assertion Counter

Counts atomic checks performed by a facade. Each evaluated constraint adds
its cost; each explicit fail() adds one. The counter only grows until an
explicit reset().

A counter is passed by handle into the facade, so independent facades (and
tests) never share state unless they share the handle.
"""

from __future__ import annotations

import threading

import structlog

logger = structlog.get_logger().bind(system="assertkit.counter")


class AssertionCounter:
    """Thread-safe, monotonically increasing assertion count."""

    def __init__(self) -> None:
        self._count = 0
        self._lock = threading.Lock()

    @property
    def count(self) -> int:
        return self._count

    def add(self, amount: int) -> int:
        """Add ``amount`` (>= 0) and return the new total."""
        if amount < 0:
            raise ValueError("AssertionCounter never decreases; use reset()")
        with self._lock:
            self._count += amount
            return self._count

    def increment(self) -> int:
        return self.add(1)

    def reset(self) -> None:
        with self._lock:
            previous = self._count
            self._count = 0
        logger.debug("counter_reset", previous=previous)

    def __int__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        return f"AssertionCounter(count={self._count})"

"""Pool of reusable scratch registers for the amount-out calculation.

Each computation acquires its own Scratch, overwrites every register it
reads, and hands it back. Acquisition never waits: if the pool is empty or
another thread holds the pool lock, a fresh Scratch is allocated instead.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from estimator.constants import DEFAULT_SCRATCH_POOL_SIZE
from estimator.math.bigint import BigInt


class Scratch:
    """Registers used by one get_amount_out computation."""

    __slots__ = ("effective_in", "numerator", "denominator")

    def __init__(self) -> None:
        self.effective_in = BigInt()
        self.numerator = BigInt()
        self.denominator = BigInt()

    def reset(self) -> None:
        """Zero every register."""
        self.effective_in.reset()
        self.numerator.reset()
        self.denominator.reset()


class ScratchPool:
    """Bounded free-list of Scratch instances, safe across threads.

    Args:
        max_size: Maximum number of idle instances retained. Instances
            released while the pool is full are dropped.
    """

    def __init__(self, max_size: int = DEFAULT_SCRATCH_POOL_SIZE) -> None:
        if max_size < 0:
            raise ValueError(f"max_size must be non-negative, got {max_size}")
        self.max_size = max_size
        self._free: list[Scratch] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._free)

    def get(self) -> Scratch:
        """Take an idle Scratch, or allocate one without waiting."""
        if self._lock.acquire(blocking=False):
            try:
                if self._free:
                    return self._free.pop()
            finally:
                self._lock.release()
        return Scratch()

    def put(self, scratch: Scratch) -> None:
        """Zero a Scratch and return it to the pool if there is room."""
        scratch.reset()
        if self._lock.acquire(blocking=False):
            try:
                if len(self._free) < self.max_size:
                    self._free.append(scratch)
            finally:
                self._lock.release()

    @contextmanager
    def acquire(self) -> Iterator[Scratch]:
        """Context manager pairing get() with put()."""
        scratch = self.get()
        try:
            yield scratch
        finally:
            self.put(scratch)

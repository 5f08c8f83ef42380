"""
Cartesian enumerator (odometer iteration).

Walks the product of the ranges 1..size_d for d = 1..N where N is only
known at run time. Dimension 1 is the least significant digit:
[5, 3] enumerates [1,1], [2,1], ..., [5,1], [1,2], ..., [5,3].

The counter lives in one numpy vector updated in place on every advance.
Callers see a read-only view of it; anyone keeping a value across an
advance must copy it.
"""

from enum import Enum
from typing import Iterator, Sequence, Tuple

import numpy as np


class EnumeratorState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    DONE = "done"


class CartesianEnumerator:
    """
    Single-owner odometer over N integer ranges.

    Usage:
        it = CartesianEnumerator([5, 3])
        while it.advance():
            use(it.counter)          # read-only view, changes on next advance

    or simply `for counter in it: ...` (same view every time).
    """

    def __init__(self, sizes: Sequence[int]):
        self._sizes = np.array([int(s) for s in sizes], dtype=np.int64)
        self._sizes.flags.writeable = False
        self._counter = np.ones(len(self._sizes), dtype=np.int64)
        self._view = self._counter.view()
        self._view.flags.writeable = False
        self.state = EnumeratorState.UNINITIALIZED

    @property
    def ndim(self) -> int:
        return len(self._sizes)

    @property
    def sizes(self) -> Tuple[int, ...]:
        return tuple(int(s) for s in self._sizes)

    @property
    def counter(self) -> np.ndarray:
        """Current counter (read-only view). Only meaningful while READY."""
        if self.state is not EnumeratorState.READY:
            raise RuntimeError(f"no current counter: enumerator is {self.state.value}")
        return self._view

    @property
    def done(self) -> bool:
        return self.state is EnumeratorState.DONE

    def __len__(self) -> int:
        """Total number of counters the enumeration produces."""
        if self.is_empty():
            return 0
        return int(np.prod(self._sizes))

    def is_empty(self) -> bool:
        # Non-positive sizes are empty ranges, like 1:0
        return self.ndim == 0 or bool((self._sizes <= 0).any())

    def start(self) -> bool:
        """Enter the first state. True when a first counter exists."""
        if self.is_empty():
            self.state = EnumeratorState.DONE
            return False
        self._counter[:] = 1
        self.state = EnumeratorState.READY
        return True

    def advance(self) -> bool:
        """
        Move to the next counter. True while READY, False once DONE.

        The first call starts the enumeration.
        """
        if self.state is EnumeratorState.UNINITIALIZED:
            return self.start()
        if self.state is EnumeratorState.DONE:
            return False

        counter = self._counter
        sizes = self._sizes
        last = self.ndim - 1
        idim = 0
        counter[0] += 1
        while counter[idim] > sizes[idim] and idim < last:
            counter[idim] = 1
            idim += 1
            counter[idim] += 1
        if counter[last] > sizes[last]:
            self.state = EnumeratorState.DONE
            return False
        return True

    def __iter__(self) -> Iterator[np.ndarray]:
        while self.advance():
            yield self._view

    def __repr__(self) -> str:
        return f"CartesianEnumerator(sizes={list(self.sizes)}, state={self.state.value})"


def cartesian_indices(sizes: Sequence[int]) -> Iterator[Tuple[int, ...]]:
    """Like CartesianEnumerator, but yields an independent tuple per step."""
    for counter in CartesianEnumerator(sizes):
        yield tuple(int(c) for c in counter)

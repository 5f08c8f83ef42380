"""
Shape providers.

The expanders never look at arrays themselves. Sizes and strides for the
default loop ranges and for linear-offset arithmetic come from a
ShapeProvider (dimensions are 1-based):

- StaticShape: sizes (and optionally strides) known at generation time
- NumpyShape: read from a numpy array
- SymbolicShape: defers the query to the generated code (size(A, d))
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Union

import numpy as np

from ..shared.nodes import Call, Expression, Literal, Symbol, as_expression

ShapeValue = Union[int, Expression]


class ShapeProvider(ABC):
    """Capability: dimension count, per-dimension size and stride."""

    @abstractmethod
    def dimension_count(self) -> Optional[int]:
        """Number of dimensions, or None when only known at run time."""

    @abstractmethod
    def size(self, dimension: int) -> ShapeValue:
        pass

    @abstractmethod
    def stride(self, dimension: int) -> Optional[ShapeValue]:
        """Stride in elements; None means 'not reported'."""

    def _check_dimension(self, dimension: int) -> None:
        count = self.dimension_count()
        if dimension < 1 or (count is not None and dimension > count):
            raise IndexError(f"dimension {dimension} out of range 1..{count}")


def column_major_strides(sizes: Sequence[int]) -> list:
    """[1, s1, s1*s2, ...] for the given sizes."""
    strides = []
    running = 1
    for size in sizes:
        strides.append(running)
        running *= size
    return strides


class StaticShape(ShapeProvider):
    """
    Sizes known up front. Without explicit strides the array is taken to
    be contiguous with dimension 1 varying fastest.
    """

    def __init__(self, sizes: Sequence[int], strides: Optional[Sequence[int]] = None):
        self.sizes = tuple(int(s) for s in sizes)
        if strides is not None and len(strides) != len(self.sizes):
            raise ValueError(f"got {len(strides)} strides for {len(self.sizes)} dimensions")
        self.strides = tuple(int(s) for s in strides) if strides is not None else None

    def dimension_count(self) -> int:
        return len(self.sizes)

    def size(self, dimension: int) -> int:
        self._check_dimension(dimension)
        return self.sizes[dimension - 1]

    def stride(self, dimension: int) -> int:
        self._check_dimension(dimension)
        if self.strides is None:
            return column_major_strides(self.sizes)[dimension - 1]
        return self.strides[dimension - 1]

    def __repr__(self) -> str:
        return f"StaticShape(sizes={self.sizes}, strides={self.strides})"


class NumpyShape(ShapeProvider):
    """Shape and element strides of a numpy array."""

    def __init__(self, array):
        self.array = np.asarray(array)

    def dimension_count(self) -> int:
        return self.array.ndim

    def size(self, dimension: int) -> int:
        self._check_dimension(dimension)
        return int(self.array.shape[dimension - 1])

    def stride(self, dimension: int) -> int:
        self._check_dimension(dimension)
        byte_stride = self.array.strides[dimension - 1]
        if byte_stride % self.array.itemsize:
            raise ValueError(f"stride {byte_stride} is not a whole number of elements")
        return byte_stride // self.array.itemsize


class SymbolicShape(ShapeProvider):
    """
    Shape queried by the generated code at run time. Sizes and strides are
    call expressions size(target, d) / stride(target, d); stride 1 is left
    unreported so the 1-stride convention applies.
    """

    def __init__(self, target: Union[Expression, str]):
        self.target = as_expression(target)

    def dimension_count(self) -> Optional[int]:
        return None

    def size(self, dimension: int) -> Expression:
        self._check_dimension(dimension)
        return Call(Symbol("size", verbatim=True), [self.target, Literal(dimension)])

    def stride(self, dimension: int) -> Optional[Expression]:
        self._check_dimension(dimension)
        if dimension == 1:
            return None
        return Call(Symbol("stride", verbatim=True), [self.target, Literal(dimension)])

"""
Run-time support: Cartesian enumeration, shape providers and the helpers
generated code calls.
"""

from .cartesian import CartesianEnumerator, EnumeratorState, cartesian_indices
from .shape import ShapeProvider, StaticShape, NumpyShape, SymbolicShape, column_major_strides
from .helpers import size, stride, check_arity, RUNTIME_NAMESPACE

__all__ = [
    "CartesianEnumerator", "EnumeratorState", "cartesian_indices",
    "ShapeProvider", "StaticShape", "NumpyShape", "SymbolicShape", "column_major_strides",
    "size", "stride", "check_arity", "RUNTIME_NAMESPACE",
]

"""
Helpers visible to generated code.

The Python backend compiles expansions into functions whose globals are
RUNTIME_NAMESPACE, so generated source can call size(), stride() and
check_arity() by name.
"""

from typing import Any, Dict

import numpy as np

from ..shared.errors import ExtractionArityError


def size(array: Any, dimension: int) -> int:
    """Size of array along 1-based dimension."""
    return int(np.shape(array)[dimension - 1])


def stride(array: Any, dimension: int) -> int:
    """Element stride of array along 1-based dimension."""
    arr = np.asarray(array)
    return arr.strides[dimension - 1] // arr.itemsize


def check_arity(source: Any, expected: int) -> Any:
    """Raise ExtractionArityError unless len(source) == expected."""
    actual = len(source)
    if actual != expected:
        raise ExtractionArityError(expected, actual)
    return source


RUNTIME_NAMESPACE: Dict[str, Any] = {
    "np": np,
    "size": size,
    "stride": stride,
    "check_arity": check_arity,
}

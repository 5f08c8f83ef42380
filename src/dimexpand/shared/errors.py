"""
Error Taxonomy

Expansion-time errors are authoring mistakes: they propagate straight to the
caller of the top-level expansion and are never retried or turned into a
partial result. ExtractionArityError is the one error raised by generated
code when it runs.
"""

from typing import Optional
from .source_location import SourceLocation


class DimExpandError(Exception):
    """Base exception for all dimexpand errors"""
    error_code = "E0000"

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self):
        if self.location:
            return f"error[{self.error_code}]: {self.message}\n --> {self.location}"
        return self.message


# ============================================================================
# Expansion-time errors
# ============================================================================

class ExpansionError(DimExpandError):
    """Error detected while expanding a template (non-recoverable)."""


class InvalidDimensionality(ExpansionError):
    """N passed to an expander is not a positive integer."""
    error_code = "E0101"

    def __init__(self, n, directive: str = "expansion"):
        super().__init__(f"{directive}: dimensionality must be a positive integer, got {n!r}")
        self.n = n
        self.directive = directive


class MalformedIndexedName(ExpansionError):
    """
    Indexed name whose base is empty, or whose suffix does not name any
    enclosing binder.
    """
    error_code = "E0102"

    def __init__(self, name: str, reason: str, location: Optional[SourceLocation] = None):
        super().__init__(f"malformed indexed name '{name}': {reason}", location)
        self.name = name
        self.reason = reason


class TemplateShadowingError(ExpansionError):
    """A Template re-binds a binder that is already bound around it."""
    error_code = "E0103"

    def __init__(self, binder: str, location: Optional[SourceLocation] = None):
        super().__init__(
            f"template binder '{binder}' shadows an enclosing binder of the same name; "
            f"nested templates must use distinct binder names",
            location,
        )
        self.binder = binder


class ShapeQueryFailed(ExpansionError):
    """The ShapeProvider could not report a size or stride."""
    error_code = "E0104"

    def __init__(self, query: str, dimension: Optional[int] = None, reason: str = ""):
        where = f" for dimension {dimension}" if dimension is not None else ""
        detail = f": {reason}" if reason else ""
        super().__init__(f"shape query '{query}' failed{where}{detail}")
        self.query = query
        self.dimension = dimension
        self.reason = reason


# ============================================================================
# Errors raised outside the expanders
# ============================================================================

class ExtractionArityError(DimExpandError):
    """Raised by generated extraction code when the source length is not N."""
    error_code = "E0201"

    def __init__(self, expected: int, actual: int):
        super().__init__(f"cannot extract {expected} elements from a sequence of length {actual}")
        self.expected = expected
        self.actual = actual


class TemplateSyntaxError(DimExpandError):
    """Template text could not be parsed."""
    error_code = "E0001"


class DimExpandImplementationError(Exception):
    """
    Error in the Python implementation (not in a user's template).

    Use this for internal invariant breaks, e.g. a node kind no visitor
    handles. Never use this for authoring mistakes.
    """
    def __init__(self, message: str, error_code: str = "E9999"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self):
        return f"[{self.error_code}] {self.message}"

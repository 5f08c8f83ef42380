"""
Textual forms of generated trees.
"""

from .serialization import serialize_expr, ExprSerializer

__all__ = ["serialize_expr", "ExprSerializer"]

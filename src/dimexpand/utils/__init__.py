"""
dimexpand utilities package
"""

from .config import INDEX_SEPARATOR, INDEX_BASE

__all__ = ["INDEX_SEPARATOR", "INDEX_BASE"]

"""
Source Location

Position of a template fragment in the text it was parsed from. Nodes built
directly in Python carry no location.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Location of a node in template source.

    Immutable (frozen) so nodes can be hashed and compared with their
    location attached.
    """
    file: str
    line: int
    column: int
    end_line: int = 0
    end_column: int = 0

    def __str__(self) -> str:
        """Format as file:line:column"""
        return f"{self.file}:{self.line}:{self.column}"

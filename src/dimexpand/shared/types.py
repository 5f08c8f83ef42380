"""
Operator enums shared by the AST, the folder and the backends.
"""

from enum import Enum


class BinaryOperator(Enum):
    """Binary operators - compile-time checked enum"""
    # Arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    FLOORDIV = "//"
    MOD = "%"
    POW = "**"

    # Comparison
    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="

    # Logical (short-circuit)
    AND = "&&"
    OR = "||"

    @property
    def is_comparison(self) -> bool:
        return self in _COMPARISONS

    @property
    def is_logical(self) -> bool:
        return self in (BinaryOperator.AND, BinaryOperator.OR)


_COMPARISONS = frozenset({
    BinaryOperator.EQ, BinaryOperator.NE, BinaryOperator.LT,
    BinaryOperator.LE, BinaryOperator.GT, BinaryOperator.GE,
})


class UnaryOperator(Enum):
    """Unary operators - compile-time checked enum"""
    NOT = "!"
    NEG = "-"

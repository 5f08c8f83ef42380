"""
Template AST Transformer
Converts a Lark parse tree to expression nodes
"""

from typing import List, Optional

from lark import Transformer, v_args
from lark.lexer import Token
from typing_extensions import TypeAlias

from ..shared.nodes import (
    Assign, BinaryOp, Block, Call, Conditional, Expression, IndexAccess, Literal,
    RangeExpr, Symbol, Template, TupleExpr, UnaryOp,
)
from ..shared.source_location import SourceLocation
from ..shared.types import BinaryOperator, UnaryOperator
from ..utils.config import DEFAULT_TEMPLATE_FILE

# Lark's Meta object carries line/column when propagate_positions is on
LarkMeta: TypeAlias = object


@v_args(inline=True, meta=True)
class TemplateTransformer(Transformer):
    """
    One method per aliased grammar rule. Identifiers become plain Symbols;
    the indexed-name convention (i_d) is resolved later by the evaluator.
    """

    def __init__(self, current_file: str = DEFAULT_TEMPLATE_FILE) -> None:
        super().__init__()
        self.current_file = current_file

    def _location(self, meta: LarkMeta) -> Optional[SourceLocation]:
        if getattr(meta, "empty", True):
            return None
        return SourceLocation(
            file=self.current_file,
            line=meta.line,
            column=meta.column,
            end_line=getattr(meta, "end_line", 0) or 0,
            end_column=getattr(meta, "end_column", 0) or 0,
        )

    def _token_location(self, token: Token) -> SourceLocation:
        return SourceLocation(file=self.current_file, line=token.line, column=token.column)

    # Leaves

    def int_lit(self, meta: LarkMeta, token: Token) -> Literal:
        return Literal(int(token), location=self._token_location(token))

    def true_lit(self, meta: LarkMeta) -> Literal:
        return Literal(True, location=self._location(meta))

    def false_lit(self, meta: LarkMeta) -> Literal:
        return Literal(False, location=self._location(meta))

    def name(self, meta: LarkMeta, token: Token) -> Symbol:
        return Symbol(str(token), location=self._token_location(token))

    # Operators

    def binary(self, meta: LarkMeta, lhs: Expression, operator: Token, rhs: Expression) -> BinaryOp:
        return BinaryOp(BinaryOperator(str(operator)), lhs, rhs, location=self._token_location(operator))

    def neg(self, meta: LarkMeta, minus: Token, operand: Expression) -> UnaryOp:
        return UnaryOp(UnaryOperator.NEG, operand, location=self._token_location(minus))

    def not_op(self, meta: LarkMeta, operand: Expression) -> UnaryOp:
        return UnaryOp(UnaryOperator.NOT, operand, location=self._location(meta))

    def conditional(self, meta: LarkMeta, cond: Expression, then: Expression, orelse: Expression) -> Conditional:
        return Conditional(cond, then, orelse, location=self._location(meta))

    def range_expr(self, meta: LarkMeta, start: Expression, stop: Expression) -> RangeExpr:
        return RangeExpr(start, stop, location=self._location(meta))

    # Compound forms

    def args(self, meta: LarkMeta, *items: Expression) -> List[Expression]:
        return list(items)

    def call(self, meta: LarkMeta, callee: Expression, args: Optional[List[Expression]] = None) -> Call:
        return Call(callee, args or [], location=self._location(meta))

    def index(self, meta: LarkMeta, target: Expression, indices: List[Expression]) -> IndexAccess:
        return IndexAccess(target, indices, location=self._location(meta))

    def tuple(self, meta: LarkMeta, *elements: Expression) -> TupleExpr:
        return TupleExpr(list(elements), location=self._location(meta))

    def block(self, meta: LarkMeta, *items: Expression) -> Block:
        return Block(list(items), location=self._location(meta))

    def assign(self, meta: LarkMeta, target: Token, value: Expression) -> Assign:
        return Assign(Symbol(str(target), location=self._token_location(target)), value,
                      location=self._location(meta))

    def template(self, meta: LarkMeta, binder: Token, arrow: Token, body: Expression) -> Template:
        return Template(Symbol(str(binder), location=self._token_location(binder)), body,
                        location=self._location(meta))

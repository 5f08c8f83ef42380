"""
Expression Serialization to S-Expressions
==========================================

Converts generated trees to a canonical S-expression form for tests,
debug logs and golden snapshots:

    nref(3, "A", "i")  ->  (ref A i1 i2 i3)

Builds structured sexpr (nested lists + sexpdata.Symbol), then
pretty-prints it. Every name is emitted as a bare symbol.
"""

from typing import Any

import sexpdata

from ..shared.ast_visitor import ASTVisitor
from ..shared.nodes import (
    Expression, Literal, Symbol, IndexedName, Call, BinaryOp, UnaryOp,
    Conditional, Block, Template, IndexAccess, TupleExpr, RangeExpr,
    ForLoop, Assign, ArityCheck,
)


def _pretty_dumps(sexpr: Any, indent: int = 0, indent_str: str = "  ", max_line: int = 100) -> str:
    """
    Pretty-print structured sexpr. Keeps short forms on one line; breaks only when needed.
    """
    if isinstance(sexpr, bool):
        return "true" if sexpr else "false"
    if isinstance(sexpr, int):
        return str(sexpr)
    # Symbol subclasses str
    if isinstance(sexpr, sexpdata.Symbol):
        return str(sexpr)
    if isinstance(sexpr, list):
        if not sexpr:
            return "()"
        parts = [_pretty_dumps(e, indent + 1, indent_str, max_line) for e in sexpr]
        one_line = "(" + " ".join(parts) + ")"
        if len(one_line) <= max_line and "\n" not in one_line:
            return one_line
        prefix = indent_str * indent
        next_prefix = indent_str * (indent + 1)
        # Head stays on the line of the opening paren
        rest = "\n".join(next_prefix + p for p in parts[1:])
        inner = parts[0] + ("\n" + rest if rest else "")
        return f"({inner}\n{prefix})"
    return str(sexpr)


def serialize_expr(node: Expression, pretty: bool = True) -> str:
    """
    Serialize an expression to an S-expression string.

    Args:
        node: expression to serialize
        pretty: pretty-printed layout (default True). Set False for the
            compact single-line form produced by sexpdata.dumps.
    """
    sexpr = node.accept(ExprSerializer())
    if pretty:
        return _pretty_dumps(sexpr)
    return sexpdata.dumps(sexpr)


class ExprSerializer(ASTVisitor[Any]):
    """Expression to structured S-expression."""

    def _sym(self, s: str) -> sexpdata.Symbol:
        return sexpdata.Symbol(s)

    def _form(self, head: str, *items: Any) -> list:
        return [self._sym(head), *items]

    def visit_literal(self, node: Literal) -> Any:
        if node.kind == 'bool':
            return self._sym("true" if node.value else "false")
        return node.value

    def visit_symbol(self, node: Symbol) -> Any:
        return self._sym(node.name)

    def visit_indexed_name(self, node: IndexedName) -> Any:
        return self._form("indexed", self._sym(node.base), self._sym(node.binder))

    def visit_call(self, node: Call) -> Any:
        return self._form("call", node.callee.accept(self), *[a.accept(self) for a in node.args])

    def visit_binary_op(self, node: BinaryOp) -> Any:
        return self._form(node.op.value, node.lhs.accept(self), node.rhs.accept(self))

    def visit_unary_op(self, node: UnaryOp) -> Any:
        return self._form(node.op.value, node.operand.accept(self))

    def visit_conditional(self, node: Conditional) -> Any:
        items = [node.cond.accept(self), node.then.accept(self)]
        if node.orelse is not None:
            items.append(node.orelse.accept(self))
        return self._form("if", *items)

    def visit_block(self, node: Block) -> Any:
        return self._form("block", *[e.accept(self) for e in node.exprs])

    def visit_template(self, node: Template) -> Any:
        return self._form("->", node.binder.accept(self), node.body.accept(self))

    def visit_index_access(self, node: IndexAccess) -> Any:
        return self._form("ref", node.target.accept(self), *[i.accept(self) for i in node.indices])

    def visit_tuple(self, node: TupleExpr) -> Any:
        return self._form("tuple", *[e.accept(self) for e in node.elements])

    def visit_range(self, node: RangeExpr) -> Any:
        return self._form("range", node.start.accept(self), node.stop.accept(self))

    def visit_for_loop(self, node: ForLoop) -> Any:
        return self._form("for", node.var.accept(self), node.iterable.accept(self), node.body.accept(self))

    def visit_assign(self, node: Assign) -> Any:
        return self._form("=", node.target.accept(self), node.value.accept(self))

    def visit_arity_check(self, node: ArityCheck) -> Any:
        return self._form("check-arity", node.source.accept(self), node.expected)

"""
Python backend.

Prints an expanded tree as Python source and compiles it into a function.
Generated trees index 1-based; the printer shifts every index (and every
inclusive range) to Python's 0-based, half-open conventions, folding the
shift into literal indices.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..runtime.helpers import RUNTIME_NAMESPACE
from ..shared.ast_visitor import ASTVisitor
from ..shared.errors import DimExpandImplementationError
from ..shared.nodes import (
    Expression, Literal, Symbol, IndexedName, Call, BinaryOp, UnaryOp,
    Conditional, Block, Template, IndexAccess, TupleExpr, RangeExpr,
    ForLoop, Assign, ArityCheck, is_literal,
)
from ..shared.types import BinaryOperator, UnaryOperator
from ..utils.config import DEFAULT_FUNCTION_NAME, INDENT, INDEX_BASE

logger = logging.getLogger("dimexpand.backends.python")

_PY_BINARY = {
    BinaryOperator.AND: "and",
    BinaryOperator.OR: "or",
}

_PY_UNARY = {
    UnaryOperator.NOT: "not ",
    UnaryOperator.NEG: "-",
}


def _shift(text: str, node: Expression, delta: int) -> str:
    """text + delta, folded when node is an int literal."""
    if is_literal(node, 'int'):
        return str(node.value + delta)
    if delta == 0:
        return text
    sign = "+" if delta > 0 else "-"
    return f"{text} {sign} {abs(delta)}"


class PythonEmitter(ASTVisitor[str]):
    """
    Expression printer (visit_* return source text) plus statement printer
    (emit_statements returns indented lines).
    """

    # =========================================================================
    # Statements
    # =========================================================================

    def emit_statements(self, node: Expression, depth: int = 0) -> List[str]:
        pad = INDENT * depth
        if isinstance(node, Block):
            lines = []
            for expr in node.exprs:
                lines.extend(self.emit_statements(expr, depth))
            return lines
        if isinstance(node, ForLoop):
            header = f"{pad}for {node.var.accept(self)} in {node.iterable.accept(self)}:"
            return [header] + self.emit_suite(node.body, depth + 1)
        if isinstance(node, Assign):
            return [f"{pad}{node.target.accept(self)} = {node.value.accept(self)}"]
        if isinstance(node, Conditional):
            lines = [f"{pad}if {node.cond.accept(self)}:"] + self.emit_suite(node.then, depth + 1)
            orelse = node.orelse
            while isinstance(orelse, Conditional) and orelse.orelse is not None:
                lines.append(f"{pad}elif {orelse.cond.accept(self)}:")
                lines.extend(self.emit_suite(orelse.then, depth + 1))
                orelse = orelse.orelse
            if orelse is not None:
                lines.append(f"{pad}else:")
                lines.extend(self.emit_suite(orelse, depth + 1))
            return lines
        return [f"{pad}{node.accept(self)}"]

    def emit_suite(self, node: Expression, depth: int) -> List[str]:
        lines = self.emit_statements(node, depth)
        return lines or [f"{INDENT * depth}pass"]

    # =========================================================================
    # Expressions
    # =========================================================================

    def visit_literal(self, node: Literal) -> str:
        return repr(node.value)

    def visit_symbol(self, node: Symbol) -> str:
        return node.name

    def visit_indexed_name(self, node: IndexedName) -> str:
        raise DimExpandImplementationError(
            f"unexpanded indexed name '{node}' reached the Python backend"
        )

    def visit_call(self, node: Call) -> str:
        return f"{node.callee.accept(self)}({', '.join(a.accept(self) for a in node.args)})"

    def visit_binary_op(self, node: BinaryOp) -> str:
        op = _PY_BINARY.get(node.op, node.op.value)
        return f"({node.lhs.accept(self)} {op} {node.rhs.accept(self)})"

    def visit_unary_op(self, node: UnaryOp) -> str:
        return f"({_PY_UNARY[node.op]}{node.operand.accept(self)})"

    def visit_conditional(self, node: Conditional) -> str:
        if node.orelse is None:
            raise DimExpandImplementationError("if without else used as a value")
        return f"({node.then.accept(self)} if {node.cond.accept(self)} else {node.orelse.accept(self)})"

    def visit_block(self, node: Block) -> str:
        if len(node.exprs) == 1:
            return node.exprs[0].accept(self)
        raise DimExpandImplementationError(
            f"block of {len(node.exprs)} statements used as a value"
        )

    def visit_template(self, node: Template) -> str:
        raise DimExpandImplementationError(
            f"unevaluated template '{node}' reached the Python backend"
        )

    def visit_index_access(self, node: IndexAccess) -> str:
        indices = [_shift(i.accept(self), i, -INDEX_BASE) for i in node.indices]
        return f"{node.target.accept(self)}[{', '.join(indices)}]"

    def visit_tuple(self, node: TupleExpr) -> str:
        if len(node.elements) == 1:
            return f"({node.elements[0].accept(self)},)"
        return f"({', '.join(e.accept(self) for e in node.elements)})"

    def visit_range(self, node: RangeExpr) -> str:
        stop = _shift(node.stop.accept(self), node.stop, 1)
        return f"range({node.start.accept(self)}, {stop})"

    def visit_for_loop(self, node: ForLoop) -> str:
        raise DimExpandImplementationError("for loop used as a value")

    def visit_assign(self, node: Assign) -> str:
        raise DimExpandImplementationError("assignment used as a value")

    def visit_arity_check(self, node: ArityCheck) -> str:
        return f"check_arity({node.source.accept(self)}, {node.expected})"


_STATEMENT_NODES = (Block, ForLoop, Assign)


def _is_statement(node: Expression) -> bool:
    return isinstance(node, _STATEMENT_NODES) or (isinstance(node, Conditional) and node.orelse is None)


def emit_function(body: Expression, params: Sequence[str] = (),
                  name: str = DEFAULT_FUNCTION_NAME,
                  returns: Optional[Expression] = None) -> str:
    """
    Python source of `def name(params): body`.

    A value-like body (not a loop, block or assignment) is returned when no
    explicit `returns` expression is given.
    """
    emitter = PythonEmitter()
    lines = [f"def {name}({', '.join(params)}):"]
    if returns is None and not _is_statement(body):
        lines.append(f"{INDENT}return {body.accept(emitter)}")
    else:
        lines.extend(emitter.emit_suite(body, 1))
        if returns is not None:
            lines.append(f"{INDENT}return {returns.accept(emitter)}")
    return "\n".join(lines) + "\n"


def compile_function(body: Expression, params: Sequence[str] = (),
                     name: str = DEFAULT_FUNCTION_NAME,
                     returns: Optional[Expression] = None,
                     namespace: Optional[Dict[str, Any]] = None) -> Callable:
    """
    Compile an expansion into a Python function.

    The function's globals are the runtime helpers plus `namespace`.
    """
    source = emit_function(body, params, name, returns)
    logger.debug(f"compiling generated function:\n{source}")
    scope: Dict[str, Any] = dict(RUNTIME_NAMESPACE)
    if namespace:
        scope.update(namespace)
    code = compile(source, f"<dimexpand:{name}>", "exec")
    exec(code, scope)
    return scope[name]

"""
Const Folding Pass

After template evaluation the binder is a literal, so comparisons and
conditionals that mention it become decidable. This pass evaluates them at
generation time and drops the branch not taken, so no runtime branch on the
dimension number survives in generated code.
"""

import logging
import operator
from typing import Any, Callable, Dict, Optional

from ..shared.ast_visitor import ASTTransformer
from ..shared.nodes import (
    BinaryOp, Block, Conditional, Expression, Literal, UnaryOp, is_literal,
)
from ..shared.types import BinaryOperator, UnaryOperator
from .base import BasePass, ExpansionContext

logger = logging.getLogger("dimexpand.passes.const_folding")


def _exact_div(left: int, right: int) -> Optional[int]:
    if right == 0 or left % right != 0:
        return None
    return left // right


def _floor_div(left: int, right: int) -> Optional[int]:
    if right == 0:
        return None
    return left // right


def _mod(left: int, right: int) -> Optional[int]:
    if right == 0:
        return None
    return left % right


def _pow(left: int, right: int) -> Optional[int]:
    if right < 0:
        return None
    return left ** right


_INT_ARITHMETIC: Dict[BinaryOperator, Callable[[int, int], Optional[int]]] = {
    BinaryOperator.ADD: operator.add,
    BinaryOperator.SUB: operator.sub,
    BinaryOperator.MUL: operator.mul,
    BinaryOperator.DIV: _exact_div,
    BinaryOperator.FLOORDIV: _floor_div,
    BinaryOperator.MOD: _mod,
    BinaryOperator.POW: _pow,
}

_COMPARISON: Dict[BinaryOperator, Callable[[Any, Any], bool]] = {
    BinaryOperator.EQ: operator.eq,
    BinaryOperator.NE: operator.ne,
    BinaryOperator.LT: operator.lt,
    BinaryOperator.LE: operator.le,
    BinaryOperator.GT: operator.gt,
    BinaryOperator.GE: operator.ge,
}


class ConstantFolder(ASTTransformer):
    """
    Bottom-up folder. Only literal operands are evaluated; every other
    sub-expression is rebuilt unchanged around its folded children.
    """

    def __init__(self):
        self.fold_count = 0

    def fold(self, expr: Expression) -> Expression:
        """Fold until nothing changes (one pass normally suffices)."""
        current = expr.accept(self)
        while True:
            before = self.fold_count
            folded = current.accept(self)
            if self.fold_count == before:
                return folded
            current = folded

    def visit_binary_op(self, node: BinaryOp) -> Expression:
        lhs = node.lhs.accept(self)
        rhs = node.rhs.accept(self)

        if node.op.is_logical:
            folded = self._fold_logical(node.op, lhs, rhs)
        elif is_literal(lhs) and is_literal(rhs):
            folded = self._eval_binary_op(node.op, lhs, rhs)
        else:
            folded = self._fold_identity(node.op, lhs, rhs)

        if folded is not None:
            self.fold_count += 1
            return folded
        return BinaryOp(node.op, lhs, rhs, location=node.location)

    def visit_unary_op(self, node: UnaryOp) -> Expression:
        operand = node.operand.accept(self)
        result = None
        if node.op is UnaryOperator.NOT and is_literal(operand, 'bool'):
            result = Literal(not operand.value, location=node.location)
        elif node.op is UnaryOperator.NEG and is_literal(operand, 'int'):
            result = Literal(-operand.value, location=node.location)
        elif isinstance(operand, UnaryOp) and operand.op is node.op:
            # !!x -> x, --x -> x
            result = operand.operand
        if result is not None:
            self.fold_count += 1
            return result
        return UnaryOp(node.op, operand, location=node.location)

    def visit_conditional(self, node: Conditional) -> Expression:
        """Fold condition and prune the dead branch."""
        cond = node.cond.accept(self)
        if is_literal(cond, 'bool'):
            self.fold_count += 1
            if cond.value:
                return node.then.accept(self)
            if node.orelse is not None:
                return node.orelse.accept(self)
            return Block([], location=node.location)
        orelse = node.orelse.accept(self) if node.orelse is not None else None
        return Conditional(cond, node.then.accept(self), orelse, location=node.location)

    def visit_block(self, node: Block) -> Expression:
        """Fold elements and splice nested blocks into this one."""
        exprs = []
        for expr in node.exprs:
            folded = expr.accept(self)
            if isinstance(folded, Block):
                self.fold_count += 1
                exprs.extend(folded.exprs)
            else:
                exprs.append(folded)
        return Block(exprs, location=node.location)

    def _eval_binary_op(self, op: BinaryOperator, lhs: Literal, rhs: Literal) -> Optional[Expression]:
        """Evaluate op over two literals; None when it must stay symbolic."""
        if op.is_comparison:
            if lhs.kind != rhs.kind:
                return None
            if lhs.kind == 'bool' and op not in (BinaryOperator.EQ, BinaryOperator.NE):
                return None
            return Literal(_COMPARISON[op](lhs.value, rhs.value), location=lhs.location)
        if lhs.kind == 'int' and rhs.kind == 'int' and op in _INT_ARITHMETIC:
            value = _INT_ARITHMETIC[op](lhs.value, rhs.value)
            if value is not None:
                return Literal(value, location=lhs.location)
        return None

    def _fold_logical(self, op: BinaryOperator, lhs: Expression, rhs: Expression) -> Optional[Expression]:
        """Short-circuit on a literal left operand; right literal only when both are."""
        if not is_literal(lhs, 'bool'):
            if is_literal(rhs, 'bool') and rhs.value == (op is BinaryOperator.AND):
                # x && true -> x, x || false -> x
                return lhs
            return None
        if op is BinaryOperator.AND:
            return rhs if lhs.value else lhs
        return lhs if lhs.value else rhs

    def _fold_identity(self, op: BinaryOperator, lhs: Expression, rhs: Expression) -> Optional[Expression]:
        """Integer identities x*1, 1*x, x+0, 0+x, x-0."""
        if op is BinaryOperator.MUL:
            if is_literal(rhs, 'int') and rhs.value == 1:
                return lhs
            if is_literal(lhs, 'int') and lhs.value == 1:
                return rhs
        elif op is BinaryOperator.ADD:
            if is_literal(rhs, 'int') and rhs.value == 0:
                return lhs
            if is_literal(lhs, 'int') and lhs.value == 0:
                return rhs
        elif op is BinaryOperator.SUB:
            if is_literal(rhs, 'int') and rhs.value == 0:
                return lhs
        return None


class ConstFoldingPass(BasePass):
    """Runs ConstantFolder to a fixed point and records the fold count."""

    def run(self, expr: Expression, ctx: ExpansionContext) -> Expression:
        folder = ConstantFolder()
        result = folder.fold(expr)
        ctx.fold_count += folder.fold_count
        if folder.fold_count:
            logger.debug(f"folded {folder.fold_count} sub-expressions")
        return result


def fold_constants(expr: Expression) -> Expression:
    """Fold expr with a throwaway context."""
    return ConstFoldingPass().run(expr, ExpansionContext())

"""
AST Visitor Pattern

This module provides:
1. ASTVisitor (abstract visitor with one visit_* method per node kind)
2. ASTTransformer (visitor that rebuilds the tree; passes override only
   the node kinds they rewrite)
3. walk() for read-only traversal

Design:
- Type-safe dispatch via accept()/visit_* (no isinstance chains)
- Transformers never mutate their input; they return new nodes
"""

from abc import ABC, abstractmethod
from typing import Generic, Iterator, Optional, TypeVar

from .nodes import (
    Expression, Literal, Symbol, IndexedName, Call, BinaryOp, UnaryOp,
    Conditional, Block, Template, IndexAccess, TupleExpr, RangeExpr,
    ForLoop, Assign, ArityCheck,
)

T = TypeVar('T')


class ASTVisitor(ABC, Generic[T]):
    """
    Abstract visitor over expression nodes.

    Usage:
        class Printer(ASTVisitor[str]):
            def visit_literal(self, node):
                return str(node.value)
            ...

        text = node.accept(Printer())
    """

    @abstractmethod
    def visit_literal(self, node: Literal) -> T:
        pass

    @abstractmethod
    def visit_symbol(self, node: Symbol) -> T:
        pass

    @abstractmethod
    def visit_indexed_name(self, node: IndexedName) -> T:
        pass

    @abstractmethod
    def visit_call(self, node: Call) -> T:
        pass

    @abstractmethod
    def visit_binary_op(self, node: BinaryOp) -> T:
        pass

    @abstractmethod
    def visit_unary_op(self, node: UnaryOp) -> T:
        pass

    @abstractmethod
    def visit_conditional(self, node: Conditional) -> T:
        pass

    @abstractmethod
    def visit_block(self, node: Block) -> T:
        pass

    @abstractmethod
    def visit_template(self, node: Template) -> T:
        pass

    @abstractmethod
    def visit_index_access(self, node: IndexAccess) -> T:
        pass

    @abstractmethod
    def visit_tuple(self, node: TupleExpr) -> T:
        pass

    @abstractmethod
    def visit_range(self, node: RangeExpr) -> T:
        pass

    @abstractmethod
    def visit_for_loop(self, node: ForLoop) -> T:
        pass

    @abstractmethod
    def visit_assign(self, node: Assign) -> T:
        pass

    @abstractmethod
    def visit_arity_check(self, node: ArityCheck) -> T:
        pass


class ASTTransformer(ASTVisitor[Expression]):
    """
    Structural copy. Each visit_* rebuilds its node from transformed
    children and keeps the source location.
    """

    def transform(self, node: Expression) -> Expression:
        return node.accept(self)

    def _optional(self, node: Optional[Expression]) -> Optional[Expression]:
        return node.accept(self) if node is not None else None

    def visit_literal(self, node: Literal) -> Expression:
        return node

    def visit_symbol(self, node: Symbol) -> Expression:
        return node

    def visit_indexed_name(self, node: IndexedName) -> Expression:
        return node

    def visit_call(self, node: Call) -> Expression:
        return Call(node.callee.accept(self), [a.accept(self) for a in node.args], location=node.location)

    def visit_binary_op(self, node: BinaryOp) -> Expression:
        return BinaryOp(node.op, node.lhs.accept(self), node.rhs.accept(self), location=node.location)

    def visit_unary_op(self, node: UnaryOp) -> Expression:
        return UnaryOp(node.op, node.operand.accept(self), location=node.location)

    def visit_conditional(self, node: Conditional) -> Expression:
        return Conditional(
            node.cond.accept(self),
            node.then.accept(self),
            self._optional(node.orelse),
            location=node.location,
        )

    def visit_block(self, node: Block) -> Expression:
        return Block([e.accept(self) for e in node.exprs], location=node.location)

    def visit_template(self, node: Template) -> Expression:
        return Template(node.binder, node.body.accept(self), location=node.location)

    def visit_index_access(self, node: IndexAccess) -> Expression:
        return IndexAccess(
            node.target.accept(self),
            [i.accept(self) for i in node.indices],
            location=node.location,
        )

    def visit_tuple(self, node: TupleExpr) -> Expression:
        return TupleExpr([e.accept(self) for e in node.elements], location=node.location)

    def visit_range(self, node: RangeExpr) -> Expression:
        return RangeExpr(node.start.accept(self), node.stop.accept(self), location=node.location)

    def visit_for_loop(self, node: ForLoop) -> Expression:
        body = node.body.accept(self)
        if not isinstance(body, Block):
            body = Block([body], location=node.body.location)
        return ForLoop(node.var.accept(self), node.iterable.accept(self), body, location=node.location)

    def visit_assign(self, node: Assign) -> Expression:
        return Assign(node.target.accept(self), node.value.accept(self), location=node.location)

    def visit_arity_check(self, node: ArityCheck) -> Expression:
        return ArityCheck(node.source.accept(self), node.expected, location=node.location)


def children(node: Expression) -> Iterator[Expression]:
    """Direct child expressions of node, in source order."""
    for value in node._get_all_attributes().values():
        if isinstance(value, Expression):
            yield value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, Expression):
                    yield item


def walk(node: Expression) -> Iterator[Expression]:
    """Pre-order traversal of node and all its descendants."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(children(current))))

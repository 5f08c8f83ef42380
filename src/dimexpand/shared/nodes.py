"""
Expression AST

The tree every other component reads and writes. Expanders build it, the
passes rewrite it, the backends print or compile it.

Design: regular classes with __slots__ (not dataclasses) so subclasses can
add fields without default-ordering trouble. Equality is structural over the
slots and ignores source locations, so a parsed template compares equal to
the same tree built by hand.
"""

from typing import Any, Optional, Sequence, TypeVar, Union, TYPE_CHECKING
from .source_location import SourceLocation
from .types import BinaryOperator, UnaryOperator

if TYPE_CHECKING:
    from .ast_visitor import ASTVisitor

T = TypeVar('T')

# Slots that are metadata and never part of a node's identity
_METADATA_SLOTS = ('location',)


class Expression:
    """
    Base class for all expression nodes.

    Visitor Pattern Support:
    - Subclasses implement accept() to call the matching visit_* method
    """
    __slots__ = ('location',)

    def __init__(self, location: Optional[SourceLocation] = None):
        self.location = location

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        raise NotImplementedError(f"accept() not implemented for {self.__class__.__name__}")

    def _get_all_attributes(self) -> dict:
        """Collect slot values along the MRO (works with __slots__)."""
        attrs = {}
        for cls in self.__class__.__mro__:
            slots = getattr(cls, '__slots__', ())
            if isinstance(slots, str):
                slots = (slots,)
            for slot in slots:
                if slot not in attrs and slot not in _METADATA_SLOTS:
                    attrs[slot] = getattr(self, slot, None)
        return attrs

    def __eq__(self, other):
        if not isinstance(other, self.__class__) or not isinstance(self, other.__class__):
            return False
        return self._get_all_attributes() == other._get_all_attributes()

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        items = []
        for key, value in sorted(self._get_all_attributes().items()):
            if isinstance(value, list):
                value = tuple(value)
            items.append((key, value))
        return hash((self.__class__.__name__, tuple(items)))

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._get_all_attributes().items())
        return f"{self.__class__.__name__}({fields})"


class Literal(Expression):
    """Integer or boolean literal"""
    __slots__ = ('value', 'kind')

    def __init__(self, value: Union[int, bool], location: Optional[SourceLocation] = None):
        if not isinstance(value, int):
            raise TypeError(f"Literal holds int or bool, got {type(value).__name__}")
        super().__init__(location)
        self.value = value
        # 1 == True in Python; keep the two literals distinct
        self.kind = 'bool' if isinstance(value, bool) else 'int'

    def __str__(self) -> str:
        if self.kind == 'bool':
            return "true" if self.value else "false"
        return str(self.value)

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_literal(self)


class Symbol(Expression):
    """
    Identifier. A symbol spelled base_binder inside a Template body is an
    indexed-name request; verbatim=True opts an identifier out of that
    convention.
    """
    __slots__ = ('name', 'verbatim')

    def __init__(self, name: str, verbatim: bool = False, location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.name = name
        self.verbatim = verbatim

    def __str__(self) -> str:
        return self.name

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_symbol(self)


class IndexedName(Expression):
    """Explicit request to fuse base with the value of binder (i, d -> i3)."""
    __slots__ = ('base', 'binder')

    def __init__(self, base: str, binder: str, location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.base = base
        self.binder = binder

    def __str__(self) -> str:
        return f"{self.base}_{{{self.binder}}}"

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_indexed_name(self)


class Call(Expression):
    """Function call callee(args...)"""
    __slots__ = ('callee', 'args')

    def __init__(self, callee: Expression, args: Sequence[Expression],
                 location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.callee = callee
        self.args = list(args)

    def __str__(self) -> str:
        return f"{self.callee}({', '.join(str(a) for a in self.args)})"

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_call(self)


class BinaryOp(Expression):
    """Binary operation (a + b, a == b, a && b)"""
    __slots__ = ('op', 'lhs', 'rhs')

    def __init__(self, op: BinaryOperator, lhs: Expression, rhs: Expression,
                 location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.op = op
        self.lhs = lhs
        self.rhs = rhs

    def __str__(self) -> str:
        return f"({self.lhs} {self.op.value} {self.rhs})"

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_binary_op(self)


class UnaryOp(Expression):
    """Unary operation (-x, !x)"""
    __slots__ = ('op', 'operand')

    def __init__(self, op: UnaryOperator, operand: Expression,
                 location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.op = op
        self.operand = operand

    def __str__(self) -> str:
        return f"{self.op.value}{self.operand}"

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_unary_op(self)


class Conditional(Expression):
    """cond ? then : orelse. orelse may be None (statement-level if)."""
    __slots__ = ('cond', 'then', 'orelse')

    def __init__(self, cond: Expression, then: Expression, orelse: Optional[Expression] = None,
                 location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.cond = cond
        self.then = then
        self.orelse = orelse

    def __str__(self) -> str:
        if self.orelse is None:
            return f"if {self.cond} {self.then} end"
        return f"({self.cond} ? {self.then} : {self.orelse})"

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_conditional(self)


class Block(Expression):
    """Ordered sequence of expressions/statements"""
    __slots__ = ('exprs',)

    def __init__(self, exprs: Sequence[Expression], location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.exprs = list(exprs)

    def __str__(self) -> str:
        return "{ " + "; ".join(str(e) for e in self.exprs) + " }"

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_block(self)


class Template(Expression):
    """One-parameter template: binder -> body"""
    __slots__ = ('binder', 'body')

    def __init__(self, binder: Union[Symbol, str], body: Expression,
                 location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.binder = binder if isinstance(binder, Symbol) else Symbol(binder)
        self.body = body

    def __str__(self) -> str:
        return f"({self.binder} -> {self.body})"

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_template(self)


class IndexAccess(Expression):
    """1-based multi-index access target[i1, ..., iN]"""
    __slots__ = ('target', 'indices')

    def __init__(self, target: Expression, indices: Sequence[Expression],
                 location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.target = target
        self.indices = list(indices)

    def __str__(self) -> str:
        return f"{self.target}[{', '.join(str(i) for i in self.indices)}]"

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_index_access(self)


class TupleExpr(Expression):
    """Fixed-size tuple (a, b, c)"""
    __slots__ = ('elements',)

    def __init__(self, elements: Sequence[Expression], location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.elements = list(elements)

    def __str__(self) -> str:
        if len(self.elements) == 1:
            return f"({self.elements[0]},)"
        return f"({', '.join(str(e) for e in self.elements)})"

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_tuple(self)


class RangeExpr(Expression):
    """Inclusive integer range start:stop"""
    __slots__ = ('start', 'stop')

    def __init__(self, start: Expression, stop: Expression, location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.start = start
        self.stop = stop

    def __str__(self) -> str:
        return f"{self.start}:{self.stop}"

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_range(self)


class ForLoop(Expression):
    """for var in iterable; body; end"""
    __slots__ = ('var', 'iterable', 'body')

    def __init__(self, var: Symbol, iterable: Expression, body: Block,
                 location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.var = var
        self.iterable = iterable
        self.body = body

    def __str__(self) -> str:
        return f"for {self.var} in {self.iterable} {self.body} end"

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_for_loop(self)


class Assign(Expression):
    """Single-variable binding target = value"""
    __slots__ = ('target', 'value')

    def __init__(self, target: Symbol, value: Expression, location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.target = target
        self.value = value

    def __str__(self) -> str:
        return f"{self.target} = {self.value}"

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_assign(self)


class ArityCheck(Expression):
    """Runtime check that len(source) == expected (emitted by nextract)"""
    __slots__ = ('source', 'expected')

    def __init__(self, source: Expression, expected: int, location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.source = source
        self.expected = expected

    def __str__(self) -> str:
        return f"check_arity({self.source}, {self.expected})"

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_arity_check(self)


# ============================================================================
# Construction helpers
# ============================================================================

ExpressionLike = Union[Expression, str, int, bool]


def as_expression(value: ExpressionLike) -> Expression:
    """Lift a Python str/int/bool into the matching leaf node."""
    if isinstance(value, Expression):
        return value
    if isinstance(value, str):
        return Symbol(value)
    if isinstance(value, int):
        return Literal(value)
    raise TypeError(f"cannot build an expression from {type(value).__name__}")


def as_symbol(value: Union[Symbol, str]) -> Symbol:
    if isinstance(value, Symbol):
        return value
    if isinstance(value, str):
        return Symbol(value)
    raise TypeError(f"expected a symbol name, got {type(value).__name__}")


def is_literal(expr: Any, kind: Optional[str] = None) -> bool:
    """True if expr is a Literal (optionally of the given kind)."""
    if not isinstance(expr, Literal):
        return False
    return kind is None or expr.kind == kind

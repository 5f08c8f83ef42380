"""
Per-dimension sequences: tuples, unrolled statement blocks, destructuring
and calls.
"""

from typing import Union

from ..passes.base import ExpansionContext
from ..passes.renaming import fuse
from ..shared.nodes import (
    ArityCheck, Assign, Block, Call, ExpressionLike, IndexAccess, Literal,
    Symbol, Template, TupleExpr, as_expression,
)
from .base import DirectiveExpander, IndexSpec, prefix_name, splice


class TupleBuilder(DirectiveExpander):
    """ntuple(3, "i") -> (i1, i2, i3)"""
    directive = "ntuple"

    def _expand(self, n: int, ctx: ExpansionContext, index_spec: IndexSpec) -> TupleExpr:
        return TupleExpr([self.index_argument(index_spec, k, ctx) for k in range(1, n + 1)])


class ExprRepeater(DirectiveExpander):
    """
    nexprs(3, d -> s_d = A[d]) -> { s1 = A[1]; s2 = A[2]; s3 = A[3] }

    Copies are emitted for k = 1..N in ascending order. A copy that is itself
    a block is spliced in; a copy folded away entirely leaves nothing.
    """
    directive = "nexprs"

    def _expand(self, n: int, ctx: ExpansionContext, template: Template) -> Block:
        statements = []
        for k in range(1, n + 1):
            statements.extend(splice(self.evaluate(template, k, ctx)))
        return Block(statements)


class Extractor(DirectiveExpander):
    """
    nextract(3, "x", "v") -> { check_arity(v, 3); x1 = v[1]; x2 = v[2]; x3 = v[3] }

    The length of v is a run-time property, so the generated code checks it
    (ExtractionArityError); the expander does not. With a template source the
    k-th value is the template evaluated at k and no check is emitted.
    """
    directive = "nextract"

    def _expand(self, n: int, ctx: ExpansionContext, base: Union[str, Symbol],
                source: Union[ExpressionLike, Template]) -> Block:
        name = prefix_name(base)
        statements = []
        if isinstance(source, Template):
            for k in range(1, n + 1):
                statements.append(Assign(Symbol(fuse(name, k)), self.evaluate(source, k, ctx)))
            return Block(statements)

        source = as_expression(source)
        statements.append(ArityCheck(source, n))
        for k in range(1, n + 1):
            statements.append(Assign(Symbol(fuse(name, k)), IndexAccess(source, [Literal(k)])))
        return Block(statements)


class CallBuilder(DirectiveExpander):
    """ncall(2, "f", "i", "A") -> f(A, i1, i2)"""
    directive = "ncall"

    def _expand(self, n: int, ctx: ExpansionContext, callee: ExpressionLike,
                index_spec: IndexSpec, *leading_args: ExpressionLike) -> Call:
        args = [as_expression(a) for a in leading_args]
        args.extend(self.index_argument(index_spec, k, ctx) for k in range(1, n + 1))
        return Call(as_expression(callee), args)


def ntuple(n: int, index_spec: IndexSpec) -> TupleExpr:
    return TupleBuilder().expand(n, index_spec)


def nexprs(n: int, template: Template) -> Block:
    return ExprRepeater().expand(n, template)


def nextract(n: int, base: Union[str, Symbol], source: Union[ExpressionLike, Template]) -> Block:
    return Extractor().expand(n, base, source)


def ncall(n: int, callee: ExpressionLike, index_spec: IndexSpec, *leading_args: ExpressionLike) -> Call:
    return CallBuilder().expand(n, callee, index_spec, *leading_args)

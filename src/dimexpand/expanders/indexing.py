"""
Index directives.

nref(3, "A", "i")            -> A[i1, i2, i3]
nref(2, "A", d -> i_d + 1)   -> A[(i1 + 1), (i2 + 1)]
nlinear(2, "A", "i", shape)  -> (A, (i1 - 1) + (i2 - 1) * s1 + 1)

The linear offset is 1-based: base[offset] addresses the same element as the
N-ary access under the provider's stride law.
"""

from typing import Optional, Tuple

from ..passes.base import ExpansionContext
from ..passes.const_folding import ConstFoldingPass
from ..runtime.shape import ShapeProvider
from ..shared.nodes import BinaryOp, Expression, ExpressionLike, IndexAccess, Literal, as_expression
from ..shared.types import BinaryOperator
from .base import DirectiveExpander, IndexSpec


class IndexExprBuilder(DirectiveExpander):
    """One index access with N arguments, assembled for k = 1..N."""
    directive = "nref"

    def _expand(self, n: int, ctx: ExpansionContext, target: ExpressionLike,
                index_spec: IndexSpec) -> IndexAccess:
        indices = [self.index_argument(index_spec, k, ctx) for k in range(1, n + 1)]
        return IndexAccess(as_expression(target), indices)


class LinearIndexBuilder(DirectiveExpander):
    """
    (target, offset) with offset = sum((index_d - 1) * stride_d) + 1.

    Strides come from the ShapeProvider; an unreported stride of
    dimension 1 is taken as 1.
    """
    directive = "nlinear"

    def _expand(self, n: int, ctx: ExpansionContext, target: ExpressionLike,
                index_spec: IndexSpec,
                shape: Optional[ShapeProvider] = None) -> Tuple[Expression, Expression]:
        base = as_expression(target)
        what = str(base)
        self.check_rank(shape, n, what)

        offset: Optional[Expression] = None
        for k in range(1, n + 1):
            index = self.index_argument(index_spec, k, ctx)
            term = BinaryOp(
                BinaryOperator.MUL,
                BinaryOp(BinaryOperator.SUB, index, Literal(1)),
                self.query_stride(shape, k, what),
            )
            offset = term if offset is None else BinaryOp(BinaryOperator.ADD, offset, term)
        offset = BinaryOp(BinaryOperator.ADD, offset, Literal(1))
        return base, ConstFoldingPass().run(offset, ctx)


def nref(n: int, target: ExpressionLike, index_spec: IndexSpec) -> IndexAccess:
    return IndexExprBuilder().expand(n, target, index_spec)


def nlinear(n: int, target: ExpressionLike, index_spec: IndexSpec,
            shape: Optional[ShapeProvider] = None) -> Tuple[Expression, Expression]:
    return LinearIndexBuilder().expand(n, target, index_spec, shape=shape)

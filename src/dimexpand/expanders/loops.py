"""
Nested loop directive.

nloops(3, "i", "A", body) builds

    for i3 in 1:size(A, 3)
        for i2 in 1:size(A, 2)
            for i1 in 1:size(A, 1)
                body

Dimension N is outermost, dimension 1 innermost. Only the loop headers are
specialised per dimension; the body is inserted once, untouched.
"""

import logging
from typing import Optional, Union

from ..passes.base import ExpansionContext
from ..passes.renaming import fuse
from ..runtime.shape import ShapeProvider
from ..shared.nodes import Block, Expression, ForLoop, Literal, RangeExpr, Symbol, Template
from .base import DirectiveExpander, prefix_name, splice

logger = logging.getLogger("dimexpand.expanders.loops")

# A symbol names the array whose shape gives the default range;
# a template gives the range of dimension d directly.
RangeSpec = Union[str, Symbol, Template]


class NestedLoopBuilder(DirectiveExpander):
    """
    Optional pre/post templates are evaluated at each dimension d and run
    inside loop d, before and after the loop of dimension d-1 (or the body).
    """
    directive = "nloops"

    def _expand(self, n: int, ctx: ExpansionContext,
                prefix: Union[str, Symbol],
                range_spec: RangeSpec,
                body: Expression,
                pre: Optional[Template] = None,
                post: Optional[Template] = None,
                shape: Optional[ShapeProvider] = None) -> ForLoop:
        base = prefix_name(prefix)
        if not isinstance(range_spec, Template):
            self.check_rank(shape, n, self._array_name(range_spec))

        inner = splice(body)
        loop = None
        for k in range(1, n + 1):
            statements = []
            if pre is not None:
                statements.extend(splice(self.evaluate(pre, k, ctx)))
            statements.extend(inner)
            if post is not None:
                statements.extend(splice(self.evaluate(post, k, ctx)))
            loop = ForLoop(
                Symbol(fuse(base, k)),
                self._range(range_spec, k, ctx, shape),
                Block(statements),
            )
            inner = [loop]

        logger.debug(f"built {n} nested loops over {base}1..{base}{n}")
        return loop

    def _range(self, spec: RangeSpec, k: int, ctx: ExpansionContext,
               shape: Optional[ShapeProvider]) -> Expression:
        if isinstance(spec, Template):
            return self.evaluate(spec, k, ctx)
        return RangeExpr(Literal(1), self.query_size(shape, k, self._array_name(spec)))

    def _array_name(self, spec) -> str:
        if isinstance(spec, Symbol):
            return spec.name
        if isinstance(spec, str):
            return spec
        raise TypeError(f"nloops: range must be an array name or a Template, got {type(spec).__name__}")


def nloops(n: int, prefix: Union[str, Symbol], range_spec: RangeSpec, body: Expression,
           pre: Optional[Template] = None, post: Optional[Template] = None,
           shape: Optional[ShapeProvider] = None) -> ForLoop:
    """N nested loops; see NestedLoopBuilder."""
    return NestedLoopBuilder().expand(n, prefix, range_spec, body, pre=pre, post=post, shape=shape)

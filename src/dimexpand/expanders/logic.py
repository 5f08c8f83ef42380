"""
Boolean directives: conjunction, disjunction and if/elif chains.

Terms are evaluated for k = 1..N and combined left to right, so with
short-circuit operators dimension 1 is tested first. The combined
expression is folded once more, which collapses it entirely when some term
is already a literal that decides the result.
"""

from typing import List, Optional

from ..passes.base import ExpansionContext
from ..passes.const_folding import ConstFoldingPass
from ..shared.nodes import BinaryOp, Conditional, Expression, Template
from ..shared.types import BinaryOperator
from .base import DirectiveExpander


def _chain(op: BinaryOperator, terms: List[Expression]) -> Expression:
    """((t1 op t2) op t3) ..."""
    result = terms[0]
    for term in terms[1:]:
        result = BinaryOp(op, result, term)
    return result


class ConjunctionBuilder(DirectiveExpander):
    """nall(3, d -> i_d > 1) -> ((i1 > 1) && (i2 > 1)) && (i3 > 1)"""
    directive = "nall"
    operator = BinaryOperator.AND

    def _expand(self, n: int, ctx: ExpansionContext, predicate: Template) -> Expression:
        terms = [self.evaluate(predicate, k, ctx) for k in range(1, n + 1)]
        return ConstFoldingPass().run(_chain(self.operator, terms), ctx)


class DisjunctionBuilder(ConjunctionBuilder):
    """nany(3, d -> i_d > 1) -> ((i1 > 1) || (i2 > 1)) || (i3 > 1)"""
    directive = "nany"
    operator = BinaryOperator.OR


class ConditionalChainBuilder(DirectiveExpander):
    """
    nif(3, d -> i_d > s_d, d -> err_d) ->

        if i1 > s1: err1
        elif i2 > s2: err2
        else: err3

    Conditions are evaluated for 1..N-1. The final branch is `otherwise`
    evaluated at N when given, else `expression` at N.
    """
    directive = "nif"

    def _expand(self, n: int, ctx: ExpansionContext, condition: Template,
                expression: Template, otherwise: Optional[Template] = None) -> Expression:
        result = self.evaluate(otherwise if otherwise is not None else expression, n, ctx)
        for k in range(n - 1, 0, -1):
            result = Conditional(
                self.evaluate(condition, k, ctx),
                self.evaluate(expression, k, ctx),
                result,
            )
        return ConstFoldingPass().run(result, ctx)


def nall(n: int, predicate: Template) -> Expression:
    return ConjunctionBuilder().expand(n, predicate)


def nany(n: int, predicate: Template) -> Expression:
    return DisjunctionBuilder().expand(n, predicate)


def nif(n: int, condition: Template, expression: Template,
        otherwise: Optional[Template] = None) -> Expression:
    return ConditionalChainBuilder().expand(n, condition, expression, otherwise)

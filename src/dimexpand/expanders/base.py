"""
Directive expander base.

Every directive follows the same protocol:
1. reject a dimensionality that is not a positive integer
2. create a fresh ExpansionContext for this call only
3. evaluate (and fold) templates once per dimension 1..N
4. assemble the N results into one output fragment

Expansion errors are raised straight through; there is no partial result.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Union

import numpy as np

from ..passes.base import ExpansionContext
from ..passes.const_folding import ConstFoldingPass
from ..passes.renaming import fuse
from ..passes.template_eval import TemplateEvaluator
from ..shared.errors import DimExpandError, InvalidDimensionality, MalformedIndexedName, ShapeQueryFailed
from ..shared.nodes import Block, Expression, Literal, Symbol, Template
from ..runtime.shape import ShapeProvider

logger = logging.getLogger("dimexpand.expanders.base")

# A prefix that is fused with each dimension, or a template evaluated at it
IndexSpec = Union[str, Symbol, Template]


def _ask(query: Callable, name: str, dimension: Optional[int] = None):
    """Run one provider query; any failure of the provider is a ShapeQueryFailed."""
    try:
        return query() if dimension is None else query(dimension)
    except DimExpandError:
        raise
    except Exception as e:
        raise ShapeQueryFailed(name, dimension, str(e) or type(e).__name__) from e


def check_dimensionality(n: Any, directive: str) -> int:
    """n as a plain int when it is a positive integer (bool excluded)."""
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n <= 0:
        raise InvalidDimensionality(n, directive)
    return int(n)


def prefix_name(prefix: Union[str, Symbol]) -> str:
    name = prefix.name if isinstance(prefix, Symbol) else prefix
    if not isinstance(name, str):
        raise TypeError(f"expected a name prefix, got {type(prefix).__name__}")
    if not name:
        raise MalformedIndexedName(name, "base name is empty")
    return name


class DirectiveExpander(ABC):
    """
    Base class for all directives.

    Subclasses implement _expand(); callers use expand(n, ...).
    """
    directive = "expansion"

    def expand(self, n: int, *args, **kwargs):
        n = check_dimensionality(n, self.directive)
        ctx = ExpansionContext()
        result = self._expand(n, ctx, *args, **kwargs)
        logger.debug(
            f"{self.directive} N={n}: {ctx.evaluation_count} evaluations, "
            f"{ctx.fold_count} folds -> {result}"
        )
        return result

    __call__ = expand

    @abstractmethod
    def _expand(self, n: int, ctx: ExpansionContext, *args, **kwargs):
        raise NotImplementedError

    # =========================================================================
    # Shared steps
    # =========================================================================

    def evaluate(self, template: Template, k: int, ctx: ExpansionContext) -> Expression:
        """Evaluate template at k, then fold."""
        if not isinstance(template, Template):
            raise TypeError(f"{self.directive}: expected a Template, got {type(template).__name__}")
        return ConstFoldingPass().run(TemplateEvaluator(k).run(template, ctx), ctx)

    def index_argument(self, spec: IndexSpec, k: int, ctx: ExpansionContext) -> Expression:
        """Argument k of an index spec: fused name (prefix, k) or template at k."""
        if isinstance(spec, Template):
            return self.evaluate(spec, k, ctx)
        return Symbol(fuse(prefix_name(spec), k))

    def query_size(self, shape: Optional[ShapeProvider], dimension: int, what: str) -> Expression:
        if shape is None:
            raise ShapeQueryFailed("size", dimension, f"no shape provider for {what}")
        value = _ask(shape.size, "size", dimension)
        return self._shape_value(value, "size", dimension)

    def query_stride(self, shape: Optional[ShapeProvider], dimension: int, what: str) -> Expression:
        """Stride of dimension; an unreported stride of dimension 1 is 1."""
        if shape is None:
            raise ShapeQueryFailed("stride", dimension, f"no shape provider for {what}")
        value = _ask(shape.stride, "stride", dimension)
        if value is None:
            if dimension == 1:
                return Literal(1)
            raise ShapeQueryFailed("stride", dimension, "stride not reported")
        return self._shape_value(value, "stride", dimension)

    def check_rank(self, shape: Optional[ShapeProvider], n: int, what: str) -> None:
        """The provider must have at least n dimensions when it knows its rank."""
        if shape is None:
            return
        count = _ask(shape.dimension_count, "dimension_count")
        if count is not None and count < n:
            raise ShapeQueryFailed(
                "dimension_count", None, f"{what} has {count} dimensions, {n} requested"
            )

    def _shape_value(self, value, query: str, dimension: int) -> Expression:
        if isinstance(value, Expression):
            return value
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ShapeQueryFailed(query, dimension, f"provider returned {value!r}")
        value = int(value)
        if query == "size" and value < 0:
            raise ShapeQueryFailed(query, dimension, f"provider returned {value}")
        return Literal(value)


def splice(expr: Expression) -> list:
    """Elements to insert into a statement list: a Block's contents, or expr."""
    if isinstance(expr, Block):
        return list(expr.exprs)
    return [expr]

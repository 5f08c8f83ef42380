"""
dimexpand: dimension-specialising code expansion.

Directives take the dimensionality N and templates (`d -> body`) and return
expression trees specialised for dimensions 1..N:

    >>> from dimexpand import nref, serialize_expr
    >>> serialize_expr(nref(3, "A", "i"))
    '(ref A i1 i2 i3)'

CartesianEnumerator covers the case where N is only known at run time.
"""

from .shared import (
    SourceLocation, BinaryOperator, UnaryOperator,
    DimExpandError, ExpansionError, InvalidDimensionality, MalformedIndexedName,
    TemplateShadowingError, ShapeQueryFailed, ExtractionArityError,
    TemplateSyntaxError, DimExpandImplementationError,
    Expression, Literal, Symbol, IndexedName, Call, BinaryOp, UnaryOp,
    Conditional, Block, Template, IndexAccess, TupleExpr, RangeExpr,
    ForLoop, Assign, ArityCheck,
)
from .passes import ExpansionContext, evaluate_template, fold_constants
from .expanders import nloops, nref, nlinear, ntuple, nexprs, nextract, ncall, nall, nany, nif
from .runtime import (
    CartesianEnumerator, EnumeratorState, cartesian_indices,
    ShapeProvider, StaticShape, NumpyShape, SymbolicShape,
)
from .ir import serialize_expr
from .backends import emit_function, compile_function
from .frontend import parse_expression, parse_template

__version__ = "0.1.0"

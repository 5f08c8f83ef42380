"""
Shared components: AST nodes, visitors, operator enums and errors.
"""

from .source_location import SourceLocation
from .types import BinaryOperator, UnaryOperator
from .errors import (
    DimExpandError, ExpansionError, InvalidDimensionality, MalformedIndexedName,
    TemplateShadowingError, ShapeQueryFailed, ExtractionArityError,
    TemplateSyntaxError, DimExpandImplementationError,
)
from .nodes import (
    Expression, Literal, Symbol, IndexedName, Call, BinaryOp, UnaryOp,
    Conditional, Block, Template, IndexAccess, TupleExpr, RangeExpr,
    ForLoop, Assign, ArityCheck, ExpressionLike, as_expression, as_symbol, is_literal,
)
from .ast_visitor import ASTVisitor, ASTTransformer, walk, children

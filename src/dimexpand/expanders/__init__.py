"""
Directive expanders.

Each directive takes the dimensionality N first and returns a freshly built
expression; see the individual modules for the shapes they produce.
"""

from .base import DirectiveExpander, IndexSpec, check_dimensionality
from .loops import NestedLoopBuilder, nloops
from .indexing import IndexExprBuilder, LinearIndexBuilder, nref, nlinear
from .sequences import TupleBuilder, ExprRepeater, Extractor, CallBuilder, ntuple, nexprs, nextract, ncall
from .logic import ConjunctionBuilder, DisjunctionBuilder, ConditionalChainBuilder, nall, nany, nif

__all__ = [
    "DirectiveExpander", "IndexSpec", "check_dimensionality",
    "NestedLoopBuilder", "IndexExprBuilder", "LinearIndexBuilder",
    "TupleBuilder", "ExprRepeater", "Extractor", "CallBuilder",
    "ConjunctionBuilder", "DisjunctionBuilder", "ConditionalChainBuilder",
    "nloops", "nref", "nlinear", "ntuple", "nexprs", "nextract", "ncall",
    "nall", "nany", "nif",
]

"""
Template Evaluation Pass

Applies Template(binder, body) to a concrete dimension value:
- indexed names suffixed by the binder fuse (i_d -> i3)
- bare occurrences of the binder become Literal(value)
- everything else is copied structurally

Nested templates are entered for the outer binder only. Their own binder
stays free (and so do names indexed by it) until the expander evaluates
them in turn, which makes evaluation order a property of template nesting
rather than of call order.
"""

import logging
from typing import List

from ..shared.ast_visitor import ASTTransformer
from ..shared.errors import MalformedIndexedName, TemplateShadowingError
from ..shared.nodes import Expression, IndexedName, Literal, Symbol, Template
from .base import BasePass, ExpansionContext
from .renaming import Renamer, fuse, split_indexed_name, strip_binder

logger = logging.getLogger("dimexpand.passes.template_eval")


class _SubstitutionVisitor(ASTTransformer):
    """
    Rewrites one template body.

    _enclosing holds binders of templates nested inside the body being
    walked; names indexed by them are left alone. Binders already active in
    the context (an enclosing evaluation in progress) resolve to their
    values.
    """

    def __init__(self, binder: str, value: int, ctx: ExpansionContext):
        self.binder = binder
        self.value = value
        self.ctx = ctx
        self.renamer = Renamer(binder, value)
        self._enclosing: List[str] = []

    def visit_symbol(self, node: Symbol) -> Expression:
        if node.verbatim:
            return node
        if node.name == self.binder:
            return Literal(self.value, location=node.location)
        if node.name in self._enclosing:
            return node
        outer = self.ctx.value_of(node.name)
        if outer is not None:
            return Literal(outer, location=node.location)

        if strip_binder(node.name, self.binder) is not None:
            return self.renamer.rename(node)
        for binder in self._known_binders():
            base = strip_binder(node.name, binder)
            if base is not None:
                return self._resolve_other(base, binder, node.name, node)

        parts = split_indexed_name(node.name)
        if parts is None:
            return node
        return self._resolve_other(parts[0], parts[1], node.name, node)

    def visit_indexed_name(self, node: IndexedName) -> Expression:
        if node.binder == self.binder:
            return self.renamer.rename(node)
        return self._resolve_other(node.base, node.binder, str(node), node)

    def visit_template(self, node: Template) -> Expression:
        inner = node.binder.name
        if inner == self.binder or inner in self._enclosing or self.ctx.is_bound(inner):
            raise TemplateShadowingError(inner, node.location)
        self._enclosing.append(inner)
        try:
            body = node.body.accept(self)
        finally:
            self._enclosing.pop()
        return Template(node.binder, body, location=node.location)

    def _known_binders(self) -> List[str]:
        """Enclosing then active binders, innermost first."""
        return list(reversed(self._enclosing)) + list(reversed(list(self.ctx.active_bindings())))

    def _resolve_other(self, base: str, suffix: str, spelled: str, node: Expression) -> Expression:
        """Indexed name whose suffix is not the binder being evaluated."""
        if suffix in self._enclosing:
            return node
        outer = self.ctx.value_of(suffix)
        if outer is not None:
            if not base:
                raise MalformedIndexedName(spelled, "base name is empty", node.location)
            return Symbol(fuse(base, outer), location=node.location)
        raise MalformedIndexedName(
            spelled,
            f"no enclosing template binds '{suffix}' (evaluating binder '{self.binder}')",
            node.location,
        )


class TemplateEvaluator(BasePass):
    """
    Evaluates a Template at one value.

    The binder is pushed on the context's substitution stack for the
    duration of the call and popped afterwards, also on error.
    """

    def __init__(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"templates are evaluated at integers, got {value!r}")
        self.value = value

    def run(self, expr: Expression, ctx: ExpansionContext) -> Expression:
        if not isinstance(expr, Template):
            raise TypeError(f"expected a Template, got {type(expr).__name__}")
        binder = expr.binder.name
        with ctx.bind(binder, self.value, expr.location):
            result = expr.body.accept(_SubstitutionVisitor(binder, self.value, ctx))
        ctx.evaluation_count += 1
        logger.debug(f"evaluated template {binder} -> ... at {self.value}")
        return result


def evaluate_template(template: Template, value: int, ctx: ExpansionContext = None) -> Expression:
    """Evaluate template at value in ctx (a fresh context when omitted)."""
    return TemplateEvaluator(value).run(template, ctx if ctx is not None else ExpansionContext())

"""
Base Pass System

Every expansion step is an AST-to-AST pass run against one
ExpansionContext. The context is created by the expander for a single
top-level call and discarded when the expander returns.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Tuple

from ..shared.errors import TemplateShadowingError
from ..shared.nodes import Expression, Symbol
from ..shared.source_location import SourceLocation


class ExpansionContext:
    """
    State of one top-level expansion call.

    - binder -> value stack (entries pushed by TemplateEvaluator for the
      duration of one evaluation; nested templates use distinct binders)
    - fresh-name counter for gensym()
    - statistics read by expanders for debug logging

    Never shared across expansions and never stored globally.
    """

    def __init__(self):
        self._binding_stack: List[Tuple[str, int]] = []
        self._gensym_counter = 0
        self.fold_count = 0
        self.evaluation_count = 0

    @contextmanager
    def bind(self, binder: str, value: int,
             location: Optional[SourceLocation] = None) -> Iterator[None]:
        """
        Push binder=value for the duration of the with-block (exception-safe).
        """
        if self.is_bound(binder):
            raise TemplateShadowingError(binder, location)
        self._binding_stack.append((binder, value))
        try:
            yield
        finally:
            self._binding_stack.pop()

    def is_bound(self, binder: str) -> bool:
        return any(name == binder for name, _ in self._binding_stack)

    def value_of(self, binder: str) -> Optional[int]:
        """Innermost value bound to binder, or None when it is not active."""
        for name, value in reversed(self._binding_stack):
            if name == binder:
                return value
        return None

    def active_bindings(self) -> Dict[str, int]:
        return dict(self._binding_stack)

    @property
    def depth(self) -> int:
        return len(self._binding_stack)

    def gensym(self, base: str = "tmp") -> Symbol:
        """Fresh identifier that cannot collide with template names."""
        self._gensym_counter += 1
        return Symbol(f"__{base}{self._gensym_counter}", verbatim=True)


class BasePass(ABC):
    """
    Base class for all passes.

    Passes never mutate their input tree; they return a new one.
    """

    @abstractmethod
    def run(self, expr: Expression, ctx: ExpansionContext) -> Expression:
        raise NotImplementedError

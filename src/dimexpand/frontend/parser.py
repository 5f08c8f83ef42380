"""
Template text parser.

Reads the textual template form (`d -> A[i_d, j_d]`) into expression nodes
so directives can be driven from strings as well as from hand-built trees.
"""

import logging
from functools import lru_cache
from pathlib import Path

from lark import Lark
from lark.exceptions import LarkError, UnexpectedInput, VisitError

from ..shared.errors import DimExpandError, TemplateSyntaxError
from ..shared.nodes import Expression, Template
from ..shared.source_location import SourceLocation
from ..utils.config import DEFAULT_PARSER_CACHE_FILE, DEFAULT_TEMPLATE_FILE
from .transformer import TemplateTransformer

logger = logging.getLogger("dimexpand.frontend.parser")


class TemplateParser:
    """
    LALR parser over grammar.lark plus the node-building transformer.

    The Lark table is cached on disk; one instance can be reused for any
    number of parses, also from several threads: each parse builds its own
    transformer carrying that parse's file name.
    """

    def __init__(self, cache_file: str = DEFAULT_PARSER_CACHE_FILE):
        grammar_path = Path(__file__).parent / "grammar.lark"
        self.parser = Lark.open(
            grammar_path,
            start='start',
            parser='lalr',
            cache=cache_file,
            propagate_positions=True,
            maybe_placeholders=False,
        )

    def parse(self, text: str, source_file: str = DEFAULT_TEMPLATE_FILE) -> Expression:
        """Parse any expression, template or assignment."""
        try:
            tree = self.parser.parse(text)
            expr = TemplateTransformer(source_file).transform(tree)
        except UnexpectedInput as e:
            location = SourceLocation(file=source_file, line=e.line, column=e.column)
            raise TemplateSyntaxError(f"cannot parse '{text}': {e}", location) from e
        except VisitError as e:
            if isinstance(e.orig_exc, DimExpandError):
                raise e.orig_exc from e
            raise TemplateSyntaxError(f"cannot build '{text}': {e.orig_exc}") from e
        except LarkError as e:
            raise TemplateSyntaxError(f"cannot parse '{text}': {e}") from e
        logger.debug(f"parsed {source_file}: {expr}")
        return expr

    def parse_template(self, text: str, source_file: str = DEFAULT_TEMPLATE_FILE) -> Template:
        """Parse text that must be a `binder -> body` template."""
        expr = self.parse(text, source_file)
        if not isinstance(expr, Template):
            raise TemplateSyntaxError(
                f"expected a template of the form 'd -> body', got '{text}'",
                expr.location,
            )
        return expr


@lru_cache(maxsize=1)
def default_parser() -> TemplateParser:
    return TemplateParser()


def parse_expression(text: str, source_file: str = DEFAULT_TEMPLATE_FILE) -> Expression:
    return default_parser().parse(text, source_file)


def parse_template(text: str, source_file: str = DEFAULT_TEMPLATE_FILE) -> Template:
    return default_parser().parse_template(text, source_file)

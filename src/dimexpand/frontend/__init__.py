"""Textual template front end (Lark)."""

from .parser import TemplateParser, default_parser, parse_expression, parse_template
from .transformer import TemplateTransformer

__all__ = [
    "TemplateParser", "TemplateTransformer",
    "default_parser", "parse_expression", "parse_template",
]

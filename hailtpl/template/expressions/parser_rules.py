"""
Parser rules for ``${ ... }`` output placeholders.
"""

from __future__ import annotations

from typing import List, Optional

from .nodes import OutputNode
from .parser import parse_expression
from ..nodes import TemplateNode
from ..tokens import ParserError
from ..types import PluginPriority, ParsingRule, ParsingContext


def parse_placeholder(context: ParsingContext) -> Optional[TemplateNode]:
    if not context.match("PLACEHOLDER_START"):
        return None

    start = context.consume("PLACEHOLDER_START")

    content = []
    while not context.is_at_end() and not context.match("PLACEHOLDER_END"):
        content.append(context.advance())

    if context.is_at_end():
        raise ParserError("Unclosed placeholder, expected '}'", start)
    context.consume("PLACEHOLDER_END")

    return OutputNode(expression=parse_expression(content, anchor=start))


def get_expression_parser_rules() -> List[ParsingRule]:
    return [
        ParsingRule(
            name="parse_placeholder",
            priority=PluginPriority.PLACEHOLDER,
            parser_func=parse_placeholder,
        )
    ]


__all__ = ["get_expression_parser_rules", "parse_placeholder"]

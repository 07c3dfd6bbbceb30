"""
Rule-driven parser: syntax plugins contribute the rules, the parser only
tries them in priority order and keeps unclaimed tokens as text.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .nodes import TemplateNode, TemplateAST, TextNode
from .registry import TemplateRegistry
from .tokens import Token
from .types import ParsingContext

logger = logging.getLogger(__name__)


class ModularParser:
    """
    A rule returns None when the tokens at the current position are not
    its construct, and the parser rewinds before trying the next one.
    A ParserError raised by a rule that did recognize its construct
    aborts parsing.
    """

    def __init__(self, registry: TemplateRegistry):
        self.registry = registry

    def parse(self, tokens: List[Token]) -> TemplateAST:
        """
        Raises:
            ParserError: On a syntax error
        """
        context = ParsingContext(tokens)
        ast: List[TemplateNode] = []

        while not context.is_at_end():
            node = self.parse_next_node(context)
            if node is None:
                append_text(ast, context.advance().value)
            else:
                ast.append(node)

        return ast

    def parse_next_node(self, context: ParsingContext) -> Optional[TemplateNode]:
        start = context.mark()
        for rule in self.registry.parser_rules_by_priority():
            node = rule.parser_func(context)
            if node is not None:
                return node
            context.reset(start)
        return None


def append_text(ast: List[TemplateNode], text: str) -> None:
    """Appends ``text``, merging it into a trailing TextNode."""
    if not text:
        return
    if ast and isinstance(ast[-1], TextNode):
        ast[-1] = TextNode(text=ast[-1].text + text)
    else:
        ast.append(TextNode(text=text))


__all__ = ["ModularParser", "append_text"]

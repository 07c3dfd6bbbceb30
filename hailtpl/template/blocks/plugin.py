"""
Plugin for block directives and comments.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List

from .nodes import CommentNode, ForNode, IfNode
from .parser_rules import BlockParserRules, get_block_parser_rules
from .tokens import get_block_token_specs
from ..base import TemplatePlugin
from ..expressions.tokens import EXPRESSION_TOKENS
from ..types import PluginPriority, TokenSpec, ParsingRule, ProcessorRule, TokenContext, ProcessingContext


class BlocksPlugin(TemplatePlugin):
    """
    Provides:
    - {% if cond %}...{% elif cond %}...{% else %}...{% endif %}
    - {% for x in items %}...{% else %}...{% endfor %}, with a ``loop`` variable
    - {# comment #}
    """

    def __init__(self):
        super().__init__()
        self._rules = BlockParserRules(lambda ctx: self.handlers.parse_next_node(ctx))

    @property
    def name(self) -> str:
        return "blocks"

    @property
    def priority(self) -> PluginPriority:
        return PluginPriority.DIRECTIVE

    def register_tokens(self) -> List[TokenSpec]:
        return get_block_token_specs()

    def register_token_contexts(self) -> List[TokenContext]:
        return [
            TokenContext(
                name="directive",
                open_tokens={"DIRECTIVE_START"},
                close_tokens={"DIRECTIVE_END"},
                inner_tokens={"WHITESPACE", "IDENTIFIER"},
                allow_nesting=False,
            ),
            TokenContext(
                name="comment",
                open_tokens={"COMMENT_START"},
                close_tokens={"COMMENT_END"},
                inner_tokens=set(),  # everything inside a comment is text
                allow_nesting=False,
            ),
        ]

    def register_parser_rules(self) -> List[ParsingRule]:
        return get_block_parser_rules(self._rules)

    def register_processors(self) -> List[ProcessorRule]:
        return [
            ProcessorRule(node_type=IfNode, processor_func=self._process_if),
            ProcessorRule(node_type=ForNode, processor_func=self._process_for),
            ProcessorRule(node_type=CommentNode, processor_func=lambda _ctx: ""),
        ]

    def initialize(self) -> None:
        """Directive conditions use the full expression language."""
        self.registry.extend_context("directive", sorted(EXPRESSION_TOKENS))

    def _process_if(self, processing_context: ProcessingContext) -> str:
        node = processing_context.node
        if not isinstance(node, IfNode):
            raise RuntimeError(f"Expected IfNode, got {type(node)}")

        scope = processing_context.scope
        for branch in node.branches:
            if self.handlers.evaluate(branch.condition, scope):
                return self.handlers.render_nodes(branch.body, scope)

        return self.handlers.render_nodes(node.else_body, scope)

    def _process_for(self, processing_context: ProcessingContext) -> str:
        node = processing_context.node
        if not isinstance(node, ForNode):
            raise RuntimeError(f"Expected ForNode, got {type(node)}")

        scope = processing_context.scope
        iterable = self.handlers.evaluate(node.iterable, scope)
        if iterable is None:
            items: List[Any] = []
        elif isinstance(iterable, Mapping) and len(node.targets) == 2:
            items = list(iterable.items())
        else:
            items = list(iterable)

        if not items:
            return self.handlers.render_nodes(node.else_body, scope)

        parts = []
        length = len(items)
        for index, item in enumerate(items):
            variables: Dict[str, Any] = {
                "loop": {
                    "index": index + 1,
                    "index0": index,
                    "first": index == 0,
                    "last": index == length - 1,
                    "length": length,
                }
            }
            if len(node.targets) == 1:
                variables[node.targets[0]] = item
            else:
                key, value = item
                variables[node.targets[0]] = key
                variables[node.targets[1]] = value

            parts.append(self.handlers.render_nodes(node.body, scope.child(variables)))

        return "".join(parts)


__all__ = ["BlocksPlugin"]

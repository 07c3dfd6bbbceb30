from __future__ import annotations

from typing import List

from .evaluator import to_text
from .nodes import OutputNode
from .parser_rules import get_expression_parser_rules
from .tokens import EXPRESSION_TOKENS, get_expression_token_specs
from ..base import TemplatePlugin
from ..types import PluginPriority, TokenSpec, ParsingRule, ProcessorRule, TokenContext, ProcessingContext


class ExpressionsPlugin(TemplatePlugin):
    """
    Output placeholders:
    - ${name}, ${user.name} - variables with dotted access
    - ${title|upper}, ${text|truncate:20,"..."} - filters
    - ${format_price(total, "EUR")} - function calls
    """

    @property
    def name(self) -> str:
        return "expressions"

    @property
    def priority(self) -> PluginPriority:
        return PluginPriority.PLACEHOLDER

    def register_tokens(self) -> List[TokenSpec]:
        return get_expression_token_specs()

    def register_token_contexts(self) -> List[TokenContext]:
        return [
            TokenContext(
                name="placeholder",
                open_tokens={"PLACEHOLDER_START"},
                close_tokens={"PLACEHOLDER_END"},
                inner_tokens=set(EXPRESSION_TOKENS),
                allow_nesting=False,
            )
        ]

    def register_parser_rules(self) -> List[ParsingRule]:
        return get_expression_parser_rules()

    def register_processors(self) -> List[ProcessorRule]:
        def process_output_node(processing_context: ProcessingContext) -> str:
            node = processing_context.node
            if not isinstance(node, OutputNode):
                raise RuntimeError(f"Expected OutputNode, got {type(node)}")
            return to_text(self.handlers.evaluate(node.expression, processing_context.scope))

        return [
            ProcessorRule(
                node_type=OutputNode,
                processor_func=process_output_node
            )
        ]


__all__ = ["ExpressionsPlugin"]

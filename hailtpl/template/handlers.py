"""
Callbacks a syntax plugin uses to reach the processor core.
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, runtime_checkable

from .nodes import TemplateNode
from .scope import RenderScope
from .types import ParsingContext


@runtime_checkable
class TemplateProcessorHandlers(Protocol):

    def render_nodes(self, nodes: List[TemplateNode], scope: RenderScope) -> str:
        """Renders a block body in ``scope``."""
        ...

    def parse_next_node(self, context: ParsingContext) -> Optional[TemplateNode]:
        """
        Applies the registered parser rules at the current position, so that
        block rules can parse their bodies recursively.

        Returns:
            AST node, or None when no rule applies
        """
        ...

    def evaluate(self, expression: Any, scope: RenderScope) -> Any:
        """
        Evaluates an expression node. Variables come from ``scope``,
        function and filter names from the engine's capabilities.
        """
        ...


__all__ = ["TemplateProcessorHandlers"]

"""
Template processor.

Public entry point of the syntax layer: ties the lexer, parser and
syntax plugins together and renders templates against a per-render scope.
Function and filter names are resolved through the injected capability
resolver, so the processor holds no global state.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .expressions.evaluator import CapabilityResolver, ExpressionEvaluator
from .frontmatter import parse_frontmatter
from .handlers import TemplateProcessorHandlers
from .lexer import ContextualLexer
from .nodes import TemplateNode, TemplateAST, TextNode
from .parser import ModularParser
from .registry import TemplateRegistry
from .scope import RenderScope
from .tokens import ParserError
from .types import ParsingContext, ProcessingContext
from ..errors import ErrorKind, HailUserError

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 256


class TemplateProcessingError(HailUserError):
    """Unexpected failure while processing a template."""
    kind = ErrorKind.TEMPLATE_PROCESSING

    def __init__(self, message: str, template_name: str = "", cause: Optional[Exception] = None):
        super().__init__(f"Template processing error in '{template_name}': {message}")
        self.template_name = template_name
        self.cause = cause


class TemplateProcessor:

    def __init__(
        self,
        registry: TemplateRegistry,
        resolve_function: CapabilityResolver,
        strict_variables: bool = False,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ):
        """
        Args:
            registry: Syntax plugin registry (passed in to avoid global state)
            resolve_function: Returns the capability registered under a name
            strict_variables: Raise on undefined variables instead of rendering nothing
            cache_size: Parsed templates kept, least recently used dropped first; 0 disables caching
        """
        self.registry = registry
        self.evaluator = ExpressionEvaluator(resolve_function, strict_variables)

        self.lexer = ContextualLexer(self.registry)
        self.parser = ModularParser(self.registry)

        # (name, source) -> (frontmatter data, AST), oldest first
        self._template_cache: OrderedDict[Tuple[str, str], Tuple[Dict[str, Any], TemplateAST]] = OrderedDict()
        self._cache_lock = threading.Lock()
        self.cache_size = max(0, int(cache_size))

        processor_self = self

        class ProcessorHandlers(TemplateProcessorHandlers):
            def render_nodes(self, nodes: List[TemplateNode], scope: RenderScope) -> str:
                return processor_self._render_nodes(nodes, scope)

            def parse_next_node(self, context: ParsingContext) -> Optional[TemplateNode]:
                return processor_self.parser.parse_next_node(context)

            def evaluate(self, expression: Any, scope: RenderScope) -> Any:
                return processor_self.evaluator.evaluate(expression, scope)

        self.handlers = ProcessorHandlers()

    def process_template_text(
        self,
        template_text: str,
        template_name: str = "",
        data: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Renders template text.

        Frontmatter variables act as defaults; ``data`` overrides them.

        Raises:
            ParserError: On a syntax error
            HailUserError: Errors of the engine taxonomy, unchanged
            TemplateProcessingError: Any other failure, with ``cause`` set
        """
        try:
            defaults, ast = self._parse_template(template_text, template_name)
            scope = RenderScope({**defaults, **(data or {})}, template_name=template_name)
            return self._render_nodes(ast, scope)
        except HailUserError:
            raise
        except Exception as e:
            raise TemplateProcessingError(str(e), template_name, e) from e

    def parse(self, template_text: str) -> TemplateAST:
        """Parses template text (without frontmatter handling) into an AST."""
        return self.parser.parse(self.lexer.tokenize(template_text))

    def clear_cache(self) -> None:
        with self._cache_lock:
            self._template_cache.clear()

    def cached_templates(self) -> int:
        with self._cache_lock:
            return len(self._template_cache)

    # ======= Internal =======

    def _parse_template(self, template_text: str, template_name: str) -> Tuple[Dict[str, Any], TemplateAST]:
        cache_key = (template_name, template_text)

        with self._cache_lock:
            cached = self._template_cache.get(cache_key)
            if cached is not None:
                self._template_cache.move_to_end(cache_key)
                return cached

        frontmatter, body = parse_frontmatter(template_text)
        defaults = frontmatter.data if frontmatter else {}
        try:
            ast = self.parse(body)
        except ParserError as e:
            e.template_name = template_name
            raise

        if self.cache_size:
            with self._cache_lock:
                self._template_cache[cache_key] = (defaults, ast)
                while len(self._template_cache) > self.cache_size:
                    self._template_cache.popitem(last=False)
        logger.debug(f"Parsed template '{template_name}' -> {len(ast)} nodes")
        return defaults, ast

    def _render_nodes(self, nodes: List[TemplateNode], scope: RenderScope) -> str:
        return "".join(self._render_node(node, scope) for node in nodes)

    def _render_node(self, node: TemplateNode, scope: RenderScope) -> str:
        rule = self.registry.processor_for(type(node))
        if rule is not None:
            return rule.processor_func(ProcessingContext(node=node, scope=scope))
        if isinstance(node, TextNode):
            return node.text
        raise TypeError(f"No processor registered for {type(node).__name__}")


def create_template_processor(
    resolve_function: CapabilityResolver,
    strict_variables: bool = False,
    cache_size: int = DEFAULT_CACHE_SIZE,
) -> TemplateProcessor:
    """
    Creates a processor with the built-in syntax plugins installed.

    Args:
        resolve_function: Capability lookup, usually ``Engine.get_function``
        strict_variables: See TemplateProcessor
        cache_size: See TemplateProcessor

    Returns:
        Ready-to-use processor
    """
    registry = TemplateRegistry()
    processor = TemplateProcessor(registry, resolve_function, strict_variables, cache_size)

    from .blocks import BlocksPlugin
    from .expressions import ExpressionsPlugin

    registry.register_plugin(ExpressionsPlugin())
    registry.register_plugin(BlocksPlugin())

    registry.initialize_plugins(processor.handlers)

    return processor


__all__ = ["TemplateProcessor", "TemplateProcessingError", "create_template_processor"]

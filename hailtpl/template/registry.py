"""
Syntax registry of the template processor.

Collects what syntax plugins contribute (tokens, token contexts, parser
rules, node processors) and derives the lookup tables the lexer, parser
and processor use. Two plugins defining the same token, rule or node
processor is a setup error, not something to resolve silently.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Type

from .base import TemplatePlugin, PluginList
from .handlers import TemplateProcessorHandlers
from .nodes import TemplateNode
from .protocols import TemplateRegistryProtocol
from .tokens import TokenType
from .types import LexerTable, ParsingRule, ProcessorRule, TokenContext, TokenSpec, TokenRegistry, \
    ParserRulesRegistry, ProcessorRegistry

logger = logging.getLogger(__name__)

# Text outside any context: stops before ${, {% and {#
_TEXT_SPEC = TokenSpec(
    name=TokenType.TEXT.value,
    pattern=re.compile(r'(?:\$(?!\{)|\{(?![%#])|[^${])+'),
    priority=1,
)


class TemplateRegistry(TemplateRegistryProtocol):

    def __init__(self):
        self.tokens: TokenRegistry = {_TEXT_SPEC.name: _TEXT_SPEC}
        self.parser_rules: ParserRulesRegistry = {}
        self.processors: ProcessorRegistry = {}
        self.token_contexts: Dict[str, TokenContext] = {}

        self.plugins: PluginList = []
        self._initialized = False

        # context name (None for top level) -> lexer table
        self._lexer_tables: Dict[Optional[str], LexerTable] = {}

    # ---------------- registration ---------------- #

    def register_plugin(self, plugin: TemplatePlugin) -> None:
        """
        Adds a plugin together with everything it contributes.

        Raises:
            ValueError: If the plugin name, one of its tokens, parser rules
                or node processors is already registered
        """
        if any(p.name == plugin.name for p in self.plugins):
            raise ValueError(f"Plugin '{plugin.name}' already registered")

        for spec in plugin.register_tokens():
            self._claim(self.tokens, spec.name, "Token", plugin)
            self.tokens[spec.name] = spec

        for context in plugin.register_token_contexts():
            self._claim(self.token_contexts, context.name, "Token context", plugin)
            self.token_contexts[context.name] = context

        for rule in plugin.register_parser_rules():
            self._claim(self.parser_rules, rule.name, "Parser rule", plugin)
            self.parser_rules[rule.name] = rule

        for processor in plugin.register_processors():
            self._claim(self.processors, processor.node_type, "Processor for", plugin)
            self.processors[processor.node_type] = processor

        self.plugins.append(plugin)
        self._lexer_tables.clear()
        logger.debug(f"Registered syntax plugin '{plugin.name}'")

    @staticmethod
    def _claim(table: dict, key, what: str, plugin: TemplatePlugin) -> None:
        if key in table:
            label = key.__name__ if isinstance(key, type) else key
            raise ValueError(f"{what} '{label}' from plugin '{plugin.name}' is already registered")

    def initialize_plugins(self, handlers: TemplateProcessorHandlers) -> None:
        """
        Hands the core handlers to every plugin, then runs their
        ``initialize`` hooks, highest priority first. Runs once.
        """
        if self._initialized:
            return

        ordered = sorted(self.plugins, key=lambda p: p.priority, reverse=True)
        for plugin in ordered:
            plugin.bind(self, handlers)
        for plugin in ordered:
            plugin.initialize()

        self._initialized = True

    def extend_context(self, context_name: str, token_names: List[str]) -> None:
        try:
            context = self.token_contexts[context_name]
        except KeyError:
            raise ValueError(f"Token context '{context_name}' not found") from None

        unknown = [name for name in token_names if name not in self.tokens]
        if unknown:
            raise ValueError(f"Unknown tokens for context '{context_name}': {', '.join(unknown)}")

        context.inner_tokens = context.inner_tokens | set(token_names)
        self._lexer_tables.clear()

    # ---------------- lookups ---------------- #

    def tokens_by_priority(self) -> List[TokenSpec]:
        """Token specs, highest priority first (string literals before their contents)."""
        return sorted(self.tokens.values(), key=lambda spec: spec.priority, reverse=True)

    def parser_rules_by_priority(self) -> List[ParsingRule]:
        enabled = [rule for rule in self.parser_rules.values() if rule.enabled]
        return sorted(enabled, key=lambda rule: rule.priority, reverse=True)

    def processor_for(self, node_type: Type[TemplateNode]) -> Optional[ProcessorRule]:
        return self.processors.get(node_type)

    def context_opened_by(self, token_type: str) -> Optional[TokenContext]:
        for context in self.token_contexts.values():
            if token_type in context.open_tokens:
                return context
        return None

    def lexer_table(self, context: Optional[TokenContext]) -> LexerTable:
        """
        Tokens the lexer may match inside ``context`` (top level when None).

        At top level these are TEXT and the tokens opening a context; inside
        a context its closing and inner tokens, plus the openers of other
        contexts when nesting is allowed.
        """
        key = context.name if context else None
        table = self._lexer_tables.get(key)
        if table is None:
            table = self._build_lexer_table(context)
            self._lexer_tables[key] = table
        return table

    def _build_lexer_table(self, context: Optional[TokenContext]) -> LexerTable:
        openers = set()
        for other in self.token_contexts.values():
            if context is None or (context.allow_nesting and other.name != context.name):
                openers |= other.open_tokens

        if context is None:
            allowed = openers | {TokenType.TEXT.value}
        else:
            allowed = context.close_tokens | context.inner_tokens | openers

        specs = [spec for spec in self.tokens_by_priority() if spec.name in allowed]
        special = [spec.pattern.pattern for spec in specs if spec.name != TokenType.TEXT.value]
        stop = re.compile("|".join(f"(?:{p})" for p in special)) if special else None

        logger.debug(f"Built lexer table for '{context.name if context else '<top>'}': {len(specs)} tokens")
        return LexerTable(specs=specs, stop=stop)


__all__ = ["TemplateRegistry"]

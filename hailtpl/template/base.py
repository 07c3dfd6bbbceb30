"""
Syntax plugins.

A syntax plugin teaches the lexer, parser and processor one family of
template constructs. It is distinct from an Extension, which only adds
named capabilities to an Engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from .handlers import TemplateProcessorHandlers
from .protocols import TemplateRegistryProtocol
from .types import PluginPriority, TokenSpec, ParsingRule, ProcessorRule, TokenContext


class TemplatePlugin(ABC):
    """
    Contributes tokens, token contexts, parser rules and node processors.

    ``registry`` and ``handlers`` are usable from ``initialize`` on; the
    registry binds them before any plugin is initialized.
    """

    def __init__(self):
        self._registry: Optional[TemplateRegistryProtocol] = None
        self._handlers: Optional[TemplateProcessorHandlers] = None

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def priority(self) -> PluginPriority: ...

    def bind(self, registry: TemplateRegistryProtocol, handlers: TemplateProcessorHandlers) -> None:
        self._registry = registry
        self._handlers = handlers

    @property
    def registry(self) -> TemplateRegistryProtocol:
        if self._registry is None:
            raise RuntimeError(f"Syntax plugin '{self.name}' is not bound to a registry yet")
        return self._registry

    @property
    def handlers(self) -> TemplateProcessorHandlers:
        if self._handlers is None:
            raise RuntimeError(f"Syntax plugin '{self.name}' is not bound to a processor yet")
        return self._handlers

    @abstractmethod
    def register_tokens(self) -> List[TokenSpec]: ...

    def register_token_contexts(self) -> List[TokenContext]:
        return []

    @abstractmethod
    def register_parser_rules(self) -> List[ParsingRule]: ...

    @abstractmethod
    def register_processors(self) -> List[ProcessorRule]: ...

    def initialize(self) -> None:
        """Runs once every plugin is registered and bound."""


PluginList = List[TemplatePlugin]

__all__ = ["TemplatePlugin", "PluginList"]

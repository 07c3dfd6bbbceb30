from __future__ import annotations

from typing import List, Protocol, runtime_checkable


@runtime_checkable
class TemplateRegistryProtocol(Protocol):
    """What a syntax plugin may change on the registry from ``initialize``."""

    def extend_context(self, context_name: str, token_names: List[str]) -> None:
        """
        Makes already registered tokens recognizable inside a token context.

        Raises:
            ValueError: If the context or one of the tokens is unknown
        """
        ...


__all__ = ["TemplateRegistryProtocol"]

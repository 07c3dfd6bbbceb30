"""
Base AST nodes.

Immutable node classes; concrete nodes are defined by plugins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class TemplateNode:
    """Base class for all template AST nodes."""
    pass


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """Static text, emitted as is."""
    text: str


TemplateAST = List[TemplateNode]


__all__ = ["TemplateNode", "TextNode", "TemplateAST"]

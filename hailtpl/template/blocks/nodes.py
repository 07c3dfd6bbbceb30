"""
AST nodes for block directives and comments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from ..expressions.model import Expression
from ..nodes import TemplateNode


@dataclass(frozen=True)
class IfBranch:
    """One ``if``/``elif`` arm."""
    condition: Expression
    body: List[TemplateNode] = field(default_factory=list)


@dataclass(frozen=True)
class IfNode(TemplateNode):
    """
    {% if cond %}...{% elif cond %}...{% else %}...{% endif %}

    Branches are tried in order; the first truthy one is rendered,
    otherwise the else body (possibly empty).
    """
    branches: List[IfBranch] = field(default_factory=list)
    else_body: List[TemplateNode] = field(default_factory=list)


@dataclass(frozen=True)
class ForNode(TemplateNode):
    """
    {% for item in items %}...{% else %}...{% endfor %}
    {% for key, value in mapping %}...{% endfor %}

    The else body renders when the iterable is empty or null.
    """
    targets: Tuple[str, ...]
    iterable: Expression
    body: List[TemplateNode] = field(default_factory=list)
    else_body: List[TemplateNode] = field(default_factory=list)


@dataclass(frozen=True)
class CommentNode(TemplateNode):
    """{# ... #}: never rendered."""
    text: str


__all__ = ["IfBranch", "IfNode", "ForNode", "CommentNode"]

"""
Plugin for block directives:
- {% if %} / {% elif %} / {% else %} / {% endif %}
- {% for %} / {% else %} / {% endfor %}
- {# comments #}
"""

from __future__ import annotations

from .nodes import CommentNode, ForNode, IfBranch, IfNode
from .plugin import BlocksPlugin

__all__ = ["BlocksPlugin", "IfNode", "IfBranch", "ForNode", "CommentNode"]

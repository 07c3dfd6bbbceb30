"""
Plugin for ``${ ... }`` output expressions: variables, filters and
function calls resolved through engine capabilities.
"""

from __future__ import annotations

from .evaluator import ExpressionEvaluator
from .nodes import OutputNode
from .plugin import ExpressionsPlugin

__all__ = ["ExpressionsPlugin", "ExpressionEvaluator", "OutputNode"]

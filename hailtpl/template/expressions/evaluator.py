"""
Expression evaluator.

Variables come from the render scope; function and filter names are
resolved through an injected capability resolver (the engine), never
through global state.
"""

from __future__ import annotations

import operator
from collections.abc import Mapping
from typing import Any, Callable

from .model import Attribute, BoolOp, Call, Compare, Expression, Filter, Literal, Name, Not
from ..scope import RenderScope
from ...errors import UndefinedVariableError

CapabilityResolver = Callable[[str], Callable[..., Any]]

_COMPARATORS = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


class ExpressionEvaluator:

    def __init__(self, resolve_function: CapabilityResolver, strict_variables: bool = False):
        """
        Args:
            resolve_function: Returns the capability for a name or raises UnknownCapabilityError
            strict_variables: Raise UndefinedVariableError instead of yielding None
        """
        self.resolve_function = resolve_function
        self.strict_variables = strict_variables

    def evaluate(self, expr: Expression, scope: RenderScope) -> Any:
        if isinstance(expr, Literal):
            return expr.value

        if isinstance(expr, Name):
            found, value = scope.lookup(expr.name)
            if not found:
                if self.strict_variables:
                    raise UndefinedVariableError(expr.name, scope.template_name)
                return None
            return value

        if isinstance(expr, Attribute):
            return get_attribute(self.evaluate(expr.target, scope), expr.attr)

        if isinstance(expr, Call):
            fn = self.resolve_function(expr.name)
            return fn(*(self.evaluate(a, scope) for a in expr.args))

        if isinstance(expr, Filter):
            fn = self.resolve_function(expr.name)
            value = self.evaluate(expr.target, scope)
            return fn(value, *(self.evaluate(a, scope) for a in expr.args))

        if isinstance(expr, Not):
            return not self.evaluate(expr.operand, scope)

        if isinstance(expr, BoolOp):
            left = self.evaluate(expr.left, scope)
            if expr.op == "and":
                return self.evaluate(expr.right, scope) if left else left
            return left if left else self.evaluate(expr.right, scope)

        if isinstance(expr, Compare):
            return _COMPARATORS[expr.op](self.evaluate(expr.left, scope), self.evaluate(expr.right, scope))

        raise TypeError(f"Unsupported expression node: {type(expr).__name__}")


def get_attribute(value: Any, attr: str) -> Any:
    """Mapping key first, then object attribute; None when absent."""
    if value is None:
        return None
    if isinstance(value, Mapping):
        return value.get(attr)
    return getattr(value, attr, None)


def to_text(value: Any) -> str:
    return "" if value is None else str(value)


__all__ = ["CapabilityResolver", "ExpressionEvaluator", "get_attribute", "to_text"]

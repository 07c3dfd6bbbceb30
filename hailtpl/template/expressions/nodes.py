from __future__ import annotations

from dataclasses import dataclass

from .model import Expression
from ..nodes import TemplateNode


@dataclass(frozen=True)
class OutputNode(TemplateNode):
    """
    ``${ expression }``: evaluated and written to the output.
    None renders as an empty string.
    """
    expression: Expression


__all__ = ["OutputNode"]

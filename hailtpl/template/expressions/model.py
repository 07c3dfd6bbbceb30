"""
Expression AST.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple


@dataclass(frozen=True)
class Expression:
    pass


@dataclass(frozen=True)
class Literal(Expression):
    value: Any


@dataclass(frozen=True)
class Name(Expression):
    """Variable reference."""
    name: str


@dataclass(frozen=True)
class Attribute(Expression):
    """``target.attr``: mapping key first, then object attribute."""
    target: Expression
    attr: str


@dataclass(frozen=True)
class Call(Expression):
    """``name(args...)``: invokes the capability registered under ``name``."""
    name: str
    args: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Filter(Expression):
    """``target|name:arg,...``: capability called with the target value first."""
    target: Expression
    name: str
    args: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Not(Expression):
    operand: Expression


@dataclass(frozen=True)
class BoolOp(Expression):
    op: str  # "and" | "or"
    left: Expression
    right: Expression


@dataclass(frozen=True)
class Compare(Expression):
    op: str  # ==, !=, <, <=, >, >=
    left: Expression
    right: Expression


__all__ = [
    "Expression",
    "Literal",
    "Name",
    "Attribute",
    "Call",
    "Filter",
    "Not",
    "BoolOp",
    "Compare",
]

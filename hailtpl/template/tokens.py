"""
Lexical types.

Defines the base token types. Concrete token types are registered by plugins.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from ..errors import ErrorKind, HailUserError


class TokenType(enum.Enum):
    """Base token types. Plugins register their own tokens via the registry."""
    TEXT = "TEXT"
    EOF = "EOF"


# Token types are plain strings so plugins can add new ones
TokenTypeName = str


@dataclass(frozen=True)
class Token:
    """
    Token with position information for precise error reporting.
    """
    type: TokenTypeName
    value: str
    position: int        # offset in the source text
    line: int            # 1-based
    column: int          # 1-based

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r}, {self.line}:{self.column})"


class ParserError(HailUserError):
    """Template syntax error."""
    kind = ErrorKind.TEMPLATE_SYNTAX

    def __init__(self, message: str, token: Token, template_name: str = ""):
        super().__init__(message)
        self.message = message
        self.token = token
        self.line = token.line
        self.column = token.column
        self.template_name = template_name

    def __str__(self) -> str:
        where = f" in '{self.template_name}'" if self.template_name else ""
        return f"{self.message} at {self.line}:{self.column}{where} (token: {self.token.type})"


__all__ = [
    "TokenType",
    "TokenTypeName",
    "Token",
    "ParserError"
]

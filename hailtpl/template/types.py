"""
Data types shared by the lexer, parser, processor and syntax plugins.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from re import Pattern
from typing import Callable, Dict, List, Optional, Set, Type

from .nodes import TemplateNode
from .scope import RenderScope
from .tokens import Token, TokenType, TokenTypeName, ParserError


class PluginPriority(enum.IntEnum):
    DIRECTIVE = 100      # {% ... %} and {# ... #}
    PLACEHOLDER = 90     # ${ ... }


@dataclass(frozen=True)
class TokenSpec:
    name: str                    # e.g. "PLACEHOLDER_START"
    pattern: Pattern[str]
    priority: int = 50           # higher is tried first


@dataclass
class TokenContext:
    """
    Tokens recognized only between an opening and a closing token,
    e.g. expression tokens inside ``${ ... }``.
    """
    name: str
    open_tokens: Set[str]
    close_tokens: Set[str]
    inner_tokens: Set[str] = field(default_factory=set)
    allow_nesting: bool = False

    def __post_init__(self):
        if not self.name:
            raise ValueError("Token context name cannot be empty")
        if not self.open_tokens or not self.close_tokens:
            raise ValueError(f"Token context '{self.name}' needs both open and close tokens")
        shared = self.open_tokens & self.close_tokens
        if shared:
            raise ValueError(f"Token context '{self.name}' opens and closes with {sorted(shared)}")


@dataclass(frozen=True)
class LexerTable:
    """Token specs tried at one lexer state, plus a pattern finding where the next one starts."""
    specs: List[TokenSpec]
    stop: Optional[Pattern[str]]


@dataclass
class ParsingRule:
    """``parser_func`` returns None when the tokens are not its construct."""
    name: str
    priority: int
    parser_func: Callable[[ParsingContext], Optional[TemplateNode]]
    enabled: bool = True


@dataclass(frozen=True)
class ProcessingContext:
    """Node being rendered and the scope it renders in."""
    node: TemplateNode
    scope: RenderScope


@dataclass
class ProcessorRule:
    node_type: Type[TemplateNode]
    processor_func: Callable[[ProcessingContext], str]


class ParsingContext:
    """
    Cursor over a token list terminated by EOF.

    Rules that back out of a construct call ``reset`` with the value
    ``mark`` returned before they started consuming.
    """

    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].type != TokenType.EOF.value:
            end = tokens[-1] if tokens else None
            tokens = list(tokens) + [Token(
                TokenType.EOF.value, "",
                end.position + len(end.value) if end else 0,
                end.line if end else 1,
                end.column + len(end.value) if end else 1,
            )]
        self.tokens = tokens
        self.position = 0

    def current(self) -> Token:
        return self.peek(0)

    def peek(self, offset: int = 1) -> Token:
        # everything past the end reads as the EOF token
        return self.tokens[min(self.position + offset, len(self.tokens) - 1)]

    def advance(self) -> Token:
        token = self.current()
        if token.type != TokenType.EOF.value:
            self.position += 1
        return token

    def is_at_end(self) -> bool:
        return self.current().type == TokenType.EOF.value

    def match(self, *token_types: TokenTypeName) -> bool:
        return self.current().type in token_types

    def consume(self, expected_type: TokenTypeName) -> Token:
        """
        Raises:
            ParserError: If the current token is not ``expected_type``
        """
        token = self.current()
        if token.type != expected_type:
            raise ParserError(f"Expected {expected_type}, got {token.type}", token)
        return self.advance()

    def mark(self) -> int:
        return self.position

    def reset(self, mark: int) -> None:
        self.position = mark


TokenRegistry = Dict[str, TokenSpec]
ParserRulesRegistry = Dict[str, ParsingRule]
ProcessorRegistry = Dict[Type[TemplateNode], ProcessorRule]


__all__ = [
    "PluginPriority",
    "TokenSpec",
    "TokenContext",
    "LexerTable",
    "ParsingRule",
    "ProcessingContext",
    "ProcessorRule",
    "ParsingContext",
    "TokenRegistry",
    "ParserRulesRegistry",
    "ProcessorRegistry",
]

"""
Context-aware lexer.

Which tokens are tried depends on the innermost open token context
(``${ ... }``, ``{% ... %}``, ``{# ... #}``), so expression tokens never
fire on plain text. Input no token matches becomes TEXT.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .registry import TemplateRegistry
from .tokens import Token, TokenType
from .types import LexerTable, TokenContext

logger = logging.getLogger(__name__)


class _Cursor:
    """Read position in the source with 1-based line/column tracking."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def take(self, token_type: str, length: int) -> Token:
        value = self.text[self.pos:self.pos + length]
        token = Token(token_type, value, self.pos, self.line, self.column)

        newlines = value.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(value) - value.rfind("\n")
        else:
            self.column += length
        self.pos += length
        return token


class ContextualLexer:
    """
    Splits template text into tokens. Holds no per-run state, so one
    instance can serve concurrent renders.
    """

    def __init__(self, registry: TemplateRegistry):
        self.registry = registry

    def tokenize(self, text: str) -> List[Token]:
        """
        Returns:
            Token list terminated by EOF
        """
        cursor = _Cursor(text)
        contexts: List[TokenContext] = []
        tokens: List[Token] = []

        while not cursor.at_end():
            table = self.registry.lexer_table(contexts[-1] if contexts else None)
            token = self._match(table, cursor) or self._unmatched(table, cursor)
            tokens.append(token)

            if contexts and token.type in contexts[-1].close_tokens:
                contexts.pop()
                continue
            opened = self.registry.context_opened_by(token.type)
            if opened is not None:
                contexts.append(opened)

        tokens.append(Token(TokenType.EOF.value, "", cursor.pos, cursor.line, cursor.column))
        logger.debug(f"Tokenized {len(text)} chars into {len(tokens)} tokens")
        return tokens

    @staticmethod
    def _match(table: LexerTable, cursor: _Cursor) -> Optional[Token]:
        for spec in table.specs:
            m = spec.pattern.match(cursor.text, cursor.pos)
            if m and m.end() > cursor.pos:
                return cursor.take(spec.name, m.end() - cursor.pos)
        return None

    @staticmethod
    def _unmatched(table: LexerTable, cursor: _Cursor) -> Token:
        """TEXT up to the next position where a non-TEXT token of ``table`` starts."""
        end = len(cursor.text)
        if table.stop is not None:
            m = table.stop.search(cursor.text, cursor.pos + 1)
            if m:
                end = m.start()
        return cursor.take(TokenType.TEXT.value, end - cursor.pos)


__all__ = ["ContextualLexer"]

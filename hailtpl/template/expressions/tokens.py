"""
Tokens of the expression language used inside ``${ ... }`` and directives.
"""

from __future__ import annotations

import re
from typing import List

from ..types import TokenSpec

# Tokens allowed inside any context that contains an expression
EXPRESSION_TOKENS = frozenset({
    "WHITESPACE", "STRING_LITERAL", "NUMBER", "IDENTIFIER", "OPERATOR",
    "PIPE", "COLON", "COMMA", "DOT", "LPAREN", "RPAREN",
})


def get_expression_token_specs() -> List[TokenSpec]:
    return [
        TokenSpec(name="PLACEHOLDER_START", pattern=re.compile(r'\$\{'), priority=80),
        TokenSpec(name="PLACEHOLDER_END", pattern=re.compile(r'\}'), priority=80),

        # Double or single quoted, backslash escapes
        TokenSpec(
            name="STRING_LITERAL",
            pattern=re.compile(r'"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\''),
            priority=75,
        ),
        TokenSpec(name="NUMBER", pattern=re.compile(r'-?\d+(?:\.\d+)?'), priority=65),
        TokenSpec(name="OPERATOR", pattern=re.compile(r'==|!=|<=|>=|<|>'), priority=60),
        TokenSpec(name="IDENTIFIER", pattern=re.compile(r'[A-Za-z_][A-Za-z0-9_]*')),
        TokenSpec(name="WHITESPACE", pattern=re.compile(r'[ \t\r\n]+')),
        TokenSpec(name="PIPE", pattern=re.compile(r'\|')),
        TokenSpec(name="COLON", pattern=re.compile(r':')),
        TokenSpec(name="COMMA", pattern=re.compile(r',')),
        TokenSpec(name="DOT", pattern=re.compile(r'\.')),
        TokenSpec(name="LPAREN", pattern=re.compile(r'\(')),
        TokenSpec(name="RPAREN", pattern=re.compile(r'\)')),
    ]


__all__ = ["EXPRESSION_TOKENS", "get_expression_token_specs"]

"""
Recursive-descent parser for template expressions.

Grammar (lowest precedence first)::

    expression := and_expr ('or' and_expr)*
    and_expr   := not_expr ('and' not_expr)*
    not_expr   := 'not' not_expr | comparison
    comparison := filtered (OPERATOR filtered)?
    filtered   := postfix ('|' NAME (':' postfix (',' postfix)*)?)*
    postfix    := primary ('.' NAME)*
    primary    := STRING | NUMBER | true | false | null
                | NAME '(' [expression (',' expression)*] ')'
                | NAME
                | '(' expression ')'
"""

from __future__ import annotations

from typing import List, Optional

from .model import Attribute, BoolOp, Call, Compare, Expression, Filter, Literal, Name, Not
from ..tokens import ParserError, Token, TokenType

KEYWORDS = frozenset({"and", "or", "not", "true", "false", "null", "in"})

_CONSTANTS = {"true": True, "false": False, "null": None}

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"', "'": "'"}


class ExpressionParser:

    def __init__(self, tokens: List[Token], anchor: Optional[Token] = None):
        """
        Args:
            tokens: Expression tokens (whitespace is ignored)
            anchor: Token used for error positions when ``tokens`` is empty
        """
        self.tokens = [t for t in tokens if t.type != "WHITESPACE"]
        self.position = 0
        self.anchor = anchor or (self.tokens[0] if self.tokens else Token(TokenType.EOF.value, "", 0, 1, 1))

    def parse(self) -> Expression:
        """
        Parses the whole token list as one expression.

        Raises:
            ParserError: On empty input, unexpected or trailing tokens
        """
        if not self.tokens:
            raise ParserError("Empty expression", self.anchor)

        expr = self._parse_or()
        if not self._at_end():
            raise ParserError(f"Unexpected '{self._current().value}' in expression", self._current())
        return expr

    # ======= Grammar =======

    def _parse_or(self) -> Expression:
        left = self._parse_and()
        while self._match_keyword("or"):
            self._advance()
            left = BoolOp("or", left, self._parse_and())
        return left

    def _parse_and(self) -> Expression:
        left = self._parse_not()
        while self._match_keyword("and"):
            self._advance()
            left = BoolOp("and", left, self._parse_not())
        return left

    def _parse_not(self) -> Expression:
        if self._match_keyword("not"):
            self._advance()
            return Not(self._parse_not())
        return self._parse_comparison()

    def _parse_comparison(self) -> Expression:
        left = self._parse_filtered()
        if self._match("OPERATOR"):
            op = self._advance().value
            right = self._parse_filtered()
            return Compare(op, left, right)
        return left

    def _parse_filtered(self) -> Expression:
        expr = self._parse_postfix()
        while self._match("PIPE"):
            self._advance()
            name = self._expect_name("filter name after '|'")
            args: List[Expression] = []
            if self._match("COLON"):
                self._advance()
                args.append(self._parse_postfix())
                while self._match("COMMA"):
                    self._advance()
                    args.append(self._parse_postfix())
            expr = Filter(expr, name, tuple(args))
        return expr

    def _parse_postfix(self) -> Expression:
        expr = self._parse_primary()
        while self._match("DOT"):
            self._advance()
            expr = Attribute(expr, self._expect_name("attribute name after '.'"))
        return expr

    def _parse_primary(self) -> Expression:
        token = self._current()

        if token.type == "STRING_LITERAL":
            self._advance()
            return Literal(parse_string_literal(token.value))

        if token.type == "NUMBER":
            self._advance()
            return Literal(float(token.value) if "." in token.value else int(token.value))

        if token.type == "LPAREN":
            self._advance()
            expr = self._parse_or()
            self._expect("RPAREN", "')'")
            return expr

        if token.type == "IDENTIFIER":
            if token.value in _CONSTANTS:
                self._advance()
                return Literal(_CONSTANTS[token.value])
            if token.value in KEYWORDS:
                raise ParserError(f"Unexpected keyword '{token.value}'", token)

            self._advance()
            if self._match("LPAREN"):
                return Call(token.value, self._parse_call_args())
            return Name(token.value)

        if token.type == TokenType.EOF.value:
            raise ParserError("Unexpected end of expression", token)
        raise ParserError(f"Unexpected '{token.value}' in expression", token)

    def _parse_call_args(self) -> tuple:
        self._expect("LPAREN", "'('")
        args: List[Expression] = []
        if not self._match("RPAREN"):
            args.append(self._parse_or())
            while self._match("COMMA"):
                self._advance()
                args.append(self._parse_or())
        self._expect("RPAREN", "')' to close call")
        return tuple(args)

    # ======= Token cursor =======

    def _current(self) -> Token:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        last = self.tokens[-1] if self.tokens else self.anchor
        return Token(TokenType.EOF.value, "", last.position + len(last.value), last.line, last.column + len(last.value))

    def _advance(self) -> Token:
        token = self._current()
        self.position += 1
        return token

    def _at_end(self) -> bool:
        return self.position >= len(self.tokens)

    def _match(self, token_type: str) -> bool:
        return not self._at_end() and self._current().type == token_type

    def _match_keyword(self, keyword: str) -> bool:
        return self._match("IDENTIFIER") and self._current().value == keyword

    def _expect(self, token_type: str, what: str) -> Token:
        if not self._match(token_type):
            raise ParserError(f"Expected {what}", self._current())
        return self._advance()

    def _expect_name(self, what: str) -> str:
        token = self._current()
        if token.type != "IDENTIFIER" or token.value in KEYWORDS:
            raise ParserError(f"Expected {what}", token)
        self._advance()
        return token.value


def parse_string_literal(literal: str) -> str:
    """
    Strips the quotes and resolves backslash escapes.
    Unknown escapes are kept as written.
    """
    if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "\"'":
        literal = literal[1:-1]

    result = []
    i = 0
    while i < len(literal):
        if literal[i] == '\\' and i + 1 < len(literal):
            next_char = literal[i + 1]
            if next_char in _ESCAPES:
                result.append(_ESCAPES[next_char])
            else:
                result.append('\\')
                result.append(next_char)
            i += 2
        else:
            result.append(literal[i])
            i += 1

    return ''.join(result)


def parse_expression(tokens: List[Token], anchor: Optional[Token] = None) -> Expression:
    return ExpressionParser(tokens, anchor).parse()


__all__ = ["ExpressionParser", "KEYWORDS", "parse_expression", "parse_string_literal"]

"""
Parser rules for block directives ``{% ... %}`` and comments ``{# ... #}``.

Bodies are parsed recursively through the core parser, so any construct
known to any plugin may appear inside a block.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Set, Tuple

from .nodes import CommentNode, ForNode, IfBranch, IfNode
from ..expressions.parser import KEYWORDS, parse_expression
from ..nodes import TemplateNode
from ..parser import append_text
from ..tokens import ParserError, Token
from ..types import PluginPriority, ParsingRule, ParsingContext

ParseNextNodeFunc = Callable[[ParsingContext], Optional[TemplateNode]]

# Keywords that close or split a block; they never start a directive of their own
_DANGLING = {
    "elif": "elif without if",
    "else": "else without if or for",
    "endif": "endif without if",
    "endfor": "endfor without for",
}


class BlockParserRules:

    def __init__(self, parse_next_node: ParseNextNodeFunc):
        """
        Args:
            parse_next_node: Core functor for parsing nested nodes
        """
        self.parse_next_node = parse_next_node

    def parse_comment(self, context: ParsingContext) -> Optional[TemplateNode]:
        if not context.match("COMMENT_START"):
            return None

        start = context.consume("COMMENT_START")
        parts = []
        while not context.is_at_end() and not context.match("COMMENT_END"):
            parts.append(context.advance().value)

        if context.is_at_end():
            raise ParserError("Unclosed comment, expected '#}'", start)
        context.consume("COMMENT_END")

        return CommentNode(text="".join(parts))

    def parse_directive(self, context: ParsingContext) -> Optional[TemplateNode]:
        if not context.match("DIRECTIVE_START"):
            return None

        start = context.current()
        keyword_token, args = self._read_directive(context)
        keyword = keyword_token.value

        if keyword == "if":
            return self._parse_if(context, keyword_token, args)
        if keyword == "for":
            return self._parse_for(context, keyword_token, args)
        if keyword in _DANGLING:
            raise ParserError(_DANGLING[keyword], keyword_token)
        raise ParserError(f"Unknown directive: {keyword or start.value}", keyword_token)

    # ======= Directives =======

    def _parse_if(self, context: ParsingContext, keyword_token: Token, args: List[Token]) -> IfNode:
        branches: List[IfBranch] = []
        condition = parse_expression(args, anchor=keyword_token)

        while True:
            body, end_token, end_args = self._parse_body(context, {"elif", "else", "endif"}, keyword_token)
            branches.append(IfBranch(condition=condition, body=body))
            if end_token.value != "elif":
                break
            condition = parse_expression(end_args, anchor=end_token)

        else_body: List[TemplateNode] = []
        if end_token.value == "else":
            self._expect_no_args(end_token, end_args)
            else_body, end_token, end_args = self._parse_body(context, {"endif"}, keyword_token)

        self._expect_no_args(end_token, end_args)
        return IfNode(branches=branches, else_body=else_body)

    def _parse_for(self, context: ParsingContext, keyword_token: Token, args: List[Token]) -> ForNode:
        targets, iterable_tokens = self._split_for_header(keyword_token, args)
        iterable = parse_expression(iterable_tokens, anchor=keyword_token)

        body, end_token, end_args = self._parse_body(context, {"else", "endfor"}, keyword_token)
        else_body: List[TemplateNode] = []
        if end_token.value == "else":
            self._expect_no_args(end_token, end_args)
            else_body, end_token, end_args = self._parse_body(context, {"endfor"}, keyword_token)

        self._expect_no_args(end_token, end_args)
        return ForNode(targets=targets, iterable=iterable, body=body, else_body=else_body)

    def _split_for_header(self, keyword_token: Token, args: List[Token]) -> Tuple[Tuple[str, ...], List[Token]]:
        """Splits ``a[, b] in expr`` into target names and iterable tokens."""
        in_index = next(
            (i for i, t in enumerate(args) if t.type == "IDENTIFIER" and t.value == "in"),
            None,
        )
        if in_index is None:
            raise ParserError("Expected 'in' in for directive", keyword_token)

        names = [t for t in args[:in_index] if t.type != "COMMA"]
        commas = [t for t in args[:in_index] if t.type == "COMMA"]
        if not names or len(names) > 2 or len(commas) != len(names) - 1:
            raise ParserError("Expected one or two loop variables before 'in'", keyword_token)
        for t in names:
            if t.type != "IDENTIFIER" or t.value in KEYWORDS:
                raise ParserError(f"Invalid loop variable '{t.value}'", t)

        return tuple(t.value for t in names), args[in_index + 1:]

    # ======= Helpers =======

    def _read_directive(self, context: ParsingContext) -> Tuple[Token, List[Token]]:
        """
        Consumes ``{% keyword args %}``.

        Returns:
            Keyword token and the remaining non-whitespace tokens
        """
        start = context.consume("DIRECTIVE_START")
        content: List[Token] = []
        while not context.is_at_end() and not context.match("DIRECTIVE_END"):
            token = context.advance()
            if token.type != "WHITESPACE":
                content.append(token)

        if context.is_at_end():
            raise ParserError("Unclosed directive, expected '%}'", start)
        context.consume("DIRECTIVE_END")

        if not content or content[0].type != "IDENTIFIER":
            raise ParserError("Empty directive", start)
        return content[0], content[1:]

    def _peek_keyword(self, context: ParsingContext) -> Optional[str]:
        """Keyword of the directive starting at the current position, without consuming it."""
        offset = 1
        while context.peek(offset).type == "WHITESPACE":
            offset += 1
        token = context.peek(offset)
        return token.value if token.type == "IDENTIFIER" else None

    def _parse_body(
        self,
        context: ParsingContext,
        terminators: Set[str],
        opener: Token,
    ) -> Tuple[List[TemplateNode], Token, List[Token]]:
        """
        Parses nodes up to one of the terminating directives.

        Returns:
            Body nodes, the terminator keyword token and its arguments

        Raises:
            ParserError: If the template ends before a terminator
        """
        body: List[TemplateNode] = []

        while True:
            if context.is_at_end():
                expected = " or ".join(sorted(terminators))
                raise ParserError(f"Unexpected end of template, expected {expected}", opener)

            if context.match("DIRECTIVE_START") and self._peek_keyword(context) in terminators:
                end_token, end_args = self._read_directive(context)
                return body, end_token, end_args

            node = self.parse_next_node(context)
            if node is not None:
                body.append(node)
            else:
                append_text(body, context.advance().value)

    @staticmethod
    def _expect_no_args(token: Token, args: List[Token]) -> None:
        if args:
            raise ParserError(f"Unexpected arguments after '{token.value}'", args[0])


def get_block_parser_rules(rules: BlockParserRules) -> List[ParsingRule]:
    return [
        ParsingRule(
            name="parse_directive",
            priority=PluginPriority.DIRECTIVE,
            parser_func=rules.parse_directive,
        ),
        ParsingRule(
            name="parse_comment",
            priority=PluginPriority.DIRECTIVE,
            parser_func=rules.parse_comment,
        ),
    ]


__all__ = ["BlockParserRules", "get_block_parser_rules"]

"""
AST construction: text merging, placeholders, blocks and syntax errors.
"""

import pytest

from hailtpl.capabilities import CapabilityRegistry
from hailtpl.errors import ErrorKind
from hailtpl.template import ParserError, create_template_processor
from hailtpl.template.blocks import CommentNode, ForNode, IfNode
from hailtpl.template.expressions import OutputNode
from hailtpl.template.expressions.model import Attribute, BoolOp, Call, Compare, Filter, Literal, Name, Not
from hailtpl.template.nodes import TextNode


@pytest.fixture
def parse():
    return create_template_processor(CapabilityRegistry().get).parse


class TestParserBasics:

    def test_text_only(self, parse):
        assert parse("just text") == [TextNode("just text")]

    def test_placeholder_between_text(self, parse):
        ast = parse("a ${x} b")
        assert ast == [TextNode("a "), OutputNode(Name("x")), TextNode(" b")]

    def test_comment_node(self, parse):
        ast = parse("x {# c #} y")
        assert ast == [TextNode("x "), CommentNode(" c "), TextNode(" y")]


class TestExpressionParsing:

    def expr(self, parse, source):
        (node,) = parse("${" + source + "}")
        return node.expression

    def test_literals(self, parse):
        assert self.expr(parse, "'it\\'s'") == Literal("it's")
        assert self.expr(parse, '"a\\nb"') == Literal("a\nb")
        assert self.expr(parse, "42") == Literal(42)
        assert self.expr(parse, "-1.5") == Literal(-1.5)
        assert self.expr(parse, "true") == Literal(True)
        assert self.expr(parse, "null") == Literal(None)

    def test_dotted_access(self, parse):
        assert self.expr(parse, "user.address.city") == Attribute(Attribute(Name("user"), "address"), "city")

    def test_call(self, parse):
        assert self.expr(parse, "fmt(a, 'b')") == Call("fmt", (Name("a"), Literal("b")))
        assert self.expr(parse, "now()") == Call("now", ())

    def test_filters_chain(self, parse):
        expr = self.expr(parse, "title|truncate:10,'..'|upper")
        assert expr == Filter(
            Filter(Name("title"), "truncate", (Literal(10), Literal(".."))),
            "upper",
            (),
        )

    def test_precedence(self, parse):
        expr = self.expr(parse, "not a and b or c == 1")
        assert expr == BoolOp(
            "or",
            BoolOp("and", Not(Name("a")), Name("b")),
            Compare("==", Name("c"), Literal(1)),
        )

    def test_parentheses(self, parse):
        expr = self.expr(parse, "a and (b or c)")
        assert expr == BoolOp("and", Name("a"), BoolOp("or", Name("b"), Name("c")))


class TestBlockParsing:

    def test_if_elif_else(self, parse):
        (node,) = parse("{% if a %}A{% elif b %}B{% else %}C{% endif %}")

        assert isinstance(node, IfNode)
        assert [b.condition for b in node.branches] == [Name("a"), Name("b")]
        assert [b.body for b in node.branches] == [[TextNode("A")], [TextNode("B")]]
        assert node.else_body == [TextNode("C")]

    def test_for_two_targets_with_else(self, parse):
        (node,) = parse("{% for k, v in data.items %}${k}{% else %}none{% endfor %}")

        assert isinstance(node, ForNode)
        assert node.targets == ("k", "v")
        assert node.iterable == Attribute(Name("data"), "items")
        assert node.body == [OutputNode(Name("k"))]
        assert node.else_body == [TextNode("none")]

    def test_nested_blocks(self, parse):
        (node,) = parse("{% for x in xs %}{% if x %}${x}{% endif %}{% endfor %}")

        inner = node.body[0]
        assert isinstance(inner, IfNode)
        assert inner.branches[0].body == [OutputNode(Name("x"))]


class TestSyntaxErrors:

    @pytest.mark.parametrize("source, message", [
        ("${ a ", "Unclosed placeholder"),
        ("${ }", "Empty expression"),
        ("${ a b }", "Unexpected 'b'"),
        ("${ f(1 }", "Expected ')' to close call"),
        ("${ a| }", "Expected filter name"),
        ("{% if a %}never closed", "Unexpected end of template, expected elif or else or endif"),
        ("{% endif %}", "endif without if"),
        ("{% else %}", "else without if or for"),
        ("{% for x items %}{% endfor %}", "Expected 'in'"),
        ("{% for a, b, c in x %}{% endfor %}", "Expected one or two loop variables"),
        ("{% frobnicate %}", "Unknown directive: frobnicate"),
        ("{% %}", "Empty directive"),
        ("{% if a %}{% else x %}{% endif %}", "Unexpected arguments after 'else'"),
        ("{# open", "Unclosed comment"),
    ])
    def test_errors(self, parse, source, message):
        with pytest.raises(ParserError) as exc:
            parse(source)

        assert message in str(exc.value)
        assert exc.value.kind is ErrorKind.TEMPLATE_SYNTAX

    def test_error_position(self, parse):
        with pytest.raises(ParserError) as exc:
            parse("line one\n  ${ a b }")

        assert exc.value.line == 2
        assert exc.value.column == 8

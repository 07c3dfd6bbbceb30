import logging

import pytest

from hailtpl.template.base import TemplatePlugin
from hailtpl.template.blocks import BlocksPlugin
from hailtpl.template.expressions import ExpressionsPlugin
from hailtpl.template.expressions.nodes import OutputNode
from hailtpl.template.frontmatter import parse_frontmatter
from hailtpl.template.registry import TemplateRegistry
from hailtpl.template.types import ProcessorRule, TokenContext


class TestFrontmatter:

    def test_parsed_and_stripped(self):
        fm, text = parse_frontmatter("---\ntitle: Home\ntags: [a, b]\n---\nBody ${title}")

        assert fm.data == {"title": "Home", "tags": ["a", "b"]}
        assert text == "Body ${title}"

    def test_no_frontmatter(self):
        assert parse_frontmatter("plain") == (None, "plain")

    def test_unclosed_block_is_text(self):
        src = "---\ntitle: x\nno end"
        assert parse_frontmatter(src) == (None, src)

    def test_empty_block(self):
        fm, text = parse_frontmatter("---\n\n---\nbody")
        assert fm.data == {}
        assert text == "body"

    def test_non_mapping_is_ignored(self):
        src = "---\n- a\n- b\n---\nbody"
        assert parse_frontmatter(src) == (None, src)

    def test_invalid_yaml_warns(self, caplog):
        src = "---\ntitle: [oops\n---\nbody"
        with caplog.at_level(logging.WARNING, logger="hailtpl.template.frontmatter"):
            fm, text = parse_frontmatter(src)

        assert fm is None and text == src
        assert "invalid template frontmatter" in caplog.text

    def test_crlf(self):
        fm, text = parse_frontmatter("---\r\na: 1\r\n---\r\nbody")
        assert fm.data == {"a": 1}
        assert text == "body"


class TestTemplateRegistry:

    def test_duplicate_plugin_name(self):
        registry = TemplateRegistry()
        registry.register_plugin(ExpressionsPlugin())

        with pytest.raises(ValueError, match="already registered"):
            registry.register_plugin(ExpressionsPlugin())

    def test_tokens_sorted_by_priority(self):
        registry = TemplateRegistry()
        registry.register_plugin(ExpressionsPlugin())

        priorities = [spec.priority for spec in registry.tokens_by_priority()]
        assert priorities == sorted(priorities, reverse=True)
        assert registry.tokens_by_priority()[-1].name == "TEXT"

    def test_unknown_context(self):
        with pytest.raises(ValueError, match="not found"):
            TemplateRegistry().extend_context("nope", ["IDENTIFIER"])

    def test_duplicate_processor_rejected(self):
        registry = TemplateRegistry()
        registry.register_plugin(ExpressionsPlugin())

        with pytest.raises(ValueError, match="Processor for 'OutputNode'"):
            registry.register_plugin(_ShadowOutputPlugin())

        assert [p.name for p in registry.plugins] == ["expressions"]

    def test_extend_context_unknown_token(self):
        registry = TemplateRegistry()
        registry.register_plugin(BlocksPlugin())

        with pytest.raises(ValueError, match="Unknown tokens"):
            registry.extend_context("directive", ["NOPE"])

    def test_lexer_tables(self):
        registry = TemplateRegistry()
        registry.register_plugin(ExpressionsPlugin())
        registry.register_plugin(BlocksPlugin())

        top = registry.lexer_table(None)
        assert {s.name for s in top.specs} == {"TEXT", "PLACEHOLDER_START", "DIRECTIVE_START", "COMMENT_START"}
        assert registry.lexer_table(None) is top

        directive = registry.token_contexts["directive"]
        before = registry.lexer_table(directive)
        assert "STRING_LITERAL" not in {s.name for s in before.specs}

        registry.extend_context("directive", ["STRING_LITERAL"])
        after = registry.lexer_table(directive)
        assert after is not before
        assert "STRING_LITERAL" in {s.name for s in after.specs}

    def test_lookups(self):
        registry = TemplateRegistry()
        registry.register_plugin(ExpressionsPlugin())

        assert registry.context_opened_by("PLACEHOLDER_START").name == "placeholder"
        assert registry.context_opened_by("IDENTIFIER") is None
        assert registry.processor_for(OutputNode) is not None
        assert registry.processor_for(str) is None


class TestTokenContext:

    def test_requires_open_and_close(self):
        with pytest.raises(ValueError, match="needs both"):
            TokenContext(name="x", open_tokens={"A"}, close_tokens=set())

    def test_open_and_close_must_differ(self):
        with pytest.raises(ValueError, match="opens and closes"):
            TokenContext(name="x", open_tokens={"A"}, close_tokens={"A"})


class _ShadowOutputPlugin(TemplatePlugin):

    @property
    def name(self):
        return "shadow"

    @property
    def priority(self):
        return 1

    def register_tokens(self):
        return []

    def register_parser_rules(self):
        return []

    def register_processors(self):
        return [ProcessorRule(node_type=OutputNode, processor_func=lambda ctx: "")]

import pytest

from hailtpl.errors import RegistrationError
from hailtpl.extensions import EscapeExtension, HtmlExtension
from hailtpl.extensions.escape import escapehtml, escapejs, escapeurl, escapexml
from hailtpl.extensions.html import striphtml
from tests.infrastructure import DictExtension, make_engine


class TestEscaping:

    def test_escapehtml(self):
        assert escapehtml('<a href="x">Tom & \'Jerry\'</a>') == (
            "&lt;a href=&quot;x&quot;&gt;Tom &amp; &#x27;Jerry&#x27;&lt;/a&gt;"
        )
        assert escapehtml(None) == ""

    def test_escapeurl(self):
        assert escapeurl("a b/c?d=é") == "a%20b%2Fc%3Fd%3D%C3%A9"

    def test_escapejs(self):
        assert escapejs("</script><!--") == '"</script>\\x3C!--"'
        assert escapejs({"a": [1, None]}) == '{"a": [1, null]}'
        assert escapejs("\u2028") == '"\\u2028"'

    def test_escapexml_drops_control_chars(self):
        assert escapexml("a\x01b<c>") == "ab&lt;c&gt;"


class TestHtmlExtension:

    def test_striphtml(self):
        assert striphtml("<p>Tom &amp; <b>Jerry</b></p>") == "Tom & Jerry"

    def test_breaklines_escapes(self, full_engine):
        out = full_engine.render_string("${ text|breaklines }", {"text": "a<b>\nc"})
        assert out == "a&lt;b&gt;<br>\nc"

    def test_breaklines_uses_registered_escaper(self):
        """HtmlExtension builds on whatever escapehtml is registered at attach time."""
        engine = make_engine(extensions=[
            DictExtension({"escapehtml": lambda s: f"[{s}]"}, name="custom-escape"),
            HtmlExtension(),
        ])
        assert engine.call_function("breaklines", "x") == "[x]"

    def test_requires_escape_extension(self):
        engine = make_engine()
        with pytest.raises(RegistrationError) as exc:
            engine.register_extension(HtmlExtension())

        assert exc.value.extension == "html"
        assert exc.value.missing == ["escapehtml"]
        assert not engine.has_function("breaklines")

    def test_after_escape_extension(self):
        engine = make_engine(extensions=[EscapeExtension(), HtmlExtension()])
        assert engine.has_function("breaklines") and engine.has_function("striphtml")

    def test_escaper_bound_at_registration(self):
        """Replacing escapehtml later needs a fresh HtmlExtension to reach breaklines."""
        engine = make_engine(extensions=[EscapeExtension(), HtmlExtension()])
        engine.register_function("escapehtml", lambda s: f"[{s}]")

        assert engine.render_string('${ "a"|escapehtml }') == "[a]"
        assert engine.render_string('${ "a"|breaklines }') == "a"

        engine.register_extension(HtmlExtension())
        assert engine.render_string('${ "a"|breaklines }') == "[a]"

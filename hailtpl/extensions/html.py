from __future__ import annotations

import html
import re
from typing import Any

from ..extension import require_capabilities
from ..template.expressions.evaluator import to_text

_TAG = re.compile(r"<[^>]*>")
_NEWLINE = re.compile(r"(\r\n|\n|\r)")


class HtmlExtension:
    """
    HTML output helpers built on the ``escapehtml`` capability.

    Attach after EscapeExtension; registering without it raises
    RegistrationError. ``breaklines`` uses the ``escapehtml`` registered at
    the time this extension registers; after replacing ``escapehtml``,
    register a new HtmlExtension to pick the replacement up.
    """
    name = "html"

    def register(self, engine) -> None:
        require_capabilities(engine, self, "escapehtml")
        # bound now: extensions keep no reference to the engine
        escape = engine.get_function("escapehtml")

        def breaklines(s: Any) -> str:
            """Escapes text and inserts ``<br>`` before every line break."""
            return _NEWLINE.sub(r"<br>\1", escape(s))

        engine.register_function("breaklines", breaklines)
        engine.register_function("striphtml", striphtml)


def striphtml(s: Any) -> str:
    """Removes tags and decodes entities, giving plain text."""
    return html.unescape(_TAG.sub("", to_text(s)))


__all__ = ["HtmlExtension", "striphtml"]

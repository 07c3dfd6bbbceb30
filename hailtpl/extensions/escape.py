from __future__ import annotations

import html
import json
import re
from typing import Any
from urllib.parse import quote

from ..template.expressions.evaluator import to_text

_XML_FORBIDDEN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]+")


def escapehtml(s: Any) -> str:
    return html.escape(to_text(s), quote=True)


def escapeurl(s: Any) -> str:
    """RFC 3986 percent-encoding; only unreserved characters stay literal."""
    return quote(to_text(s), safe="-_.~")


def escapejs(s: Any) -> str:
    """JSON literal safe to embed inside a ``<script>`` element."""
    out = json.dumps(s, ensure_ascii=False)
    return (
        out.replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
        .replace("]]>", "]]\\x3E")
        .replace("<!", "\\x3C!")
    )


def escapexml(s: Any) -> str:
    # C0 control characters are not allowed in XML 1.0
    return html.escape(_XML_FORBIDDEN.sub("", to_text(s)), quote=True)


ESCAPE_FUNCTIONS = {
    "escapehtml": escapehtml,
    "escapeurl": escapeurl,
    "escapejs": escapejs,
    "escapexml": escapexml,
}


class EscapeExtension:
    """Context escaping for HTML, URLs, JavaScript and XML output."""
    name = "escape"

    def register(self, engine) -> None:
        for fn_name, fn in ESCAPE_FUNCTIONS.items():
            engine.register_function(fn_name, fn)


__all__ = ["EscapeExtension", "ESCAPE_FUNCTIONS"]

"""
String helpers usable as functions (``upper(x)``) or filters (``x|upper``).
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sized
from typing import Any, Optional

from ..template.expressions.evaluator import to_text

_TRIM_CHARS = " \t\n\r\0\x0b\xa0"
# word boundary used by truncate: whitespace or ASCII punctuation
_BREAK_CLASS = r"[\s\x00-/:-@\[-`{-~]"


def upper(s: Any) -> str:
    return to_text(s).upper()


def lower(s: Any) -> str:
    return to_text(s).lower()


def capitalize(s: Any) -> str:
    return to_text(s).title()


def firstupper(s: Any) -> str:
    s = to_text(s)
    return s[:1].upper() + s[1:]


def trim(s: Any, chars: str = _TRIM_CHARS) -> str:
    return to_text(s).strip(chars)


def truncate(s: Any, max_len: int, append: str = "\u2026") -> str:
    """
    Shortens text to at most ``max_len`` characters including ``append``,
    cutting at the last word boundary when there is one.
    """
    s = to_text(s)
    max_len = int(max_len)
    if len(s) <= max_len:
        return s

    max_len -= len(append)
    if max_len < 1:
        return append

    m = re.match(r"^.{1,%d}(?=%s)" % (max_len, _BREAK_CLASS), s, re.DOTALL)
    if m:
        return m.group(0) + append
    return s[:max_len] + append


def _pad(s: str, length: int, pad: str) -> str:
    missing = max(0, int(length) - len(s))
    if not pad:
        return ""
    return pad * (missing // len(pad)) + pad[:missing % len(pad)]


def padleft(s: Any, length: int, pad: str = " ") -> str:
    s = to_text(s)
    return _pad(s, length, pad) + s


def padright(s: Any, length: int, pad: str = " ") -> str:
    s = to_text(s)
    return s + _pad(s, length, pad)


def repeat(s: Any, count: int) -> str:
    return to_text(s) * int(count)


def replace(s: Any, search: str, replacement: str = "") -> str:
    return to_text(s).replace(search, replacement)


def substr(s: Any, start: int, length: Optional[int] = None) -> str:
    s = to_text(s)
    start = int(start)
    if start < 0:
        start = max(0, len(s) + start)
    if length is None:
        return s[start:]
    length = int(length)
    if length < 0:
        return s[start:len(s) + length]
    return s[start:start + length]


def length(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, Sized):
        return len(value)
    if isinstance(value, Iterable):
        return sum(1 for _ in value)
    return len(to_text(value))


def implode(values: Any, glue: str = "") -> str:
    if values is None:
        return ""
    return to_text(glue).join(to_text(v) for v in values)


def indent(s: Any, level: int = 1, chars: str = "\t") -> str:
    """Indents every non-empty line by ``level`` copies of ``chars``."""
    s = to_text(s)
    level = int(level)
    if level < 1:
        return s
    prefix = chars * level
    return re.sub(r"(?:^|[\r\n]+)(?=[^\r\n])", lambda m: m.group(0) + prefix, s)


def strip(s: Any) -> str:
    """Collapses runs of whitespace to a single space."""
    return re.sub(r"[ \t\r\n]+", " ", to_text(s)).strip()


STRING_FUNCTIONS = {
    "upper": upper,
    "lower": lower,
    "capitalize": capitalize,
    "firstupper": firstupper,
    "trim": trim,
    "truncate": truncate,
    "padleft": padleft,
    "padright": padright,
    "repeat": repeat,
    "replace": replace,
    "substr": substr,
    "length": length,
    "implode": implode,
    "indent": indent,
    "strip": strip,
}


class StringExtension:
    """Case conversion, trimming, padding and other plain-text helpers."""
    name = "string"

    def register(self, engine) -> None:
        for fn_name, fn in STRING_FUNCTIONS.items():
            engine.register_function(fn_name, fn)


__all__ = ["StringExtension", "STRING_FUNCTIONS"]

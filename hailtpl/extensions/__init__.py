"""
Built-in capability bundles.
"""

from __future__ import annotations

from typing import List

from .escape import EscapeExtension
from .formatting import FormatExtension
from .html import HtmlExtension
from .strings import StringExtension


def default_extensions() -> List[object]:
    """Fresh instances of the built-in extensions, prerequisites first."""
    return [
        StringExtension(),
        EscapeExtension(),
        HtmlExtension(),
        FormatExtension(),
    ]


__all__ = [
    "StringExtension",
    "EscapeExtension",
    "HtmlExtension",
    "FormatExtension",
    "default_extensions",
]

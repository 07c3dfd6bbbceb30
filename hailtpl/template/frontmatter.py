"""
Frontmatter parser for template files.

A template may start with a YAML block delimited by ``---`` lines. Its
mapping supplies default variables for that template; render data
overrides them.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

# starts with ---, ends with ---
_FRONTMATTER_PATTERN = re.compile(
    r'^---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|$)',
    re.DOTALL
)


@dataclass
class TemplateFrontmatter:
    data: Dict[str, Any] = field(default_factory=dict)


def parse_frontmatter(text: str) -> Tuple[Optional[TemplateFrontmatter], str]:
    """
    Parse YAML frontmatter from template text.

    Returns:
        Tuple of (frontmatter, remaining_text); frontmatter is None when the
        text has no valid frontmatter block, in which case the text is
        returned unchanged.

    Examples:
        >>> fm, text = parse_frontmatter("---\\ntitle: Home\\n---\\n<h1>${title}</h1>")
        >>> fm.data
        {'title': 'Home'}
        >>> text
        '<h1>${title}</h1>'
    """
    if not text.startswith('---'):
        return None, text

    match = _FRONTMATTER_PATTERN.match(text)
    if not match:
        # starts with --- but never closed
        return None, text

    remaining_text = text[match.end():]

    try:
        data = _yaml.load(match.group(1))
    except YAMLError as e:
        logger.warning(f"Ignoring invalid template frontmatter: {e}")
        return None, text

    if data is None:
        return TemplateFrontmatter(), remaining_text
    if not isinstance(data, dict):
        return None, text

    return TemplateFrontmatter(data=dict(data)), remaining_text


__all__ = ["TemplateFrontmatter", "parse_frontmatter"]

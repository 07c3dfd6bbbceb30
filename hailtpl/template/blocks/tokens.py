from __future__ import annotations

import re
from typing import List

from ..types import TokenSpec


def get_block_token_specs() -> List[TokenSpec]:
    return [
        TokenSpec(name="DIRECTIVE_START", pattern=re.compile(r'\{%'), priority=80),
        TokenSpec(name="DIRECTIVE_END", pattern=re.compile(r'%\}'), priority=80),
        TokenSpec(name="COMMENT_START", pattern=re.compile(r'\{#'), priority=80),
        TokenSpec(name="COMMENT_END", pattern=re.compile(r'#\}'), priority=80),
    ]


__all__ = ["get_block_token_specs"]

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from ..template.processor import DEFAULT_CACHE_SIZE


class EngineConfig(BaseModel):
    """
    Engine settings, usually read from a YAML file.

    directory/fallback: where templates are looked up (fallback is tried second).
    strict_variables: reading an undefined variable raises instead of yielding None.
    default_extensions: attach the built-in string/escape/html/format bundles;
        off by default, so a new engine starts with no capabilities.
    template_cache_size: parsed templates kept in memory (0 disables the cache).
    data: variables shared by every template.
    """
    model_config = ConfigDict(extra="forbid")

    directory: Optional[Path] = None
    fallback: Optional[Path] = None
    suffix: StrictStr = ".tpl"
    # YAML gives real booleans; a quoted "yes" must not become True
    strict_variables: StrictBool = False
    default_extensions: StrictBool = False
    template_cache_size: int = Field(default=DEFAULT_CACHE_SIZE, ge=0)
    data: Dict[str, Any] = Field(default_factory=dict)


__all__ = ["EngineConfig"]

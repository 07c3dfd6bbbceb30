from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .errors import TemplateNotFoundError


class TemplateLoader:
    """
    Locates template files in a primary directory with an optional fallback.

    A name pointing to a directory resolves to its ``index`` template;
    a name without the suffix gets it appended.
    """

    def __init__(self, directory: Optional[Path], fallback: Optional[Path] = None, suffix: str = ".tpl"):
        self.directory = Path(directory) if directory is not None else None
        self.fallback = Path(fallback) if fallback is not None else None
        self.suffix = suffix

    def find(self, name: str) -> Path:
        """
        Resolves a template name to a file.

        Raises:
            TemplateNotFoundError: If no candidate exists in any directory
        """
        clean = name.strip("/\\").replace("\\", "/")
        if not clean or ".." in clean.split("/"):
            raise TemplateNotFoundError(name)

        searched: List[str] = []
        for base in (self.directory, self.fallback):
            if base is None:
                continue
            candidate = base / clean
            if candidate.is_dir():
                candidate = candidate / f"index{self.suffix}"
            elif candidate.suffix != self.suffix:
                candidate = candidate.with_name(candidate.name + self.suffix)

            searched.append(candidate.as_posix())
            if candidate.is_file():
                return candidate

        raise TemplateNotFoundError(name, searched)

    def load(self, name: str) -> str:
        return self.find(name).read_text(encoding="utf-8")


__all__ = ["TemplateLoader"]

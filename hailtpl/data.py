"""
Preassigned template data.

Data can be shared by every template or attached to specific template
names; ``get`` merges the global layer with the per-template layer.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Union

TemplateNames = Union[str, Iterable[str], None]


class TemplateData:

    def __init__(self):
        self._shared: Dict[str, Any] = {}
        self._per_template: Dict[str, Dict[str, Any]] = {}

    def add(self, data: Mapping[str, Any], templates: TemplateNames = None) -> None:
        """
        Adds data for all templates or for the given template name(s).

        Args:
            data: Variables to preassign; later calls update earlier keys
            templates: None for shared data, a name or an iterable of names
        """
        if templates is None:
            self._shared.update(data)
            return

        if isinstance(templates, str):
            templates = [templates]

        for name in templates:
            self._per_template.setdefault(_normalize(name), {}).update(data)

    def get(self, template: Optional[str] = None) -> Dict[str, Any]:
        result = dict(self._shared)
        if template is not None:
            result.update(self._per_template.get(_normalize(template), {}))
        return result


def _normalize(name: str) -> str:
    return name.strip("/\\")


__all__ = ["TemplateData"]

"""
Variable scope for a single render.

A fresh scope is created for every render call, so concurrent renders
never share mutable state. Block constructs (for-loops) push child scopes.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

MISSING = object()


class RenderScope:

    def __init__(
        self,
        variables: Optional[Mapping[str, Any]] = None,
        parent: Optional[RenderScope] = None,
        template_name: str = "",
    ):
        self._vars: Dict[str, Any] = dict(variables or {})
        self.parent = parent
        self.template_name = template_name or (parent.template_name if parent else "")

    def lookup(self, name: str) -> Tuple[bool, Any]:
        """
        Finds a variable in this scope or its parents.

        Returns:
            (found, value); value is MISSING when not found
        """
        scope: Optional[RenderScope] = self
        while scope is not None:
            if name in scope._vars:
                return True, scope._vars[name]
            scope = scope.parent
        return False, MISSING

    def child(self, variables: Mapping[str, Any]) -> RenderScope:
        return RenderScope(variables, parent=self)


__all__ = ["RenderScope", "MISSING"]

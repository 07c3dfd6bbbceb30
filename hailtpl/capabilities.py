"""
Capability registry: the name -> callable mapping owned by an Engine.

Re-registration under an existing name silently replaces the previous
entry (last-writer-wins). Reads and writes go through a read-write lock,
so extensions may be re-registered while templates are being rendered.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List

from .errors import ConfigurationError, UnknownCapabilityError
from .rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

Capability = Callable[..., Any]

_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def validate_capability_name(name: str) -> None:
    if not isinstance(name, str) or not _NAME_RE.match(name):
        raise ConfigurationError(f"Not a valid function name: {name!r}")


class CapabilityRegistry:
    """
    Thread-safe registry of named template capabilities.

    Functions and filters share one namespace: ``${ upper(x) }`` and
    ``${ x|upper }`` resolve the same entry.
    """

    def __init__(self):
        self._items: Dict[str, Capability] = {}
        self._lock = ReadWriteLock()

    def register(self, name: str, fn: Capability) -> None:
        """
        Adds or overwrites one capability.

        Args:
            name: Identifier usable from templates
            fn: Behavior invoked when the template references ``name``

        Raises:
            ConfigurationError: If the name is not an identifier or fn is not callable
        """
        validate_capability_name(name)
        if not callable(fn):
            raise ConfigurationError(f"Capability '{name}' must be callable, got {type(fn).__name__}")

        with self._lock.write_lock():
            if name in self._items:
                logger.debug(f"Capability '{name}' overwritten")
            self._items[name] = fn

    def drop(self, name: str) -> None:
        with self._lock.write_lock():
            self._items.pop(name, None)

    def get(self, name: str) -> Capability:
        """
        Returns the capability registered under ``name``.

        Raises:
            UnknownCapabilityError: If nothing is registered under that name
        """
        with self._lock.read_lock():
            fn = self._items.get(name)
            if fn is None:
                raise UnknownCapabilityError(name, sorted(self._items))
            return fn

    def has(self, name: str) -> bool:
        with self._lock.read_lock():
            return name in self._items

    def names(self) -> List[str]:
        with self._lock.read_lock():
            return sorted(self._items)

    def snapshot(self) -> Dict[str, Capability]:
        """Copy of the current mapping; later registrations do not affect it."""
        with self._lock.read_lock():
            return dict(self._items)

    def __len__(self) -> int:
        with self._lock.read_lock():
            return len(self._items)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)


__all__ = ["Capability", "CapabilityRegistry", "validate_capability_name"]

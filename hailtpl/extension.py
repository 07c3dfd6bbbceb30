"""
Extension contract.

An extension is any object exposing ``register(engine)``. It adds a
coherent bundle of capabilities through the engine's public mutation
operations and keeps no reference to the engine afterwards, so one
instance can be attached to several engines.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .errors import RegistrationError

if TYPE_CHECKING:
    from .engine import Engine


@runtime_checkable
class Extension(Protocol):
    """
    Capability set attached to an Engine as a unit.

    Implementations must only call Engine operations inside ``register``
    and should raise RegistrationError when a prerequisite is missing.
    """

    def register(self, engine: "Engine") -> None:
        ...


def extension_name(extension: object) -> str:
    """Human-readable name used in logs and error messages."""
    name = getattr(extension, "name", None)
    if isinstance(name, str) and name:
        return name
    return type(extension).__name__


def require_capabilities(engine: "Engine", extension: object, *names: str) -> None:
    """
    Ensures that capabilities an extension builds upon are already registered.

    Args:
        engine: Engine the extension is registering against
        extension: The registering extension (for the error message)
        *names: Capability names that must be present

    Raises:
        RegistrationError: If any of the names is not registered
    """
    missing = [n for n in names if not engine.has_function(n)]
    if missing:
        raise RegistrationError(
            extension_name(extension),
            "required capabilities are not registered",
            missing,
        )


__all__ = ["Extension", "extension_name", "require_capabilities"]

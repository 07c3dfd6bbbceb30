"""
Engine and extension builders shared by the tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

from hailtpl import Engine, EngineConfig, RegistrationError


def make_engine(
    directory: Optional[Path] = None,
    *,
    defaults: bool = False,
    strict: bool = False,
    extensions: Optional[Iterable[object]] = None,
    **config: Any,
) -> Engine:
    """
    Creates an engine for tests.

    Built-in extensions are off by default so capability sets stay exact.
    """
    cfg = EngineConfig(
        directory=directory,
        default_extensions=defaults,
        strict_variables=strict,
        **config,
    )
    return Engine(cfg, extensions=extensions)


class DictExtension:
    """Extension registering a fixed name -> callable mapping."""

    def __init__(self, functions: Dict[str, Callable[..., Any]], name: str = "dict"):
        self.functions = dict(functions)
        self.name = name
        self.calls = 0

    def register(self, engine) -> None:
        self.calls += 1
        for fn_name, fn in self.functions.items():
            engine.register_function(fn_name, fn)


class FailingExtension:
    """Registers ``partial`` capabilities, then raises RegistrationError."""
    name = "failing"

    def __init__(self, partial: Optional[Dict[str, Callable[..., Any]]] = None):
        self.partial = dict(partial or {})

    def register(self, engine) -> None:
        for fn_name, fn in self.partial.items():
            engine.register_function(fn_name, fn)
        raise RegistrationError(self.name, "prerequisite missing", ["database"])


class RecordingExtension:
    """Records the engines it was registered against."""
    name = "recording"

    def __init__(self):
        self.engines: List[object] = []

    def register(self, engine) -> None:
        self.engines.append(engine)
        engine.register_function("recorded", lambda: len(self.engines))


def case_extension() -> DictExtension:
    return DictExtension({"upper": str.upper, "lower": str.lower}, name="case")


__all__ = [
    "make_engine",
    "DictExtension",
    "FailingExtension",
    "RecordingExtension",
    "case_extension",
]

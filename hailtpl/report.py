"""
Machine-readable description of an engine, used by ``hailtpl list``.
"""

from __future__ import annotations

import inspect
from typing import List, Optional

from pydantic import BaseModel, Field

from .extension import extension_name


class CapabilityInfo(BaseModel):
    name: str
    module: Optional[str] = None
    doc: Optional[str] = None


class EngineReport(BaseModel):
    functions: List[CapabilityInfo] = Field(default_factory=list)
    extensions: List[str] = Field(default_factory=list)


def build_report(engine) -> EngineReport:
    """
    Args:
        engine: Engine to describe

    Returns:
        Registered capabilities (sorted by name) and extensions (in order)
    """
    functions = []
    for name, fn in sorted(engine.capabilities().items()):
        doc = inspect.getdoc(fn)
        functions.append(CapabilityInfo(
            name=name,
            module=getattr(fn, "__module__", None),
            doc=doc.splitlines()[0] if doc else None,
        ))

    return EngineReport(
        functions=functions,
        extensions=[extension_name(e) for e in engine.extensions],
    )


__all__ = ["CapabilityInfo", "EngineReport", "build_report"]

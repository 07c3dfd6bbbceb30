"""
hail-tpl: template engine with a pluggable extension registry.
"""

from __future__ import annotations

from .capabilities import Capability, CapabilityRegistry
from .config import EngineConfig, load_engine_config
from .engine import Engine
from .errors import (
    ConfigurationError,
    ErrorKind,
    HailUserError,
    RegistrationError,
    TemplateNotFoundError,
    UndefinedVariableError,
    UnknownCapabilityError,
)
from .extension import Extension, require_capabilities
from .template import ParserError, TemplateProcessingError

__all__ = [
    "Engine",
    "EngineConfig",
    "load_engine_config",
    "Extension",
    "require_capabilities",
    "Capability",
    "CapabilityRegistry",
    "ErrorKind",
    "HailUserError",
    "ConfigurationError",
    "RegistrationError",
    "UnknownCapabilityError",
    "UndefinedVariableError",
    "TemplateNotFoundError",
    "ParserError",
    "TemplateProcessingError",
]

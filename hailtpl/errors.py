"""
Error taxonomy for the template engine.

Every expected error inherits from HailUserError and carries an ErrorKind
tag plus structured fields, so callers can branch on ``err.kind`` instead
of on the class tree.

Programming errors and bugs should NOT inherit from HailUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations

import difflib
import enum
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional


class ErrorKind(enum.Enum):
    CONFIGURATION = "configuration"
    REGISTRATION = "registration"
    UNKNOWN_CAPABILITY = "unknown_capability"
    UNDEFINED_VARIABLE = "undefined_variable"
    TEMPLATE_NOT_FOUND = "template_not_found"
    TEMPLATE_SYNTAX = "template_syntax"
    TEMPLATE_PROCESSING = "template_processing"


class HailUserError(Exception):
    """
    Base class for all user-facing errors.

    These errors indicate problems that the user can fix:
    invalid engine setup, missing templates, unknown capabilities, etc.
    """
    kind: ClassVar[ErrorKind]


class ConfigurationError(HailUserError):
    """Engine setup is invalid."""
    kind = ErrorKind.CONFIGURATION


@dataclass
class RegistrationError(HailUserError):
    """An extension's register hook could not complete."""
    kind: ClassVar[ErrorKind] = ErrorKind.REGISTRATION

    extension: str
    message: str
    missing: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        msg = f"Extension '{self.extension}' failed to register: {self.message}"
        if self.missing:
            msg += f" (missing: {', '.join(self.missing)})"
        return msg


@dataclass
class UnknownCapabilityError(HailUserError):
    """A template or caller referenced a capability that was never registered."""
    kind: ClassVar[ErrorKind] = ErrorKind.UNKNOWN_CAPABILITY

    name: str
    available: List[str] = field(default_factory=list)

    @property
    def suggestion(self) -> Optional[str]:
        matches = difflib.get_close_matches(self.name, self.available, n=1)
        return matches[0] if matches else None

    def __str__(self) -> str:
        hint = f", did you mean '{self.suggestion}'?" if self.suggestion else "."
        return f"Template function '{self.name}' is not defined{hint}"


@dataclass
class UndefinedVariableError(HailUserError):
    """Strict mode: a template read a variable missing from the render data."""
    kind: ClassVar[ErrorKind] = ErrorKind.UNDEFINED_VARIABLE

    name: str
    template: str = ""

    def __str__(self) -> str:
        where = f" in template '{self.template}'" if self.template else ""
        return f"Undefined variable '{self.name}'{where}"


@dataclass
class TemplateNotFoundError(HailUserError):
    kind: ClassVar[ErrorKind] = ErrorKind.TEMPLATE_NOT_FOUND

    name: str
    searched: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        msg = f"Template file not found: {self.name}"
        if self.searched:
            msg += f". Searched: {', '.join(self.searched)}"
        return msg


__all__ = [
    "ErrorKind",
    "HailUserError",
    "ConfigurationError",
    "RegistrationError",
    "UnknownCapabilityError",
    "UndefinedVariableError",
    "TemplateNotFoundError",
]

"""
Template engine: capability registry plus extension attachment point.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .capabilities import Capability, CapabilityRegistry
from .config import EngineConfig, load_engine_config
from .data import TemplateData, TemplateNames
from .errors import ConfigurationError
from .extension import Extension, extension_name
from .loader import TemplateLoader
from .template import TemplateProcessor, create_template_processor

logger = logging.getLogger(__name__)


class Engine:
    """
    Owns the live set of template capabilities and renders templates.

    Extensions attach through ``register_extension``; each one adds
    capabilities via ``register_function``. Rendering resolves function
    and filter names against the same registry.
    """

    def __init__(self, config: Optional[EngineConfig] = None, *, extensions: Optional[Iterable[Extension]] = None):
        """
        Args:
            config: Engine settings; defaults to EngineConfig()
            extensions: Extra extensions attached after the built-in ones
        """
        self.config = config if config is not None else EngineConfig()

        self._capabilities = CapabilityRegistry()
        self._extensions: List[object] = []
        self._extensions_lock = threading.Lock()

        self._data = TemplateData()
        if self.config.data:
            self._data.add(self.config.data)

        self.loader = TemplateLoader(self.config.directory, self.config.fallback, self.config.suffix)
        self.processor: TemplateProcessor = create_template_processor(
            self.get_function,
            strict_variables=self.config.strict_variables,
            cache_size=self.config.template_cache_size,
        )

        if self.config.default_extensions:
            from .extensions import default_extensions
            self.load_extensions(default_extensions())
        if extensions:
            self.load_extensions(extensions)

    @classmethod
    def from_config_file(cls, path: Path, *, extensions: Optional[Iterable[Extension]] = None) -> Engine:
        return cls(load_engine_config(path), extensions=extensions)

    # ---------------- extensions ---------------- #

    def register_extension(self, extension: Extension) -> None:
        """
        Runs the extension's register hook against this engine.

        The extension is recorded only after its hook returns. Errors raised
        by the hook propagate unchanged; capabilities it added before failing
        are kept.

        Raises:
            ConfigurationError: If the value is not an extension or this
                instance is already registered on this engine
            RegistrationError: Raised by the hook itself
        """
        if not isinstance(extension, Extension) or not callable(getattr(extension, "register", None)):
            raise ConfigurationError(f"Not an extension: {type(extension).__name__} has no register(engine) method")

        name = extension_name(extension)
        with self._extensions_lock:
            if any(e is extension for e in self._extensions):
                raise ConfigurationError(f"Extension '{name}' is already registered on this engine")

        extension.register(self)

        with self._extensions_lock:
            if any(e is extension for e in self._extensions):
                raise ConfigurationError(f"Extension '{name}' is already registered on this engine")
            self._extensions.append(extension)
        logger.debug(f"Registered extension '{name}'")

    def load_extensions(self, extensions: Iterable[Extension]) -> None:
        for extension in extensions:
            self.register_extension(extension)

    @property
    def extensions(self) -> Tuple[object, ...]:
        with self._extensions_lock:
            return tuple(self._extensions)

    # ---------------- capabilities ---------------- #

    def register_function(self, name: str, fn: Capability) -> None:
        """Adds or silently overwrites one named capability."""
        self._capabilities.register(name, fn)

    def drop_function(self, name: str) -> None:
        self._capabilities.drop(name)

    def get_function(self, name: str) -> Capability:
        """
        Raises:
            UnknownCapabilityError: If the name was never registered
        """
        return self._capabilities.get(name)

    def has_function(self, name: str) -> bool:
        return self._capabilities.has(name)

    def call_function(self, name: str, *args: Any, **kwargs: Any) -> Any:
        return self.get_function(name)(*args, **kwargs)

    def function_names(self) -> List[str]:
        return self._capabilities.names()

    def capabilities(self) -> Dict[str, Capability]:
        """Snapshot of the capability mapping."""
        return self._capabilities.snapshot()

    # ---------------- data ---------------- #

    def add_data(self, data: Mapping[str, Any], templates: TemplateNames = None) -> None:
        self._data.add(data, templates)

    def get_data(self, template: Optional[str] = None) -> Dict[str, Any]:
        return self._data.get(template)

    # ---------------- rendering ---------------- #

    def render(self, name: str, context: Optional[Mapping[str, Any]] = None) -> str:
        """
        Locates the template file ``name`` and renders it.

        Args:
            name: Template name relative to the configured directories
            context: Render variables; they override preassigned data

        Raises:
            TemplateNotFoundError: If the template cannot be located
            ConfigurationError: If no template directory is configured
        """
        if self.loader.directory is None and self.loader.fallback is None:
            raise ConfigurationError("No template directory configured")

        text = self.loader.load(name)
        return self.render_string(text, context, name=name)

    def render_string(
        self,
        text: str,
        context: Optional[Mapping[str, Any]] = None,
        name: str = "<string>",
    ) -> str:
        variables = self.get_data(name)
        if context:
            variables.update(context)
        return self.processor.process_template_text(text, template_name=name, data=variables)


__all__ = ["Engine"]

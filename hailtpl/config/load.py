from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import EngineConfig
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


def load_engine_config(path: Path) -> EngineConfig:
    """
    Load engine configuration from a YAML file.

    Relative template directories are resolved against the folder
    containing the config file.

    Raises:
        ConfigurationError: If the file is missing, malformed or has invalid fields
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigurationError(f"Failed to parse {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Invalid config {path}: expected mapping, got {type(raw).__name__}")

    try:
        cfg = EngineConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config {path}: {describe_validation_error(e)}") from e

    base = path.parent
    cfg = cfg.model_copy(update={
        "directory": _resolve(base, cfg.directory),
        "fallback": _resolve(base, cfg.fallback),
    })
    logger.debug(f"Loaded engine config from {path}: directory={cfg.directory}, fallback={cfg.fallback}")
    return cfg


def describe_validation_error(err: ValidationError) -> str:
    """One line per problem, unknown keys grouped first."""
    extras = []
    problems = []
    for item in err.errors():
        where = ".".join(str(part) for part in item["loc"])
        if item["type"] == "extra_forbidden":
            extras.append(where)
        else:
            problems.append(f"{where}: {item['msg']}")
    if extras:
        problems.insert(0, f"unexpected keys: {sorted(extras)!r}")
    return "; ".join(problems)


def _resolve(base: Path, p: Optional[Path]) -> Optional[Path]:
    if p is None:
        return None
    return p if p.is_absolute() else (base / p).resolve()


__all__ = ["load_engine_config", "describe_validation_error"]

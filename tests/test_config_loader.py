"""
YAML engine configuration:

1. A valid file becomes an EngineConfig with paths resolved against its folder.
2. Missing files, malformed YAML and invalid fields raise ConfigurationError.
"""

from pathlib import Path

import pytest

from hailtpl.config import EngineConfig, load_engine_config
from hailtpl.errors import ConfigurationError
from tests.infrastructure import write, write_yaml


def test_load_valid_yaml(tmp_path: Path) -> None:
    cfg_path = write_yaml(tmp_path / "conf" / "hail.yaml", """
        directory: ../templates
        fallback: /abs/fallback
        suffix: .html
        strict_variables: true
        default_extensions: false
        data:
          site: Hail
          tags: [a, b]
    """)

    cfg = load_engine_config(cfg_path)

    assert isinstance(cfg, EngineConfig)
    assert cfg.directory == (tmp_path / "templates").resolve()
    assert cfg.fallback == Path("/abs/fallback")
    assert cfg.suffix == ".html"
    assert cfg.strict_variables is True
    assert cfg.default_extensions is False
    assert cfg.data == {"site": "Hail", "tags": ["a", "b"]}


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    cfg = load_engine_config(write(tmp_path / "hail.yaml", ""))
    assert cfg == EngineConfig()


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_engine_config(tmp_path / "nope.yaml")


def test_malformed_yaml(tmp_path: Path) -> None:
    path = write(tmp_path / "hail.yaml", "directory: [unclosed\n")
    with pytest.raises(ConfigurationError, match="Failed to parse"):
        load_engine_config(path)


def test_unknown_key(tmp_path: Path) -> None:
    path = write_yaml(tmp_path / "hail.yaml", "direktory: templates")
    with pytest.raises(ConfigurationError) as exc:
        load_engine_config(path)
    assert "direktory" in str(exc.value)


def test_strict_bool(tmp_path: Path) -> None:
    """A quoted "yes" is a string and must not be taken as True."""
    path = write_yaml(tmp_path / "hail.yaml", 'strict_variables: "yes"')
    with pytest.raises(ConfigurationError, match="strict_variables"):
        load_engine_config(path)


def test_top_level_must_be_mapping(tmp_path: Path) -> None:
    path = write_yaml(tmp_path / "hail.yaml", "- a\n- b")
    with pytest.raises(ConfigurationError, match="expected mapping, got list"):
        load_engine_config(path)


def test_several_problems_reported_together(tmp_path: Path) -> None:
    path = write_yaml(tmp_path / "hail.yaml", """
        suffix: 5
        extra_one: 1
    """)
    with pytest.raises(ConfigurationError) as exc:
        load_engine_config(path)

    message = str(exc.value)
    assert "unexpected keys: ['extra_one']" in message
    assert "suffix:" in message


def test_constructor_validates() -> None:
    cfg = EngineConfig(directory="templates", data={"a": 1})
    assert cfg.directory == Path("templates")
    assert cfg.data == {"a": 1}

from pathlib import Path

import pytest

from tests.infrastructure import make_engine, write_template


@pytest.fixture
def engine():
    """Engine without built-in extensions."""
    return make_engine()


@pytest.fixture
def full_engine():
    """Engine with the built-in string/escape/html/format extensions."""
    return make_engine(defaults=True)


@pytest.fixture
def tpl_dir(tmp_path: Path) -> Path:
    """Template directory with a page, a directory index and a partial-like file."""
    root = tmp_path / "templates"
    write_template(root, "hello", "Hello, ${name}!")
    write_template(root, "blog/index", "Blog: ${title}")
    write_template(root, "layout/page", "---\ntitle: Default title\n---\n<h1>${title}</h1>")
    return root


@pytest.fixture(autouse=True)
def _no_debug_env(monkeypatch):
    monkeypatch.delenv("HAILTPL_DEBUG", raising=False)

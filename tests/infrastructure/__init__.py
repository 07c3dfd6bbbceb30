"""
Shared test infrastructure.

Modules:
- file_utils: creating template, config and data files
- engine_builders: engines and sample extensions
- cli_utils: running the CLI in a subprocess
"""

from .file_utils import write, write_template, write_yaml
from .engine_builders import (
    make_engine, DictExtension, FailingExtension, RecordingExtension, case_extension,
)
from .cli_utils import run_cli, jload

__all__ = [
    # File utilities
    "write", "write_template", "write_yaml",

    # Engines and extensions
    "make_engine", "DictExtension", "FailingExtension", "RecordingExtension", "case_extension",

    # CLI utilities
    "run_cli", "jload",
]

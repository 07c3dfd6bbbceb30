from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .config import EngineConfig, load_engine_config
from .engine import Engine
from .errors import HailUserError
from .report import build_report
from .version import tool_version

_LOG = logging.getLogger("hailtpl")


def _setup_logging() -> None:
    level = logging.DEBUG if os.environ.get("HAILTPL_DEBUG") else logging.WARNING
    _LOG.setLevel(level)
    if not _LOG.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        _LOG.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hailtpl",
        description="Template engine with pluggable extensions",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_config(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--config",
            metavar="FILE",
            help="engine configuration (YAML)",
        )

    sp_render = sub.add_parser("render", help="Render a template and print the text")
    sp_render.add_argument("name", help="template name relative to the template directory")
    add_config(sp_render)
    sp_render.add_argument(
        "--dir",
        metavar="DIR",
        help="template directory (overrides the config file)",
    )
    sp_render.add_argument(
        "--var",
        action="append",
        metavar="KEY=VALUE",
        help="render variable (can be given several times)",
    )
    sp_render.add_argument(
        "--data",
        metavar="FILE",
        help="YAML file with render variables",
    )
    sp_render.add_argument(
        "--strict",
        action="store_true",
        help="fail on undefined variables",
    )

    sp_list = sub.add_parser("list", help="Registered entities (JSON)")
    sp_list.add_argument("what", choices=["functions"], help="what to list")
    add_config(sp_list)

    return p


def _load_config(ns: argparse.Namespace) -> EngineConfig:
    if getattr(ns, "config", None):
        cfg = load_engine_config(Path(ns.config))
    else:
        # no config file: the built-in bundles are on
        cfg = EngineConfig(default_extensions=True)
    if getattr(ns, "dir", None):
        cfg = cfg.model_copy(update={"directory": Path(ns.dir)})
    if getattr(ns, "strict", False):
        cfg = cfg.model_copy(update={"strict_variables": True})
    return cfg


def _parse_vars(items: Optional[List[str]]) -> Dict[str, str]:
    """Parses 'key=value' pairs into a dict."""
    result: Dict[str, str] = {}
    for item in items or []:
        if "=" not in item:
            raise ValueError(f"Invalid variable '{item}'. Expected 'key=value'")
        key, value = item.split("=", 1)
        result[key.strip()] = value
    return result


def _load_data_file(path_arg: Optional[str]) -> Dict[str, Any]:
    if not path_arg:
        return {}

    path = Path(path_arg)
    if not path.is_file():
        raise ValueError(f"Data file not found: {path}")
    try:
        data = YAML(typ="safe").load(path.read_text(encoding="utf-8"))
    except YAMLError as e:
        raise ValueError(f"Failed to parse data file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Data file {path} must contain a mapping")
    return data


def main(argv: list[str] | None = None) -> int:
    _setup_logging()
    ns = _build_parser().parse_args(argv)

    try:
        if ns.cmd == "render":
            context = _load_data_file(ns.data)
            context.update(_parse_vars(ns.var))
            engine = Engine(_load_config(ns))
            sys.stdout.write(engine.render(ns.name, context))
            return 0

        if ns.cmd == "list":
            engine = Engine(_load_config(ns))
            if ns.what == "functions":
                data = build_report(engine).model_dump(mode="json")
            else:
                raise ValueError(f"Unknown list target: {ns.what}")
            sys.stdout.write(json.dumps(data, ensure_ascii=False))
            return 0

    except HailUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())

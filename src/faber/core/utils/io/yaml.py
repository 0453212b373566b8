"""YAML helpers shared by loaders, writers and the binding output."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

_STR_TAG = "tag:yaml.org,2002:str"
_YAML_SUFFIXES = (".yml", ".yaml")


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    # Prompts and descriptions stay readable as literal blocks.
    style = "|" if "\n" in value else None
    return dumper.represent_scalar(_STR_TAG, value, style=style)


yaml.add_representer(str, _represent_str, Dumper=yaml.SafeDumper)


def read_yaml(path: Path, default: Any = None) -> Any:
    """Load a YAML file leniently.

    A missing, unreadable or unparsable file yields ``default``, and so does an
    empty document. Callers that need strict parsing use ``yaml.safe_load``
    directly and map the error themselves.
    """
    path = Path(path)
    if not path.is_file():
        return default
    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        return default
    return default if loaded is None else loaded


def dump_yaml_string(data: Any, sort_keys: bool = True) -> str:
    """Serialize ``data`` as block-style, unicode-preserving YAML."""
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=sort_keys, allow_unicode=True)


def resolve_yaml_path(path: Path) -> Path:
    """Return ``path``, or its ``.yml``/``.yaml`` twin when only the twin exists."""
    path = Path(path)
    if path.exists() or path.suffix not in _YAML_SUFFIXES:
        return path
    twin = path.with_suffix(".yaml" if path.suffix == ".yml" else ".yml")
    return twin if twin.exists() else path


__all__ = [
    "read_yaml",
    "dump_yaml_string",
    "resolve_yaml_path",
]

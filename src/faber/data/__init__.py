"""Bundled Faber resources.

Schemas, config defaults, the binding registry, binding configs and the
templates they reference all ship inside this package and are located through
``importlib.resources``.
"""
from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """Absolute path of a bundled file, or of the ``subpackage`` directory.

    Example:
        >>> get_data_path("bindings", "registry.yaml").name
        'registry.yaml'
    """
    base = Path(str(resources.files("faber.data") / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=64)
def read_yaml(subpackage: str, filename: str) -> Dict[str, Any]:
    """Parsed bundled YAML. Cached, so callers must not mutate the result."""
    return yaml.safe_load(get_data_path(subpackage, filename).read_text(encoding="utf-8"))


def read_text(subpackage: str, filename: str) -> str:
    return get_data_path(subpackage, filename).read_text(encoding="utf-8")


__all__ = [
    "get_data_path",
    "read_yaml",
    "read_text",
]

"""File I/O utilities."""
from __future__ import annotations

from .core import (
    PathLike,
    ensure_parent_dir,
    ensure_directory,
    read_text,
    write_text,
    list_files,
    list_directories,
)
from .yaml import (
    read_yaml,
    dump_yaml_string,
    resolve_yaml_path,
)

__all__ = [
    "PathLike",
    "ensure_parent_dir",
    "ensure_directory",
    "read_text",
    "write_text",
    "list_files",
    "list_directories",
    "read_yaml",
    "dump_yaml_string",
    "resolve_yaml_path",
]

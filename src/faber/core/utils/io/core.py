"""Filesystem helpers for the loaders and the artifact writer.

All text is UTF-8. Listings are sorted by name so that discovery order does
not depend on the filesystem.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Union

PathLike = Union[str, Path]


def ensure_parent_dir(path: PathLike) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def ensure_directory(path: PathLike) -> Path:
    """Create ``path`` (and parents) unless it already exists.

    Raises:
        NotADirectoryError: ``path`` exists but is a file.
    """
    path = Path(path)
    if path.exists() and not path.is_dir():
        raise NotADirectoryError(f"Path exists but is not a directory: {path}")
    path.mkdir(parents=True, exist_ok=True)
    return path


def read_text(path: PathLike) -> str:
    return Path(path).read_text(encoding="utf-8")


def write_text(path: PathLike, content: str) -> Path:
    """Write ``content`` verbatim, creating parent directories first."""
    target = Path(path)
    ensure_parent_dir(target)
    target.write_text(content, encoding="utf-8")
    return target


def list_files(dir_path: PathLike, suffix: str = "") -> List[Path]:
    """Files directly under ``dir_path`` whose name ends with ``suffix``.

    A missing directory yields an empty list.
    """
    root = Path(dir_path)
    if not root.is_dir():
        return []
    return sorted((p for p in root.iterdir() if p.is_file() and p.name.endswith(suffix)), key=lambda p: p.name)


def list_directories(dir_path: PathLike) -> List[Path]:
    """Immediate subdirectories of ``dir_path``; empty when it is missing."""
    root = Path(dir_path)
    if not root.is_dir():
        return []
    return sorted((p for p in root.iterdir() if p.is_dir()), key=lambda p: p.name)


__all__ = [
    "PathLike",
    "ensure_parent_dir",
    "ensure_directory",
    "read_text",
    "write_text",
    "list_files",
    "list_directories",
]

"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path

from faber.core.project import FaberProject


def get_repo_root(args: argparse.Namespace) -> Path:
    """Project root from ``--repo-root``, else the current directory."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    return Path.cwd().resolve()


def get_project(args: argparse.Namespace) -> FaberProject:
    return FaberProject(get_repo_root(args))


__all__ = ["get_repo_root", "get_project"]

"""Test helper modules for the Faber test suite.

- io_utils: YAML/text writers for building fixture trees
- project: builders for concept directories and overlay layers
"""
from __future__ import annotations

from helpers.io_utils import write_text, write_yaml
from helpers.project import (
    FIXED_TIME,
    fixed_clock,
    role_metadata,
    write_overlay_config,
    write_overlay_context,
    write_role,
)

__all__ = [
    "FIXED_TIME",
    "fixed_clock",
    "role_metadata",
    "write_overlay_config",
    "write_overlay_context",
    "write_role",
    "write_text",
    "write_yaml",
]

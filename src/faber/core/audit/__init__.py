"""Logging setup for the Faber CLI."""
from __future__ import annotations

from .stdlib_logging import configure_stdlib_logging, reset_stdlib_logging_for_tests

__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests"]

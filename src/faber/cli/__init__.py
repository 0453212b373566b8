"""
Faber CLI package.

Commands are auto-discovered from ``faber.cli.commands``; each module exposes
``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter, format_json
from ._args import (
    CONCEPT_TYPE_CHOICES,
    add_concept_args,
    add_dry_run_flag,
    add_json_flag,
    add_repo_root_flag,
    add_standard_flags,
    add_verbose_flag,
)
from ._utils import get_project, get_repo_root

__all__ = [
    # Output formatting
    "OutputFormatter",
    "format_json",
    # Argument helpers
    "CONCEPT_TYPE_CHOICES",
    "add_concept_args",
    "add_dry_run_flag",
    "add_json_flag",
    "add_repo_root_flag",
    "add_standard_flags",
    "add_verbose_flag",
    # Utilities
    "get_project",
    "get_repo_root",
]

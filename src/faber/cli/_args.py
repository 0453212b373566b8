"""Common CLI argument registration helpers."""
from __future__ import annotations

import argparse

from faber.core.concepts import ConceptType

CONCEPT_TYPE_CHOICES = [ct.value for ct in ConceptType] + [ct.directory for ct in ConceptType]


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--json", action="store_true", help="Output as JSON")


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--repo-root", type=str, help="Override project root path")


def add_dry_run_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Show what would be done without making changes",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")


def add_concept_args(parser: argparse.ArgumentParser, *, optional_type: bool = False) -> None:
    """Add ``<type> <name>`` positionals (``type`` alone when ``optional_type``)."""
    if optional_type:
        parser.add_argument(
            "type",
            nargs="?",
            choices=CONCEPT_TYPE_CHOICES,
            help="Concept type (role, tool, eval, team, workflow)",
        )
        return
    parser.add_argument("type", choices=CONCEPT_TYPE_CHOICES, help="Concept type")
    parser.add_argument("name", help="Concept name")


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Adds --json and --repo-root."""
    add_json_flag(parser)
    add_repo_root_flag(parser)


__all__ = [
    "CONCEPT_TYPE_CHOICES",
    "add_json_flag",
    "add_repo_root_flag",
    "add_dry_run_flag",
    "add_verbose_flag",
    "add_concept_args",
    "add_standard_flags",
]

"""Faber list command.

SUMMARY: List concepts found in the project.
"""
from __future__ import annotations

import argparse
import sys

from faber.cli import OutputFormatter, add_concept_args, add_standard_flags, add_verbose_flag, get_project

SUMMARY = "List concepts in the project"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_concept_args(parser, optional_type=True)
    add_verbose_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    project = get_project(args)

    infos = project.list_concepts(args.type)

    if formatter.json_mode:
        formatter.json_output({"concepts": [i.to_dict() for i in infos], "count": len(infos)})
        return 0

    if not infos:
        formatter.text("No concepts found.")
        return 0

    current = None
    for info in infos:
        if info.type is not current:
            current = info.type
            formatter.text(f"{current.directory}:")
        line = f"  {info.name}"
        if args.verbose and info.description:
            line += f" - {info.description}"
        formatter.text(line)
        if args.verbose:
            formatter.text_kv("path", info.path, prefix="    ")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=SUMMARY)
    register_args(parser)
    sys.exit(main(parser.parse_args()))

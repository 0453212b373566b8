"""Faber init command.

SUMMARY: Initialize a Faber project in the current directory.
"""
from __future__ import annotations

import argparse
import sys

from faber.cli import OutputFormatter, add_standard_flags, get_project

SUMMARY = "Initialize a Faber project (concept dirs, overlays, config)"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--no-example",
        action="store_true",
        help="Do not copy the example role into roles/",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    project = get_project(args)

    created = project.init_project(with_example=not args.no_example)
    rel = [str(p.relative_to(project.project_root)) for p in created]

    if formatter.json_mode:
        formatter.json_output({"status": "initialized", "root": str(project.project_root), "created": rel})
        return 0

    formatter.text(f"Initialized Faber project at {project.project_root}")
    if rel:
        for path in rel:
            formatter.text(f"  + {path}")
    else:
        formatter.text("  (nothing to do, project already initialized)")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=SUMMARY)
    register_args(parser)
    sys.exit(main(parser.parse_args()))

"""Faber create command.

SUMMARY: Scaffold a new concept directory from the bundled templates.
"""
from __future__ import annotations

import argparse
import sys

from faber.cli import OutputFormatter, add_concept_args, add_standard_flags, get_project
from faber.core.errors import FaberError

SUMMARY = "Create a new role, tool, eval, team or workflow"

TOOL_TYPES = ("mcp-server", "utility", "api-client")


def register_args(parser: argparse.ArgumentParser) -> None:
    add_concept_args(parser)
    parser.add_argument("--org", default="myorg", help="Organization name (default: myorg)")
    parser.add_argument("--system", default="mysystem", help="System name (default: mysystem)")
    parser.add_argument("--description", help="One-line description")
    parser.add_argument("--platforms", help="Comma-separated platforms (roles, evals)")
    parser.add_argument("--tool-type", choices=TOOL_TYPES, help="Tool type (tools only)")
    parser.add_argument("--members", help="Comma-separated member roles (teams only)")
    parser.add_argument("--target", help="Evaluation target as type:name (evals only)")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    project = get_project(args)

    try:
        path = project.create_concept(
            args.type,
            args.name,
            org=args.org,
            system=args.system,
            description=args.description,
            platforms=args.platforms,
            tool_type=args.tool_type,
            members=args.members,
            target=args.target,
        )
    except FaberError as e:
        formatter.error(e, error_code="create_error")
        return 1

    formatter.success(
        {"type": args.type, "name": args.name, "path": str(path)},
        f"Created {args.type} '{args.name}' at {path}",
        status="created",
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=SUMMARY)
    register_args(parser)
    sys.exit(main(parser.parse_args()))

"""
Auto-discovery CLI dispatcher for Faber.

Every module under ``faber.cli.commands`` becomes a top-level subcommand.
Adding a command = adding a .py file exposing ``SUMMARY``, ``register_args``
and ``main``.
"""
from __future__ import annotations

import argparse
import importlib
import logging
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from faber.core.audit import configure_stdlib_logging
from faber.core.errors import FaberError

from ._output import OutputFormatter

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@lru_cache(maxsize=1)
def discover_root_commands() -> Dict[str, Dict[str, Any]]:
    """Discover top-level commands under cli/commands."""
    commands_dir = Path(__file__).parent / "commands"
    commands: Dict[str, Dict[str, Any]] = {}

    if not commands_dir.exists():
        return commands

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue

        cmd_name = item.stem
        try:
            module = importlib.import_module(f"faber.cli.commands.{cmd_name}")
        except ImportError as e:
            print(f"Warning: Could not import command {cmd_name}: {e}", file=sys.stderr)
            continue
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", cmd_name),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }

    return commands


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with auto-discovered commands."""
    parser = argparse.ArgumentParser(
        prog="faber",
        description="Faber - write-once, deploy-everywhere AI agent definitions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        type=str.upper,
        help="Logging verbosity (logs go to stderr unless --log-file is set)",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to this file instead of stderr")

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_name, cmd_info in sorted(discover_root_commands().items()):
        cmd_parser = subparsers.add_parser(cmd_name, help=cmd_info["summary"])
        if cmd_info["register_args"]:
            cmd_info["register_args"](cmd_parser)
        if cmd_info["main"]:
            cmd_parser.set_defaults(_func=cmd_info["main"])

    return parser


def _get_version() -> str:
    from faber import __version__

    return __version__


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the Faber CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command or not getattr(args, "_func", None):
        parser.print_help()
        return 0

    configure_stdlib_logging(
        level=args.log_level,
        log_path=Path(args.log_file) if args.log_file else None,
    )
    logger.debug("Running command %s", args.command)

    try:
        return int(args._func(args) or 0)
    except FaberError as e:
        # Commands handle their own expected failures; this is the backstop.
        OutputFormatter(json_mode=getattr(args, "json", False)).error(e, error_code=type(e).__name__)
        return 1
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())

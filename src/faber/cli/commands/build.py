"""Faber build command.

SUMMARY: Build a concept into a framework-specific deployment.
"""
from __future__ import annotations

import argparse
import sys

from faber.cli import OutputFormatter, add_concept_args, add_dry_run_flag, add_standard_flags, get_project
from faber.core.errors import FaberError
from faber.core.overlays import MergeStrategy, count_contexts
from faber.core.project import DEFAULT_OUTPUT_DIR

SUMMARY = "Build a concept for a framework (e.g. claude-code)"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("framework", help="Target framework binding (e.g. claude-code)")
    add_concept_args(parser)
    parser.add_argument(
        "--output",
        "-o",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory, relative to the project root (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument("--no-overlays", action="store_true", help="Ignore customization overlays")
    parser.add_argument("--platform", help="Override the detected platform")
    parser.add_argument(
        "--conflict-strategy",
        choices=[s.value for s in MergeStrategy],
        help="Fold overlay contexts into same-named base contexts",
    )
    add_dry_run_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    project = get_project(args)

    try:
        result = project.build(
            args.framework,
            args.type,
            args.name,
            platform=args.platform,
            use_overlays=not args.no_overlays,
            conflict_strategy=args.conflict_strategy,
        )
        written = [] if args.dry_run else project.write(result.artifact, args.output)
    except FaberError as e:
        formatter.error(e, error_code="build_error")
        return 1

    artifact = result.artifact
    if formatter.json_mode:
        formatter.json_output(
            {
                "status": "dry_run" if args.dry_run else "built",
                "binding": result.binding,
                "platform": result.platform,
                "overlay_contexts": count_contexts(result.overlays),
                "written": [str(p) for p in written],
                **artifact.to_dict(),
            }
        )
        return 0

    formatter.text(f"Building {result.concept.reference} for {result.binding}")
    formatter.text_kv("platform", result.platform or "(none)")
    formatter.text_kv("overlay contexts", count_contexts(result.overlays))
    if args.dry_run:
        formatter.text(f"Dry run: {len(artifact.files)} file(s) would be written:")
        for path in artifact.paths:
            formatter.text(f"  {path}")
        return 0

    for path in written:
        formatter.text(f"  + {path}")
    formatter.text(f"✓ Wrote {len(written)} file(s)")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=SUMMARY)
    register_args(parser)
    sys.exit(main(parser.parse_args()))

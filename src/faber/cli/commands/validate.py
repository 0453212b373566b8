"""Faber validate command.

SUMMARY: Validate a concept against its schema and structural rules.

Findings print as ``[severity] path: message``. The exit code is 1 when any
finding is an error, or when there is any finding at all with ``--strict``.
"""
from __future__ import annotations

import argparse
import sys

from faber.cli import OutputFormatter, add_concept_args, add_standard_flags, get_project
from faber.core.bindings import create_binding
from faber.core.concepts import create_concept_loader
from faber.core.errors import FaberError
from faber.core.validation import Severity, ValidationIssue, ValidationResult

SUMMARY = "Validate a concept"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_concept_args(parser)
    parser.add_argument("--strict", action="store_true", help="Treat warnings as failures")
    parser.add_argument(
        "--binding",
        help="Also check that the concept can be deployed with this framework binding",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    project = get_project(args)

    try:
        loader = create_concept_loader(args.type)
        concept = loader.load(project.concept_path(loader.concept_type, args.name))
        result = loader.validate(concept)
        if args.binding:
            transformer = create_binding(args.binding)
            if not transformer.supports(concept):
                issue = ValidationIssue(
                    path="binding",
                    message=(
                        f"Binding '{transformer.name}' does not support "
                        f"{concept.concept_type.value} concepts"
                    ),
                    severity=Severity.ERROR,
                )
                result = ValidationResult.from_issues([*result.errors, issue])
    except FaberError as e:
        formatter.error(e, error_code="validation_error")
        return 1

    failed = result.failed(strict=args.strict)

    if formatter.json_mode:
        formatter.json_output(
            {
                "type": concept.concept_type.value,
                "name": concept.name,
                "strict": bool(args.strict),
                "ok": not failed,
                **result.to_dict(),
            }
        )
        return 1 if failed else 0

    label = f"{concept.concept_type.value} '{concept.name}'"
    if result.valid:
        formatter.text(f"✓ {label} is valid")
        return 0

    for issue in result.errors:
        formatter.text(f"[{issue.severity.value}] {issue.path}: {issue.message}")
    errors = len(result.errors) - len(result.warnings)
    formatter.text(f"{label}: {errors} error(s), {len(result.warnings)} warning(s)")
    return 1 if failed else 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=SUMMARY)
    register_args(parser)
    sys.exit(main(parser.parse_args()))

"""Shared schema validation utilities.

Faber validates concept metadata and project configuration using JSON Schema.
Schemas are stored as YAML files under ``faber.data/schemas/`` (human-readable
and easy to diff) and loaded in a single, consistent way across the codebase.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from faber.data import get_data_path, read_yaml


class SchemaValidationError(ValueError):
    """Raised when schema validation fails."""

    pass


@dataclass(frozen=True)
class SchemaIssue:
    """One schema violation: dotted instance path plus message."""

    path: str
    message: str


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema by relative name.

    Automatically appends ``.schema.yaml`` if no extension is present.

    Args:
        schema_name: Relative schema path under ``schemas/``
            (e.g., "concepts/role" or "config.schema.yaml").

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        ValueError: If schema is not a YAML mapping.
    """
    if not schema_name.endswith((".yaml", ".yml")):
        schema_name = f"{schema_name}.schema.yaml"

    path = get_data_path("schemas", schema_name)
    if not path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_name} (searched {path.parent})")

    schema = read_yaml("schemas", schema_name)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


@lru_cache(maxsize=32)
def _validator(schema_name: str) -> Draft202012Validator:
    schema = load_schema(schema_name)
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def iter_schema_issues(payload: Any, schema_name: str) -> List[SchemaIssue]:
    """Return all violations of ``payload`` against ``schema_name``.

    Issues are sorted by path so repeated validation is deterministic.
    """
    validator = _validator(schema_name)
    issues = [
        SchemaIssue(
            path=".".join(str(p) for p in error.absolute_path),
            message=error.message,
        )
        for error in validator.iter_errors(payload)
    ]
    return sorted(issues, key=lambda i: (i.path, i.message))


def validate_payload(payload: Any, schema_name: str) -> None:
    """Validate a payload against a bundled schema.

    Raises:
        SchemaValidationError: If validation fails (all issues in the message).
        FileNotFoundError: If schema doesn't exist.
    """
    issues = iter_schema_issues(payload, schema_name)
    if issues:
        details = "; ".join(f"{i.path or '<root>'}: {i.message}" for i in issues)
        raise SchemaValidationError(f"Schema validation failed for {schema_name}: {details}")


__all__ = [
    "SchemaValidationError",
    "SchemaIssue",
    "load_schema",
    "iter_schema_issues",
    "validate_payload",
]

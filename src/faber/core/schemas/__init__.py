"""JSON Schema validation for concept metadata and configuration."""
from __future__ import annotations

from .validation import (
    SchemaValidationError,
    SchemaIssue,
    load_schema,
    iter_schema_issues,
    validate_payload,
)

__all__ = [
    "SchemaValidationError",
    "SchemaIssue",
    "load_schema",
    "iter_schema_issues",
    "validate_payload",
]

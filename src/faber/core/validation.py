"""Validation findings.

Concept validation never raises. Every rule appends a ``ValidationIssue`` and
the caller decides what to do with warnings (e.g. ``--strict``).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """A single finding: where, what, and how bad."""

    path: str
    message: str
    severity: Severity = Severity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "message": self.message, "severity": self.severity.value}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one concept.

    ``valid`` is True only when no findings were recorded at all; use
    ``has_errors`` to distinguish error-severity findings from warnings.
    """

    errors: Tuple[ValidationIssue, ...] = field(default_factory=tuple)

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_errors(self) -> bool:
        return any(i.severity is Severity.ERROR for i in self.errors)

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.errors if i.severity is Severity.WARNING]

    def failed(self, *, strict: bool = False) -> bool:
        """True when the result should fail a run (warnings count in strict mode)."""
        return (not self.valid) if strict else self.has_errors

    @classmethod
    def from_issues(cls, issues: List[ValidationIssue]) -> "ValidationResult":
        return cls(errors=tuple(issues))

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "errors": [i.to_dict() for i in self.errors]}


__all__ = ["Severity", "ValidationIssue", "ValidationResult"]

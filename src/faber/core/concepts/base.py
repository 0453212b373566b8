"""Base concept loader and validator.

Every concept kind lives in its own directory holding a metadata file
(``agent.yml``, ``tool.yml``, ...). Loading reads that metadata, checks the
declared type and hands off to the kind-specific ``_build``. Validation runs
the common and kind-specific JSON schemas plus ``validate_specific`` and
collects every finding in a ``ValidationResult``.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, List, Tuple, TypeVar

import yaml

from faber.core.errors import (
    MetadataMissingError,
    MetadataParseError,
    NotFoundError,
    TypeMismatchError,
)
from faber.core.schemas import iter_schema_issues
from faber.core.utils.io import read_text
from faber.core.validation import Severity, ValidationIssue, ValidationResult

from .models import METADATA_FILENAMES, BaseConcept, ConceptType, normalize_dates

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=BaseConcept)


def metadata_candidates(concept_dir: Path, own_filename: str) -> List[Path]:
    """Candidate metadata files, the loader's own filename first.

    Each ``.yml`` name is followed by its ``.yaml`` sibling.
    """
    names = [own_filename] + [n for n in METADATA_FILENAMES if n != own_filename]
    paths: List[Path] = []
    for name in names:
        paths.append(concept_dir / name)
        paths.append(concept_dir / (Path(name).stem + ".yaml"))
    return paths


class BaseConceptLoader(ABC, Generic[C]):
    """Load and validate one concept kind."""

    concept_type: ConceptType

    def load(self, concept_path: Path) -> C:
        """Load a concept directory.

        Raises:
            NotFoundError: ``concept_path`` is missing or not a directory.
            MetadataMissingError: No metadata file exists.
            MetadataParseError: Metadata is malformed or not a mapping.
            TypeMismatchError: Metadata declares a different concept type.
        """
        concept_dir = Path(concept_path)
        if not concept_dir.is_dir():
            raise NotFoundError(f"Concept path does not exist or is not a directory: {concept_dir}")

        metadata_file, metadata = self._load_metadata(concept_dir)

        declared = metadata.get("type")
        if declared != self.concept_type.value:
            raise TypeMismatchError(
                f"Expected {self.concept_type.value} but found {declared} in {metadata_file}"
            )

        concept = self._build(concept_dir, metadata)
        logger.debug("Loaded %s '%s' from %s", self.concept_type.value, concept.name, concept_dir)
        return concept

    def validate(self, concept: C) -> ValidationResult:
        """Collect every metadata and kind-specific finding. Never raises."""
        issues: List[ValidationIssue] = []
        issues.extend(self._validate_metadata(concept.metadata.raw))
        issues.extend(self.validate_specific(concept))
        return ValidationResult.from_issues(issues)

    def _load_metadata(self, concept_dir: Path) -> Tuple[Path, Dict[str, Any]]:
        for candidate in metadata_candidates(concept_dir, self.concept_type.metadata_filename):
            if candidate.is_file():
                break
        else:
            raise MetadataMissingError(f"No metadata file found in {concept_dir}")

        try:
            data = yaml.safe_load(read_text(candidate))
        except yaml.YAMLError as exc:
            raise MetadataParseError(f"Failed to parse {candidate}: {exc}") from exc
        if not isinstance(data, dict):
            raise MetadataParseError(f"Metadata in {candidate} must be a mapping")
        return candidate, normalize_dates(data)

    def _validate_metadata(self, raw: Dict[str, Any]) -> List[ValidationIssue]:
        seen = set()
        issues: List[ValidationIssue] = []
        for schema in ("concepts/base", f"concepts/{self.concept_type.value}"):
            for issue in iter_schema_issues(raw, schema):
                path = issue.path or self.concept_type.metadata_filename
                if (path, issue.message) in seen:
                    continue
                seen.add((path, issue.message))
                issues.append(ValidationIssue(path=path, message=issue.message))
        return issues

    @staticmethod
    def error(path: str, message: str) -> ValidationIssue:
        return ValidationIssue(path=path, message=message, severity=Severity.ERROR)

    @staticmethod
    def warning(path: str, message: str) -> ValidationIssue:
        return ValidationIssue(path=path, message=message, severity=Severity.WARNING)

    @abstractmethod
    def _build(self, concept_dir: Path, metadata: Dict[str, Any]) -> C:
        """Assemble the typed concept from its directory and metadata."""

    @abstractmethod
    def validate_specific(self, concept: C) -> List[ValidationIssue]:
        """Kind-specific rules."""


__all__ = ["BaseConceptLoader", "metadata_candidates"]

"""Deployment artifacts: the virtual file tree produced by a binding."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List

from faber.core.concepts.models import ConceptReference
from faber.core.config.models import Config


@dataclass(frozen=True)
class DeploymentMetadata:
    concept: ConceptReference
    binding: str
    timestamp: datetime
    config: Config

    def to_dict(self) -> Dict[str, Any]:
        return {
            "concept": str(self.concept),
            "binding": self.binding,
            "timestamp": self.timestamp.isoformat(),
            "config": self.config.to_dict(),
        }


@dataclass
class DeploymentArtifact:
    """Output-relative path -> rendered text, plus the directories they need.

    ``files`` preserves insertion order; ``directories`` holds no duplicates.
    """

    files: Dict[str, str]
    directories: List[str]
    metadata: DeploymentMetadata

    @property
    def paths(self) -> List[str]:
        return list(self.files)

    def to_dict(self, *, include_content: bool = False) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "files": dict(self.files) if include_content else list(self.files),
            "directories": list(self.directories),
            "metadata": self.metadata.to_dict(),
        }
        return result


def dedupe(items: List[str]) -> List[str]:
    """Drop repeats, keeping first-seen order."""
    return list(dict.fromkeys(items))


__all__ = ["DeploymentMetadata", "DeploymentArtifact", "dedupe"]

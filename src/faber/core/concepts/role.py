"""Role loader.

Role layout::

    roles/<name>/
      agent.yml
      prompt.md
      tasks/*.md
      flows/*.md
      contexts/<category>/*.md
      bindings/<framework>.binding.yml
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, List

import yaml

from faber.core.contexts import ContextCategory, ContextLoader, context_key
from faber.core.errors import MetadataParseError
from faber.core.utils.io import list_files, read_text
from faber.core.validation import ValidationIssue

from .base import BaseConceptLoader
from .models import ConceptDocument, ConceptType, Role, RoleMetadata

# Prompt references such as ``/contexts/standards/api-design.md``, optionally
# rooted in the overlay namespace (``/.faber/overlays/organization/contexts/...``).
CONTEXT_REFERENCE_PATTERN = re.compile(
    r"(?:/\.faber/overlays(?:/[a-z0-9-]+)*)?/contexts/[a-z0-9-]+/[a-z0-9-]+\.md"
)
OVERLAY_NAMESPACE = "/.faber/overlays/"
BINDING_SUFFIXES = (".binding.yml", ".binding.yaml")


def extract_context_references(prompt: str) -> List[str]:
    """Return context references in ``prompt`` (deduplicated, in order)."""
    refs: List[str] = []
    for match in CONTEXT_REFERENCE_PATTERN.finditer(prompt):
        if match.group(0) not in refs:
            refs.append(match.group(0))
    return refs


def load_documents(directory: Path) -> Dict[str, ConceptDocument]:
    """Load every ``*.md`` in ``directory`` keyed by stem, in filename order."""
    return {
        p.stem: ConceptDocument(name=p.stem, content=read_text(p), path=p)
        for p in list_files(directory, ".md")
    }


def load_binding_overrides(bindings_dir: Path) -> Dict[str, Dict[str, Any]]:
    """Load ``<framework>.binding.yml`` override files.

    Raises:
        MetadataParseError: An override file is malformed or not a mapping.
    """
    overrides: Dict[str, Dict[str, Any]] = {}
    for path in list_files(bindings_dir):
        suffix = next((s for s in BINDING_SUFFIXES if path.name.endswith(s)), None)
        if suffix is None:
            continue
        framework = path.name[: -len(suffix)]
        try:
            data = yaml.safe_load(read_text(path))
        except yaml.YAMLError as exc:
            raise MetadataParseError(f"Failed to parse binding override {path}: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise MetadataParseError(f"Binding override {path} must be a mapping")
        overrides[framework] = data
    return overrides


class RoleLoader(BaseConceptLoader[Role]):
    concept_type = ConceptType.ROLE

    def __init__(self) -> None:
        self._contexts = ContextLoader()

    def _build(self, concept_dir: Path, metadata: Dict[str, Any]) -> Role:
        prompt_path = concept_dir / "prompt.md"
        prompt = read_text(prompt_path) if prompt_path.is_file() else ""
        return Role(
            metadata=RoleMetadata.from_dict(metadata),
            path=concept_dir,
            prompt=prompt,
            tasks=load_documents(concept_dir / "tasks"),
            flows=load_documents(concept_dir / "flows"),
            contexts=self._contexts.load_tree(concept_dir / "contexts"),
            bindings=load_binding_overrides(concept_dir / "bindings"),
        )

    def validate_specific(self, concept: Role) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        meta = concept.metadata

        if not concept.prompt:
            issues.append(self.error("prompt.md", "Role must have a prompt.md file"))

        if not concept.tasks and not concept.flows:
            issues.append(self.error("tasks|flows", "Role must have at least one task or flow"))

        for platform in meta.platforms:
            if context_key(ContextCategory.PLATFORM, f"platform-{platform}") not in concept.contexts:
                issues.append(
                    self.error(
                        f"contexts/platforms/platform-{platform}.md",
                        f"Missing platform context for declared platform: {platform}",
                    )
                )

        if meta.default_platform and meta.default_platform not in meta.platforms:
            issues.append(self.error("agent.yml", "default_platform must be in platforms list"))

        for ref in extract_context_references(concept.prompt):
            if ref.startswith(OVERLAY_NAMESPACE):
                issues.append(
                    self.warning("prompt.md", f"Overlay context reference resolved at deploy time: {ref}")
                )
                continue
            # /contexts/<category>/<name>.md
            _, _, category, filename = ref.split("/", 3)
            if f"{category}/{filename[:-3]}" not in concept.contexts:
                issues.append(self.error("prompt.md", f"Referenced context not found: {ref}"))

        return issues


__all__ = [
    "CONTEXT_REFERENCE_PATTERN",
    "RoleLoader",
    "extract_context_references",
    "load_binding_overrides",
    "load_documents",
]

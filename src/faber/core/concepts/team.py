"""Team loader (``teams/<name>/team.yml``)."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from faber.core.validation import ValidationIssue

from .base import BaseConceptLoader
from .models import ConceptMetadata, ConceptType, Team, TeamMember


class TeamLoader(BaseConceptLoader[Team]):
    concept_type = ConceptType.TEAM

    def _build(self, concept_dir: Path, metadata: Dict[str, Any]) -> Team:
        members = metadata.get("members")
        workflows = metadata.get("workflows")
        return Team(
            metadata=ConceptMetadata.from_dict(metadata),
            path=concept_dir,
            members=[TeamMember.from_dict(m) for m in members] if isinstance(members, list) else [],
            coordination=metadata.get("coordination"),
            leader=metadata.get("leader"),
            workflows=[str(w) for w in workflows] if isinstance(workflows, list) else [],
        )

    def validate_specific(self, concept: Team) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        if not concept.members:
            issues.append(self.error("members", "Team must have at least one member"))

        # A leader may be given by member name or by role.
        if concept.leader:
            known = {m.name for m in concept.members if m.name} | {m.role for m in concept.members}
            if concept.leader not in known:
                issues.append(
                    self.error("leader", f"Leader {concept.leader} not found in team members")
                )
        return issues


__all__ = ["TeamLoader"]

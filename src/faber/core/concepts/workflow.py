"""Workflow loader (``workflows/<name>/workflow.yml``)."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from faber.core.validation import ValidationIssue

from .base import BaseConceptLoader
from .models import ConceptMetadata, ConceptType, Stage, Trigger, Workflow


class WorkflowLoader(BaseConceptLoader[Workflow]):
    concept_type = ConceptType.WORKFLOW

    def _build(self, concept_dir: Path, metadata: Dict[str, Any]) -> Workflow:
        stages = metadata.get("stages")
        teams = metadata.get("teams")
        triggers = metadata.get("triggers")
        conditions = metadata.get("conditions")
        return Workflow(
            metadata=ConceptMetadata.from_dict(metadata),
            path=concept_dir,
            stages=[Stage.from_dict(s) for s in stages] if isinstance(stages, list) else [],
            teams=[str(t) for t in teams] if isinstance(teams, list) else [],
            triggers=[Trigger.from_dict(t) for t in triggers] if isinstance(triggers, list) else [],
            conditions=conditions if isinstance(conditions, dict) else {},
        )

    def validate_specific(self, concept: Workflow) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        if not concept.stages:
            issues.append(self.error("stages", "Workflow must have at least one stage"))

        used = {stage.team for stage in concept.stages}
        for team in concept.teams:
            if team not in used:
                issues.append(self.warning("teams", f"Team {team} declared but not used in any stage"))
        return issues


__all__ = ["WorkflowLoader"]

"""Concept model, loaders and validators."""
from __future__ import annotations

from typing import Dict, Type, Union

from .base import BaseConceptLoader
from .eval import EvalLoader
from .models import (
    METADATA_FILENAMES,
    BaseConcept,
    Concept,
    ConceptDocument,
    ConceptInfo,
    ConceptMetadata,
    ConceptReference,
    ConceptType,
    Eval,
    Flow,
    Metric,
    Role,
    RoleMetadata,
    Scenario,
    Stage,
    Task,
    Team,
    TeamMember,
    Tool,
    Trigger,
    Workflow,
    parse_concept_type,
)
from .role import RoleLoader, extract_context_references
from .team import TeamLoader
from .tool import ToolLoader
from .workflow import WorkflowLoader

_LOADERS: Dict[ConceptType, Type[BaseConceptLoader]] = {
    ConceptType.ROLE: RoleLoader,
    ConceptType.TEAM: TeamLoader,
    ConceptType.WORKFLOW: WorkflowLoader,
    ConceptType.TOOL: ToolLoader,
    ConceptType.EVAL: EvalLoader,
}


def create_concept_loader(concept_type: Union[ConceptType, str]) -> BaseConceptLoader:
    """Return a fresh loader for ``concept_type`` (enum or ``role``/``roles``)."""
    if not isinstance(concept_type, ConceptType):
        concept_type = parse_concept_type(concept_type)
    return _LOADERS[concept_type]()


__all__ = [
    "METADATA_FILENAMES",
    "BaseConcept",
    "BaseConceptLoader",
    "Concept",
    "ConceptDocument",
    "ConceptInfo",
    "ConceptMetadata",
    "ConceptReference",
    "ConceptType",
    "Eval",
    "EvalLoader",
    "Flow",
    "Metric",
    "Role",
    "RoleLoader",
    "RoleMetadata",
    "Scenario",
    "Stage",
    "Task",
    "Team",
    "TeamLoader",
    "TeamMember",
    "Tool",
    "ToolLoader",
    "Trigger",
    "Workflow",
    "WorkflowLoader",
    "create_concept_loader",
    "extract_context_references",
    "parse_concept_type",
]

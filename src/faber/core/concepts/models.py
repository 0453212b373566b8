"""Concept data model.

A concept is one of five kinds (role, team, workflow, tool, eval). Each kind is
its own dataclass sharing ``BaseConcept``; ``Concept`` is the union of them.
The raw metadata mapping is kept alongside the typed view because schema
validation and template rendering both work on the mapping.
"""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union

from faber.core.contexts.models import Context
from faber.core.errors import InvalidReferenceError


class ConceptType(str, Enum):
    ROLE = "role"
    TOOL = "tool"
    EVAL = "eval"
    TEAM = "team"
    WORKFLOW = "workflow"

    @property
    def directory(self) -> str:
        """Project subdirectory holding concepts of this type."""
        return f"{self.value}s"

    @property
    def metadata_filename(self) -> str:
        return _METADATA_FILENAMES[self]


_METADATA_FILENAMES: Dict[ConceptType, str] = {
    ConceptType.ROLE: "agent.yml",
    ConceptType.TOOL: "tool.yml",
    ConceptType.TEAM: "team.yml",
    ConceptType.WORKFLOW: "workflow.yml",
    ConceptType.EVAL: "eval.yml",
}

METADATA_FILENAMES: Tuple[str, ...] = tuple(_METADATA_FILENAMES.values())


def parse_concept_type(value: str) -> ConceptType:
    """Parse ``role`` (or the plural directory name ``roles``) into a ConceptType."""
    text = str(value).strip().lower()
    for ct in ConceptType:
        if text in (ct.value, ct.directory):
            return ct
    valid = ", ".join(ct.value for ct in ConceptType)
    raise ValueError(f"Unknown concept type '{value}' (expected one of: {valid})")


def normalize_dates(value: Any) -> Any:
    """Convert YAML date/datetime scalars into ISO strings, recursively."""
    if isinstance(value, (_dt.date, _dt.datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: normalize_dates(v) for k, v in value.items()}
    if isinstance(value, list):
        return [normalize_dates(v) for v in value]
    return value


def _str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


def _opt_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


@dataclass(frozen=True)
class ConceptReference:
    """A ``type:name`` pointer to another concept."""

    type: ConceptType
    name: str

    def __str__(self) -> str:
        return f"{self.type.value}:{self.name}"

    @classmethod
    def parse(cls, text: str) -> "ConceptReference":
        """Parse ``type:name``.

        Raises:
            InvalidReferenceError: On a missing part or an unknown type.
        """
        type_part, sep, name = str(text).partition(":")
        if not sep or not type_part or not name:
            raise InvalidReferenceError(f"Invalid concept reference '{text}' (expected type:name)")
        try:
            concept_type = ConceptType(type_part)
        except ValueError as exc:
            raise InvalidReferenceError(f"Unknown concept type '{type_part}' in reference '{text}'") from exc
        return cls(type=concept_type, name=name)


@dataclass
class ConceptMetadata:
    """Common metadata carried by every concept."""

    org: str
    system: str
    name: str
    type: str
    description: str = ""
    created: Optional[str] = None
    updated: Optional[str] = None
    visibility: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def _common(cls, raw: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "org": str(raw.get("org", "")),
            "system": str(raw.get("system", "")),
            "name": str(raw.get("name", "")),
            "type": str(raw.get("type", "")),
            "description": str(raw.get("description") or ""),
            "created": _opt_str(raw.get("created")),
            "updated": _opt_str(raw.get("updated")),
            "visibility": _opt_str(raw.get("visibility")),
            "tags": _str_list(raw.get("tags")),
            "raw": raw,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConceptMetadata":
        return cls(**cls._common(normalize_dates(dict(data))))


@dataclass
class RoleMetadata(ConceptMetadata):
    platforms: List[str] = field(default_factory=list)
    default_platform: Optional[str] = None
    platform_config_key: Optional[str] = None
    color: Optional[str] = None
    agent_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoleMetadata":
        raw = normalize_dates(dict(data))
        return cls(
            **cls._common(raw),
            platforms=_str_list(raw.get("platforms")),
            default_platform=_opt_str(raw.get("default_platform")),
            platform_config_key=_opt_str(raw.get("platform_config_key")),
            color=_opt_str(raw.get("color")),
            agent_type=_opt_str(raw.get("agent_type")),
        )


@dataclass(frozen=True)
class ConceptDocument:
    """A task or flow Markdown document owned by a role."""

    name: str
    content: str
    path: Optional[Path] = None


Task = ConceptDocument
Flow = ConceptDocument


@dataclass
class BaseConcept:
    """Fields shared by every concept kind."""

    concept_type: ClassVar[ConceptType]

    metadata: ConceptMetadata
    path: Optional[Path] = None

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def reference(self) -> ConceptReference:
        return ConceptReference(type=self.concept_type, name=self.name)


@dataclass
class Role(BaseConcept):
    concept_type: ClassVar[ConceptType] = ConceptType.ROLE

    metadata: RoleMetadata
    prompt: str = ""
    tasks: Dict[str, ConceptDocument] = field(default_factory=dict)
    flows: Dict[str, ConceptDocument] = field(default_factory=dict)
    contexts: Dict[str, Context] = field(default_factory=dict)
    # framework name -> binding override mapping
    bindings: Dict[str, Dict[str, Any]] = field(default_factory=dict)


@dataclass(frozen=True)
class TeamMember:
    role: str
    name: Optional[str] = None
    config: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "TeamMember":
        if isinstance(data, str):
            return cls(role=data)
        data = data if isinstance(data, dict) else {}
        config = data.get("config")
        return cls(
            role=str(data.get("role", "")),
            name=_opt_str(data.get("name")),
            config=config if isinstance(config, dict) else None,
        )


@dataclass
class Team(BaseConcept):
    concept_type: ClassVar[ConceptType] = ConceptType.TEAM

    members: List[TeamMember] = field(default_factory=list)
    coordination: Optional[str] = None
    leader: Optional[str] = None
    workflows: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Stage:
    name: str
    team: str
    tasks: Tuple[str, ...] = ()
    entry_criteria: Tuple[str, ...] = ()
    exit_criteria: Tuple[str, ...] = ()
    on_failure: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Stage":
        if isinstance(data, str):
            return cls(name=data, team="")
        data = data if isinstance(data, dict) else {}
        return cls(
            name=str(data.get("name", "")),
            team=str(data.get("team", "")),
            tasks=tuple(_str_list(data.get("tasks"))),
            entry_criteria=tuple(_str_list(data.get("entry_criteria"))),
            exit_criteria=tuple(_str_list(data.get("exit_criteria"))),
            on_failure=tuple(_str_list(data.get("on_failure"))),
        )


@dataclass(frozen=True)
class Trigger:
    type: str
    config: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Trigger":
        data = data if isinstance(data, dict) else {"type": data}
        config = data.get("config")
        return cls(type=str(data.get("type", "manual")), config=config if isinstance(config, dict) else None)


@dataclass
class Workflow(BaseConcept):
    concept_type: ClassVar[ConceptType] = ConceptType.WORKFLOW

    stages: List[Stage] = field(default_factory=list)
    teams: List[str] = field(default_factory=list)
    triggers: List[Trigger] = field(default_factory=list)
    conditions: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Tool(BaseConcept):
    concept_type: ClassVar[ConceptType] = ConceptType.TOOL

    tool_type: str = "utility"
    mcp_server: bool = False
    protocols: List[str] = field(default_factory=list)
    command: Optional[str] = None
    args: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Scenario:
    name: str
    inputs: Dict[str, Any] = field(default_factory=dict)
    description: Optional[str] = None
    expected_outputs: Optional[Dict[str, Any]] = None
    assertions: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Scenario":
        data = data if isinstance(data, dict) else {}
        inputs = data.get("inputs")
        expected = data.get("expected_outputs")
        return cls(
            name=str(data.get("name", "")),
            inputs=inputs if isinstance(inputs, dict) else {},
            description=_opt_str(data.get("description")),
            expected_outputs=expected if isinstance(expected, dict) else None,
            assertions=tuple(_str_list(data.get("assertions"))),
        )


@dataclass(frozen=True)
class Metric:
    name: str
    type: str
    threshold: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Metric":
        data = data if isinstance(data, dict) else {}
        threshold = data.get("threshold")
        return cls(
            name=str(data.get("name", "")),
            type=str(data.get("type", "")),
            threshold=float(threshold) if isinstance(threshold, (int, float)) else None,
        )


DEFAULT_SUCCESS_THRESHOLD = 80


@dataclass
class Eval(BaseConcept):
    concept_type: ClassVar[ConceptType] = ConceptType.EVAL

    targets: List[str] = field(default_factory=list)
    scenarios: List[Scenario] = field(default_factory=list)
    metrics: List[Metric] = field(default_factory=list)
    success_threshold: float = DEFAULT_SUCCESS_THRESHOLD
    platforms: List[str] = field(default_factory=list)


Concept = Union[Role, Team, Workflow, Tool, Eval]


@dataclass(frozen=True)
class ConceptInfo:
    """Summary of a concept directory found on disk (used by ``list``)."""

    type: ConceptType
    name: str
    path: Path
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "name": self.name,
            "path": self.path.as_posix(),
            "description": self.description,
        }


__all__ = [
    "ConceptType",
    "METADATA_FILENAMES",
    "parse_concept_type",
    "normalize_dates",
    "ConceptReference",
    "ConceptMetadata",
    "RoleMetadata",
    "ConceptDocument",
    "Task",
    "Flow",
    "BaseConcept",
    "Role",
    "TeamMember",
    "Team",
    "Stage",
    "Trigger",
    "Workflow",
    "Tool",
    "Scenario",
    "Metric",
    "DEFAULT_SUCCESS_THRESHOLD",
    "Eval",
    "Concept",
    "ConceptInfo",
]

"""Project-level operations: scaffold, list, load, validate and build concepts.

``FaberProject`` wires the loaders, configuration, overlay resolution and
bindings together for one project root. It is what the CLI talks to.
"""
from __future__ import annotations

import datetime as _dt
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from faber.core.bindings import DeploymentArtifact, create_binding, resolve_binding, write_artifact
from faber.core.concepts import (
    Concept,
    ConceptInfo,
    ConceptType,
    Role,
    create_concept_loader,
    parse_concept_type,
)
from faber.core.concepts.base import metadata_candidates
from faber.core.config import Config, ConfigLoader
from faber.core.contexts import ContextCategory, ContextResolver
from faber.core.errors import FaberError
from faber.core.overlays import MergeStrategy, OverlayResolver, Overlays, merge_configurations
from faber.core.utils.io import dump_yaml_string, ensure_directory, list_directories, read_yaml, write_text
from faber.core.utils.merge import merge_all
from faber.core.utils.text import render_template_text
from faber.core.validation import ValidationResult
from faber.data import get_data_path, read_text as read_data_text

logger = logging.getLogger(__name__)

CONFIG_DIR = ".faber"
CONFIG_FILE = "config.yml"
DEFAULT_OUTPUT_DIR = "deployments"
EXAMPLE_ROLE = "example-role"

# Created by ``init`` in addition to one directory per concept type.
_PROJECT_DIRECTORIES = (
    ".faber/overlays/organization/contexts/standards",
    ".faber/overlays/organization/contexts/references",
    ".faber/overlays/platforms",
    ".faber/overlays/roles",
    ".faber/overlays/teams",
    ".faber/overlays/workflows",
    DEFAULT_OUTPUT_DIR,
)

_ROLE_DIRECTORIES = ("tasks", "flows", "bindings") + tuple(f"contexts/{c.value}" for c in ContextCategory)


def _split(value: Union[str, Sequence[str], None]) -> List[str]:
    if not value:
        return []
    items = value.split(",") if isinstance(value, str) else list(value)
    return [i.strip() for i in items if i and i.strip()]


@dataclass(frozen=True)
class BuildResult:
    """Outcome of one build (before or after materialization)."""

    artifact: DeploymentArtifact
    concept: Concept
    overlays: Overlays
    platform: Optional[str]
    binding: str


class FaberProject:
    """Operations rooted at one project directory.

    Args:
        project_root: Directory holding ``roles/``, ``teams/``, ``.faber/`` ...
        config: Explicit configuration; when omitted it is loaded lazily by
            searching upward from ``project_root``.
    """

    def __init__(self, project_root: Union[str, Path], config: Optional[Config] = None) -> None:
        self.project_root = Path(project_root).resolve()
        self._config = config

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = ConfigLoader().load(self.project_root)
        return self._config

    @property
    def overlay_root(self) -> Path:
        return self.project_root / self.config.overlays.root

    def concept_path(self, concept_type: Union[ConceptType, str], name: str) -> Path:
        ct = concept_type if isinstance(concept_type, ConceptType) else parse_concept_type(concept_type)
        return self.project_root / ct.directory / name

    # ------------------------------------------------------------------
    # init / create
    # ------------------------------------------------------------------

    def init_project(self, *, with_example: bool = True) -> List[Path]:
        """Create the project skeleton, default config and (optionally) an example role.

        Existing files are left untouched. Returns the paths created.
        """
        created: List[Path] = []
        for ct in ConceptType:
            created.extend(self._mkdir(self.project_root / ct.directory))
        for rel in _PROJECT_DIRECTORIES:
            created.extend(self._mkdir(self.project_root / rel))

        config_path = self.project_root / CONFIG_DIR / CONFIG_FILE
        if not config_path.exists():
            write_text(config_path, read_data_text("templates", "project-config.yml"))
            created.append(config_path)

        if with_example:
            created.extend(self._copy_example_role())

        logger.info("Initialized project at %s (%d paths created)", self.project_root, len(created))
        return created

    def _mkdir(self, path: Path) -> List[Path]:
        if path.is_dir():
            return []
        ensure_directory(path)
        return [path]

    def _copy_example_role(self) -> List[Path]:
        source = get_data_path("templates", EXAMPLE_ROLE)
        target = self.concept_path(ConceptType.ROLE, EXAMPLE_ROLE)
        if target.exists():
            return []
        shutil.copytree(source, target)
        return [target]

    def create_concept(
        self,
        concept_type: Union[ConceptType, str],
        name: str,
        *,
        org: str = "myorg",
        system: str = "mysystem",
        description: Optional[str] = None,
        platforms: Union[str, Sequence[str], None] = None,
        tool_type: Optional[str] = None,
        members: Union[str, Sequence[str], None] = None,
        target: Optional[str] = None,
        today: Optional[_dt.date] = None,
    ) -> Path:
        """Scaffold a new concept directory.

        Raises:
            FaberError: The concept directory already exists.
        """
        ct = concept_type if isinstance(concept_type, ConceptType) else parse_concept_type(concept_type)
        concept_dir = self.concept_path(ct, name)
        if concept_dir.exists():
            raise FaberError(f"{ct.value} '{name}' already exists at {concept_dir}")

        stamp = (today or _dt.date.today()).isoformat()
        platform_list = _split(platforms)
        metadata: Dict[str, Any] = {
            "org": org,
            "system": system,
            "name": name,
            "type": ct.value,
            "description": description or f"{name} {'evaluation' if ct is ConceptType.EVAL else ct.value}",
            "created": stamp,
            "updated": stamp,
            "visibility": "public",
            "tags": [],
        }
        metadata.update(self._type_metadata(ct, name, platform_list, tool_type, _split(members), target))

        ensure_directory(concept_dir)
        write_text(concept_dir / ct.metadata_filename, dump_yaml_string(metadata, sort_keys=False))
        if ct is ConceptType.ROLE:
            self._scaffold_role(concept_dir, metadata, platform_list)

        readme = render_template_text(
            read_data_text("templates", "scaffold/README.md.j2"),
            {**metadata, "metadata_file": ct.metadata_filename},
        )
        write_text(concept_dir / "README.md", readme)
        logger.info("Created %s '%s' at %s", ct.value, name, concept_dir)
        return concept_dir

    @staticmethod
    def _type_metadata(
        ct: ConceptType,
        name: str,
        platforms: List[str],
        tool_type: Optional[str],
        members: List[str],
        target: Optional[str],
    ) -> Dict[str, Any]:
        if ct is ConceptType.ROLE:
            extra: Dict[str, Any] = {"platforms": platforms}
            if platforms:
                extra["default_platform"] = platforms[0]
                extra["platform_config_key"] = name
            return extra
        if ct is ConceptType.TOOL:
            kind = tool_type or "utility"
            return {"tool_type": kind, "mcp_server": kind == "mcp-server"}
        if ct is ConceptType.TEAM:
            return {
                "members": [{"role": m, "name": m} for m in members],
                "coordination": "collaborative",
            }
        if ct is ConceptType.WORKFLOW:
            return {
                "stages": [
                    {"name": stage, "team": "", "tasks": []}
                    for stage in ("planning", "execution", "verification")
                ],
                "teams": [],
                "triggers": [{"type": "manual"}],
            }
        return {
            "targets": [target] if target else [],
            "scenarios": [{"name": "basic", "inputs": {"request": "Describe the expected behavior"}}],
            "metrics": [{"name": "accuracy", "type": "accuracy"}, {"name": "completeness", "type": "coverage"}],
            "success_threshold": 80,
            "platforms": platforms,
        }

    def _scaffold_role(self, concept_dir: Path, metadata: Dict[str, Any], platforms: List[str]) -> None:
        for rel in _ROLE_DIRECTORIES:
            ensure_directory(concept_dir / rel)
        values = {**metadata, "title": metadata["name"].replace("-", " ").title(), "platforms": platforms}
        write_text(
            concept_dir / "prompt.md",
            render_template_text(read_data_text("templates", "scaffold/prompt.md.j2"), values),
        )
        stub = read_data_text("templates", "scaffold/platform-context.md.j2")
        for platform in platforms:
            write_text(
                concept_dir / "contexts" / "platforms" / f"platform-{platform}.md",
                render_template_text(stub, {**values, "platform": platform}),
            )

    # ------------------------------------------------------------------
    # list / load / validate
    # ------------------------------------------------------------------

    def list_concepts(self, concept_type: Union[ConceptType, str, None] = None) -> List[ConceptInfo]:
        """Concept directories on disk, by type then name."""
        if concept_type is None:
            types = list(ConceptType)
        else:
            types = [concept_type if isinstance(concept_type, ConceptType) else parse_concept_type(concept_type)]

        infos: List[ConceptInfo] = []
        for ct in types:
            for concept_dir in list_directories(self.project_root / ct.directory):
                metadata_file = next(
                    (p for p in metadata_candidates(concept_dir, ct.metadata_filename) if p.is_file()),
                    None,
                )
                if metadata_file is None:
                    continue
                data = read_yaml(metadata_file, default={})
                description = data.get("description") if isinstance(data, dict) else None
                infos.append(
                    ConceptInfo(
                        type=ct,
                        name=concept_dir.name,
                        path=concept_dir,
                        description=str(description) if description else None,
                    )
                )
        return infos

    def load_concept(self, concept_type: Union[ConceptType, str], name: str) -> Concept:
        loader = create_concept_loader(concept_type)
        return loader.load(self.concept_path(loader.concept_type, name))

    def validate_concept(self, concept_type: Union[ConceptType, str], name: str) -> ValidationResult:
        """Load then validate. Load failures propagate as FaberError."""
        loader = create_concept_loader(concept_type)
        concept = loader.load(self.concept_path(loader.concept_type, name))
        return loader.validate(concept)

    # ------------------------------------------------------------------
    # build
    # ------------------------------------------------------------------

    def active_platform(self, concept: Concept, platform: Optional[str] = None) -> Optional[str]:
        if platform:
            return platform
        if isinstance(concept, Role):
            return ContextResolver().detect_platform(concept, self.config)
        return None

    def resolve_overlays(
        self,
        concept: Concept,
        platform: Optional[str] = None,
        *,
        use_overlays: bool = True,
    ) -> Overlays:
        if not use_overlays or not self.config.overlays.enabled:
            return Overlays.empty()
        resolver = OverlayResolver(self.overlay_root)
        return resolver.resolve_overlays(concept.concept_type, concept.name, platform)

    def binding_overrides(self, framework: str, concept: Concept) -> Dict[str, Any]:
        """Project-config binding settings, then the role's own override file."""
        entry = resolve_binding(framework)
        names = (entry.name, *entry.aliases)
        layers: List[Mapping[str, Any]] = [
            self.config.bindings[n] for n in names if n in self.config.bindings
        ]
        if isinstance(concept, Role):
            layers.extend(concept.bindings[n] for n in names if n in concept.bindings)
        return merge_all({}, layers)

    def build(
        self,
        framework: str,
        concept_type: Union[ConceptType, str],
        name: str,
        *,
        platform: Optional[str] = None,
        use_overlays: bool = True,
        conflict_strategy: Union[MergeStrategy, str, None] = None,
        clock: Optional[Any] = None,
    ) -> BuildResult:
        """Load, resolve overlays and transform one concept (nothing is written)."""
        concept = self.load_concept(concept_type, name)
        active = self.active_platform(concept, platform)
        overlays = self.resolve_overlays(concept, active, use_overlays=use_overlays)
        effective = ConfigLoader().finalize(merge_configurations(self.config.to_dict(), overlays))

        options: Dict[str, Any] = {}
        if conflict_strategy:
            options["conflict_strategy"] = conflict_strategy
        if clock is not None:
            options["clock"] = clock
        transformer = create_binding(framework, self.binding_overrides(framework, concept) or None, **options)

        artifact = transformer.transform(concept, effective, overlays, active)
        logger.info(
            "Built %s '%s' for %s: %d files", concept.concept_type.value, name, transformer.name, len(artifact.files)
        )
        return BuildResult(
            artifact=artifact,
            concept=concept,
            overlays=overlays,
            platform=active,
            binding=transformer.name,
        )

    def write(self, artifact: DeploymentArtifact, output_dir: Union[str, Path, None] = None) -> List[Path]:
        """Materialize ``artifact`` under ``<output_dir>/<binding>``.

        Relative output dirs resolve against the project root, so builds for
        different bindings never share a tree.
        """
        target = Path(output_dir) if output_dir else Path(DEFAULT_OUTPUT_DIR)
        if not target.is_absolute():
            target = self.project_root / target
        return write_artifact(artifact, target / artifact.metadata.binding)


__all__ = ["FaberProject", "BuildResult", "CONFIG_DIR", "CONFIG_FILE", "DEFAULT_OUTPUT_DIR"]

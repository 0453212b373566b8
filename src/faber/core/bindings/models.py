"""Binding configuration.

A binding describes how a concept is laid out for one target framework::

    name: claude-code
    version: "1.0"
    supported_concepts: [role]
    output_structure:
      role_path: .claude/agents/{name}.md
      docs_path: .claude/docs/{org}/{system}/{name}
      config_path: .claude/faber/config.yaml
    path_resolution:
      context_prefix: ...
      task_prefix: ...
      flow_prefix: ...
    templates:
      role_frontmatter: templates/role-frontmatter.md.j2
      role_body: templates/role-body.md.j2

Template paths are relative to the binding file.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from faber.core.errors import BindingConfigError
from faber.core.utils.io import read_text
from faber.core.utils.merge import deep_merge

logger = logging.getLogger(__name__)


def _require(section: Mapping[str, Any], section_name: str, keys: Tuple[str, ...]) -> Dict[str, str]:
    missing = [k for k in keys if not section.get(k)]
    if missing:
        raise BindingConfigError(
            f"Binding config is missing {section_name} field(s): {', '.join(missing)}"
        )
    return {k: str(section[k]) for k in keys}


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name)
    if value is None:
        raise BindingConfigError(f"Binding config is missing required section '{name}'")
    if not isinstance(value, Mapping):
        raise BindingConfigError(f"Binding config section '{name}' must be a mapping")
    return value


@dataclass(frozen=True)
class OutputStructure:
    role_path: str
    docs_path: str
    config_path: str


@dataclass(frozen=True)
class PathResolution:
    context_prefix: str
    task_prefix: str
    flow_prefix: str


@dataclass(frozen=True)
class TemplateRefs:
    role_frontmatter: str
    role_body: str


@dataclass(frozen=True)
class BindingConfig:
    """Read-only binding configuration loaded once per transformer."""

    name: str
    version: str
    output_structure: OutputStructure
    path_resolution: PathResolution
    templates: TemplateRefs
    supported_concepts: Tuple[str, ...] = ("role",)
    base_dir: Optional[Path] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], base_dir: Optional[Path] = None) -> "BindingConfig":
        """Build from a raw mapping.

        Raises:
            BindingConfigError: A required section or field is missing.
        """
        if not isinstance(data, Mapping):
            raise BindingConfigError("Binding config must be a mapping")
        supported = data.get("supported_concepts") or ["role"]
        return cls(
            name=str(data.get("name") or "unnamed"),
            version=str(data.get("version") or "0"),
            output_structure=OutputStructure(
                **_require(
                    _section(data, "output_structure"),
                    "output_structure",
                    ("role_path", "docs_path", "config_path"),
                )
            ),
            path_resolution=PathResolution(
                **_require(
                    _section(data, "path_resolution"),
                    "path_resolution",
                    ("context_prefix", "task_prefix", "flow_prefix"),
                )
            ),
            templates=TemplateRefs(
                **_require(_section(data, "templates"), "templates", ("role_frontmatter", "role_body"))
            ),
            supported_concepts=tuple(str(c) for c in supported),
            base_dir=base_dir,
            raw=dict(data),
        )

    def template_path(self, ref: str) -> Path:
        base = self.base_dir or Path.cwd()
        return base / ref

    def supports(self, concept_type: str) -> bool:
        return concept_type in self.supported_concepts


def load_binding_config(path: Path, overrides: Optional[Mapping[str, Any]] = None) -> BindingConfig:
    """Read a binding YAML file and apply optional overrides.

    Raises:
        BindingConfigError: Missing/unreadable file or missing required fields.
    """
    path = Path(path)
    if not path.is_file():
        raise BindingConfigError(f"Binding config not found: {path}")
    try:
        data = yaml.safe_load(read_text(path))
    except yaml.YAMLError as exc:
        raise BindingConfigError(f"Failed to parse binding config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise BindingConfigError(f"Binding config {path} must be a mapping")
    if overrides:
        logger.debug("Applying binding overrides to %s: %s", path, sorted(overrides))
        data = deep_merge(data, overrides)
    return BindingConfig.from_dict(data, base_dir=path.parent)


__all__ = [
    "OutputStructure",
    "PathResolution",
    "TemplateRefs",
    "BindingConfig",
    "load_binding_config",
]

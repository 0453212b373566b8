"""Bindings: framework-specific deployment transformers."""
from __future__ import annotations

from .artifact import DeploymentArtifact, DeploymentMetadata
from .base import BindingTransformer
from .claude_code import ClaudeCodeTransformer
from .models import BindingConfig, OutputStructure, PathResolution, TemplateRefs, load_binding_config
from .output import ArtifactWriter, write_artifact
from .registry import BindingEntry, available_bindings, create_binding, load_registry, resolve_binding

__all__ = [
    "DeploymentArtifact",
    "DeploymentMetadata",
    "BindingTransformer",
    "ClaudeCodeTransformer",
    "BindingConfig",
    "OutputStructure",
    "PathResolution",
    "TemplateRefs",
    "load_binding_config",
    "ArtifactWriter",
    "write_artifact",
    "BindingEntry",
    "available_bindings",
    "create_binding",
    "load_registry",
    "resolve_binding",
]

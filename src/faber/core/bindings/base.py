"""Binding transformer interface."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from faber.core.concepts.models import BaseConcept
from faber.core.config.models import Config
from faber.core.overlays.models import Overlays

from .artifact import DeploymentArtifact
from .models import BindingConfig


class BindingTransformer(ABC):
    """Turn a concept plus its overlays into a framework-specific artifact."""

    def __init__(self, binding: BindingConfig) -> None:
        self.binding = binding

    @property
    def name(self) -> str:
        return self.binding.name

    def supports(self, concept: BaseConcept) -> bool:
        return self.binding.supports(concept.concept_type.value)

    @abstractmethod
    def transform(
        self,
        concept: BaseConcept,
        config: Config,
        overlays: Optional[Overlays] = None,
        platform: Optional[str] = None,
    ) -> DeploymentArtifact:
        """Render ``concept`` into a DeploymentArtifact."""


__all__ = ["BindingTransformer"]

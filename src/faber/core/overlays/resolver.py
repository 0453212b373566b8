"""Overlay resolution.

Overlay tree::

    <overlay root>/
      organization/
      platforms/<platform>/
      roles/<role>/
      teams/<team>/
      workflows/<workflow>/

Each layer may hold ``contexts/<category>/*.md`` and a ``config.yml``. A
missing layer directory is simply empty.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from faber.core.concepts.models import ConceptType
from faber.core.contexts import Context, ContextLoader
from faber.core.errors import ConfigError
from faber.core.utils.io import read_text, resolve_yaml_path
from faber.core.utils.merge import merge_all

from .models import ORGANIZATION_LAYER, EMPTY_OVERLAY, OverlayContent, Overlays

logger = logging.getLogger(__name__)

DEFAULT_OVERLAY_ROOT = ".faber/overlays"

# Concept types with a dedicated overlay layer (tools and evals have none).
_CONCEPT_LAYERS = {
    ConceptType.ROLE: "roles",
    ConceptType.TEAM: "teams",
    ConceptType.WORKFLOW: "workflows",
}


class OverlayResolver:
    """Resolve the overlay layers that apply to one concept."""

    def __init__(self, overlay_root: Union[str, Path] = DEFAULT_OVERLAY_ROOT) -> None:
        self.overlay_root = Path(overlay_root)
        self._contexts = ContextLoader()

    def resolve_overlays(
        self,
        concept_type: Union[ConceptType, str],
        concept_name: str,
        platform: Optional[str] = None,
    ) -> Overlays:
        """Load organization, platform and concept layers.

        Raises:
            ConfigError: A layer's ``config.yml`` is malformed or not a mapping.
        """
        concept_type = ConceptType(concept_type)
        platforms: Dict[str, OverlayContent] = {}
        if platform:
            platforms[platform] = self.load_layer(f"platforms/{platform}")

        by_group: Dict[str, Dict[str, OverlayContent]] = {"roles": {}, "teams": {}, "workflows": {}}
        group = _CONCEPT_LAYERS.get(concept_type)
        if group is not None:
            by_group[group][concept_name] = self.load_layer(f"{group}/{concept_name}")

        overlays = Overlays(
            organization=self.load_layer(ORGANIZATION_LAYER),
            platforms=platforms,
            roles=by_group["roles"],
            teams=by_group["teams"],
            workflows=by_group["workflows"],
        )
        logger.debug(
            "Resolved overlays for %s '%s' (platform=%s): %d contexts",
            concept_type.value,
            concept_name,
            platform,
            count_contexts(overlays),
        )
        return overlays

    def load_layer(self, layer: str) -> OverlayContent:
        """Load one overlay directory relative to the overlay root."""
        layer_dir = self.overlay_root / layer
        if not layer_dir.is_dir():
            return EMPTY_OVERLAY
        contexts = tuple(self._contexts.load_list(layer_dir / "contexts"))
        return OverlayContent(contexts=contexts, config=self._load_config(layer_dir))

    def _load_config(self, layer_dir: Path) -> Optional[Dict[str, Any]]:
        path = resolve_yaml_path(layer_dir / "config.yml")
        if not path.is_file():
            return None
        try:
            data = yaml.safe_load(read_text(path))
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse overlay config {path}: {exc}") from exc
        if data is None:
            return None
        if not isinstance(data, dict):
            raise ConfigError(f"Overlay config {path} must be a mapping")
        return data

    def merge_configurations(self, base: Mapping[str, Any], overlays: Overlays) -> Dict[str, Any]:
        return merge_configurations(base, overlays)

    def collect_contexts(self, overlays: Overlays) -> List[Context]:
        return collect_contexts(overlays)


def merge_configurations(base: Mapping[str, Any], overlays: Overlays) -> Dict[str, Any]:
    """Deep-merge every layer config over ``base`` in precedence order."""
    return merge_all(base, (content.config for _, content in overlays.layers()))


def collect_contexts(overlays: Overlays) -> List[Context]:
    """All overlay contexts in precedence order."""
    return [ctx for _, content in overlays.layers() for ctx in content.contexts]


def has_overlays(overlays: Overlays) -> bool:
    return any(not content.is_empty for _, content in overlays.layers())


def count_contexts(overlays: Overlays) -> int:
    return sum(len(content.contexts) for _, content in overlays.layers())


__all__ = [
    "DEFAULT_OVERLAY_ROOT",
    "OverlayResolver",
    "merge_configurations",
    "collect_contexts",
    "has_overlays",
    "count_contexts",
]

"""Overlays: organization/platform/concept customizations layered over base concepts."""
from __future__ import annotations

from .conflicts import (
    APPEND_SEPARATOR,
    MERGE_SEPARATOR,
    ContextConflict,
    MergeStrategy,
    find_conflicts,
    merge_conflict,
)
from .models import EMPTY_OVERLAY, ORGANIZATION_LAYER, OverlayContent, Overlays
from .resolver import (
    DEFAULT_OVERLAY_ROOT,
    OverlayResolver,
    collect_contexts,
    count_contexts,
    has_overlays,
    merge_configurations,
)

__all__ = [
    "APPEND_SEPARATOR",
    "MERGE_SEPARATOR",
    "ContextConflict",
    "MergeStrategy",
    "find_conflicts",
    "merge_conflict",
    "EMPTY_OVERLAY",
    "ORGANIZATION_LAYER",
    "OverlayContent",
    "Overlays",
    "DEFAULT_OVERLAY_ROOT",
    "OverlayResolver",
    "collect_contexts",
    "count_contexts",
    "has_overlays",
    "merge_configurations",
]

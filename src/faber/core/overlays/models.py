"""Overlay values.

``Overlays`` is built once per build from disk and never mutated; merge steps
produce new values.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from faber.core.contexts import Context

ORGANIZATION_LAYER = "organization"


@dataclass(frozen=True)
class OverlayContent:
    """Contexts plus optional ``config.yml`` mapping of one overlay directory."""

    contexts: Tuple[Context, ...] = ()
    config: Optional[Mapping[str, Any]] = None

    @property
    def is_empty(self) -> bool:
        return not self.contexts and not self.config


EMPTY_OVERLAY = OverlayContent()


def _frozen(mapping: Optional[Mapping[str, OverlayContent]]) -> Mapping[str, OverlayContent]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class Overlays:
    """All overlay layers that apply to one concept build.

    Precedence (low to high): organization, platforms, roles/teams/workflows.
    """

    organization: OverlayContent = EMPTY_OVERLAY
    platforms: Mapping[str, OverlayContent] = field(default_factory=lambda: _frozen(None))
    roles: Mapping[str, OverlayContent] = field(default_factory=lambda: _frozen(None))
    teams: Mapping[str, OverlayContent] = field(default_factory=lambda: _frozen(None))
    workflows: Mapping[str, OverlayContent] = field(default_factory=lambda: _frozen(None))

    def __post_init__(self) -> None:
        for name in ("platforms", "roles", "teams", "workflows"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))

    @classmethod
    def empty(cls) -> "Overlays":
        return cls()

    def layers(self) -> Iterator[Tuple[str, OverlayContent]]:
        """Yield ``(layer path, content)`` in precedence order.

        Layer paths are ``organization``, ``platforms/<p>``, ``roles/<r>``,
        ``teams/<t>`` and ``workflows/<w>``.
        """
        yield ORGANIZATION_LAYER, self.organization
        for group in ("platforms", "roles", "teams", "workflows"):
            for name, content in getattr(self, group).items():
                yield f"{group}/{name}", content

    def to_dict(self) -> Dict[str, Any]:
        return {
            layer: {
                "contexts": [c.key for c in content.contexts],
                "config": dict(content.config) if content.config is not None else None,
            }
            for layer, content in self.layers()
        }


__all__ = ["ORGANIZATION_LAYER", "OverlayContent", "EMPTY_OVERLAY", "Overlays"]

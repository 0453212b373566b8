"""Config-driven binding registry.

Bindings are declared in ``faber.data/bindings/registry.yaml``; transformer
classes are imported dynamically so no binding list is hardcoded here.
"""
from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from faber.core.errors import BindingConfigError, UnsupportedFrameworkError
from faber.data import get_data_path, read_yaml

from .base import BindingTransformer
from .models import load_binding_config

logger = logging.getLogger(__name__)

REGISTRY_FILE = "registry.yaml"


@dataclass(frozen=True)
class BindingEntry:
    name: str
    transformer: str
    config: str
    aliases: Tuple[str, ...] = ()
    description: str = ""

    @property
    def config_path(self) -> Path:
        return get_data_path("bindings", self.config)

    def load_class(self) -> Type[BindingTransformer]:
        module_path, _, class_name = self.transformer.rpartition(".")
        try:
            module = importlib.import_module(module_path)
            cls = getattr(module, class_name)
        except (ImportError, AttributeError, ValueError) as exc:
            raise BindingConfigError(
                f"Failed to load transformer for binding '{self.name}' from '{self.transformer}': {exc}"
            ) from exc
        return cls


def load_registry() -> Dict[str, BindingEntry]:
    """Registered bindings keyed by canonical name."""
    data = read_yaml("bindings", REGISTRY_FILE) or {}
    entries: Dict[str, BindingEntry] = {}
    for name, spec in (data.get("bindings") or {}).items():
        entries[name] = BindingEntry(
            name=name,
            transformer=str(spec["transformer"]),
            config=str(spec["config"]),
            aliases=tuple(spec.get("aliases") or ()),
            description=str(spec.get("description") or ""),
        )
    return entries


def resolve_binding(framework: str) -> BindingEntry:
    """Find a binding by name or alias.

    Raises:
        UnsupportedFrameworkError: Nothing registered under ``framework``.
    """
    key = framework.strip().lower()
    registry = load_registry()
    for entry in registry.values():
        if key == entry.name or key in entry.aliases:
            return entry
    supported = ", ".join(sorted(registry))
    raise UnsupportedFrameworkError(f"Unsupported framework: {framework} (supported: {supported})")


def available_bindings() -> List[str]:
    return sorted(load_registry())


def create_binding(
    framework: str,
    overrides: Optional[Mapping[str, Any]] = None,
    **options: Any,
) -> BindingTransformer:
    """Instantiate the transformer registered for ``framework``.

    ``overrides`` is deep-merged over the bundled binding config. ``options``
    go to the transformer constructor (e.g. ``conflict_strategy``, ``clock``).

    Raises:
        UnsupportedFrameworkError: Unknown framework name.
        BindingConfigError: The binding config or transformer class is broken.
        TemplateLoadError: A binding template is missing or does not compile.
    """
    entry = resolve_binding(framework)
    binding = load_binding_config(entry.config_path, overrides)
    transformer_cls = entry.load_class()
    logger.debug("Creating binding '%s' via %s", entry.name, entry.transformer)
    return transformer_cls(binding, **options)


__all__ = [
    "BindingEntry",
    "load_registry",
    "resolve_binding",
    "available_bindings",
    "create_binding",
]

"""Canonical deep merge utilities.

This module is the single source of truth for configuration merging in Faber.
Overlay configs, binding overrides and project configs are all folded with
``deep_merge``.

Semantics:
- Mappings merge key-by-key recursively
- Lists at matching keys are concatenated (base items first)
- Any other collision: the override value wins outright

Project configs are layered with ``concat_lists=False`` so that a user's
``overlays.paths`` replaces the default list instead of extending it.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, List, Mapping, Optional


def deep_merge(
    base: Mapping[str, Any],
    override: Optional[Mapping[str, Any]],
    *,
    concat_lists: bool = True,
) -> Dict[str, Any]:
    """Recursively merge mappings without mutating inputs.

    Args:
        base: Base mapping (lower priority)
        override: Override mapping (higher priority)
        concat_lists: When False, an override list replaces the base list

    Returns:
        New merged dictionary

    Example:
        >>> deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}})
        {'a': 1, 'b': {'c': 2, 'd': 3}}
        >>> deep_merge({"tags": ["x"]}, {"tags": ["y"]})
        {'tags': ['x', 'y']}
    """
    result: Dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in (override or {}).items():
        if key in result:
            current = result[key]
            if isinstance(current, Mapping) and isinstance(value, Mapping):
                result[key] = deep_merge(current, value, concat_lists=concat_lists)
            elif concat_lists and isinstance(current, list) and isinstance(value, list):
                result[key] = merge_arrays(current, value)
            else:
                result[key] = copy.deepcopy(value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Concatenate two lists (append strategy).

    Example:
        >>> merge_arrays([1, 2], [3, 4])
        [1, 2, 3, 4]
    """
    return [*copy.deepcopy(base), *copy.deepcopy(override)]


def merge_all(base: Mapping[str, Any], overrides: Iterable[Optional[Mapping[str, Any]]]) -> Dict[str, Any]:
    """Fold ``overrides`` over ``base`` in order (low → high precedence).

    ``None`` entries are skipped so callers can pass optional layer configs
    straight through.
    """
    merged: Dict[str, Any] = copy.deepcopy(dict(base))
    for override in overrides:
        if override:
            merged = deep_merge(merged, override)
    return merged


__all__ = ["deep_merge", "merge_arrays", "merge_all"]

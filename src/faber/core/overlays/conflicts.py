"""Base/overlay context conflicts.

Two contexts conflict when they share ``(category, name)``. A conflict is
resolved with one of three strategies:

- ``override``: the overlay replaces the base context
- ``merge``: overlay content is added under an "Overlay Additions" heading and
  metadata is shallow-merged with the overlay winning
- ``append``: overlay content is added under an "Additional Requirements"
  heading and the base metadata is kept
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Union

from faber.core.contexts import Context

MERGE_SEPARATOR = "\n\n## Overlay Additions\n\n"
APPEND_SEPARATOR = "\n\n## Additional Requirements (from overlay)\n\n"


class MergeStrategy(str, Enum):
    OVERRIDE = "override"
    MERGE = "merge"
    APPEND = "append"

    @classmethod
    def parse(cls, value: Union["MergeStrategy", str]) -> "MergeStrategy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown merge strategy '{value}' (expected one of: {valid})") from None


@dataclass(frozen=True)
class ContextConflict:
    base: Context
    overlay: Context


def find_conflicts(base: Iterable[Context], overlay: Iterable[Context]) -> List[ContextConflict]:
    """Pair each overlay context with the base context of the same identity.

    Pairs come out in overlay order.
    """
    by_key = {}
    for ctx in base:
        by_key.setdefault(ctx.key, ctx)
    return [ContextConflict(base=by_key[o.key], overlay=o) for o in overlay if o.key in by_key]


def merge_conflict(
    base: Context,
    overlay: Context,
    strategy: Union[MergeStrategy, str] = MergeStrategy.OVERRIDE,
) -> Context:
    """Resolve one conflict into a new Context.

    Raises:
        ValueError: ``strategy`` is not a known strategy name.
    """
    strategy = MergeStrategy.parse(strategy)
    if strategy is MergeStrategy.OVERRIDE:
        return overlay
    if strategy is MergeStrategy.MERGE:
        metadata = None
        if base.metadata is not None or overlay.metadata is not None:
            metadata = {**(base.metadata or {}), **(overlay.metadata or {})}
        return base.with_content(f"{base.content}{MERGE_SEPARATOR}{overlay.content}", metadata)
    return base.with_content(f"{base.content}{APPEND_SEPARATOR}{overlay.content}")


__all__ = [
    "MERGE_SEPARATOR",
    "APPEND_SEPARATOR",
    "MergeStrategy",
    "ContextConflict",
    "find_conflicts",
    "merge_conflict",
]

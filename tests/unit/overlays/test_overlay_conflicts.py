from __future__ import annotations

from pathlib import Path

import pytest

from faber.core.contexts import Context, ContextCategory
from faber.core.overlays import (
    APPEND_SEPARATOR,
    MERGE_SEPARATOR,
    MergeStrategy,
    OverlayResolver,
    find_conflicts,
    merge_conflict,
)
from helpers import write_overlay_context


def _ctx(name: str, content: str, metadata=None, category=ContextCategory.STANDARD) -> Context:
    return Context(category=category, name=name, content=content, metadata=metadata)


def test_same_identity_across_layers_is_one_conflict(tmp_path: Path) -> None:
    root = tmp_path / "overlays"
    write_overlay_context(root, "organization", "standards/foo", "Org foo")
    write_overlay_context(root, "roles/pm", "standards/foo", "Role foo")
    write_overlay_context(root, "roles/pm", "standards/bar", "Role bar")
    overlays = OverlayResolver(root).resolve_overlays("role", "pm")

    conflicts = find_conflicts(overlays.organization.contexts, overlays.roles["pm"].contexts)

    assert len(conflicts) == 1
    merged = merge_conflict(conflicts[0].base, conflicts[0].overlay, "merge")
    assert "Org foo" in merged.content
    assert "Role foo" in merged.content
    assert "## Overlay Additions" in merged.content


def test_category_is_part_of_identity() -> None:
    base = [_ctx("foo", "a")]
    overlay = [_ctx("foo", "b", category=ContextCategory.PATTERN)]
    assert find_conflicts(base, overlay) == []


def test_override_returns_the_overlay() -> None:
    overlay = _ctx("foo", "new")
    assert merge_conflict(_ctx("foo", "old"), overlay, MergeStrategy.OVERRIDE) is overlay


def test_merge_combines_content_and_metadata() -> None:
    base = _ctx("foo", "Base", {"owner": "org", "level": 1})
    overlay = _ctx("foo", "Extra", {"level": 2})

    merged = merge_conflict(base, overlay, "merge")

    assert merged.content == f"Base{MERGE_SEPARATOR}Extra"
    assert merged.metadata == {"owner": "org", "level": 2}
    assert base.content == "Base"


def test_append_keeps_base_metadata() -> None:
    merged = merge_conflict(_ctx("foo", "Base", {"owner": "org"}), _ctx("foo", "More", {"owner": "x"}), "append")
    assert merged.content == f"Base{APPEND_SEPARATOR}More"
    assert merged.metadata == {"owner": "org"}


def test_unknown_strategy_is_rejected() -> None:
    with pytest.raises(ValueError):
        merge_conflict(_ctx("foo", "a"), _ctx("foo", "b"), "squash")

from __future__ import annotations

from pathlib import Path

import pytest

from faber.core.concepts import ConceptType
from faber.core.errors import ConfigError
from faber.core.overlays import (
    OverlayResolver,
    collect_contexts,
    count_contexts,
    has_overlays,
    merge_configurations,
)
from helpers import write_overlay_config, write_overlay_context, write_text


@pytest.fixture
def overlay_root(tmp_path: Path) -> Path:
    root = tmp_path / ".faber" / "overlays"
    write_overlay_context(root, "organization", "standards/house-style", "# House\n")
    write_overlay_context(root, "platforms/github-issues", "references/labels", "# Labels\n")
    write_overlay_context(root, "platforms/github-issues", "standards/triage", "# Triage\n")
    write_overlay_context(root, "roles/example-role", "patterns/estimates", "# Estimates\n")
    write_overlay_context(root, "roles/other-role", "patterns/unrelated", "# Nope\n")
    write_text(root / "roles" / "example-role" / "contexts" / "patterns" / "notes.txt", "ignored")
    return root


def test_resolve_overlays_loads_matching_layers(overlay_root: Path) -> None:
    overlays = OverlayResolver(overlay_root).resolve_overlays(ConceptType.ROLE, "example-role", "github-issues")

    assert [c.key for c in overlays.organization.contexts] == ["standards/house-style"]
    assert [c.key for c in overlays.platforms["github-issues"].contexts] == [
        "standards/triage",
        "references/labels",
    ]
    assert [c.key for c in overlays.roles["example-role"].contexts] == ["patterns/estimates"]
    assert "other-role" not in overlays.roles
    assert count_contexts(overlays) == 4
    assert has_overlays(overlays)


def test_organization_layer_is_loaded_without_platform(overlay_root: Path) -> None:
    overlays = OverlayResolver(overlay_root).resolve_overlays("role", "example-role")

    assert [c.name for c in overlays.organization.contexts] == ["house-style"]
    assert dict(overlays.platforms) == {}


def test_layers_come_out_in_precedence_order(overlay_root: Path) -> None:
    overlays = OverlayResolver(overlay_root).resolve_overlays("role", "example-role", "github-issues")

    assert [layer for layer, _ in overlays.layers()] == [
        "organization",
        "platforms/github-issues",
        "roles/example-role",
    ]
    assert [c.name for c in collect_contexts(overlays)] == [
        "house-style",
        "triage",
        "labels",
        "estimates",
    ]


def test_team_overlays_use_team_layer(tmp_path: Path) -> None:
    root = tmp_path / "overlays"
    write_overlay_context(root, "teams/squad", "playbooks/standup", "# Standup\n")
    overlays = OverlayResolver(root).resolve_overlays("team", "squad")
    assert [c.name for c in overlays.teams["squad"].contexts] == ["standup"]
    assert dict(overlays.roles) == {}


def test_missing_overlay_root_is_empty(tmp_path: Path) -> None:
    overlays = OverlayResolver(tmp_path / "nothing").resolve_overlays("role", "pm", "github")
    assert not has_overlays(overlays)
    assert overlays.platforms["github"].is_empty


def test_configs_merge_by_precedence_and_concatenate_lists(tmp_path: Path) -> None:
    root = tmp_path / "overlays"
    write_overlay_config(root, "organization", {"review": {"level": "org", "org_only": 1}, "labels": ["org"]})
    write_overlay_config(root, "platforms/github", {"review": {"level": "platform"}, "labels": ["platform"]})
    write_overlay_config(root, "roles/pm", {"review": {"level": "role"}, "labels": ["role"]})

    overlays = OverlayResolver(root).resolve_overlays("role", "pm", "github")
    merged = merge_configurations({"labels": ["base"]}, overlays)

    assert merged["review"] == {"level": "role", "org_only": 1}
    assert merged["labels"] == ["base", "org", "platform", "role"]


def test_empty_config_file_is_ignored(tmp_path: Path) -> None:
    root = tmp_path / "overlays"
    write_text(root / "organization" / "config.yml", "")
    overlays = OverlayResolver(root).resolve_overlays("role", "pm")
    assert overlays.organization.config is None


def test_malformed_overlay_config_is_fatal(tmp_path: Path) -> None:
    root = tmp_path / "overlays"
    write_text(root / "organization" / "config.yml", "key: [unclosed")
    with pytest.raises(ConfigError):
        OverlayResolver(root).resolve_overlays("role", "pm")

    write_text(root / "organization" / "config.yml", "- a\n- b\n")
    with pytest.raises(ConfigError):
        OverlayResolver(root).resolve_overlays("role", "pm")


def test_overlays_are_read_only(overlay_root: Path) -> None:
    overlays = OverlayResolver(overlay_root).resolve_overlays("role", "example-role")
    with pytest.raises(TypeError):
        overlays.roles["injected"] = overlays.organization  # type: ignore[index]

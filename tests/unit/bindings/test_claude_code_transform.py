from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from faber.core.bindings import create_binding
from faber.core.concepts import RoleLoader, TeamLoader
from faber.core.config import Config
from faber.core.errors import UnsupportedConceptError
from faber.core.overlays import MERGE_SEPARATOR, OverlayResolver
from faber.core.utils.text import parse_frontmatter
from helpers import FIXED_TIME, fixed_clock, role_metadata, write_overlay_context, write_role, write_yaml

DOCS = ".claude/docs/acme/delivery/pm"


def _role(tmp_path: Path, **kwargs):
    return RoleLoader().load(write_role(tmp_path, **kwargs))


def _config() -> Config:
    return Config.from_dict(
        {
            "mcp_servers": {
                "github": {"command": "npx", "args": ["-y", "github-mcp"]},
                "unused": {"url": "https://unused.example.com"},
            }
        }
    )


def test_tasks_are_copied_verbatim_without_duplicate_directories(tmp_path: Path) -> None:
    role = _role(tmp_path, tasks={"a": "# Task A\n", "b": "# Task B\n"})
    artifact = create_binding("claude-code", clock=fixed_clock).transform(role, Config())

    assert artifact.files[f"{DOCS}/tasks/a.md"] == "# Task A\n"
    assert artifact.files[f"{DOCS}/tasks/b.md"] == "# Task B\n"
    assert len(artifact.directories) == len(set(artifact.directories))
    assert f"{DOCS}/tasks" in artifact.directories


def test_output_layout(tmp_path: Path) -> None:
    role = _role(
        tmp_path,
        flows={"release": "# Release\n"},
        contexts={
            "platforms/platform-github": "---\nmcp_server: github\n---\n# GitHub\n",
            "standards/style": "# Style\n",
        },
    )
    artifact = create_binding("claude-code", clock=fixed_clock).transform(role, _config())

    assert artifact.paths == [
        ".claude/agents/pm.md",
        f"{DOCS}/contexts/platforms/platform-github.md",
        f"{DOCS}/contexts/standards/style.md",
        f"{DOCS}/tasks/triage.md",
        f"{DOCS}/flows/release.md",
        ".claude/faber/config.yaml",
    ]
    assert artifact.files[f"{DOCS}/contexts/platforms/platform-github.md"] == (
        "---\nmcp_server: github\n---\n\n# GitHub\n"
    )
    assert artifact.files[f"{DOCS}/contexts/standards/style.md"] == "# Style\n"
    assert yaml.safe_load(artifact.files[".claude/faber/config.yaml"]) == _config().to_dict()


def test_context_frontmatter_keeps_null_and_empty_values(tmp_path: Path) -> None:
    role = _role(
        tmp_path,
        contexts={
            "platforms/platform-github": "---\nmcp_server: github\n---\n# GitHub\n",
            "standards/style": "---\nowner: null\nrequired_tools: []\n---\n# Style\n",
            "standards/empty": "---\n{}\n---\n# Empty\n",
        },
    )
    files = create_binding("claude-code", clock=fixed_clock).transform(role, Config()).files

    style = parse_frontmatter(files[f"{DOCS}/contexts/standards/style.md"])
    assert style.frontmatter == {"owner": None, "required_tools": []}
    assert style.content == "\n# Style\n"

    empty = parse_frontmatter(files[f"{DOCS}/contexts/standards/empty.md"])
    assert empty.frontmatter == {}
    assert empty.content == "\n# Empty\n"


def test_agent_file_frontmatter_and_body(tmp_path: Path) -> None:
    role = _role(
        tmp_path,
        metadata=role_metadata(color="blue"),
        contexts={
            "platforms/platform-github": "---\nmcp_server: github\n---\n# GitHub\n",
            "standards/style": "# Style\n",
        },
    )
    agent = create_binding("claude").transform(role, _config()).files[".claude/agents/pm.md"]

    doc = parse_frontmatter(agent)
    assert doc.frontmatter == {
        "name": "pm",
        "description": "pm role",
        "color": "blue",
        "tools": "mcp__github",
    }
    body = doc.content
    assert "Do the work." in body
    assert "Platform: **github**" in body
    assert f"- [triage](/{DOCS}/tasks/triage.md)" in body
    assert f"- [style](/{DOCS}/contexts/standards/style.md)" in body
    assert "**github**: `npx`" in body
    assert "unused" not in body


def test_fixed_clock_makes_transforms_deterministic(tmp_path: Path) -> None:
    role = _role(tmp_path, tasks={"b": "B", "a": "A"})
    binding = create_binding("claude-code", clock=fixed_clock)

    first = binding.transform(role, _config())
    second = binding.transform(role, _config())

    assert first.metadata.timestamp == FIXED_TIME
    assert first.to_dict(include_content=True) == second.to_dict(include_content=True)
    assert first.metadata.to_dict()["concept"] == "role:pm"


def test_overlay_contexts_get_per_layer_files(tmp_path: Path) -> None:
    role = _role(tmp_path)
    root = tmp_path / ".faber" / "overlays"
    write_overlay_context(root, "organization", "standards/house", "# House\n")
    write_overlay_context(root, "roles/pm", "patterns/estimates", "# Estimates\n")
    overlays = OverlayResolver(root).resolve_overlays("role", "pm", "github")

    artifact = create_binding("claude-code").transform(role, Config(), overlays, "github")

    assert artifact.files[f"{DOCS}/contexts/_overlays/organization/standards/house.md"] == "# House\n"
    assert artifact.files[f"{DOCS}/contexts/_overlays/roles/pm/patterns/estimates.md"] == "# Estimates\n"
    agent = artifact.files[".claude/agents/pm.md"]
    assert "/.faber/overlays/organization/contexts/standards/house.md" in agent


def test_conflict_strategy_folds_overlays_into_base(tmp_path: Path) -> None:
    role = _role(
        tmp_path,
        contexts={"platforms/platform-github": "# GitHub\n", "standards/style": "Base style"},
    )
    root = tmp_path / "overlays"
    write_overlay_context(root, "organization", "standards/style", "Org style")
    overlays = OverlayResolver(root).resolve_overlays("role", "pm")

    plain = create_binding("claude-code").transform(role, Config(), overlays)
    folded = create_binding("claude-code", conflict_strategy="merge").transform(role, Config(), overlays)

    assert plain.files[f"{DOCS}/contexts/standards/style.md"] == "Base style"
    assert folded.files[f"{DOCS}/contexts/standards/style.md"] == f"Base style{MERGE_SEPARATOR}Org style"
    assert folded.files[f"{DOCS}/contexts/_overlays/organization/standards/style.md"] == "Org style"


def test_binding_override_changes_paths(tmp_path: Path) -> None:
    role = _role(tmp_path)
    transformer = create_binding("claude-code", {"output_structure": {"role_path": "agents/{org}-{name}.md"}})
    assert "agents/acme-pm.md" in transformer.transform(role, Config()).files


def test_non_role_concepts_are_rejected(tmp_path: Path) -> None:
    write_yaml(
        tmp_path / "team" / "team.yml",
        {"org": "acme", "system": "s", "name": "squad", "type": "team", "description": "d", "members": ["pm"]},
    )
    team = TeamLoader().load(tmp_path / "team")
    with pytest.raises(UnsupportedConceptError):
        create_binding("claude-code").transform(team, Config())

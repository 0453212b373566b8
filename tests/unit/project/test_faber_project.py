from __future__ import annotations

import datetime as dt
from pathlib import Path

import pytest
import yaml

from faber.core.concepts import ConceptType, Role
from faber.core.errors import ConfigError, FaberError
from faber.core.project import FaberProject
from helpers import fixed_clock, write_overlay_config, write_overlay_context, write_role, write_yaml


def test_init_creates_layout_config_and_example(isolated_project_env: Path) -> None:
    project = FaberProject(isolated_project_env)
    created = project.init_project()

    root = isolated_project_env
    for ct in ConceptType:
        assert (root / ct.directory).is_dir()
    assert (root / ".faber" / "overlays" / "organization" / "contexts" / "standards").is_dir()
    assert (root / ".faber" / "config.yml").is_file()
    assert (root / "roles" / "example-role" / "agent.yml").is_file()
    assert root / "roles" / "example-role" in created

    assert project.init_project() == []


def test_init_without_example(isolated_project_env: Path) -> None:
    FaberProject(isolated_project_env).init_project(with_example=False)
    assert not (isolated_project_env / "roles" / "example-role").exists()


def test_example_role_validates(initialized_project: FaberProject) -> None:
    result = initialized_project.validate_concept("role", "example-role")
    assert result.valid, result.to_dict()


def test_example_role_builds_with_configured_platform(initialized_project: FaberProject) -> None:
    result = initialized_project.build("claude-code", "role", "example-role", clock=fixed_clock)

    assert result.platform == "github-issues"
    assert result.binding == "claude-code"
    agent = result.artifact.files[".claude/agents/example-role.md"]
    assert "Platform: **github-issues**" in agent


def test_create_role_scaffold(isolated_project_env: Path) -> None:
    project = FaberProject(isolated_project_env)
    path = project.create_concept(
        "role",
        "release-manager",
        org="acme",
        system="delivery",
        platforms="linear, jira",
        today=dt.date(2024, 5, 6),
    )

    meta = yaml.safe_load((path / "agent.yml").read_text(encoding="utf-8"))
    assert meta["platforms"] == ["linear", "jira"]
    assert meta["default_platform"] == "linear"
    assert meta["created"] == "2024-05-06"
    assert (path / "contexts" / "platforms" / "platform-jira.md").is_file()
    assert "faber validate role release-manager" in (path / "README.md").read_text(encoding="utf-8")

    findings = {(i.path, i.message) for i in project.validate_concept("role", "release-manager").errors}
    assert findings == {("tasks|flows", "Role must have at least one task or flow")}


@pytest.mark.parametrize(
    "kind,kwargs",
    [
        ("tool", {"tool_type": "mcp-server"}),
        ("team", {"members": "pm,dev"}),
        ("workflow", {}),
        ("eval", {"target": "role:pm"}),
    ],
)
def test_created_concepts_load(isolated_project_env: Path, kind: str, kwargs) -> None:
    project = FaberProject(isolated_project_env)
    project.create_concept(kind, "sample", **kwargs)

    concept = project.load_concept(kind, "sample")
    assert concept.name == "sample"
    assert concept.concept_type.value == kind


def test_created_team_and_eval_validate(isolated_project_env: Path) -> None:
    project = FaberProject(isolated_project_env)
    project.create_concept("team", "squad", members="pm,dev")
    project.create_concept("eval", "pm-check", target="role:pm")

    assert project.validate_concept("team", "squad").valid
    assert project.validate_concept("eval", "pm-check").valid


def test_create_refuses_to_overwrite(isolated_project_env: Path) -> None:
    project = FaberProject(isolated_project_env)
    project.create_concept("workflow", "release")
    with pytest.raises(FaberError, match="already exists"):
        project.create_concept("workflows", "release")


def test_list_concepts(isolated_project_env: Path) -> None:
    project = FaberProject(isolated_project_env)
    write_role(isolated_project_env, "b-role")
    write_role(isolated_project_env, "a-role")
    (isolated_project_env / "roles" / "not-a-concept").mkdir()
    project.create_concept("team", "squad", members="a-role")

    infos = project.list_concepts()
    assert [(i.type.value, i.name) for i in infos] == [("role", "a-role"), ("role", "b-role"), ("team", "squad")]
    assert [i.name for i in project.list_concepts("teams")] == ["squad"]
    assert infos[0].description == "a-role role"


def test_build_applies_overlay_configs_and_role_binding_override(isolated_project_env: Path) -> None:
    root = isolated_project_env
    role_dir = write_role(root, "pm")
    write_yaml(role_dir / "bindings" / "claude-code.binding.yml", {"output_structure": {"role_path": "agents/{name}.md"}})
    write_yaml(root / ".faber" / "config.yml", {"platforms": {"pm": "github"}})
    overlays = root / ".faber" / "overlays"
    write_overlay_context(overlays, "organization", "standards/house", "# House\n")
    write_overlay_config(overlays, "organization", {"mcp_servers": {"github": {"command": "gh-mcp"}}})

    project = FaberProject(root)
    result = project.build("claude", "role", "pm", clock=fixed_clock)

    files = result.artifact.files
    assert "agents/pm.md" in files
    assert "tools: mcp__github" in files["agents/pm.md"]
    deployed = yaml.safe_load(files[".claude/faber/config.yaml"])
    assert deployed["mcp_servers"] == {"github": {"command": "gh-mcp"}}
    assert ".claude/docs/acme/delivery/pm/contexts/_overlays/organization/standards/house.md" in files

    plain = project.build("claude", "role", "pm", use_overlays=False, clock=fixed_clock)
    assert not any("_overlays" in p for p in plain.artifact.files)


def test_project_binding_settings_apply_before_role_override(isolated_project_env: Path) -> None:
    root = isolated_project_env
    write_role(root, "pm")
    write_yaml(
        root / ".faber" / "config.yml",
        {"bindings": {"claude": {"output_structure": {"role_path": "team-agents/{name}.md"}}}},
    )
    project = FaberProject(root)
    role = project.load_concept("role", "pm")
    assert isinstance(role, Role)

    assert project.binding_overrides("claude-code", role) == {
        "output_structure": {"role_path": "team-agents/{name}.md"}
    }
    assert "team-agents/pm.md" in project.build("claude-code", "role", "pm").artifact.files


def test_platform_flag_overrides_detection(isolated_project_env: Path) -> None:
    write_role(isolated_project_env, "pm")
    result = FaberProject(isolated_project_env).build("claude-code", "role", "pm", platform="linear")
    assert result.platform == "linear"


def test_write_nests_under_binding_in_deployments_dir(isolated_project_env: Path) -> None:
    write_role(isolated_project_env, "pm")
    project = FaberProject(isolated_project_env)
    written = project.write(project.build("claude-code", "role", "pm").artifact)

    agent = isolated_project_env / "deployments" / "claude-code" / ".claude" / "agents" / "pm.md"
    assert agent in written
    assert agent.is_file()


def test_overlay_config_values_expand_env_vars(isolated_project_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FABER_GH_TOKEN", "secret")
    root = isolated_project_env
    write_role(root, "pm")
    write_overlay_config(
        root / ".faber" / "overlays",
        "organization",
        {"mcp_servers": {"gh": {"url": "https://gh.example.com", "api_key": "${FABER_GH_TOKEN}"}}},
    )

    result = FaberProject(root).build("claude-code", "role", "pm", clock=fixed_clock)

    assert result.artifact.metadata.config.mcp_servers["gh"].api_key == "secret"
    deployed = yaml.safe_load(result.artifact.files[".claude/faber/config.yaml"])
    assert deployed["mcp_servers"]["gh"]["api_key"] == "secret"


def test_overlay_config_is_schema_checked(isolated_project_env: Path) -> None:
    root = isolated_project_env
    write_role(root, "pm")
    write_overlay_config(root / ".faber" / "overlays", "organization", {"platforms": {"pm": 3}})

    with pytest.raises(ConfigError):
        FaberProject(root).build("claude-code", "role", "pm")

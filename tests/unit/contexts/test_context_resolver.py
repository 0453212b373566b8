from __future__ import annotations

from pathlib import Path

from faber.core.concepts import RoleLoader
from faber.core.config import Config
from faber.core.contexts import (
    Context,
    ContextCategory,
    ContextResolver,
    group_by_category,
    merge_contexts,
    sort_by_priority,
)
from faber.core.overlays import OverlayContent, Overlays
from helpers import role_metadata, write_role


def _ctx(category: ContextCategory, name: str, content: str = "") -> Context:
    return Context(category=category, name=name, content=content or f"{name} body")


def _role(tmp_path: Path, **meta):
    write_role(
        tmp_path,
        "pm",
        metadata=role_metadata("pm", platforms=["github", "linear"], **meta),
        contexts={
            "platforms/platform-github": "# GitHub\n",
            "platforms/platform-linear": "# Linear\n",
            "standards/style": "# Style\n",
            "specialists/specialist-security": "# Security\n",
        },
    )
    return RoleLoader().load(tmp_path / "roles" / "pm")


def test_detect_platform_prefers_project_config(tmp_path: Path) -> None:
    role = _role(tmp_path, platform_config_key="pm-key")
    resolver = ContextResolver()

    assert resolver.detect_platform(role, Config()) == "github"
    assert resolver.detect_platform(role, Config(platforms={"pm-key": "linear"})) == "linear"
    assert resolver.detect_platform(role, Config(platforms={"pm": "linear"})) == "linear"


def test_platform_and_specialist_lookup(tmp_path: Path) -> None:
    role = _role(tmp_path)
    resolver = ContextResolver()

    assert resolver.platform_context(role.contexts, "linear").content == "# Linear\n"
    assert resolver.platform_context(role.contexts, "jira") is None
    assert resolver.specialist_context(role.contexts, "security").name == "specialist-security"


def test_analyze_request_matches_keywords_case_insensitively() -> None:
    resolver = ContextResolver()
    assert resolver.analyze_request("Plan the next SPRINT and check Kubernetes") == ["sprint-planning", "containers"]
    assert resolver.analyze_request("hello") == []


def test_resolve_contexts_orders_platform_overlays_standards(tmp_path: Path) -> None:
    role = _role(tmp_path)
    org = _ctx(ContextCategory.STANDARD, "org-rules")
    plat = _ctx(ContextCategory.REFERENCE, "gh-tips")
    own = _ctx(ContextCategory.PATTERN, "pm-extra")
    overlays = Overlays(
        organization=OverlayContent(contexts=(org,)),
        platforms={"github": OverlayContent(contexts=(plat,))},
        roles={"pm": OverlayContent(contexts=(own,))},
    )

    resolved = ContextResolver().resolve_contexts(role, Config(), overlays)

    assert [c.name for c in resolved] == ["platform-github", "org-rules", "gh-tips", "style", "pm-extra"]


def test_resolve_contexts_without_overlays(tmp_path: Path) -> None:
    role = _role(tmp_path)
    resolved = ContextResolver().resolve_contexts(role, Config(platforms={"pm": "linear"}))
    assert [c.key for c in resolved] == ["platforms/platform-linear", "standards/style"]


def test_sort_by_priority_is_stable_within_a_category() -> None:
    contexts = [
        _ctx(ContextCategory.TROUBLESHOOTING, "t"),
        _ctx(ContextCategory.STANDARD, "s2"),
        _ctx(ContextCategory.PLATFORM, "p"),
        _ctx(ContextCategory.STANDARD, "s1"),
    ]
    assert [c.name for c in sort_by_priority(contexts)] == ["p", "s2", "s1", "t"]


def test_group_by_category_includes_empty_categories() -> None:
    grouped = group_by_category([_ctx(ContextCategory.PATTERN, "x")])
    assert set(grouped) == {c.value for c in ContextCategory}
    assert [c.name for c in grouped["patterns"]] == ["x"]
    assert grouped["standards"] == []


def test_merge_contexts_adds_headers() -> None:
    merged = merge_contexts([_ctx(ContextCategory.STANDARD, "a", "A"), _ctx(ContextCategory.PATTERN, "b", "B")])
    assert merged == "# Context: a (standards)\nA\n---\n\n# Context: b (patterns)\nB\n---\n"

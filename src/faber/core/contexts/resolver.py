"""Context resolution: platform/specialist lookup, request analysis, ordering."""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Mapping, Optional, Tuple

from .models import CATEGORY_PRIORITY, UNRANKED_PRIORITY, Context, ContextCategory, context_key

if TYPE_CHECKING:
    from faber.core.concepts.models import Role
    from faber.core.config.models import Config
    from faber.core.overlays.models import Overlays


# (keywords, specialist) in match order.
SPECIALIST_KEYWORDS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("sprint", "iteration", "planning"), "sprint-planning"),
    (("security", "vulnerability", "audit"), "security"),
    (("performance", "optimization", "latency"), "performance"),
    (("monorepo", "multi-package"), "monorepo"),
    (("microservice", "micro-service"), "microservices"),
    (("docker", "container", "kubernetes"), "containers"),
    (("ci", "cd", "pipeline", "deployment"), "cicd"),
    (("test", "testing", "tdd", "bdd"), "testing"),
)


class ContextResolver:
    """Pick the contexts that apply to a role in a given build."""

    def platform_context(self, contexts: Mapping[str, Context], platform: str) -> Optional[Context]:
        return contexts.get(context_key(ContextCategory.PLATFORM, f"platform-{platform}"))

    def specialist_context(self, contexts: Mapping[str, Context], name: str) -> Optional[Context]:
        return contexts.get(context_key(ContextCategory.SPECIALIST, f"specialist-{name}"))

    def analyze_request(self, request: str) -> List[str]:
        """Return specialist names whose keywords occur in ``request``.

        Matching is case-insensitive substring containment, so short keywords
        such as ``ci`` also match inside longer words.

        Example:
            >>> ContextResolver().analyze_request("Audit the Docker setup")
            ['security', 'containers']
        """
        text = request.lower()
        found: List[str] = []
        for keywords, specialist in SPECIALIST_KEYWORDS:
            if specialist not in found and any(k in text for k in keywords):
                found.append(specialist)
        return found

    def detect_platform(self, role: "Role", config: "Config") -> Optional[str]:
        """Active platform: project config first, then the role's default."""
        key = role.metadata.platform_config_key
        for candidate in (key, role.name):
            if candidate and config.platforms.get(candidate):
                return str(config.platforms[candidate])
        return role.metadata.default_platform

    def resolve_contexts(
        self,
        role: "Role",
        config: "Config",
        overlays: Optional["Overlays"] = None,
    ) -> List[Context]:
        """Ordered context list for ``role``.

        Order: active platform context, organization overlays, active
        platform overlays, base standards, role overlays.
        """
        resolved: List[Context] = []
        platform = self.detect_platform(role, config)

        if platform:
            ctx = self.platform_context(role.contexts, platform)
            if ctx is not None:
                resolved.append(ctx)

        if overlays is not None:
            resolved.extend(overlays.organization.contexts)
            if platform and platform in overlays.platforms:
                resolved.extend(overlays.platforms[platform].contexts)

        resolved.extend(filter_by_category(role.contexts.values(), ContextCategory.STANDARD))

        if overlays is not None and role.name in overlays.roles:
            resolved.extend(overlays.roles[role.name].contexts)

        return resolved


def sort_by_priority(contexts: Iterable[Context]) -> List[Context]:
    """Return a new list ordered by category rank (stable within a rank)."""
    return sorted(contexts, key=lambda c: CATEGORY_PRIORITY.get(c.category, UNRANKED_PRIORITY))


def filter_by_category(contexts: Iterable[Context], category: ContextCategory) -> List[Context]:
    return [c for c in contexts if c.category == category]


def group_by_category(contexts: Iterable[Context]) -> Dict[str, List[Context]]:
    """Group contexts under every category value (empty lists included)."""
    grouped: Dict[str, List[Context]] = {c.value: [] for c in ContextCategory}
    for ctx in contexts:
        grouped[ctx.category.value].append(ctx)
    return grouped


def merge_contexts(contexts: Iterable[Context]) -> str:
    """Concatenate contexts into one document with a header per context."""
    parts = [
        f"# Context: {ctx.name} ({ctx.category.value})\n{ctx.content}\n---\n"
        for ctx in contexts
    ]
    return "\n".join(parts)


def requires_mcp_server(context: Context) -> bool:
    return context.requires_mcp_server


def required_tools(context: Context) -> List[str]:
    return context.required_tools


__all__ = [
    "SPECIALIST_KEYWORDS",
    "ContextResolver",
    "sort_by_priority",
    "filter_by_category",
    "group_by_category",
    "merge_contexts",
    "requires_mcp_server",
    "required_tools",
]

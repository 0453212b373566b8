"""Context data model.

A context is a categorized knowledge document attached to a role (or an
overlay layer). Category values double as the on-disk directory names under
``contexts/``.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


class ContextCategory(str, Enum):
    PLATFORM = "platforms"
    STANDARD = "standards"
    SPECIALIST = "specialists"
    PLAYBOOK = "playbooks"
    PATTERN = "patterns"
    REFERENCE = "references"
    TROUBLESHOOTING = "troubleshooting"


# Lower rank sorts (and is concatenated) first.
CATEGORY_PRIORITY: Dict[ContextCategory, int] = {
    ContextCategory.PLATFORM: 1,
    ContextCategory.STANDARD: 2,
    ContextCategory.SPECIALIST: 3,
    ContextCategory.PLAYBOOK: 4,
    ContextCategory.PATTERN: 5,
    ContextCategory.REFERENCE: 6,
    ContextCategory.TROUBLESHOOTING: 7,
}

UNRANKED_PRIORITY = 99


@dataclass(frozen=True)
class Context:
    """An immutable, categorized knowledge document.

    Attributes:
        category: One of the seven fixed categories
        name: File stem (e.g. ``platform-github``)
        content: Markdown body without frontmatter
        metadata: Parsed frontmatter, or None when the file had none
        path: Source file path
    """

    category: ContextCategory
    name: str
    content: str
    metadata: Optional[Dict[str, Any]] = None
    path: Optional[Path] = None

    @property
    def key(self) -> str:
        return f"{self.category.value}/{self.name}"

    @property
    def mcp_server(self) -> Optional[str]:
        value = (self.metadata or {}).get("mcp_server")
        if not value or value == "null":
            return None
        return str(value)

    @property
    def required_tools(self) -> List[str]:
        tools = (self.metadata or {}).get("required_tools") or []
        return [str(t) for t in tools] if isinstance(tools, list) else []

    @property
    def requires_mcp_server(self) -> bool:
        return self.mcp_server is not None

    def with_content(self, content: str, metadata: Optional[Dict[str, Any]] = None) -> "Context":
        """Return a copy with new content (and optionally new metadata)."""
        if metadata is None:
            return replace(self, content=content)
        return replace(self, content=content, metadata=metadata)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "name": self.name,
            "content": self.content,
            "metadata": dict(self.metadata) if self.metadata else None,
            "path": self.path.as_posix() if self.path else None,
        }


def context_key(category: ContextCategory, name: str) -> str:
    return f"{category.value}/{name}"


__all__ = [
    "ContextCategory",
    "CATEGORY_PRIORITY",
    "UNRANKED_PRIORITY",
    "Context",
    "context_key",
]

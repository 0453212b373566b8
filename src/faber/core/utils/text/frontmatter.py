"""YAML frontmatter for concept documents.

Contexts, tasks and prompts are Markdown files that may open with a YAML
block between ``---`` markers:

    ---
    mcp_server: github
    required_tools: [create_issue]
    ---
    # Body

Parsing never raises. Without a block, or when the block is not a YAML
mapping, the whole input comes back as the body and the metadata is None.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

# Block must open the file; the body runs to EOF.
FRONTMATTER_PATTERN = re.compile(r"^---\n([\s\S]*?)\n---\n([\s\S]*)$")


@dataclass(frozen=True)
class ParsedDocument:
    frontmatter: Optional[Dict[str, Any]]
    content: str


def parse_frontmatter(content: str) -> ParsedDocument:
    """Split ``content`` into metadata and body.

    Example:
        >>> parse_frontmatter("---\\nname: x\\n---\\nBody")
        ParsedDocument(frontmatter={'name': 'x'}, content='Body')
    """
    match = FRONTMATTER_PATTERN.match(content)
    if match is None:
        return ParsedDocument(None, content)
    try:
        metadata = yaml.safe_load(match.group(1))
    except yaml.YAMLError:
        return ParsedDocument(None, content)
    if not isinstance(metadata, dict):
        return ParsedDocument(None, content)
    return ParsedDocument(metadata, match.group(2))


def format_frontmatter(data: Dict[str, Any], *, exclude_none: bool = True) -> str:
    """Render ``data`` as a ``---`` delimited block, keys in insertion order."""
    if exclude_none:
        data = {key: value for key, value in data.items() if value is not None}
    body = yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{body}---\n"


__all__ = [
    "ParsedDocument",
    "parse_frontmatter",
    "format_frontmatter",
    "FRONTMATTER_PATTERN",
]

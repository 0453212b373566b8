"""Text processing utilities.

- frontmatter: YAML frontmatter parsing/formatting
- templates: Jinja2 environments and path placeholder substitution
"""
from __future__ import annotations

from .frontmatter import (
    ParsedDocument,
    parse_frontmatter,
    format_frontmatter,
    FRONTMATTER_PATTERN,
)
from .templates import (
    create_environment,
    render_template_text,
    render_path_template,
)

__all__ = [
    "ParsedDocument",
    "parse_frontmatter",
    "format_frontmatter",
    "FRONTMATTER_PATTERN",
    "create_environment",
    "render_template_text",
    "render_path_template",
]

"""Text template rendering.

Two flavours are used by bindings:
- Jinja2 for document templates (agent frontmatter/body)
- ``{placeholder}`` substitution for output path templates
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, Mapping

from jinja2 import Environment, FileSystemLoader, StrictUndefined


_PLACEHOLDER_RE = re.compile(r"\{([a-zA-Z0-9_]+)\}")


def create_environment(search_path: Path) -> Environment:
    """Build the Jinja2 environment used for binding templates.

    Templates use control blocks on their own lines; without trimming those
    tag-only lines would become empty lines in the rendered agent file.
    """
    return Environment(
        loader=FileSystemLoader(str(search_path)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
        autoescape=False,
    )


def render_template_text(text: str, context: Dict[str, Any]) -> str:
    """Render a Jinja2 template string with ``context``."""
    env = Environment(trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)
    return env.from_string(text).render(**context)


def render_path_template(template: str, values: Mapping[str, Any]) -> str:
    """Substitute ``{key}`` placeholders in a path template.

    Unknown placeholders are left untouched.

    Example:
        >>> render_path_template(".claude/agents/{org}-{name}.md", {"org": "acme", "name": "pm"})
        '.claude/agents/acme-pm.md'
    """

    def repl(m: re.Match[str]) -> str:
        key = m.group(1)
        if key not in values or values[key] is None:
            return m.group(0)
        return str(values[key])

    return _PLACEHOLDER_RE.sub(repl, template)


__all__ = [
    "create_environment",
    "render_template_text",
    "render_path_template",
]

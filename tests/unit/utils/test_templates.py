from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import UndefinedError

from faber.core.utils.text import create_environment, render_path_template, render_template_text


def test_render_path_template_substitutes_known_placeholders() -> None:
    assert (
        render_path_template(".claude/docs/{org}/{system}/{name}", {"org": "acme", "system": "s", "name": "pm"})
        == ".claude/docs/acme/s/pm"
    )


def test_render_path_template_leaves_unknown_placeholders() -> None:
    assert render_path_template("{org}/{missing}", {"org": "acme"}) == "acme/{missing}"


def test_render_template_text_trims_block_lines() -> None:
    text = "items:\n{% for i in items %}\n- {{ i }}\n{% endfor %}\n"
    assert render_template_text(text, {"items": ["a", "b"]}) == "items:\n- a\n- b\n"


def test_environment_is_strict_about_undefined_values(tmp_path: Path) -> None:
    (tmp_path / "t.j2").write_text("{{ missing }}", encoding="utf-8")
    template = create_environment(tmp_path).get_template("t.j2")

    with pytest.raises(UndefinedError):
        template.render({})

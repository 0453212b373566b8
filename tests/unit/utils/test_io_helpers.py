from __future__ import annotations

from pathlib import Path

import pytest

from faber.core.utils.io import dump_yaml_string, ensure_directory, list_directories, list_files, read_yaml, write_text


def test_list_files_is_sorted_and_filtered(tmp_path: Path) -> None:
    for name in ("b.md", "a.md", "c.txt"):
        write_text(tmp_path / name, name)
    (tmp_path / "sub").mkdir()

    assert [p.name for p in list_files(tmp_path, ".md")] == ["a.md", "b.md"]


def test_list_helpers_treat_missing_directories_as_empty(tmp_path: Path) -> None:
    assert list_files(tmp_path / "nope") == []
    assert list_directories(tmp_path / "nope") == []


def test_ensure_directory_rejects_files(tmp_path: Path) -> None:
    target = write_text(tmp_path / "file", "x")
    with pytest.raises(NotADirectoryError):
        ensure_directory(target)


def test_read_yaml_returns_default_for_missing_or_invalid(tmp_path: Path) -> None:
    bad = write_text(tmp_path / "bad.yml", "key: [unclosed")
    assert read_yaml(tmp_path / "missing.yml", default={}) == {}
    assert read_yaml(bad, default={"d": 1}) == {"d": 1}


def test_dump_yaml_string_sorts_keys_by_default() -> None:
    assert dump_yaml_string({"b": 1, "a": 2}) == "a: 2\nb: 1\n"
    assert dump_yaml_string({"b": 1, "a": 2}, sort_keys=False) == "b: 1\na: 2\n"

from __future__ import annotations

import copy

from faber.core.utils.merge import deep_merge, merge_all, merge_arrays


def test_deep_merge_recurses_into_mappings() -> None:
    base = {"a": 1, "nested": {"x": 1, "y": {"deep": True}}}
    override = {"nested": {"y": {"other": 2}, "z": 3}}

    assert deep_merge(base, override) == {
        "a": 1,
        "nested": {"x": 1, "y": {"deep": True, "other": 2}, "z": 3},
    }


def test_deep_merge_concatenates_lists_by_default() -> None:
    assert deep_merge({"tags": ["a"]}, {"tags": ["b", "c"]}) == {"tags": ["a", "b", "c"]}


def test_deep_merge_replaces_lists_when_concat_disabled() -> None:
    merged = deep_merge({"o": {"paths": ["default"]}}, {"o": {"paths": ["mine"]}}, concat_lists=False)
    assert merged == {"o": {"paths": ["mine"]}}


def test_deep_merge_scalar_override_wins_even_over_mapping() -> None:
    assert deep_merge({"k": {"a": 1}}, {"k": "flat"}) == {"k": "flat"}
    assert deep_merge({"k": [1]}, {"k": {"a": 1}}) == {"k": {"a": 1}}


def test_deep_merge_does_not_mutate_inputs() -> None:
    base = {"a": {"list": [1]}, "b": 1}
    override = {"a": {"list": [2], "new": {"n": 1}}}
    base_before = copy.deepcopy(base)
    override_before = copy.deepcopy(override)

    merged = deep_merge(base, override)
    merged["a"]["list"].append(99)
    merged["a"]["new"]["n"] = 42

    assert base == base_before
    assert override == override_before


def test_deep_merge_accepts_none_override() -> None:
    assert deep_merge({"a": 1}, None) == {"a": 1}


def test_merge_arrays_appends() -> None:
    assert merge_arrays([1, 2], [3]) == [1, 2, 3]


def test_merge_all_skips_none_layers_and_applies_in_order() -> None:
    merged = merge_all({"v": 0, "l": ["base"]}, [None, {"v": 1, "l": ["one"]}, {}, {"v": 2, "l": ["two"]}])
    assert merged == {"v": 2, "l": ["base", "one", "two"]}

# tests/modgate/core/test_dictpath.py
from __future__ import annotations

import pytest

from modgate.core.dictpath import deleteByPath, setByPath, splitPath
from modgate.core.utils import deepMerge, joinIdentifiers


@pytest.mark.parametrize(
    "path, expected",
    [
        ("gating", ["gating"]),
        ("gating.patienceSeconds", ["gating", "patienceSeconds"]),
        (r"mods.My\.Lib.enabled", ["mods", "My.Lib", "enabled"]),
        (r"a\\b", ["a\\b"]),
    ],
)
def test_splitPath(path, expected):
    assert splitPath(path) == expected


@pytest.mark.parametrize("path", ["", "a..b", ".a", "a.", "a\\"])
def test_splitPath_rejects(path):
    with pytest.raises(ValueError):
        splitPath(path)


def test_setByPath_creates_only_when_asked():
    data: dict = {}
    with pytest.raises(KeyError):
        setByPath(data, "ui.language", "de")
    setByPath(data, "ui.language", "de", createIfMissing=True)
    assert data == {"ui": {"language": "de"}}


def test_setByPath_refuses_non_mapping():
    data = {"ui": "flat"}
    with pytest.raises(TypeError):
        setByPath(data, "ui.language", "de", createIfMissing=True)


def test_deleteByPath_prunes_empty_parents():
    data = {"a": {"b": {"c": 1}}, "keep": 1}
    assert deleteByPath(data, "a.b.c") is True
    assert data == {"keep": 1}
    assert deleteByPath(data, "a.b.c") is False


def test_deleteByPath_without_pruning():
    data = {"a": {"b": {"c": 1}}}
    deleteByPath(data, "a.b.c", pruneEmptyParents=False)
    assert data == {"a": {"b": {}}}


def test_deepMerge_recurses_dicts_and_replaces_rest():
    left = {"gating": {"patienceSeconds": 5.0, "hostApiPolicy": "tolerant"}, "tags": [1, 2]}
    right = {"gating": {"patienceSeconds": 1.0}, "tags": [3]}

    merged = deepMerge(left, right)

    assert merged == {"gating": {"patienceSeconds": 1.0, "hostApiPolicy": "tolerant"}, "tags": [3]}
    assert left["gating"]["patienceSeconds"] == 5.0


def test_joinIdentifiers_keeps_order_and_drops_repeats():
    assert joinIdentifiers(["B", "A", "B", "C"]) == "B, A, C"
    assert joinIdentifiers([]) == ""

from __future__ import annotations

import math

import pytest

from novadb import keypath
from novadb.errors import InvalidArgumentError, InvalidPathError, TypeMismatchError
from novadb.keypath import ABSENT, ValueKind


def test_parse_splits_on_dots():
    assert keypath.parse("a") == ("a",)
    assert keypath.parse("a.b.c") == ("a", "b", "c")


@pytest.mark.parametrize("bad", ["", ".", "a..b", ".a", "a."])
def test_parse_rejects_empty_segments(bad):
    with pytest.raises(InvalidPathError):
        keypath.parse(bad)


def test_parse_rejects_non_strings():
    with pytest.raises(InvalidArgumentError):
        keypath.parse(3)
    with pytest.raises(InvalidArgumentError):
        keypath.parse(None)


def test_get_walks_mappings_and_lists():
    doc = {"a": {"b": [10, {"c": "deep"}]}}
    assert keypath.get(doc, "a.b.0") == 10
    assert keypath.get(doc, "a.b.1.c") == "deep"
    assert keypath.get(doc, "a.b") == [10, {"c": "deep"}]


def test_get_returns_absent_instead_of_raising():
    doc = {"a": {"b": [10]}, "s": "text", "n": None}
    assert keypath.get(doc, "missing") is ABSENT
    assert keypath.get(doc, "a.b.5") is ABSENT
    assert keypath.get(doc, "a.b.x") is ABSENT
    assert keypath.get(doc, "a.b.-1") is ABSENT
    assert keypath.get(doc, "s.length") is ABSENT
    assert keypath.get(doc, "n.inner") is ABSENT


def test_has_counts_explicit_none():
    doc = {"n": None}
    assert keypath.has(doc, "n") is True
    assert keypath.has(doc, "m") is False


def test_set_creates_intermediate_mappings():
    doc: dict = {}
    keypath.set(doc, "a.b.c", 1)
    assert doc == {"a": {"b": {"c": 1}}}


def test_set_never_creates_lists_for_numeric_segments():
    doc: dict = {}
    keypath.set(doc, "a.0", "x")
    assert doc == {"a": {"0": "x"}}


def test_set_replaces_scalar_intermediate_with_mapping():
    doc = {"a": "scalar"}
    keypath.set(doc, "a.b", 2)
    assert doc == {"a": {"b": 2}}


def test_set_into_existing_list():
    doc = {"l": [1, 2]}
    keypath.set(doc, "l.0", 9)
    keypath.set(doc, "l.2", 3)
    assert doc == {"l": [9, 2, 3]}

    with pytest.raises(TypeMismatchError):
        keypath.set(doc, "l.7", 0)
    with pytest.raises(TypeMismatchError):
        keypath.set(doc, "l.name", 0)


def test_set_keeps_existing_key_position():
    doc = {"a": 1, "b": 2, "c": 3}
    keypath.set(doc, "a", 10)
    assert list(doc) == ["a", "b", "c"]


def test_unset_reports_whether_something_was_removed():
    doc = {"a": {"b": 1, "c": 2}, "l": ["x", "y"]}
    assert keypath.unset(doc, "a.b") is True
    assert keypath.unset(doc, "a.b") is False
    assert keypath.unset(doc, "l.0") is True
    assert keypath.unset(doc, "nope.deeper") is False
    # empty parents are kept
    assert keypath.unset(doc, "a.c") is True
    assert doc == {"a": {}, "l": ["y"]}


def test_kind_of_is_closed_over_document_values():
    assert keypath.kind_of(ABSENT) is ValueKind.ABSENT
    assert keypath.kind_of(None) is ValueKind.NULL
    assert keypath.kind_of(True) is ValueKind.BOOLEAN
    assert keypath.kind_of(1) is ValueKind.NUMBER
    assert keypath.kind_of(1.5) is ValueKind.NUMBER
    assert keypath.kind_of("s") is ValueKind.STRING
    assert keypath.kind_of([]) is ValueKind.LIST
    assert keypath.kind_of({}) is ValueKind.MAPPING
    assert keypath.kind_of(object()) is ValueKind.OTHER


def test_type_tag():
    assert keypath.type_tag([1]) == "array"
    assert keypath.type_tag(math.nan) == "NaN"
    assert keypath.type_tag(3) == "finite"
    assert keypath.type_tag(2.5) == "finite"
    assert keypath.type_tag(math.inf) == "number"
    assert keypath.type_tag("x") == "string"
    assert keypath.type_tag(False) == "boolean"
    assert keypath.type_tag(None) == "null"
    assert keypath.type_tag({}) == "object"
    assert keypath.type_tag(ABSENT) == "undefined"

"""Tests for field path lookups."""

from __future__ import annotations

import pytest

from netcompose.fieldpath import get_bool, get_integer, get_string, get_value, parse
from netcompose.models import FieldPathError

DOC = {
    "spec": {
        "id": "code",
        "count": 3,
        "ratio": 2.0,
        "half": 1.5,
        "enabled": True,
        "items": [{"name": "a"}, {"name": "b", "tags": ["x", "y"]}],
    }
}


def test_parse_splits_fields_and_indices() -> None:
    assert parse("spec.items[1].tags[0]") == ["spec", "items", 1, "tags", 0]


@pytest.mark.parametrize("path", ["", "spec..id", "spec.items[x]", "spec.[0]"])
def test_parse_rejects_invalid_paths(path: str) -> None:
    with pytest.raises(FieldPathError):
        parse(path)


def test_get_value_walks_objects_and_arrays() -> None:
    assert get_value(DOC, "spec.items[1].tags[1]") == "y"
    assert get_value(DOC, "spec.items[0]") == {"name": "a"}


def test_get_value_missing_field() -> None:
    with pytest.raises(FieldPathError, match="no such field"):
        get_value(DOC, "spec.region")


def test_get_value_index_out_of_bounds() -> None:
    with pytest.raises(FieldPathError, match="out of bounds"):
        get_value(DOC, "spec.items[5]")


def test_get_value_through_scalar() -> None:
    with pytest.raises(FieldPathError, match="spec.id is not an object"):
        get_value(DOC, "spec.id.value")
    with pytest.raises(FieldPathError, match="is not an array"):
        get_value(DOC, "spec.id[0]")


def test_typed_getters() -> None:
    assert get_string(DOC, "spec.id") == "code"
    assert get_integer(DOC, "spec.count") == 3
    assert get_bool(DOC, "spec.enabled") is True


def test_get_integer_accepts_whole_floats_only() -> None:
    assert get_integer(DOC, "spec.ratio") == 2
    with pytest.raises(FieldPathError, match="not an integer"):
        get_integer(DOC, "spec.half")


def test_typed_getters_reject_wrong_types() -> None:
    with pytest.raises(FieldPathError, match="not a string"):
        get_string(DOC, "spec.count")
    with pytest.raises(FieldPathError, match="not an integer"):
        get_integer(DOC, "spec.enabled")
    with pytest.raises(FieldPathError, match="not a bool"):
        get_bool(DOC, "spec.id")

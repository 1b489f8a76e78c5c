"""Unit tests for unstructured field extraction."""

import pytest

from ocm_dashboard.converters.fields import (
    mappings,
    nested,
    nested_bool,
    nested_int,
    nested_list,
    nested_map,
    nested_str,
    string_list,
    string_map,
)

OBJ = {
    "metadata": {"name": "east", "labels": {"a": "1"}},
    "spec": {"count": 3, "ratio": 2.0, "flag": True, "items": ["x", 1, "y"]},
}


class TestNested:
    """Test path walking."""

    def test_nested_path(self) -> None:
        assert nested(OBJ, "metadata", "name") == "east"

    def test_missing_path(self) -> None:
        assert nested(OBJ, "metadata", "uid") is None
        assert nested(OBJ, "status", "conditions") is None

    def test_walks_through_non_mapping(self) -> None:
        """Test that a scalar in the middle of a path yields None."""
        assert nested(OBJ, "metadata", "name", "deeper") is None

    def test_none_root(self) -> None:
        assert nested(None, "metadata") is None

    def test_typed_accessors(self) -> None:
        assert nested_str(OBJ, "metadata", "name") == "east"
        assert nested_str(OBJ, "spec", "count") is None
        assert nested_str(OBJ, "spec", "count", default="") == ""
        assert nested_map(OBJ, "metadata", "labels") == {"a": "1"}
        assert nested_map(OBJ, "metadata", "name") is None
        assert nested_list(OBJ, "spec", "items") == ["x", 1, "y"]
        assert nested_bool(OBJ, "spec", "flag") is True
        assert nested_bool(OBJ, "spec", "count") is None

    @pytest.mark.parametrize(
        "key,expected",
        [("count", 3), ("ratio", 2), ("flag", None), ("items", None)],
    )
    def test_nested_int(self, key: str, expected: int | None) -> None:
        """Test integer extraction rejects booleans."""
        assert nested_int(OBJ, "spec", key) == expected


class TestCollections:
    """Test map and list filtering."""

    def test_string_map_drops_non_strings(self) -> None:
        assert string_map({"a": "1", "b": 2, "c": None}) == {"a": "1"}

    def test_string_map_stringify(self) -> None:
        assert string_map({"cpu": 4, "memory": "16Gi", "ok": True}, stringify=True) == {
            "cpu": "4",
            "memory": "16Gi",
        }

    def test_string_map_empty_or_invalid(self) -> None:
        assert string_map({}) is None
        assert string_map(["a"]) is None
        assert string_map(None) is None

    def test_string_list(self) -> None:
        assert string_list(["a", 1, "b"]) == ["a", "b"]
        assert string_list([]) is None
        assert string_list("ab") is None

    def test_mappings(self) -> None:
        assert mappings([{"a": 1}, "x", None, {"b": 2}]) == [{"a": 1}, {"b": 2}]
        assert mappings({"a": 1}) == []

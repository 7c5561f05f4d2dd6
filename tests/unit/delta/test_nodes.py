"""Tests for delta key predicates and entry decoding."""

from __future__ import annotations

import pytest

from typesync.delta.nodes import (
    decode_entry,
    get_delta_value,
    is_changed_key,
    is_removed_key,
    iter_entries,
)
from typesync.errors import ErrorCode, TypeSyncDeltaError
from typesync.models import DeltaKind


class TestKeyPredicates:
    @pytest.mark.parametrize("key", ["0", "7", "12"])
    def test_changed_keys(self, key):
        assert is_changed_key(key)
        assert not is_removed_key(key)

    @pytest.mark.parametrize("key", ["_0", "_7", "_12"])
    def test_removed_keys(self, key):
        assert is_removed_key(key)
        assert not is_changed_key(key)

    @pytest.mark.parametrize("key", ["_t", "label", "", "1a", "_", "__1", "-1"])
    def test_other_keys(self, key):
        assert not is_changed_key(key)
        assert not is_removed_key(key)


class TestGetDeltaValue:
    def test_added(self):
        assert get_delta_value([{"name": "x"}]) == {"name": "x"}

    def test_changed(self):
        assert get_delta_value(["old", "new"]) == "new"

    def test_removed(self):
        assert get_delta_value(["old", 0, 0]) is None

    def test_moved_returns_original(self):
        assert get_delta_value(["", 2, 3], original="kept") == "kept"

    def test_non_list_raises(self):
        with pytest.raises(TypeSyncDeltaError) as exc_info:
            get_delta_value({"label": ["a", "b"]})
        assert exc_info.value.code == ErrorCode.MALFORMED_DELTA

    def test_unknown_leaf_raises(self):
        with pytest.raises(TypeSyncDeltaError):
            get_delta_value(["@@ -1 +1 @@", 0, 2])


class TestDecodeEntry:
    def test_added(self):
        entry = decode_entry("2", [{"key": "b"}])
        assert entry.kind is DeltaKind.ADDED
        assert entry.index == 2
        assert entry.new_value == {"key": "b"}

    def test_changed_pair(self):
        entry = decode_entry("0", ["a", "b"])
        assert entry.kind is DeltaKind.CHANGED
        assert (entry.old_value, entry.new_value) == ("a", "b")

    def test_nested(self):
        entry = decode_entry("1", {"label": ["A", "B"]})
        assert entry.kind is DeltaKind.NESTED
        assert entry.nested == {"label": ["A", "B"]}

    def test_removed(self):
        entry = decode_entry("_3", [{"key": "c"}, 0, 0])
        assert entry.kind is DeltaKind.REMOVED
        assert entry.index == 3
        assert entry.old_value == {"key": "c"}

    def test_moved(self):
        entry = decode_entry("_1", ["", 0, 3])
        assert entry.kind is DeltaKind.MOVED
        assert entry.index == 1
        assert entry.target_index == 0

    def test_nested_is_empty_for_leaf_kinds(self):
        assert decode_entry("_1", ["", 0, 3]).nested == {}

    @pytest.mark.parametrize("value", [[{"name": "size"}], [None, {"name": "size"}], [[], []]])
    def test_new_side_matches_leaf_value(self, value):
        assert decode_entry("0", value).new_value == get_delta_value(value)

    @pytest.mark.parametrize(
        "key, value",
        [
            ("_t", "a"),
            ("label", ["a", "b"]),
            ("0", "scalar"),
            ("0", [1, 2, 3]),
            ("_0", ["text", 0, 2]),
            ("_0", ["a", "b"]),
            ("_0", {"label": ["a", "b"]}),
        ],
    )
    def test_unrecognised_shapes_are_ignored(self, key, value):
        assert decode_entry(key, value).kind is DeltaKind.IGNORED


class TestIterEntries:
    def test_skips_array_marker_and_keeps_order(self):
        delta = {"_t": "a", "1": [{"key": "b"}], "_0": [{"key": "a"}, 0, 0]}
        entries = list(iter_entries(delta))
        assert [entry.key for entry in entries] == ["1", "_0"]
        assert [entry.kind for entry in entries] == [DeltaKind.ADDED, DeltaKind.REMOVED]

    def test_none_yields_nothing(self):
        assert list(iter_entries(None)) == []

    def test_non_mapping_raises(self):
        with pytest.raises(TypeSyncDeltaError):
            list(iter_entries(["a", "b"]))

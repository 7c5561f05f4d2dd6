"""Tests for the keyed array classifier."""

from __future__ import annotations

from typesync.actions.arrays import ArrayDiffClassifier
from typesync.delta import diff


def _v(key, label):
    return {"key": key, "label": label}


def _recording_classifier(**overrides):
    factories = {
        "add": lambda new: ("add", new["key"]),
        "change": lambda old, new: ("change", old["key"], new["key"]),
        "remove": lambda old: ("remove", old["key"]),
        "move": lambda old, new: ("move", old["key"], new["key"]),
    }
    factories.update(overrides)
    return ArrayDiffClassifier("values", identity="key", **factories)


def _classify(classifier, before, now, delta=None):
    previous, nxt = {"values": before}, {"values": now}
    if delta is None:
        delta = diff(previous, nxt) or {}
    return classifier.classify(delta, previous, nxt)


class TestBuckets:
    def test_add(self):
        assert _classify(_recording_classifier(), [_v("a", "A")], [_v("a", "A"), _v("b", "B")]) == [
            ("add", "b"),
        ]

    def test_remove(self):
        assert _classify(_recording_classifier(), [_v("a", "A"), _v("b", "B")], [_v("b", "B")]) == [
            ("remove", "a"),
        ]

    def test_change_matches_by_identity_not_position(self):
        result = _classify(
            _recording_classifier(),
            [_v("x", "X"), _v("a", "A")],
            [_v("a", "Apple")],
        )
        assert result == [("change", "a", "a"), ("remove", "x")]

    def test_move(self):
        result = _classify(
            _recording_classifier(),
            [_v("a", "A"), _v("b", "B"), _v("c", "C")],
            [_v("c", "C"), _v("a", "A"), _v("b", "B")],
        )
        assert result == [("move", "c", "c")]

    def test_moves_ignored_without_constructor(self):
        classifier = ArrayDiffClassifier("values", add=lambda new: new)
        result = _classify(
            classifier,
            [_v("a", "A"), _v("b", "B")],
            [_v("b", "B"), _v("a", "A")],
        )
        assert result == []

    def test_results_follow_delta_order(self):
        result = _classify(
            _recording_classifier(),
            [_v("a", "A"), _v("b", "B")],
            [_v("c", "C"), _v("b", "Bee")],
        )
        assert result == [("add", "c"), ("change", "b", "b"), ("remove", "a")]


class TestPositionalFallback:
    def test_change_falls_back_to_same_position(self):
        delta = {"values": {"_t": "a", "0": {"key": ["r", "x"]}}}
        result = _classify(_recording_classifier(), [_v("r", "Red")], [_v("x", "Red")], delta)
        assert result == [("change", "r", "x")]


class TestConstructorResults:
    def test_none_results_are_dropped(self):
        classifier = _recording_classifier(add=lambda new: None)
        assert _classify(classifier, [], [_v("a", "A")]) == []

    def test_list_results_stay_nested(self):
        classifier = _recording_classifier(
            change=lambda old, new: [("remove", old["key"]), ("add", new["key"])],
        )
        delta = {"values": {"_t": "a", "0": {"key": ["r", "x"]}}}
        result = _classify(classifier, [_v("r", "Red")], [_v("x", "Red")], delta)
        assert result == [[("remove", "r"), ("add", "x")]]


class TestMissingArrays:
    def test_no_delta_for_key(self):
        assert _recording_classifier().classify({"name": ["a", "b"]}, {}, {}) == []

    def test_none_delta(self):
        assert _recording_classifier().classify(None, None, None) == []

    def test_unknown_entries_are_skipped(self):
        delta = {"values": {"_t": "a", "_0": ["text", 0, 2], "label": ["a", "b"]}}
        assert _classify(_recording_classifier(), [_v("a", "A")], [_v("a", "A")], delta) == []

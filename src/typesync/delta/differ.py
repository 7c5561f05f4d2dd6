"""Structural diff between two JSON values.

Produces the delta encoding every action builder consumes:

* ``[old, new]`` -- a leaf value that changed.
* ``{"member": <delta>, ...}`` -- an object whose members changed; a
  member only present on the old side is ``[old, 0, 0]``, one only on the
  new side is ``[new]``.
* ``{"_t": "a", ...}`` -- an array.  ``"j"`` keys address the *new* array
  (``[new]`` for an added item, a nested delta for a matched item whose
  content changed); ``"_i"`` keys address the *old* array (``[old, 0, 0]``
  for a removed item, ``["", j, 3]`` for an item that moved to index ``j``).

Array items are matched by identity (see :func:`object_hash`) using the
longest common subsequence, so a reordering is reported as moves rather
than as a cascade of positional changes.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any

from .lcs_matcher import lcs_match

ARRAY_MARKER = "_t"
ARRAY_TYPE = "a"
REMOVED_SENTINEL = 0
MOVED_SENTINEL = 3

IDENTITY_FIELDS: tuple[str, ...] = ("id", "name", "key")
"""Mapping members tried, in order, to identify an array item."""

_POSITIONAL = "$$index"
_SCALAR = "$$value"


def object_hash(item: Any, index: int) -> Hashable:
    """Return the identity used to match *item* across two arrays.

    Mappings are identified by the first non-empty ``id``, ``name`` or
    ``key`` member.  Scalars are identified by type and value.  Anything
    else falls back to its position, which means it can only ever match
    the item at the same index on the other side.
    """
    if isinstance(item, dict):
        for field in IDENTITY_FIELDS:
            value = item.get(field)
            if isinstance(value, (str, int)) and not isinstance(value, bool) and value != "":
                return (field, value)
        return (_POSITIONAL, index)
    if item is None or isinstance(item, (str, int, float, bool)):
        return (_SCALAR, type(item).__name__, item)
    return (_POSITIONAL, index)


def _is_positional(identity: Hashable) -> bool:
    return isinstance(identity, tuple) and identity[0] == _POSITIONAL


def diff(left: Any, right: Any) -> Any | None:
    """Compute the delta that turns *left* into *right*.

    Parameters
    ----------
    left:
        The previous value.
    right:
        The next value.

    Returns
    -------
    Any | None
        The delta, or ``None`` when the two values are equal.  Neither
        input is modified.
    """
    if isinstance(left, dict) and isinstance(right, dict):
        return _diff_objects(left, right)
    if isinstance(left, list) and isinstance(right, list):
        return _diff_arrays(left, right)
    if type(left) is type(right) and left == right:
        return None
    return [left, right]


def _diff_objects(left: dict[str, Any], right: dict[str, Any]) -> dict[str, Any] | None:
    delta: dict[str, Any] = {}
    for key, old in left.items():
        if key in right:
            sub = diff(old, right[key])
            if sub is not None:
                delta[key] = sub
        else:
            delta[key] = [old, REMOVED_SENTINEL, REMOVED_SENTINEL]
    for key, new in right.items():
        if key not in left:
            delta[key] = [new]
    return delta or None


def _diff_arrays(left: list[Any], right: list[Any]) -> dict[str, Any] | None:
    old_ids = [object_hash(item, i) for i, item in enumerate(left)]
    new_ids = [object_hash(item, j) for j, item in enumerate(right)]
    matched = lcs_match(old_ids, new_ids)

    matched_old = {i for i, _ in matched}
    matched_new = {j for _, j in matched}

    changed: dict[int, Any] = {}
    removed: dict[int, Any] = {}

    for i, j in matched:
        sub = diff(left[i], right[j])
        if sub is not None:
            changed[j] = sub

    # Unmatched new items, by identity, waiting to be claimed as moves.
    move_targets: dict[Hashable, list[int]] = {}
    for j, identity in enumerate(new_ids):
        if j not in matched_new and not _is_positional(identity):
            move_targets.setdefault(identity, []).append(j)

    moved_new: set[int] = set()
    for i, identity in enumerate(old_ids):
        if i in matched_old:
            continue
        targets = move_targets.get(identity)
        if targets:
            j = targets.pop(0)
            moved_new.add(j)
            removed[i] = ["", j, MOVED_SENTINEL]
            sub = diff(left[i], right[j])
            if sub is not None:
                changed[j] = sub
        else:
            removed[i] = [left[i], REMOVED_SENTINEL, REMOVED_SENTINEL]

    for j, item in enumerate(right):
        if j not in matched_new and j not in moved_new:
            changed[j] = [item]

    if not changed and not removed:
        return None

    delta: dict[str, Any] = {ARRAY_MARKER: ARRAY_TYPE}
    for j in sorted(changed):
        delta[str(j)] = changed[j]
    for i in sorted(removed):
        delta[f"_{i}"] = removed[i]
    return delta

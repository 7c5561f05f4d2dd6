"""Resolve which previous/next items an array delta key refers to.

A delta key only carries one index: ``"j"`` addresses the new array and
``"_i"`` the old one.  :func:`find_matching_pairs` completes each key with
the index of the same item (by identity field) on the other side, and
:func:`extract_matching_pairs` turns those indices into the actual items.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from typesync.delta import is_changed_key, is_removed_key

MatchingPairs = dict[str, tuple[int | None, int | None]]


def _index_by(items: Sequence[Any], identifier: str) -> dict[Any, int]:
    index: dict[Any, int] = {}
    for position, item in enumerate(items):
        if isinstance(item, dict):
            value = item.get(identifier)
            if value is not None and not isinstance(value, (dict, list)):
                index.setdefault(value, position)
    return index


def _identity(items: Sequence[Any], position: int, identifier: str) -> Any:
    if 0 <= position < len(items) and isinstance(items[position], dict):
        value = items[position].get(identifier)
        if not isinstance(value, (dict, list)):
            return value
    return None


def find_matching_pairs(
    delta: dict[str, Any] | None,
    before: Sequence[Any] | None,
    now: Sequence[Any] | None,
    identifier: str = "id",
) -> MatchingPairs:
    """Map every array delta key to an ``(old_index, new_index)`` pair.

    Parameters
    ----------
    delta:
        An array delta.
    before, now:
        The previous and next arrays.
    identifier:
        Item member used to recognise the same item on both sides.

    Returns
    -------
    dict[str, tuple[int | None, int | None]]
        One pair per numeric or underscore key.  The side that cannot be
        resolved is ``None``.
    """
    before = before or []
    now = now or []
    before_index = _index_by(before, identifier)
    now_index = _index_by(now, identifier)

    pairs: MatchingPairs = {}
    for key in delta or {}:
        if is_changed_key(key):
            new_index = int(key)
            identity = _identity(now, new_index, identifier)
            old_index = before_index.get(identity) if identity is not None else None
            pairs[key] = (old_index, new_index)
        elif is_removed_key(key):
            old_index = int(key[1:])
            identity = _identity(before, old_index, identifier)
            new_index = now_index.get(identity) if identity is not None else None
            pairs[key] = (old_index, new_index)
    return pairs


def extract_matching_pairs(
    pairs: MatchingPairs,
    key: str,
    before: Sequence[Any] | None,
    now: Sequence[Any] | None,
) -> tuple[Any | None, Any | None]:
    """Return the ``(old_obj, new_obj)`` items *key* refers to."""
    old_index, new_index = pairs.get(key, (None, None))
    old_obj = None
    new_obj = None
    if before and old_index is not None and 0 <= old_index < len(before):
        old_obj = before[old_index]
    if now and new_index is not None and 0 <= new_index < len(now):
        new_obj = now[new_index]
    return old_obj, new_obj

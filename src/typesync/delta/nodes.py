"""Decoding of delta entries into :class:`DeltaEntry` values.

Every builder dispatches on the decoded :class:`DeltaKind` instead of
re-inspecting list lengths and sentinels at each call site.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

from typesync.errors import TypeSyncDeltaError
from typesync.models import DeltaEntry, DeltaKind

from .differ import ARRAY_MARKER, MOVED_SENTINEL, REMOVED_SENTINEL


def is_changed_key(key: str) -> bool:
    """Return ``True`` for array keys addressing the new array (``"3"``)."""
    return re.fullmatch(r"\d+", key) is not None


def is_removed_key(key: str) -> bool:
    """Return ``True`` for array keys addressing the old array (``"_3"``)."""
    return re.fullmatch(r"_\d+", key) is not None


def get_delta_value(value: Any, original: Any = None) -> Any:
    """Return the new side of a leaf delta.

    * ``[new]`` -> ``new``
    * ``[old, new]`` -> ``new``
    * ``[old, 0, 0]`` -> ``None`` (nothing on the new side)
    * ``["", j, 3]`` -> *original* (a move keeps the value)

    Raises
    ------
    TypeSyncDeltaError
        If *value* is not a list-shaped leaf delta.
    """
    if not isinstance(value, list):
        raise TypeSyncDeltaError(
            "Expected a list-shaped leaf delta",
            context={"value": value},
        )
    if len(value) == 1:
        return value[0]
    if len(value) == 2:
        return value[1]
    if len(value) == 3 and value[2] == REMOVED_SENTINEL:
        return None
    if len(value) == 3 and value[2] == MOVED_SENTINEL:
        return original
    raise TypeSyncDeltaError(
        "Unrecognised leaf delta",
        context={"value": value},
    )


def _is_sentinel(value: Any, sentinel: int) -> bool:
    return type(value) is int and value == sentinel


def decode_entry(key: str, value: Any) -> DeltaEntry:
    """Classify one ``(key, value)`` pair of an array delta.

    Numeric keys decode to ``ADDED``, ``CHANGED`` or ``NESTED``;
    underscore keys decode to ``REMOVED`` or ``MOVED``.  Everything else,
    including the ``"_t"`` marker, decodes to ``IGNORED``.
    """
    if is_changed_key(key):
        index = int(key)
        if isinstance(value, list) and len(value) == 1:
            return DeltaEntry(
                key, DeltaKind.ADDED, value, index=index, new_value=get_delta_value(value),
            )
        if isinstance(value, list) and len(value) == 2:
            return DeltaEntry(
                key, DeltaKind.CHANGED, value,
                index=index, old_value=value[0], new_value=get_delta_value(value),
            )
        if isinstance(value, dict):
            return DeltaEntry(key, DeltaKind.NESTED, value, index=index)
        return DeltaEntry(key, DeltaKind.IGNORED, value, index=index)

    if is_removed_key(key):
        index = int(key[1:])
        if isinstance(value, list) and len(value) == 3:
            if _is_sentinel(value[2], MOVED_SENTINEL) and type(value[1]) is int:
                return DeltaEntry(
                    key, DeltaKind.MOVED, value,
                    index=index, target_index=value[1],
                )
            if _is_sentinel(value[1], REMOVED_SENTINEL) and _is_sentinel(value[2], REMOVED_SENTINEL):
                return DeltaEntry(key, DeltaKind.REMOVED, value, index=index, old_value=value[0])
        return DeltaEntry(key, DeltaKind.IGNORED, value, index=index)

    return DeltaEntry(key, DeltaKind.IGNORED, value)


def iter_entries(delta: Any) -> Iterator[DeltaEntry]:
    """Yield decoded entries of an array delta in iteration order.

    The ``"_t"`` marker is skipped.  A ``None`` delta yields nothing.

    Raises
    ------
    TypeSyncDeltaError
        If *delta* is neither ``None`` nor a mapping.
    """
    if delta is None:
        return
    if not isinstance(delta, dict):
        raise TypeSyncDeltaError(
            "Expected an array delta mapping",
            context={"value": delta},
        )
    for key, value in delta.items():
        if key == ARRAY_MARKER:
            continue
        yield decode_entry(str(key), value)

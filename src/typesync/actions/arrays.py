"""Reconcile two keyed arrays into per-item add/change/remove events.

:class:`ArrayDiffClassifier` walks one array delta and hands every entry to
a caller-supplied constructor for its bucket.  Items are matched by an
identity member, not by position: a changed entry at new index ``j`` is
paired with the previous item that has the same identity as ``next[j]``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from typesync.delta import iter_entries
from typesync.models import DeltaEntry, DeltaKind
from typesync.observability import get_logger

log = get_logger("typesync.arrays")

ADD_ACTIONS = "add"
CHANGE_ACTIONS = "change"
REMOVE_ACTIONS = "remove"
MOVE_ACTIONS = "move"

ActionFactory = Callable[..., Any]


def _item_at(items: Sequence[Any], index: int | None, fallback: Any = None) -> Any:
    if index is not None and 0 <= index < len(items):
        return items[index]
    return fallback


class ArrayDiffClassifier:
    """Classify the entries of one array delta.

    Parameters
    ----------
    key:
        Member holding the array on both snapshots (e.g. ``"values"``).
    identity:
        Item member identifying the same item on both sides.
    add:
        ``add(new_item)`` for items only present in the next array.
    change:
        ``change(old_item, new_item)`` for items whose content changed.
    remove:
        ``remove(old_item)`` for items only present in the previous array.
    move:
        ``move(old_item, new_item)`` for items that changed position.
        Moves are ignored when no constructor is given.

    A constructor may return an action, a list of actions, or ``None`` to
    emit nothing.
    """

    def __init__(
        self,
        key: str,
        *,
        identity: str = "key",
        add: ActionFactory | None = None,
        change: ActionFactory | None = None,
        remove: ActionFactory | None = None,
        move: ActionFactory | None = None,
    ) -> None:
        self._key = key
        self._identity = identity
        self._factories: dict[str, ActionFactory | None] = {
            ADD_ACTIONS: add,
            CHANGE_ACTIONS: change,
            REMOVE_ACTIONS: remove,
            MOVE_ACTIONS: move,
        }

    def classify(
        self,
        delta: dict[str, Any] | None,
        previous_obj: dict[str, Any] | None,
        next_obj: dict[str, Any] | None,
    ) -> list[Any]:
        """Return constructor results for ``delta[key]`` in delta order.

        The result may be nested one level deep when a constructor returns
        a list; callers flatten it.
        """
        array_delta = (delta or {}).get(self._key)
        if array_delta is None:
            return []
        before: Sequence[Any] = (previous_obj or {}).get(self._key) or []
        now: Sequence[Any] = (next_obj or {}).get(self._key) or []

        before_by_identity: dict[Any, Any] = {}
        for item in before:
            identity = self._identity_of(item)
            if identity is not None:
                before_by_identity.setdefault(identity, item)

        results: list[Any] = []
        for entry in iter_entries(array_delta):
            produced = self._dispatch(entry, before, now, before_by_identity)
            if produced is None or produced == []:
                continue
            results.append(produced)
        return results

    def _identity_of(self, item: Any) -> Any:
        if not isinstance(item, dict):
            return None
        value = item.get(self._identity)
        if isinstance(value, (dict, list)):
            return None
        return value

    def _resolve_old(
        self,
        entry: DeltaEntry,
        new_item: Any,
        before: Sequence[Any],
        before_by_identity: dict[Any, Any],
    ) -> Any:
        identity = self._identity_of(new_item)
        if identity is not None and identity in before_by_identity:
            return before_by_identity[identity]
        return _item_at(before, entry.index, entry.old_value)

    def _dispatch(
        self,
        entry: DeltaEntry,
        before: Sequence[Any],
        now: Sequence[Any],
        before_by_identity: dict[Any, Any],
    ) -> Any:
        kind = entry.kind
        if kind is DeltaKind.ADDED:
            factory = self._factories[ADD_ACTIONS]
            if factory is not None:
                return factory(_item_at(now, entry.index, entry.new_value))
        elif kind in (DeltaKind.CHANGED, DeltaKind.NESTED):
            factory = self._factories[CHANGE_ACTIONS]
            if factory is not None:
                new_item = _item_at(now, entry.index, entry.new_value)
                old_item = self._resolve_old(entry, new_item, before, before_by_identity)
                if old_item is not None and new_item is not None:
                    return factory(old_item, new_item)
        elif kind is DeltaKind.REMOVED:
            factory = self._factories[REMOVE_ACTIONS]
            if factory is not None:
                return factory(_item_at(before, entry.index, entry.old_value))
        elif kind is DeltaKind.MOVED:
            factory = self._factories[MOVE_ACTIONS]
            if factory is not None:
                old_item = _item_at(before, entry.index)
                new_item = _item_at(now, entry.target_index)
                if old_item is not None and new_item is not None:
                    return factory(old_item, new_item)
        else:
            log.debug(
                "ignored array delta entry",
                extra={"extra_fields": {"array": self._key, "key": entry.key}},
            )
        return None

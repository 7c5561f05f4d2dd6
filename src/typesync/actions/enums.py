"""Enum value actions for one attribute definition.

Builds add / change-label / reorder / remove actions for the ``values`` of
an ``enum`` or localized enum attribute type.  Per-value reorder and
removal events are collapsed: the remote endpoint takes one bulk reorder
and one bulk removal far more cheaply than one call per value, so those
two actions are appended after every other enum action.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from typesync.models import ActionName
from typesync.observability import get_logger

from .arrays import ArrayDiffClassifier

log = get_logger("typesync.enums")

PLAIN_ENUM_TYPE = "enum"


@dataclass(frozen=True)
class _EnumActionNames:
    add: str
    change_order: str
    change_label: str


_PLAIN_NAMES = _EnumActionNames(
    add=ActionName.ADD_PLAIN_ENUM_VALUE.value,
    change_order=ActionName.CHANGE_PLAIN_ENUM_VALUE_ORDER.value,
    change_label=ActionName.CHANGE_PLAIN_ENUM_VALUE_LABEL.value,
)

_LOCALIZED_NAMES = _EnumActionNames(
    add=ActionName.ADD_LOCALIZED_ENUM_VALUE.value,
    change_order=ActionName.CHANGE_LOCALIZED_ENUM_VALUE_ORDER.value,
    change_label=ActionName.CHANGE_LOCALIZED_ENUM_VALUE_LABEL.value,
)


def enum_action_names(attribute_type: str | None) -> _EnumActionNames:
    """Return the plain-enum names for ``"enum"``, localized names otherwise."""
    return _PLAIN_NAMES if attribute_type == PLAIN_ENUM_TYPE else _LOCALIZED_NAMES


@dataclass
class _EnumFold:
    """Accumulators threaded through the per-value action stream."""

    actions: list[dict[str, Any]] = field(default_factory=list)
    new_order: list[Any] = field(default_factory=list)
    removed_keys: list[Any] = field(default_factory=list)


def _flatten(results: Iterable[Any]) -> list[dict[str, Any]]:
    flat: list[dict[str, Any]] = []
    for item in results:
        if isinstance(item, list):
            flat.extend(item)
        else:
            flat.append(item)
    return flat


def _fold(stream: Iterable[dict[str, Any]], change_order: str) -> _EnumFold:
    fold = _EnumFold()
    for action in stream:
        name = action["action"]
        if name == ActionName.REMOVE_ENUM_VALUE.value:
            key = action["value"].get("key")
            if key not in fold.removed_keys:
                fold.removed_keys.append(key)
        elif name == change_order:
            fold.new_order.append(action["value"])
        else:
            fold.actions.append(action)
    return fold


def _keys(values: Iterable[Any]) -> list[Any]:
    return [value.get("key") for value in values if isinstance(value, dict)]


def _order_unmet(
    previous_values: list[Any],
    next_values: list[Any],
    fold: _EnumFold,
    add_action: str,
) -> bool:
    """Return ``True`` if appending the added values cannot yield next's order."""
    removed = set(fold.removed_keys)
    added = [
        action["value"].get("key")
        for action in fold.actions
        if action["action"] == add_action
    ]
    survivors = [key for key in _keys(previous_values) if key not in removed]
    return survivors + added != _keys(next_values)


def actions_map_enums(
    attribute_name: str,
    attribute_type: str | None,
    type_delta: dict[str, Any],
    previous_type: dict[str, Any],
    next_type: dict[str, Any],
) -> list[dict[str, Any]]:
    """Build the enum value actions for one attribute.

    Parameters
    ----------
    attribute_name:
        Name of the attribute definition, set as ``attributeName`` on every
        action.
    attribute_type:
        The previous type's ``name``.  ``"enum"`` selects the plain action
        names, anything else the localized ones.
    type_delta:
        Object delta of the attribute ``type``; its ``values`` member is
        the array delta to reconcile.
    previous_type, next_type:
        The attribute types the delta was computed from.

    Returns
    -------
    list[dict]
        Add and change-label actions in delta order, then at most
        one reorder action carrying every next value in order, then at most
        one ``removeEnumValues`` action carrying every removed key.
    """
    names = enum_action_names(attribute_type)
    previous_values: list[Any] = (previous_type or {}).get("values") or []
    next_values: list[Any] = (next_type or {}).get("values") or []
    next_by_key = {
        value["key"]: value
        for value in next_values
        if isinstance(value, dict) and "key" in value
    }

    def add(new_value: dict[str, Any]) -> dict[str, Any]:
        return {"attributeName": attribute_name, "action": names.add, "value": new_value}

    def change(old_value: dict[str, Any], new_value: dict[str, Any]) -> Any:
        old_in_next = next_by_key.get(old_value.get("key"))
        if old_in_next is None:
            # Renamed key: the old key joins the bulk removal.
            return [remove(old_value), add(new_value)]
        if old_value.get("label") != old_in_next.get("label"):
            return {
                "attributeName": attribute_name,
                "action": names.change_label,
                "newValue": new_value,
            }
        return {"attributeName": attribute_name, "action": names.change_order, "value": new_value}

    def remove(deleted_value: dict[str, Any]) -> dict[str, Any]:
        return {
            "attributeName": attribute_name,
            "action": ActionName.REMOVE_ENUM_VALUE.value,
            "value": deleted_value,
        }

    def move(_old_value: dict[str, Any], new_value: dict[str, Any]) -> dict[str, Any]:
        return {"attributeName": attribute_name, "action": names.change_order, "value": new_value}

    classifier = ArrayDiffClassifier(
        "values",
        identity="key",
        add=add,
        change=change,
        remove=remove,
        move=move,
    )
    stream = _flatten(classifier.classify(type_delta, previous_type, next_type))
    fold = _fold(stream, names.change_order)

    actions = list(fold.actions)
    if fold.new_order or _order_unmet(previous_values, next_values, fold, names.add):
        actions.append({
            "attributeName": attribute_name,
            "action": names.change_order,
            "values": list(next_values),
        })
    if fold.removed_keys:
        actions.append({
            "attributeName": attribute_name,
            "action": ActionName.REMOVE_ENUM_VALUES.value,
            "keys": fold.removed_keys,
        })

    log.debug(
        "built enum actions",
        extra={"extra_fields": {
            "attribute": attribute_name,
            "actions": len(actions),
            "reordered": len(fold.new_order),
            "removed": len(fold.removed_keys),
        }},
    )
    return actions

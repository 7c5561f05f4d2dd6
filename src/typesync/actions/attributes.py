"""Attribute definition actions for a product type.

Walks the array delta of a product type's ``attributes`` and turns each
entry into attribute-level actions: whole definitions added or removed,
base field changes, enum value changes, and reordering.
"""

from __future__ import annotations

from typing import Any

from typesync.delta import iter_entries
from typesync.errors import TypeSyncDeltaError
from typesync.models import ActionDescriptor, ActionName, DeltaEntry, DeltaKind
from typesync.observability import get_logger

from .base import build_base_attributes_actions
from .enums import actions_map_enums
from .pairs import MatchingPairs, extract_matching_pairs

log = get_logger("typesync.attributes")

ATTRIBUTE_DEFINITION_ACTIONS: list[ActionDescriptor] = [
    ActionDescriptor(action=ActionName.CHANGE_LABEL.value, key="label"),
    ActionDescriptor(action=ActionName.SET_INPUT_TIP.value, key="inputTip"),
    ActionDescriptor(
        action=ActionName.CHANGE_INPUT_HINT.value,
        key="inputHint",
        action_key="newValue",
    ),
    ActionDescriptor(action=ActionName.CHANGE_IS_SEARCHABLE.value, key="isSearchable"),
    ActionDescriptor(
        action=ActionName.CHANGE_ATTRIBUTE_CONSTRAINT.value,
        key="attributeConstraint",
        action_key="newValue",
    ),
]

_BASE_FIELDS = frozenset(descriptor.key for descriptor in ATTRIBUTE_DEFINITION_ACTIONS)


def _touches_base_fields(nested: dict[str, Any]) -> bool:
    return any(key in nested for key in _BASE_FIELDS)


def _values_delta(nested: dict[str, Any]) -> dict[str, Any] | None:
    type_delta = nested.get("type")
    # Only an array delta on ``values`` is reconciled; a type switch is not.
    if isinstance(type_delta, dict) and isinstance(type_delta.get("values"), dict):
        return type_delta
    return None


def _names(attributes: list[Any]) -> list[Any]:
    return [item.get("name") for item in attributes if isinstance(item, dict)]


def _ignore(entry: DeltaEntry) -> list[dict[str, Any]]:
    log.debug(
        "ignored attribute delta entry",
        extra={"extra_fields": {"key": entry.key, "kind": entry.kind.value}},
    )
    return []


def _nested_actions(
    entry: DeltaEntry,
    old_obj: Any,
    new_obj: Any,
) -> list[dict[str, Any]]:
    nested = entry.nested
    type_delta = _values_delta(nested)
    if not _touches_base_fields(nested) and type_delta is None:
        return _ignore(entry)
    if not isinstance(old_obj, dict) or not isinstance(new_obj, dict):
        raise TypeSyncDeltaError(
            "Cannot resolve the attribute definitions for a changed entry",
            context={"key": entry.key, "path": "attributes"},
        )

    actions: list[dict[str, Any]] = []
    if _touches_base_fields(nested):
        for action in build_base_attributes_actions(
            actions=ATTRIBUTE_DEFINITION_ACTIONS,
            diff=nested,
            old_obj=old_obj,
            new_obj=new_obj,
        ):
            action["attributeName"] = old_obj.get("name")
            actions.append(action)
    if type_delta is not None:
        old_type = old_obj.get("type") or {}
        actions.extend(
            actions_map_enums(
                old_obj.get("name"),
                old_type.get("name"),
                type_delta,
                old_type,
                new_obj.get("type") or {},
            )
        )
    return actions


def actions_map_attributes(
    attributes_delta: dict[str, Any] | None,
    previous_attributes: list[Any] | None,
    next_attributes: list[Any] | None,
    diff_paths: MatchingPairs,
) -> list[dict[str, Any]]:
    """Build the attribute definition actions of a product type.

    Parameters
    ----------
    attributes_delta:
        Array delta of the ``attributes`` list.
    previous_attributes, next_attributes:
        The previous and next attribute definition lists.
    diff_paths:
        ``(old_index, new_index)`` pairs per delta key, as returned by
        :func:`~typesync.actions.pairs.find_matching_pairs` with the
        ``"name"`` identifier.

    Returns
    -------
    list[dict]
        Actions in delta iteration order.  A reorder emits a single
        ``changeAttributeOrder`` carrying the complete next list.

    Raises
    ------
    TypeSyncDeltaError
        If a changed entry cannot be paired with its previous and next
        definitions, or the delta is not a mapping.
    """
    previous = previous_attributes or []
    next_list = next_attributes or []
    actions: list[dict[str, Any]] = []
    added_names: list[Any] = []
    removed_names: set[Any] = set()
    order_emitted = False

    for entry in iter_entries(attributes_delta):
        old_obj, new_obj = extract_matching_pairs(diff_paths, entry.key, previous, next_list)

        if entry.kind in (DeltaKind.ADDED, DeltaKind.CHANGED):
            attribute = entry.new_value
            if isinstance(attribute, dict) and attribute.get("name"):
                actions.append({
                    "action": ActionName.ADD_ATTRIBUTE_DEFINITION.value,
                    "attribute": attribute,
                })
                added_names.append(attribute["name"])
            else:
                _ignore(entry)
        elif entry.kind is DeltaKind.NESTED:
            actions.extend(_nested_actions(entry, old_obj, new_obj))
        elif entry.kind is DeltaKind.MOVED:
            if not order_emitted:
                actions.append({
                    "action": ActionName.CHANGE_ATTRIBUTE_ORDER.value,
                    "attributes": next_list,
                })
                order_emitted = True
        elif entry.kind is DeltaKind.REMOVED:
            removed = entry.old_value
            if isinstance(removed, dict) and removed.get("name"):
                actions.append({
                    "action": ActionName.REMOVE_ATTRIBUTE_DEFINITION.value,
                    "name": removed["name"],
                })
                removed_names.add(removed["name"])
            else:
                _ignore(entry)
        else:
            _ignore(entry)

    if not order_emitted and (added_names or removed_names):
        survivors = [name for name in _names(previous) if name not in removed_names]
        if survivors + added_names != _names(next_list):
            actions.append({
                "action": ActionName.CHANGE_ATTRIBUTE_ORDER.value,
                "attributes": next_list,
            })
    return actions

"""Shared test fixtures for the typesync test suite."""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

import pytest

from typesync.config import SyncConfig
from typesync.product_types import ProductTypeSync

# Attribute base-field actions: action name -> (field, payload key).
_ATTRIBUTE_FIELDS: dict[str, tuple[str, str]] = {
    "changeLabel": ("label", "label"),
    "setInputTip": ("inputTip", "inputTip"),
    "changeInputHint": ("inputHint", "newValue"),
    "changeIsSearchable": ("isSearchable", "isSearchable"),
    "changeAttributeConstraint": ("attributeConstraint", "newValue"),
}


def _find(items: list[dict], field: str, value: Any) -> dict | None:
    for item in items:
        if item.get(field) == value:
            return item
    return None


def _set_or_unset(target: dict, field: str, action: dict, payload_key: str) -> None:
    if payload_key in action:
        target[field] = copy.deepcopy(action[payload_key])
    else:
        target.pop(field, None)


def _reorder(items: list[dict], order: list[Any], field: str) -> list[dict]:
    by_field = {item[field]: item for item in items}
    missing = [value for value in order if value not in by_field]
    assert not missing, f"reorder names unknown items: {missing}"
    listed = set(order)
    return [by_field[value] for value in order] + [
        item for item in items if item[field] not in listed
    ]


def _attribute(state: dict, name: str) -> dict:
    attribute = _find(state["attributes"], "name", name)
    assert attribute is not None, f"no attribute named {name!r}"
    return attribute


def apply_actions(entity: dict, actions: list[dict]) -> dict:
    """Apply update actions to a copy of *entity* the way the remote would."""
    state = copy.deepcopy(entity)
    state.setdefault("attributes", [])
    for action in actions:
        name = action["action"]
        if name == "changeName":
            state["name"] = action["newValue"]
        elif name == "setKey":
            _set_or_unset(state, "key", action, "key")
        elif name == "changeDescription":
            _set_or_unset(state, "description", action, "description")
        elif name == "addAttributeDefinition":
            attribute = action["attribute"]
            assert _find(state["attributes"], "name", attribute["name"]) is None
            state["attributes"].append(copy.deepcopy(attribute))
        elif name == "removeAttributeDefinition":
            state["attributes"].remove(_attribute(state, action["name"]))
        elif name == "changeAttributeOrder":
            state["attributes"] = _reorder(
                state["attributes"], [a["name"] for a in action["attributes"]], "name"
            )
        elif name in _ATTRIBUTE_FIELDS:
            field, payload_key = _ATTRIBUTE_FIELDS[name]
            _set_or_unset(_attribute(state, action["attributeName"]), field, action, payload_key)
        elif name in ("addPlainEnumValue", "addLocalizedEnumValue"):
            values = _attribute(state, action["attributeName"])["type"]["values"]
            assert _find(values, "key", action["value"]["key"]) is None
            values.append(copy.deepcopy(action["value"]))
        elif name in ("changePlainEnumValueLabel", "changeLocalizedEnumValueLabel"):
            values = _attribute(state, action["attributeName"])["type"]["values"]
            target = _find(values, "key", action["newValue"]["key"])
            assert target is not None
            target["label"] = copy.deepcopy(action["newValue"]["label"])
        elif name in ("changePlainEnumValueOrder", "changeLocalizedEnumValueOrder"):
            attribute_type = _attribute(state, action["attributeName"])["type"]
            attribute_type["values"] = _reorder(
                attribute_type["values"], [v["key"] for v in action["values"]], "key"
            )
        elif name == "removeEnumValues":
            values = _attribute(state, action["attributeName"])["type"]["values"]
            for key in action["keys"]:
                target = _find(values, "key", key)
                assert target is not None, f"no enum value {key!r}"
                values.remove(target)
        else:
            raise AssertionError(f"unexpected action {name!r}")
    return state


@pytest.fixture
def config() -> SyncConfig:
    """Default builder configuration."""
    return SyncConfig()


@pytest.fixture
def sync(config: SyncConfig) -> ProductTypeSync:
    """Product-type sync using the default test config."""
    return ProductTypeSync(config)


@pytest.fixture(scope="session")
def apply() -> Callable[[dict, list[dict]], dict]:
    """The local action applier used for round-trip checks."""
    return apply_actions

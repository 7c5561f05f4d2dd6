"""Public data models for the typesync library.

Snapshots and update actions are plain JSON-compatible dicts, so they can be
passed straight to a request body.  This module holds the supporting
vocabulary: action names, delta entry kinds, field descriptors and action
groups.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ActionName(str, Enum):
    """Every update action name the builders can emit."""

    CHANGE_NAME = "changeName"
    SET_KEY = "setKey"
    CHANGE_DESCRIPTION = "changeDescription"
    CHANGE_LABEL = "changeLabel"
    SET_INPUT_TIP = "setInputTip"
    CHANGE_INPUT_HINT = "changeInputHint"
    CHANGE_IS_SEARCHABLE = "changeIsSearchable"
    CHANGE_ATTRIBUTE_CONSTRAINT = "changeAttributeConstraint"
    ADD_PLAIN_ENUM_VALUE = "addPlainEnumValue"
    ADD_LOCALIZED_ENUM_VALUE = "addLocalizedEnumValue"
    CHANGE_PLAIN_ENUM_VALUE_ORDER = "changePlainEnumValueOrder"
    CHANGE_LOCALIZED_ENUM_VALUE_ORDER = "changeLocalizedEnumValueOrder"
    CHANGE_PLAIN_ENUM_VALUE_LABEL = "changePlainEnumValueLabel"
    CHANGE_LOCALIZED_ENUM_VALUE_LABEL = "changeLocalizedEnumValueLabel"
    REMOVE_ENUM_VALUE = "removeEnumValue"
    """Per-value removal event.  Collapsed into ``removeEnumValues`` before
    actions are returned."""
    REMOVE_ENUM_VALUES = "removeEnumValues"
    ADD_ATTRIBUTE_DEFINITION = "addAttributeDefinition"
    REMOVE_ATTRIBUTE_DEFINITION = "removeAttributeDefinition"
    CHANGE_ATTRIBUTE_ORDER = "changeAttributeOrder"


class DeltaKind(str, Enum):
    """Classification of a single delta entry."""

    ADDED = "added"
    """``"i": [new]`` -- a value that only exists on the new side."""

    REMOVED = "removed"
    """``"_i": [old, 0, 0]`` -- a value that only exists on the old side."""

    CHANGED = "changed"
    """``"i": [old, new]`` -- a leaf value replaced wholesale."""

    MOVED = "moved"
    """``"_i": ["", j, 3]`` -- an array item that changed position."""

    NESTED = "nested"
    """``"i": {...}`` -- a sub-delta for an object whose members changed."""

    IGNORED = "ignored"
    """A shape none of the builders act on."""


class ActionGroupPolicy(str, Enum):
    """What to do with the actions of one action group."""

    ALLOW = "allow"
    IGNORE = "ignore"


# ---------------------------------------------------------------------------
# Delta entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DeltaEntry:
    """One decoded entry of a delta mapping.

    Attributes
    ----------
    key:
        The raw key as it appears in the delta (``"3"``, ``"_3"``, ``"label"``).
    kind:
        The decoded :class:`DeltaKind`.
    value:
        The raw delta value, kept for diagnostics.
    index:
        The array position encoded in *key*, or ``None`` for object members.
        New-array index for ``"i"`` keys, old-array index for ``"_i"`` keys.
    old_value:
        The old side for ``REMOVED`` and ``CHANGED`` entries.
    new_value:
        The new side for ``ADDED`` and ``CHANGED`` entries.
    target_index:
        The new-array index of a ``MOVED`` entry.
    """

    key: str
    kind: DeltaKind
    value: Any = None
    index: int | None = None
    old_value: Any = None
    new_value: Any = None
    target_index: int | None = None

    @property
    def nested(self) -> dict[str, Any]:
        """The sub-delta of a ``NESTED`` entry (empty for other kinds)."""
        if self.kind is DeltaKind.NESTED:
            return self.value
        return {}


# ---------------------------------------------------------------------------
# Builder configuration types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ActionDescriptor:
    """Maps one snapshot field to the update action that changes it.

    Attributes
    ----------
    action:
        The action name to emit.
    key:
        The snapshot field the action covers.
    action_key:
        Payload field carrying the new value.  Defaults to *key*.
    """

    action: str
    key: str
    action_key: str | None = None

    @property
    def payload_key(self) -> str:
        return self.action_key or self.key


@dataclass
class ActionGroup:
    """Allow or ignore every action of one group.

    Attributes
    ----------
    type:
        The group name (``"base"`` or ``"attributeDefinitions"``).
    group:
        ``"allow"`` or ``"ignore"``.
    """

    type: str
    group: ActionGroupPolicy | str = ActionGroupPolicy.ALLOW

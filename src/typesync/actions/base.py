"""Scalar field actions.

Maps a declarative list of :class:`ActionDescriptor` entries against an
object delta and emits one action per descriptor whose field changed.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from typesync.models import ActionDescriptor


def _is_unset(value: Any, omit_empty_string: bool) -> bool:
    return value is None or (omit_empty_string and value == "")


def build_base_attributes_actions(
    actions: Iterable[ActionDescriptor],
    diff: dict[str, Any],
    old_obj: dict[str, Any],
    new_obj: dict[str, Any],
    should_omit_empty_string: bool = False,
) -> list[dict[str, Any]]:
    """Build one update action per changed field.

    Parameters
    ----------
    actions:
        Descriptors mapping a field ``key`` to an action name and the
        payload field that carries the new value.
    diff:
        Object delta for *old_obj* -> *new_obj*.  Only descriptors whose
        ``key`` appears in it are considered.
    old_obj, new_obj:
        The snapshots the delta was computed from.
    should_omit_empty_string:
        Suppress actions whose new value is ``""``, and treat a previous
        ``""`` like a missing value.

    Returns
    -------
    list[dict]
        ``{"action": name, <payload_key>: new_value}`` when the field has a
        new value, ``{"action": name}`` when it was unset.  Fields missing
        on both sides produce nothing.
    """
    result: list[dict[str, Any]] = []
    for descriptor in actions:
        if descriptor.key not in diff:
            continue
        before = old_obj.get(descriptor.key)
        now = new_obj.get(descriptor.key)
        if should_omit_empty_string and now == "":
            continue
        if now is None:
            if _is_unset(before, should_omit_empty_string):
                continue
            result.append({"action": descriptor.action})
        else:
            result.append({"action": descriptor.action, descriptor.payload_key: now})
    return result

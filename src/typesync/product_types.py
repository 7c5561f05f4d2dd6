"""Update actions for product types.

:class:`ProductTypeSync` is the entry point: it diffs two product-type
snapshots and returns the ordered update actions that turn the previous
one into the next one.  Entity base fields come first, then attribute
definitions; each group can be allowed or ignored through
:attr:`SyncConfig.action_groups`.
"""

from __future__ import annotations

import json
import sys
import time
from collections.abc import Callable
from typing import Any

from typesync.actions import (
    actions_map_attributes,
    build_base_attributes_actions,
    find_matching_pairs,
)
from typesync.config import SyncConfig
from typesync.delta import diff
from typesync.errors import ErrorCode, TypeSyncInputError
from typesync.models import ActionDescriptor, ActionGroupPolicy, ActionName
from typesync.observability import NoopMetricsHook, get_logger

log = get_logger("typesync.product_types")

BASE_ACTIONS: list[ActionDescriptor] = [
    ActionDescriptor(
        action=ActionName.CHANGE_NAME.value,
        key="name",
        action_key="newValue",
    ),
    ActionDescriptor(action=ActionName.SET_KEY.value, key="key"),
    ActionDescriptor(action=ActionName.CHANGE_DESCRIPTION.value, key="description"),
]


def actions_map_base(
    delta: dict[str, Any],
    previous: dict[str, Any],
    next_entity: dict[str, Any],
    config: SyncConfig | None = None,
) -> list[dict[str, Any]]:
    """Build ``changeName``, ``setKey`` and ``changeDescription`` actions."""
    config = config or SyncConfig()
    return build_base_attributes_actions(
        actions=BASE_ACTIONS,
        diff=delta,
        old_obj=previous,
        new_obj=next_entity,
        should_omit_empty_string=config.should_omit_empty_string,
    )


def _attributes(entity: dict[str, Any], argument: str) -> list[Any]:
    attributes = entity.get("attributes")
    if attributes is None:
        return []
    if not isinstance(attributes, list):
        raise TypeSyncInputError(
            f"`{argument}.attributes` must be a list",
            code=ErrorCode.INVALID_SNAPSHOT,
            context={"argument": argument, "received_type": type(attributes).__name__},
        )
    return attributes


class ProductTypeSync:
    """Builds update actions for product types.

    Parameters
    ----------
    config:
        Builder configuration.  Defaults to ``SyncConfig()``.
    """

    def __init__(self, config: SyncConfig | None = None) -> None:
        self._config = config or SyncConfig()
        self._metrics = (
            self._config.metrics if self._config.metrics is not None else NoopMetricsHook()
        )

    @property
    def config(self) -> SyncConfig:
        return self._config

    def build_actions(
        self,
        previous: dict[str, Any],
        next_entity: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """Compute the actions that transform *previous* into *next_entity*.

        Parameters
        ----------
        previous:
            The product type as it currently exists.
        next_entity:
            The desired product type.

        Returns
        -------
        list[dict]
            Ordered update actions; empty when both snapshots are equal.
            Neither snapshot is modified.

        Raises
        ------
        TypeSyncInputError
            If either snapshot is missing or not a mapping.
        """
        self._validate(previous, "previous")
        self._validate(next_entity, "next")
        start = time.monotonic()

        delta = diff(previous, next_entity)
        if delta is None:
            actions: list[dict[str, Any]] = []
        else:
            actions = self._map_actions(delta, previous, next_entity)

        elapsed_ms = (time.monotonic() - start) * 1000
        self._metrics.timing("typesync.build_duration_ms", elapsed_ms)
        for action in actions:
            self._metrics.increment(
                "typesync.actions_total", tags={"action": action["action"]}
            )
        log.debug(
            "build_actions complete",
            extra={"extra_fields": {"op": "build_actions", "actions": len(actions)}},
        )
        if self._config.debug_dump_actions:
            print(
                "[typesync] Update actions:",
                json.dumps(actions, indent=2, ensure_ascii=False, default=str),
                file=sys.stderr,
            )
        return actions

    def _validate(self, snapshot: Any, argument: str) -> None:
        if snapshot is None:
            raise TypeSyncInputError(
                "Missing either `next` or `previous` in order to build update actions",
                context={"argument": argument},
            )
        if not isinstance(snapshot, dict):
            raise TypeSyncInputError(
                f"`{argument}` must be a mapping",
                code=ErrorCode.INVALID_SNAPSHOT,
                context={"argument": argument, "received_type": type(snapshot).__name__},
            )

    def _map_group(
        self,
        group_type: str,
        build: Callable[[], list[dict[str, Any]]],
    ) -> list[dict[str, Any]]:
        if self._config.group_policy(group_type) is ActionGroupPolicy.IGNORE:
            return []
        return build()

    def _map_actions(
        self,
        delta: dict[str, Any],
        previous: dict[str, Any],
        next_entity: dict[str, Any],
    ) -> list[dict[str, Any]]:
        actions: list[dict[str, Any]] = []
        actions.extend(
            self._map_group(
                "base",
                lambda: actions_map_base(delta, previous, next_entity, self._config),
            )
        )
        actions.extend(
            self._map_group(
                "attributeDefinitions",
                lambda: self._attribute_actions(previous, next_entity),
            )
        )
        return actions

    def _attribute_actions(
        self,
        previous: dict[str, Any],
        next_entity: dict[str, Any],
    ) -> list[dict[str, Any]]:
        previous_attributes = _attributes(previous, "previous")
        next_attributes = _attributes(next_entity, "next")
        attributes_delta = diff(previous_attributes, next_attributes)
        if attributes_delta is None:
            return []
        diff_paths = find_matching_pairs(
            attributes_delta, previous_attributes, next_attributes, "name"
        )
        return actions_map_attributes(
            attributes_delta, previous_attributes, next_attributes, diff_paths
        )


def create_sync_product_types(
    action_groups: list[Any] | None = None,
    config: SyncConfig | None = None,
) -> ProductTypeSync:
    """Create a :class:`ProductTypeSync`, optionally overriding action groups."""
    config = config or SyncConfig()
    if action_groups is not None:
        config = SyncConfig(
            should_omit_empty_string=config.should_omit_empty_string,
            action_groups=list(action_groups),
            metrics=config.metrics,
            debug_dump_actions=config.debug_dump_actions,
        )
    return ProductTypeSync(config)

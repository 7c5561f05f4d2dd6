"""Builder configuration for typesync.

:class:`SyncConfig` captures every tuneable knob of the action builders.
Instances are passed to :class:`~typesync.product_types.ProductTypeSync`.

One module-level constant lists the action groups a product-type sync
understands:

* :data:`PRODUCT_TYPE_ACTION_GROUPS` -- valid values for ``ActionGroup.type``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from typesync.models import ActionGroup, ActionGroupPolicy

# ---------------------------------------------------------------------------
# Action group constants
# ---------------------------------------------------------------------------

PRODUCT_TYPE_ACTION_GROUPS: tuple[str, ...] = (
    "base",
    "attributeDefinitions",
)
"""Group names accepted in :attr:`SyncConfig.action_groups`."""


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class SyncConfig:
    """Complete configuration for a product-type sync.

    Every parameter has a default, so ``SyncConfig()`` is a valid
    configuration.

    Parameters
    ----------
    should_omit_empty_string:
        Suppress entity base field actions (``name``, ``key``,
        ``description``) whose new value is ``""``.  A transition from a
        value to ``""`` or from a missing value to ``""`` then emits
        nothing, and a previous ``""`` that goes missing is not unset.
    action_groups:
        Restrict which groups of actions are built.

        * empty (default) -- build every group.
        * otherwise -- only groups listed with ``"allow"`` are built;
          groups listed with ``"ignore"`` or not listed at all are skipped.

        Entries may be :class:`ActionGroup` instances or mappings with
        ``type`` and ``group`` keys.
    metrics:
        A :class:`~typesync.observability.MetricsHook` implementation.
        ``None`` selects the no-op hook.
    debug_dump_actions:
        Write each computed action list as JSON to *stderr*.
    """

    # ── Builders ────────────────────────────────────────────────────────
    should_omit_empty_string: bool = False

    action_groups: list[ActionGroup] = field(default_factory=list)

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_actions: bool = False

    def __post_init__(self) -> None:
        """Normalise and validate action groups."""
        groups: list[ActionGroup] = []
        for entry in self.action_groups:
            if isinstance(entry, dict):
                entry = ActionGroup(
                    type=entry.get("type", ""),
                    group=entry.get("group", ActionGroupPolicy.ALLOW),
                )
            if entry.type not in PRODUCT_TYPE_ACTION_GROUPS:
                raise ValueError(
                    f"Unknown action group type '{entry.type}'. "
                    f"Expected one of: {', '.join(PRODUCT_TYPE_ACTION_GROUPS)}"
                )
            try:
                policy = ActionGroupPolicy(entry.group)
            except ValueError:
                raise ValueError(
                    f"Action group '{entry.group}' not supported. "
                    'Please use "allow" or "ignore".'
                ) from None
            groups.append(ActionGroup(type=entry.type, group=policy))
        self.action_groups = groups

    def group_policy(self, group_type: str) -> ActionGroupPolicy:
        """Return whether actions of *group_type* should be built."""
        if not self.action_groups:
            return ActionGroupPolicy.ALLOW
        for entry in self.action_groups:
            if entry.type == group_type:
                return ActionGroupPolicy(entry.group)
        return ActionGroupPolicy.IGNORE

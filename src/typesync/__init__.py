"""typesync -- update actions for product-type definitions.

Public re-exports
-----------------

* **Entry point:** :class:`ProductTypeSync`, :func:`create_sync_product_types`
* **Configuration:** :class:`SyncConfig`
* **Errors:** Every :class:`TypeSyncError` subclass and :class:`ErrorCode`
* **Models:** Action names, delta entry types and action groups

Usage::

    from typesync import ProductTypeSync

    sync = ProductTypeSync()
    actions = sync.build_actions(previous_product_type, next_product_type)
"""

from __future__ import annotations

# ── Entry point ────────────────────────────────────────────────────────
from typesync.product_types import ProductTypeSync, create_sync_product_types

# ── Configuration ───────────────────────────────────────────────────────
from typesync.config import PRODUCT_TYPE_ACTION_GROUPS, SyncConfig

# ── Errors ──────────────────────────────────────────────────────────────
from typesync.errors import (
    ErrorCode,
    TypeSyncDeltaError,
    TypeSyncError,
    TypeSyncInputError,
)

# ── Models ──────────────────────────────────────────────────────────────
from typesync.models import (
    ActionDescriptor,
    ActionGroup,
    ActionGroupPolicy,
    ActionName,
    DeltaEntry,
    DeltaKind,
)

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Entry point
    "ProductTypeSync",
    "create_sync_product_types",
    # Configuration
    "SyncConfig",
    "PRODUCT_TYPE_ACTION_GROUPS",
    # Errors
    "TypeSyncError",
    "ErrorCode",
    "TypeSyncInputError",
    "TypeSyncDeltaError",
    # Models
    "ActionName",
    "DeltaKind",
    "DeltaEntry",
    "ActionDescriptor",
    "ActionGroup",
    "ActionGroupPolicy",
]

"""Delta primitive: structural diffs and their decoding.

Exports
-------
diff
    Compute the delta between two JSON values.
decode_entry
    Classify one array delta entry.
iter_entries
    Decode every entry of an array delta.
get_delta_value
    Extract the new side of a leaf delta.
is_changed_key / is_removed_key
    Array key predicates.
"""

from .differ import diff, object_hash
from .lcs_matcher import lcs_match
from .nodes import decode_entry, get_delta_value, is_changed_key, is_removed_key, iter_entries

__all__ = [
    "decode_entry",
    "diff",
    "get_delta_value",
    "is_changed_key",
    "is_removed_key",
    "iter_entries",
    "lcs_match",
    "object_hash",
]

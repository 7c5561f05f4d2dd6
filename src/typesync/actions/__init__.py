"""Action builders.

Exports
-------
build_base_attributes_actions
    Scalar field actions from a list of descriptors.
ArrayDiffClassifier
    Add/change/remove/move events for one keyed array delta.
actions_map_enums
    Enum value actions with bulk reorder and removal.
actions_map_attributes
    Attribute definition actions for a product type.
find_matching_pairs / extract_matching_pairs
    Resolve the previous/next items a delta key refers to.
"""

from .arrays import ArrayDiffClassifier
from .attributes import ATTRIBUTE_DEFINITION_ACTIONS, actions_map_attributes
from .base import build_base_attributes_actions
from .enums import actions_map_enums, enum_action_names
from .pairs import extract_matching_pairs, find_matching_pairs

__all__ = [
    "ATTRIBUTE_DEFINITION_ACTIONS",
    "ArrayDiffClassifier",
    "actions_map_attributes",
    "actions_map_enums",
    "build_base_attributes_actions",
    "enum_action_names",
    "extract_matching_pairs",
    "find_matching_pairs",
]

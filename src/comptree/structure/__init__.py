"""
CompTree structure components.

This package provides the component registry, tree invariant helpers,
projection for rendering, session selection state, validation and search
for the CompTree manifest engine.
"""

from comptree.structure.invariants import (
    collect_subtree,
    ensure_depth_allowed,
    get_depth,
    is_descendant,
    iter_ancestors,
    subtree_height,
)
from comptree.structure.projection import (
    TreeEntry,
    build_tree,
    can_add_child,
    component_depth,
    iter_visible,
)
from comptree.structure.registry import ComponentRegistry
from comptree.structure.search import IconCategory, filter_by_name, filter_by_type, icon_category
from comptree.structure.selection import SelectionState
from comptree.structure.validation import (
    ValidationIssue,
    ValidationResult,
    validate_manifest,
)

__all__ = [
    "ComponentRegistry",
    "IconCategory",
    "SelectionState",
    "TreeEntry",
    "ValidationIssue",
    "ValidationResult",
    "build_tree",
    "can_add_child",
    "collect_subtree",
    "component_depth",
    "ensure_depth_allowed",
    "filter_by_name",
    "filter_by_type",
    "get_depth",
    "icon_category",
    "is_descendant",
    "iter_ancestors",
    "iter_visible",
    "subtree_height",
    "validate_manifest",
]

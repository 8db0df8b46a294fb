"""
Selection and expansion state for one editing session.

The state object knows nothing about the registry; the store checks that ids
exist before calling in and prunes ids after deletions.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from comptree.core.types import ComponentId


@dataclass
class SelectionState:
    """Single selected component plus the set of expanded components."""

    selected_component_id: ComponentId | None = None
    expanded_component_ids: set[ComponentId] = field(default_factory=set)

    def select(self, component_id: ComponentId | None) -> None:
        """Replace the current selection (None clears it)."""
        self.selected_component_id = component_id

    def is_expanded(self, component_id: ComponentId) -> bool:
        return component_id in self.expanded_component_ids

    def toggle(self, component_id: ComponentId) -> bool:
        """
        Flip the expanded flag of a component.

        Returns:
            True if the component is expanded afterwards
        """
        if component_id in self.expanded_component_ids:
            self.expanded_component_ids.discard(component_id)
            return False
        self.expanded_component_ids.add(component_id)
        return True

    def expand_all(self, component_ids: Iterable[ComponentId]) -> None:
        self.expanded_component_ids |= set(component_ids)

    def collapse_all(self) -> None:
        self.expanded_component_ids = set()

    def prune(self, removed_ids: Iterable[ComponentId]) -> bool:
        """
        Forget ids of components that no longer exist.

        Params:
            removed_ids: Ids deleted from the registry

        Returns:
            True if the selection pointed at a removed id and was cleared
        """
        removed = set(removed_ids)
        self.expanded_component_ids -= removed
        if self.selected_component_id in removed:
            self.selected_component_id = None
            return True
        return False

    def reset(self) -> None:
        self.selected_component_id = None
        self.expanded_component_ids = set()

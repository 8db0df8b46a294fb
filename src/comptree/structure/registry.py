"""
Component registry for the manifest tree.

The registry wraps a Manifest's flat ``components`` table and maintains a
reverse index (child id -> parent id) so that ancestor walks cost time
proportional to tree depth instead of tree size. The index is rebuilt from
the ``children`` lists whenever a manifest is adopted and is kept in step by
every structural write below.
"""

import logging
from collections.abc import Iterable, Iterator

from comptree.core.types import ComponentId
from comptree.exceptions import ComponentNotFoundError
from comptree.manifest.factory import generate_component_id
from comptree.manifest.models import Component, Manifest

logger = logging.getLogger(__name__)

# Ids are random enough that this is never reached in practice
MAX_ID_ATTEMPTS = 16


class ComponentRegistry:
    """Id-indexed table of components plus the child -> parent index.

    The registry performs writes only; it does not decide whether a write is
    allowed. Callers check depth and cycle rules first (see
    ``comptree.structure.invariants``) so a write never has to be undone.

    When an externally assembled manifest lists a child under more than one
    parent, the first parent encountered wins in the index. Such manifests
    are reported by the validator rather than rejected here.
    """

    def __init__(self, manifest: Manifest):
        self.manifest = manifest
        self._parents: dict[ComponentId, ComponentId] = {}
        self.rebuild_index()

    @property
    def components(self) -> dict[ComponentId, Component]:
        return self.manifest.components

    def __contains__(self, component_id: object) -> bool:
        return component_id in self.manifest.components

    def __iter__(self) -> Iterator[ComponentId]:
        return iter(self.manifest.components)

    def __len__(self) -> int:
        return len(self.manifest.components)

    def rebuild_index(self) -> None:
        """Recompute the reverse parent index from every component's ``children``."""
        self._parents.clear()
        for parent_id, component in self.manifest.components.items():
            for child_id in component.children:
                if child_id not in self.manifest.components:
                    continue
                self._parents.setdefault(child_id, parent_id)
        logger.debug(
            "Indexed %d components (%d parent links)",
            len(self.manifest.components),
            len(self._parents),
        )

    def get(self, component_id: ComponentId) -> Component | None:
        return self.manifest.components.get(component_id)

    def require(self, component_id: ComponentId, operation: str | None = None) -> Component:
        """
        Get a component or fail with a typed error.

        Params:
            component_id: Id to look up
            operation: Operation name included in the error message

        Returns:
            The stored Component

        Raises:
            ComponentNotFoundError: If no component has this id
        """
        component = self.manifest.components.get(component_id)
        if component is None:
            raise ComponentNotFoundError(component_id, operation)
        return component

    def parent_of(self, component_id: ComponentId) -> ComponentId | None:
        return self._parents.get(component_id)

    def children_of(self, component_id: ComponentId) -> list[ComponentId]:
        component = self.manifest.components.get(component_id)
        return list(component.children) if component else []

    def roots(self) -> list[ComponentId]:
        """Ids never referenced as a child, in registry order."""
        return [cid for cid in self.manifest.components if cid not in self._parents]

    def allocate_id(self, component_type: str) -> ComponentId:
        """
        Generate an id that no stored component uses yet.

        Params:
            component_type: Type name embedded in the id for readability

        Returns:
            A collision-free component id

        Raises:
            RuntimeError: If no free id could be generated
        """
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = generate_component_id(component_type)
            if candidate not in self.manifest.components:
                return candidate
        raise RuntimeError(f"Could not allocate a unique id for type '{component_type}'")

    def insert(
        self,
        component: Component,
        parent_id: ComponentId | None = None,
        position: int | None = None,
    ) -> None:
        """
        Store a new component and optionally link it under a parent.

        Params:
            component: Component to store; its id must be unused
            parent_id: Existing parent to link under, or None for a root
            position: Index in the parent's ``children``; appended when None
        """
        self.manifest.components[component.id] = component
        if parent_id is not None:
            self.attach(component.id, parent_id, position)

    def attach(
        self,
        component_id: ComponentId,
        parent_id: ComponentId,
        position: int | None = None,
    ) -> None:
        """Link a currently parentless component under ``parent_id``."""
        children = self.manifest.components[parent_id].children
        if position is None:
            children.append(component_id)
        else:
            children.insert(position, component_id)
        self._parents[component_id] = parent_id

    def detach(self, component_id: ComponentId) -> ComponentId | None:
        """
        Unlink a component from its parent, making it a root.

        Params:
            component_id: Component to unlink

        Returns:
            The former parent id, or None if the component already was a root
        """
        parent_id = self._parents.pop(component_id, None)
        if parent_id is not None:
            parent = self.manifest.components.get(parent_id)
            if parent is not None:
                parent.children[:] = [cid for cid in parent.children if cid != component_id]
        return parent_id

    def remove_all(self, component_ids: Iterable[ComponentId]) -> None:
        """
        Delete components and every reference to them.

        The caller supplies a complete subtree, so no surviving component is
        left pointing at a removed one. References held by other parents (only
        possible in a manifest that lists a child twice) are scrubbed too.

        Params:
            component_ids: Ids to delete, in removal order
        """
        removed = list(component_ids)
        removed_set = set(removed)
        for component_id in removed:
            self.detach(component_id)
        for component_id in removed:
            self.manifest.components.pop(component_id, None)
        for component in self.manifest.components.values():
            if any(cid in removed_set for cid in component.children):
                component.children[:] = [
                    cid for cid in component.children if cid not in removed_set
                ]
        # Children of removed nodes may still be indexed under a removed parent
        for child_id, parent_id in list(self._parents.items()):
            if parent_id in removed_set or child_id in removed_set:
                del self._parents[child_id]

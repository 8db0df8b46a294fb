"""
Tree invariant helpers.

Pure functions over a ComponentRegistry that compute depth, ancestry and
subtree shape. Every structural mutation in the store consults these before
writing, which is what keeps the tree bounded, acyclic and single-parented.

Walks are guarded against revisiting a node, because a manifest loaded from
outside the guarded API may already contain a cycle.
"""

from collections.abc import Iterator

from comptree.core.types import MAX_DEPTH, ComponentId
from comptree.exceptions import CircularReferenceError, DepthExceededError
from comptree.structure.registry import ComponentRegistry


def iter_ancestors(registry: ComponentRegistry, component_id: ComponentId) -> Iterator[ComponentId]:
    """
    Yield the parent, grandparent, ... of a component up to its root.

    Params:
        registry: Registry to walk
        component_id: Component whose ancestors are wanted (not yielded itself)

    Raises:
        CircularReferenceError: If the parent chain loops back on itself
    """
    seen = {component_id}
    current = registry.parent_of(component_id)
    while current is not None:
        if current in seen:
            raise CircularReferenceError(
                component_id,
                current,
                reason=f"parent chain of '{component_id}' loops through '{current}'",
            )
        seen.add(current)
        yield current
        current = registry.parent_of(current)


def get_depth(registry: ComponentRegistry, component_id: ComponentId) -> int:
    """
    Number of ancestor hops from the root to a component (root = 0).

    Params:
        registry: Registry holding the component
        component_id: Component to measure

    Returns:
        Depth of the component

    Raises:
        ComponentNotFoundError: If the component does not exist
        CircularReferenceError: If the parent chain is cyclic
    """
    registry.require(component_id, "get_component_depth")
    return sum(1 for _ in iter_ancestors(registry, component_id))


def is_descendant(
    registry: ComponentRegistry, candidate_id: ComponentId, ancestor_id: ComponentId
) -> bool:
    """True if ``candidate_id`` sits somewhere below ``ancestor_id``."""
    return any(cid == ancestor_id for cid in iter_ancestors(registry, candidate_id))


def collect_subtree(registry: ComponentRegistry, component_id: ComponentId) -> list[ComponentId]:
    """
    Ids of a component and all of its descendants in post-order.

    Children come before their parent and siblings keep ``children`` order, so
    the result is safe to delete front to back. Dangling child ids are skipped.

    Params:
        registry: Registry to walk
        component_id: Root of the subtree (must exist)

    Returns:
        Post-ordered list ending with ``component_id``
    """
    order: list[ComponentId] = []
    visited = {component_id}
    stack: list[tuple[ComponentId, Iterator[ComponentId]]] = [
        (component_id, iter(registry.children_of(component_id)))
    ]
    while stack:
        node_id, children = stack[-1]
        for child_id in children:
            if child_id in registry and child_id not in visited:
                visited.add(child_id)
                stack.append((child_id, iter(registry.children_of(child_id))))
                break
        else:
            stack.pop()
            order.append(node_id)
    return order


def subtree_height(registry: ComponentRegistry, component_id: ComponentId) -> int:
    """Levels below a component: 0 for a leaf, 1 if it only has children, etc."""
    height = 0
    visited = {component_id}
    frontier = [component_id]
    while frontier:
        next_frontier = []
        for node_id in frontier:
            for child_id in registry.children_of(node_id):
                if child_id in registry and child_id not in visited:
                    visited.add(child_id)
                    next_frontier.append(child_id)
        if not next_frontier:
            break
        height += 1
        frontier = next_frontier
    return height


def ensure_depth_allowed(
    component_id: ComponentId | None, depth: int, max_depth: int = MAX_DEPTH
) -> None:
    """
    Fail when a placement would land beyond ``max_depth``.

    Raises:
        DepthExceededError: If ``depth`` is greater than ``max_depth``
    """
    if depth > max_depth:
        raise DepthExceededError(component_id, depth, max_depth)

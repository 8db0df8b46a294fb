"""
Tree projection for rendering.

Produces the flat, depth-annotated list the component tree widget draws:
a depth-first walk in ``children`` order that hides everything below a
collapsed component.
"""

from collections.abc import Collection, Iterator

from attrs import frozen

from comptree.core.types import MAX_DEPTH, ComponentId
from comptree.structure.invariants import get_depth
from comptree.structure.registry import ComponentRegistry


@frozen
class TreeEntry:
    id: ComponentId
    depth: int


def component_depth(registry: ComponentRegistry, component_id: ComponentId) -> int:
    return get_depth(registry, component_id)


def can_add_child(
    registry: ComponentRegistry, component_id: ComponentId, max_depth: int = MAX_DEPTH
) -> bool:
    """True if a child of ``component_id`` would still be within ``max_depth``."""
    return get_depth(registry, component_id) < max_depth


def iter_visible(
    registry: ComponentRegistry, expanded_ids: Collection[ComponentId]
) -> Iterator[TreeEntry]:
    """
    Walk visible components depth-first.

    Roots are always visible and are visited in registry order. A child is
    visible only if its parent is visible and expanded. Dangling child ids are
    skipped and no component is emitted twice, even in a cyclic manifest.

    Params:
        registry: Registry to project
        expanded_ids: Ids whose children should be shown

    Yields:
        TreeEntry for each visible component
    """
    emitted: set[ComponentId] = set()
    for root_id in registry.roots():
        stack = [TreeEntry(root_id, 0)]
        while stack:
            entry = stack.pop()
            if entry.id in emitted:
                continue
            emitted.add(entry.id)
            yield entry
            if entry.id not in expanded_ids:
                continue
            children = [
                cid for cid in registry.children_of(entry.id) if cid in registry
            ]
            # Reversed so the first child is popped first
            for child_id in reversed(children):
                stack.append(TreeEntry(child_id, entry.depth + 1))


def build_tree(
    registry: ComponentRegistry, expanded_ids: Collection[ComponentId]
) -> list[TreeEntry]:
    return list(iter_visible(registry, expanded_ids))

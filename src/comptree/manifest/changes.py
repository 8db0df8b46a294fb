"""
Change detection between two manifest snapshots.

The code generator regenerates only what changed between generations. Because
component ids are stable across edits, a component is identified by id and
compared by a hash of its wire form. ``metadata.updatedAt`` is left out of the
hash so an edit that rewrites a field with its current value is not a change.
"""

import hashlib
import json

from attrs import field, frozen

from comptree.core.types import ComponentId
from comptree.manifest.models import Component, Manifest

# Fields stamped on every edit, independent of the component's content
HASH_EXCLUDE = {"metadata": {"updated_at"}}


@frozen
class ComponentChanges:
    added: tuple[ComponentId, ...] = field(factory=tuple)
    modified: tuple[ComponentId, ...] = field(factory=tuple)
    removed: tuple[ComponentId, ...] = field(factory=tuple)
    # True when the set of root components differs, so the app entry point
    # that mounts them has to be regenerated too
    app_needs_update: bool = False

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.modified or self.removed)

    @property
    def total(self) -> int:
        return len(self.added) + len(self.modified) + len(self.removed)


def component_hash(component: Component) -> str:
    """Stable SHA-256 of a component's wire form (key order independent, updatedAt excluded)."""
    payload = json.dumps(
        component.model_dump(mode="json", by_alias=True, exclude=HASH_EXCLUDE),
        sort_keys=True,
        separators=(",", ":"),
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def root_ids(manifest: Manifest) -> set[ComponentId]:
    """Ids of components that no other component lists as a child."""
    referenced = {
        child_id
        for component in manifest.components.values()
        for child_id in component.children
    }
    return {cid for cid in manifest.components if cid not in referenced}


def detect_changes(previous: Manifest | None, current: Manifest) -> ComponentChanges:
    """
    Compare two manifest snapshots component by component.

    Params:
        previous: Snapshot from the last generation, or None on first generation
        current: Snapshot about to be generated

    Returns:
        ComponentChanges with ids in the order they appear in each manifest.
        ``app_needs_update`` is set on first generation and whenever a root
        component was added or removed.
    """
    old = previous.components if previous is not None else {}
    new = current.components

    added = tuple(cid for cid in new if cid not in old)
    removed = tuple(cid for cid in old if cid not in new)
    modified = tuple(
        cid
        for cid in new
        if cid in old and component_hash(new[cid]) != component_hash(old[cid])
    )
    if previous is None:
        app_needs_update = True
    else:
        app_needs_update = root_ids(previous) != root_ids(current)
    return ComponentChanges(
        added=added,
        modified=modified,
        removed=removed,
        app_needs_update=app_needs_update,
    )

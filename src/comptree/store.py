"""
Session store coordinating manifest mutations, projection and validation.

This module contains ManifestStore, the single entry point through which the
UI and the AI collaborator edit a component tree. Every mutation validates
completely before it writes, so a raised error always leaves the manifest,
the selection and the expansion state exactly as they were.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from comptree.config import Settings, get_settings
from comptree.core.types import ComponentId
from comptree.exceptions import CircularReferenceError, ComponentNotFoundError
from comptree.manifest.factory import (
    create_component_metadata,
    create_empty_manifest,
    utc_now,
)
from comptree.manifest.models import (
    Component,
    ComponentInput,
    ComponentUpdate,
    Manifest,
)
from comptree.structure.invariants import (
    collect_subtree,
    ensure_depth_allowed,
    get_depth,
    is_descendant,
    subtree_height,
)
from comptree.structure.projection import TreeEntry, build_tree, can_add_child
from comptree.structure.registry import ComponentRegistry
from comptree.structure.selection import SelectionState
from comptree.structure.validation import (
    ValidationIssue,
    ValidationResult,
    validate_manifest,
)

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (Copy)"


class ManifestStore:
    """Coordinator for editing one project's component manifest.

    Responsibilities:
    - Own the active Manifest through a ComponentRegistry
    - Apply add/update/delete/move/duplicate as atomic transitions
    - Keep selection and expansion state consistent with the registry
    - Project the visible tree for rendering
    - Validate whole manifests, recording the last result for save gating

    One store corresponds to one open project. ``load_manifest`` starts a
    session from a persisted manifest and ``clear_manifest`` ends it.
    """

    def __init__(
        self,
        manifest: Manifest | Mapping[str, Any] | None = None,
        settings: Settings | None = None,
        clock: Callable[[], str] | None = None,
    ):
        """
        Params:
            manifest: Optional manifest (model or wire dict) to load immediately
            settings: Settings to use instead of the cached environment settings
            clock: Callable returning ISO-8601 timestamps; defaults to UTC now
        """
        self.settings = settings or get_settings()
        self._clock = clock or utc_now
        self._registry: ComponentRegistry | None = None
        self._selection = SelectionState()
        self.validation_errors: list[ValidationIssue] = []
        self.validation_warnings: list[ValidationIssue] = []
        if manifest is not None:
            self.load_manifest(manifest)

    # ------------------------------------------------------------------
    # Session state
    # ------------------------------------------------------------------

    @property
    def manifest(self) -> Manifest | None:
        return self._registry.manifest if self._registry is not None else None

    @property
    def max_depth(self) -> int:
        return self.settings.max_depth

    @property
    def selected_component_id(self) -> ComponentId | None:
        return self._selection.selected_component_id

    @property
    def expanded_component_ids(self) -> frozenset[ComponentId]:
        return frozenset(self._selection.expanded_component_ids)

    @property
    def save_blocked(self) -> bool:
        """True while the most recent validation reported errors."""
        return bool(self.validation_errors)

    def load_manifest(self, manifest: Manifest | Mapping[str, Any]) -> ValidationResult:
        """
        Replace the whole manifest, starting a fresh session.

        The manifest is copied, so the caller's object is never mutated by later
        edits. Selection and expansion are reset. The manifest is validated and
        the issues recorded; an invalid manifest is still loaded so the user can
        repair it, but ``save_blocked`` stays true until it validates cleanly.

        Params:
            manifest: Manifest model or its wire-format dict

        Returns:
            The validation result for the loaded manifest

        Raises:
            pydantic.ValidationError: If a dict does not match the manifest shape
        """
        if isinstance(manifest, Manifest):
            loaded = manifest.model_copy(deep=True)
        else:
            loaded = Manifest.model_validate(manifest)

        self._registry = ComponentRegistry(loaded)
        self._selection.reset()
        result = self.validate()
        if not result.is_valid:
            logger.warning(
                "Loaded manifest '%s' with %d validation errors",
                loaded.metadata.project_name,
                len(result.errors),
            )
        else:
            logger.debug(
                "Loaded manifest '%s' with %d components",
                loaded.metadata.project_name,
                len(loaded.components),
            )
        return result

    def clear_manifest(self) -> None:
        """Drop the manifest and all session state (project closed)."""
        self._registry = None
        self._selection.reset()
        self.validation_errors = []
        self.validation_warnings = []

    def export_manifest(self) -> dict[str, Any] | None:
        """JSON-ready camelCase snapshot for persistence, or None when nothing is loaded."""
        return self.manifest.to_wire() if self.manifest is not None else None

    def snapshot(self) -> Manifest | None:
        """Deep copy of the live manifest for collaborators such as the code generator."""
        return self.manifest.model_copy(deep=True) if self.manifest is not None else None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_component(self, component: ComponentInput | Mapping[str, Any]) -> ComponentId:
        """
        Create a component, optionally as the last child of ``parent_id``.

        The manifest is created on first use. The new component gets a fresh
        id, ``created_at == updated_at == now`` and the requested author.

        Params:
            component: ComponentInput or mapping with ``displayName``, ``type``
                and optional ``category``, ``properties``, ``styling``,
                ``parentId`` and ``author``

        Returns:
            Id of the new component

        Raises:
            ComponentNotFoundError: If ``parent_id`` names no component
            DepthExceededError: If the new component would sit beyond max depth
            pydantic.ValidationError: If the payload is malformed
        """
        if isinstance(component, ComponentInput):
            payload = component.model_copy(deep=True)
        else:
            payload = ComponentInput.model_validate(component)

        parent_id = payload.parent_id
        if parent_id is None:
            target_depth = 0
        else:
            if self._registry is None or parent_id not in self._registry:
                raise ComponentNotFoundError(parent_id, "add_component")
            target_depth = get_depth(self._registry, parent_id) + 1
        ensure_depth_allowed(payload.display_name, target_depth, self.max_depth)

        registry = self._ensure_registry()
        now = self._clock()
        component_id = registry.allocate_id(payload.type)
        registry.insert(
            Component(
                id=component_id,
                display_name=payload.display_name,
                type=payload.type,
                category=payload.category,
                properties=payload.properties,
                styling=payload.styling,
                children=[],
                metadata=create_component_metadata(
                    payload.author, now=now, settings=self.settings
                ),
            ),
            parent_id,
        )
        registry.manifest.metadata.updated_at = now
        logger.debug(
            "Added component %s (%s) at depth %d under %s",
            component_id,
            payload.type,
            target_depth,
            parent_id,
        )
        return component_id

    def update_component(
        self, component_id: ComponentId, updates: ComponentUpdate | Mapping[str, Any]
    ) -> None:
        """
        Merge editable fields into an existing component.

        Only the fields present in ``updates`` among ``display_name``, ``type``,
        ``category``, ``properties`` and ``styling`` are replaced. ``children``,
        ``id`` and ``metadata.created_at`` are never touched;
        ``metadata.updated_at`` is refreshed.

        Params:
            component_id: Component to update
            updates: ComponentUpdate or mapping (camelCase or snake_case keys)

        Raises:
            ComponentNotFoundError: If the component does not exist
            pydantic.ValidationError: If the merged component would be invalid
        """
        component = self._require(component_id, "update_component")
        if not isinstance(updates, ComponentUpdate):
            updates = ComponentUpdate.model_validate(updates)

        changes = updates.model_dump(include=updates.model_fields_set)
        # Validate the merged result before touching the live component
        candidate = Component.model_validate({**component.model_dump(), **changes})

        now = self._clock()
        for name in changes:
            setattr(component, name, getattr(candidate, name))
        component.metadata.updated_at = now
        self._touch(now)
        logger.debug("Updated component %s fields %s", component_id, sorted(changes))

    def delete_component(self, component_id: ComponentId) -> None:
        """
        Delete a component together with its entire subtree.

        The component is removed from its parent's ``children``; removed ids
        are pruned from the expanded set, and the selection is cleared if it
        pointed into the deleted subtree.

        Raises:
            ComponentNotFoundError: If the component does not exist
        """
        registry = self._require_registry(component_id, "delete_component")
        registry.require(component_id, "delete_component")

        removed = collect_subtree(registry, component_id)
        registry.remove_all(removed)
        selection_cleared = self._selection.prune(removed)
        self._touch(self._clock())
        logger.debug(
            "Deleted component %s and %d descendants%s",
            component_id,
            len(removed) - 1,
            " (selection cleared)" if selection_cleared else "",
        )

    def duplicate_component(
        self, component_id: ComponentId, attach_to_parent: bool = False
    ) -> ComponentId:
        """
        Create a shallow copy of a component.

        The copy gets a new id, the original's display name plus " (Copy)",
        deep copies of ``properties`` and ``styling``, no children and fresh
        timestamps. Descendants are never cloned.

        Params:
            component_id: Component to copy
            attach_to_parent: Insert the copy right after the original in the
                original's parent; by default the copy becomes a root

        Returns:
            Id of the copy

        Raises:
            ComponentNotFoundError: If the component does not exist
        """
        original = self._require(component_id, "duplicate_component")
        registry = self._registry

        parent_id = registry.parent_of(component_id) if attach_to_parent else None
        position = None
        if parent_id is not None:
            position = registry.get(parent_id).children.index(component_id) + 1

        now = self._clock()
        copy_id = registry.allocate_id(original.type)
        registry.insert(
            Component(
                id=copy_id,
                display_name=f"{original.display_name}{COPY_SUFFIX}",
                type=original.type,
                category=original.category,
                properties={
                    name: prop.model_copy(deep=True)
                    for name, prop in original.properties.items()
                },
                styling=original.styling.model_copy(deep=True),
                children=[],
                metadata=create_component_metadata(
                    original.metadata.author, now=now, settings=self.settings
                ),
            ),
            parent_id,
            position,
        )
        self._touch(now)
        logger.debug("Duplicated component %s as %s", component_id, copy_id)
        return copy_id

    def move_component(
        self, component_id: ComponentId, new_parent_id: ComponentId | None
    ) -> None:
        """
        Re-parent a component (with its subtree) or make it a root.

        The component is appended to the end of the new parent's ``children``.
        The whole moved subtree must still fit within max depth at its new
        position.

        Params:
            component_id: Component to move
            new_parent_id: New parent, or None to make the component a root

        Raises:
            ComponentNotFoundError: If either id does not exist
            CircularReferenceError: If the new parent is the component itself or
                one of its descendants
            DepthExceededError: If the moved subtree would exceed max depth
        """
        registry = self._require_registry(component_id, "move_component")
        registry.require(component_id, "move_component")

        if new_parent_id is None:
            new_depth = 0
        else:
            if new_parent_id == component_id:
                raise CircularReferenceError(component_id, new_parent_id)
            registry.require(new_parent_id, "move_component")
            if is_descendant(registry, new_parent_id, component_id):
                raise CircularReferenceError(component_id, new_parent_id)
            new_depth = get_depth(registry, new_parent_id) + 1

        deepest = new_depth + subtree_height(registry, component_id)
        ensure_depth_allowed(component_id, deepest, self.max_depth)

        old_parent_id = registry.detach(component_id)
        if new_parent_id is not None:
            registry.attach(component_id, new_parent_id)
        self._touch(self._clock())
        logger.debug(
            "Moved component %s from %s to %s", component_id, old_parent_id, new_parent_id
        )

    # ------------------------------------------------------------------
    # Queries and projection
    # ------------------------------------------------------------------

    def get_component(self, component_id: ComponentId) -> Component | None:
        return self._registry.get(component_id) if self._registry is not None else None

    def get_parent_id(self, component_id: ComponentId) -> ComponentId | None:
        registry = self._require_registry(component_id, "get_parent_id")
        registry.require(component_id, "get_parent_id")
        return registry.parent_of(component_id)

    def get_root_ids(self) -> list[ComponentId]:
        return self._registry.roots() if self._registry is not None else []

    def get_component_depth(self, component_id: ComponentId) -> int:
        """
        Depth of a component (root = 0).

        Raises:
            ComponentNotFoundError: If the component does not exist
        """
        registry = self._require_registry(component_id, "get_component_depth")
        return get_depth(registry, component_id)

    def can_add_child(self, component_id: ComponentId) -> bool:
        registry = self._require_registry(component_id, "can_add_child")
        return can_add_child(registry, component_id, self.max_depth)

    def get_component_tree(self) -> list[TreeEntry]:
        """Visible components in depth-first order with their depth."""
        if self._registry is None:
            return []
        return build_tree(self._registry, self._selection.expanded_component_ids)

    # ------------------------------------------------------------------
    # Selection and expansion
    # ------------------------------------------------------------------

    def select_component(self, component_id: ComponentId | None) -> None:
        """
        Select a single component, replacing any previous selection.

        Raises:
            ComponentNotFoundError: If a non-None id does not exist
        """
        if component_id is not None:
            self._require(component_id, "select_component")
        self._selection.select(component_id)

    def toggle_expanded(self, component_id: ComponentId) -> bool:
        """
        Flip whether a component's children are shown.

        Returns:
            True if the component is now expanded

        Raises:
            ComponentNotFoundError: If the component does not exist
        """
        self._require(component_id, "toggle_expanded")
        return self._selection.toggle(component_id)

    def expand_all(self) -> None:
        if self._registry is not None:
            self._selection.expand_all(self._registry)

    def collapse_all(self) -> None:
        self._selection.collapse_all()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> ValidationResult:
        """
        Validate the whole manifest without raising or mutating it.

        The result is also recorded in ``validation_errors`` and
        ``validation_warnings``.
        """
        result = validate_manifest(
            self.manifest,
            max_depth=self.max_depth,
            supported_level=self.settings.schema_level,
        )
        self.validation_errors = list(result.errors)
        self.validation_warnings = list(result.warnings)
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_registry(self) -> ComponentRegistry:
        if self._registry is None:
            manifest = create_empty_manifest(now=self._clock(), settings=self.settings)
            self._registry = ComponentRegistry(manifest)
            logger.debug("Created manifest '%s'", manifest.metadata.project_name)
        return self._registry

    def _require_registry(
        self, component_id: ComponentId | None, operation: str
    ) -> ComponentRegistry:
        if self._registry is None:
            raise ComponentNotFoundError(component_id, operation)
        return self._registry

    def _require(self, component_id: ComponentId, operation: str) -> Component:
        return self._require_registry(component_id, operation).require(
            component_id, operation
        )

    def _touch(self, now: str) -> None:
        self._registry.manifest.metadata.updated_at = now

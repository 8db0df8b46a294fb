"""
Validation of whole manifests.

Manifests can reach the engine without passing through the guarded mutation
API (loaded from storage, or assembled by the AI collaborator), so they are
checked as a whole before being trusted for rendering or code generation.
Validation never raises and never mutates; it only reports.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Literal

from comptree.core.types import MAX_DEPTH, SUPPORTED_SCHEMA_LEVEL, ComponentId
from comptree.manifest.models import Manifest

logger = logging.getLogger(__name__)

Severity = Literal["ERROR", "WARNING"]


@dataclass
class ValidationIssue:
    """One problem found in a manifest."""

    code: str
    message: str
    severity: Severity = "ERROR"
    component_id: ComponentId | None = None
    component_name: str | None = None
    field: str | None = None
    suggestion: str | None = None

    def __str__(self) -> str:
        return f"[{self.severity}] {self.code}: {self.message}"


@dataclass
class ValidationResult:
    """Outcome of a validation pass. ``is_valid`` ignores warnings."""

    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def issues(self) -> list[ValidationIssue]:
        return self.errors + self.warnings

    def add(self, issue: ValidationIssue) -> None:
        if issue.severity == "ERROR":
            self.errors.append(issue)
        else:
            self.warnings.append(issue)

    def codes(self) -> list[str]:
        return [issue.code for issue in self.issues]


def validate_manifest(
    manifest: Manifest | None,
    max_depth: int = MAX_DEPTH,
    supported_level: int = SUPPORTED_SCHEMA_LEVEL,
) -> ValidationResult:
    """
    Check a manifest for every structural violation.

    Checks performed:
    - Component ids that differ from their table key
    - Child references to components that do not exist
    - The same child listed twice under one parent (warning)
    - Components listed under more than one parent
    - Cycles, including a component listing itself as a child
    - Components nested deeper than ``max_depth``
    - A schema level beyond what this engine supports (warning)

    Params:
        manifest: Manifest to check; None is treated as an empty manifest
        max_depth: Deepest permitted nesting level
        supported_level: Highest schema level understood

    Returns:
        ValidationResult with errors and warnings
    """
    result = ValidationResult()
    if manifest is None:
        return result

    _detect_id_mismatches(manifest, result)
    _detect_bad_child_references(manifest, result)
    _detect_multiple_parents(manifest, result)
    _detect_cycles_and_depth(manifest, max_depth, result)
    _detect_unsupported_level(manifest, supported_level, result)

    if result.errors:
        logger.debug(
            "Manifest validation found %d errors and %d warnings",
            len(result.errors),
            len(result.warnings),
        )
    return result


def _name_of(manifest: Manifest, component_id: ComponentId) -> str | None:
    component = manifest.components.get(component_id)
    return component.display_name if component else None


def _detect_id_mismatches(manifest: Manifest, result: ValidationResult) -> None:
    """Table keys must match the id stored inside the component."""
    for key, component in manifest.components.items():
        if component.id != key:
            result.add(
                ValidationIssue(
                    code="ID_MISMATCH",
                    message=f"Component stored under '{key}' declares id '{component.id}'",
                    component_id=key,
                    component_name=component.display_name,
                    field="id",
                    suggestion="Store each component under its own id",
                )
            )


def _detect_bad_child_references(manifest: Manifest, result: ValidationResult) -> None:
    """Dangling child ids (error) and repeated child ids within one list (warning)."""
    for parent_id, component in manifest.components.items():
        seen: set[ComponentId] = set()
        for child_id in component.children:
            if child_id not in manifest.components:
                result.add(
                    ValidationIssue(
                        code="DANGLING_CHILD",
                        message=(
                            f"Component '{component.display_name}' references "
                            f"missing child '{child_id}'"
                        ),
                        component_id=parent_id,
                        component_name=component.display_name,
                        field="children",
                        suggestion=f"Remove '{child_id}' from the children list",
                    )
                )
            elif child_id in seen:
                result.add(
                    ValidationIssue(
                        code="DUPLICATE_CHILD",
                        message=(
                            f"Component '{component.display_name}' lists child "
                            f"'{child_id}' more than once"
                        ),
                        severity="WARNING",
                        component_id=parent_id,
                        component_name=component.display_name,
                        field="children",
                    )
                )
            seen.add(child_id)


def _detect_multiple_parents(manifest: Manifest, result: ValidationResult) -> None:
    """Each component may be listed by at most one other component."""
    parents: dict[ComponentId, list[ComponentId]] = {}
    for parent_id, component in manifest.components.items():
        for child_id in dict.fromkeys(component.children):
            if child_id in manifest.components:
                parents.setdefault(child_id, []).append(parent_id)

    for child_id, parent_ids in parents.items():
        if len(parent_ids) > 1:
            result.add(
                ValidationIssue(
                    code="MULTIPLE_PARENTS",
                    message=(
                        f"Component '{_name_of(manifest, child_id)}' is a child of "
                        f"{len(parent_ids)} components: {', '.join(parent_ids)}"
                    ),
                    component_id=child_id,
                    component_name=_name_of(manifest, child_id),
                    field="children",
                    suggestion="Keep the component under a single parent",
                )
            )


def _detect_cycles_and_depth(
    manifest: Manifest, max_depth: int, result: ValidationResult
) -> None:
    """
    Walk every tree from its root checking depth, then sweep leftovers for cycles.

    Components not reachable from any root can only be part of (or hang below)
    a cycle in which every member has a parent.
    """
    components = manifest.components
    referenced = {
        child_id for component in components.values() for child_id in component.children
    }
    visited: set[ComponentId] = set()
    reported_cycles: set[frozenset[ComponentId]] = set()

    for root_id in components:
        if root_id in referenced:
            continue
        for issue in _walk(manifest, root_id, max_depth, visited, reported_cycles):
            result.add(issue)

    for component_id in components:
        if component_id in visited:
            continue
        for issue in _walk(manifest, component_id, None, visited, reported_cycles):
            result.add(issue)


def _walk(
    manifest: Manifest,
    start_id: ComponentId,
    max_depth: int | None,
    visited: set[ComponentId],
    reported_cycles: set[frozenset[ComponentId]],
) -> Iterator[ValidationIssue]:
    """Depth-first walk from ``start_id`` yielding cycle and depth issues.

    ``max_depth`` of None disables depth checks (used for rootless regions,
    where depth is undefined).
    """
    components = manifest.components
    path = [start_id]
    on_path = {start_id}
    visited.add(start_id)
    stack = [(start_id, 0, iter(components[start_id].children))]

    while stack:
        node_id, depth, children = stack[-1]
        child_id = next(children, None)
        if child_id is None:
            stack.pop()
            path.pop()
            on_path.discard(node_id)
            continue
        if child_id not in components:
            continue
        if child_id in on_path:
            cycle = path[path.index(child_id):] + [child_id]
            key = frozenset(cycle)
            if key not in reported_cycles:
                reported_cycles.add(key)
                names = " -> ".join(
                    _name_of(manifest, cid) or cid for cid in cycle
                )
                yield ValidationIssue(
                    code="CIRCULAR_REFERENCE",
                    message=f"Circular reference detected: {names}",
                    component_id=child_id,
                    component_name=_name_of(manifest, child_id),
                    field="children",
                    suggestion="Remove one of the child references to break the cycle",
                )
            continue
        if child_id in visited:
            continue

        visited.add(child_id)
        child_depth = depth + 1
        if max_depth is not None and child_depth > max_depth:
            yield ValidationIssue(
                code="MAX_DEPTH_EXCEEDED",
                message=(
                    f"Component '{_name_of(manifest, child_id)}' is nested at depth "
                    f"{child_depth}, beyond the max depth of {max_depth}"
                ),
                component_id=child_id,
                component_name=_name_of(manifest, child_id),
                field="children",
                suggestion="Move the component closer to the root",
            )
        path.append(child_id)
        on_path.add(child_id)
        stack.append((child_id, child_depth, iter(components[child_id].children)))


def _detect_unsupported_level(
    manifest: Manifest, supported_level: int, result: ValidationResult
) -> None:
    if manifest.level > supported_level:
        result.add(
            ValidationIssue(
                code="UNSUPPORTED_LEVEL",
                message=(
                    f"Manifest declares schema level {manifest.level}; only levels "
                    f"up to {supported_level} are supported"
                ),
                severity="WARNING",
                field="level",
            )
        )

"""
Exception classes for CompTree manifest operations.

This module defines specific exception types for the error conditions that
structural mutations of a component manifest can run into. Every exception
is raised before any part of the registry is written, so a caught error
always leaves the manifest unchanged.
"""


class CompTreeError(Exception):
    """Base exception for all CompTree-related errors."""

    pass


class ComponentNotFoundError(CompTreeError, KeyError):
    """Raised when an operation references a component id that does not exist."""

    def __init__(self, component_id: str | None, operation: str | None = None):
        """
        Initialize the exception.

        Params:
            component_id: The id that could not be found in the manifest
            operation: Name of the operation that referenced the id
        """
        self.component_id = component_id
        self.operation = operation
        message = f"Component '{component_id}' not found"
        if operation:
            message = f"{message} (during {operation})"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class DepthExceededError(CompTreeError):
    """Raised when a structural change would place a node beyond the maximum depth."""

    def __init__(self, component_id: str | None, depth: int, max_depth: int):
        """
        Initialize the exception.

        Params:
            component_id: Id of the component being placed (display name for
                components that have no id yet)
            depth: The deepest level the change would have produced
            max_depth: The configured maximum nesting depth
        """
        self.component_id = component_id
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(
            f"Cannot place '{component_id}' at depth {depth}: "
            f"exceeds max depth of {max_depth} ({max_depth + 1} levels allowed)"
        )


class CircularReferenceError(CompTreeError):
    """Raised when a move would make a component its own ancestor."""

    def __init__(self, component_id: str, target_id: str | None, reason: str | None = None):
        """
        Initialize the exception.

        Params:
            component_id: The component being moved or inspected
            target_id: The parent the component was to be moved under
            reason: Optional override for the explanatory part of the message
        """
        self.component_id = component_id
        self.target_id = target_id
        if reason is None:
            if component_id == target_id:
                reason = "a component cannot be moved into itself"
            else:
                reason = f"'{target_id}' is a descendant of '{component_id}'"
        super().__init__(f"Circular reference: {reason}")

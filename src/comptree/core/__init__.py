"""
Core CompTree definitions.

This package provides the fundamental type aliases and limits shared by the
manifest model, the structure helpers and the store.
"""

from comptree.core.types import (
    MAX_DEPTH,
    SUPPORTED_SCHEMA_LEVEL,
    ComponentAuthor,
    ComponentId,
    PropertyValue,
    WireDict,
)

__all__ = [
    "MAX_DEPTH",
    "SUPPORTED_SCHEMA_LEVEL",
    "ComponentAuthor",
    "ComponentId",
    "PropertyValue",
    "WireDict",
]

"""
CompTree exception classes.

This package provides all exception types used throughout the CompTree
manifest engine for consistent error handling and reporting.
"""

from comptree.exceptions.core import (
    CircularReferenceError,
    ComponentNotFoundError,
    CompTreeError,
    DepthExceededError,
)

__all__ = [
    "CompTreeError",
    "ComponentNotFoundError",
    "DepthExceededError",
    "CircularReferenceError",
]

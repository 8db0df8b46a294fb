"""
CompTree - the component manifest tree engine of a visual UI builder

CompTree keeps a flat, id-indexed table of UI components consistent as a
bounded-depth, acyclic, single-parent tree while it is edited interactively.
"""

from importlib.metadata import version

from comptree.core.types import MAX_DEPTH
from comptree.manifest.models import Component, ComponentInput, ComponentUpdate, Manifest
from comptree.store import ManifestStore
from comptree.structure.projection import TreeEntry
from comptree.structure.validation import ValidationIssue, ValidationResult

__version__ = version("comptree")

__all__ = [
    "__version__",
    "MAX_DEPTH",
    "Component",
    "ComponentInput",
    "ComponentUpdate",
    "Manifest",
    "ManifestStore",
    "TreeEntry",
    "ValidationIssue",
    "ValidationResult",
]

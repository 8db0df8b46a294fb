"""
CompTree manifest model.

This package provides the pydantic data model of the manifest document,
factories for new manifests/components and snapshot change detection.
"""

from comptree.manifest.changes import ComponentChanges, component_hash, detect_changes, root_ids
from comptree.manifest.factory import (
    create_component_metadata,
    create_empty_manifest,
    generate_component_id,
    sanitize_type,
    utc_now,
)
from comptree.manifest.models import (
    BuildConfig,
    Component,
    ComponentCategory,
    ComponentInput,
    ComponentMetadata,
    ComponentProperty,
    ComponentStyling,
    ComponentUpdate,
    Manifest,
    ManifestMetadata,
    PluginRef,
    PluginsConfig,
    PropProperty,
    StaticProperty,
)

__all__ = [
    "BuildConfig",
    "Component",
    "ComponentCategory",
    "ComponentChanges",
    "ComponentInput",
    "ComponentMetadata",
    "ComponentProperty",
    "ComponentStyling",
    "ComponentUpdate",
    "Manifest",
    "ManifestMetadata",
    "PluginRef",
    "PluginsConfig",
    "PropProperty",
    "StaticProperty",
    "component_hash",
    "create_component_metadata",
    "create_empty_manifest",
    "detect_changes",
    "generate_component_id",
    "sanitize_type",
    "root_ids",
    "utc_now",
]

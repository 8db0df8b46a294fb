"""
Factory helpers for manifests, component metadata and component ids.

Defaults for newly created manifests come from ``comptree.config`` so that a
deployment can retarget framework or plugin names without code changes.
"""

import re
import secrets
import string
import time
from datetime import datetime, timezone

from inflection import underscore

from comptree.config import Settings, get_settings
from comptree.core.types import ComponentAuthor, ComponentId
from comptree.manifest.models import (
    BuildConfig,
    ComponentMetadata,
    Manifest,
    ManifestMetadata,
    PluginRef,
    PluginsConfig,
)

ID_PREFIX = "comp"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_BASE36 = string.digits + string.ascii_lowercase


def utc_now() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _random_suffix(length: int = 9) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def sanitize_type(component_type: str) -> str:
    """
    Reduce a component type to the characters allowed inside an id.

    ``MyCustomButton`` and ``My-Custom_Button!@#`` both become
    ``mycustombutton``. Falls back to ``component`` when nothing is left.
    """
    cleaned = _NON_ALNUM.sub("", underscore(component_type or "").lower())
    return cleaned or "component"


def generate_component_id(component_type: str) -> ComponentId:
    """
    Generate a component id of the form ``comp_<type>_<epoch ms>_<random>``.

    Ids are unique with overwhelming probability; the registry still checks
    for collisions before accepting one.

    Params:
        component_type: Element or custom type name of the component

    Returns:
        A fresh component id
    """
    timestamp = time.time_ns() // 1_000_000
    return f"{ID_PREFIX}_{sanitize_type(component_type)}_{timestamp}_{_random_suffix()}"


def create_component_metadata(
    author: ComponentAuthor = "user",
    now: str | None = None,
    settings: Settings | None = None,
) -> ComponentMetadata:
    """
    Create metadata for a brand new component.

    Params:
        author: Who created the component, ``user`` or ``ai``
        now: Timestamp to stamp; defaults to the current time
        settings: Settings providing the component version string

    Returns:
        Metadata whose ``created_at`` equals its ``updated_at``
    """
    settings = settings or get_settings()
    now = now or utc_now()
    return ComponentMetadata(
        created_at=now,
        updated_at=now,
        author=author,
        version=settings.component_version,
    )


def create_empty_manifest(
    project_name: str | None = None,
    now: str | None = None,
    settings: Settings | None = None,
) -> Manifest:
    """
    Create a manifest with default metadata and configuration and no components.

    Params:
        project_name: Project name; defaults to the configured default name
        now: Timestamp for ``created_at``/``updated_at``; defaults to the current time
        settings: Settings providing schema, framework and plugin defaults

    Returns:
        A new, empty Manifest
    """
    settings = settings or get_settings()
    now = now or utc_now()
    return Manifest(
        schema_version=settings.schema_version,
        level=settings.schema_level,
        metadata=ManifestMetadata(
            project_name=project_name or settings.default_project_name,
            framework=settings.framework,
            created_at=now,
            updated_at=now,
        ),
        build_config=BuildConfig(
            bundler=settings.bundler,
            css_framework=settings.css_framework,
        ),
        plugins=PluginsConfig(
            framework=PluginRef(
                name=settings.framework_plugin_name,
                version=settings.framework_plugin_version,
            )
        ),
    )

"""
Shared test fixtures and utilities for the comptree test suite.
"""

from datetime import datetime, timedelta, timezone

import pytest

from comptree.config import Settings
from comptree.manifest.factory import create_component_metadata, create_empty_manifest
from comptree.manifest.models import Component
from comptree.store import ManifestStore


class FakeClock:
    """Deterministic clock returning a strictly increasing ISO-8601 timestamp per call."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)):
        self.current = start or datetime(2026, 1, 1, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> str:
        self.current += self.step
        return self.current.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@pytest.fixture
def settings():
    """Settings built from defaults only, ignoring any .env or COMPTREE_* variables."""
    return Settings(_env_file=None)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(settings, clock):
    """Empty store with a deterministic clock."""
    return ManifestStore(settings=settings, clock=clock)


@pytest.fixture
def add_chain(store):
    """Build a parent -> child -> ... chain of ``length`` components and return their ids.

    Usage:
        def test_something(add_chain):
            root, child, grandchild = add_chain(3)
    """

    def _add_chain(length: int, parent_id: str | None = None) -> list[str]:
        ids = []
        for level in range(length):
            parent_id = store.add_component(
                {"displayName": f"L{level}", "type": "div", "parentId": parent_id}
            )
            ids.append(parent_id)
        return ids

    return _add_chain


@pytest.fixture
def make_component(settings):
    """Factory for bare components, bypassing the store's guards."""

    def _make_component(component_id: str, children: list[str] | None = None, **fields) -> Component:
        return Component(
            id=component_id,
            display_name=fields.pop("display_name", component_id.title()),
            type=fields.pop("type", "div"),
            children=children or [],
            metadata=create_component_metadata(settings=settings),
            **fields,
        )

    return _make_component


@pytest.fixture
def make_manifest(settings, make_component):
    """Factory for manifests from a ``{id: [child ids]}`` layout.

    Usage:
        manifest = make_manifest({"a": ["b"], "b": []})
    """

    def _make_manifest(layout: dict[str, list[str]], **fields):
        manifest = create_empty_manifest(settings=settings)
        for component_id, children in layout.items():
            manifest.components[component_id] = make_component(component_id, list(children))
        for name, value in fields.items():
            setattr(manifest, name, value)
        return manifest

    return _make_manifest

"""
Tests for the component registry.

This module tests the id table wrapper and its reverse parent index:
- Index construction from children lists, including malformed manifests
- Structural writes: insert, attach, detach, remove_all
- Id allocation
"""

import pytest

from comptree.exceptions import ComponentNotFoundError
from comptree.structure import ComponentRegistry
from comptree.structure import registry as registry_module


class TestIndex:
    """Test reverse index construction."""

    def test_parents_and_roots(self, make_manifest):
        registry = ComponentRegistry(make_manifest({"a": ["b", "c"], "b": ["d"], "c": [], "d": [], "e": []}))

        assert registry.parent_of("b") == "a"
        assert registry.parent_of("d") == "b"
        assert registry.parent_of("a") is None
        assert registry.roots() == ["a", "e"]

    def test_dangling_children_not_indexed(self, make_manifest):
        registry = ComponentRegistry(make_manifest({"a": ["ghost"]}))

        assert registry.parent_of("ghost") is None
        assert registry.children_of("a") == ["ghost"]

    def test_first_parent_wins(self, make_manifest):
        """A child listed under two parents is indexed under the first one."""
        registry = ComponentRegistry(make_manifest({"a": ["c"], "b": ["c"], "c": []}))

        assert registry.parent_of("c") == "a"

    def test_container_protocol(self, make_manifest):
        registry = ComponentRegistry(make_manifest({"a": [], "b": []}))

        assert "a" in registry
        assert "z" not in registry
        assert list(registry) == ["a", "b"]
        assert len(registry) == 2


class TestLookup:
    """Test lookups."""

    def test_require_missing_raises_with_operation(self, make_manifest):
        registry = ComponentRegistry(make_manifest({}))

        with pytest.raises(ComponentNotFoundError) as exc_info:
            registry.require("x", "delete_component")

        assert exc_info.value.operation == "delete_component"

    def test_get_missing_returns_none(self, make_manifest):
        assert ComponentRegistry(make_manifest({})).get("x") is None

    def test_children_of_returns_copy(self, make_manifest):
        registry = ComponentRegistry(make_manifest({"a": ["b"], "b": []}))

        registry.children_of("a").append("zzz")

        assert registry.get("a").children == ["b"]


class TestWrites:
    """Test structural writes."""

    def test_insert_root(self, make_manifest, make_component):
        registry = ComponentRegistry(make_manifest({}))

        registry.insert(make_component("a"))

        assert registry.roots() == ["a"]

    def test_insert_at_position(self, make_manifest, make_component):
        registry = ComponentRegistry(make_manifest({"p": ["x", "y"], "x": [], "y": []}))

        registry.insert(make_component("n"), "p", 1)

        assert registry.get("p").children == ["x", "n", "y"]
        assert registry.parent_of("n") == "p"

    def test_detach_and_attach(self, make_manifest):
        registry = ComponentRegistry(make_manifest({"p": ["c"], "q": [], "c": []}))

        assert registry.detach("c") == "p"
        assert registry.get("p").children == []
        assert registry.detach("c") is None

        registry.attach("c", "q")
        assert registry.parent_of("c") == "q"
        assert registry.get("q").children == ["c"]

    def test_remove_all_scrubs_every_reference(self, make_manifest):
        """Removing a child listed under two parents clears both lists."""
        registry = ComponentRegistry(make_manifest({"a": ["c"], "b": ["c"], "c": ["d"], "d": []}))

        registry.remove_all(["d", "c"])

        assert set(registry) == {"a", "b"}
        assert registry.get("a").children == []
        assert registry.get("b").children == []
        assert registry.parent_of("c") is None
        assert registry.parent_of("d") is None


class TestAllocateId:
    """Test collision-free id allocation."""

    def test_fresh_id(self, make_manifest):
        registry = ComponentRegistry(make_manifest({}))
        assert registry.allocate_id("Button").startswith("comp_button_")

    def test_skips_colliding_ids(self, make_manifest, monkeypatch):
        registry = ComponentRegistry(make_manifest({"taken": []}))
        candidates = iter(["taken", "free"])
        monkeypatch.setattr(registry_module, "generate_component_id", lambda _type: next(candidates))

        assert registry.allocate_id("div") == "free"

    def test_gives_up_after_repeated_collisions(self, make_manifest, monkeypatch):
        registry = ComponentRegistry(make_manifest({"taken": []}))
        monkeypatch.setattr(registry_module, "generate_component_id", lambda _type: "taken")

        with pytest.raises(RuntimeError):
            registry.allocate_id("div")

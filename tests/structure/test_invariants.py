"""
Tests for tree invariant helpers.

Focus Areas:
1. Depth and ancestry on well-formed trees
2. Guarded walks on cyclic manifests
3. Subtree collection order and height
"""

import pytest

from comptree.exceptions import CircularReferenceError, ComponentNotFoundError, DepthExceededError
from comptree.structure import (
    ComponentRegistry,
    collect_subtree,
    ensure_depth_allowed,
    get_depth,
    is_descendant,
    iter_ancestors,
    subtree_height,
)


@pytest.fixture
def registry(make_manifest):
    """a -> (b -> (d, e), c)"""
    return ComponentRegistry(
        make_manifest({"a": ["b", "c"], "b": ["d", "e"], "c": [], "d": [], "e": []})
    )


class TestAncestry:
    """Test ancestor walks and depth."""

    def test_ancestors_nearest_first(self, registry):
        assert list(iter_ancestors(registry, "d")) == ["b", "a"]
        assert list(iter_ancestors(registry, "a")) == []

    def test_depth(self, registry):
        assert [get_depth(registry, cid) for cid in "abcde"] == [0, 1, 1, 2, 2]

    def test_depth_unknown_raises(self, registry):
        with pytest.raises(ComponentNotFoundError):
            get_depth(registry, "zzz")

    def test_is_descendant(self, registry):
        assert is_descendant(registry, "d", "a")
        assert is_descendant(registry, "e", "b")
        assert not is_descendant(registry, "c", "b")
        assert not is_descendant(registry, "a", "a")

    def test_cyclic_chain_raises(self, make_manifest):
        """Walking up a loop fails instead of spinning forever."""
        registry = ComponentRegistry(make_manifest({"a": ["b"], "b": ["c"], "c": ["a"]}))

        with pytest.raises(CircularReferenceError):
            get_depth(registry, "a")


class TestSubtree:
    """Test subtree helpers."""

    def test_collect_post_order(self, registry):
        """Children precede their parent, siblings keep order."""
        assert collect_subtree(registry, "a") == ["d", "e", "b", "c", "a"]
        assert collect_subtree(registry, "c") == ["c"]

    def test_collect_skips_dangling_and_repeats(self, make_manifest):
        registry = ComponentRegistry(make_manifest({"a": ["b", "ghost", "b"], "b": []}))

        assert collect_subtree(registry, "a") == ["b", "a"]

    def test_collect_terminates_on_cycle(self, make_manifest):
        registry = ComponentRegistry(make_manifest({"a": ["b"], "b": ["a"]}))

        assert sorted(collect_subtree(registry, "a")) == ["a", "b"]

    def test_height(self, registry):
        assert subtree_height(registry, "a") == 2
        assert subtree_height(registry, "b") == 1
        assert subtree_height(registry, "c") == 0


class TestEnsureDepthAllowed:
    def test_within_limit(self):
        ensure_depth_allowed("x", 4, 4)

    def test_beyond_limit(self):
        with pytest.raises(DepthExceededError) as exc_info:
            ensure_depth_allowed("x", 5, 4)
        assert exc_info.value.depth == 5

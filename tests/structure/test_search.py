"""
Tests for tree panel search and icon helpers.
"""

import pytest

from comptree.manifest.models import ComponentCategory
from comptree.structure import IconCategory, filter_by_name, filter_by_type, icon_category


@pytest.fixture
def components(make_component):
    return [
        make_component("a", display_name="Submit Button", type="button"),
        make_component("b", display_name="Hero Image", type="img"),
        make_component("c", display_name="Nav Container", type="div"),
    ]


class TestFilters:
    """Test case-insensitive substring filters."""

    def test_filter_by_name(self, components):
        assert [c.id for c in filter_by_name(components, "BUTTON")] == ["a"]

    def test_filter_by_type(self, components):
        assert [c.id for c in filter_by_type(components, "Im")] == ["b"]

    @pytest.mark.parametrize("term", ["", None])
    def test_empty_term_returns_all(self, components, term):
        assert filter_by_name(components, term) == components
        assert filter_by_type(components, term) == components

    def test_no_match(self, components):
        assert filter_by_name(components, "footer") == []


class TestIconCategory:
    @pytest.mark.parametrize(
        "component_type,expected",
        [
            ("button", IconCategory.FORM),
            ("DIV", IconCategory.LAYOUT),
            ("img", IconCategory.MEDIA),
            ("h2", IconCategory.BASIC),
            ("FancyCard", IconCategory.CUSTOM),
        ],
    )
    def test_icon_category(self, component_type, expected):
        assert icon_category(component_type) == expected

    def test_media_is_an_icon_only_category(self):
        """Media elements get their own icon but are not a component category."""
        assert icon_category("video") == IconCategory.MEDIA
        assert "media" not in {category.value for category in ComponentCategory}

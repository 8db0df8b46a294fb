"""
Search and icon helpers used by the component tree panel.
"""

from collections.abc import Iterable
from enum import Enum

from comptree.manifest.models import Component


class IconCategory(str, Enum):
    """Icon families drawn next to tree rows; wider than ComponentCategory."""

    BASIC = "basic"
    LAYOUT = "layout"
    FORM = "form"
    MEDIA = "media"
    CUSTOM = "custom"


TYPE_ICON_CATEGORIES: dict[str, IconCategory] = {
    "button": IconCategory.FORM,
    "input": IconCategory.FORM,
    "textarea": IconCategory.FORM,
    "select": IconCategory.FORM,
    "div": IconCategory.LAYOUT,
    "section": IconCategory.LAYOUT,
    "article": IconCategory.LAYOUT,
    "header": IconCategory.LAYOUT,
    "footer": IconCategory.LAYOUT,
    "span": IconCategory.BASIC,
    "p": IconCategory.BASIC,
    "h1": IconCategory.BASIC,
    "h2": IconCategory.BASIC,
    "h3": IconCategory.BASIC,
    "img": IconCategory.MEDIA,
    "video": IconCategory.MEDIA,
}


def filter_by_name(components: Iterable[Component], term: str | None) -> list[Component]:
    """Components whose display name contains ``term`` (case-insensitive); all if empty."""
    if not term:
        return list(components)
    needle = term.lower()
    return [c for c in components if needle in c.display_name.lower()]


def filter_by_type(components: Iterable[Component], term: str | None) -> list[Component]:
    """Components whose type contains ``term`` (case-insensitive); all if empty."""
    if not term:
        return list(components)
    needle = term.lower()
    return [c for c in components if needle in c.type.lower()]


def icon_category(component_type: str) -> IconCategory:
    return TYPE_ICON_CATEGORIES.get(component_type.lower(), IconCategory.CUSTOM)

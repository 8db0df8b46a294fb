"""
Pydantic models for the component manifest.

The manifest is the serializable document holding every component plus
project-level metadata and build configuration. Python attributes use
snake_case; the wire form produced by ``model_dump(by_alias=True)`` uses the
camelCase names the persistence and code-generation collaborators expect.
Property entries are a tagged union discriminated on their ``type`` field.
"""

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from comptree.core.types import ComponentAuthor, ComponentId, PropertyValue


class WireModel(BaseModel):
    """Base class for every manifest model, mapping snake_case to camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_assignment=True,
        validate_default=True,
    )


class ComponentCategory(str, Enum):
    """Closed set of component categories shown in the palette."""

    BASIC = "basic"
    LAYOUT = "layout"
    FORM = "form"
    CUSTOM = "custom"


class StaticProperty(WireModel):
    """A property whose value is fixed in the manifest."""

    type: Literal["static"] = "static"
    value: PropertyValue = None
    data_type: str = "string"


class PropProperty(WireModel):
    """A property exposed as a component prop with an optional default."""

    type: Literal["prop"] = "prop"
    default: PropertyValue = None
    required: bool = False
    data_type: str = "string"


ComponentProperty = Annotated[
    StaticProperty | PropProperty, Field(discriminator="type")
]


class ComponentStyling(WireModel):
    base_classes: list[str] = Field(default_factory=list)
    conditional_classes: dict[str, str] | None = None
    custom_css: str | None = Field(default=None, alias="customCSS")


class ComponentMetadata(WireModel):
    created_at: str
    updated_at: str
    author: ComponentAuthor = "user"
    version: str = "1.0.0"


class Component(WireModel):
    """
    One node of the UI tree.

    ``children`` records reference order only; the referenced components are
    stored flatly in ``Manifest.components`` alongside this one.
    """

    id: ComponentId
    display_name: str
    type: str
    category: ComponentCategory = ComponentCategory.BASIC
    properties: dict[str, ComponentProperty] = Field(default_factory=dict)
    styling: ComponentStyling = Field(default_factory=ComponentStyling)
    children: list[ComponentId] = Field(default_factory=list)
    metadata: ComponentMetadata


class ManifestMetadata(WireModel):
    project_name: str
    framework: str = "react"
    created_at: str
    updated_at: str


class BuildConfig(WireModel):
    model_config = ConfigDict(extra="allow")

    bundler: str = "vite"
    css_framework: str = "tailwind"


class PluginRef(WireModel):
    name: str
    version: str


class PluginsConfig(WireModel):
    model_config = ConfigDict(extra="allow")

    framework: PluginRef


class Manifest(WireModel):
    """The whole manifest document: project metadata, config and the component table."""

    schema_version: str = "1.0.0"
    level: int = 1
    metadata: ManifestMetadata
    build_config: BuildConfig = Field(default_factory=BuildConfig)
    plugins: PluginsConfig
    components: dict[ComponentId, Component] = Field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        """Return a JSON-ready, camelCase snapshot that shares no state with this model."""
        return self.model_dump(mode="json", by_alias=True)


class ComponentInput(WireModel):
    """Payload accepted by ``ManifestStore.add_component``."""

    display_name: str
    type: str
    category: ComponentCategory = ComponentCategory.BASIC
    properties: dict[str, ComponentProperty] = Field(default_factory=dict)
    styling: ComponentStyling = Field(default_factory=ComponentStyling)
    parent_id: ComponentId | None = None
    author: ComponentAuthor = "user"


class ComponentUpdate(WireModel):
    """
    Partial payload accepted by ``ManifestStore.update_component``.

    Only the fields explicitly supplied are applied. Keys outside the
    editable set (``children``, ``id``, ``metadata``) are dropped.
    """

    model_config = ConfigDict(extra="ignore")

    display_name: str | None = None
    type: str | None = None
    category: ComponentCategory | None = None
    properties: dict[str, ComponentProperty] | None = None
    styling: ComponentStyling | None = None

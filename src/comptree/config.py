"""
Engine configuration.

Uses pydantic-settings so the defaults stamped into new manifests and the
depth limit can be overridden from ``COMPTREE_*`` environment variables.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from comptree.core.types import MAX_DEPTH, SUPPORTED_SCHEMA_LEVEL


class Settings(BaseSettings):
    """
    Settings loaded from environment variables.

    Values can be set directly or via a .env file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="COMPTREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Tree limits
    # ==========================================================================
    max_depth: int = Field(
        default=MAX_DEPTH,
        ge=0,
        description="Deepest permitted nesting level (roots are depth 0)",
    )

    # ==========================================================================
    # Manifest defaults
    # ==========================================================================
    schema_version: str = Field(
        default="1.0.0",
        description="Schema version written into new manifests",
    )

    schema_level: int = Field(
        default=SUPPORTED_SCHEMA_LEVEL,
        ge=1,
        description="Capability tier written into new manifests",
    )

    default_project_name: str = Field(
        default="New Project",
        description="Project name used when a manifest is created lazily",
    )

    framework: str = Field(
        default="react",
        description="Target framework tag",
    )

    component_version: str = Field(
        default="1.0.0",
        description="Version string stamped into component metadata",
    )

    # ==========================================================================
    # Build / plugin defaults
    # ==========================================================================
    bundler: str = Field(default="vite", description="Bundler for generated apps")

    css_framework: str = Field(
        default="tailwind",
        description="CSS framework used by component styling",
    )

    framework_plugin_name: str = Field(
        default="@rise/plugin-react",
        description="Framework plugin that compiles the manifest",
    )

    framework_plugin_version: str = Field(default="1.0.0")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once. Call
    ``get_settings.cache_clear()`` after changing the environment.
    """
    return Settings()

"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from comptree.config import Settings, get_settings
from comptree.core.types import MAX_DEPTH


class TestSettings:
    """Test defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("COMPTREE_MAX_DEPTH", raising=False)
        settings = Settings(_env_file=None)

        assert settings.max_depth == MAX_DEPTH
        assert settings.schema_version == "1.0.0"
        assert settings.default_project_name == "New Project"
        assert settings.framework_plugin_name == "@rise/plugin-react"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("COMPTREE_MAX_DEPTH", "2")
        monkeypatch.setenv("COMPTREE_DEFAULT_PROJECT_NAME", "Storefront")

        settings = Settings(_env_file=None)

        assert settings.max_depth == 2
        assert settings.default_project_name == "Storefront"

    def test_negative_depth_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_depth=-1)

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()

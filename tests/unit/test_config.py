"""Tests for crudschema settings."""

from __future__ import annotations

import pytest

from crudschema.config import CrudSchemaSettings, clear_settings_cache, get_settings
from crudschema.errors import CONFIG_INVALID, ConfigurationError


class TestCrudSchemaSettings:
    def test_defaults(self) -> None:
        settings = CrudSchemaSettings()
        assert settings.default_search_component == "input"
        assert settings.default_form_component == "Input"
        assert settings.legacy_label_field is True
        assert settings.children_key == "children"
        assert settings.locale == "en"

    def test_load_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CRUDSCHEMA_DEFAULT_FORM_COMPONENT", "ElInput")
        monkeypatch.setenv("CRUDSCHEMA_LEGACY_LABEL_FIELD", "false")
        monkeypatch.setenv("CRUDSCHEMA_LOCALE", "en-us")

        settings = CrudSchemaSettings.load()

        assert settings.default_form_component == "ElInput"
        assert settings.legacy_label_field is False
        assert settings.locale == "en_US"

    def test_invalid_locale_raises_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            CrudSchemaSettings.load(locale="not-a-locale")
        assert exc_info.value.code == CONFIG_INVALID

    def test_blank_children_key_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            CrudSchemaSettings.load(children_key=" ")


def test_get_settings_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_settings()
    assert get_settings() is first

    monkeypatch.setenv("CRUDSCHEMA_DEFAULT_SEARCH_COMPONENT", "Select")
    assert get_settings().default_search_component == "input"
    clear_settings_cache()
    assert get_settings().default_search_component == "Select"

# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""
Settings for schema projection.

Values are loaded from ``CRUDSCHEMA_*`` environment variables.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from babel import Locale, UnknownLocaleError
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from crudschema.errors import ConfigurationError


class CrudSchemaSettings(BaseSettings):
    """Projection defaults and compatibility switches."""

    model_config = SettingsConfigDict(
        env_prefix="CRUDSCHEMA_",
        extra="ignore",
        case_sensitive=False,
        validate_assignment=True,
    )

    default_search_component: str = Field(
        default="input", description="Component used when a search block names none"
    )
    default_form_component: str = Field(
        default="Input", description="Component used when a form block names none"
    )
    legacy_label_field: bool = Field(
        default=True,
        description=(
            "Write translated alias labels to the literal 'labelField' key "
            "instead of the aliased key"
        ),
    )
    children_key: str = Field(
        default="children", description="Key holding nested schema nodes"
    )
    locale: str = Field(default="en", description="Default translation locale")

    @field_validator("children_key", "default_search_component", "default_form_component")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, v: Any) -> str:
        """Normalize the locale through babel, e.g. ``en-us`` -> ``en_US``."""
        try:
            return str(Locale.parse(str(v), sep="-" if "-" in str(v) else "_"))
        except (ValueError, UnknownLocaleError):
            raise ValueError(f"Unknown locale: {v}")

    @classmethod
    def load(cls, **overrides: Any) -> CrudSchemaSettings:
        """Load settings from the environment, raising ConfigurationError on bad values."""
        try:
            return cls(**overrides)
        except ValidationError as exc:
            raise ConfigurationError.wrap(
                exc, message="Invalid crudschema settings"
            ) from exc


@lru_cache(maxsize=1)
def get_settings() -> CrudSchemaSettings:
    """Process-wide settings, loaded once."""
    return CrudSchemaSettings.load()


def clear_settings_cache() -> None:
    get_settings.cache_clear()

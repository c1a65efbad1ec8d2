# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""
Settings for crudschema's own diagnostics.

Read from ``CRUDSCHEMA_LOGGING_*`` environment variables, e.g.
``CRUDSCHEMA_LOGGING_LEVEL=debug`` to see why a node was skipped or a
dictionary lookup missed during projection.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from crudschema.errors import ConfigurationError
from crudschema.logging.level import LogLevel


class LoggingSettings(BaseSettings):
    """Output options for :class:`~crudschema.logging.SchemaLogger`."""

    model_config = SettingsConfigDict(
        env_prefix="CRUDSCHEMA_LOGGING_",
        extra="ignore",
        case_sensitive=False,
    )

    level: str = Field(default=LogLevel.INFO.value, description="Name of the minimum level")
    json_format: bool = Field(default=False, description="One JSON object per record")
    include_timestamp: bool = Field(default=True)
    include_level: bool = Field(default=True)
    console_enabled: bool = Field(default=True)
    console_stream: Literal["stdout", "stderr"] = Field(
        default="stderr", description="Console stream when the logger is given none"
    )
    file_path: str | None = Field(
        default=None, description="Also append records to this file when set"
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: Any) -> str:
        """Normalize names, aliases and stdlib numbers to a level name."""
        return LogLevel.parse(v).value

    @classmethod
    def load(cls, **overrides: Any) -> LoggingSettings:
        """Load from the environment, raising ConfigurationError on bad values."""
        try:
            return cls(**overrides)
        except ValidationError as exc:
            raise ConfigurationError.wrap(
                exc, message="Invalid crudschema logging settings"
            ) from exc

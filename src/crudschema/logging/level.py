# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""
Log levels accepted by :class:`~crudschema.logging.SchemaLogger`.

Projection diagnostics (skipped nodes, missing dictionaries, deferred
fetches) are emitted at DEBUG; failed option fetches at WARNING.
"""

from __future__ import annotations

import logging
from enum import Enum

_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_stdlib_level(self) -> int:
        return int(getattr(logging, self.value))

    @classmethod
    def from_stdlib_level(cls, level: int) -> LogLevel:
        """The closest level at or below a stdlib level number.

        NOTSET and anything under DEBUG map to DEBUG.
        """
        for member in reversed(list(cls)):
            if level >= member.to_stdlib_level():
                return member
        return cls.DEBUG

    @classmethod
    def from_string(cls, value: str) -> LogLevel:
        """Parse a level name, case-insensitively; ``warn`` and ``fatal`` are accepted.

        Raises:
            ValueError: If the string doesn't name a level
        """
        name = value.strip().upper()
        try:
            return cls(_ALIASES.get(name, name))
        except ValueError:
            raise ValueError(f"Invalid log level: {value}")

    @classmethod
    def parse(cls, value: LogLevel | str | int) -> LogLevel:
        """Accept a LogLevel, a level name or a stdlib level number."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid log level: {value!r}")
        if isinstance(value, int):
            return cls.from_stdlib_level(value)
        if isinstance(value, str):
            return cls.from_string(value)
        raise ValueError(f"Log level must be a string or int, got {type(value).__name__}")

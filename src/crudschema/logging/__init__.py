# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema

"""
Public API for the crudschema logging system.
"""

from __future__ import annotations

from crudschema.logging.config import LoggingSettings
from crudschema.logging.level import LogLevel
from crudschema.logging.logger import (
    SchemaLogger,
    StructuredFormatter,
    get_logger,
)

__all__ = [
    "LogLevel",
    "LoggingSettings",
    "SchemaLogger",
    "StructuredFormatter",
    "get_logger",
]

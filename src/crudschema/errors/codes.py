# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""
Error categories, codes and concrete errors raised by crudschema.
"""

from __future__ import annotations

from typing import Any, Final

from crudschema.errors.base import (
    CrudSchemaError,
    ErrorCategory,
    ErrorCode,
    ErrorSeverity,
)

SCHEMA: Final = ErrorCategory.get_or_create("SCHEMA")
DICT: Final = ErrorCategory.get_or_create("DICT")
ENRICHMENT: Final = ErrorCategory.get_or_create("ENRICHMENT")
CONFIG: Final = ErrorCategory.get_or_create("CONFIG")

SCHEMA_INVALID: Final = ErrorCode.get_or_create("SCHEMA_INVALID", SCHEMA)
DICT_ERROR: Final = ErrorCode.get_or_create("DICT_ERROR", DICT)
DICT_NOT_FOUND: Final = ErrorCode.get_or_create("DICT_NOT_FOUND", DICT, DICT_ERROR)
DICT_LOAD_FAILED: Final = ErrorCode.get_or_create(
    "DICT_LOAD_FAILED", DICT, DICT_ERROR
)
ENRICHMENT_FAILED: Final = ErrorCode.get_or_create("ENRICHMENT_FAILED", ENRICHMENT)
CONFIG_INVALID: Final = ErrorCode.get_or_create("CONFIG_INVALID", CONFIG)


class SchemaDefinitionError(CrudSchemaError):
    """Raised when a crud schema tree is structurally invalid."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = SCHEMA_INVALID,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code=code, severity=severity, context=context, **kwargs)


class DictionaryError(CrudSchemaError):
    """Raised when a dictionary is missing or cannot be loaded."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = DICT_ERROR,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code=code, severity=severity, context=context, **kwargs)

    @classmethod
    def not_found(cls, name: str) -> DictionaryError:
        """Build the error for a dictionary name that is not in the store."""
        return cls(
            f"Dictionary not found: {name}",
            code=DICT_NOT_FOUND,
            context={"dict_name": name},
        )


class EnrichmentError(CrudSchemaError):
    """Failure of an asynchronous option fetch.

    The projection engine never raises this; it is built to carry the
    failure context into the log.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ENRICHMENT_FAILED,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code=code, severity=severity, context=context, **kwargs)


class ConfigurationError(CrudSchemaError):
    """Raised for invalid crudschema settings."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = CONFIG_INVALID,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code=code, severity=severity, context=context, **kwargs)

# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema

"""
Error handling for crudschema.
"""

from __future__ import annotations

from crudschema.errors.base import (
    INTERNAL_ERROR,
    CrudSchemaError,
    ErrorCategory,
    ErrorCode,
    ErrorSeverity,
)
from crudschema.errors.codes import (
    CONFIG_INVALID,
    DICT_ERROR,
    DICT_LOAD_FAILED,
    DICT_NOT_FOUND,
    ENRICHMENT_FAILED,
    SCHEMA_INVALID,
    ConfigurationError,
    DictionaryError,
    EnrichmentError,
    SchemaDefinitionError,
)
from crudschema.errors.registry import registry

__all__ = [
    # Error model
    "ErrorCode",
    "ErrorCategory",
    "ErrorSeverity",
    "CrudSchemaError",
    "registry",
    # Codes
    "INTERNAL_ERROR",
    "SCHEMA_INVALID",
    "DICT_ERROR",
    "DICT_NOT_FOUND",
    "DICT_LOAD_FAILED",
    "ENRICHMENT_FAILED",
    "CONFIG_INVALID",
    # Concrete errors
    "SchemaDefinitionError",
    "DictionaryError",
    "EnrichmentError",
    "ConfigurationError",
]

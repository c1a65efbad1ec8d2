# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""
Base error classes for the crudschema error handling system.

This module provides the foundation for structured error handling with
error codes, contextual information, and error categories.
"""

import traceback
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Final, Type, TypeVar

from crudschema.errors.registry import registry

T = TypeVar("T", bound="CrudSchemaError")


class ErrorSeverity(str, Enum):
    """Severity levels for errors."""

    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ErrorCategory:
    """Base class for error categories with hierarchical support."""

    def __init__(self, name: str, parent: "ErrorCategory | None" = None) -> None:
        """Initialize a new error category.

        Args:
            name: Unique identifier for this category
            parent: Optional parent category for hierarchical structure
        """
        self.name = name
        self.parent = parent

    def __str__(self) -> str:
        return self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorCategory):
            return False
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def is_subcategory_of(self, category: "ErrorCategory") -> bool:
        """Check if this category is a subcategory of the given category."""
        current: "ErrorCategory | None" = self
        while current:
            if current == category:
                return True
            current = current.parent
        return False

    @classmethod
    def get_by_name(cls, name: str) -> "ErrorCategory | None":
        """Get a category by its name, or None if it was never registered."""
        return registry.lookup_category(name)

    @classmethod
    def get_or_create(
        cls, name: str, parent: "ErrorCategory | None" = None
    ) -> "ErrorCategory":
        """Get or create an error category."""
        return registry.get_category(name, parent)


INTERNAL: Final = ErrorCategory.get_or_create("INTERNAL")


class ErrorCode:
    """Error code with hierarchical support and category association."""

    def __init__(
        self,
        code: str,
        category: ErrorCategory | None = None,
        parent: "ErrorCode | None" = None,
    ) -> None:
        """Initialize a new error code.

        Args:
            code: Unique identifier for this error code
            category: The category this error code belongs to
            parent: Optional parent error code for hierarchical structure
        """
        if category is None:
            category = registry.get_category("INTERNAL")

        self.code = code
        self.category = category
        self.parent = parent

    def __str__(self) -> str:
        return self.code

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorCode):
            return False
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    def is_subcode_of(self, parent_code: "ErrorCode") -> bool:
        """Check if this error code is the given code or one of its descendants."""
        current: "ErrorCode | None" = self
        while current:
            if current == parent_code:
                return True
            current = current.parent
        return False

    @classmethod
    def get_by_code(
        cls, code: str, *, raise_if_missing: bool = True
    ) -> "ErrorCode | None":
        """Get an error code by its string representation."""
        error_code = registry.lookup_code(code)
        if error_code is None and raise_if_missing:
            raise ValueError(f"Error code '{code}' not found in registry")
        return error_code

    @classmethod
    def get_or_create(
        cls,
        name: str,
        category: ErrorCategory,
        parent: "ErrorCode | None" = None,
    ) -> "ErrorCode":
        """Get or create an error code."""
        return registry.get_code(name, category.name, parent)


INTERNAL_ERROR: Final = ErrorCode.get_or_create("INTERNAL_ERROR", INTERNAL)


class CrudSchemaError(Exception):
    """
    Base error class for crudschema errors.
    Should only be subclassed for specific errors, not instantiated directly.
    """

    message: str
    code: ErrorCode
    severity: ErrorSeverity
    context: dict[str, Any]
    timestamp: datetime

    def __new__(cls, *args: Any, **kwargs: Any) -> "CrudSchemaError":
        if cls is CrudSchemaError:
            raise TypeError(
                "Do not instantiate CrudSchemaError directly; subclass it for specific errors."
            )
        return super().__new__(cls)

    def __init__(
        self,
        message: str,
        code: ErrorCode = INTERNAL_ERROR,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize a new error.

        Args:
            message: Human-readable error message
            code: ErrorCode object containing the code and category
            severity: Severity level of the error
            context: Additional contextual information
            **kwargs: Extra context keys
        """
        if not isinstance(code, ErrorCode):
            raise TypeError("code must be an ErrorCode instance, not a string")

        full_context = dict(context or {})
        full_context.update(kwargs)

        super().__init__(message)
        self.code = code
        self.message = message
        self.category = code.category
        self.severity = severity
        self.context = full_context
        self.timestamp = datetime.now(UTC)

    def add_context(self, key: str, value: Any) -> "CrudSchemaError":
        """Add a key-value pair to the error context and return self for chaining."""
        self.context[key] = value
        return self

    def with_context(self, context: dict[str, Any]) -> "CrudSchemaError":
        """Return a new error of the same class with additional context."""
        new_error = self.__class__(
            message=self.message,
            code=self.code,
            severity=self.severity,
            context={**self.context, **context},
        )
        if self.__cause__ is not None:
            new_error.__cause__ = self.__cause__
        return new_error

    @classmethod
    def wrap(
        cls: Type[T],
        exception: BaseException,
        message: str | None = None,
        code: ErrorCode | None = None,
        severity: ErrorSeverity | None = None,
        context: dict[str, Any] | None = None,
    ) -> T:
        """Wrap an existing exception.

        The original exception becomes ``__cause__`` and its type, message and
        formatted traceback are recorded in the context.
        """
        merged_context = dict(context or {})
        merged_context.update(
            {
                "original_type": type(exception).__name__,
                "original_message": str(exception),
                "traceback": traceback.format_exception(
                    type(exception), exception, exception.__traceback__
                ),
            }
        )
        kwargs: dict[str, Any] = {"context": merged_context}
        if code is not None:
            kwargs["code"] = code
        if severity is not None:
            kwargs["severity"] = severity
        error = cls(message or f"Error occurred: {exception}", **kwargs)
        error.__cause__ = exception
        return error

    def __str__(self) -> str:
        """Get string representation in format 'code: message'."""
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a dictionary representation of the error."""
        return {
            "code": self.code.code,
            "message": self.message,
            "category": self.category.name,
            "severity": self.severity.name,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

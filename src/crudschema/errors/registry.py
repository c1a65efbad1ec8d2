# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""Unified error registry for crudschema error codes and categories."""

import logging
import threading
from typing import Any


class ErrorRegistry:
    """Singleton registry for all error codes and categories."""

    _instance = None
    _lock = threading.RLock()

    def __new__(cls) -> "ErrorRegistry":
        with cls._lock:
            if cls._instance is None:
                instance = super().__new__(cls)
                instance._categories = {}
                instance._codes = {}
                cls._instance = instance
            return cls._instance

    def register_category(self, name: str, parent: Any = None) -> Any:
        """Register a category in the registry.

        Args:
            name: The category name
            parent: Optional parent category

        Returns:
            The registered ErrorCategory
        """
        with self._lock:
            if name in self._categories:
                return self._categories[name]

            from crudschema.errors.base import ErrorCategory

            category = ErrorCategory(name, parent)
            self._categories[name] = category
            return category

    def register_code(self, code: str, category_name: str, parent: Any = None) -> Any:
        """Register a code under a category, creating the category if needed."""
        with self._lock:
            key = f"{category_name}.{code}"
            if key in self._codes:
                return self._codes[key]

            category = self.get_category(category_name)

            from crudschema.errors.base import ErrorCode

            error_code = ErrorCode(code, category, parent)
            self._codes[key] = error_code
            self._codes.setdefault(code, error_code)
            return error_code

    def get_category(self, name: str, parent: Any = None) -> Any:
        """Get or create a category."""
        with self._lock:
            if name in self._categories:
                return self._categories[name]
            return self.register_category(name, parent)

    def get_code(
        self, code: str, category_name: str = "INTERNAL", parent: Any = None
    ) -> Any:
        """Get or create an error code."""
        with self._lock:
            key = f"{category_name}.{code}"
            if key in self._codes:
                return self._codes[key]
            return self.register_code(code, category_name, parent)

    def lookup_code(self, code: str) -> Any:
        """Look up an error code without creating it if missing.

        Args:
            code: The error code string, either bare or ``CATEGORY.CODE``

        Returns:
            The ErrorCode or None if not found
        """
        if code in self._codes:
            return self._codes[code]

        logging.getLogger(__name__).debug("Error code %r not found in registry", code)
        return None

    def lookup_category(self, name: str) -> Any:
        """Look up a category without creating it."""
        return self._categories.get(name)


# Create a single instance for use throughout the package
registry = ErrorRegistry()

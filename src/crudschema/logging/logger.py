# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""
Logger implementation for crudschema.

This module provides the default logger implementation based on Python's
standard logging module, enhanced with structured logging capabilities.
"""

from __future__ import annotations

import contextlib
import datetime
import enum
import json
import logging
import sys
import uuid
from contextvars import ContextVar
from typing import IO, TYPE_CHECKING, Any

from crudschema.errors.base import CrudSchemaError
from crudschema.logging.config import LoggingSettings
from crudschema.logging.level import LogLevel

if TYPE_CHECKING:
    from collections.abc import Generator

# Context variable for storing log context data
_log_context: ContextVar[dict[str, Any] | None] = ContextVar(
    "crudschema_log_context", default=None
)

CONTEXT_ATTR = "crudschema_context"


class StructuredFormatter(logging.Formatter):
    """Formatter that supports structured logging with context data."""

    def __init__(
        self,
        json_format: bool = False,
        include_timestamp: bool = True,
        include_level: bool = True,
    ) -> None:
        """Initialize a structured formatter.

        Args:
            json_format: Whether to format logs as JSON
            include_timestamp: Whether to include timestamps in logs
            include_level: Whether to include log level in logs
        """
        self.json_format = json_format
        self.include_timestamp = include_timestamp
        self.include_level = include_level

        fmt = "%(message)s"
        if include_timestamp:
            fmt = "%(asctime)s " + fmt
        if include_level and not json_format:
            fmt = fmt + " [%(levelname)s]"

        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with its structured context."""
        extra: dict[str, Any] = dict(getattr(record, CONTEXT_ATTR, None) or {})

        if self.json_format:
            return self._format_json(record, extra)
        return self._format_text(record, super().format(record), extra)

    def _format_json(self, record: logging.LogRecord, extra: dict[str, Any]) -> str:
        log_data: dict[str, Any] = {
            "message": record.getMessage(),
            "name": record.name,
            **extra,
        }
        if self.include_level:
            log_data["level"] = record.levelname
        if self.include_timestamp:
            log_data["timestamp"] = self.formatTime(record, self.datefmt)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
            log_data["error"] = str(record.exc_info[1])

        return json.dumps(log_data, cls=CrudSchemaJsonEncoder, ensure_ascii=False)

    def _format_text(
        self, record: logging.LogRecord, message: str, extra: dict[str, Any]
    ) -> str:
        if not extra:
            return message

        ctx_str = " ".join(f"{k}={self._format_value(v)}" for k, v in extra.items())
        return f"{message} {ctx_str}"

    def _format_value(self, value: Any) -> str:
        """Format a value for text output."""
        if isinstance(value, str):
            # Quote strings that contain spaces
            if " " in value:
                return f'"{value}"'
            return value
        if isinstance(value, datetime.datetime | datetime.date):
            return value.isoformat()
        if isinstance(value, uuid.UUID):
            return str(value)
        if isinstance(value, enum.Enum):
            return value.name
        if isinstance(value, CrudSchemaError):
            return json.dumps(value.to_dict(), cls=CrudSchemaJsonEncoder)
        if isinstance(value, BaseException):
            return f"{type(value).__name__}({value})"
        try:
            return json.dumps(value, cls=CrudSchemaJsonEncoder)
        except (TypeError, ValueError):
            return str(value)


class CrudSchemaJsonEncoder(json.JSONEncoder):
    """JSON encoder that falls back to strings for unserializable objects."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, (datetime.datetime, datetime.date)):
            return obj.isoformat()
        if isinstance(obj, uuid.UUID):
            return str(obj)
        if isinstance(obj, enum.Enum):
            return obj.value
        if isinstance(obj, CrudSchemaError):
            return obj.to_dict()
        if hasattr(obj, "model_dump"):
            return obj.model_dump()
        if callable(obj):
            return getattr(obj, "__qualname__", repr(obj))
        return str(obj)


class SchemaLogger:
    """Default logger implementation for crudschema.

    Wraps a standard library logger and attaches bound and scoped context
    to every record.
    """

    def __init__(
        self,
        name: str,
        level: str | int | LogLevel | None = None,
        settings: LoggingSettings | None = None,
        stream: IO[str] | None = None,
    ) -> None:
        """
        Initialize a new logger.

        Args:
            name: Logger name
            level: Level name, stdlib number or LogLevel; defaults to the settings level
            settings: Optional logger settings (loads from environment if None)
            stream: Console stream, overrides ``settings.console_stream``
        """
        self.name = name
        self._settings = settings or LoggingSettings.load()
        self._stream = stream
        self._logger = logging.getLogger(name)
        self._bound_context: dict[str, Any] = {}

        self._configure(LogLevel.parse(self._settings.level if level is None else level))

    @property
    def level(self) -> LogLevel:
        return LogLevel.from_stdlib_level(self._logger.level)

    def _configure(self, level: LogLevel) -> None:
        self._logger.setLevel(level.to_stdlib_level())

        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)

        formatter = StructuredFormatter(
            json_format=self._settings.json_format,
            include_timestamp=self._settings.include_timestamp,
            include_level=self._settings.include_level,
        )

        if self._settings.console_enabled:
            stream = self._stream or getattr(sys, self._settings.console_stream)
            console = logging.StreamHandler(stream)
            console.setFormatter(formatter)
            console.setLevel(logging.NOTSET)
            self._logger.addHandler(console)

        if self._settings.file_path:
            file_handler = logging.FileHandler(self._settings.file_path)
            file_handler.setFormatter(formatter)
            self._logger.addHandler(file_handler)

        # Handlers are attached here; keep records out of the root logger
        self._logger.propagate = False

    def _log(self, level: int, msg: str, **kwargs: Any) -> None:
        exc_info = kwargs.pop("exc_info", None)
        kwargs.pop("level", None)

        combined_context = dict(self._bound_context)
        scoped = _log_context.get()
        if scoped:
            combined_context.update(scoped)
        combined_context.update(kwargs)

        self._logger.log(
            level, msg, exc_info=exc_info, extra={CONTEXT_ATTR: combined_context}
        )

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a debug message with context."""
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log an info message with context."""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a warning message with context."""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log an error message with context."""
        self._log(logging.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        """Log a critical message with context."""
        self._log(logging.CRITICAL, message, **kwargs)

    def structured_log(self, level: LogLevel | str, message: str, **kwargs: Any) -> None:
        """Log a structured message at the given level."""
        if isinstance(level, str):
            level = LogLevel.from_string(level)
        self._log(level.to_stdlib_level(), message, **kwargs)

    def is_enabled_for(self, level: LogLevel) -> bool:
        return self._logger.isEnabledFor(level.to_stdlib_level())

    def set_level(self, level: LogLevel) -> None:
        """Set the logger's level."""
        self._logger.setLevel(level.to_stdlib_level())

    @contextlib.contextmanager
    def context(self, **kwargs: Any) -> Generator[None]:
        """Add context to every record logged within the block.

        The context is held in a context variable, so it also follows
        asyncio tasks created inside the block.
        """
        token = _log_context.set({**(_log_context.get() or {}), **kwargs})
        try:
            yield
        finally:
            _log_context.reset(token)

    def bind(self, **kwargs: Any) -> SchemaLogger:
        """Create a new logger with bound context values.

        Args:
            **kwargs: Context values to bind

        Returns:
            New logger instance sharing this logger's configuration
        """
        logger = SchemaLogger(
            self.name,
            level=self.level,
            settings=self._settings,
            stream=self._stream,
        )
        logger._bound_context = {**self._bound_context, **kwargs}
        return logger


def get_logger(
    name: str,
    level: str | int | LogLevel | None = None,
    settings: LoggingSettings | None = None,
    stream: IO[str] | None = None,
) -> SchemaLogger:
    """Get a logger for the specified name.

    Args:
        name: Logger name (typically __name__)
        level: Optional log level override
        settings: Optional settings, loaded from the environment if omitted
        stream: Optional console stream

    Returns:
        Configured logger instance
    """
    return SchemaLogger(name, level=level, settings=settings, stream=stream)

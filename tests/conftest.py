"""Top-level pytest configuration for crudschema."""

from __future__ import annotations

import io
import os
from collections.abc import Callable, Iterator

import pytest

from crudschema.config import CrudSchemaSettings, clear_settings_cache
from crudschema.dicts import DictStore
from crudschema.i18n import set_i18n
from crudschema.logging import LoggingSettings, SchemaLogger


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: end-to-end projection scenarios"
    )


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from CRUDSCHEMA_* variables and process-wide defaults."""
    for key in list(os.environ):
        if key.startswith("CRUDSCHEMA_"):
            monkeypatch.delenv(key)
    clear_settings_cache()
    set_i18n(None)
    yield
    clear_settings_cache()
    set_i18n(None)


@pytest.fixture
def upper() -> Callable[[str], str]:
    """Translator that upper-cases its key."""
    return lambda key: key.upper()


@pytest.fixture
def settings() -> CrudSchemaSettings:
    return CrudSchemaSettings()


@pytest.fixture
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def logger(log_stream: io.StringIO) -> SchemaLogger:
    """Debug logger writing plain text to an in-memory stream."""
    return SchemaLogger(
        "crudschema.tests",
        level="DEBUG",
        settings=LoggingSettings(include_timestamp=False),
        stream=log_stream,
    )


@pytest.fixture
def dict_store(logger: SchemaLogger) -> DictStore:
    return DictStore(
        {
            "status": [
                {"value": 1, "label": "enabled"},
                {"value": 0, "label": "disabled"},
            ],
            "gender": [
                {"value": "m", "label": "male", "title": "sir"},
                {"value": "f", "label": "female", "title": "madam"},
            ],
        },
        logger=logger,
    )

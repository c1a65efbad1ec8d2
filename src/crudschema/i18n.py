# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""
Translation lookup used to localize option labels.

The projection engine only needs a ``Translator``: a callable mapping a
message key to display text. :class:`I18n` is the default implementation,
backed by an in-memory catalog or a babel gettext catalog.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from babel.support import NullTranslations

from crudschema.config import get_settings

Translator = Callable[[str], str]


class I18n:
    """Message catalog keyed by locale.

    Keys may be dotted paths into nested message dicts
    (``"status.enabled"``). A key that cannot be resolved in the current
    locale or the fallback locale translates to itself.
    """

    def __init__(
        self,
        messages: Mapping[str, Mapping[str, Any]] | None = None,
        locale: str = "en",
        fallback_locale: str | None = None,
    ) -> None:
        self._messages: dict[str, Mapping[str, Any]] = dict(messages or {})
        self.locale = locale
        self.fallback_locale = fallback_locale
        self._translations: NullTranslations | None = None

    @classmethod
    def from_translations(
        cls, translations: NullTranslations, locale: str = "en"
    ) -> I18n:
        """Wrap a babel/gettext catalog, e.g. ``babel.support.Translations.load(...)``."""
        i18n = cls(locale=locale)
        i18n._translations = translations
        return i18n

    def add_messages(self, locale: str, messages: Mapping[str, Any]) -> None:
        """Merge messages into a locale's catalog (top-level keys replace)."""
        current = dict(self._messages.get(locale, {}))
        current.update(messages)
        self._messages[locale] = current

    def set_locale(self, locale: str) -> None:
        self.locale = locale

    def _lookup(self, locale: str | None, key: str) -> str | None:
        if locale is None or locale not in self._messages:
            return None
        node: Any = self._messages[locale]
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return None
            node = node[part]
        return node if isinstance(node, str) else None

    def t(self, key: str) -> str:
        """Translate ``key``; unknown keys come back unchanged."""
        if not isinstance(key, str) or not key:
            return key
        if self._translations is not None:
            return self._translations.gettext(key)
        message = self._lookup(self.locale, key)
        if message is None:
            message = self._lookup(self.fallback_locale, key)
        return key if message is None else message

    __call__ = t


_default_i18n: I18n | None = None


def get_i18n() -> I18n:
    """The process default catalog, created for the configured locale."""
    global _default_i18n
    if _default_i18n is None:
        _default_i18n = I18n(locale=get_settings().locale)
    return _default_i18n


def set_i18n(i18n: I18n | None) -> None:
    """Replace the process default catalog used by :func:`t`.

    ``None`` drops it; the next lookup builds a new one from settings.
    """
    global _default_i18n
    _default_i18n = i18n


def t(key: str) -> str:
    """Translate with the process default catalog."""
    return get_i18n().t(key)

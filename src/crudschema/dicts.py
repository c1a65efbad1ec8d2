# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""In-memory dictionary store feeding ``dictName`` search fields."""

from __future__ import annotations

import asyncio
from collections import OrderedDict
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from crudschema.errors import DICT_LOAD_FAILED, DictionaryError
from crudschema.logging import SchemaLogger, get_logger
from crudschema.utils.async_utils import to_async

Option = dict[str, Any]
DictLoader = Callable[[], Mapping[str, Sequence[Option]] | Awaitable[Mapping[str, Sequence[Option]]]]


class DictStore:
    """Named option lists, e.g. ``{"status": [{"value": 1, "label": "on"}]}``.

    Entries are kept in insertion order; with ``max_size`` set the store
    evicts the least recently used name.
    """

    def __init__(
        self,
        dict_obj: Mapping[str, Sequence[Option]] | None = None,
        max_size: int | None = None,
        logger: SchemaLogger | None = None,
    ) -> None:
        self.max_size = max_size
        self._store: OrderedDict[str, list[Option]] = OrderedDict()
        self._is_set = False
        self._lock = asyncio.Lock()
        self._logger = logger or get_logger(__name__)
        if dict_obj is not None:
            self.set_dict_obj(dict_obj)

    @property
    def is_set(self) -> bool:
        """Whether a full dictionary payload has been loaded."""
        return self._is_set

    @property
    def dict_obj(self) -> dict[str, list[Option]]:
        """Shallow copy of every dictionary."""
        return {name: list(options) for name, options in self._store.items()}

    def get_dict(self, name: str) -> list[Option] | None:
        """Options for ``name`` or None when the store has no such dictionary."""
        if name not in self._store:
            return None
        self._store.move_to_end(name)
        return self._store[name]

    def require(self, name: str) -> list[Option]:
        """Like :meth:`get_dict` but raises DictionaryError for missing names."""
        options = self.get_dict(name)
        if options is None:
            raise DictionaryError.not_found(name)
        return options

    def set_dict(self, name: str, options: Sequence[Option]) -> None:
        if name in self._store:
            del self._store[name]
        self._store[name] = [dict(option) for option in options]
        if self.max_size is not None and len(self._store) > self.max_size:
            evicted, _ = self._store.popitem(last=False)
            self._logger.debug("Evicted dictionary", dict_name=evicted)

    def set_dict_obj(self, dict_obj: Mapping[str, Sequence[Option]]) -> None:
        """Replace the whole store with ``dict_obj``."""
        self._store.clear()
        for name, options in dict_obj.items():
            self.set_dict(name, options)
        self._is_set = True

    def clear(self) -> None:
        self._store.clear()
        self._is_set = False

    async def load(self, loader: DictLoader, *, force: bool = False) -> None:
        """Fill the store from ``loader`` once.

        Concurrent callers share one load; later calls are no-ops unless
        ``force`` is given.

        Raises:
            DictionaryError: If the loader fails or returns a non-mapping.
        """
        async with self._lock:
            if self._is_set and not force:
                return
            try:
                result = await to_async(loader)
            except Exception as exc:
                raise DictionaryError.wrap(
                    exc, message="Failed to load dictionaries", code=DICT_LOAD_FAILED
                ) from exc
            if not isinstance(result, Mapping):
                raise DictionaryError(
                    "Dictionary loader must return a mapping",
                    code=DICT_LOAD_FAILED,
                    result_type=type(result).__name__,
                )
            self.set_dict_obj(result)
            self._logger.info("Loaded dictionaries", count=len(self._store))


_default_store: DictStore | None = None


def get_dict_store() -> DictStore:
    """Process default store, created on first use."""
    global _default_store
    if _default_store is None:
        _default_store = DictStore()
    return _default_store


def set_dict_store(store: DictStore | None) -> None:
    global _default_store
    _default_store = store

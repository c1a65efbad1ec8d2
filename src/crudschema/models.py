# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""
Input models for crud schemas and the projected output aggregate.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass, field as dataclass_field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from crudschema.errors import SchemaDefinitionError
from crudschema.logging import LogLevel, SchemaLogger, get_logger
from crudschema.utils.tree import CHILDREN_KEY

DataSource = Callable[[], Any]
SchemaItem = dict[str, Any]
PatchListener = Callable[[str, SchemaItem], None]

VIEW_KEYS = ("search", "table", "form", "detail")

_logger = get_logger(__name__)


class ViewParams(BaseModel):
    """Annotations shared by every view block.

    Unknown keys (rules, colProps, width, ...) are kept and passed through
    to the projected item.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    # Strict: 0 or "false" must not turn into a visibility flag
    show: bool | None = Field(default=None, strict=True)


class SearchParams(ViewParams):
    component: str | None = None
    componentProps: dict[str, Any] | None = None
    # Name of a dictionary in the dict store
    dictName: str | None = None
    api: DataSource | None = None


class TableParams(ViewParams):
    component: str | None = None
    componentProps: dict[str, Any] | None = None


class FormParams(ViewParams):
    component: str | None = None
    componentProps: dict[str, Any] | None = None


class DetailParams(ViewParams):
    pass


class SchemaNode(BaseModel):
    """One entity field described for all four views."""

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    field: str | None = None
    label: str | None = None
    children: list[SchemaNode] | None = None
    search: SearchParams | None = None
    table: TableParams | None = None
    form: FormParams | None = None
    detail: DetailParams | None = None


_tree_adapter = TypeAdapter(list[SchemaNode])


def normalize_schema(
    crud_schema: Iterable[SchemaNode | Mapping[str, Any]],
    *,
    children_key: str = CHILDREN_KEY,
    logger: SchemaLogger | None = None,
) -> list[SchemaItem]:
    """Copy a crud schema tree into plain dicts ready for projection.

    Mapping nodes are copied structurally: nested dicts and lists are new,
    every other value (callables, dataclasses, models) is the caller's
    object. ``SchemaNode`` instances are dumped with only the keys that were
    set, so an absent view block stays absent. The caller's tree is not
    modified.

    A node that is not a mapping is skipped, and so is a ``children`` value
    that is not a list. Nodes are also checked against :class:`SchemaNode`;
    a mismatch is logged at debug level and the node is projected as given.

    Raises:
        SchemaDefinitionError: If ``crud_schema`` is not a sequence of nodes.
    """
    if isinstance(crud_schema, (str, bytes, Mapping)) or not isinstance(
        crud_schema, Iterable
    ):
        raise SchemaDefinitionError(
            "A crud schema must be a sequence of nodes",
            received=type(crud_schema).__name__,
        )
    logger = logger or _logger
    nodes = _copy_tree(crud_schema, children_key, logger)
    if logger.is_enabled_for(LogLevel.DEBUG):
        _check_nodes(nodes, logger)
    return nodes


def copy_value(value: Any) -> Any:
    """Copy nested dicts and lists, leaving other values shared."""
    if isinstance(value, Mapping):
        return {key: copy_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def _copy_tree(
    tree: Iterable[Any], children_key: str, logger: SchemaLogger
) -> list[SchemaItem]:
    nodes: list[SchemaItem] = []
    for node in tree:
        if isinstance(node, SchemaNode):
            node = node.model_dump(exclude_unset=True)
        if not isinstance(node, Mapping):
            logger.debug(
                "Skipping crud schema node that is not a mapping",
                node_type=type(node).__name__,
            )
            continue

        item: SchemaItem = {}
        for key, value in node.items():
            if key == children_key:
                if isinstance(value, (list, tuple)):
                    item[key] = _copy_tree(value, children_key, logger)
                elif value is None:
                    item[key] = None
                else:
                    logger.debug(
                        "Ignoring children that are not a list",
                        field=node.get("field"),
                        children_type=type(value).__name__,
                    )
            elif key in VIEW_KEYS and isinstance(value, ViewParams):
                item[key] = value.model_dump(exclude_unset=True)
            else:
                item[key] = copy_value(value)
        nodes.append(item)
    return nodes


def _check_nodes(nodes: list[SchemaItem], logger: SchemaLogger) -> None:
    try:
        _tree_adapter.validate_python(nodes)
    except ValidationError as exc:
        for error in exc.errors(include_url=False, include_input=False):
            logger.debug(
                "Crud schema node does not match SchemaNode",
                loc=".".join(str(part) for part in error["loc"]),
                error=error["msg"],
            )


@dataclass
class AllSchemas:
    """The four projections of one crud schema.

    ``search_schema`` stays live after it is returned: option fetches patch
    ``componentProps["options"]`` of its items in place once they resolve.
    """

    search_schema: list[SchemaItem] = dataclass_field(default_factory=list)
    table_columns: list[SchemaItem] = dataclass_field(default_factory=list)
    form_schema: list[SchemaItem] = dataclass_field(default_factory=list)
    detail_schema: list[SchemaItem] = dataclass_field(default_factory=list)
    pending: list[asyncio.Task[None]] = dataclass_field(
        default_factory=list, repr=False, compare=False
    )
    deferred: list[Callable[[], Awaitable[None]]] = dataclass_field(
        default_factory=list, repr=False, compare=False
    )
    _listeners: list[PatchListener] = dataclass_field(
        default_factory=list, repr=False, compare=False
    )

    def to_dict(self) -> dict[str, list[SchemaItem]]:
        return {
            "searchSchema": self.search_schema,
            "tableColumns": self.table_columns,
            "formSchema": self.form_schema,
            "detailSchema": self.detail_schema,
        }

    def find_search_item(self, field: str) -> SchemaItem | None:
        """First search item with this ``field``."""
        for item in self.search_schema:
            if item.get("field") == field:
                return item
        return None

    def subscribe(self, listener: PatchListener) -> Callable[[], None]:
        """Call ``listener(field, item)`` after each asynchronous patch.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, field: str, item: SchemaItem) -> None:
        for listener in list(self._listeners):
            listener(field, item)

    async def settle(self) -> None:
        """Wait until every option fetch has finished.

        Fetches that could not be scheduled because no event loop was running
        at projection time are run here.
        """
        while self.deferred:
            factory = self.deferred.pop(0)
            self.pending.append(asyncio.ensure_future(factory()))
        if self.pending:
            await asyncio.gather(*self.pending, return_exceptions=True)

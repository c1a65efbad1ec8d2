# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""
Projection of a crud schema into search, table, form and detail schemas.

A crud schema is a tree of field nodes. Each node may carry a ``search``,
``table``, ``form`` and ``detail`` block describing how the field appears
in that view. :func:`use_crud_schemas` runs the four projectors and returns
an :class:`~crudschema.models.AllSchemas`.

Visibility defaults differ per view: a search item needs ``show: True``,
while table, form and detail items are shown unless ``show`` is ``False``.

Search items whose block names an ``api`` get their options from an
asynchronous fetch. The fetch runs after the projection has returned and
patches ``componentProps["options"]`` of the already returned item.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any

from crudschema.config import CrudSchemaSettings, get_settings
from crudschema.dicts import DictStore, get_dict_store
from crudschema.errors import EnrichmentError
from crudschema.i18n import Translator, t
from crudschema.logging import SchemaLogger, get_logger
from crudschema.models import (
    AllSchemas,
    DataSource,
    SchemaItem,
    SchemaNode,
    copy_value,
    normalize_schema,
)
from crudschema.options import filter_options
from crudschema.utils.async_utils import to_async
from crudschema.utils.strings import find_index
from crudschema.utils.tree import each_tree, filter_tree, tree_map

_logger = get_logger(__name__)


def use_crud_schemas(
    crud_schema: Iterable[SchemaNode | Mapping[str, Any]],
    *,
    dict_store: DictStore | None = None,
    translate: Translator | None = None,
    settings: CrudSchemaSettings | None = None,
    logger: SchemaLogger | None = None,
) -> AllSchemas:
    """Project a crud schema into all four view schemas.

    Args:
        crud_schema: Tree of schema nodes (models or plain mappings)
        dict_store: Source for ``dictName`` options, defaults to the process store
        translate: Label translator, defaults to :func:`crudschema.i18n.t`
        settings: Projection settings, defaults to the environment settings
        logger: Logger for enrichment diagnostics

    Returns:
        A fresh AllSchemas; its search schema may still be patched by
        pending option fetches

    Raises:
        SchemaDefinitionError: If ``crud_schema`` is not a tree of nodes
    """
    settings = settings or get_settings()
    logger = logger or _logger
    nodes = normalize_schema(
        crud_schema, children_key=settings.children_key, logger=logger
    )

    all_schemas = AllSchemas()
    filter_search_schema(
        nodes,
        all_schemas,
        dict_store=dict_store,
        translate=translate,
        settings=settings,
        logger=logger,
    )
    all_schemas.table_columns = filter_table_schema(nodes, settings=settings)
    all_schemas.form_schema = filter_form_schema(nodes, settings=settings)
    all_schemas.detail_schema = filter_descriptions_schema(nodes, settings=settings)

    logger.debug(
        "Projected crud schema",
        search=len(all_schemas.search_schema),
        table=len(all_schemas.table_columns),
        form=len(all_schemas.form_schema),
        detail=len(all_schemas.detail_schema),
        pending=len(all_schemas.pending) + len(all_schemas.deferred),
    )
    return all_schemas


def filter_search_schema(
    crud_schema: list[SchemaItem],
    all_schemas: AllSchemas,
    *,
    dict_store: DictStore | None = None,
    translate: Translator | None = None,
    settings: CrudSchemaSettings | None = None,
    logger: SchemaLogger | None = None,
) -> list[SchemaItem]:
    """Build the search schema and schedule option fetches.

    The list is stored on ``all_schemas.search_schema`` before any fetch is
    scheduled, since the fetches patch it through that attribute.
    """
    settings = settings or get_settings()
    dict_store = dict_store or get_dict_store()
    translate = translate or t
    logger = logger or _logger

    search_schema: list[SchemaItem] = []
    requests: list[Callable[[], Awaitable[None]]] = []

    def visit(node: Mapping[str, Any]) -> None:
        search = _view_block(node, "search")
        if not search.get("show"):
            return

        item: SchemaItem = {
            "component": search.get("component") or settings.default_search_component,
            "componentProps": {},
            **search,
            "field": node.get("field"),
            "label": node.get("label"),
        }
        props = item.get("componentProps")
        item["componentProps"] = copy_value(props) if isinstance(props, Mapping) else {}
        if not item.get("component"):
            item["component"] = settings.default_search_component
        label_field = _alias_label_field(item["componentProps"])

        dict_name = item.get("dictName")
        if dict_name:
            options = dict_store.get_dict(dict_name) if isinstance(dict_name, str) else None
            if options is None:
                logger.debug(
                    "Dictionary not found for search field",
                    field=item["field"],
                    dict_name=dict_name,
                )
            else:
                item["componentProps"]["options"] = filter_options(
                    options,
                    label_field,
                    translate=translate,
                    legacy_label_field=settings.legacy_label_field,
                )
        elif item.get("api"):
            requests.append(
                _options_request(
                    all_schemas,
                    item["field"],
                    item["api"],
                    label_field,
                    translate=translate,
                    legacy_label_field=settings.legacy_label_field,
                    logger=logger,
                )
            )

        item.pop("show", None)
        item.pop("dictName", None)
        search_schema.append(item)

    each_tree(crud_schema, visit, settings.children_key)

    all_schemas.search_schema = search_schema
    for request in requests:
        _schedule(all_schemas, request, logger)
    return search_schema


def filter_table_schema(
    crud_schema: list[SchemaItem],
    *,
    settings: CrudSchemaSettings | None = None,
) -> list[SchemaItem]:
    """Build the table columns, keeping the tree shape.

    Node keys override table block keys here, unlike the other views.
    """
    settings = settings or get_settings()
    children_key = settings.children_key

    def conversion(node: Mapping[str, Any]) -> SchemaItem | None:
        table = _view_block(node, "table")
        if table.get("show") is False:
            return None
        return {**table, **node}

    columns = tree_map(crud_schema, conversion, children_key)
    return filter_tree(columns, lambda column: bool(column.get("field")), children_key)


def filter_form_schema(
    crud_schema: list[SchemaItem],
    *,
    settings: CrudSchemaSettings | None = None,
) -> list[SchemaItem]:
    settings = settings or get_settings()
    form_schema: list[SchemaItem] = []

    def visit(node: Mapping[str, Any]) -> None:
        form = _view_block(node, "form")
        if form.get("show") is False:
            return
        item: SchemaItem = {
            "component": form.get("component") or settings.default_form_component,
            **form,
            "field": node.get("field"),
            "label": node.get("label"),
        }
        if not item.get("component"):
            item["component"] = settings.default_form_component
        if "componentProps" in item:
            item["componentProps"] = copy_value(item["componentProps"] or {})
        item.pop("show", None)
        form_schema.append(item)

    each_tree(crud_schema, visit, settings.children_key)
    return form_schema


def filter_descriptions_schema(
    crud_schema: list[SchemaItem],
    *,
    settings: CrudSchemaSettings | None = None,
) -> list[SchemaItem]:
    settings = settings or get_settings()
    detail_schema: list[SchemaItem] = []

    def visit(node: Mapping[str, Any]) -> None:
        detail = _view_block(node, "detail")
        if detail.get("show") is False:
            return
        item: SchemaItem = {
            **detail,
            "field": node.get("field"),
            "label": node.get("label"),
        }
        item.pop("show", None)
        detail_schema.append(item)

    each_tree(crud_schema, visit, settings.children_key)
    return detail_schema


def _options_request(
    all_schemas: AllSchemas,
    field: str | None,
    api: DataSource,
    label_field: str | None,
    *,
    translate: Translator,
    legacy_label_field: bool,
    logger: SchemaLogger,
) -> Callable[[], Awaitable[None]]:
    async def request() -> None:
        try:
            response = await to_async(api)
            data = _response_data(response)
            if data is None:
                logger.debug("Option source returned no data", field=field)
                return
            options = filter_options(
                data,
                label_field,
                translate=translate,
                legacy_label_field=legacy_label_field,
            )
        except Exception as exc:
            error = EnrichmentError.wrap(
                exc, message="Failed to fetch search options", context={"field": field}
            )
            logger.warning(str(error), field=field, error_type=type(exc).__name__)
            return

        # First item with the field wins when fields are duplicated
        index = find_index(all_schemas.search_schema, lambda v: v.get("field") == field)
        if index == -1:
            return
        item = all_schemas.search_schema[index]
        item.setdefault("componentProps", {})["options"] = options
        all_schemas.notify(field, item)

    return request


def _schedule(
    all_schemas: AllSchemas,
    request: Callable[[], Awaitable[None]],
    logger: SchemaLogger,
) -> None:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        logger.debug("No running event loop; option fetch deferred until settle()")
        all_schemas.deferred.append(request)
        return
    all_schemas.pending.append(loop.create_task(request()))


def _response_data(response: Any) -> Any:
    """The ``data`` payload of a fetch result, or None."""
    if not response:
        return None
    if isinstance(response, Mapping):
        return response.get("data")
    return getattr(response, "data", None)


def _alias_label_field(component_props: Mapping[str, Any]) -> str | None:
    alias = component_props.get("optionsAlias")
    if isinstance(alias, Mapping):
        return alias.get("labelField")
    return None


def _view_block(node: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """A node's view block; anything but a mapping counts as absent."""
    block = node.get(key)
    return block if isinstance(block, Mapping) else {}

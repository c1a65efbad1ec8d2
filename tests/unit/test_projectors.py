"""Tests for the four view projectors."""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import Any

from crudschema.config import CrudSchemaSettings
from crudschema.dicts import DictStore
from crudschema.logging import SchemaLogger
from crudschema.models import AllSchemas, normalize_schema
from crudschema.schemas import (
    filter_descriptions_schema,
    filter_form_schema,
    filter_search_schema,
    filter_table_schema,
)


def _nested() -> list[dict[str, Any]]:
    return normalize_schema(
        [
            {
                "field": "base",
                "label": "Base",
                "search": {"show": True},
                "children": [
                    {"field": "name", "label": "Name", "search": {"show": True}},
                    {"field": "age", "label": "Age", "search": {"show": False}},
                ],
            },
            {"field": "email", "label": "Email", "search": {"show": True}},
        ]
    )


class TestSearchProjection:
    def _project(
        self,
        tree: list[dict[str, Any]],
        dict_store: DictStore,
        translate: Callable[[str], str],
        logger: SchemaLogger,
        settings: CrudSchemaSettings | None = None,
    ) -> list[dict[str, Any]]:
        return filter_search_schema(
            tree,
            AllSchemas(),
            dict_store=dict_store,
            translate=translate,
            settings=settings or CrudSchemaSettings(),
            logger=logger,
        )

    def test_only_explicit_show_is_included(self, dict_store, upper, logger) -> None:
        """Absent and False ``show`` both hide a search item."""
        tree = normalize_schema(
            [
                {"field": "a", "search": {"show": True}},
                {"field": "b", "search": {}},
                {"field": "c"},
                {"field": "d", "search": {"show": False}},
            ]
        )
        result = self._project(tree, dict_store, upper, logger)
        assert [item["field"] for item in result] == ["a"]

    def test_flat_pre_order(self, dict_store, upper, logger) -> None:
        result = self._project(_nested(), dict_store, upper, logger)
        assert [item["field"] for item in result] == ["base", "name", "email"]
        assert all("children" not in item for item in result)

    def test_item_shape(self, dict_store, upper, logger) -> None:
        tree = normalize_schema(
            [
                {
                    "field": "name",
                    "label": "Name",
                    "search": {"show": True, "field": "stray", "label": "stray", "rules": [1]},
                }
            ]
        )
        [item] = self._project(tree, dict_store, upper, logger)
        assert item == {
            "component": "input",
            "componentProps": {},
            "rules": [1],
            "field": "name",
            "label": "Name",
        }

    def test_component_is_kept(self, dict_store, upper, logger) -> None:
        tree = normalize_schema([{"field": "a", "search": {"show": True, "component": "Select"}}])
        [item] = self._project(tree, dict_store, upper, logger)
        assert item["component"] == "Select"

    def test_default_component_from_settings(self, dict_store, upper, logger) -> None:
        tree = normalize_schema([{"field": "a", "search": {"show": True}}])
        settings = CrudSchemaSettings(default_search_component="ElInput")
        [item] = self._project(tree, dict_store, upper, logger, settings)
        assert item["component"] == "ElInput"

    def test_dict_name_fills_options(self, dict_store, upper, logger) -> None:
        tree = normalize_schema(
            [{"field": "status", "search": {"show": True, "dictName": "status", "component": "Select"}}]
        )
        [item] = self._project(tree, dict_store, upper, logger)
        assert item["componentProps"]["options"] == [
            {"value": 1, "label": "ENABLED"},
            {"value": 0, "label": "DISABLED"},
        ]
        assert "dictName" not in item
        assert "show" not in item
        # The store keeps untranslated labels
        assert dict_store.get_dict("status")[0]["label"] == "enabled"

    def test_dict_name_with_label_alias(self, dict_store, upper, logger) -> None:
        tree = normalize_schema(
            [
                {
                    "field": "gender",
                    "search": {
                        "show": True,
                        "dictName": "gender",
                        "componentProps": {"optionsAlias": {"labelField": "title"}},
                    },
                }
            ]
        )
        [item] = self._project(tree, dict_store, upper, logger)
        options = item["componentProps"]["options"]
        assert [o["labelField"] for o in options] == ["SIR", "MADAM"]
        assert item["componentProps"]["optionsAlias"] == {"labelField": "title"}

    def test_missing_dictionary_keeps_defaults(
        self, dict_store, upper, logger, log_stream: io.StringIO
    ) -> None:
        tree = normalize_schema(
            [{"field": "x", "search": {"show": True, "dictName": "nope", "componentProps": {"a": 1}}}]
        )
        [item] = self._project(tree, dict_store, upper, logger)
        assert item["componentProps"] == {"a": 1}
        assert "Dictionary not found" in log_stream.getvalue()

    def test_api_item_has_no_options_yet(self, dict_store, upper, logger) -> None:
        async def api() -> dict:
            return {"data": [{"value": 1, "label": "a"}]}

        all_schemas = AllSchemas()
        tree = normalize_schema([{"field": "dept", "search": {"show": True, "api": api}}])
        result = filter_search_schema(
            tree, all_schemas, dict_store=dict_store, translate=upper, logger=logger
        )
        assert all_schemas.search_schema is result
        assert "options" not in result[0]["componentProps"]
        assert result[0]["api"] is api
        # No running loop here, so the fetch waits for settle()
        assert len(all_schemas.deferred) == 1

    def test_input_component_props_not_shared(self, dict_store, upper, logger) -> None:
        tree = normalize_schema(
            [{"field": "status", "search": {"show": True, "dictName": "status", "componentProps": {}}}]
        )
        self._project(tree, dict_store, upper, logger)
        assert tree[0]["search"]["componentProps"] == {}


class TestTableProjection:
    def test_default_visible_and_explicit_hide(self) -> None:
        tree = normalize_schema(
            [
                {"field": "a"},
                {"field": "b", "table": {"show": True}},
                {"field": "c", "table": {"show": False}},
            ]
        )
        assert [c["field"] for c in filter_table_schema(tree)] == ["a", "b"]

    def test_node_keys_override_table_block(self) -> None:
        tree = normalize_schema(
            [{"field": "a", "label": "A", "table": {"label": "Table A", "width": 80}}]
        )
        [column] = filter_table_schema(tree)
        assert column["label"] == "A"
        assert column["width"] == 80
        assert column["table"] == {"label": "Table A", "width": 80}

    def test_keeps_tree_shape(self) -> None:
        tree = normalize_schema(
            [
                {
                    "field": "group",
                    "children": [
                        {"field": "x"},
                        {"field": "y", "table": {"show": False}},
                    ],
                }
            ]
        )
        [column] = filter_table_schema(tree)
        assert [c["field"] for c in column["children"]] == ["x"]
        assert "children" not in column["children"][0]

    def test_branch_without_visible_children_becomes_leaf(self) -> None:
        tree = normalize_schema(
            [{"field": "group", "children": [{"field": "y", "table": {"show": False}}]}]
        )
        [column] = filter_table_schema(tree)
        assert "children" not in column

    def test_nodes_without_field_are_dropped(self) -> None:
        tree = normalize_schema(
            [
                {"label": "No field"},
                {"field": "", "label": "Empty"},
                {"field": "ok"},
            ]
        )
        assert [c["field"] for c in filter_table_schema(tree)] == ["ok"]

    def test_hidden_parent_drops_descendants(self) -> None:
        tree = normalize_schema(
            [{"field": "group", "table": {"show": False}, "children": [{"field": "x"}]}]
        )
        assert filter_table_schema(tree) == []


class TestFormProjection:
    def test_defaults_and_merge(self) -> None:
        tree = normalize_schema(
            [
                {"field": "a", "label": "A"},
                {"field": "b", "label": "B", "form": {"component": "Select", "field": "x", "colProps": {"span": 12}}},
                {"field": "c", "form": {"show": False}},
            ]
        )
        result = filter_form_schema(tree)
        assert result == [
            {"component": "Input", "field": "a", "label": "A"},
            {"component": "Select", "colProps": {"span": 12}, "field": "b", "label": "B"},
        ]

    def test_flat_pre_order(self) -> None:
        assert [i["field"] for i in filter_form_schema(_nested())] == ["base", "name", "age", "email"]

    def test_custom_default_component(self) -> None:
        settings = CrudSchemaSettings(default_form_component="ElInput")
        [item] = filter_form_schema(normalize_schema([{"field": "a"}]), settings=settings)
        assert item["component"] == "ElInput"


class TestDetailProjection:
    def test_passthrough(self) -> None:
        tree = normalize_schema(
            [
                {"field": "a", "label": "A", "detail": {"span": 2, "show": True}},
                {"field": "b", "label": "B", "detail": {"show": False}},
                {"field": "c", "label": "C"},
            ]
        )
        assert filter_descriptions_schema(tree) == [
            {"span": 2, "field": "a", "label": "A"},
            {"field": "c", "label": "C"},
        ]

    def test_no_component_default(self) -> None:
        [item] = filter_descriptions_schema(normalize_schema([{"field": "a"}]))
        assert "component" not in item

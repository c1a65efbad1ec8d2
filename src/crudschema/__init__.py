# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""
Schema-driven view generation.

Describe an entity's fields once as a crud schema and derive the search,
table, form and detail schemas consumed by the UI from it.
"""

from crudschema.config import CrudSchemaSettings, clear_settings_cache, get_settings
from crudschema.dicts import DictStore, get_dict_store, set_dict_store
from crudschema.errors import (
    ConfigurationError,
    CrudSchemaError,
    DictionaryError,
    EnrichmentError,
    SchemaDefinitionError,
)
from crudschema.i18n import I18n, Translator, get_i18n, set_i18n, t
from crudschema.models import (
    AllSchemas,
    DetailParams,
    FormParams,
    SchemaNode,
    SearchParams,
    TableParams,
    normalize_schema,
)
from crudschema.options import filter_options
from crudschema.schemas import (
    filter_descriptions_schema,
    filter_form_schema,
    filter_search_schema,
    filter_table_schema,
    use_crud_schemas,
)
from crudschema.sources import http_options_source, static_options_source

__all__ = [
    # Engine
    "use_crud_schemas",
    "filter_search_schema",
    "filter_table_schema",
    "filter_form_schema",
    "filter_descriptions_schema",
    "filter_options",
    # Models
    "AllSchemas",
    "SchemaNode",
    "SearchParams",
    "TableParams",
    "FormParams",
    "DetailParams",
    "normalize_schema",
    # Collaborators
    "DictStore",
    "get_dict_store",
    "set_dict_store",
    "I18n",
    "Translator",
    "get_i18n",
    "set_i18n",
    "t",
    "http_options_source",
    "static_options_source",
    # Settings
    "CrudSchemaSettings",
    "get_settings",
    "clear_settings_cache",
    # Errors
    "CrudSchemaError",
    "SchemaDefinitionError",
    "DictionaryError",
    "EnrichmentError",
    "ConfigurationError",
]

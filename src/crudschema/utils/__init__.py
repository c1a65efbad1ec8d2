# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""Tree and string helpers shared by the projection engine."""

from crudschema.utils.strings import (
    find_index,
    hump_to_underline,
    snake_to_camel,
    snake_to_title,
    to_any_string,
    trim,
    underline_to_hump,
)
from crudschema.utils.tree import (
    each_tree,
    filter_tree,
    find_node,
    tree_map,
    tree_to_list,
)

__all__ = [
    "each_tree",
    "tree_map",
    "filter_tree",
    "tree_to_list",
    "find_node",
    "underline_to_hump",
    "hump_to_underline",
    "snake_to_camel",
    "snake_to_title",
    "to_any_string",
    "trim",
    "find_index",
]

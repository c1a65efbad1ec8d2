# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""
Recursive helpers over trees of mapping nodes.

A tree is a list of dict nodes; a node's descendants live in a list under
``children_key`` (``"children"`` by default).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

Node = dict[str, Any]

CHILDREN_KEY = "children"


def each_tree(
    tree: Iterable[Mapping[str, Any]],
    callback: Callable[[Mapping[str, Any]], Any],
    children_key: str = CHILDREN_KEY,
) -> None:
    """Visit every node depth-first, pre-order.

    The callback's return value is ignored; filtering is the callback's job,
    every node is visited.
    """
    for node in tree:
        callback(node)
        children = node.get(children_key)
        if children:
            each_tree(children, callback, children_key)


def tree_map(
    tree: Iterable[Mapping[str, Any]],
    conversion: Callable[[Mapping[str, Any]], Mapping[str, Any] | None],
    children_key: str = CHILDREN_KEY,
) -> list[Node]:
    """Build a new tree of the same shape with each node replaced by
    ``conversion(node)``.

    Children are mapped even when the conversion returns ``None``; the
    mapped children are then attached to an empty node so a later
    :func:`filter_tree` can prune them on their own merits.
    """
    result: list[Node] = []
    for node in tree:
        converted = conversion(node)
        mapped: Node = dict(converted) if converted is not None else {}
        children = node.get(children_key)
        if children is not None:
            mapped[children_key] = tree_map(children, conversion, children_key)
        elif children_key in mapped:
            mapped.pop(children_key)
        result.append(mapped)
    return result


def filter_tree(
    tree: Iterable[Node],
    predicate: Callable[[Node], bool],
    children_key: str = CHILDREN_KEY,
) -> list[Node]:
    """Filter a tree post-order, in place on the given nodes.

    Children are filtered before their parent is judged. A node left with no
    children has its ``children_key`` removed rather than kept as ``[]``.
    """
    result: list[Node] = []
    for node in tree:
        children = node.get(children_key)
        if children is not None:
            kept = filter_tree(children, predicate, children_key)
            if kept:
                node[children_key] = kept
            else:
                del node[children_key]
        if predicate(node):
            result.append(node)
    return result


def tree_to_list(
    tree: Iterable[Mapping[str, Any]], children_key: str = CHILDREN_KEY
) -> list[Mapping[str, Any]]:
    """Flatten a tree into a pre-order list of its nodes."""
    nodes: list[Mapping[str, Any]] = []
    each_tree(tree, nodes.append, children_key)
    return nodes


def find_node(
    tree: Iterable[Mapping[str, Any]],
    predicate: Callable[[Mapping[str, Any]], bool],
    children_key: str = CHILDREN_KEY,
) -> Mapping[str, Any] | None:
    """Return the first node in pre-order that satisfies ``predicate``."""
    for node in tree:
        if predicate(node):
            return node
        children = node.get(children_key)
        if children:
            found = find_node(children, predicate, children_key)
            if found is not None:
                return found
    return None

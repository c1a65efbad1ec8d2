# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
#
# SPDX-License-Identifier: MIT

import random
import re
from collections.abc import Callable, Sequence
from typing import Any

_HUMP_RE = re.compile(r"[-_](\w)")
_UPPER_RE = re.compile(r"([A-Z])")
_ANY_STRING_TEMPLATE = "xxxxx-xxxxx-4xxxx-yxxxx-xxxxx"


def underline_to_hump(value: str) -> str:
    """Converts a kebab-case or snake_case string to camelCase."""
    return _HUMP_RE.sub(lambda match: match.group(1).upper(), value)


def hump_to_underline(value: str) -> str:
    """Converts a camelCase string to kebab-case."""
    return _UPPER_RE.sub(r"-\1", value).lower()


def snake_to_title(snake_str: str) -> str:
    components = snake_str.split("_")
    return " ".join(x.title() for x in components)


def snake_to_camel(snake_str: str) -> str:
    """Converts a snake_case string to a lowerCamelCase string."""
    first, *rest = snake_str.split("_")
    return first + "".join(x.title() for x in rest)


def trim(value: str) -> str:
    return value.strip()


def to_any_string() -> str:
    """Random identifier in the ``xxxxx-xxxxx-4xxxx-yxxxx-xxxxx`` layout.

    Every ``x`` is a random hex digit; every ``y`` is one of ``8 9 a b``.
    """

    def _nibble(match: re.Match[str]) -> str:
        r = random.getrandbits(4)
        v = r if match.group(0) == "x" else (r & 0x3) | 0x8
        return format(v, "x")

    return re.sub(r"[xy]", _nibble, _ANY_STRING_TEMPLATE)


def find_index(items: Sequence[Any], predicate: Callable[[Any], Any]) -> int:
    """Index of the first item matching ``predicate``, or -1."""
    for index, item in enumerate(items):
        if predicate(item):
            return index
    return -1

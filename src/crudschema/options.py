# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""
Option-list translation.

Search fields fed from a dictionary or a data source carry option records
such as ``{"value": 1, "label": "status.enabled"}``; their labels are
translated before the options reach the search schema.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from crudschema.i18n import Translator, t

LABEL_KEY = "label"
LEGACY_LABEL_FIELD_KEY = "labelField"


def filter_options(
    options: Iterable[Mapping[str, Any]] | None,
    label_field: str | None = None,
    *,
    translate: Translator | None = None,
    legacy_label_field: bool = True,
) -> list[dict[str, Any]]:
    """Translate the label of every option record.

    Records are shallow-copied; order is kept.

    Without ``label_field`` the ``label`` key is translated in place. With
    ``label_field`` and ``legacy_label_field`` (the default) the translated
    text is written to the literal key ``"labelField"``, which is what
    existing consumers of these schemas read. The source text is the
    ``label_field`` value, or ``label`` when the record has no such key.
    Pass ``legacy_label_field=False`` to write back to ``label_field``.

    Args:
        options: Option records, or None
        label_field: Key holding the label, from ``optionsAlias.labelField``
        translate: Translation function, defaults to :func:`crudschema.i18n.t`
        legacy_label_field: Keep the literal ``labelField`` target key

    Returns:
        New list of translated option records
    """
    if options is None:
        return []

    translate = translate or t
    result: list[dict[str, Any]] = []
    for option in options:
        record = dict(option)
        if label_field:
            # Source is the aliased key, not the literal "labelField" key the legacy code read
            source = record.get(label_field, record.get(LABEL_KEY))
            target = LEGACY_LABEL_FIELD_KEY if legacy_label_field else label_field
        else:
            source = record.get(LABEL_KEY)
            target = LABEL_KEY
        if source is not None:
            record[target] = translate(source)
        result.append(record)
    return result

# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""
Ready-made option sources for the ``api`` key of a search block.

A source is a zero-argument callable resolving to ``{"data": [...]}``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

import httpx

OptionsResponse = dict[str, Any]


def http_options_source(
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
    data_key: str | None = None,
    client: httpx.AsyncClient | None = None,
    timeout: float = 10.0,
) -> Callable[[], Awaitable[OptionsResponse]]:
    """Build a source that GETs ``url`` and returns its JSON as ``data``.

    Args:
        url: Endpoint returning the option list as JSON
        params: Query parameters
        headers: Extra request headers
        data_key: Key of the option list inside the JSON body, if nested
        client: Shared client; a short-lived one is opened per call otherwise
        timeout: Request timeout in seconds for the short-lived client

    Returns:
        Async callable suitable for ``search["api"]``
    """
    request_params = dict(params or {})
    request_headers = {str(k): str(v) for k, v in (headers or {}).items()}

    async def fetch_with(http: httpx.AsyncClient) -> OptionsResponse:
        response = await http.get(url, params=request_params, headers=request_headers)
        response.raise_for_status()
        payload = response.json()
        if data_key is not None:
            payload = payload.get(data_key) if isinstance(payload, Mapping) else None
        return {"data": payload}

    async def fetch() -> OptionsResponse:
        if client is not None:
            return await fetch_with(client)
        async with httpx.AsyncClient(timeout=httpx.Timeout(timeout)) as http:
            return await fetch_with(http)

    return fetch


def static_options_source(
    options: Sequence[Mapping[str, Any]],
) -> Callable[[], Awaitable[OptionsResponse]]:
    """Source resolving to a fixed option list; handy for tests and demos."""

    async def fetch() -> OptionsResponse:
        return {"data": [dict(option) for option in options]}

    return fetch

# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: crudschema
"""
Helpers for calling code that may be either sync or async.
"""

import inspect
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

T = TypeVar("T")


async def to_async(
    func: Callable[..., T | Awaitable[T]], *args: Any, **kwargs: Any
) -> T:
    """
    Call ``func`` and await the result if it is awaitable.

    This lets sync functions, coroutine functions and plain callables that
    return a future be used the same way.

    Args:
        func: The callable to call
        *args: Arguments to pass to the callable
        **kwargs: Keyword arguments to pass to the callable

    Returns:
        The result of the callable
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        return await result
    return result

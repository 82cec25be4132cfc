"""Await data-first adapter callbacks from async route handlers."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

Callback = Callable[[Any, Any], None]


async def call_adapter(operation: Callable[[Callback], Any]) -> tuple[Any, Any]:
    """Run an adapter operation and wait for its callback.

    Args:
        operation: Adapter method taking a ``(data, error)`` callback, e.g.
            ``adapter.get_record``

    Returns:
        The ``(data, error)`` pair the callback received
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[tuple[Any, Any]] = loop.create_future()

    def resolve(result: tuple[Any, Any]) -> None:
        if not future.done():
            future.set_result(result)

    def callback(data: Any, error: Any) -> None:
        loop.call_soon_threadsafe(resolve, (data, error))

    operation(callback)
    return await future

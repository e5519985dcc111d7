"""Shared utilities for morphir_deps."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable

T = TypeVar("T")


async def gather_fail_fast(*awaitables: Awaitable[T]) -> list[T]:
    """Await all awaitables concurrently, cancelling the rest when one fails.

    Results keep the order of the arguments. The first exception is re-raised
    unchanged once the remaining tasks have been cancelled and awaited.
    """
    tasks = [asyncio.ensure_future(awaitable) for awaitable in awaitables]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

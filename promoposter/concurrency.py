import asyncio
from collections.abc import Coroutine
from typing import Any


async def run_all(*coros: Coroutine[Any, Any, Any]) -> list[Any]:
    """Await ``coros`` concurrently and return their results in order.

    When one of them fails the others are cancelled and awaited before the
    first failure is re-raised as-is, so nothing keeps running in the background.
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(coro) for coro in coros]
    except ExceptionGroup as errors:
        raise errors.exceptions[0]
    return [task.result() for task in tasks]

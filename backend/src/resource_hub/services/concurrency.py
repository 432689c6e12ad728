"""Run independent store calls concurrently."""

import asyncio
from collections.abc import Coroutine
from typing import Any

from resource_hub.exceptions import QueryFailedError


async def gather_store_calls[T](*calls: Coroutine[Any, Any, T]) -> list[T]:
    """Await ``calls`` concurrently and return their results in order.

    Runs in a TaskGroup, so one failure cancels the siblings and a cancelled
    request cancels every call in flight. A store failure is re-raised as the
    bare ``QueryFailedError``, not wrapped in an ExceptionGroup.
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(call) for call in calls]
    except ExceptionGroup as failures:
        store_failures = [exc for exc in failures.exceptions if isinstance(exc, QueryFailedError)]
        if store_failures:
            raise store_failures[0]  # noqa: B904
        raise
    return [task.result() for task in tasks]

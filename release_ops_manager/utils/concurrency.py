"""Concurrency helpers for running per-package work side by side."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


async def gather_or_fail(*awaitables: Awaitable[T]) -> list[T]:
    """Run awaitables concurrently and return their results in order.

    A failure cancels every unfinished awaitable and is raised; partial results
    are discarded. When several fail in the same wait, the one earliest in input
    order is raised.
    """
    if not awaitables:
        return []

    tasks = [asyncio.ensure_future(awaitable) for awaitable in awaitables]
    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        raise

    # Read every failed task's exception, not only the one raised.
    errors = [task.exception() for task in tasks if task in done and not task.cancelled()]
    failures = [error for error in errors if error is not None]
    if failures:
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.wait(pending)
            for task in pending:
                if not task.cancelled():
                    task.exception()
        raise failures[0]

    return [task.result() for task in tasks]


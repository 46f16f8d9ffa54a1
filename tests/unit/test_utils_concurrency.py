"""Unit tests for fail-fast concurrent execution."""

import asyncio
import gc

import pytest

from release_ops_manager.utils.concurrency import gather_or_fail


@pytest.mark.asyncio
async def test_results_keep_input_order() -> None:
    """Test that results are returned in input order regardless of completion order."""

    async def delayed(value: str, delay: float) -> str:
        await asyncio.sleep(delay)
        return value

    assert await gather_or_fail(delayed("slow", 0.02), delayed("fast", 0)) == ["slow", "fast"]


@pytest.mark.asyncio
async def test_no_awaitables() -> None:
    """Test that nothing to run yields an empty list."""
    assert await gather_or_fail() == []


@pytest.mark.asyncio
async def test_first_failure_cancels_the_rest() -> None:
    """Test that the first failure is raised and unfinished work is cancelled."""
    cancelled = asyncio.Event()

    async def fails() -> None:
        await asyncio.sleep(0)
        raise RuntimeError("boom")

    async def waits_forever() -> None:
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    with pytest.raises(RuntimeError, match="boom"):
        await gather_or_fail(waits_forever(), fails())

    assert cancelled.is_set()


@pytest.mark.asyncio
async def test_simultaneous_failures_are_all_retrieved() -> None:
    """Test that failures finishing together raise the earliest one and leave none unretrieved."""
    loop = asyncio.get_running_loop()
    contexts: list[dict] = []
    loop.set_exception_handler(lambda _loop, context: contexts.append(context))

    async def fails(message: str) -> None:
        await asyncio.sleep(0)
        raise RuntimeError(message)

    try:
        with pytest.raises(RuntimeError, match="first"):
            await gather_or_fail(fails("first"), fails("second"))
        gc.collect()
    finally:
        loop.set_exception_handler(None)

    assert [context for context in contexts if "never retrieved" in context["message"]] == []

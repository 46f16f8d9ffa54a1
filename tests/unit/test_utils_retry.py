"""Unit tests for retrying GitHub calls on rate limits."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from githubkit.exception import RequestFailed

from release_ops_manager.utils import retry
from release_ops_manager.utils.retry import is_rate_limit_error, rate_limit_wait_time, retry_on_rate_limit


def make_request_failed(status_code: int, headers: dict[str, str] | None = None) -> RequestFailed:
    """Build a RequestFailed error around a mocked response."""
    response = MagicMock()
    response.status_code = status_code
    response.headers = headers or {}
    return RequestFailed(response)


@pytest.fixture
def sleep(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    """Replace the retry sleep with a mock."""
    mock = AsyncMock()
    monkeypatch.setattr(retry.asyncio, "sleep", mock)
    return mock


@pytest.mark.parametrize(
    "status_code,expected",
    [
        pytest.param(403, True, id="forbidden"),
        pytest.param(429, True, id="too many requests"),
        pytest.param(500, False, id="server error"),
    ],
)
def test_is_rate_limit_error(status_code: int, expected: bool) -> None:
    """Test classifying failed requests."""
    assert is_rate_limit_error(make_request_failed(status_code)) is expected


def test_is_rate_limit_error_other_exception() -> None:
    """Test that unrelated exceptions are not rate limit errors."""
    assert is_rate_limit_error(ValueError("x")) is False


@pytest.mark.parametrize(
    "headers,expected",
    [
        pytest.param({"retry-after": "7"}, 7.0, id="retry-after header"),
        pytest.param({"retry-after": "soon"}, 3.0, id="invalid retry-after"),
        pytest.param({"x-ratelimit-reset": "not-a-number"}, 3.0, id="invalid reset"),
        pytest.param({"x-ratelimit-reset": "1"}, 3.0, id="reset in the past"),
        pytest.param({}, 3.0, id="no hint"),
    ],
)
def test_rate_limit_wait_time_headers(headers: dict[str, str], expected: float) -> None:
    """Test reading the wait time from response headers."""
    assert rate_limit_wait_time(make_request_failed(429, headers), 3.0) == expected


def test_rate_limit_wait_time_prefers_retry_after_attribute() -> None:
    """Test that an exception's retry_after wins over headers."""
    error = make_request_failed(429, {"retry-after": "7"})
    error.retry_after = timedelta(seconds=12)  # type: ignore[attr-defined]
    assert rate_limit_wait_time(error, 3.0) == 12.0


def test_retry_on_rate_limit_rejects_sync_functions() -> None:
    """Test that only coroutine functions can be decorated."""
    with pytest.raises(TypeError, match="must be async"):

        @retry_on_rate_limit()
        def not_async() -> None:
            pass


@pytest.mark.asyncio
async def test_retry_on_rate_limit_retries_then_succeeds(sleep: AsyncMock) -> None:
    """Test that a rate limited call is retried after the requested delay."""
    func = AsyncMock(side_effect=[make_request_failed(429, {"retry-after": "5"}), "ok"])

    @retry_on_rate_limit(max_delay=60.0)
    async def call() -> str:
        return await func()

    assert await call() == "ok"
    assert func.await_count == 2
    sleep.assert_awaited_once_with(5.0)


@pytest.mark.asyncio
async def test_retry_on_rate_limit_caps_wait(sleep: AsyncMock) -> None:
    """Test that waits never exceed the maximum delay."""
    func = AsyncMock(side_effect=[make_request_failed(429, {"retry-after": "500"}), "ok"])

    @retry_on_rate_limit(max_delay=30.0)
    async def call() -> str:
        return await func()

    await call()
    sleep.assert_awaited_once_with(30.0)


@pytest.mark.asyncio
async def test_retry_on_rate_limit_gives_up(sleep: AsyncMock) -> None:
    """Test that the error is raised once the retries are exhausted."""
    error = make_request_failed(429)
    func = AsyncMock(side_effect=error)

    @retry_on_rate_limit(max_retries=2, initial_delay=1.0)
    async def call() -> None:
        await func()

    with pytest.raises(RequestFailed):
        await call()
    assert func.await_count == 3
    assert [args.args[0] for args in sleep.await_args_list] == [1.0, 2.0]


@pytest.mark.asyncio
async def test_retry_on_rate_limit_does_not_retry_other_errors(sleep: AsyncMock) -> None:
    """Test that other failures are raised immediately."""
    func = AsyncMock(side_effect=make_request_failed(500))

    @retry_on_rate_limit()
    async def call() -> None:
        await func()

    with pytest.raises(RequestFailed):
        await call()
    assert func.await_count == 1
    sleep.assert_not_awaited()

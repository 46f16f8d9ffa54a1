"""Retry decorator for GitHub API calls that hit rate limits.

Rate limit errors are retried after the delay GitHub asks for (the exception's
`retry_after`, a `retry-after` header, or the `x-ratelimit-reset` timestamp),
falling back to exponential backoff. Every other error is raised at once.
"""

import asyncio
import functools
import time
from typing import Any, Callable, TypeVar

import structlog
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

RATE_LIMIT_STATUS_CODES = (403, 429)


def is_rate_limit_error(exc: Exception) -> bool:
    """Return True if the exception is a GitHub rate limit response."""
    if isinstance(exc, (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded)):
        return True
    return isinstance(exc, RequestFailed) and exc.response.status_code in RATE_LIMIT_STATUS_CODES


def rate_limit_wait_time(exc: Exception, fallback: float) -> float:
    """Return how many seconds to wait before retrying after a rate limit error."""
    retry_after = getattr(exc, "retry_after", None)
    if retry_after:
        return retry_after.total_seconds()

    if not isinstance(exc, RequestFailed):
        return fallback

    headers = exc.response.headers
    header_value = headers.get("retry-after")
    if header_value:
        try:
            return float(header_value)
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=header_value)
            return fallback

    reset_value = headers.get("x-ratelimit-reset")
    if reset_value:
        try:
            reset_timestamp = int(reset_value)
        except ValueError:
            logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=reset_value)
            return fallback
        now = int(time.time())
        if reset_timestamp > now:
            return reset_timestamp - now + 1
    return fallback


def retry_on_rate_limit(
    max_retries: int = 100,
    initial_delay: float = 10.0,
    max_delay: float = 300.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator retrying an async GitHub call while it is rate limited.

    Args:
        max_retries: Maximum number of retries before the error is raised.
        initial_delay: Backoff delay in seconds used when GitHub gives no hint.
        max_delay: Upper bound for any single wait.
        exponential_base: Multiplier applied to the backoff delay after each retry.

    Returns:
        The decorated coroutine function.
    """

    def decorator(func: F) -> F:
        if not asyncio.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_rate_limit must be async.")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except RequestFailed as exc:
                    if not is_rate_limit_error(exc):
                        raise
                    if attempt >= max_retries:
                        logger.error(
                            "Max retries reached for GitHub rate limit error",
                            function=func.__name__,
                            attempt=attempt + 1,
                            error_type=type(exc).__name__,
                        )
                        raise
                    wait_time = min(rate_limit_wait_time(exc, delay), max_delay)
                    logger.warning(
                        "GitHub rate limit exceeded, waiting before retry",
                        function=func.__name__,
                        attempt=attempt + 1,
                        max_retries=max_retries,
                        wait_time=wait_time,
                    )
                    await asyncio.sleep(wait_time)
                    delay = min(delay * exponential_base, max_delay)
                    attempt += 1

        return wrapper  # type: ignore

    return decorator

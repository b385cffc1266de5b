"""Retry decorator for GitHub API calls that hit rate limits.

GitHub answers with 403/429 (or githubkit raises its dedicated rate limit
exceptions) when a token exhausts its quota. Release runs are short, so the
decorator waits for the window advertised by GitHub and tries again.
"""

import asyncio
import functools
import inspect
import time
from typing import Any, Awaitable, Callable, TypeVar

import structlog
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def _is_rate_limited(exc: RequestFailed) -> bool:
    """Whether a failed request was rejected because of rate limiting."""
    if exc.response.status_code == 429:
        return True
    return exc.response.status_code == 403 and "rate limit" in exc.response.text.lower()


def _wait_time_from_headers(exc: RequestFailed, fallback: float) -> float:
    """Read the wait time GitHub advertises in the response headers."""
    headers = exc.response.headers
    retry_after = headers.get("retry-after")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=retry_after)
    rate_limit_reset = headers.get("x-ratelimit-reset")
    if rate_limit_reset:
        try:
            remaining = int(rate_limit_reset) - int(time.time())
        except ValueError:
            logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=rate_limit_reset)
        else:
            if remaining > 0:
                return float(remaining + 1)
    return fallback


def retry_on_rate_limit(
    max_retries: int = 5,
    initial_delay: float = 10.0,
    max_delay: float = 300.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator for retrying async adapter methods when GitHub rate limits them.

    Args:
        max_retries: Maximum number of retry attempts
        initial_delay: Delay in seconds used when GitHub does not advertise one
        max_delay: Upper bound for any single wait
        exponential_base: Growth factor of the fallback delay between attempts

    Returns:
        Decorated coroutine function
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_rate_limit must be async.")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded) as exc:
                    if attempt == max_retries:
                        logger.error("Max retries reached for GitHub rate limit", function=func.__name__, attempt=attempt + 1)
                        raise
                    retry_after = getattr(exc, "retry_after", None)
                    wait_time = retry_after.total_seconds() if retry_after else delay
                except RequestFailed as exc:
                    if not _is_rate_limited(exc):
                        raise
                    if attempt == max_retries:
                        logger.error(
                            "Max retries reached for GitHub rate limit",
                            function=func.__name__,
                            attempt=attempt + 1,
                            status_code=exc.response.status_code,
                        )
                        raise
                    wait_time = _wait_time_from_headers(exc, delay)

                wait_time = min(wait_time, max_delay)
                logger.warning(
                    "GitHub rate limit hit, retrying",
                    function=func.__name__,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                    wait_time=wait_time,
                )
                await asyncio.sleep(wait_time)
                delay = min(delay * exponential_base, max_delay)

        return wrapper  # type: ignore

    return decorator

"""
Retry helpers for Shopify rate limiting (HTTP 429)
"""

import asyncio
from functools import wraps
from typing import Any, Awaitable, Callable, Optional, TypeVar

import httpx

from order_report_proxy.core.exceptions import ShopifyRateLimitError
from order_report_proxy.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Sleeper = Callable[[float], Awaitable[Any]]


def is_rate_limited(error: BaseException) -> bool:
    """True when the failure is a rate-limit response"""
    if isinstance(error, ShopifyRateLimitError):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code == 429
    return False


async def retry_on_rate_limit(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    initial_delay: float = 1.0,
    sleep: Optional[Sleeper] = None,
) -> T:
    """
    Run an operation, retrying only when it is rate limited

    Args:
        operation: Zero-argument callable returning a fresh awaitable per attempt
        max_retries: Total number of attempts
        initial_delay: Delay before the first retry in seconds, doubled per attempt
        sleep: Sleep coroutine, asyncio.sleep unless overridden

    Any failure that is not a rate limit, or a rate limit on the final
    attempt, propagates to the caller.
    """
    sleep = sleep or asyncio.sleep

    for attempt in range(max_retries):
        try:
            return await operation()
        except Exception as e:
            if is_rate_limited(e) and attempt < max_retries - 1:
                delay = initial_delay * (2**attempt)
                logger.warning(
                    f"Rate limited. Retrying in {delay}s",
                    attempt=attempt + 1,
                    max_retries=max_retries,
                )
                await sleep(delay)
            else:
                raise

    # max_retries < 1 never runs the operation
    raise ValueError("max_retries must be at least 1")


def async_rate_limit_retry(
    max_retries: Optional[int] = None,
    initial_delay: Optional[float] = None,
    sleep: Optional[Sleeper] = None,
):
    """
    Decorator form of retry_on_rate_limit for async methods

    Arguments left as None are read from the bound instance's ``max_retries``
    and ``initial_retry_delay`` attributes at call time, falling back to 3
    attempts and 1 second.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            owner = args[0] if args else None
            attempts = max_retries or getattr(owner, "max_retries", None) or 3
            delay = initial_delay
            if delay is None:
                delay = getattr(owner, "initial_retry_delay", 1.0)

            return await retry_on_rate_limit(
                lambda: func(*args, **kwargs),
                max_retries=attempts,
                initial_delay=delay,
                sleep=sleep,
            )

        return wrapper

    return decorator

"""
Retry decorator with exponential backoff.

Used by the reward pipeline to re-run a whole reward attempt when an
account was modified concurrently. Only the exceptions named by the caller
are retried; everything else propagates on the first failure.
"""

import asyncio
import functools
import random
from typing import Any, Awaitable, Callable, Tuple, Type

from rewards.core.logging_config import get_logger

logger = get_logger(__name__)


def backoff_delay(
    attempt: int,
    base_delay: float,
    max_delay: float,
    exponential_base: float = 2.0,
    jitter: bool = True,
) -> float:
    """
    Delay in seconds before retry number ``attempt`` (0-based).

    ``base_delay * exponential_base ** attempt`` capped at ``max_delay``,
    with +/-20% jitter when enabled. Never negative.
    """
    delay = min(base_delay * (exponential_base ** attempt), max_delay)
    if jitter and delay > 0:
        jitter_amount = delay * 0.2
        delay = delay + random.uniform(-jitter_amount, jitter_amount)
    return max(0.0, delay)


def retry_with_backoff(
    max_retries: int = 2,
    base_delay: float = 0.05,
    max_delay: float = 1.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,),
) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[Any]]]:
    """
    Decorator for retrying async functions with exponential backoff.

    Args:
        max_retries: Retries after the first attempt
            Total attempts = max_retries + 1
        base_delay: Delay in seconds before the first retry
        max_delay: Cap on any single delay
        exponential_base: Growth factor between retries
        jitter: Add +/-20% random jitter to each delay
        exceptions: Exception types that trigger a retry

    Returns:
        Decorated async function. When every attempt fails, the last
        exception is re-raised unchanged.

    Example:
        @retry_with_backoff(max_retries=2, exceptions=(ConcurrentModification,))
        async def reward_once(dining):
            ...
    """
    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)

                except exceptions as e:
                    if attempt == max_retries:
                        logger.warning(
                            f"{func.__name__} gave up after {max_retries + 1} attempts: {e}"
                        )
                        raise

                    delay = backoff_delay(
                        attempt, base_delay, max_delay, exponential_base, jitter
                    )
                    logger.info(
                        f"{func.__name__} attempt {attempt + 1}/{max_retries + 1} "
                        f"failed with {type(e).__name__}: {e}. "
                        f"Retrying in {delay:.3f}s..."
                    )
                    await asyncio.sleep(delay)

            # Unreachable: the last attempt either returns or raises
            raise RuntimeError("retry loop exited without return or raise")

        return wrapper
    return decorator

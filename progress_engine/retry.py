"""
Bounded retry for fallible async operations.

Fixed delay between attempts, no jitter and no backoff growth.
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from .config import MAX_RETRIES, RETRY_DELAY_SECONDS

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_operation(
    operation: Callable[[], Awaitable[T]],
    retries: int = MAX_RETRIES,
    delay: float = RETRY_DELAY_SECONDS,
) -> T:
    """
    Await ``operation()``, retrying on failure.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        retries: Retries allowed after the first attempt
        delay: Seconds to wait before each retry

    Returns:
        The first successful result

    Raises:
        The last exception once the retry budget is spent
    """
    while True:
        try:
            return await operation()
        except Exception as e:
            if retries <= 0:
                raise
            logger.warning(f"Operation failed ({e}), retrying in {delay}s ({retries} left)")
            await asyncio.sleep(delay)
            retries -= 1

"""Bounded retry helper with exponential backoff.

This helper does not tell conflicts apart from other failures. Retrying on a
lost version race is the protocols' job; this wrapper only caps how long a
caller keeps trying when every attempt raises.
"""

import asyncio
from typing import Awaitable, Callable, Tuple, Type, TypeVar

from document_semaphore.observability.logger_adaptor import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_RETRIES = 5
DEFAULT_INITIAL_DELAY_SECONDS = 0.15


def compute_backoff(attempt_index: int, initial_delay: float) -> float:
    """Delay before the retry following failed attempt ``attempt_index``.

    ``attempt_index`` is 0 for the first failure, so the first wait equals
    ``initial_delay`` and every later wait doubles it.
    """
    return max(0.0, initial_delay) * (2 ** max(0, attempt_index))


async def retry(
    operation: Callable[[], Awaitable[T]],
    retries: int = DEFAULT_RETRIES,
    initial_delay: float = DEFAULT_INITIAL_DELAY_SECONDS,
    no_retry_on: Tuple[Type[Exception], ...] = (),
) -> T:
    """Await ``operation`` until it succeeds or ``retries`` attempts failed.

    Args:
        operation: Zero-argument coroutine function to run.
        retries: Total number of attempts. Must be at least 1.
        initial_delay: Backoff before the first retry, in seconds.
        no_retry_on: Exception types raised straight away without retrying.

    Returns:
        T: Whatever ``operation`` returns on its first successful attempt.

    Raises:
        ValueError: If ``retries`` is less than 1.
        Exception: The error raised by the last attempt once the budget is spent.
    """
    if retries < 1:
        raise ValueError("retries must be at least 1")

    attempt = 0
    while True:
        try:
            return await operation()
        except no_retry_on:
            raise
        except Exception as e:
            if attempt + 1 >= retries:
                logger.error(f"Attempt {attempt + 1}/{retries} failed, giving up: {e}")
                raise

            delay = compute_backoff(attempt, initial_delay)
            logger.warning(
                f"Attempt {attempt + 1}/{retries} failed, waiting {delay:.3f}s: {e}"
            )
            await asyncio.sleep(delay)
            attempt += 1

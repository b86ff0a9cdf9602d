"""Retry helpers for flaky collaborators (the git-config backed store)."""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable, Iterator, Tuple, Type

logger = logging.getLogger(__name__)


def backoff_delays(initial_delay: float, backoff_factor: float, max_delay: float) -> Iterator[float]:
    """Yield ``initial_delay``, then each previous delay times ``backoff_factor``, capped."""
    delay = min(initial_delay, max_delay)
    while True:
        yield delay
        delay = min(delay * backoff_factor, max_delay)


def retry_with_backoff(
    max_attempts: int = 3,
    initial_delay: float = 0.2,
    backoff_factor: float = 2.0,
    max_delay: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
):
    """
    Decorator that retries a function with exponential backoff.

    Only ``exceptions`` trigger a retry; anything else propagates at once.
    The last failure is re-raised unchanged once ``max_attempts`` is reached.

    Example:
        @retry_with_backoff(max_attempts=3, exceptions=(TimeoutError,))
        def read_remote():
            ...
    """
    attempts = max(1, int(max_attempts))

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            delays = backoff_delays(initial_delay, backoff_factor, max_delay)
            for attempt in range(1, attempts + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt == attempts:
                        logger.debug("%s gave up after %d attempt(s): %s", func.__name__, attempts, e)
                        raise
                    delay = next(delays)
                    logger.debug(
                        "%s attempt %d/%d failed (%s); retrying in %.2fs",
                        func.__name__, attempt, attempts, e, delay,
                    )
                    time.sleep(delay)
            raise AssertionError("retry loop exited without returning")

        return wrapper
    return decorator


__all__ = ["backoff_delays", "retry_with_backoff"]

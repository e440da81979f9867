"""Exponential backoff retry decorator."""

import functools
import time

from .log import get_logger


def with_retry(max_retries: int = 1, base_delay: float = 2.0, retry_on: tuple = (Exception,)):
    """Decorator: retry with exponential backoff on the listed exception types.

    Delays: base_delay * 2^attempt. Exceptions outside `retry_on` propagate
    immediately without a retry.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except retry_on as e:
                    if attempt >= max_retries:
                        logger.debug(
                            "%s gave up after %d attempts: %s",
                            func.__name__, max_retries + 1, e
                        )
                        raise
                    delay = base_delay * (2 ** attempt)
                    logger.warning(
                        "%s failed (attempt %d/%d): %s - retrying in %.1fs",
                        func.__name__, attempt + 1, max_retries + 1, e, delay
                    )
                    time.sleep(delay)
        return wrapper
    return decorator

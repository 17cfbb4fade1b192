"""Retry strategy for provider operations.

Exponential backoff with jitter for transient upstream failures. The
completion adapter itself never retries; callers opt in by wrapping the
call with ``with_retries`` and setting ``max_retries`` above zero.
"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, TypeVar

from career_compass.providers.errors import TransportError, UpstreamError

__all__ = ["is_retryable", "with_retries"]

if TYPE_CHECKING:
    from career_compass.providers.config import ProviderConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_retryable(error: Exception) -> bool:
    """Return True for errors worth another attempt.

    Transport failures are always retryable. Upstream errors are retryable
    only for rate limiting (429) and server-side (5xx) statuses.
    """
    if isinstance(error, TransportError):
        return True
    if isinstance(error, UpstreamError):
        return error.is_retryable
    return False


async def with_retries(
    func: Callable[[], Awaitable[T]],
    config: "ProviderConfig",
    should_retry: Callable[[Exception], bool] = is_retryable,
) -> T:
    """Execute function with exponential backoff retry.

    Args:
        func: Async function to execute (no arguments).
        config: Provider configuration with retry settings.
        should_retry: Predicate deciding whether an error triggers a retry.

    Returns:
        Result from successful function execution.

    Raises:
        TransportError: If all attempts failed to reach the provider.
        UpstreamError: If all attempts were rejected by the provider, or the
            first rejection was not retryable.
    """
    attempts = config.max_retries + 1

    for attempt in range(attempts):
        try:
            return await func()
        except (TransportError, UpstreamError) as e:
            if attempt == config.max_retries or not should_retry(e):
                raise

            base_delay = config.retry_base_delay_ms * (2**attempt)
            jitter = random.uniform(0, base_delay * 0.1)
            delay = min(base_delay + jitter, config.retry_max_delay_ms) / 1000

            logger.warning(
                "Provider error (attempt %d/%d): %s. Retrying in %.2fs",
                attempt + 1,
                attempts,
                type(e).__name__,
                delay,
            )

            await asyncio.sleep(delay)

    # Should not reach here, but satisfy type checker
    raise RuntimeError("Retry loop exited without error or result")

"""Caller-side retry policy for sync steps.

PageFetcher never retries. A caller that wants to ride out network blips
or rate limits wraps a whole step in ``RetryPolicy.run``; the step is
repeated with the same continuation, so no page is skipped or repeated.
"""

import logging
import time
from collections.abc import Callable
from typing import TypeVar

from ..github_client.errors import RemoteRejectedError, TransientFetchError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy:
    """Exponential backoff for transient and rate-limited failures.

    Authorization and validation rejections are raised immediately.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.sleep = sleep

    def should_retry(self, error: Exception) -> bool:
        if isinstance(error, TransientFetchError):
            return True
        return isinstance(error, RemoteRejectedError) and error.is_rate_limited

    def delay_for(self, attempt: int, error: Exception) -> float:
        """Seconds to wait after the given (zero based) failed attempt."""
        retry_after = getattr(error, "retry_after", None)
        if retry_after is not None:
            return min(retry_after, self.max_delay)
        return min(self.base_delay * (2**attempt), self.max_delay)

    def run(self, fn: Callable[..., T], *args: object, **kwargs: object) -> T:
        """Call ``fn`` until it succeeds or the error is not retryable.

        Raises:
            The last error once attempts are exhausted, or any error that
            is not retryable
        """
        for attempt in range(self.max_attempts):
            try:
                return fn(*args, **kwargs)
            except (TransientFetchError, RemoteRejectedError) as e:
                if not self.should_retry(e) or attempt == self.max_attempts - 1:
                    raise
                delay = self.delay_for(attempt, e)
                logger.warning(
                    "Attempt %d/%d failed: %s. Retrying in %.1fs...",
                    attempt + 1,
                    self.max_attempts,
                    e,
                    delay,
                )
                self.sleep(delay)
        raise RuntimeError("Max retries exceeded")

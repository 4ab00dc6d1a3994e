from __future__ import annotations

import logging
import time
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryError(RuntimeError):
    """Raised when every attempt of a retried operation has failed."""

    def __init__(self, max_attempts: int, last_error: BaseException) -> None:
        super().__init__(f"All {max_attempts} attempts failed. Last error: {last_error}")
        self.max_attempts = max_attempts
        self.last_error = last_error


class RetryExecutor:
    """Run a callable a bounded number of times with a fixed, blocking delay.

    Any value the operation returns counts as success. Callers signal a
    retryable failure by raising from inside the operation.
    """

    def __init__(self, sleep: Callable[[float], None] = time.sleep) -> None:
        self._sleep = sleep

    def run(self, operation: Callable[[], T], max_attempts: int = 3, delay: float = 5) -> T:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

        for attempt in range(1, max_attempts + 1):
            try:
                return operation()
            except Exception as exc:  # noqa: BLE001
                if attempt >= max_attempts:
                    logger.error("Attempt %d/%d failed: %s", attempt, max_attempts, exc)
                    raise RetryError(max_attempts, exc) from exc
                logger.warning(
                    "Attempt %d/%d failed: %s. Retrying in %ss...",
                    attempt,
                    max_attempts,
                    exc,
                    delay,
                )
                self._sleep(delay)

        raise AssertionError("unreachable")


r"""Retry policy bounded by elapsed time."""

from __future__ import annotations

__all__ = ["TimeoutRetryPolicy"]

import time
from typing import TYPE_CHECKING

from aretry.core.config import DEFAULT_TIMEOUT
from aretry.policy.base import RetryPolicy

if TYPE_CHECKING:
    from aretry.context import RetryContext

# Context attribute holding the monotonic start time
START = "timeout.start"


class TimeoutRetryPolicy(RetryPolicy):
    """Retry until a time budget, measured from ``open``, is spent.

    The first attempt is always permitted. The budget is checked before
    each further attempt; a running attempt is never interrupted.

    Args:
        timeout: The time budget in seconds (default: 1.0). Must be > 0.

    Raises:
        ValueError: If ``timeout`` is not positive.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        if timeout <= 0:
            msg = f"timeout must be > 0, got {timeout}"
            raise ValueError(msg)
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(timeout={self.timeout})"

    def open(self, parent: RetryContext | None) -> RetryContext:
        context = super().open(parent)
        context.set_attribute(START, time.monotonic())
        return context

    def can_retry(self, context: RetryContext) -> bool:
        if context.retry_count == 0:
            return True
        return time.monotonic() - context.get_attribute(START) < self.timeout

r"""Uniform random backoff policy."""

from __future__ import annotations

__all__ = ["UniformRandomBackOffPolicy"]

import random
from typing import TYPE_CHECKING, Any

from aretry.backoff.base import SleepingBackOffPolicy

if TYPE_CHECKING:
    from aretry.backoff.sleeper import Sleeper


class UniformRandomBackOffPolicy(SleepingBackOffPolicy):
    """Pause for a random delay drawn uniformly between two bounds.

    Randomized pauses keep concurrent clients from retrying in lockstep.

    Args:
        min_delay: Lower bound in seconds (default: 0.5). Must be >= 0.
        max_delay: Upper bound in seconds (default: 1.5). Must be
            >= ``min_delay``.
        sleeper: Optional sleeper performing the wait.

    Raises:
        ValueError: If the bounds are invalid.
    """

    def __init__(
        self, min_delay: float = 0.5, max_delay: float = 1.5, sleeper: Sleeper | None = None
    ) -> None:
        if min_delay < 0:
            msg = f"min_delay must be non-negative, got {min_delay}"
            raise ValueError(msg)
        if max_delay < min_delay:
            msg = f"max_delay must be >= min_delay ({min_delay}), got {max_delay}"
            raise ValueError(msg)
        super().__init__(sleeper)
        self.min_delay = min_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(min_delay={self.min_delay}, max_delay={self.max_delay})"

    def pause(self, state: Any) -> None:  # noqa: ARG002
        self.sleep(random.uniform(self.min_delay, self.max_delay))  # noqa: S311

r"""Exponential backoff policy."""

from __future__ import annotations

__all__ = ["ExponentialBackOffPolicy", "ExponentialBackOffState"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

from aretry.backoff.base import SleepingBackOffPolicy
from aretry.core.config import (
    DEFAULT_INITIAL_INTERVAL,
    DEFAULT_MAX_INTERVAL,
    DEFAULT_MULTIPLIER,
)
from aretry.core.validation import validate_backoff_params

if TYPE_CHECKING:
    from aretry.backoff.sleeper import Sleeper
    from aretry.context import RetryContext


@dataclass
class ExponentialBackOffState:
    """Backoff state of one execution.

    Attributes:
        interval: The pause to apply on the next ``pause`` call.
        multiplier: Growth factor applied after each pause.
        max_interval: Cap on any pause.
    """

    interval: float
    multiplier: float
    max_interval: float

    def next_interval(self) -> float:
        """Return the current pause and advance to the next one."""
        current = self.interval
        self.interval = min(self.interval * self.multiplier, self.max_interval)
        return current


class ExponentialBackOffPolicy(SleepingBackOffPolicy):
    """Exponential backoff policy.

    The n-th pause of an execution lasts
    ``min(initial_interval * multiplier ** (n - 1), max_interval)``
    seconds. The growing interval is kept in the backoff state, so the
    policy itself can be shared between executions.

    Args:
        initial_interval: The first pause in seconds (default: 0.1).
        multiplier: Growth factor between pauses (default: 2.0).
        max_interval: Cap on any pause in seconds (default: 30.0).
        sleeper: Optional sleeper performing the wait.

    Example:
        ```pycon
        >>> from unittest.mock import Mock
        >>> from aretry.backoff import ExponentialBackOffPolicy
        >>> sleeper = Mock()
        >>> policy = ExponentialBackOffPolicy(initial_interval=1.0, max_interval=5.0, sleeper=sleeper)
        >>> state = policy.start(None)
        >>> for _ in range(4):
        ...     policy.pause(state)
        ...
        >>> [call.args[0] for call in sleeper.sleep.call_args_list]
        [1.0, 2.0, 4.0, 5.0]

        ```
    """

    def __init__(
        self,
        initial_interval: float = DEFAULT_INITIAL_INTERVAL,
        multiplier: float = DEFAULT_MULTIPLIER,
        max_interval: float = DEFAULT_MAX_INTERVAL,
        sleeper: Sleeper | None = None,
    ) -> None:
        validate_backoff_params(
            initial_interval=initial_interval, multiplier=multiplier, max_interval=max_interval
        )
        super().__init__(sleeper)
        self.initial_interval = initial_interval
        self.multiplier = multiplier
        self.max_interval = max_interval

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(initial_interval={self.initial_interval}, "
            f"multiplier={self.multiplier}, max_interval={self.max_interval})"
        )

    def start(self, context: RetryContext) -> ExponentialBackOffState:  # noqa: ARG002
        return ExponentialBackOffState(
            interval=min(self.initial_interval, self.max_interval),
            multiplier=self.multiplier,
            max_interval=self.max_interval,
        )

    def pause(self, state: ExponentialBackOffState) -> None:
        self.sleep(state.next_interval())

r"""Fixed backoff policy."""

from __future__ import annotations

__all__ = ["FixedBackOffPolicy"]

from typing import TYPE_CHECKING, Any

from aretry.backoff.base import SleepingBackOffPolicy
from aretry.core.config import DEFAULT_BACKOFF_DELAY

if TYPE_CHECKING:
    from aretry.backoff.sleeper import Sleeper


class FixedBackOffPolicy(SleepingBackOffPolicy):
    """Pause for the same delay before every retry.

    Args:
        delay: The pause in seconds (default: 1.0). Must be >= 0.
        sleeper: Optional sleeper performing the wait.

    Raises:
        ValueError: If ``delay`` is negative.

    Example:
        ```pycon
        >>> from unittest.mock import Mock
        >>> from aretry.backoff import FixedBackOffPolicy
        >>> sleeper = Mock()
        >>> policy = FixedBackOffPolicy(delay=2.5, sleeper=sleeper)
        >>> policy.pause(policy.start(None))
        >>> sleeper.sleep.call_args.args
        (2.5,)

        ```
    """

    def __init__(self, delay: float = DEFAULT_BACKOFF_DELAY, sleeper: Sleeper | None = None) -> None:
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)
        super().__init__(sleeper)
        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(delay={self.delay})"

    def pause(self, state: Any) -> None:  # noqa: ARG002
        self.sleep(self.delay)

r"""Abstract base classes for backoff policies."""

from __future__ import annotations

__all__ = ["BackOffPolicy", "SleepingBackOffPolicy", "StatelessBackOffPolicy"]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from aretry.backoff.sleeper import ThreadWaitSleeper

if TYPE_CHECKING:
    from aretry.backoff.sleeper import Sleeper
    from aretry.context import RetryContext

logger: logging.Logger = logging.getLogger(__name__)


class BackOffPolicy(ABC):
    """Abstract base class for backoff policies.

    A backoff policy decides how long to pause between a failed attempt
    and the next one. ``start`` is called once per execution, before the
    first attempt, and returns an opaque state passed to every ``pause``
    of that execution.
    """

    def start(self, context: RetryContext) -> Any:  # noqa: ARG002
        """Begin a new execution.

        Args:
            context: The context of the execution.

        Returns:
            The backoff state of the execution, or ``None``.
        """
        return None

    @abstractmethod
    def pause(self, state: Any) -> None:
        """Pause before the next attempt.

        Args:
            state: The value returned by ``start`` for this execution.

        Raises:
            BackOffInterruptedError: If the pause is interrupted.
        """


class StatelessBackOffPolicy(BackOffPolicy):
    """Backoff policy that keeps no per-execution state."""

    def pause(self, state: Any) -> None:  # noqa: ARG002
        self.pause_once()

    @abstractmethod
    def pause_once(self) -> None:
        """Perform a single pause."""


class SleepingBackOffPolicy(BackOffPolicy):
    """Backoff policy delegating the blocking wait to a ``Sleeper``.

    Args:
        sleeper: The sleeper to use. Defaults to ``ThreadWaitSleeper()``.
    """

    def __init__(self, sleeper: Sleeper | None = None) -> None:
        self.sleeper: Sleeper = sleeper if sleeper is not None else ThreadWaitSleeper()

    def with_sleeper(self, sleeper: Sleeper) -> SleepingBackOffPolicy:
        """Set the sleeper and return the policy itself."""
        self.sleeper = sleeper
        return self

    def sleep(self, seconds: float) -> None:
        logger.debug(f"Waiting {seconds:.2f}s before retry")
        self.sleeper.sleep(seconds)

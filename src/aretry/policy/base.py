r"""Abstract base class for retry policies."""

from __future__ import annotations

__all__ = ["RetryPolicy"]

from abc import ABC, abstractmethod

from aretry.context import RetryContext


class RetryPolicy(ABC):
    """Decision authority for whether another attempt is permitted.

    A policy is stateless and reentrant: everything that changes during
    an execution lives in the ``RetryContext`` returned by ``open``, so
    one policy instance can serve any number of concurrent or nested
    executions.
    """

    @property
    def max_attempts(self) -> int | None:
        """The maximum number of attempts, or ``None`` if unbounded."""
        return None

    def open(self, parent: RetryContext | None) -> RetryContext:
        """Create the context of a new execution.

        Args:
            parent: The context of the enclosing execution, if any.

        Returns:
            A new context whose ``parent`` is ``parent``.
        """
        return RetryContext(parent)

    @abstractmethod
    def can_retry(self, context: RetryContext) -> bool:
        """Indicate whether another attempt is permitted.

        This method has no side effect and only reflects the failures
        registered so far.

        Args:
            context: The context of the running execution.

        Returns:
            ``True`` if another attempt may be made.
        """

    def register_throwable(self, context: RetryContext, throwable: BaseException | None) -> None:
        """Record the outcome of an attempt.

        Args:
            context: The context of the running execution.
            throwable: The failure of the attempt, or ``None`` to record a
                clean completion.
        """
        context.register_throwable(throwable)

    def close(self, context: RetryContext) -> None:  # noqa: B027
        """Release any resource held for the execution.

        Args:
            context: The context of the terminated execution.
        """

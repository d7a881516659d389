r"""Listener manager orchestrating the retry lifecycle hooks.

This module provides the ListenerManager class that invokes the
registered retry listeners at the various points of an execution.
"""

from __future__ import annotations

__all__ = ["ListenerManager"]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from aretry.context import RetryContext
    from aretry.listener import RetryListener


class ListenerManager:
    """Manages listener invocations during the retry lifecycle.

    ``open`` hooks run in registration order; ``on_success``,
    ``on_error`` and ``close`` hooks run in reverse order, so the first
    registered listener wraps all the others.

    Args:
        listeners: The listeners to notify.

    Attributes:
        listeners: The registered listeners.
    """

    def __init__(self, listeners: Iterable[RetryListener] = ()) -> None:
        self.listeners: list[RetryListener] = list(listeners)

    def __len__(self) -> int:
        return len(self.listeners)

    def register(self, listener: RetryListener) -> None:
        """Append a listener.

        Args:
            listener: The listener to add.
        """
        self.listeners.append(listener)

    def open(self, context: RetryContext, work: Callable[[RetryContext], Any]) -> bool:
        """Invoke every ``open`` hook.

        All hooks run even after a veto.

        Returns:
            ``False`` if at least one listener vetoed the execution.
        """
        result = True
        for listener in self.listeners:
            result = listener.open(context, work) and result
        return result

    def close(
        self,
        context: RetryContext,
        work: Callable[[RetryContext], Any],
        error: BaseException | None,
    ) -> None:
        """Invoke every ``close`` hook."""
        for listener in reversed(self.listeners):
            listener.close(context, work, error)

    def on_success(self, context: RetryContext, work: Callable[[RetryContext], Any], result: Any) -> None:
        """Invoke every ``on_success`` hook."""
        for listener in reversed(self.listeners):
            listener.on_success(context, work, result)

    def on_error(
        self,
        context: RetryContext,
        work: Callable[[RetryContext], Any],
        error: BaseException,
    ) -> None:
        """Invoke every ``on_error`` hook."""
        for listener in reversed(self.listeners):
            listener.on_error(context, work, error)

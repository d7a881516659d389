r"""Listener types for observing the retry lifecycle.

This module provides the ``RetryListener`` base class, enabling users
to hook into the retry lifecycle for logging, alerting and result
validation.

The listener system provides four hooks:
- open: Called before the first attempt; returning ``False`` vetoes the execution
- on_success: Called when an attempt succeeds; raising turns it into a failure
- on_error: Called after each failed attempt
- close: Called once when the execution terminates

Example:
    ```pycon
    >>> from aretry import RetryTemplate
    >>> from aretry.listener import RetryListener
    >>> class RejectEmpty(RetryListener):
    ...     def on_success(self, context, work, result):
    ...         if not result:
    ...             raise ValueError("empty result")
    ...
    >>> results = iter(["", "data"])
    >>> RetryTemplate(listeners=[RejectEmpty()]).execute(lambda context: next(results))
    'data'

    ```
"""

from __future__ import annotations

__all__ = ["LoggingRetryListener", "RetryListener"]

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.context import RetryContext

logger: logging.Logger = logging.getLogger(__name__)


class RetryListener:
    """Base class for retry listeners.

    All hooks do nothing by default; subclasses override the ones they
    need.
    """

    def open(self, context: RetryContext, work: Callable[[RetryContext], Any]) -> bool:  # noqa: ARG002
        """Called before the first attempt.

        Args:
            context: The context of the execution.
            work: The work being executed.

        Returns:
            ``False`` to veto the whole execution.
        """
        return True

    def close(
        self,
        context: RetryContext,
        work: Callable[[RetryContext], Any],
        error: BaseException | None,
    ) -> None:
        """Called once when the execution terminates.

        Args:
            context: The context of the execution.
            work: The work that was executed.
            error: The last failure, or ``None`` on success.
        """

    def on_success(self, context: RetryContext, work: Callable[[RetryContext], Any], result: Any) -> None:
        """Called after each successful attempt.

        Raising an exception rejects the result: the attempt is then
        handled as if the work had raised it.

        Args:
            context: The context of the execution.
            work: The work being executed.
            result: The value returned by the work.
        """

    def on_error(
        self,
        context: RetryContext,
        work: Callable[[RetryContext], Any],
        error: BaseException,
    ) -> None:
        """Called after each failed attempt.

        Args:
            context: The context of the execution.
            work: The work being executed.
            error: The failure of the attempt.
        """


class LoggingRetryListener(RetryListener):
    """Listener logging every lifecycle event.

    Args:
        logger: The logger to use. Defaults to this module's logger.
        level: The level of the emitted records (default: DEBUG).
    """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.DEBUG) -> None:
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.level = level

    def open(self, context: RetryContext, work: Callable[[RetryContext], Any]) -> bool:
        self.logger.log(self.level, f"Opening retry execution of {_name(work)}")
        return True

    def close(
        self,
        context: RetryContext,
        work: Callable[[RetryContext], Any],
        error: BaseException | None,
    ) -> None:
        if error is None:
            self.logger.log(
                self.level,
                f"Closing retry execution of {_name(work)} after {context.retry_count} failure(s)",
            )
        else:
            self.logger.log(
                self.level,
                f"Closing retry execution of {_name(work)} after {context.retry_count} failure(s), "
                f"last error: {type(error).__name__}: {error}",
            )

    def on_success(self, context: RetryContext, work: Callable[[RetryContext], Any], result: Any) -> None:
        self.logger.log(
            self.level, f"{_name(work)} succeeded on attempt {context.retry_count + 1}"
        )

    def on_error(
        self,
        context: RetryContext,
        work: Callable[[RetryContext], Any],
        error: BaseException,
    ) -> None:
        self.logger.log(
            self.level,
            f"{_name(work)} failed on attempt {context.retry_count}: {type(error).__name__}: {error}",
        )


def _name(work: Callable[..., Any]) -> str:
    return getattr(work, "__qualname__", None) or repr(work)

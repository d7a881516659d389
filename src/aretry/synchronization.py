r"""Tracking of the active retry context.

The active context is stored in a context variable, so it is local to
the current thread and to the current asyncio task. Nested executions
on the same call chain see their ancestors, while unrelated executions
running concurrently never observe each other.

Example:
    ```pycon
    >>> from aretry.context import RetryContext
    >>> from aretry.synchronization import active_context, get_context
    >>> get_context() is None
    True
    >>> context = RetryContext()
    >>> with active_context(context):
    ...     get_context() is context
    ...
    True
    >>> get_context() is None
    True

    ```
"""

from __future__ import annotations

__all__ = ["active_context", "clear_context", "get_context", "register_context"]

import contextvars
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

    from aretry.context import RetryContext

_current_context: contextvars.ContextVar[RetryContext | None] = contextvars.ContextVar(
    "retry_context", default=None
)


def get_context() -> RetryContext | None:
    """Get the retry context of the innermost running execution.

    Returns:
        The active context, or ``None`` outside of any execution.
    """
    return _current_context.get()


def register_context(context: RetryContext) -> contextvars.Token:
    """Make ``context`` the active context.

    Args:
        context: The context to activate.

    Returns:
        A token that restores the previously active context when passed
        to ``clear_context``.
    """
    return _current_context.set(context)


def clear_context(token: contextvars.Token) -> None:
    """Restore the context that was active before ``register_context``.

    Args:
        token: The token returned by the matching ``register_context``.
    """
    _current_context.reset(token)


@contextmanager
def active_context(context: RetryContext) -> Generator[RetryContext, None, None]:
    """Activate ``context`` for the duration of a ``with`` block.

    Args:
        context: The context to activate.

    Yields:
        The activated context.
    """
    token = register_context(context)
    try:
        yield context
    finally:
        clear_context(token)

r"""Per-execution retry context.

A ``RetryContext`` is created by a retry policy when an execution
starts, and carries everything that changes while the execution runs:
the number of registered failures, the last failure, the early
termination flag, and an attribute bag where policies and the template
keep their own state.
"""

from __future__ import annotations

__all__ = [
    "CLOSED",
    "EXHAUSTED",
    "MAX_ATTEMPTS",
    "NAME",
    "RECOVERED",
    "STATE_KEY",
    "RetryContext",
]

from typing import Any

# Well-known attribute names
NAME = "context.name"
STATE_KEY = "context.state"
CLOSED = "context.closed"
RECOVERED = "context.recovered"
EXHAUSTED = "context.exhausted"
MAX_ATTEMPTS = "context.max-attempts"


class RetryContext:
    """Mutable record of one retry execution.

    The parent reference forms a chain from a nested execution up to the
    outermost one. It is read-only: a nested execution can inspect its
    ancestors but never rebind them.

    Args:
        parent: The context of the enclosing execution, if any.

    Example:
        ```pycon
        >>> from aretry.context import RetryContext
        >>> outer = RetryContext()
        >>> inner = RetryContext(parent=outer)
        >>> inner.parent is outer
        True
        >>> inner.register_throwable(ValueError("boom"))
        >>> inner.retry_count
        1
        >>> inner.last_throwable
        ValueError('boom')

        ```
    """

    def __init__(self, parent: RetryContext | None = None) -> None:
        self._parent = parent
        self._count = 0
        self._last_throwable: BaseException | None = None
        self._terminate = False
        self._attributes: dict[str, Any] = {}

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(retry_count={self._count}, "
            f"last_throwable={self._last_throwable!r}, "
            f"exhausted_only={self._terminate})"
        )

    @property
    def parent(self) -> RetryContext | None:
        """The context of the enclosing execution, or ``None``."""
        return self._parent

    @property
    def retry_count(self) -> int:
        """The number of failures registered so far."""
        return self._count

    @property
    def last_throwable(self) -> BaseException | None:
        """The last registered failure, or ``None``."""
        return self._last_throwable

    def set_exhausted_only(self) -> None:
        """Signal that no further attempt should be made.

        The current attempt still completes; the template stops once its
        outcome is known.
        """
        self._terminate = True

    def is_exhausted_only(self) -> bool:
        """Indicate whether ``set_exhausted_only`` was called."""
        return self._terminate

    def register_throwable(self, throwable: BaseException | None) -> None:
        """Record a failure.

        Args:
            throwable: The failure. ``None`` leaves the counters unchanged.
        """
        self._last_throwable = throwable
        if throwable is not None:
            self._count += 1

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self._attributes.get(name, default)

    def set_attribute(self, name: str, value: Any) -> None:
        self._attributes[name] = value

    def has_attribute(self, name: str) -> bool:
        return name in self._attributes

    def remove_attribute(self, name: str) -> Any:
        return self._attributes.pop(name, None)

    def attribute_names(self) -> list[str]:
        return list(self._attributes)

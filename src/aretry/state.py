r"""Retry state for keyed (stateful) executions.

A retry state identifies the logical operation being retried. When it
is passed to ``RetryTemplate.execute``, the retry context survives
between calls that share the same key, and failures that require a
rollback propagate immediately instead of being retried in place.
"""

from __future__ import annotations

__all__ = ["DefaultRetryState", "RetryState"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable


class RetryState(ABC):
    """Identity and rollback classification of a stateful operation."""

    @property
    @abstractmethod
    def key(self) -> Hashable:
        """The key identifying the logical operation."""

    @property
    def force_refresh(self) -> bool:
        """Indicate whether a cached context must be ignored."""
        return False

    @abstractmethod
    def rollback_for(self, exc: BaseException) -> bool:
        """Indicate whether ``exc`` requires a rollback.

        Args:
            exc: The failure raised by the current attempt.

        Returns:
            ``True`` if the failure must propagate immediately.
        """


class DefaultRetryState(RetryState):
    r"""Immutable retry state built from a key and an optional
    classifier.

    Args:
        key: The key identifying the operation.
        classifier: Optional predicate returning ``True`` for failures
            that require a rollback. Without a classifier every failure
            requires a rollback.
        force_refresh: If ``True``, a fresh context is opened even when
            one is cached for ``key``.

    Example:
        ```pycon
        >>> from aretry.classifier import BinaryExceptionClassifier
        >>> from aretry.state import DefaultRetryState
        >>> state = DefaultRetryState(
        ...     "order-42", BinaryExceptionClassifier.non_retryable(ValueError)
        ... )
        >>> state.key
        'order-42'
        >>> state.rollback_for(ValueError())
        False
        >>> state.rollback_for(RuntimeError())
        True

        ```
    """

    __slots__ = ("_classifier", "_force_refresh", "_key")

    def __init__(
        self,
        key: Hashable,
        classifier: Callable[[BaseException], bool] | None = None,
        force_refresh: bool = False,
    ) -> None:
        object.__setattr__(self, "_key", key)
        object.__setattr__(self, "_classifier", classifier)
        object.__setattr__(self, "_force_refresh", force_refresh)

    def __setattr__(self, name: str, value: Any) -> None:
        msg = f"{self.__class__.__name__} is immutable"
        raise AttributeError(msg)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(key={self._key!r}, force_refresh={self._force_refresh})"

    @property
    def key(self) -> Hashable:
        return self._key

    @property
    def force_refresh(self) -> bool:
        return self._force_refresh

    def rollback_for(self, exc: BaseException) -> bool:
        if self._classifier is None:
            return True
        return bool(self._classifier(exc))

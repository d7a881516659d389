r"""In-memory cache of retry contexts for keyed executions.

When ``RetryTemplate.execute`` is given a ``RetryState``, the context of
a failed attempt is stored here under the state key, and the next call
with the same key resumes counting from it.
"""

from __future__ import annotations

__all__ = ["DEFAULT_CAPACITY", "MapRetryContextCache"]

import logging
import threading
from typing import TYPE_CHECKING

from aretry.exceptions import RetryCacheCapacityExceededError

if TYPE_CHECKING:
    from collections.abc import Hashable

    from aretry.context import RetryContext

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 4096


class MapRetryContextCache:
    r"""Thread-safe map from retry state key to retry context.

    The capacity guards against unbounded growth when keys are not
    stable (for instance built from objects without a proper hash).

    Args:
        capacity: Maximum number of cached contexts. Must be > 0.

    Raises:
        ValueError: If ``capacity`` is not positive.

    Example:
        ```pycon
        >>> from aretry.cache import MapRetryContextCache
        >>> from aretry.context import RetryContext
        >>> cache = MapRetryContextCache(capacity=1)
        >>> cache.put("a", RetryContext())
        >>> cache.contains_key("a")
        True
        >>> cache.put("b", RetryContext())
        Traceback (most recent call last):
            ...
        aretry.exceptions.RetryCacheCapacityExceededError: Retry cache capacity limit breached (1), check that retry state keys are stable

        ```
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            msg = f"capacity must be > 0, got {capacity}"
            raise ValueError(msg)
        self.capacity = capacity
        self._contexts: dict[Hashable, RetryContext] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._contexts)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(capacity={self.capacity}, size={len(self)})"

    def get(self, key: Hashable) -> RetryContext | None:
        with self._lock:
            return self._contexts.get(key)

    def put(self, key: Hashable, context: RetryContext) -> None:
        """Store a context.

        Args:
            key: The retry state key.
            context: The context to store.

        Raises:
            RetryCacheCapacityExceededError: If a new key would exceed
                the capacity.
        """
        with self._lock:
            if key not in self._contexts and len(self._contexts) >= self.capacity:
                msg = f"Retry cache capacity limit breached ({self.capacity}), check that retry state keys are stable"
                raise RetryCacheCapacityExceededError(msg)
            self._contexts[key] = context

    def remove(self, key: Hashable) -> None:
        with self._lock:
            if self._contexts.pop(key, None) is not None:
                logger.debug(f"Evicted retry context for key {key!r}")

    def contains_key(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._contexts

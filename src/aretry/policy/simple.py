r"""Retry policy bounded by an attempt count and an exception table."""

from __future__ import annotations

__all__ = ["SimpleRetryPolicy"]

import logging
from typing import TYPE_CHECKING

from aretry.classifier import BinaryExceptionClassifier
from aretry.core.config import DEFAULT_MAX_ATTEMPTS
from aretry.core.validation import validate_max_attempts
from aretry.policy.base import RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Mapping

    from aretry.context import RetryContext

logger: logging.Logger = logging.getLogger(__name__)

# Context attribute holding the classification of the last failure
RETRYABLE = "simple.retryable"


class SimpleRetryPolicy(RetryPolicy):
    r"""Retry a bounded number of times for classified exceptions.

    Each registered failure is classified with a
    ``BinaryExceptionClassifier``: the entry of the most specific
    exception type wins, so a fatal entry for a subclass overrides a
    retryable entry for one of its ancestors and vice versa. The result
    is stored in the context; a ``None`` failure leaves it unchanged.

    Another attempt is permitted when the last classified failure is
    retryable and fewer than ``max_attempts`` failures were registered.
    Before any failure the policy always permits an attempt, whatever
    ``max_attempts`` is.

    Args:
        max_attempts: The maximum number of attempts (default: 3).
        retryable_exceptions: Mapping from exception type to its
            retryable flag. ``None`` retries every ``Exception``.
        traverse_causes: If ``True``, the causal chain of a failure is
            searched when the failure itself matches no entry.
        default_value: Classification used when nothing matches.
        match_subclasses: If ``True``, an entry also applies to
            subclasses of its type.

    Raises:
        ValueError: If ``max_attempts`` is negative.

    Example:
        ```pycon
        >>> from aretry.policy import SimpleRetryPolicy
        >>> policy = SimpleRetryPolicy(max_attempts=2)
        >>> context = policy.open(None)
        >>> policy.can_retry(context)
        True
        >>> policy.register_throwable(context, RuntimeError("boom"))
        >>> policy.can_retry(context)
        True
        >>> policy.register_throwable(context, RuntimeError("boom"))
        >>> policy.can_retry(context)
        False

        ```
    """

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retryable_exceptions: Mapping[type[BaseException], bool] | None = None,
        traverse_causes: bool = False,
        default_value: bool = False,
        match_subclasses: bool = True,
    ) -> None:
        validate_max_attempts(max_attempts)
        self._max_attempts = max_attempts
        if retryable_exceptions is None:
            retryable_exceptions = {Exception: True}
        self.classifier = BinaryExceptionClassifier(
            retryable_exceptions,
            default_value=default_value,
            traverse_causes=traverse_causes,
            match_subclasses=match_subclasses,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(max_attempts={self._max_attempts}, classifier={self.classifier})"

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def set_max_attempts(self, max_attempts: int) -> None:
        """Change the maximum number of attempts.

        Args:
            max_attempts: The new maximum. Must be >= 0.
        """
        validate_max_attempts(max_attempts)
        self._max_attempts = max_attempts

    def can_retry(self, context: RetryContext) -> bool:
        if context.retry_count == 0:
            return True
        return context.get_attribute(RETRYABLE, True) and context.retry_count < self._max_attempts

    def register_throwable(self, context: RetryContext, throwable: BaseException | None) -> None:
        super().register_throwable(context, throwable)
        if throwable is None:
            return
        retryable = self.classifier.classify(throwable)
        context.set_attribute(RETRYABLE, retryable)
        logger.debug(
            f"Registered {type(throwable).__name__} as {'retryable' if retryable else 'fatal'} "
            f"(attempt {context.retry_count}/{self._max_attempts})"
        )

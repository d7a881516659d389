r"""Retry policy allowing exactly one attempt."""

from __future__ import annotations

__all__ = ["NeverRetryPolicy"]

from typing import TYPE_CHECKING

from aretry.policy.base import RetryPolicy

if TYPE_CHECKING:
    from aretry.context import RetryContext

# Context attribute set once any outcome was registered
FINISHED = "never.finished"


class NeverRetryPolicy(RetryPolicy):
    """Allow the first attempt and nothing after it.

    ``can_retry`` is ``True`` until ``register_throwable`` is called
    once, with a failure or with ``None``, and ``False`` from then on.

    Example:
        ```pycon
        >>> from aretry.policy import NeverRetryPolicy
        >>> policy = NeverRetryPolicy()
        >>> context = policy.open(None)
        >>> policy.can_retry(context)
        True
        >>> policy.register_throwable(context, None)
        >>> policy.can_retry(context)
        False

        ```
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    @property
    def max_attempts(self) -> int:
        return 1

    def can_retry(self, context: RetryContext) -> bool:
        return not context.get_attribute(FINISHED, False)

    def register_throwable(self, context: RetryContext, throwable: BaseException | None) -> None:
        super().register_throwable(context, throwable)
        context.set_attribute(FINISHED, True)

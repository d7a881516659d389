r"""Retry policy combining several delegate policies."""

from __future__ import annotations

__all__ = ["CompositeRetryPolicy"]

from typing import TYPE_CHECKING

from aretry.policy.base import RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Sequence

    from aretry.context import RetryContext

# Context attribute holding one child context per delegate
CHILDREN = "composite.children"


class CompositeRetryPolicy(RetryPolicy):
    r"""Combine the decisions of several retry policies.

    Each delegate gets its own child context, kept in the composite
    context, so delegates never see each other's state.

    Args:
        policies: The delegate policies.
        optimistic: If ``True``, retry while any delegate permits it.
            Otherwise (the default) retry only while all of them do.

    Example:
        ```pycon
        >>> from aretry.policy import CompositeRetryPolicy, SimpleRetryPolicy, TimeoutRetryPolicy
        >>> policy = CompositeRetryPolicy([SimpleRetryPolicy(5), TimeoutRetryPolicy(10.0)])
        >>> policy.max_attempts
        5

        ```
    """

    def __init__(self, policies: Sequence[RetryPolicy], optimistic: bool = False) -> None:
        self.policies = tuple(policies)
        self.optimistic = optimistic

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(policies={list(self.policies)}, optimistic={self.optimistic})"

    @property
    def max_attempts(self) -> int | None:
        bounds = [p.max_attempts for p in self.policies if p.max_attempts is not None]
        if not bounds or (self.optimistic and len(bounds) < len(self.policies)):
            return None
        return max(bounds) if self.optimistic else min(bounds)

    def open(self, parent: RetryContext | None) -> RetryContext:
        context = super().open(parent)
        context.set_attribute(CHILDREN, [policy.open(parent) for policy in self.policies])
        return context

    def can_retry(self, context: RetryContext) -> bool:
        decisions = (
            policy.can_retry(child)
            for policy, child in zip(self.policies, context.get_attribute(CHILDREN))
        )
        return any(decisions) if self.optimistic else all(decisions)

    def register_throwable(self, context: RetryContext, throwable: BaseException | None) -> None:
        for policy, child in zip(self.policies, context.get_attribute(CHILDREN)):
            policy.register_throwable(child, throwable)
        super().register_throwable(context, throwable)

    def close(self, context: RetryContext) -> None:
        error: Exception | None = None
        for policy, child in zip(self.policies, context.get_attribute(CHILDREN)):
            try:
                policy.close(child)
            except Exception as exc:  # noqa: BLE001
                if error is None:
                    error = exc
        if error is not None:
            raise error

r"""Retry policy that never gives up."""

from __future__ import annotations

__all__ = ["AlwaysRetryPolicy"]

from typing import TYPE_CHECKING

from aretry.policy.base import RetryPolicy

if TYPE_CHECKING:
    from aretry.context import RetryContext


class AlwaysRetryPolicy(RetryPolicy):
    """Permit an unlimited number of attempts.

    Combine it with ``set_exhausted_only`` or a ``CompositeRetryPolicy``
    to stop the loop; on its own it retries until the work succeeds.
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    def can_retry(self, context: RetryContext) -> bool:  # noqa: ARG002
        return True

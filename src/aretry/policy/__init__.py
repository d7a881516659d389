r"""Retry policies deciding whether another attempt is permitted.

This package provides the ``RetryPolicy`` abstraction and its
implementations: bounded attempts with exception classification,
exactly one attempt, unlimited attempts, a time budget, and a
combination of several policies.
"""

from __future__ import annotations

__all__ = [
    "AlwaysRetryPolicy",
    "CompositeRetryPolicy",
    "NeverRetryPolicy",
    "RetryPolicy",
    "SimpleRetryPolicy",
    "TimeoutRetryPolicy",
]

from aretry.policy.always import AlwaysRetryPolicy
from aretry.policy.base import RetryPolicy
from aretry.policy.composite import CompositeRetryPolicy
from aretry.policy.never import NeverRetryPolicy
from aretry.policy.simple import SimpleRetryPolicy
from aretry.policy.timeout import TimeoutRetryPolicy

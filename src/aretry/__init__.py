r"""aretry - Retry execution engine with pluggable policies.

This package executes a unit of work that may fail under the control of
a retry policy that decides, attempt by attempt, whether another try is
warranted. A backoff policy inserts pauses between attempts and an
optional recovery callback produces a fallback result once the attempts
are exhausted.

Key Features:
    - Pluggable retry policies: bounded attempts with exception
      classification, single attempt, unlimited, time budget, composite
    - Most-specific-type-wins exception classification, optionally
      following the causal chain
    - Backoff policies: none, fixed, exponential, uniform random, with
      interruptible sleepers
    - Nested executions with parent/child context linkage, isolated per
      thread and per asyncio task
    - Keyed (stateful) executions that resume counting across calls
    - Listeners observing and validating every attempt

Example:
    ```pycon
    >>> from aretry import RetryTemplate
    >>> from aretry.backoff import ExponentialBackOffPolicy
    >>> from aretry.policy import SimpleRetryPolicy
    >>> template = RetryTemplate(
    ...     retry_policy=SimpleRetryPolicy(max_attempts=5, retryable_exceptions={OSError: True}),
    ...     backoff_policy=ExponentialBackOffPolicy(initial_interval=0.5),
    ... )
    >>> template.execute(lambda context: "ok")
    'ok'

    ```
"""

from __future__ import annotations

__all__ = [
    "BackOffInterruptedError",
    "DefaultRetryState",
    "ExhaustedRetryError",
    "RetryConfig",
    "RetryContext",
    "RetryError",
    "RetryListener",
    "RetryState",
    "RetryTemplate",
    "TerminatedRetryError",
    "__version__",
    "get_context",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.context import RetryContext
from aretry.core.config import RetryConfig
from aretry.exceptions import (
    BackOffInterruptedError,
    ExhaustedRetryError,
    RetryError,
    TerminatedRetryError,
)
from aretry.listener import RetryListener
from aretry.state import DefaultRetryState, RetryState
from aretry.synchronization import get_context
from aretry.template import RetryTemplate

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"

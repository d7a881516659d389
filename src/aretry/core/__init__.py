r"""Configuration and parameter validation shared by the retry engine."""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_DELAY",
    "DEFAULT_INITIAL_INTERVAL",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MAX_INTERVAL",
    "DEFAULT_MULTIPLIER",
    "DEFAULT_TIMEOUT",
    "RetryConfig",
    "validate_backoff_params",
    "validate_max_attempts",
    "validate_retry_params",
]

from aretry.core.config import (
    DEFAULT_BACKOFF_DELAY,
    DEFAULT_INITIAL_INTERVAL,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_INTERVAL,
    DEFAULT_MULTIPLIER,
    DEFAULT_TIMEOUT,
    RetryConfig,
)
from aretry.core.validation import (
    validate_backoff_params,
    validate_max_attempts,
    validate_retry_params,
)

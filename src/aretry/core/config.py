r"""Configuration dataclass and defaults for RetryTemplate.

This module provides configuration constants and a dataclass-based
configuration object from which a ``RetryTemplate`` can be built.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_DELAY",
    "DEFAULT_INITIAL_INTERVAL",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MAX_INTERVAL",
    "DEFAULT_MULTIPLIER",
    "DEFAULT_TIMEOUT",
    "RetryConfig",
]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from aretry.core.validation import validate_retry_params

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from aretry.backoff.base import BackOffPolicy
    from aretry.listener import RetryListener


# Default maximum number of attempts, the first one included
DEFAULT_MAX_ATTEMPTS = 3

# Default pause of FixedBackOffPolicy in seconds
DEFAULT_BACKOFF_DELAY = 1.0

# Defaults of ExponentialBackOffPolicy
# Pauses are 0.1s, 0.2s, 0.4s, ... capped at 30s
DEFAULT_INITIAL_INTERVAL = 0.1
DEFAULT_MULTIPLIER = 2.0
DEFAULT_MAX_INTERVAL = 30.0

# Default time budget of TimeoutRetryPolicy in seconds
DEFAULT_TIMEOUT = 1.0


@dataclass
class RetryConfig:
    """Configuration for RetryTemplate behavior.

    Args:
        max_attempts: Maximum number of attempts. Must be >= 0.
        retryable_exceptions: Optional mapping from exception type to a
            retryable flag. ``None`` retries every ``Exception``.
        traverse_causes: Whether the causal chain of a failure is used
            for classification.
        default_retryable: Classification of failures that match no
            entry of ``retryable_exceptions``.
        backoff_policy: Optional backoff policy. Defaults to no pause.
        throw_last_exception_on_exhausted: Whether keyed executions raise
            the last failure instead of ``ExhaustedRetryError``.
        listeners: Listeners notified of the retry lifecycle.

    Example:
        ```pycon
        >>> from aretry.core.config import RetryConfig
        >>> config = RetryConfig()  # Use defaults
        >>> config.max_attempts
        3
        >>> merged = config.merge(max_attempts=10)  # Override specific parameters
        >>> merged.max_attempts
        10
        >>> config.max_attempts  # Original unchanged
        3

        ```
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    retryable_exceptions: Mapping[type[BaseException], bool] | None = None
    traverse_causes: bool = False
    default_retryable: bool = False
    backoff_policy: BackOffPolicy | None = None
    throw_last_exception_on_exhausted: bool = False
    listeners: Sequence[RetryListener] = ()

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_retry_params(max_attempts=self.max_attempts)

    def merge(self, **overrides: Any) -> RetryConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new RetryConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary with the configuration parameters.

        Example:
            ```pycon
            >>> from aretry.core.config import RetryConfig
            >>> RetryConfig(max_attempts=5).to_dict()["max_attempts"]
            5

            ```
        """
        return {
            "max_attempts": self.max_attempts,
            "retryable_exceptions": self.retryable_exceptions,
            "traverse_causes": self.traverse_causes,
            "default_retryable": self.default_retryable,
            "backoff_policy": self.backoff_policy,
            "throw_last_exception_on_exhausted": self.throw_last_exception_on_exhausted,
            "listeners": self.listeners,
        }

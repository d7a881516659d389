r"""Parameter validation utilities for the retry engine.

This module provides validation functions for retry and backoff
parameters to ensure they meet the required constraints before a policy
or a template is built from them.
"""

from __future__ import annotations

__all__ = ["validate_backoff_params", "validate_max_attempts", "validate_retry_params"]


def validate_max_attempts(max_attempts: int) -> None:
    """Validate the maximum number of attempts.

    Args:
        max_attempts: Maximum number of attempts. Must be >= 0. A value
            of 0 still allows the first attempt.

    Raises:
        ValueError: If ``max_attempts`` is negative.

    Example:
        ```pycon
        >>> from aretry.core.validation import validate_max_attempts
        >>> validate_max_attempts(3)
        >>> validate_max_attempts(-1)
        Traceback (most recent call last):
        ...
        ValueError: max_attempts must be >= 0, got -1

        ```
    """
    if max_attempts < 0:
        msg = f"max_attempts must be >= 0, got {max_attempts}"
        raise ValueError(msg)


def validate_backoff_params(
    initial_interval: float,
    multiplier: float,
    max_interval: float,
) -> None:
    """Validate exponential backoff parameters.

    Args:
        initial_interval: First pause in seconds. Must be >= 0.
        multiplier: Growth factor between pauses. Must be >= 1.
        max_interval: Cap on any pause in seconds. Must be >= 0.

    Raises:
        ValueError: If any parameter is out of range.

    Example:
        ```pycon
        >>> from aretry.core.validation import validate_backoff_params
        >>> validate_backoff_params(initial_interval=0.1, multiplier=2.0, max_interval=30.0)
        >>> validate_backoff_params(initial_interval=0.1, multiplier=0.5, max_interval=30.0)
        Traceback (most recent call last):
        ...
        ValueError: multiplier must be >= 1, got 0.5

        ```
    """
    if initial_interval < 0:
        msg = f"initial_interval must be >= 0, got {initial_interval}"
        raise ValueError(msg)
    if multiplier < 1:
        msg = f"multiplier must be >= 1, got {multiplier}"
        raise ValueError(msg)
    if max_interval < 0:
        msg = f"max_interval must be >= 0, got {max_interval}"
        raise ValueError(msg)


def validate_retry_params(max_attempts: int, timeout: float | None = None) -> None:
    """Validate retry parameters.

    Args:
        max_attempts: Maximum number of attempts. Must be >= 0.
        timeout: Optional time budget in seconds. Must be > 0 if
            provided.

    Raises:
        ValueError: If ``max_attempts`` is negative or ``timeout`` is
            non-positive.

    Example:
        ```pycon
        >>> from aretry.core import validate_retry_params
        >>> validate_retry_params(max_attempts=3)
        >>> validate_retry_params(max_attempts=3, timeout=30.0)

        ```
    """
    validate_max_attempts(max_attempts)
    if timeout is not None and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)

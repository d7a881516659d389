r"""Exception hierarchy raised by the retry engine.

Failures raised by the work itself are never wrapped into these
classes while attempts remain. The classes below describe the terminal
conditions the engine itself decides on: exhaustion, termination of the
retry sequence by a malfunctioning policy, and interruption of a
backoff pause.
"""

from __future__ import annotations

__all__ = [
    "BackOffInterruptedError",
    "ExhaustedRetryError",
    "RetryCacheCapacityExceededError",
    "RetryError",
    "TerminatedRetryError",
]


class RetryError(RuntimeError):
    """Base class for the errors raised by the retry engine.

    Args:
        message: A descriptive error message.
        cause: The underlying exception, if any. It is also stored as
            ``__cause__`` so that tracebacks show the chain.

    Example:
        ```pycon
        >>> from aretry.exceptions import RetryError
        >>> err = RetryError("boom", cause=ValueError("bad"))
        >>> err.cause
        ValueError('bad')
        >>> err.__cause__ is err.cause
        True

        ```
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class ExhaustedRetryError(RetryError):
    """Raised when no more attempts are permitted and no recovery path
    exists.

    The last failure of the work is available as ``cause``.
    """


class TerminatedRetryError(RetryError):
    """Raised when the retry sequence is terminated abnormally.

    This happens when the retry policy itself fails while registering a
    failure (the secondary failure is the ``cause``), or when a listener
    vetoes the execution before the first attempt.
    """


class BackOffInterruptedError(RetryError):
    """Raised when a backoff pause is interrupted.

    It always aborts the whole execution and is never treated as a
    failure of the work.

    Example:
        ```pycon
        >>> from aretry.exceptions import BackOffInterruptedError
        >>> raise BackOffInterruptedError("Thread interrupted while sleeping")
        Traceback (most recent call last):
            ...
        aretry.exceptions.BackOffInterruptedError: Thread interrupted while sleeping

        ```
    """


class RetryCacheCapacityExceededError(RetryError):
    """Raised when the keyed retry context cache is full."""

r"""Shared test helpers for retry template tests.

This module contains work units, backoff policies and listeners with
call recording, used across multiple test files.
"""

from __future__ import annotations

__all__ = ["FlakyWork", "RecordingBackOffPolicy", "RecordingListener"]

from typing import TYPE_CHECKING, Any

from aretry.backoff.base import BackOffPolicy
from aretry.listener import RetryListener

if TYPE_CHECKING:
    from aretry.context import RetryContext


class FlakyWork:
    """Work unit failing until a given attempt.

    Args:
        attempts_before_success: The attempt number (1-indexed) on which
            the work succeeds.
        exception: The exception raised by the failing attempts.
        result: The value returned on success.
    """

    def __init__(
        self,
        attempts_before_success: int = 1,
        exception: BaseException | None = None,
        result: Any = "success",
    ) -> None:
        self.attempts_before_success = attempts_before_success
        self.exception = exception if exception is not None else RuntimeError("planned")
        self.result = result
        self.attempts = 0
        self.contexts: list[RetryContext] = []

    def __call__(self, context: RetryContext) -> Any:
        self.attempts += 1
        self.contexts.append(context)
        if self.attempts < self.attempts_before_success:
            raise self.exception
        return self.result


class RecordingBackOffPolicy(BackOffPolicy):
    """Backoff policy counting its calls without pausing."""

    def __init__(self) -> None:
        self.start_calls = 0
        self.pause_calls = 0
        self.states: list[Any] = []

    def start(self, context: RetryContext) -> Any:  # noqa: ARG002
        self.start_calls += 1
        return {"started": self.start_calls}

    def pause(self, state: Any) -> None:
        self.pause_calls += 1
        self.states.append(state)


class RecordingListener(RetryListener):
    """Listener recording the name of every hook invoked."""

    def __init__(self, name: str = "listener", events: list[str] | None = None) -> None:
        self.name = name
        self.events = events if events is not None else []
        self.errors: list[BaseException] = []
        self.close_errors: list[BaseException | None] = []

    def open(self, context: RetryContext, work: Any) -> bool:  # noqa: ARG002
        self.events.append(f"{self.name}.open")
        return True

    def close(self, context: RetryContext, work: Any, error: BaseException | None) -> None:  # noqa: ARG002
        self.events.append(f"{self.name}.close")
        self.close_errors.append(error)

    def on_success(self, context: RetryContext, work: Any, result: Any) -> None:  # noqa: ARG002
        self.events.append(f"{self.name}.on_success")

    def on_error(self, context: RetryContext, work: Any, error: BaseException) -> None:  # noqa: ARG002
        self.events.append(f"{self.name}.on_error")
        self.errors.append(error)

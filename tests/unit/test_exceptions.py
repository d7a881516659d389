r"""Unit tests for the retry engine exceptions."""

from __future__ import annotations

import pytest

from aretry.exceptions import (
    BackOffInterruptedError,
    ExhaustedRetryError,
    RetryCacheCapacityExceededError,
    RetryError,
    TerminatedRetryError,
)


def test_retry_error_message() -> None:
    """Test the message of a RetryError."""
    error = RetryError("boom")
    assert str(error) == "boom"
    assert error.message == "boom"
    assert error.cause is None
    assert error.__cause__ is None


def test_retry_error_cause() -> None:
    """Test that the cause is chained."""
    cause = ValueError("bad")
    error = RetryError("boom", cause=cause)
    assert error.cause is cause
    assert error.__cause__ is cause


@pytest.mark.parametrize(
    "cls",
    [
        BackOffInterruptedError,
        ExhaustedRetryError,
        RetryCacheCapacityExceededError,
        TerminatedRetryError,
    ],
)
def test_retry_error_subclasses(cls: type[RetryError]) -> None:
    """Test the exception hierarchy."""
    error = cls("boom")
    assert isinstance(error, RetryError)
    assert isinstance(error, RuntimeError)


def test_retry_error_raise_chain() -> None:
    """Test raising with an explicit cause."""
    cause = KeyError("missing")
    with pytest.raises(ExhaustedRetryError, match=r"exhausted") as exc_info:
        raise ExhaustedRetryError("exhausted", cause=cause) from cause
    assert exc_info.value.__cause__ is cause

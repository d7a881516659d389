r"""Unit tests for ThreadWaitSleeper."""

from __future__ import annotations

import threading
import time

import pytest

from aretry import RetryTemplate
from aretry.backoff import FixedBackOffPolicy, ThreadWaitSleeper
from aretry.exceptions import BackOffInterruptedError
from aretry.policy import SimpleRetryPolicy
from tests.helpers import FlakyWork


def _sleep_in_thread(
    sleeper: ThreadWaitSleeper, seconds: float, errors: list[BaseException]
) -> threading.Thread:
    def sleep() -> None:
        try:
            sleeper.sleep(seconds)
        except BackOffInterruptedError as exc:
            errors.append(exc)

    thread = threading.Thread(target=sleep)
    thread.start()
    return thread


def test_thread_wait_sleeper_sleep() -> None:
    """Test a short uninterrupted sleep."""
    sleeper = ThreadWaitSleeper()
    start = time.monotonic()
    sleeper.sleep(0.05)
    assert time.monotonic() - start >= 0.04
    assert not sleeper.is_interrupted()


def test_thread_wait_sleeper_negative_duration() -> None:
    """Test that a negative duration returns immediately."""
    ThreadWaitSleeper().sleep(-1.0)


def test_thread_wait_sleeper_repr() -> None:
    assert repr(ThreadWaitSleeper()) == "ThreadWaitSleeper(pending_interruptions=0)"


def test_thread_wait_sleeper_interrupt_pending_sleep() -> None:
    """Test that interrupt wakes up a sleeping thread."""
    sleeper = ThreadWaitSleeper()
    errors = []
    start = time.monotonic()
    thread = _sleep_in_thread(sleeper, 30.0, errors)
    sleeper.interrupt(thread.ident)
    thread.join(timeout=5.0)
    assert not thread.is_alive()
    assert time.monotonic() - start < 5.0
    assert len(errors) == 1
    assert str(errors[0]) == "Thread interrupted while sleeping"
    assert not sleeper.is_interrupted(thread.ident)


def test_thread_wait_sleeper_interrupt_all_pending_sleeps() -> None:
    """Test that interrupt without thread wakes up every sleeping
    thread."""
    sleeper = ThreadWaitSleeper()
    errors = []
    threads = [_sleep_in_thread(sleeper, 30.0, errors) for _ in range(3)]
    deadline = time.monotonic() + 5.0
    while len(sleeper._events) < 3:
        assert time.monotonic() < deadline
        time.sleep(0.001)
    sleeper.interrupt()
    for thread in threads:
        thread.join(timeout=5.0)
        assert not thread.is_alive()
    assert len(errors) == 3


def test_thread_wait_sleeper_interrupt_without_pending_sleep() -> None:
    """Test that interrupting all pending sleeps when nothing sleeps has
    no lasting effect."""
    sleeper = ThreadWaitSleeper()
    sleeper.interrupt()
    assert not sleeper.is_interrupted()
    sleeper.sleep(0.0)


def test_thread_wait_sleeper_interrupted_before_sleep() -> None:
    """Test that an interruption targeting a thread aborts its next sleep
    only."""
    sleeper = ThreadWaitSleeper()
    sleeper.interrupt(threading.get_ident())
    assert sleeper.is_interrupted()
    with pytest.raises(BackOffInterruptedError):
        sleeper.sleep(0.0)
    assert not sleeper.is_interrupted()
    sleeper.sleep(0.0)


def test_thread_wait_sleeper_reset() -> None:
    sleeper = ThreadWaitSleeper()
    sleeper.interrupt(threading.get_ident())
    sleeper.reset()
    assert not sleeper.is_interrupted()
    sleeper.sleep(0.0)


def test_thread_wait_sleeper_interrupt_other_thread() -> None:
    """Test that interrupting another thread does not affect the calling
    thread."""
    sleeper = ThreadWaitSleeper()
    errors = []
    thread = _sleep_in_thread(sleeper, 30.0, errors)
    sleeper.interrupt(thread.ident)
    sleeper.sleep(0.0)
    thread.join(timeout=5.0)
    assert len(errors) == 1
    assert not sleeper.is_interrupted()


def test_thread_wait_sleeper_shared_by_later_execution() -> None:
    """Test that an execution interrupted in one thread does not fail
    later executions sharing the sleeper."""
    sleeper = ThreadWaitSleeper()
    template = RetryTemplate(
        retry_policy=SimpleRetryPolicy(3),
        backoff_policy=FixedBackOffPolicy(delay=30.0, sleeper=sleeper),
    )
    errors = []

    def run() -> None:
        try:
            template.execute(FlakyWork(attempts_before_success=2))
        except BackOffInterruptedError as exc:
            errors.append(exc)

    thread = threading.Thread(target=run)
    thread.start()
    sleeper.interrupt(thread.ident)
    thread.join(timeout=5.0)
    assert not thread.is_alive()
    assert len(errors) == 1

    quick = RetryTemplate(backoff_policy=FixedBackOffPolicy(delay=0.0, sleeper=sleeper))
    assert quick.execute(FlakyWork(attempts_before_success=2)) == "success"

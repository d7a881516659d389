r"""Sleepers performing the blocking part of a backoff pause."""

from __future__ import annotations

__all__ = ["Sleeper", "ThreadWaitSleeper"]

import logging
import threading
from abc import ABC, abstractmethod

from aretry.exceptions import BackOffInterruptedError

logger: logging.Logger = logging.getLogger(__name__)


class Sleeper(ABC):
    """Abstract base class for sleepers."""

    @abstractmethod
    def sleep(self, seconds: float) -> None:
        """Block the calling thread.

        Args:
            seconds: The pause duration in seconds.

        Raises:
            BackOffInterruptedError: If the pause is interrupted.
        """


class ThreadWaitSleeper(Sleeper):
    r"""Sleeper that can be interrupted from another thread.

    Each sleeping thread waits on its own ``threading.Event``, so one
    sleeper can be shared by concurrent executions. An interruption
    targets a single thread, or every thread sleeping at that moment,
    and is consumed by the pause it aborts: later pauses, on the same
    thread or on others, are not affected.

    Example:
        ```pycon
        >>> import threading
        >>> from aretry.backoff.sleeper import ThreadWaitSleeper
        >>> sleeper = ThreadWaitSleeper()
        >>> sleeper.sleep(0.0)
        >>> sleeper.interrupt(threading.get_ident())
        >>> sleeper.sleep(10.0)
        Traceback (most recent call last):
            ...
        aretry.exceptions.BackOffInterruptedError: Thread interrupted while sleeping
        >>> sleeper.sleep(0.0)

        ```
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        # Events of the threads that are sleeping or have a pending interruption
        self._events: dict[int, threading.Event] = {}

    def __repr__(self) -> str:
        with self._lock:
            pending = sum(event.is_set() for event in self._events.values())
        return f"{self.__class__.__name__}(pending_interruptions={pending})"

    def sleep(self, seconds: float) -> None:
        ident = threading.get_ident()
        with self._lock:
            event = self._events.setdefault(ident, threading.Event())
        try:
            interrupted = event.wait(timeout=max(seconds, 0.0))
        finally:
            with self._lock:
                self._events.pop(ident, None)
        if interrupted:
            logger.debug(f"Sleep of {seconds:.2f}s interrupted")
            msg = "Thread interrupted while sleeping"
            raise BackOffInterruptedError(msg)

    def interrupt(self, thread_id: int | None = None) -> None:
        """Interrupt a pause.

        Args:
            thread_id: The identifier (``threading.get_ident()``) of the
                thread to interrupt. Its pending pause, or its next one,
                raises ``BackOffInterruptedError``. If ``None``, every
                pause pending right now is interrupted.
        """
        with self._lock:
            if thread_id is None:
                for event in self._events.values():
                    event.set()
            else:
                self._events.setdefault(thread_id, threading.Event()).set()

    def is_interrupted(self, thread_id: int | None = None) -> bool:
        """Indicate whether a thread has an interruption not consumed
        yet.

        Args:
            thread_id: The thread identifier. Defaults to the calling
                thread.
        """
        if thread_id is None:
            thread_id = threading.get_ident()
        with self._lock:
            event = self._events.get(thread_id)
            return event is not None and event.is_set()

    def reset(self, thread_id: int | None = None) -> None:
        """Drop an interruption not consumed yet.

        Args:
            thread_id: The thread identifier. Defaults to the calling
                thread.
        """
        if thread_id is None:
            thread_id = threading.get_ident()
        with self._lock:
            event = self._events.get(thread_id)
            if event is not None:
                event.clear()

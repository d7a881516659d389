r"""Retry template executing a unit of work under a retry policy.

``RetryTemplate`` ties the pieces together: it opens a retry context
through the retry policy, makes it the active context, invokes the work
until it succeeds or the policy forbids another attempt, pauses between
attempts with the backoff policy, notifies the listeners, and finally
either returns the result of the recovery callback or raises.
"""

from __future__ import annotations

__all__ = ["RetryTemplate"]

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from aretry.backoff.no_backoff import NoBackOffPolicy
from aretry.cache import MapRetryContextCache
from aretry.context import CLOSED, EXHAUSTED, MAX_ATTEMPTS, RECOVERED, STATE_KEY
from aretry.exceptions import ExhaustedRetryError, RetryError, TerminatedRetryError
from aretry.manager import ListenerManager
from aretry.policy.simple import SimpleRetryPolicy
from aretry.synchronization import clear_context, get_context, register_context
from aretry.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from aretry.backoff.base import BackOffPolicy
    from aretry.context import RetryContext
    from aretry.core.config import RetryConfig
    from aretry.listener import RetryListener
    from aretry.policy.base import RetryPolicy
    from aretry.state import RetryState

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)

# Context attribute caching the backoff state of a keyed execution
BACKOFF_STATE = "template.backoff-state"


class RetryTemplate:
    r"""Execute work with retries.

    Args:
        retry_policy: The retry policy. Defaults to
            ``SimpleRetryPolicy()`` (3 attempts, every ``Exception``).
        backoff_policy: The backoff policy. Defaults to
            ``NoBackOffPolicy()``.
        listeners: Listeners notified of the retry lifecycle.
        retry_context_cache: Cache of contexts for keyed executions.
            Defaults to a new ``MapRetryContextCache``.
        throw_last_exception_on_exhausted: If ``True``, a keyed execution
            that runs out of attempts raises its last failure instead of
            ``ExhaustedRetryError``.

    Example:
        ```pycon
        >>> from aretry import RetryTemplate
        >>> from aretry.policy import SimpleRetryPolicy
        >>> calls = []
        >>> def work(context):
        ...     calls.append(context.retry_count)
        ...     if len(calls) < 3:
        ...         raise ConnectionError("unavailable")
        ...     return "done"
        ...
        >>> template = RetryTemplate(retry_policy=SimpleRetryPolicy(max_attempts=3))
        >>> template.execute(work)
        'done'
        >>> calls
        [0, 1, 2]
        >>> template.execute(lambda context: 1 / 0, lambda context: "recovered")
        'recovered'

        ```
    """

    def __init__(
        self,
        retry_policy: RetryPolicy | None = None,
        backoff_policy: BackOffPolicy | None = None,
        listeners: Iterable[RetryListener] = (),
        retry_context_cache: MapRetryContextCache | None = None,
        throw_last_exception_on_exhausted: bool = False,
    ) -> None:
        self.retry_policy: RetryPolicy = (
            retry_policy if retry_policy is not None else SimpleRetryPolicy()
        )
        self.backoff_policy: BackOffPolicy = (
            backoff_policy if backoff_policy is not None else NoBackOffPolicy()
        )
        self.listeners = ListenerManager(listeners)
        self.retry_context_cache = (
            retry_context_cache if retry_context_cache is not None else MapRetryContextCache()
        )
        self.throw_last_exception_on_exhausted = throw_last_exception_on_exhausted

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(retry_policy={self.retry_policy}, "
            f"backoff_policy={self.backoff_policy}, listeners={len(self.listeners)})"
        )

    @classmethod
    def from_config(cls, config: RetryConfig) -> RetryTemplate:
        """Build a template from a ``RetryConfig``.

        Args:
            config: The configuration.

        Returns:
            A template using a ``SimpleRetryPolicy`` built from the
            configuration.

        Example:
            ```pycon
            >>> from aretry import RetryTemplate
            >>> from aretry.core import RetryConfig
            >>> template = RetryTemplate.from_config(RetryConfig(max_attempts=5))
            >>> template.retry_policy.max_attempts
            5

            ```
        """
        return cls(
            retry_policy=SimpleRetryPolicy(
                max_attempts=config.max_attempts,
                retryable_exceptions=config.retryable_exceptions,
                traverse_causes=config.traverse_causes,
                default_value=config.default_retryable,
            ),
            backoff_policy=config.backoff_policy,
            listeners=config.listeners,
            throw_last_exception_on_exhausted=config.throw_last_exception_on_exhausted,
        )

    def register_listener(self, listener: RetryListener) -> None:
        """Append a listener to the ones already registered.

        Args:
            listener: The listener to add.
        """
        self.listeners.register(listener)

    def execute(
        self,
        work: Callable[[RetryContext], T],
        recovery_callback: Callable[[RetryContext], T] | None = None,
        retry_state: RetryState | None = None,
    ) -> T:
        """Execute the work, retrying it according to the retry policy.

        At least one attempt is always made on a fresh context. Only
        ``Exception`` subclasses are failures of the work; other
        ``BaseException`` subclasses propagate immediately.

        Args:
            work: The unit of work, called with the active context.
            recovery_callback: Optional callable returning a fallback
                result once no more attempts are permitted.
            retry_state: Optional state of a keyed execution. The context
                is then kept between calls sharing the same key, and
                failures for which ``retry_state.rollback_for`` returns
                ``True`` propagate immediately.

        Returns:
            The result of the work, or of the recovery callback.

        Raises:
            TerminatedRetryError: If the retry policy fails while
                registering a failure, or a listener vetoes the execution.
            BackOffInterruptedError: If a backoff pause is interrupted.
            ExhaustedRetryError: If a keyed execution runs out of attempts
                without recovery callback, unless
                ``throw_last_exception_on_exhausted`` is set.
            Exception: The last failure of the work if it runs out of
                attempts without recovery callback, or a failure for
                which a rollback is required.
        """
        policy = self.retry_policy
        backoff_policy = self.backoff_policy

        context = self._open(policy, retry_state)
        token = register_context(context)
        last_exception: BaseException | None = None
        exhausted = False
        try:
            if not self.listeners.open(context, work):
                msg = "Retry terminated abnormally by listener before first attempt"
                raise TerminatedRetryError(msg)
            if not context.has_attribute(MAX_ATTEMPTS):
                context.set_attribute(MAX_ATTEMPTS, policy.max_attempts)
            backoff_state = self._start_backoff(backoff_policy, context)

            first_attempt = context.retry_count == 0
            while first_attempt or self._can_retry(policy, context):
                first_attempt = False
                last_exception = None
                logger.debug(f"Retry: count={context.retry_count}")
                try:
                    result = work(context)
                    self.listeners.on_success(context, work, result)
                except Exception as exc:
                    last_exception = exc
                    self._register_throwable(policy, retry_state, context, exc)
                    try:
                        self.listeners.on_error(context, work, exc)
                    except Exception as listener_exc:  # noqa: BLE001
                        logger.debug(
                            f"Listener failed on error of attempt {context.retry_count}: "
                            f"{type(listener_exc).__name__}"
                        )
                        last_exception = listener_exc
                    if retry_state is not None and retry_state.rollback_for(exc):
                        logger.debug(f"Rethrow in retry for policy: count={context.retry_count}")
                        raise
                    if not self._can_retry(policy, context):
                        logger.debug(
                            f"Checking for rethrow: count={context.retry_count}, "
                            f"exhausted_only={context.is_exhausted_only()}"
                        )
                        break
                    backoff_policy.pause(backoff_state)
                else:
                    self._register_throwable(policy, retry_state, context, None)
                    return result

            exhausted = True
            return self._handle_exhausted(recovery_callback, context, retry_state, last_exception)
        except BaseException as exc:
            if last_exception is None:
                last_exception = exc
            raise
        finally:
            try:
                try:
                    self._close(
                        policy, context, retry_state, succeeded=last_exception is None or exhausted
                    )
                finally:
                    self.listeners.close(context, work, last_exception)
            finally:
                clear_context(token)

    def _can_retry(self, policy: RetryPolicy, context: RetryContext) -> bool:
        return policy.can_retry(context) and not context.is_exhausted_only()

    def _open(self, policy: RetryPolicy, state: RetryState | None) -> RetryContext:
        parent = get_context()
        if state is None or state.force_refresh:
            return self._open_new(policy, parent, state)
        context = self.retry_context_cache.get(state.key)
        if context is None:
            return self._open_new(policy, parent, state)
        logger.debug(f"Reusing cached retry context for key {state.key!r}")
        for name in (CLOSED, EXHAUSTED, RECOVERED):
            context.remove_attribute(name)
        return context

    def _open_new(
        self, policy: RetryPolicy, parent: RetryContext | None, state: RetryState | None
    ) -> RetryContext:
        context = policy.open(parent)
        if state is not None:
            context.set_attribute(STATE_KEY, state.key)
        return context

    def _start_backoff(self, backoff_policy: BackOffPolicy, context: RetryContext) -> Any:
        if context.has_attribute(BACKOFF_STATE):
            return context.get_attribute(BACKOFF_STATE)
        backoff_state = backoff_policy.start(context)
        if backoff_state is not None:
            context.set_attribute(BACKOFF_STATE, backoff_state)
        return backoff_state

    def _register_throwable(
        self,
        policy: RetryPolicy,
        state: RetryState | None,
        context: RetryContext,
        exc: BaseException | None,
    ) -> None:
        try:
            policy.register_throwable(context, exc)
        except Exception as err:
            msg = "Could not register throwable"
            raise TerminatedRetryError(msg, cause=err) from err
        if state is not None and exc is not None:
            self._register_context(context, state)

    def _register_context(self, context: RetryContext, state: RetryState) -> None:
        key = state.key
        if key is None:
            return
        if context.retry_count > 1 and not self.retry_context_cache.contains_key(key):
            msg = (
                f"Inconsistent state for failed item key {key!r}: the key changed while "
                "retrying, check that it is stable"
            )
            raise RetryError(msg)
        self.retry_context_cache.put(key, context)

    def _handle_exhausted(
        self,
        recovery_callback: Callable[[RetryContext], T] | None,
        context: RetryContext,
        state: RetryState | None,
        last_exception: BaseException | None,
    ) -> T:
        context.set_attribute(EXHAUSTED, True)
        if state is not None:
            self.retry_context_cache.remove(state.key)
        if recovery_callback is not None:
            logger.debug(f"Retry exhausted after {context.retry_count} failure(s), recovering")
            recovered = recovery_callback(context)
            context.set_attribute(RECOVERED, True)
            return recovered

        msg = "Retry exhausted after last attempt with no recovery path"
        log_structured(
            logger,
            logging.DEBUG,
            msg,
            attempts=context.retry_count,
            last_error=type(last_exception).__name__ if last_exception is not None else None,
        )
        if last_exception is None:
            # Keyed execution reopened after its budget was spent
            last_throwable = context.last_throwable
            if (
                state is not None
                and self.throw_last_exception_on_exhausted
                and last_throwable is not None
            ):
                raise last_throwable
            raise ExhaustedRetryError(msg, cause=last_throwable)
        if state is not None and not self.throw_last_exception_on_exhausted:
            raise ExhaustedRetryError(msg, cause=last_exception) from last_exception
        raise last_exception

    def _close(
        self,
        policy: RetryPolicy,
        context: RetryContext,
        state: RetryState | None,
        succeeded: bool,
    ) -> None:
        if state is not None:
            if not succeeded:
                return
            self.retry_context_cache.remove(state.key)
        policy.close(context)
        context.set_attribute(CLOSED, True)

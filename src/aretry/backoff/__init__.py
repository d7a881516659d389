r"""Backoff policies and sleepers for pauses between attempts.

This package provides the ``BackOffPolicy`` abstraction and a few
ready-made policies: no pause, fixed, exponential, and uniform random
pauses. The blocking wait itself is delegated to a ``Sleeper``.
"""

from __future__ import annotations

__all__ = [
    "BackOffPolicy",
    "ExponentialBackOffPolicy",
    "ExponentialBackOffState",
    "FixedBackOffPolicy",
    "NoBackOffPolicy",
    "Sleeper",
    "SleepingBackOffPolicy",
    "StatelessBackOffPolicy",
    "ThreadWaitSleeper",
    "UniformRandomBackOffPolicy",
]

from aretry.backoff.base import BackOffPolicy, SleepingBackOffPolicy, StatelessBackOffPolicy
from aretry.backoff.exponential import ExponentialBackOffPolicy, ExponentialBackOffState
from aretry.backoff.fixed import FixedBackOffPolicy
from aretry.backoff.no_backoff import NoBackOffPolicy
from aretry.backoff.sleeper import Sleeper, ThreadWaitSleeper
from aretry.backoff.uniform import UniformRandomBackOffPolicy

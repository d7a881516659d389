r"""Backoff policy that does not pause."""

from __future__ import annotations

__all__ = ["NoBackOffPolicy"]

from aretry.backoff.base import StatelessBackOffPolicy


class NoBackOffPolicy(StatelessBackOffPolicy):
    """Retry immediately. This is the default backoff policy."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    def pause_once(self) -> None:
        pass

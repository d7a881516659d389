r"""Binary classification of exceptions.

The classifier maps an exception to ``True`` or ``False`` through a
table keyed by exception type. When several entries apply, the most
specific one wins: candidate types are ranked by walking the method
resolution order of the exception type, from the type itself up to
``BaseException``, and the first one present in the table decides.
"""

from __future__ import annotations

__all__ = ["BinaryExceptionClassifier", "iter_causes"]

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

logger: logging.Logger = logging.getLogger(__name__)


def iter_causes(exc: BaseException) -> Iterator[BaseException]:
    """Iterate over an exception and its causal chain.

    Only the explicit cause (``raise ... from ...``) is followed. An
    exception raised while handling another one without ``from`` does
    not make the handled exception its cause. Cycles are broken.

    Args:
        exc: The exception to start from.

    Yields:
        ``exc`` followed by each exception in its causal chain.

    Example:
        ```pycon
        >>> from aretry.classifier import iter_causes
        >>> try:
        ...     try:
        ...         raise KeyError("a")
        ...     except KeyError as e:
        ...         raise ValueError("b") from e
        ... except ValueError as err:
        ...     [type(e).__name__ for e in iter_causes(err)]
        ...
        ['ValueError', 'KeyError']

        ```
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__


class BinaryExceptionClassifier:
    r"""Classify exceptions as ``True`` or ``False``.

    Args:
        type_map: Mapping from exception type to its classification.
        default_value: Classification used when no entry matches.
        traverse_causes: If ``True``, the causal chain is searched when
            the exception itself does not match any entry.
        match_subclasses: If ``True``, an entry also applies to the
            subclasses of its type. Otherwise only exact types match.

    Example:
        ```pycon
        >>> from aretry.classifier import BinaryExceptionClassifier
        >>> classifier = BinaryExceptionClassifier({Exception: False, LookupError: True})
        >>> classifier(KeyError("x"))
        True
        >>> classifier(ValueError("x"))
        False
        >>> classifier(KeyboardInterrupt())
        False

        ```
    """

    def __init__(
        self,
        type_map: Mapping[type[BaseException], bool] | None = None,
        default_value: bool = False,
        traverse_causes: bool = False,
        match_subclasses: bool = True,
    ) -> None:
        self.type_map: dict[type[BaseException], bool] = dict(type_map or {})
        for exc_type in self.type_map:
            if not (isinstance(exc_type, type) and issubclass(exc_type, BaseException)):
                msg = f"type_map keys must be exception types, got {exc_type!r}"
                raise TypeError(msg)
        self.default_value = default_value
        self.traverse_causes = traverse_causes
        self.match_subclasses = match_subclasses

    @classmethod
    def retryable(cls, *types: type[BaseException], **kwargs: bool) -> BinaryExceptionClassifier:
        """Create a classifier returning ``True`` only for ``types``."""
        return cls(dict.fromkeys(types, True), default_value=False, **kwargs)

    @classmethod
    def non_retryable(
        cls, *types: type[BaseException], **kwargs: bool
    ) -> BinaryExceptionClassifier:
        """Create a classifier returning ``False`` only for ``types``."""
        return cls(dict.fromkeys(types, False), default_value=True, **kwargs)

    def __repr__(self) -> str:
        names = {exc_type.__name__: value for exc_type, value in self.type_map.items()}
        return (
            f"{self.__class__.__name__}(type_map={names}, default_value={self.default_value}, "
            f"traverse_causes={self.traverse_causes})"
        )

    def __call__(self, exc: BaseException | None) -> bool:
        return self.classify(exc)

    def classify(self, exc: BaseException | None) -> bool:
        """Classify an exception.

        Args:
            exc: The exception to classify. ``None`` gets the default
                classification.

        Returns:
            The classification of the most specific matching entry, or
            ``default_value`` if nothing matches.
        """
        if exc is None:
            return self.default_value
        chain = iter_causes(exc) if self.traverse_causes else iter([exc])
        for link in chain:
            value = self.lookup(type(link))
            if value is not None:
                return value
        return self.default_value

    def lookup(self, exc_type: type[BaseException]) -> bool | None:
        """Find the classification of the most specific entry for a type.

        Args:
            exc_type: The exception type to look up.

        Returns:
            The matching classification, or ``None`` when no entry applies.
        """
        if not self.match_subclasses:
            return self.type_map.get(exc_type)
        for candidate in exc_type.__mro__:
            if candidate in self.type_map:
                logger.debug(
                    f"{exc_type.__name__} classified through {candidate.__name__} "
                    f"as {self.type_map[candidate]}"
                )
                return self.type_map[candidate]
        return None

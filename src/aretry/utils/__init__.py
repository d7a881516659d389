r"""Utility functions for the retry engine."""

from __future__ import annotations

__all__ = ["StructuredFormatter", "log_structured", "retry_context_fields"]

from aretry.utils.structured_logging import (
    StructuredFormatter,
    log_structured,
    retry_context_fields,
)

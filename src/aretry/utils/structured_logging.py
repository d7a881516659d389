r"""Structured logging utilities for machine-readable log output.

This module provides a JSON formatter that enriches every record with
the state of the active retry context, so that log lines emitted by the
work itself can be correlated with the attempt that produced them. This
is useful for log aggregation systems like ELK, Splunk, or CloudWatch
Logs.

The structured logging system is opt-in and can be enabled by configuring
Python's logging system to use the provided formatter.

Example:
    Enable structured logging for aretry:

    ```python
    import logging
    from aretry.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("aretry")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```

    Name an execution to find its records later:

    ```python
    from aretry import RetryTemplate
    from aretry.context import NAME

    def work(context):
        context.set_attribute(NAME, "sync-orders")
        ...

    RetryTemplate().execute(work)
    ```
"""

from __future__ import annotations

__all__ = ["StructuredFormatter", "log_structured", "retry_context_fields"]

import json
import logging
import time
from typing import Any

from aretry.context import NAME
from aretry.synchronization import get_context

# Attributes of every LogRecord, never copied as extra fields
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "msecs",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "sinfo",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    }
)


def retry_context_fields() -> dict[str, Any]:
    """Describe the active retry context.

    Returns:
        A dictionary with ``retry_count`` (failures registered so far),
        ``retry_depth`` (1 for an outermost execution, 2 for a nested
        one, ...) and, if set, ``retry_name``. Empty outside of any
        execution.

    Example:
        ```pycon
        >>> from aretry.context import RetryContext
        >>> from aretry.synchronization import active_context
        >>> from aretry.utils.structured_logging import retry_context_fields
        >>> retry_context_fields()
        {}
        >>> with active_context(RetryContext(parent=RetryContext())):
        ...     retry_context_fields()
        ...
        {'retry_count': 0, 'retry_depth': 2}

        ```
    """
    context = get_context()
    if context is None:
        return {}
    depth = 0
    ancestor = context
    while ancestor is not None:
        depth += 1
        ancestor = ancestor.parent
    fields: dict[str, Any] = {"retry_count": context.retry_count, "retry_depth": depth}
    name = context.get_attribute(NAME)
    if name is not None:
        fields["retry_name"] = name
    return fields


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    This formatter outputs log records as JSON objects with consistent field
    names. It automatically includes the active retry context fields, and
    preserves any extra fields added to the log record.

    Standard fields in the JSON output:
        - timestamp: ISO 8601 timestamp
        - level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        - logger: Logger name
        - message: Log message
        - module: Module name where log originated
        - function: Function name where log originated
        - line: Line number where log originated
        - thread: Thread name
        - process: Process ID
        - retry_count, retry_depth, retry_name: see ``retry_context_fields``

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from aretry.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("test_logger")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Test message", extra={"request_id": "123"})
        >>> output = stream.getvalue()
        >>> "Test message" in output
        True
        >>> "request_id" in output
        True

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: The log record to format.

        Returns:
            JSON-formatted log string.
        """
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread": record.threadName,
            "process": record.process,
        }
        log_data.update(retry_context_fields())

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=repr)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        """Format timestamp as ISO 8601 with millisecond precision.

        Args:
            record: The log record.
            datefmt: Ignored, the format is always ISO 8601.

        Returns:
            ISO 8601 formatted timestamp.
        """
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured data.

    The extra fields will be included in JSON output when using
    StructuredFormatter.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.INFO).
        message: Log message.
        **extra: Additional structured fields to include in the log.
    """
    logger.log(level, message, extra=extra)
